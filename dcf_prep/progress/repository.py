"""Persistence for a single learner's progress."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from dcf_prep.errors import ProgressStoreError
from dcf_prep.models import StudyProgress

logger = logging.getLogger(__name__)


class ProgressRepository(Protocol):
    """Where progress is read at session start and written at session end."""

    def load(self) -> StudyProgress: ...

    def save(self, progress: StudyProgress) -> None: ...


class InMemoryProgressRepository:
    """Keeps progress in memory; nothing survives the process."""

    def __init__(self, progress: StudyProgress | None = None) -> None:
        self._progress = progress or StudyProgress()

    def load(self) -> StudyProgress:
        return self._progress.model_copy(deep=True)

    def save(self, progress: StudyProgress) -> None:
        self._progress = progress.model_copy(deep=True)


class JsonProgressRepository:
    """Progress stored as one JSON document on disk."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> StudyProgress:
        """
        Read progress, falling back to a fresh record.

        A missing file is a new learner. An unreadable or corrupt file is logged
        and treated the same way rather than blocking the session.
        """
        if not self.path.exists():
            return StudyProgress()
        try:
            return StudyProgress.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.warning("Ignoring unreadable progress file %s: %s", self.path, e)
            return StudyProgress()

    def save(self, progress: StudyProgress) -> None:
        """
        Write progress atomically.

        Raises:
            ProgressStoreError: If the file cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(progress.model_dump_json(indent=2))
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise ProgressStoreError(f"Cannot write progress to {self.path}: {e}") from e
        logger.debug("Saved progress to %s", self.path)
