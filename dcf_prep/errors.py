"""Exceptions raised by the caller-side collaborators (loading, validation, storage)."""

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dcf_prep.bank.validator import BankReport


class DcfPrepError(Exception):
    """Base class for errors the CLI reports to the user."""


class BankLoadError(DcfPrepError):
    """The question bank file could not be read or parsed."""

    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}")


class BankValidationError(DcfPrepError):
    """The question bank loaded but breaks the bank rules."""

    def __init__(self, report: "BankReport"):
        self.report = report
        super().__init__("; ".join(report.issues) or "Bank validation failed")


class ProgressStoreError(DcfPrepError):
    """Progress could not be written."""
