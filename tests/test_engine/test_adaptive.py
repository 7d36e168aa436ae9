"""Tests for adaptive session assembly."""

from dcf_prep.engine import assemble_adaptive_session
from dcf_prep.models import AdaptiveConfig, Domain, Question, QuestionDifficulty, StudyProgress


class TestAssembleAdaptiveSession:
    """Test assemble_adaptive_session."""

    def test_weak_domain_hardest_first(self, mixed_bank: list[Question]):
        """Test that a weak domain's hard questions lead the session."""
        learner = StudyProgress(weak_domains=["HSAN"])

        session = assemble_adaptive_session(mixed_bank, learner, AdaptiveConfig(total=12), seed=5)

        assert len(session) == 12
        assert all(q.domain == Domain.HSAN for q in session)
        assert all(q.difficulty == QuestionDifficulty.HARD for q in session)

    def test_ordering_across_groups(self, mixed_bank: list[Question]):
        """Test weak-domain questions by difficulty, then the rest hardest first."""
        learner = StudyProgress(weak_domains=["HSAN"])

        session = assemble_adaptive_session(mixed_bank, learner, AdaptiveConfig(total=100), seed=5)
        difficulties = [q.difficulty for q in session]

        assert all(q.domain == Domain.HSAN for q in session[:90])
        assert difficulties[:27] == [QuestionDifficulty.HARD] * 27
        assert difficulties[27:63] == [QuestionDifficulty.MEDIUM] * 36
        assert difficulties[63:90] == [QuestionDifficulty.EASY] * 27
        assert all(q.domain != Domain.HSAN for q in session[90:])
        assert difficulties[90:] == [QuestionDifficulty.HARD] * 10

    def test_no_weak_domains_hardest_first(self, mixed_bank: list[Question]):
        """Test that without weak domains the session is simply hardest first."""
        session = assemble_adaptive_session(mixed_bank, StudyProgress(), AdaptiveConfig(total=20), seed=5)

        assert all(q.difficulty == QuestionDifficulty.HARD for q in session)
        assert len({q.domain for q in session}) > 1

    def test_domain_filter(self, mixed_bank: list[Question]):
        """Test that a domain filter overrides weak domains elsewhere."""
        learner = StudyProgress(weak_domains=["HSAN"])

        session = assemble_adaptive_session(
            mixed_bank, learner, AdaptiveConfig(total=10, domain=Domain.SNP), seed=5
        )

        assert len(session) == 10
        assert all(q.domain == Domain.SNP for q in session)

    def test_pool_smaller_than_total(self, bank_60: list[Question]):
        """Test that the session is capped by the pool."""
        session = assemble_adaptive_session(
            bank_60, StudyProgress(), AdaptiveConfig(total=30, domain=Domain.CAAN), seed=5
        )

        assert len(session) == 10

    def test_same_seed_same_session(self, mixed_bank: list[Question]):
        """Test reproducibility."""
        learner = StudyProgress(weak_domains=["SNP", "RNRF"])
        config = AdaptiveConfig(total=15)

        first = assemble_adaptive_session(mixed_bank, learner, config, seed=31)
        second = assemble_adaptive_session(mixed_bank, learner, config, seed=31)

        assert [q.id for q in first] == [q.id for q in second]

    def test_progress_not_modified(self, mixed_bank: list[Question]):
        """Test that the learner's progress is only read."""
        learner = StudyProgress(weak_domains=["SNP"])

        assemble_adaptive_session(mixed_bank, learner, AdaptiveConfig(total=5), seed=1)

        assert learner.weak_domains == ["SNP"]
        assert learner.total_answered == 0
