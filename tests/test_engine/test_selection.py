"""Tests for weighted random choice."""

import pytest

from dcf_prep.engine import seeded_random, weighted_pick


class TestWeightedPick:
    """Test weighted_pick."""

    def test_empty_returns_none(self):
        """Test that an empty candidate list yields None."""
        assert weighted_pick([], [], seeded_random(1)) is None

    def test_single_item(self):
        """Test that the only candidate is always chosen."""
        assert weighted_pick(["x"], [0.5], seeded_random(1)) == "x"

    def test_walks_cumulative_weights(self):
        """Test that the pick falls where r * total lands in the running sum."""
        items = ["low", "high"]
        weights = [1.0, 3.0]

        assert weighted_pick(items, weights, lambda: 0.2) == "low"
        assert weighted_pick(items, weights, lambda: 0.5) == "high"

    def test_boundary_goes_to_earlier_item(self):
        """Test that landing exactly on a boundary picks the earlier item."""
        assert weighted_pick(["a", "b"], [1.0, 3.0], lambda: 0.25) == "a"

    def test_zero_total_falls_back_to_uniform(self):
        """Test that all-zero weights pick uniformly by index."""
        items = ["a", "b", "c", "d"]

        assert weighted_pick(items, [0, 0, 0, 0], lambda: 0.6) == "c"
        assert weighted_pick(items, [0, 0, 0, 0], lambda: 0.0) == "a"

    def test_rounding_residue_returns_last(self):
        """Test that leftover float error still returns an item."""
        # 0.1 + 0.2 leaves a tiny positive remainder after both subtractions
        assert weighted_pick(["a", "b"], [0.1, 0.2], lambda: 1.0) == "b"

    def test_length_mismatch_raises(self):
        """Test that items and weights must line up."""
        with pytest.raises(ValueError):
            weighted_pick(["a", "b"], [1.0], seeded_random(1))

    def test_heavier_item_wins_more_often(self):
        """Test the distribution over many draws from one generator."""
        rand = seeded_random(2024)
        picks = [weighted_pick(["light", "heavy"], [1.0, 9.0], rand) for _ in range(2000)]

        assert picks.count("heavy") > picks.count("light") * 4
