"""
Unit tests for the ranking module.

Critical behaviors tested:
1. Exactly tied scores collapse into a single rank group
2. Groups are ordered by score in the requested direction
3. Group counts add up to the class totals
4. Dimension mismatches and degenerate label sets fail before any work
5. Input validation for NaN and non-numeric scores, non-binary labels and torch tensors
6. Integer scores keep their exact values, so large distinct integers never tie
"""

import numpy as np
import pytest
import torch

from rockernel.errors import DegenerateLabelSet, DimensionMismatch, RocInputError
from rockernel.roc.ranking import RankGroups, dense_ranks, group_by_score


@pytest.fixture
def rng():
    """Fixed RNG for reproducible tests."""
    return np.random.default_rng(42)


# =============================================================================
# Dense Ranks
# =============================================================================


class TestDenseRanks:
    """Test rank assignment underlying the grouping."""

    def test_decreasing_ranks_highest_first(self):
        """Verify the highest score receives rank 0 by default."""
        ranks = dense_ranks(np.array([0.1, 0.8, 0.4]))
        assert ranks.tolist() == [2, 0, 1]

    def test_increasing_ranks_lowest_first(self):
        """Verify decreasing=False gives the lowest score rank 0."""
        ranks = dense_ranks(np.array([0.1, 0.8, 0.4]), decreasing=False)
        assert ranks.tolist() == [0, 2, 1]

    def test_ties_share_rank_without_gaps(self):
        """Verify tied scores share a rank and ranks stay contiguous."""
        ranks = dense_ranks(np.array([3.0, 1.0, 3.0, 2.0, 1.0]))
        assert ranks.tolist() == [0, 2, 0, 1, 2]

    def test_signed_zeros_are_tied(self):
        """Verify 0.0 and -0.0 compare equal and land in one group."""
        ranks = dense_ranks(np.array([0.0, -0.0, 1.0]))
        assert ranks[0] == ranks[1]


# =============================================================================
# Grouping
# =============================================================================


class TestGroupByScore:
    """Test aggregation of samples into tied rank groups."""

    def test_all_tied_is_single_group(self):
        """Verify identical scores produce one group with both classes."""
        groups = group_by_score([1, 1, 1, 1], [True, False, True, False])

        assert isinstance(groups, RankGroups)
        assert len(groups) == 1
        assert groups.n_pos.tolist() == [2]
        assert groups.n_neg.tolist() == [2]

    def test_descending_order_by_default(self):
        """Verify groups run from highest to lowest score."""
        groups = group_by_score(
            [0.1, 0.4, 0.35, 0.8], [False, True, False, True]
        )

        assert groups.values.tolist() == [0.8, 0.4, 0.35, 0.1]
        assert groups.n_pos.tolist() == [1, 1, 0, 0]
        assert groups.n_neg.tolist() == [0, 0, 1, 1]

    def test_ascending_order_when_not_decreasing(self):
        """Verify lower scores come first when decreasing=False."""
        groups = group_by_score(
            [0.1, 0.4, 0.35, 0.8], [False, True, False, True], decreasing=False
        )

        assert groups.values.tolist() == [0.1, 0.35, 0.4, 0.8]
        assert groups.n_pos.tolist() == [0, 0, 1, 1]
        assert not groups.decreasing

    def test_mixed_ties_aggregate_counts(self):
        """Verify tied samples with different labels share one group."""
        scores = [0.9, 0.5, 0.5, 0.5, 0.2]
        labels = [True, True, False, False, False]

        groups = group_by_score(scores, labels)

        assert groups.values.tolist() == [0.9, 0.5, 0.2]
        assert groups.n_pos.tolist() == [1, 1, 0]
        assert groups.n_neg.tolist() == [0, 2, 1]

    def test_counts_match_class_totals(self, rng):
        """Verify group counts sum to the number of positives and negatives."""
        scores = rng.integers(0, 10, 500).astype(float)
        labels = rng.random(500) < 0.3

        groups = group_by_score(scores, labels)

        assert groups.total_pos == labels.sum()
        assert groups.total_neg == (~labels).sum()
        assert len(groups) == len(np.unique(scores))
        assert np.all(np.diff(groups.values) < 0)

    def test_grouping_independent_of_sample_order(self, rng):
        """Verify permuting samples does not change the groups."""
        scores = rng.integers(0, 5, 200).astype(float)
        labels = rng.random(200) < 0.5
        order = rng.permutation(200)

        a = group_by_score(scores, labels)
        b = group_by_score(scores[order], labels[order])

        np.testing.assert_array_equal(a.values, b.values)
        np.testing.assert_array_equal(a.n_pos, b.n_pos)
        np.testing.assert_array_equal(a.n_neg, b.n_neg)

    def test_infinite_scores_are_ordinary_extremes(self):
        """Verify +/-inf are ranked at the ends rather than rejected."""
        groups = group_by_score(
            [np.inf, 0.0, -np.inf], [True, False, False]
        )
        assert groups.values.tolist() == [np.inf, 0.0, -np.inf]

    def test_large_integers_stay_distinct(self):
        """Verify integers beyond float precision are not merged into one group."""
        groups = group_by_score([2**53, 2**53 + 1, 2**53], [False, True, False])

        assert groups.values.dtype.kind == "i"
        assert groups.values.tolist() == [2**53 + 1, 2**53]
        assert groups.n_pos.tolist() == [1, 0]
        assert groups.n_neg.tolist() == [0, 2]

    def test_boolean_scores_form_two_groups(self):
        """Verify boolean scores rank True above False."""
        groups = group_by_score([True, False, True], [True, False, False])
        assert groups.n_pos.tolist() == [1, 0]
        assert groups.n_neg.tolist() == [1, 1]


# =============================================================================
# Input Validation
# =============================================================================


class TestValidation:
    """Test the input contract of the grouping stage."""

    def test_length_mismatch_raises(self):
        """Verify 5 scores against 4 labels raises DimensionMismatch."""
        with pytest.raises(DimensionMismatch):
            group_by_score([0.1, 0.2, 0.3, 0.4, 0.5], [True, False, True, False])

    @pytest.mark.parametrize(
        "labels",
        [[True, True, True], [False, False, False]],
        ids=["all_positive", "all_negative"],
    )
    def test_degenerate_labels_raise(self, labels):
        """Verify single-class label sets are rejected instead of dividing by zero."""
        with pytest.raises(DegenerateLabelSet):
            group_by_score([0.1, 0.2, 0.3], labels)

    def test_empty_input_is_degenerate(self):
        """Verify empty inputs raise DegenerateLabelSet."""
        with pytest.raises(DegenerateLabelSet):
            group_by_score([], [])

    def test_errors_are_value_errors(self):
        """Verify the error taxonomy can be caught as ValueError."""
        with pytest.raises(ValueError):
            group_by_score([0.1, 0.2], [True])

    def test_nan_scores_raise(self):
        """Verify NaN scores are rejected."""
        with pytest.raises(RocInputError, match="NaN"):
            group_by_score([0.1, np.nan, 0.3], [True, False, True])

    @pytest.mark.parametrize(
        "scores",
        [["a", "b", "c"], [0.1, None, 0.3], [1 + 2j, 0j, 1j]],
        ids=["strings", "object", "complex"],
    )
    def test_non_numeric_scores_raise(self, scores):
        """Verify non-numeric scores raise RocInputError, not a bare ValueError."""
        with pytest.raises(RocInputError, match="numeric"):
            group_by_score(scores, [True, False, True])

    def test_integer_labels_accepted(self):
        """Verify 0/1 integer labels behave like booleans."""
        a = group_by_score([0.3, 0.2, 0.1], [1, 0, 1])
        b = group_by_score([0.3, 0.2, 0.1], [True, False, True])
        np.testing.assert_array_equal(a.n_pos, b.n_pos)

    def test_non_binary_labels_raise(self):
        """Verify labels outside {0, 1} are rejected."""
        with pytest.raises(RocInputError):
            group_by_score([0.3, 0.2, 0.1], [1, 2, 0])

    def test_two_dimensional_labels_raise(self):
        """Verify label matrices are rejected."""
        with pytest.raises(DimensionMismatch):
            group_by_score([0.3, 0.2], [[True, False]])

    def test_torch_tensors_accepted(self):
        """Verify torch tensors are converted like numpy arrays."""
        scores = torch.tensor([0.1, 0.4, 0.35, 0.8])
        labels = torch.tensor([False, True, False, True])

        groups = group_by_score(scores, labels)

        assert groups.n_pos.tolist() == [1, 1, 0, 0]
