"""Rank and tie grouping of scored samples.

Samples sharing a score value are collapsed into one rank group before the
curve is built, so every tied sample contributes to the same curve point
regardless of the order in which the sort happened to place them.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy.stats import rankdata

from ._utils import ArrayLike, as_labels, as_scores, check_lengths, count_classes


@dataclass(frozen=True)
class RankGroups:
    """Per-score-value class counts, ordered from most to least positive.

    Attributes:
        values: Distinct score value of each group, in traversal order.
        n_pos: Number of positive samples in each group.
        n_neg: Number of negative samples in each group.
        decreasing: Whether higher scores were ranked as more positive.
    """

    values: NDArray
    n_pos: NDArray
    n_neg: NDArray
    decreasing: bool = True

    def __len__(self) -> int:
        return len(self.values)

    @property
    def total_pos(self) -> int:
        return int(self.n_pos.sum())

    @property
    def total_neg(self) -> int:
        return int(self.n_neg.sum())


def dense_ranks(scores: NDArray, decreasing: bool = True) -> NDArray:
    """Assign 0-based dense ranks, equal scores sharing a rank.

    Rank 0 is the highest score when ``decreasing`` is True and the lowest
    otherwise.
    """
    # rankdata compares values, so 0.0 and -0.0 land in the same group
    ranks = rankdata(scores, method="dense").astype(np.int64) - 1
    if decreasing and ranks.size:
        ranks = ranks.max() - ranks
    return ranks


def group_by_score(
    scores: ArrayLike,
    labels: ArrayLike,
    decreasing: bool = True,
) -> RankGroups:
    """Aggregate samples into tied rank groups.

    Args:
        scores: Score for each sample.
        labels: Whether each sample is a positive (boolean or 0/1).
        decreasing: Higher scores mean more likely positive. Set to False if
            lower scores mean higher probability of being positive.

    Returns:
        RankGroups ordered by score in the requested direction.

    Raises:
        DimensionMismatch: If scores and labels differ in length.
        DegenerateLabelSet: If labels lack either class.

    Examples:
        >>> groups = group_by_score([1, 1, 1, 1], [True, False, True, False])
        >>> len(groups), groups.n_pos.tolist(), groups.n_neg.tolist()
        (1, [2], [2])
    """
    scores = as_scores(scores)
    labels = as_labels(labels)
    check_lengths(len(scores), len(labels))
    count_classes(labels)
    return _group_validated(scores, labels, decreasing)


def _group_validated(
    scores: NDArray, labels: NDArray, decreasing: bool = True
) -> RankGroups:
    # Inputs already passed as_scores/as_labels with both classes present
    ranks = dense_ranks(scores, decreasing=decreasing)
    n_groups = int(ranks.max()) + 1

    sizes = np.bincount(ranks, minlength=n_groups)
    # Weighted bincount returns float counts; they are exact integers
    n_pos = np.bincount(
        ranks, weights=labels.astype(np.float64), minlength=n_groups
    ).astype(np.int64)

    values = np.empty(n_groups, dtype=scores.dtype)
    values[ranks] = scores

    return RankGroups(
        values=values,
        n_pos=n_pos,
        n_neg=sizes - n_pos,
        decreasing=decreasing,
    )
