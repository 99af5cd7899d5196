"""
Synthetic scored datasets with known AUC.

Each DGP includes:
- generator: sampling function (n_pos, n_neg, rng) -> (scores_pos, scores_neg)
- true_auc: population AUC, when it has a closed form
- description: what makes this case interesting

Samples are returned in the ``(scores, labels)`` form consumed by
:func:`rockernel.compute_roc`, standing in for the expression-matrix and
metadata readers that feed the engine in production.
"""

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
from scipy import stats

# =============================================================================
# Base DGP Class
# =============================================================================


@dataclass
class ScoreDGP:
    """
    Data generating process for scored binary classification.

    Parameters
    ----------
    generator : Callable
        Function with signature (n_pos, n_neg, rng) -> (scores_pos, scores_neg)
    true_auc : float, optional
        Population AUC, P(score_pos > score_neg) + 0.5 * P(tie).
    name : str
        Human-readable name for this DGP
    description : str
        Description of what makes this DGP interesting
    """

    generator: Callable[[int, int, np.random.Generator], tuple[np.ndarray, np.ndarray]]
    true_auc: float | None = None
    name: str = ""
    description: str = ""

    def sample(
        self, n_pos: int, n_neg: int, rng: np.random.Generator | None = None
    ) -> tuple[np.ndarray, np.ndarray]:
        """Generate positive and negative class scores."""
        if rng is None:
            rng = np.random.default_rng()
        return self.generator(n_pos, n_neg, rng)

    def sample_labelled(
        self,
        n_pos: int,
        n_neg: int,
        rng: np.random.Generator | None = None,
        shuffle: bool = True,
    ) -> tuple[np.ndarray, np.ndarray]:
        """
        Generate a single score vector with its boolean ground truth.

        Parameters
        ----------
        n_pos, n_neg : int
            Number of positive and negative samples.
        rng : np.random.Generator, optional
            Random number generator.
        shuffle : bool
            Interleave the classes; otherwise positives come first.

        Returns
        -------
        tuple[np.ndarray, np.ndarray]
            ``(scores, labels)`` of length ``n_pos + n_neg``.
        """
        if rng is None:
            rng = np.random.default_rng()

        scores_pos, scores_neg = self.sample(n_pos, n_neg, rng)
        scores = np.concatenate([scores_pos, scores_neg])
        labels = np.concatenate([np.ones(n_pos, dtype=bool), np.zeros(n_neg, dtype=bool)])

        if shuffle:
            order = rng.permutation(len(scores))
            scores, labels = scores[order], labels[order]
        return scores, labels

    def sample_matrix(
        self,
        n_pos: int,
        n_neg: int,
        n_columns: int,
        rng: np.random.Generator | None = None,
    ) -> tuple[np.ndarray, np.ndarray]:
        """
        Generate independent score columns sharing one ground truth.

        Returns
        -------
        tuple[np.ndarray, np.ndarray]
            Score matrix of shape ``(n_pos + n_neg, n_columns)`` and the
            shared boolean label vector.
        """
        if rng is None:
            rng = np.random.default_rng()

        labels = np.zeros(n_pos + n_neg, dtype=bool)
        labels[rng.choice(n_pos + n_neg, size=n_pos, replace=False)] = True

        matrix = np.empty((n_pos + n_neg, n_columns))
        for j in range(n_columns):
            scores_pos, scores_neg = self.sample(n_pos, n_neg, rng)
            matrix[labels, j] = scores_pos
            matrix[~labels, j] = scores_neg
        return matrix, labels


# =============================================================================
# 1. BASELINE: Gaussian with Equal Variance
# =============================================================================


def make_gaussian_dgp(delta_mu: float = 1.0, sigma: float = 1.0) -> ScoreDGP:
    """
    Baseline Gaussian case.

    Neg ~ N(0, σ²), Pos ~ N(Δμ, σ²)

    Pos - Neg ~ N(Δμ, 2σ²), so AUC = P(Pos > Neg) = Φ(Δμ / (σ√2)).
    Ties have probability zero.
    """

    def generator(n_pos, n_neg, rng):
        scores_neg = rng.normal(0, sigma, n_neg)
        scores_pos = rng.normal(delta_mu, sigma, n_pos)
        return scores_pos, scores_neg

    return ScoreDGP(
        generator=generator,
        true_auc=float(stats.norm.cdf(delta_mu / (sigma * np.sqrt(2)))),
        name=f"Gaussian(Δμ={delta_mu}, σ={sigma})",
        description="Baseline equal-variance Gaussian with continuous scores.",
    )


# =============================================================================
# 2. UNIFORM DISTRIBUTIONS
# =============================================================================


def make_uniform_dgp(
    neg_low: float = 0.0,
    neg_high: float = 2.0,
    pos_low: float = 1.0,
    pos_high: float = 3.0,
) -> ScoreDGP:
    """
    Uniform distributions with possible overlap.

    Neg ~ Uniform(a, b)
    Pos ~ Uniform(c, d)

    AUC = P(Pos > Neg) is the area of the region {x > y} of the rectangle
    [c, d] x [a, b] under the product of the two uniform densities. It is
    evaluated by integrating P(Neg < x) = clip((x - a) / (b - a), 0, 1) over
    the positive density, which is piecewise linear and therefore exact with
    the trapezoid rule on the breakpoints.

    Non-overlapping supports (b <= c) give AUC = 1.
    """
    a, b = neg_low, neg_high
    c, d = pos_low, pos_high

    def generator(n_pos, n_neg, rng):
        scores_neg = rng.uniform(a, b, n_neg)
        scores_pos = rng.uniform(c, d, n_pos)
        return scores_pos, scores_neg

    # Breakpoints of the piecewise-linear integrand inside [c, d]
    knots = np.unique(np.clip([c, a, b, d], c, d))
    neg_cdf = np.clip((knots - a) / (b - a), 0.0, 1.0)
    true_auc = float(np.trapezoid(neg_cdf, knots) / (d - c))

    return ScoreDGP(
        generator=generator,
        true_auc=true_auc,
        name=f"Uniform(neg=[{a},{b}], pos=[{c},{d}])",
        description="Uniform distributions. Piecewise-linear ROC, separable when supports do not overlap.",
    )


def make_uniform_no_overlap_dgp(gap: float = 0.5) -> ScoreDGP:
    """Perfect separation: negatives and positives don't overlap."""
    return make_uniform_dgp(neg_low=0, neg_high=1, pos_low=1 + gap, pos_high=2 + gap)


# =============================================================================
# 3. DISCRETE SCORES (HEAVY TIES)
# =============================================================================


def make_discrete_dgp(
    n_levels: int = 5, neg_p: float = 0.3, pos_p: float = 0.6
) -> ScoreDGP:
    """
    Integer-valued scores, as produced by ordinal ratings or count features.

    Neg ~ Binomial(L-1, p₀), Pos ~ Binomial(L-1, p₁)

    Most samples share their score with many others, which exercises tied
    rank groups. With pmfs f (neg) and g (pos) on {0, ..., L-1}:

        AUC = Σ_k g(k) · [F(k-1) + 0.5 · f(k)]

    where F is the negative CDF; each tie counts as half a correct ordering.
    """
    levels = np.arange(n_levels)

    def generator(n_pos, n_neg, rng):
        scores_neg = rng.binomial(n_levels - 1, neg_p, n_neg).astype(float)
        scores_pos = rng.binomial(n_levels - 1, pos_p, n_pos).astype(float)
        return scores_pos, scores_neg

    f = stats.binom.pmf(levels, n_levels - 1, neg_p)
    g = stats.binom.pmf(levels, n_levels - 1, pos_p)
    below = np.concatenate([[0.0], np.cumsum(f)[:-1]])
    true_auc = float(np.sum(g * (below + 0.5 * f)))

    return ScoreDGP(
        generator=generator,
        true_auc=true_auc,
        name=f"Discrete(L={n_levels}, p0={neg_p}, p1={pos_p})",
        description="Binomial integer scores with many exact ties.",
    )


def get_standard_test_dgps() -> dict[str, ScoreDGP]:
    """DGPs used by the sklearn cross-check script."""
    return {
        "gaussian_weak": make_gaussian_dgp(delta_mu=0.5),
        "gaussian_strong": make_gaussian_dgp(delta_mu=2.0),
        "uniform_partial": make_uniform_dgp(),
        "uniform_separable": make_uniform_no_overlap_dgp(),
        "discrete_ties": make_discrete_dgp(),
    }
