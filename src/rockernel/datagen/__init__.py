"""Synthetic scored datasets with known AUC."""

from .synthetic import (
    ScoreDGP,
    get_standard_test_dgps,
    make_discrete_dgp,
    make_gaussian_dgp,
    make_uniform_dgp,
    make_uniform_no_overlap_dgp,
)

__all__ = [
    "ScoreDGP",
    "get_standard_test_dgps",
    "make_discrete_dgp",
    "make_gaussian_dgp",
    "make_uniform_dgp",
    "make_uniform_no_overlap_dgp",
]
