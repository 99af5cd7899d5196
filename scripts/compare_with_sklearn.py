#!/usr/bin/env python
"""
AUC Cross-Check Against scikit-learn

Samples scored datasets from the synthetic DGPs, computes AUCs with the
rockernel engine (scalar and batch paths) and compares them with
sklearn.metrics.roc_auc_score and with the analytic population AUC.

Usage:
    python compare_with_sklearn.py                          # Run with defaults
    python compare_with_sklearn.py --n-sim 50 --n-columns 8 # Custom parameters
    python compare_with_sklearn.py --dgps discrete_ties     # Run specific DGP only
    python compare_with_sklearn.py --help                   # Show all options
"""

import argparse
import logging
from pathlib import Path

import numpy as np
import pandas as pd
from sklearn.metrics import roc_auc_score
from tqdm import tqdm

from rockernel import compute_roc, compute_roc_batch
from rockernel.datagen import ScoreDGP, get_standard_test_dgps

logger = logging.getLogger(__name__)

# =============================================================================
# Configuration
# =============================================================================


def get_sample_size_configs() -> list[dict]:
    """Define sample size configurations (n_pos, n_neg pairs)."""
    configs = []

    # Balanced samples
    for n_total in [10, 30, 100, 1000]:
        configs.append(
            {
                "n_total": n_total,
                "n_pos": n_total // 2,
                "n_neg": n_total // 2,
                "prevalence": 0.5,
            }
        )

    # Imbalanced scenarios
    configs.extend(
        [
            {"n_total": 1000, "n_pos": 10, "n_neg": 990, "prevalence": 0.01},
            {"n_total": 1000, "n_pos": 100, "n_neg": 900, "prevalence": 0.10},
        ]
    )

    return configs


# =============================================================================
# Loop Level Functions
# =============================================================================


def run_single_comparison(
    dgp: ScoreDGP,
    n_pos: int,
    n_neg: int,
    n_columns: int,
    fpr_cutoff: float,
    rng: np.random.Generator,
    n_jobs: int,
) -> dict:
    """
    Sample one dataset and compute every AUC variant for it.

    Returns:
        dict: AUCs from rockernel, sklearn, and the population value.
    """
    scores, labels = dgp.sample_labelled(n_pos, n_neg, rng)
    curve = compute_roc(scores, labels)

    matrix, matrix_labels = dgp.sample_matrix(n_pos, n_neg, n_columns, rng)
    batch_aucs = compute_roc_batch(matrix, matrix_labels, n_jobs=n_jobs)
    sklearn_batch = np.array(
        [roc_auc_score(matrix_labels, matrix[:, j]) for j in range(n_columns)]
    )

    return {
        "auc": curve.full_auc,
        "auc_sklearn": roc_auc_score(labels, scores),
        "partial_auc": compute_roc(
            scores, labels, auc_only=True, x_threshold=fpr_cutoff
        ),
        "n_curve_points": len(curve),
        "batch_max_abs_diff": float(np.max(np.abs(batch_aucs - sklearn_batch))),
        "true_auc": dgp.true_auc,
    }


def run_dgp(
    dgp_name: str,
    dgp: ScoreDGP,
    sample_configs: list[dict],
    n_sim: int,
    n_columns: int,
    fpr_cutoff: float,
    rng: np.random.Generator,
    n_jobs: int,
) -> pd.DataFrame:
    """Run all sample size configurations for one DGP."""
    rows = []
    for config in tqdm(sample_configs, desc=dgp_name, leave=False):
        for sim_idx in range(n_sim):
            result = run_single_comparison(
                dgp=dgp,
                n_pos=config["n_pos"],
                n_neg=config["n_neg"],
                n_columns=n_columns,
                fpr_cutoff=fpr_cutoff,
                rng=rng,
                n_jobs=n_jobs,
            )
            rows.append({"dgp": dgp_name, "sim_idx": sim_idx, **config, **result})

    df = pd.DataFrame(rows)
    df["abs_diff_sklearn"] = (df["auc"] - df["auc_sklearn"]).abs()
    return df


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Aggregate per DGP and sample size."""
    return (
        df.groupby(["dgp", "n_total", "prevalence"])
        .agg(
            mean_auc=("auc", "mean"),
            true_auc=("true_auc", "first"),
            mean_partial_auc=("partial_auc", "mean"),
            max_abs_diff_sklearn=("abs_diff_sklearn", "max"),
            max_abs_diff_batch=("batch_max_abs_diff", "max"),
            mean_curve_points=("n_curve_points", "mean"),
        )
        .reset_index()
    )


# =============================================================================
# Main
# =============================================================================


def main():
    parser = argparse.ArgumentParser(
        description="Cross-check rockernel AUCs against scikit-learn",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--n-sim", type=int, default=20, help="Simulation repeats per sample size"
    )
    parser.add_argument(
        "--n-columns",
        type=int,
        default=4,
        help="Score columns per matrix for the batch comparison",
    )
    parser.add_argument(
        "--fpr-cutoff",
        type=float,
        default=0.2,
        help="FPR cutoff for the reported partial AUC",
    )
    parser.add_argument(
        "--dgps",
        nargs="+",
        choices=list(get_standard_test_dgps().keys()) + ["all"],
        default=["all"],
        help="Which DGPs to run",
    )
    parser.add_argument(
        "--n-jobs", type=int, default=1, help="Worker threads for the batch path"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("data/results/sklearn_comparison.csv"),
        help="Output CSV for the per-configuration summary",
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for rockernel diagnostics",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s"
    )

    dgps = get_standard_test_dgps()
    selected = list(dgps) if "all" in args.dgps else args.dgps
    sample_configs = get_sample_size_configs()
    rng = np.random.default_rng(args.seed)

    print("\n" + "=" * 60)
    print("SKLEARN CROSS-CHECK CONFIGURATION")
    print("=" * 60)
    print(f"DGPs: {', '.join(selected)}")
    print(f"Sample size configs: {len(sample_configs)}")
    print(f"Simulation repeats: {args.n_sim}")
    print(f"Batch columns: {args.n_columns}")
    print(f"Random seed: {args.seed}")
    print("=" * 60)

    frames = [
        run_dgp(
            dgp_name=name,
            dgp=dgps[name],
            sample_configs=sample_configs,
            n_sim=args.n_sim,
            n_columns=args.n_columns,
            fpr_cutoff=args.fpr_cutoff,
            rng=rng,
            n_jobs=args.n_jobs,
        )
        for name in tqdm(selected, desc="DGPs")
    ]
    summary = summarize(pd.concat(frames, ignore_index=True))

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    summary.to_csv(output, index=False)

    worst = summary[["max_abs_diff_sklearn", "max_abs_diff_batch"]].to_numpy().max()
    logger.info("Largest disagreement with sklearn: %.3g", worst)

    print(summary.to_string(index=False))
    print(f"\nLargest disagreement with sklearn: {worst:.3g}")
    print(f"Saved: {output}")


if __name__ == "__main__":
    main()
