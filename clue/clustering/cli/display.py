"""
Display utilities for the CLUE CLI.

Formatted summaries of the clustering configuration and results.
"""

from typing import Optional

import numpy as np
import pandas as pd
from colorama import Fore, Style

from clue.common.utils import color_text, format_quantity, log_warn
from clue.clustering.core.clustering import ClusteringConfig, ClusteringResult


def display_configuration(config: ClusteringConfig, kernel) -> None:
    """Print the clustering parameters."""
    print("\n" + color_text("=" * 60, Fore.CYAN, Style.BRIGHT))
    print(color_text("CLUE CONFIGURATION", Fore.CYAN, Style.BRIGHT))
    print(color_text("=" * 60, Fore.CYAN, Style.BRIGHT))
    print(f"  dc:                   {format_quantity(config.dc)}")
    print(f"  rhoc:                 {format_quantity(config.rhoc)}")
    print(f"  outlier delta factor: {format_quantity(config.outlier_delta_factor)}"
          f" (dm = {format_quantity(config.dm)})")
    print(f"  points per tile:      {config.points_per_tile}")
    print(f"  kernel:               {kernel!r}")
    if config.domains:
        for dim, domain in enumerate(config.domains):
            label = "unbounded" if domain.is_unbounded else (
                f"[{format_quantity(domain.min)}, {format_quantity(domain.max)}] periodic"
            )
            print(f"  {f'domain x{dim}:':<22}{label}")


def summarize_clusters(result: ClusteringResult) -> pd.DataFrame:
    """
    Per-cluster summary table.

    Returns:
        DataFrame indexed by cluster id with the number of points, the seed index
        and the seed density.
    """
    seeds = np.flatnonzero(result.is_seed)
    summary = pd.DataFrame(
        {
            "points": result.points_per_cluster,
            "seed": seeds,
        },
        index=pd.Index(range(result.n_clusters), name="cluster"),
    )
    if len(result.rho) == len(result):
        summary["seed_rho"] = result.rho[seeds]
    return summary


def display_clustering_result(result: ClusteringResult, true_labels: Optional[np.ndarray] = None) -> None:
    """
    Print the clustering result.

    Args:
        result: Output of ClusteringAlgorithm.make_clusters.
        true_labels: Optional generating labels, used to report how many
            distinct true labels each cluster mixes.
    """
    print("\n" + color_text("=" * 60, Fore.CYAN, Style.BRIGHT))
    print(color_text("CLUE RESULT", Fore.CYAN, Style.BRIGHT))
    print(color_text("=" * 60, Fore.CYAN, Style.BRIGHT))

    if len(result) == 0:
        log_warn("No points to cluster")
        return

    outlier_share = result.n_outliers / len(result) * 100
    print(f"  points:     {len(result)}")
    print(color_text(f"  clusters:   {result.n_clusters}", Fore.GREEN, Style.BRIGHT))
    print(color_text(f"  unassigned: {result.n_outliers} ({outlier_share:.1f}%)", Fore.YELLOW))

    if result.n_clusters == 0:
        log_warn("No cluster seeds found; try lowering rhoc or raising dc")
        return

    summary = summarize_clusters(result)
    if true_labels is not None:
        labels = pd.Series(np.asarray(true_labels))
        summary["true_labels"] = [
            labels.iloc[members].nunique() for members in result.cluster_points
        ]

    print()
    print(summary.to_string(formatters={"seed_rho": format_quantity} if "seed_rho" in summary else None))


__all__ = ["display_configuration", "display_clustering_result", "summarize_clusters"]
