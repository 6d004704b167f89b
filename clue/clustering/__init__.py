"""
CLUE Clustering Module.

Density-peak clustering of weighted points in N dimensions. Each point gets a
local density (kernel-weighted count of the neighbours within dc), then the
distance to its nearest neighbour of higher density. Density peaks far from
any denser point become cluster seeds, isolated low-density points become
outliers, and every other point joins the cluster of its nearest higher.

Key design decisions:
  - Neighbour queries go through a regular tile grid sized from
    points_per_tile, so each query scans only nearby tiles.
  - Periodic coordinates (e.g. angles) are supported by wrapping distances
    and mirroring the edge band of the search box.
  - Density ties are broken by point index, so results are reproducible.
  - Tiles can be filled from several threads; each tile is an append-only
    buffer whose slots are reserved by an atomic counter increment.
"""

from clue.clustering.core.clustering import (
    ClusteringAlgorithm,
    ClusteringConfig,
    ClusteringResult,
    compute_clustering,
)
from clue.clustering.core.domain import Domain
from clue.clustering.core.kernels import (
    ExponentialKernel,
    FlatKernel,
    GaussianKernel,
    choose_kernel,
)

__all__ = [
    "ClusteringAlgorithm",
    "ClusteringConfig",
    "ClusteringResult",
    "compute_clustering",
    "Domain",
    "ExponentialKernel",
    "FlatKernel",
    "GaussianKernel",
    "choose_kernel",
]
