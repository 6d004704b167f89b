"""Core clustering calculation modules."""

from clue.clustering.core.clustering import (
    ClusteringAlgorithm,
    ClusteringConfig,
    ClusteringResult,
    compute_clustering,
)
from clue.clustering.core.domain import Domain, coordinate_distance, make_domains
from clue.clustering.core.growable_buffer import GrowableBuffer
from clue.clustering.core.kernels import (
    CustomKernel,
    ExponentialKernel,
    FlatKernel,
    GaussianKernel,
    Kernel,
    choose_kernel,
)
from clue.clustering.core.points import PointSet
from clue.clustering.core.tiles import Tiles

__all__ = [
    "ClusteringAlgorithm",
    "ClusteringConfig",
    "ClusteringResult",
    "compute_clustering",
    "Domain",
    "coordinate_distance",
    "make_domains",
    "GrowableBuffer",
    "CustomKernel",
    "ExponentialKernel",
    "FlatKernel",
    "GaussianKernel",
    "Kernel",
    "choose_kernel",
    "PointSet",
    "Tiles",
]
