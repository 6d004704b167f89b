"""Validation and synthetic data helpers."""

from clue.clustering.utils.synthetic import make_blobs
from clue.clustering.utils.validation import (
    ClusteringConfigurationError,
    TileOverflowError,
    TilingConfigurationError,
    validate_clustering_config,
)

__all__ = [
    "make_blobs",
    "ClusteringConfigurationError",
    "TileOverflowError",
    "TilingConfigurationError",
    "validate_clustering_config",
]
