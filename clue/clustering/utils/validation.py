"""
Validation helpers and error types for the clustering package.
"""

from __future__ import annotations

from numbers import Integral, Real
from typing import Optional, Sequence

import numpy as np

from clue.config import MAX_DIMENSIONS, MIN_DIMENSIONS


class ClusteringConfigurationError(ValueError):
    """Raised when clustering parameters are out of their valid range."""


class TilingConfigurationError(ClusteringConfigurationError):
    """Raised when points_per_tile leaves no tile for the number of points."""


class TileOverflowError(RuntimeError):
    """Raised when a tile buffer rejected a point during binning."""


def _require_positive(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, Real) or not np.isfinite(value) or value <= 0:
        raise ClusteringConfigurationError(f"{name} must be a positive number, got {value!r}")


def validate_clustering_config(config) -> None:
    """
    Validate a ClusteringConfig.

    Args:
        config: ClusteringConfig instance.

    Raises:
        ClusteringConfigurationError: If any parameter is out of range.
    """
    _require_positive("dc", config.dc)
    _require_positive("rhoc", config.rhoc)
    _require_positive("outlier_delta_factor", config.outlier_delta_factor)

    if isinstance(config.points_per_tile, bool) or not isinstance(config.points_per_tile, Integral):
        raise ClusteringConfigurationError(
            f"points_per_tile must be an integer, got {config.points_per_tile!r}"
        )
    if config.points_per_tile <= 0:
        raise ClusteringConfigurationError(
            f"points_per_tile must be at least 1, got {config.points_per_tile}"
        )

    if isinstance(config.binning_workers, bool) or not isinstance(config.binning_workers, Integral):
        raise ClusteringConfigurationError(
            f"binning_workers must be an integer, got {config.binning_workers!r}"
        )
    if config.binning_workers < 1:
        raise ClusteringConfigurationError(
            f"binning_workers must be at least 1, got {config.binning_workers}"
        )


def validate_domains(domains: Optional[Sequence], ndim: int) -> None:
    """Check that one domain is configured per coordinate dimension."""
    if domains is None:
        return
    if len(domains) != ndim:
        raise ClusteringConfigurationError(
            f"Expected {ndim} domains (one per dimension), got {len(domains)}"
        )


def validate_point_arrays(n: int, coordinates: np.ndarray, weights: np.ndarray) -> None:
    """
    Check shapes of the arrays passed to set_points.

    Args:
        n: Declared number of points.
        coordinates: Array of shape (ndim, n).
        weights: Array of shape (n,).

    Raises:
        ValueError: If the arrays disagree with n or the dimension is unsupported.
    """
    if n < 0:
        raise ValueError(f"Number of points must be non-negative, got {n}")
    if coordinates.ndim != 2:
        raise ValueError(
            f"Coordinates must be one array per dimension, got an array with shape {coordinates.shape}"
        )
    ndim = coordinates.shape[0]
    if not (MIN_DIMENSIONS <= ndim <= MAX_DIMENSIONS):
        raise ValueError(
            f"Number of dimensions must be in [{MIN_DIMENSIONS}, {MAX_DIMENSIONS}], got {ndim}"
        )
    if coordinates.shape[1] != n:
        raise ValueError(
            f"Coordinate arrays have length {coordinates.shape[1]}, expected {n}"
        )
    if weights.shape != (n,):
        raise ValueError(f"Weights have shape {weights.shape}, expected ({n},)")
    if not np.all(np.isfinite(coordinates)):
        raise ValueError("Coordinates must be finite")
    if not np.all(np.isfinite(weights)) or np.any(weights < 0):
        raise ValueError("Weights must be finite and non-negative")


__all__ = [
    "ClusteringConfigurationError",
    "TilingConfigurationError",
    "TileOverflowError",
    "validate_clustering_config",
    "validate_domains",
    "validate_point_arrays",
]
