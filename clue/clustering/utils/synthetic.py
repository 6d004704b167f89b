"""
Synthetic point clouds for trying out the clustering.

Generates isotropic gaussian blobs, optionally mixed with uniform background
noise, as a DataFrame in the column layout read by
ClusteringAlgorithm.set_points_from_frame (x0, x1, ..., weight).
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd

from clue.config import (
    DEFAULT_BLOB_EXTENT,
    DEFAULT_BLOB_STD,
    DEFAULT_N_BLOBS,
    DEFAULT_N_DIMS,
    DEFAULT_N_SAMPLES,
    DEFAULT_OUTLIER_FRACTION,
    MAX_DIMENSIONS,
    MIN_DIMENSIONS,
)


def make_blobs(
    n_samples: int = DEFAULT_N_SAMPLES,
    n_dims: int = DEFAULT_N_DIMS,
    n_blobs: int = DEFAULT_N_BLOBS,
    std: float = DEFAULT_BLOB_STD,
    extent: float = DEFAULT_BLOB_EXTENT,
    outlier_fraction: float = DEFAULT_OUTLIER_FRACTION,
    seed: Optional[int] = None,
) -> pd.DataFrame:
    """
    Generate gaussian blobs.

    Args:
        n_samples: Total number of points.
        n_dims: Number of coordinates per point.
        n_blobs: Number of blobs.
        std: Standard deviation of each blob.
        extent: Blob centers are drawn uniformly in [0, extent) per dimension.
        outlier_fraction: Share of points drawn uniformly over the whole extent
            instead of from a blob.
        seed: Random seed.

    Returns:
        DataFrame with columns x0..x{n_dims-1}, weight (all 1.0) and
        true_label (blob id, -1 for background points).
    """
    if n_samples < 0:
        raise ValueError(f"n_samples must be non-negative, got {n_samples}")
    if not (MIN_DIMENSIONS <= n_dims <= MAX_DIMENSIONS):
        raise ValueError(
            f"n_dims must be in [{MIN_DIMENSIONS}, {MAX_DIMENSIONS}], got {n_dims}"
        )
    if n_blobs < 1:
        raise ValueError(f"n_blobs must be at least 1, got {n_blobs}")
    if std <= 0:
        raise ValueError(f"std must be positive, got {std}")
    if not (0.0 <= outlier_fraction < 1.0):
        raise ValueError(f"outlier_fraction must be in [0.0, 1.0), got {outlier_fraction}")

    rng = np.random.default_rng(seed)
    n_background = int(round(n_samples * outlier_fraction))
    n_blob_points = n_samples - n_background

    centers = rng.uniform(0.0, extent, size=(n_blobs, n_dims))
    labels = np.arange(n_blob_points) % n_blobs
    blob_points = centers[labels] + rng.normal(0.0, std, size=(n_blob_points, n_dims))
    background = rng.uniform(0.0, extent, size=(n_background, n_dims))

    points = np.vstack([blob_points, background])
    true_labels = np.concatenate([labels, np.full(n_background, -1)])

    df = pd.DataFrame(points, columns=[f"x{dim}" for dim in range(n_dims)])
    df["weight"] = 1.0
    df["true_label"] = true_labels.astype(int)
    return df


__all__ = ["make_blobs"]
