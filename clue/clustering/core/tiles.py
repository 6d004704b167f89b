"""
Spatial tile index.

The bounding box of the points is split into a regular grid of
n_per_dim ** ndim tiles. Each tile stores the indices of the points it owns in
a GrowableBuffer. Global tile ids are row-major with dimension 0 varying
fastest: id = sum_k bin_k * n_per_dim ** k.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from clue.clustering.core.growable_buffer import GrowableBuffer


def integer_root(value: int, degree: int) -> int:
    """Largest integer r with r ** degree <= value."""
    if value <= 0:
        return 0
    root = int(round(value ** (1.0 / degree)))
    while root ** degree > value:
        root -= 1
    while (root + 1) ** degree <= value:
        root += 1
    return root


class Tiles:
    """Grid of tiles over the observed extent of the points."""

    def __init__(self, n_tiles: int, ndim: int):
        if n_tiles < 1:
            raise ValueError(f"n_tiles must be at least 1, got {n_tiles}")
        self.ndim = ndim
        self.n_per_dim = integer_root(n_tiles, ndim)
        self.n_tiles = self.n_per_dim ** ndim
        self.tile_size = np.zeros(ndim, dtype=float)
        self.min_max = np.zeros((ndim, 2), dtype=float)
        self._strides = self.n_per_dim ** np.arange(ndim, dtype=np.int64)
        self._tiles = [GrowableBuffer(0, dtype=np.int64) for _ in range(self.n_tiles)]

    def __len__(self) -> int:
        return self.n_tiles

    def __getitem__(self, global_bin: int) -> np.ndarray:
        return self._tiles[global_bin].view()

    def get_bin(self, coord, dim: int):
        """
        Bin index of a coordinate (scalar or array) along one dimension.

        Coordinates outside the observed extent are clamped to the edge bins.
        """
        size = self.tile_size[dim]
        if size <= 0:
            return np.zeros(np.shape(coord), dtype=np.int64)
        position = (np.asarray(coord, dtype=float) - self.min_max[dim, 0]) / size
        return np.clip(position, 0, self.n_per_dim - 1).astype(np.int64)

    def get_global_bin(self, coords) -> np.ndarray:
        """Global tile id for coords of shape (ndim,) or (ndim, m)."""
        coords = np.asarray(coords, dtype=float)
        global_bin = np.zeros(coords.shape[1:], dtype=np.int64)
        for dim in range(self.ndim):
            global_bin = global_bin + self.get_bin(coords[dim], dim) * self._strides[dim]
        return global_bin

    def get_bins_from_range(self, low: float, high: float, dim: int) -> np.ndarray:
        """Ordered bin indices covering [low, high] along one dimension."""
        return np.arange(int(self.get_bin(low, dim)), int(self.get_bin(high, dim)) + 1, dtype=np.int64)

    def search_box(self, per_dim_bins: Sequence[np.ndarray]) -> np.ndarray:
        """Sorted, deduplicated global ids of the Cartesian product of per-dimension bins."""
        grids = np.meshgrid(*per_dim_bins, indexing="ij")
        global_bins = np.zeros(grids[0].shape, dtype=np.int64)
        for dim, grid in enumerate(grids):
            global_bins += grid * self._strides[dim]
        return np.unique(global_bins)

    def reserve(self, counts: Sequence[int]) -> None:
        """Size every tile for a run; previous contents are discarded."""
        for tile, count in zip(self._tiles, counts):
            tile.reserve(int(count))

    def fill(self, coords, point_index: int) -> int:
        """Insert a point into the tile owning coords. Returns the slot or -1."""
        return self._tiles[int(self.get_global_bin(coords))].append_unsynchronized(point_index)

    def fill_concurrent(self, coords, point_index: int) -> int:
        """Thread-safe version of fill."""
        return self._tiles[int(self.get_global_bin(coords))].append_concurrent(point_index)

    def occupancy(self) -> np.ndarray:
        """Number of points stored in each tile."""
        return np.array([len(tile) for tile in self._tiles], dtype=np.int64)

    def clear(self) -> None:
        for tile in self._tiles:
            tile.reset()


__all__ = ["Tiles", "integer_root"]
