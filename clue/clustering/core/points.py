"""Point storage: inputs and per-point clustering outputs as parallel arrays."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from clue.config import NO_NEAREST_HIGHER, UNASSIGNED_CLUSTER


@dataclass
class PointSet:
    """Parallel arrays indexed 0..n-1."""

    coordinates: np.ndarray = field(default_factory=lambda: np.empty((0, 0)))  # (ndim, n)
    weight: np.ndarray = field(default_factory=lambda: np.empty(0))
    rho: np.ndarray = field(default_factory=lambda: np.empty(0))
    delta: np.ndarray = field(default_factory=lambda: np.empty(0))
    nearest_higher: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.int64))
    followers: list[list[int]] = field(default_factory=list)
    cluster_index: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.int64))
    is_seed: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.int8))
    n: int = 0

    @property
    def ndim(self) -> int:
        return self.coordinates.shape[0]

    def set(self, coordinates: np.ndarray, weight: np.ndarray) -> None:
        """Store new inputs and allocate sentinel-initialised result arrays."""
        self.coordinates = coordinates
        self.weight = weight
        self.n = coordinates.shape[1]
        self.reset_results()

    def reset_results(self) -> None:
        n = self.n
        self.rho = np.zeros(n, dtype=float)
        self.delta = np.full(n, np.inf, dtype=float)
        self.nearest_higher = np.full(n, NO_NEAREST_HIGHER, dtype=np.int64)
        self.followers = [[] for _ in range(n)]
        self.cluster_index = np.full(n, UNASSIGNED_CLUSTER, dtype=np.int64)
        self.is_seed = np.zeros(n, dtype=np.int8)

    def clear(self) -> None:
        self.coordinates = np.empty((0, 0))
        self.weight = np.empty(0)
        self.n = 0
        self.reset_results()


__all__ = ["PointSet"]
