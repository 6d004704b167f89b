"""
CLUE density-peak clustering.

Runs the five stages of a clustering pass over the points stored in a
ClusteringAlgorithm:

  1. Tile sizing: n // points_per_tile tiles over the observed extent.
  2. Binning: every point is inserted into the tile owning its coordinates.
  3. Local density: weighted kernel sum over the neighbours within dc.
  4. Nearest higher: closest point of higher density within
     dm = outlier_delta_factor * dc, ties on density broken by index.
  5. Assignment: seeds (delta > dc, rho >= rhoc) open clusters, outliers
     (delta > dm, rho < rhoc) stay unassigned, every other point follows its
     nearest higher and inherits its cluster id.

Neighbour searches near the edge of a periodic domain also scan the band of
the same width at the opposite edge, so clusters straddling the wraparound
(e.g. phi = +-pi) are found as one.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from clue.common.ProgressBar import ProgressBar
from clue.common.utils import log_analysis, log_debug, log_warn
from clue.config import (
    CLUSTERING_STAGES,
    DEFAULT_BINNING_WORKERS,
    DEFAULT_DC,
    DEFAULT_FLAT_KERNEL_VALUE,
    DEFAULT_OUTLIER_DELTA_FACTOR,
    DEFAULT_POINTS_PER_TILE,
    DEFAULT_RHOC,
    NO_NEAREST_HIGHER,
    UNASSIGNED_CLUSTER,
)
from clue.clustering.core.domain import Domain, coordinate_distance, make_domains
from clue.clustering.core.kernels import FlatKernel, Kernel, as_kernel
from clue.clustering.core.points import PointSet
from clue.clustering.core.tiles import Tiles
from clue.clustering.utils.validation import (
    TileOverflowError,
    TilingConfigurationError,
    validate_clustering_config,
    validate_domains,
    validate_point_arrays,
)


@dataclass
class ClusteringConfig:
    """Configuration for CLUE clustering."""

    # Algorithm parameters
    dc: float = DEFAULT_DC  # Cut-off distance of the local density
    rhoc: float = DEFAULT_RHOC  # Minimum density of a seed, maximum density of an outlier
    outlier_delta_factor: float = DEFAULT_OUTLIER_DELTA_FACTOR  # dm = outlier_delta_factor * dc
    points_per_tile: int = DEFAULT_POINTS_PER_TILE  # Average number of points per tile

    # Coordinate domains, one per dimension (None = all unbounded)
    domains: Optional[list[Domain]] = None

    # Execution
    binning_workers: int = DEFAULT_BINNING_WORKERS  # Threads filling the tiles
    strict_tiling: bool = False  # Raise instead of falling back to one tile
    verbose: bool = False

    def __post_init__(self):
        if self.domains is not None:
            self.domains = make_domains(self.domains)
        validate_clustering_config(self)

    @property
    def dm(self) -> float:
        return self.outlier_delta_factor * self.dc


@dataclass
class ClusteringResult:
    """Result of a clustering pass."""

    cluster_index: np.ndarray  # Cluster id per point, -1 when unassigned
    is_seed: np.ndarray  # 1 for seeds, 0 otherwise

    # Intermediate quantities (for inspection)
    rho: np.ndarray = field(default_factory=lambda: np.empty(0))
    delta: np.ndarray = field(default_factory=lambda: np.empty(0))
    nearest_higher: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.int64))

    @classmethod
    def empty(cls) -> "ClusteringResult":
        return cls(
            cluster_index=np.empty(0, dtype=np.int64),
            is_seed=np.empty(0, dtype=np.int8),
        )

    def __iter__(self):
        # Allows `cluster_index, is_seed = result`
        yield self.cluster_index
        yield self.is_seed

    def __len__(self) -> int:
        return len(self.cluster_index)

    @property
    def n_clusters(self) -> int:
        return int(np.count_nonzero(self.is_seed))

    @property
    def n_seeds(self) -> int:
        return int(np.count_nonzero(self.is_seed))

    @property
    def n_outliers(self) -> int:
        """Number of points left without a cluster (label -1)."""
        return int(np.count_nonzero(self.cluster_index == UNASSIGNED_CLUSTER))

    @property
    def cluster_points(self) -> list[np.ndarray]:
        """Point indices of each cluster, ordered by cluster id."""
        return [np.flatnonzero(self.cluster_index == cid) for cid in range(self.n_clusters)]

    @property
    def points_per_cluster(self) -> np.ndarray:
        return np.bincount(
            self.cluster_index[self.cluster_index != UNASSIGNED_CLUSTER],
            minlength=self.n_clusters,
        )

    def to_frame(self, coordinates: Optional[np.ndarray] = None) -> pd.DataFrame:
        """
        Tabulate the result, one row per point.

        Args:
            coordinates: Optional (ndim, n) array added as columns x0..x{ndim-1}.

        Returns:
            DataFrame with cluster_ids and is_seed, plus rho/delta/nearest_higher
            when available.
        """
        data = {}
        if coordinates is not None:
            for dim, values in enumerate(np.asarray(coordinates)):
                data[f"x{dim}"] = values
        if len(self.rho) == len(self):
            data["rho"] = self.rho
            data["delta"] = self.delta
            data["nearest_higher"] = self.nearest_higher
        data["cluster_ids"] = self.cluster_index
        data["is_seed"] = self.is_seed
        return pd.DataFrame(data)


class ClusteringAlgorithm:
    """CLUE clustering over a set of weighted points."""

    def __init__(self, config: Optional[ClusteringConfig] = None):
        self.config = config or ClusteringConfig()
        self.points = PointSet()
        self.domains: list[Domain] = []

    # ------------------------------------------------------------------
    # Points
    # ------------------------------------------------------------------

    def set_points(self, n: int, coordinates, weights) -> bool:
        """
        Store the points to be clustered.

        Args:
            n: Number of points.
            coordinates: One array of length n per dimension, or an (ndim, n) array.
            weights: Array of length n.

        Returns:
            True if there are no points (empty result), False otherwise.
        """
        if n == 0:
            self.points.clear()
            return True

        coordinates = np.array(coordinates, dtype=float)
        if coordinates.ndim == 1:
            coordinates = coordinates.reshape(1, -1)
        weights = np.array(weights, dtype=float).reshape(-1)
        validate_point_arrays(n, coordinates, weights)

        ndim = coordinates.shape[0]
        validate_domains(self.config.domains, ndim)
        if self.config.domains is None:
            self.domains = [Domain.unbounded() for _ in range(ndim)]
        else:
            self.domains = list(self.config.domains)

        self.points.set(coordinates, weights)
        return False

    def set_points_from_frame(self, df: pd.DataFrame) -> bool:
        """
        Store points from a DataFrame with columns x0, x1, ... and optional weight.

        Returns:
            True if the frame has no rows, False otherwise.
        """
        coord_columns = sorted(
            (col for col in df.columns if col.startswith("x") and col[1:].isdigit()),
            key=lambda col: int(col[1:]),
        )
        if not coord_columns:
            raise ValueError("DataFrame must contain coordinate columns named x0, x1, ...")

        n = len(df)
        coordinates = df[coord_columns].to_numpy(dtype=float).T
        if "weight" in df.columns:
            weights = df["weight"].to_numpy(dtype=float)
        else:
            weights = np.ones(n)
        return self.set_points(n, coordinates, weights)

    def clear_points(self) -> None:
        self.points.clear()

    # ------------------------------------------------------------------
    # Tiling
    # ------------------------------------------------------------------

    def calculate_n_tiles(self, points_per_tile: int) -> int:
        """Number of tiles for the stored points."""
        return self.points.n // points_per_tile

    def calculate_tile_size(self, n_tiles: int, tiles: Tiles) -> np.ndarray:
        """
        Record the observed extent of each dimension in tiles.min_max and return
        the tile extent per dimension.
        """
        n_per_dim = tiles.n_per_dim
        tile_sizes = np.zeros(self.points.ndim, dtype=float)
        for dim in range(self.points.ndim):
            dim_min = float(self.points.coordinates[dim].min())
            dim_max = float(self.points.coordinates[dim].max())
            tiles.min_max[dim] = (dim_min, dim_max)
            tile_sizes[dim] = (dim_max - dim_min) / n_per_dim
        return tile_sizes

    def _checked_n_tiles(self) -> int:
        n_tiles = self.calculate_n_tiles(self.config.points_per_tile)
        if n_tiles > 0:
            return n_tiles

        message = (
            f"points_per_tile={self.config.points_per_tile} is too high for "
            f"{self.points.n} points; lower it in the clustering configuration"
        )
        if self.config.strict_tiling:
            raise TilingConfigurationError(message)
        log_warn(f"{message}. Using a single tile.")
        return 1

    # ------------------------------------------------------------------
    # Clustering
    # ------------------------------------------------------------------

    def make_clusters(self, kernel: Optional[Kernel] = None) -> ClusteringResult:
        """
        Run the clustering.

        Args:
            kernel: Density kernel, or any callable (distance, i, j) -> float.
                Defaults to FlatKernel(0.5).

        Returns:
            ClusteringResult with cluster_index and is_seed per point.
        """
        kernel = FlatKernel(DEFAULT_FLAT_KERNEL_VALUE) if kernel is None else as_kernel(kernel)
        self.points.reset_results()
        if self.points.n == 0:
            return ClusteringResult.empty()

        progress = (
            ProgressBar(CLUSTERING_STAGES, label="CLUE")
            if self.config.verbose
            else None
        )

        tiles = Tiles(self._checked_n_tiles(), self.points.ndim)
        tiles.tile_size = self.calculate_tile_size(tiles.n_tiles, tiles)
        self._advance(progress)

        self._prepare_data_structures(tiles)
        self._advance(progress)

        self._calculate_local_density(tiles, kernel)
        self._advance(progress)

        self._calculate_distance_to_higher(tiles)
        self._advance(progress)

        self._find_and_assign_clusters()
        self._advance(progress)

        result = ClusteringResult(
            cluster_index=self.points.cluster_index.copy(),
            is_seed=self.points.is_seed.copy(),
            rho=self.points.rho.copy(),
            delta=self.points.delta.copy(),
            nearest_higher=self.points.nearest_higher.copy(),
        )
        if progress is not None:
            progress.finish()
            log_analysis(
                f"CLUE: {result.n_clusters} clusters, {result.n_outliers} unassigned "
                f"out of {self.points.n} points ({tiles.n_tiles} tiles)"
            )
        return result

    @staticmethod
    def _advance(progress: Optional[ProgressBar]) -> None:
        if progress is not None:
            progress.update()

    def _prepare_data_structures(self, tiles: Tiles) -> None:
        """Bin every point into its tile."""
        coords = self.points.coordinates
        n = self.points.n

        occupancy = np.bincount(tiles.get_global_bin(coords), minlength=len(tiles))
        tiles.reserve(occupancy)
        if self.config.verbose:
            log_debug(
                f"Binning {n} points into {len(tiles)} tiles "
                f"(max occupancy {int(occupancy.max())}, {self.config.binning_workers} worker(s))"
            )

        workers = self.config.binning_workers
        if workers == 1:
            lost = sum(1 for i in range(n) if tiles.fill(coords[:, i], i) < 0)
        else:
            chunks = [chunk for chunk in np.array_split(np.arange(n), workers) if len(chunk)]
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [executor.submit(self._fill_chunk, tiles, chunk) for chunk in chunks]
                lost = sum(future.result() for future in as_completed(futures))

        if lost:
            raise TileOverflowError(f"{lost} point(s) could not be stored in their tile")

    def _fill_chunk(self, tiles: Tiles, indices: np.ndarray) -> int:
        """Concurrently insert a range of points; returns the number of lost insertions."""
        coords = self.points.coordinates
        lost = 0
        for i in indices:
            if tiles.fill_concurrent(coords[:, i], int(i)) < 0:
                lost += 1
        return lost

    def _search_box(self, tiles: Tiles, i: int, radius: float) -> np.ndarray:
        """Tiles within radius of point i, including the mirrored band of periodic edges."""
        per_dim_bins = []
        for dim in range(self.points.ndim):
            x = self.points.coordinates[dim, i]
            domain = self.domains[dim]
            bins = tiles.get_bins_from_range(x - radius, x + radius, dim)

            if x + radius > domain.max:
                # Overflow
                band = tiles.get_bins_from_range(domain.min, domain.min + radius, dim)
                bins = np.concatenate([bins, band])
            elif x - radius < domain.min:
                # Underflow
                band = tiles.get_bins_from_range(domain.max - radius, domain.max, dim)
                bins = np.concatenate([bins, band])
            per_dim_bins.append(bins)
        return tiles.search_box(per_dim_bins)

    @staticmethod
    def _candidates(tiles: Tiles, search_box: np.ndarray) -> np.ndarray:
        # Sorted so that results do not depend on the order points entered the tiles
        return np.sort(np.concatenate([tiles[global_bin] for global_bin in search_box]))

    def _distances(self, i: int, candidates: np.ndarray) -> np.ndarray:
        coords = self.points.coordinates
        squared = np.zeros(len(candidates), dtype=float)
        for dim in range(self.points.ndim):
            delta_x = coordinate_distance(coords[dim, i], coords[dim, candidates], self.domains[dim])
            squared += delta_x ** 2
        return np.sqrt(squared)

    def distance(self, i: int, j: int) -> float:
        """Domain-aware Euclidean distance between points i and j."""
        return float(self._distances(i, np.array([j], dtype=np.int64))[0])

    def _calculate_local_density(self, tiles: Tiles, kernel: Kernel) -> None:
        dc = self.config.dc
        points = self.points

        for i in range(points.n):
            candidates = self._candidates(tiles, self._search_box(tiles, i, dc))
            dist = self._distances(i, candidates)

            # query N_dc(i)
            within = dist <= dc
            neighbours = candidates[within]
            contributions = kernel(dist[within], i, neighbours) * points.weight[neighbours]
            points.rho[i] += float(np.sum(contributions))

    def _calculate_distance_to_higher(self, tiles: Tiles) -> None:
        dm = self.config.dm
        points = self.points

        for i in range(points.n):
            rho_i = points.rho[i]
            candidates = self._candidates(tiles, self._search_box(tiles, i, dm))
            dist = self._distances(i, candidates)

            rho_j = points.rho[candidates]
            higher = (rho_j > rho_i) | ((rho_j == rho_i) & (candidates > i))
            eligible = higher & (dist <= dm)
            if not eligible.any():
                # Seed or outlier: keep delta = inf and nearest_higher = -1
                continue

            # argmin returns the lowest index among equally distant candidates
            nearest = int(np.argmin(np.where(eligible, dist, np.inf)))
            points.delta[i] = dist[nearest]
            points.nearest_higher[i] = candidates[nearest]

    def _find_and_assign_clusters(self) -> None:
        dc = self.config.dc
        dm = self.config.dm
        rhoc = self.config.rhoc
        points = self.points

        n_clusters = 0
        local_stack: list[int] = []

        for i in range(points.n):
            points.cluster_index[i] = UNASSIGNED_CLUSTER
            delta_i = points.delta[i]
            rho_i = points.rho[i]

            is_seed = delta_i > dc and rho_i >= rhoc
            is_outlier = delta_i > dm and rho_i < rhoc
            if is_seed:
                points.is_seed[i] = 1
                points.cluster_index[i] = n_clusters
                n_clusters += 1
                local_stack.append(i)
            elif not is_outlier:
                nearest_higher = int(points.nearest_higher[i])
                if nearest_higher != NO_NEAREST_HIGHER:
                    points.followers[nearest_higher].append(i)

        # Expand clusters from the seeds
        while local_stack:
            i = local_stack.pop()
            for follower in points.followers[i]:
                points.cluster_index[follower] = points.cluster_index[i]
                local_stack.append(follower)


def compute_clustering(
    coordinates,
    weights: Optional[Sequence[float]] = None,
    config: Optional[ClusteringConfig] = None,
    kernel: Optional[Kernel] = None,
) -> ClusteringResult:
    """Convenience function to cluster points in one call."""
    coordinates = np.array(coordinates, dtype=float)
    if coordinates.ndim == 1:
        coordinates = coordinates.reshape(1, -1)
    n = coordinates.shape[1]
    if weights is None:
        weights = np.ones(n)

    clustering = ClusteringAlgorithm(config)
    clustering.set_points(n, coordinates, weights)
    return clustering.make_clusters(kernel)


__all__ = [
    "ClusteringConfig",
    "ClusteringResult",
    "ClusteringAlgorithm",
    "compute_clustering",
]
