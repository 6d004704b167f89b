"""
Configuration constants for all components.

Organized by component:
1. Domain / Geometry Configuration
2. Clustering Algorithm Configuration
3. Density Kernel Configuration
4. Demo Data / CLI Configuration
"""

import sys

# ============================================================================
# DOMAIN / GEOMETRY CONFIGURATION
# ============================================================================

# Sentinel magnitude for an unbounded (non-periodic) coordinate.
# A domain equal to (-UNBOUNDED, UNBOUNDED) never wraps.
UNBOUNDED = sys.float_info.max

# Supported number of coordinate dimensions
MIN_DIMENSIONS = 1
MAX_DIMENSIONS = 10


# ============================================================================
# CLUSTERING ALGORITHM CONFIGURATION
# ============================================================================

DEFAULT_OUTLIER_DELTA_FACTOR = 2.0  # dm = outlier_delta_factor * dc
DEFAULT_POINTS_PER_TILE = 10  # Average number of points per tile
DEFAULT_BINNING_WORKERS = 1  # >1 fills tiles from a thread pool

# Sentinel values written into the point arrays
UNASSIGNED_CLUSTER = -1  # clusterIndex of outliers and unassigned points
NO_NEAREST_HIGHER = -1  # nearestHigher when no higher-density neighbour exists

# Stage names reported by the verbose progress bar
CLUSTERING_STAGES = [
    "tile sizing",
    "binning",
    "local density",
    "nearest higher",
    "cluster assignment",
]


# ============================================================================
# DENSITY KERNEL CONFIGURATION
# ============================================================================

DEFAULT_KERNEL = "flat"
DEFAULT_FLAT_KERNEL_VALUE = 0.5
# Number of parameters expected by each named kernel
KERNEL_PARAMETER_COUNTS = {
    "flat": 1,  # flat value
    "exp": 2,  # avg, amplitude
    "gaus": 3,  # avg, std, amplitude
    "custom": 0,
}


# ============================================================================
# DEMO DATA / CLI CONFIGURATION
# ============================================================================

DEFAULT_N_SAMPLES = 1000
DEFAULT_N_DIMS = 2
DEFAULT_N_BLOBS = 4
DEFAULT_BLOB_STD = 0.5  # Gaussian sigma of each blob
DEFAULT_BLOB_EXTENT = 30.0  # Blob centers drawn uniformly in [0, extent)
DEFAULT_OUTLIER_FRACTION = 0.0  # Share of uniform background noise points
DEFAULT_DC = 1.0
DEFAULT_RHOC = 5.0
DEFAULT_SEED = 42
