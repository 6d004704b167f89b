"""
Command-line argument parser for the CLUE demo runner.

Defines the options for generating synthetic blobs and for configuring the
clustering, with their default values.
"""

import argparse

from clue.config import (
    DEFAULT_BINNING_WORKERS,
    DEFAULT_BLOB_EXTENT,
    DEFAULT_BLOB_STD,
    DEFAULT_DC,
    DEFAULT_KERNEL,
    DEFAULT_N_BLOBS,
    DEFAULT_N_DIMS,
    DEFAULT_N_SAMPLES,
    DEFAULT_OUTLIER_DELTA_FACTOR,
    DEFAULT_OUTLIER_FRACTION,
    DEFAULT_POINTS_PER_TILE,
    DEFAULT_RHOC,
    DEFAULT_SEED,
    KERNEL_PARAMETER_COUNTS,
)


def parse_domain(value: str):
    """
    Parse a domain given as "min,max", or "none" for an unbounded dimension.

    Raises:
        argparse.ArgumentTypeError: If the value cannot be parsed.
    """
    if value.strip().lower() == "none":
        return None
    parts = value.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Domain must be 'min,max' or 'none', got '{value}'")
    try:
        low, high = float(parts[0]), float(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"Domain bounds must be numbers, got '{value}'")
    if low > high:
        raise argparse.ArgumentTypeError(f"Domain min must not exceed max, got '{value}'")
    return (low, high)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLUE demo."""
    parser = argparse.ArgumentParser(
        description="CLUE density-peak clustering of synthetic gaussian blobs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Synthetic data options
    parser.add_argument(
        "--n-samples",
        type=int,
        default=DEFAULT_N_SAMPLES,
        dest="n_samples",
        help=f"Number of points to generate (default: {DEFAULT_N_SAMPLES})",
    )
    parser.add_argument(
        "--n-dims",
        type=int,
        default=DEFAULT_N_DIMS,
        dest="n_dims",
        help=f"Number of dimensions (default: {DEFAULT_N_DIMS})",
    )
    parser.add_argument(
        "--n-blobs",
        type=int,
        default=DEFAULT_N_BLOBS,
        dest="n_blobs",
        help=f"Number of gaussian blobs (default: {DEFAULT_N_BLOBS})",
    )
    parser.add_argument(
        "--std",
        type=float,
        default=DEFAULT_BLOB_STD,
        help=f"Standard deviation of each blob (default: {DEFAULT_BLOB_STD})",
    )
    parser.add_argument(
        "--extent",
        type=float,
        default=DEFAULT_BLOB_EXTENT,
        help=f"Blob centers are drawn in [0, extent) (default: {DEFAULT_BLOB_EXTENT})",
    )
    parser.add_argument(
        "--outlier-fraction",
        type=float,
        default=DEFAULT_OUTLIER_FRACTION,
        dest="outlier_fraction",
        help=f"Share of uniform background points (default: {DEFAULT_OUTLIER_FRACTION})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_SEED,
        help=f"Random seed (default: {DEFAULT_SEED})",
    )

    # Clustering parameters
    parser.add_argument(
        "--dc",
        type=float,
        default=DEFAULT_DC,
        help=f"Cut-off distance of the local density (default: {DEFAULT_DC})",
    )
    parser.add_argument(
        "--rhoc",
        type=float,
        default=DEFAULT_RHOC,
        help=f"Minimum density of a cluster seed (default: {DEFAULT_RHOC})",
    )
    parser.add_argument(
        "--outlier-delta-factor",
        type=float,
        default=DEFAULT_OUTLIER_DELTA_FACTOR,
        dest="outlier_delta_factor",
        help=f"Multiplier of dc for the outlier distance (default: {DEFAULT_OUTLIER_DELTA_FACTOR})",
    )
    parser.add_argument(
        "--points-per-tile",
        type=int,
        default=DEFAULT_POINTS_PER_TILE,
        dest="points_per_tile",
        help=f"Average number of points per tile (default: {DEFAULT_POINTS_PER_TILE})",
    )
    parser.add_argument(
        "--domain",
        type=parse_domain,
        action="append",
        default=None,
        help="Periodic domain 'min,max' of one dimension, repeat once per dimension "
             "('none' for unbounded; default: all unbounded)",
    )
    parser.add_argument(
        "--kernel",
        type=str,
        default=DEFAULT_KERNEL,
        choices=[name for name in KERNEL_PARAMETER_COUNTS if name != "custom"],
        help=f"Density kernel (default: {DEFAULT_KERNEL})",
    )
    parser.add_argument(
        "--kernel-params",
        type=float,
        nargs="*",
        default=None,
        dest="kernel_params",
        help="Kernel parameters: flat -> value; exp -> avg amplitude; gaus -> avg std amplitude",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=DEFAULT_BINNING_WORKERS,
        help=f"Threads used to fill the tiles (default: {DEFAULT_BINNING_WORKERS})",
    )
    parser.add_argument(
        "--strict-tiling",
        action="store_true",
        dest="strict_tiling",
        help="Fail when points_per_tile leaves no tile instead of using a single tile",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show stage progress",
    )
    return parser


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments for the CLUE demo."""
    return build_parser().parse_args(argv)


__all__ = ["build_parser", "parse_args", "parse_domain"]
