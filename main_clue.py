"""
CLUE Clustering Main Program

Runs CLUE density-peak clustering on synthetic data:
- Generates gaussian blobs (optionally with uniform background noise)
- Clusters them with the configured kernel and domains
- Displays the clusters found and the unassigned points
"""

import sys
import warnings

from clue.common.utils import configure_windows_stdio

# Fix encoding issues on Windows for interactive CLI runs only
configure_windows_stdio()

from colorama import Fore, init as colorama_init

from clue.config import DEFAULT_FLAT_KERNEL_VALUE, KERNEL_PARAMETER_COUNTS
from clue.common.utils import color_text, log_data, log_error, log_success
from clue.clustering.core.clustering import ClusteringAlgorithm, ClusteringConfig
from clue.clustering.core.kernels import choose_kernel
from clue.clustering.utils.synthetic import make_blobs
from clue.clustering.cli import (
    parse_args,
    display_configuration,
    display_clustering_result,
)

# Suppress warnings for cleaner output
warnings.filterwarnings("ignore")
colorama_init(autoreset=True)


def build_kernel(name: str, params):
    """Build the kernel selected on the command line."""
    if params is None:
        if name == "flat":
            params = [DEFAULT_FLAT_KERNEL_VALUE]
        else:
            expected = KERNEL_PARAMETER_COUNTS[name]
            raise ValueError(f"Kernel '{name}' needs --kernel-params with {expected} values")
    return choose_kernel(name, params)


def main(argv=None) -> int:
    """
    Main function for the CLUE demo.

    Orchestrates the workflow:
    1. Parse command-line arguments
    2. Generate synthetic blobs
    3. Configure and run the clustering
    4. Display the result

    Returns:
        Process exit code.
    """
    args = parse_args(argv)

    config = ClusteringConfig(
        dc=args.dc,
        rhoc=args.rhoc,
        outlier_delta_factor=args.outlier_delta_factor,
        points_per_tile=args.points_per_tile,
        domains=args.domain,
        binning_workers=args.workers,
        strict_tiling=args.strict_tiling,
        verbose=args.verbose,
    )
    kernel = build_kernel(args.kernel, args.kernel_params)
    display_configuration(config, kernel)

    log_data(
        f"\nGenerating {args.n_samples} points in {args.n_dims}D "
        f"({args.n_blobs} blobs, std={args.std}, seed={args.seed})"
    )
    data = make_blobs(
        n_samples=args.n_samples,
        n_dims=args.n_dims,
        n_blobs=args.n_blobs,
        std=args.std,
        extent=args.extent,
        outlier_fraction=args.outlier_fraction,
        seed=args.seed,
    )

    clustering = ClusteringAlgorithm(config)
    if clustering.set_points_from_frame(data):
        log_error("No points generated; nothing to cluster")
        return 1

    result = clustering.make_clusters(kernel)
    display_clustering_result(result, true_labels=data["true_label"].to_numpy())
    log_success(f"\nClustering completed: {result.n_clusters} clusters found")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print(color_text("\nExiting program by user request.", Fore.YELLOW))
        sys.exit(0)
    except Exception as e:
        log_error(f"Error: {type(e).__name__}: {e}")
        import traceback
        log_error(f"Traceback: {traceback.format_exc()}")
        sys.exit(1)
