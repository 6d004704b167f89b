"""
Command-line interface components for the CLUE demo.

This package provides argument parsing and formatted display functions.
"""

# Argument parsing
from clue.clustering.cli.argument_parser import parse_args, parse_domain

# Display utilities
from clue.clustering.cli.display import (
    display_clustering_result,
    display_configuration,
    summarize_clusters,
)

__all__ = [
    # Argument parsing
    'parse_args',
    'parse_domain',
    # Display utilities
    'display_clustering_result',
    'display_configuration',
    'summarize_clusters',
]
