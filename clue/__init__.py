"""
CLUE package: density-peak clustering of weighted N-dimensional points.
"""

from . import config

__all__ = ["config"]
