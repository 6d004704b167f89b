"""
Tests for validation module.
"""
from types import SimpleNamespace

import numpy as np
import pytest

from clue.clustering.utils.validation import (
    ClusteringConfigurationError,
    TileOverflowError,
    TilingConfigurationError,
    validate_clustering_config,
    validate_domains,
    validate_point_arrays,
)


def _config(**overrides):
    values = dict(dc=1.0, rhoc=5.0, outlier_delta_factor=2.0, points_per_tile=10, binning_workers=1)
    values.update(overrides)
    return SimpleNamespace(**values)


def test_error_hierarchy():
    """Test configuration errors are ValueErrors and overflow is a RuntimeError."""
    assert issubclass(ClusteringConfigurationError, ValueError)
    assert issubclass(TilingConfigurationError, ClusteringConfigurationError)
    assert issubclass(TileOverflowError, RuntimeError)


def test_validate_clustering_config_valid():
    """Test a valid configuration passes."""
    validate_clustering_config(_config())
    validate_clustering_config(_config(points_per_tile=np.int64(3), dc=np.float64(0.1)))


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"dc": 0.0}, "dc must be a positive number"),
        ({"dc": np.inf}, "dc must be a positive number"),
        ({"dc": True}, "dc must be a positive number"),
        ({"rhoc": -1.0}, "rhoc must be a positive number"),
        ({"rhoc": "5"}, "rhoc must be a positive number"),
        ({"outlier_delta_factor": np.nan}, "outlier_delta_factor must be a positive number"),
        ({"points_per_tile": 1.5}, "points_per_tile must be an integer"),
        ({"points_per_tile": 0}, "points_per_tile must be at least 1"),
        ({"binning_workers": 0}, "binning_workers must be at least 1"),
        ({"binning_workers": None}, "binning_workers must be an integer"),
    ],
)
def test_validate_clustering_config_invalid(overrides, message):
    """Test out-of-range parameters are reported by name."""
    with pytest.raises(ClusteringConfigurationError, match=message):
        validate_clustering_config(_config(**overrides))


def test_validate_domains():
    """Test domain count must match the dimensions."""
    validate_domains(None, 3)
    validate_domains([None, None], 2)

    with pytest.raises(ClusteringConfigurationError, match="Expected 3 domains"):
        validate_domains([None], 3)


def test_validate_point_arrays_valid():
    """Test consistent arrays pass."""
    validate_point_arrays(3, np.zeros((2, 3)), np.ones(3))


@pytest.mark.parametrize(
    "n, coordinates, weights, message",
    [
        (-1, np.zeros((1, 0)), np.ones(0), "non-negative"),
        (3, np.zeros(3), np.ones(3), "one array per dimension"),
        (3, np.zeros((11, 3)), np.ones(3), r"\[1, 10\]"),
        (3, np.zeros((2, 4)), np.ones(3), "expected 3"),
        (3, np.zeros((2, 3)), np.ones(2), "Weights have shape"),
        (2, np.array([[0.0, np.nan]]), np.ones(2), "Coordinates must be finite"),
        (2, np.zeros((1, 2)), np.array([1.0, -1.0]), "non-negative"),
        (2, np.zeros((1, 2)), np.array([1.0, np.inf]), "Weights must be finite"),
    ],
)
def test_validate_point_arrays_invalid(n, coordinates, weights, message):
    """Test malformed point arrays are rejected."""
    with pytest.raises(ValueError, match=message):
        validate_point_arrays(n, coordinates, weights)
