"""
Coordinate domains and the per-dimension distance.

A domain is the (min, max) extent of one coordinate. The sentinel pair
(-UNBOUNDED, UNBOUNDED) marks a coordinate without limits. Any other domain
is periodic with period max - min, so distances wrap around the edges
(angular coordinates such as phi in [-pi, pi] are the typical case).
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from clue.config import UNBOUNDED


@dataclass(frozen=True)
class Domain:
    """Extent of a single coordinate."""

    min: float = -UNBOUNDED
    max: float = UNBOUNDED

    def __post_init__(self):
        if self.min > self.max:
            raise ValueError(f"Domain min must not exceed max, got ({self.min}, {self.max})")

    @classmethod
    def unbounded(cls) -> "Domain":
        return cls()

    @property
    def is_unbounded(self) -> bool:
        return self.min == -UNBOUNDED and self.max == UNBOUNDED

    @property
    def width(self) -> float:
        return self.max - self.min


def coordinate_distance(x_i, x_j, domain: Domain):
    """
    Distance between coordinates along a single dimension.

    Wraps around the domain edges unless the domain is unbounded. Accepts
    scalars or numpy arrays (broadcast against each other).

    Args:
        x_i: Coordinate(s) of the first point(s).
        x_j: Coordinate(s) of the second point(s).
        domain: Domain of this dimension.

    Returns:
        Non-negative distance, symmetric in x_i and x_j.
    """
    diff = np.abs(np.asarray(x_i, dtype=float) - np.asarray(x_j, dtype=float))
    if domain.is_unbounded or domain.width <= 0:
        return diff
    width = domain.width
    diff = np.mod(diff, width)
    return np.minimum(diff, width - diff)


def make_domains(limits) -> list[Domain]:
    """
    Build a domain list from (min, max) pairs.

    None entries stand for unbounded dimensions.
    """
    domains = []
    for limit in limits:
        if limit is None:
            domains.append(Domain.unbounded())
        elif isinstance(limit, Domain):
            domains.append(limit)
        else:
            low, high = limit
            domains.append(Domain(float(low), float(high)))
    return domains


__all__ = ["Domain", "coordinate_distance", "make_domains"]
