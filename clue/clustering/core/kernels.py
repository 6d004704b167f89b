"""
Density kernels.

A kernel maps (distance, i, j) to the density contribution of point j to
point i, before weighting. All built-in kernels give a self-contribution of
1 (i == j) and accept either scalars or numpy arrays for every argument, so
the density stage can evaluate a whole tile of candidates at once.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

import numpy as np

from clue.config import KERNEL_PARAMETER_COUNTS


class Kernel:
    """
    Base class of density kernels.

    The density stage calls a kernel once per point with arrays: `distance`
    and `j` hold every candidate neighbour, `i` is the point itself. Subclasses
    that handle arrays set `vectorized = True`; any other subclass is written
    for scalars and as_kernel wraps it in a CustomKernel.
    """

    vectorized = False

    def __call__(self, distance, i, j):
        raise NotImplementedError


class FlatKernel(Kernel):
    """Constant contribution `flat` for every neighbour."""

    vectorized = True

    def __init__(self, flat: float):
        if flat < 0:
            raise ValueError(f"flat kernel value must be non-negative, got {flat}")
        self.flat = float(flat)

    def __call__(self, distance, i, j):
        return np.where(np.equal(i, j), 1.0, self.flat)

    def __repr__(self) -> str:
        return f"FlatKernel(flat={self.flat})"


class ExponentialKernel(Kernel):
    """Contribution `amplitude * exp(-avg * distance)`."""

    vectorized = True

    def __init__(self, avg: float, amplitude: float):
        if amplitude < 0:
            raise ValueError(f"amplitude must be non-negative, got {amplitude}")
        self.avg = float(avg)
        self.amplitude = float(amplitude)

    def __call__(self, distance, i, j):
        value = self.amplitude * np.exp(-self.avg * np.asarray(distance, dtype=float))
        return np.where(np.equal(i, j), 1.0, value)

    def __repr__(self) -> str:
        return f"ExponentialKernel(avg={self.avg}, amplitude={self.amplitude})"


class GaussianKernel(Kernel):
    """Contribution `amplitude * exp(-(distance - avg)^2 / (2 std^2))`."""

    vectorized = True

    def __init__(self, avg: float, std: float, amplitude: float):
        if std <= 0:
            raise ValueError(f"std must be positive, got {std}")
        if amplitude < 0:
            raise ValueError(f"amplitude must be non-negative, got {amplitude}")
        self.avg = float(avg)
        self.std = float(std)
        self.amplitude = float(amplitude)

    def __call__(self, distance, i, j):
        shifted = np.asarray(distance, dtype=float) - self.avg
        value = self.amplitude * np.exp(-(shifted ** 2) / (2 * self.std ** 2))
        return np.where(np.equal(i, j), 1.0, value)

    def __repr__(self) -> str:
        return f"GaussianKernel(avg={self.avg}, std={self.std}, amplitude={self.amplitude})"


class CustomKernel(Kernel):
    """
    Wraps a user function `(distance, i, j) -> float` written for scalars.

    The function is vectorized with numpy.vectorize, so it is called once per
    candidate pair.
    """

    vectorized = True

    def __init__(self, function: Callable[[float, int, int], float]):
        if not callable(function):
            raise TypeError("custom kernel function must be callable")
        self.function = function
        self._vectorized = np.vectorize(function, otypes=[float])

    def __call__(self, distance, i, j):
        return self._vectorized(distance, i, j)

    def __repr__(self) -> str:
        name = getattr(self.function, "__name__", repr(self.function))
        return f"CustomKernel({name})"


def as_kernel(kernel) -> Kernel:
    """Return array-capable kernels unchanged; wrap scalar kernels and plain callables."""
    if isinstance(kernel, Kernel) and kernel.vectorized:
        return kernel
    return CustomKernel(kernel)


def choose_kernel(
    choice: str,
    parameters: Sequence[float] = (),
    function: Optional[Callable[[float, int, int], float]] = None,
) -> Kernel:
    """
    Build a kernel by name.

    Args:
        choice: "flat", "exp", "gaus" or "custom".
        parameters: flat -> [flat]; exp -> [avg, amplitude];
            gaus -> [avg, std, amplitude]; custom -> [].
        function: Scalar function used when choice is "custom".

    Returns:
        Kernel instance.

    Raises:
        ValueError: Unknown kernel name or wrong number of parameters.
    """
    if choice not in KERNEL_PARAMETER_COUNTS:
        raise ValueError(
            f"Unknown kernel '{choice}', expected one of {sorted(KERNEL_PARAMETER_COUNTS)}"
        )
    expected = KERNEL_PARAMETER_COUNTS[choice]
    if len(parameters) != expected:
        raise ValueError(
            f"Kernel '{choice}' takes {expected} parameter(s), got {len(parameters)}"
        )

    if choice == "flat":
        return FlatKernel(*parameters)
    if choice == "exp":
        return ExponentialKernel(*parameters)
    if choice == "gaus":
        return GaussianKernel(*parameters)
    if function is None:
        raise ValueError("Kernel 'custom' requires a function")
    return CustomKernel(function)


__all__ = [
    "Kernel",
    "FlatKernel",
    "ExponentialKernel",
    "GaussianKernel",
    "CustomKernel",
    "as_kernel",
    "choose_kernel",
]
