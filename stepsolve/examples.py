"""Reference systems."""
from __future__ import annotations

from typing import Callable, Dict

from .config import SystemConfiguration

SUPPORTED_SIZES = (2, 3, 4)


def default_system() -> SystemConfiguration:
    """Return the diagonally dominant 3x3 system used as the starting input."""

    return SystemConfiguration(
        matrix=[
            [4.0, -1.0, 0.0],
            [-1.0, 4.0, -1.0],
            [0.0, -1.0, 3.0],
        ],
        vector=[1.0, 2.0, 0.0],
        label="Tridiagonal 3x3",
        description="Strictly diagonally dominant; every method converges.",
    )


def pivot_required_system() -> SystemConfiguration:
    """Return a 2x2 permutation system whose first diagonal entry is zero.

    Plain Gauss elimination divides by the zero pivot; partial pivoting swaps
    the rows first and solves it exactly (``x = [2, 1]``).
    """

    return SystemConfiguration(
        matrix=[
            [0.0, 1.0],
            [1.0, 0.0],
        ],
        vector=[1.0, 2.0],
        label="Zero pivot 2x2",
        description="Needs a row swap before elimination.",
        method="pivoting",
    )


def identity_system(size: int = 3) -> SystemConfiguration:
    """Return an identity matrix with a zero right-hand side.

    This is the blank input offered when the system size changes; the unit
    diagonal keeps the fresh system non-singular.
    """

    if size not in SUPPORTED_SIZES:
        raise ValueError(f"Size must be one of {SUPPORTED_SIZES}, got {size}")
    matrix = [[1.0 if i == j else 0.0 for j in range(size)] for i in range(size)]
    return SystemConfiguration(
        matrix=matrix,
        vector=[0.0] * size,
        label=f"Identity {size}x{size}",
    )


EXAMPLES: Dict[str, Callable[[], SystemConfiguration]] = {
    "default": default_system,
    "pivot": pivot_required_system,
    "identity2": lambda: identity_system(2),
    "identity3": lambda: identity_system(3),
    "identity4": lambda: identity_system(4),
}


def load_example(name: str) -> SystemConfiguration:
    try:
        factory = EXAMPLES[name]
    except KeyError:
        raise ValueError(f"Unknown example '{name}'. Choose one of: {', '.join(EXAMPLES)}") from None
    return factory()


__all__ = [
    "SUPPORTED_SIZES",
    "EXAMPLES",
    "default_system",
    "pivot_required_system",
    "identity_system",
    "load_example",
]
