"""Registry of the available solvers keyed by method identifier."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence

from .direct import solve_gauss_elimination, solve_gauss_elimination_with_pivoting, solve_gauss_jordan
from .iterative import DEFAULT_MAX_ITER, DEFAULT_TOLERANCE, solve_gauss_seidel, solve_jacobi
from .trace import DIRECT, ITERATIVE, SolveResult


@dataclass(frozen=True)
class MethodInfo:
    key: str
    label: str
    type: str
    solver: Callable[..., SolveResult]

    @property
    def is_iterative(self) -> bool:
        return self.type == ITERATIVE


# Iteration order matters: the comparator scans direct methods before iterative ones.
METHODS: Dict[str, MethodInfo] = {
    "gauss": MethodInfo("gauss", "Gauss Elimination (Basic)", DIRECT, solve_gauss_elimination),
    "pivoting": MethodInfo("pivoting", "Gauss with Pivoting", DIRECT, solve_gauss_elimination_with_pivoting),
    "gaussJordan": MethodInfo("gaussJordan", "Gauss-Jordan Elimination", DIRECT, solve_gauss_jordan),
    "jacobi": MethodInfo("jacobi", "Jacobi Iteration", ITERATIVE, solve_jacobi),
    "seidel": MethodInfo("seidel", "Gauss-Seidel", ITERATIVE, solve_gauss_seidel),
}

DIRECT_METHODS = tuple(key for key, info in METHODS.items() if info.type == DIRECT)
ITERATIVE_METHODS = tuple(key for key, info in METHODS.items() if info.type == ITERATIVE)

_METHOD_ALIASES = {
    "gauss": "gauss",
    "gauss_elimination": "gauss",
    "basic": "gauss",
    "pivoting": "pivoting",
    "pivot": "pivoting",
    "partial_pivoting": "pivoting",
    "gauss_pivoting": "pivoting",
    "gaussjordan": "gaussJordan",
    "gauss_jordan": "gaussJordan",
    "jordan": "gaussJordan",
    "rref": "gaussJordan",
    "jacobi": "jacobi",
    "seidel": "seidel",
    "gauss_seidel": "seidel",
    "gaussseidel": "seidel",
}


def normalize_method(value: Any) -> str:
    """Return the canonical method key for ``value``.

    Accepts the registry keys as well as hyphenated spellings
    (``gauss-jordan``) and common variants (``Gauss Seidel``).
    Unknown names raise ``ValueError``.
    """

    if not isinstance(value, str):
        raise ValueError(f"Method name must be a string, got {type(value).__name__}")
    normalized = value.strip().lower().replace(" ", "_").replace("-", "_")
    try:
        return _METHOD_ALIASES[normalized]
    except KeyError:
        choices = ", ".join(METHODS)
        raise ValueError(f"Unknown method '{value}'. Choose one of: {choices}") from None


def solve(
    method: str,
    matrix: Sequence[Sequence[float]],
    vector: Sequence[float],
    tolerance: Optional[float] = None,
    max_iter: Optional[int] = None,
) -> SolveResult:
    """Run a single solver selected by name.

    ``tolerance`` and ``max_iter`` only apply to the iterative methods and
    are ignored by the direct ones.
    """

    info = METHODS[normalize_method(method)]
    if info.is_iterative:
        return info.solver(
            matrix,
            vector,
            tolerance=DEFAULT_TOLERANCE if tolerance is None else tolerance,
            max_iter=DEFAULT_MAX_ITER if max_iter is None else max_iter,
        )
    return info.solver(matrix, vector)


__all__ = [
    "MethodInfo",
    "METHODS",
    "DIRECT_METHODS",
    "ITERATIVE_METHODS",
    "normalize_method",
    "solve",
]
