"""Lightweight linear algebra helpers shared by the traced solvers."""
from __future__ import annotations

import math
from typing import Iterable, List, Sequence

Matrix = List[List[float]]
Vector = List[float]


class LinearSystemError(RuntimeError):
    """Raised when a solve produced an unusable (non-finite) solution."""


def copy_matrix(matrix: Sequence[Sequence[float]]) -> Matrix:
    return [[float(value) for value in row] for row in matrix]


def copy_vector(vector: Iterable[float]) -> Vector:
    return [float(value) for value in vector]


def validate_system(matrix: Sequence[Sequence[float]], vector: Sequence[float]) -> int:
    """Check that ``matrix`` is square and matches ``vector``; return ``n``.

    Shape problems are caller errors and are reported before any solver
    touches the data.  Numerical problems (zero pivots) are not checked here.
    """

    n = len(matrix)
    if n == 0:
        raise ValueError("System must not be empty")
    if any(len(row) != n for row in matrix):
        raise ValueError("Matrix must be square")
    if len(vector) != n:
        raise ValueError("Right-hand side dimension mismatch")
    return n


def ieee_divide(numerator: float, denominator: float) -> float:
    """Divide with IEEE-754 semantics instead of raising ``ZeroDivisionError``.

    ``x / 0`` gives a signed infinity and ``0 / 0`` gives ``nan``, so a zero
    pivot flows through the rest of the computation the same way it would in
    hardware floating point.
    """

    if denominator != 0.0:
        return numerator / denominator
    if numerator == 0.0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def mat_vec(matrix: Sequence[Sequence[float]], vector: Sequence[float]) -> Vector:
    return [sum(a * x for a, x in zip(row, vector)) for row in matrix]


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two vectors of equal length."""
    return math.dist(a, b)


def residual_norm(matrix: Sequence[Sequence[float]], vector: Sequence[float], solution: Sequence[float]) -> float:
    """Return ``||A x - b||`` for a candidate solution."""
    return distance(mat_vec(matrix, solution), vector)


def is_diagonally_dominant(matrix: Sequence[Sequence[float]], strict: bool = True) -> bool:
    """Row diagonal dominance, the usual sufficient condition for Jacobi/Gauss-Seidel."""

    for i, row in enumerate(matrix):
        diagonal = abs(row[i])
        off_diagonal = sum(abs(value) for j, value in enumerate(row) if j != i)
        if strict and not diagonal > off_diagonal:
            return False
        if not strict and diagonal < off_diagonal:
            return False
    return True


def has_zero_diagonal(matrix: Sequence[Sequence[float]]) -> bool:
    return any(row[i] == 0.0 for i, row in enumerate(matrix))


def is_finite_vector(vector: Iterable[float]) -> bool:
    return all(math.isfinite(value) for value in vector)


def is_upper_triangular(matrix: Sequence[Sequence[float]], tol: float = 1e-9) -> bool:
    return all(abs(matrix[i][j]) <= tol for i in range(len(matrix)) for j in range(i))


def is_identity(matrix: Sequence[Sequence[float]], tol: float = 1e-9) -> bool:
    n = len(matrix)
    return all(
        abs(matrix[i][j] - (1.0 if i == j else 0.0)) <= tol
        for i in range(n)
        for j in range(n)
    )


__all__ = [
    "LinearSystemError",
    "Matrix",
    "Vector",
    "copy_matrix",
    "copy_vector",
    "validate_system",
    "ieee_divide",
    "mat_vec",
    "distance",
    "residual_norm",
    "is_diagonally_dominant",
    "has_zero_diagonal",
    "is_finite_vector",
    "is_upper_triangular",
    "is_identity",
]
