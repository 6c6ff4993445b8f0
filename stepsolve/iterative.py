"""Fixed-point iterative solvers (Jacobi and Gauss-Seidel) with a step trace."""
from __future__ import annotations

from typing import Callable, List, Sequence

from .linalg import Matrix, Vector, copy_matrix, copy_vector, distance, ieee_divide, validate_system
from .trace import ITERATIVE, SolveResult, StepRecorder

DEFAULT_TOLERANCE = 0.001
DEFAULT_MAX_ITER = 50

_Sweep = Callable[[Matrix, Vector, Vector], Vector]


def _jacobi_sweep(A: Matrix, b: Vector, x: Vector) -> Vector:
    # Every component reads the previous iterate only.
    n = len(A)
    x_new = [0.0] * n
    for i in range(n):
        total = 0.0
        for j in range(n):
            if j != i:
                total += A[i][j] * x[j]
        x_new[i] = ieee_divide(b[i] - total, A[i][i])
    return x_new


def _gauss_seidel_sweep(A: Matrix, b: Vector, x: Vector) -> Vector:
    # Components below i have already been updated in this sweep.
    n = len(A)
    x_new = list(x)
    for i in range(n):
        total = 0.0
        for j in range(n):
            if j < i:
                total += A[i][j] * x_new[j]
            elif j > i:
                total += A[i][j] * x[j]
        x_new[i] = ieee_divide(b[i] - total, A[i][i])
    return x_new


def _iterate(
    matrix: Sequence[Sequence[float]],
    vector: Sequence[float],
    tolerance: float,
    max_iter: int,
    sweep: _Sweep,
    method: str,
) -> SolveResult:
    n = validate_system(matrix, vector)
    if not tolerance >= 0:
        raise ValueError("Tolerance must be non-negative")
    if max_iter < 0:
        raise ValueError("max_iter must be non-negative")

    A = copy_matrix(matrix)
    b = copy_vector(vector)
    x = [0.0] * n
    errors: List[float] = []
    recorder = StepRecorder()

    recorder.record(A, b, "Initial Guess: All zeros", x_current=x, error_history=errors)

    for iteration in range(1, max_iter + 1):
        x_new = sweep(A, b, x)
        error = distance(x_new, x)
        errors.append(error)
        recorder.record(
            A,
            b,
            f"Iteration {iteration}: Error = {error:.2e}",
            x_current=x_new,
            error_history=errors,
        )
        x = x_new
        if error < tolerance:
            return recorder.build(x, ITERATIVE, method=method, converged=True)

    return recorder.build(x, ITERATIVE, method=method, converged=False)


def solve_jacobi(
    matrix: Sequence[Sequence[float]],
    vector: Sequence[float],
    tolerance: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITER,
) -> SolveResult:
    """Jacobi iteration from a zero initial guess.

    Stops as soon as the Euclidean distance between successive iterates drops
    below ``tolerance``; otherwise returns the last iterate with
    ``converged=False`` after ``max_iter`` sweeps.
    """

    return _iterate(matrix, vector, tolerance, max_iter, _jacobi_sweep, "jacobi")


def solve_gauss_seidel(
    matrix: Sequence[Sequence[float]],
    vector: Sequence[float],
    tolerance: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITER,
) -> SolveResult:
    """Gauss-Seidel iteration: Jacobi with in-place use of freshly updated components."""

    return _iterate(matrix, vector, tolerance, max_iter, _gauss_seidel_sweep, "seidel")


__all__ = [
    "DEFAULT_TOLERANCE",
    "DEFAULT_MAX_ITER",
    "solve_jacobi",
    "solve_gauss_seidel",
]
