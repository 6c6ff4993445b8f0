"""Direct elimination solvers with a full step trace.

All three methods share the same skeleton: pick a pivot in column ``k``,
eliminate the entries of that column with row operations, then read off the
solution.  They differ in how the pivot row is chosen (diagonal entry vs.
largest magnitude) and in whether elimination is one-sided (upper triangular
form followed by back substitution) or two-sided (reduced row echelon form).

Zero pivots are not guarded.  Divisions use :func:`ieee_divide`, so a
singular system yields ``inf``/``nan`` entries in the trace and solution
rather than an exception.
"""
from __future__ import annotations

from typing import List, Sequence

from .linalg import Matrix, Vector, copy_matrix, copy_vector, ieee_divide, validate_system
from .trace import DIRECT, Highlights, SolveResult, StepRecorder


def _find_pivot_row(A: Matrix, k: int) -> int:
    """Row index at or below ``k`` with the largest ``|A[i][k]|``; earliest row wins ties."""
    pivot_row = k
    for i in range(k + 1, len(A)):
        if abs(A[i][k]) > abs(A[pivot_row][k]):
            pivot_row = i
    return pivot_row


def _swap_rows(A: Matrix, b: Vector, k: int, other: int) -> None:
    A[k], A[other] = A[other], A[k]
    b[k], b[other] = b[other], b[k]


def _eliminate(A: Matrix, b: Vector, i: int, k: int, factor: float) -> None:
    """Apply ``R_i <- R_i - factor * R_k`` from column ``k`` onwards."""
    for j in range(k, len(A)):
        A[i][j] = A[i][j] - factor * A[k][j]
    b[i] = b[i] - factor * b[k]


def _record_elimination(recorder: StepRecorder, A: Matrix, b: Vector, i: int, k: int, factor: float) -> None:
    recorder.record(
        A,
        b,
        f"Eliminating Row {i}: R{i} = R{i} - ({factor:.2f}) * R{k}",
        Highlights.of(rows=(i, k), cells=[(i, k)]),
    )


def _forward_elimination(A: Matrix, b: Vector, recorder: StepRecorder, pivoting: bool) -> None:
    n = len(A)
    for k in range(n):
        if pivoting:
            pivot_row = _find_pivot_row(A, k)
            if pivot_row != k:
                _swap_rows(A, b, k, pivot_row)
                recorder.record(
                    A,
                    b,
                    f"[PIVOTING] Swap Row {k} ↔ Row {pivot_row} (found larger pivot: {A[k][k]:.2f})",
                    Highlights.of(rows=(k, pivot_row)),
                )
            description = (
                f"[PIVOTING] Step {k + 1}: Selected pivot A[{k}][{k}] = {A[k][k]:.2f} (largest in column)"
            )
        else:
            description = (
                f"[NO PIVOTING] Step {k + 1}: Use diagonal element A[{k}][{k}] = {A[k][k]:.2f} "
                "as pivot (no row search)"
            )
        recorder.record(A, b, description, Highlights.of(cells=[(k, k)]))

        for i in range(k + 1, n):
            factor = ieee_divide(A[i][k], A[k][k])
            _record_elimination(recorder, A, b, i, k, factor)
            _eliminate(A, b, i, k, factor)


def _back_substitution(A: Matrix, b: Vector, recorder: StepRecorder) -> Vector:
    n = len(A)
    x = [0.0] * n
    recorder.record(A, b, "Forward elimination complete. Starting Back Substitution.")

    for i in range(n - 1, -1, -1):
        partial = 0.0
        for j in range(i + 1, n):
            partial += A[i][j] * x[j]
        x[i] = ieee_divide(b[i] - partial, A[i][i])
        recorder.record(
            A,
            b,
            f"Solving x[{i}]: ({b[i]:.2f} - {partial:.2f}) / {A[i][i]:.2f} = {x[i]:.4f}",
            Highlights.of(rows=(i,)),
        )
    return x


def _triangular_solve(
    matrix: Sequence[Sequence[float]],
    vector: Sequence[float],
    *,
    pivoting: bool,
    method: str,
    title: str,
) -> SolveResult:
    validate_system(matrix, vector)
    A = copy_matrix(matrix)
    b = copy_vector(vector)
    recorder = StepRecorder()

    recorder.record(A, b, title)
    _forward_elimination(A, b, recorder, pivoting=pivoting)
    x = _back_substitution(A, b, recorder)
    return recorder.build(x, DIRECT, method=method)


def solve_gauss_elimination(matrix: Sequence[Sequence[float]], vector: Sequence[float]) -> SolveResult:
    """Gauss elimination using the diagonal entries as pivots, then back substitution."""

    return _triangular_solve(
        matrix,
        vector,
        pivoting=False,
        method="gauss",
        title="Gauss Elimination (NO PIVOTING) - Forward elimination without row swaps",
    )


def solve_gauss_elimination_with_pivoting(
    matrix: Sequence[Sequence[float]], vector: Sequence[float]
) -> SolveResult:
    """Gauss elimination with partial pivoting.

    Before column ``k`` is eliminated the row with the largest magnitude entry
    in that column (at or below ``k``) is swapped into the pivot position.  A
    column that is entirely zero from ``k`` down still produces a zero pivot.
    """

    return _triangular_solve(
        matrix,
        vector,
        pivoting=True,
        method="pivoting",
        title="Gauss Elimination with PARTIAL PIVOTING - Search for largest pivot to improve stability",
    )


def solve_gauss_jordan(matrix: Sequence[Sequence[float]], vector: Sequence[float]) -> SolveResult:
    """Gauss-Jordan elimination to reduced row echelon form.

    Each pivot row is normalised to a leading 1 and the pivot column is then
    cleared both above and below, so the solution is the transformed
    right-hand side and no back substitution is needed.
    """

    n = validate_system(matrix, vector)
    A = copy_matrix(matrix)
    b = copy_vector(vector)
    recorder = StepRecorder()

    for k in range(n):
        pivot_row = _find_pivot_row(A, k)
        if pivot_row != k:
            _swap_rows(A, b, k, pivot_row)
            recorder.record(
                A,
                b,
                f"Pivoting: Swap Row {k} with Row {pivot_row}",
                Highlights.of(rows=(k, pivot_row)),
            )

        recorder.record(
            A,
            b,
            f"Step {k + 1}: Select pivot A[{k}][{k}] = {A[k][k]:.2f}",
            Highlights.of(cells=[(k, k)]),
        )

        pivot_value = A[k][k]
        for j in range(k, n):
            A[k][j] = ieee_divide(A[k][j], pivot_value)
        b[k] = ieee_divide(b[k], pivot_value)
        recorder.record(
            A,
            b,
            f"Normalize Row {k}: Divide by {pivot_value:.2f}",
            Highlights.of(rows=(k,)),
        )

        for i in range(n):
            if i == k:
                continue
            factor = A[i][k]
            _record_elimination(recorder, A, b, i, k, factor)
            _eliminate(A, b, i, k, factor)

    x: List[float] = list(b)
    recorder.record(
        A,
        b,
        "Gauss-Jordan elimination complete. Matrix is in reduced row echelon form (RREF).",
    )
    return recorder.build(x, DIRECT, method="gaussJordan")


__all__ = [
    "solve_gauss_elimination",
    "solve_gauss_elimination_with_pivoting",
    "solve_gauss_jordan",
]
