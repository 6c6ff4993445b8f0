"""Step traces recorded by the solvers.

Every solver owns a :class:`StepRecorder` for the duration of one call.  Each
call to :meth:`StepRecorder.record` copies the working matrix/vector (and the
iterate and error history for iterative methods), so a recorded step never
shares lists with the algorithm's live state or with any other step.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .linalg import Matrix, Vector, copy_matrix, copy_vector, is_finite_vector

Cell = Tuple[int, int]

DIRECT = "direct"
ITERATIVE = "iterative"


@dataclass(frozen=True)
class Highlights:
    """Rows, columns and cells that are active in a step (rendering hint only)."""

    rows: Tuple[int, ...] = ()
    cols: Tuple[int, ...] = ()
    cells: Tuple[Cell, ...] = ()

    @classmethod
    def of(
        cls,
        rows: Iterable[int] = (),
        cols: Iterable[int] = (),
        cells: Iterable[Cell] = (),
    ) -> "Highlights":
        return cls(
            rows=tuple(rows),
            cols=tuple(cols),
            cells=tuple((int(r), int(c)) for r, c in cells),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.rows or self.cols or self.cells)

    def as_dict(self) -> Dict[str, List[Any]]:
        data: Dict[str, List[Any]] = {}
        if self.rows:
            data["rows"] = list(self.rows)
        if self.cols:
            data["cols"] = list(self.cols)
        if self.cells:
            data["cells"] = [list(cell) for cell in self.cells]
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Highlights":
        data = data or {}
        return cls.of(
            rows=data.get("rows", ()),
            cols=data.get("cols", ()),
            cells=data.get("cells", ()),
        )


NO_HIGHLIGHTS = Highlights()


@dataclass(frozen=True)
class Step:
    matrix: Matrix
    vector: Vector
    description: str
    highlights: Highlights = NO_HIGHLIGHTS
    x_current: Optional[Vector] = None
    error_history: Optional[List[float]] = None

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "matrix": copy_matrix(self.matrix),
            "vector": copy_vector(self.vector),
            "description": self.description,
            "highlights": self.highlights.as_dict(),
        }
        if self.x_current is not None:
            data["xCurrent"] = copy_vector(self.x_current)
        if self.error_history is not None:
            data["errorHistory"] = list(self.error_history)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Step":
        x_current = data.get("xCurrent")
        error_history = data.get("errorHistory")
        return cls(
            matrix=copy_matrix(data.get("matrix", [])),
            vector=copy_vector(data.get("vector", [])),
            description=str(data.get("description", "")),
            highlights=Highlights.from_dict(data.get("highlights")),
            x_current=copy_vector(x_current) if x_current is not None else None,
            error_history=[float(e) for e in error_history] if error_history is not None else None,
        )


class StepRecorder:
    """Accumulates an ordered list of snapshot steps for one solve."""

    def __init__(self) -> None:
        self._steps: List[Step] = []

    def __len__(self) -> int:
        return len(self._steps)

    def record(
        self,
        matrix: Sequence[Sequence[float]],
        vector: Sequence[float],
        description: str,
        highlights: Highlights = NO_HIGHLIGHTS,
        *,
        x_current: Optional[Sequence[float]] = None,
        error_history: Optional[Sequence[float]] = None,
    ) -> Step:
        step = Step(
            matrix=copy_matrix(matrix),
            vector=copy_vector(vector),
            description=description,
            highlights=highlights,
            x_current=copy_vector(x_current) if x_current is not None else None,
            error_history=list(error_history) if error_history is not None else None,
        )
        self._steps.append(step)
        return step

    def build(
        self,
        solution: Sequence[float],
        kind: str,
        *,
        method: str = "",
        converged: Optional[bool] = None,
    ) -> "SolveResult":
        """Hand the accumulated steps over to a :class:`SolveResult`.

        The recorder is emptied so a later ``record`` cannot reach into a
        result that has already been returned.
        """

        if not self._steps:
            raise ValueError("Cannot build a result without any recorded steps")
        steps, self._steps = self._steps, []
        return SolveResult(
            steps=steps,
            solution=copy_vector(solution),
            type=kind,
            converged=converged,
            method=method,
        )


@dataclass
class SolveResult:
    """Outcome of one traced solve."""

    steps: List[Step]
    solution: Vector
    type: str
    converged: Optional[bool] = None
    method: str = ""

    @property
    def is_iterative(self) -> bool:
        return self.type == ITERATIVE

    @property
    def iterations(self) -> int:
        """Number of iterations executed (always ``0`` for direct methods)."""
        if not self.is_iterative:
            return 0
        history = self.steps[-1].error_history
        return len(history) if history else 0

    @property
    def final_step(self) -> Step:
        return self.steps[-1]

    @property
    def is_finite(self) -> bool:
        return is_finite_vector(self.solution)

    def step_at(self, index: int) -> Step:
        """Return the step at ``index`` clamped to the valid range."""
        return self.steps[max(0, min(index, len(self.steps) - 1))]

    def format_solution(self, decimals: int = 4) -> str:
        return ", ".join(f"x{i + 1} = {value:.{decimals}f}" for i, value in enumerate(self.solution))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "steps": [step.as_dict() for step in self.steps],
            "solution": copy_vector(self.solution),
            "type": self.type,
        }
        if self.converged is not None:
            data["converged"] = self.converged
        if self.method:
            data["method"] = self.method
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SolveResult":
        converged = data.get("converged")
        return cls(
            steps=[Step.from_dict(item) for item in data.get("steps", [])],
            solution=copy_vector(data.get("solution", [])),
            type=str(data.get("type", DIRECT)),
            converged=bool(converged) if converged is not None else None,
            method=str(data.get("method", "")),
        )


__all__ = [
    "Cell",
    "DIRECT",
    "ITERATIVE",
    "Highlights",
    "NO_HIGHLIGHTS",
    "Step",
    "StepRecorder",
    "SolveResult",
]
