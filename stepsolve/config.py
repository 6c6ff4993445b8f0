"""Serialization helpers for linear system definitions."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Dict, List, Optional, Union

from .iterative import DEFAULT_MAX_ITER, DEFAULT_TOLERANCE
from .linalg import validate_system
from .methods import normalize_method

_DEFAULT_METHOD = "gauss"
_JSONSource = Union[str, Path, IO[str]]


def _to_float(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


def _to_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValueError(f"{name} must be an integer, got {value!r}")


def _to_float_list(values: Any, name: str = "vector") -> List[float]:
    if not isinstance(values, (list, tuple)):
        raise ValueError(f"{name} must be an array of numbers")
    return [_to_float(value, f"{name}[{index}]") for index, value in enumerate(values)]


def _to_float_matrix(rows: Any) -> List[List[float]]:
    if not isinstance(rows, (list, tuple)):
        raise ValueError("matrix must be an array of rows")
    matrix: List[List[float]] = []
    for index, row in enumerate(rows):
        if not isinstance(row, (list, tuple)):
            raise ValueError("Matrix rows must be arrays of numbers")
        matrix.append(_to_float_list(row, f"matrix[{index}]"))
    return matrix


def _method_from_data(value: Any) -> str:
    """Return a canonical method key, falling back to Gauss elimination.

    Hand-edited files may leave the method out or use an alias such as
    ``gauss-jordan``; anything that is not a string is treated as
    missing.
    """

    if value is None or not isinstance(value, str) or not value.strip():
        return _DEFAULT_METHOD
    return normalize_method(value)


@dataclass
class SystemConfiguration:
    """Container for a system ``A x = b`` and the solve settings to use."""

    matrix: List[List[float]]
    vector: List[float]
    label: str = ""
    description: str = ""
    method: str = _DEFAULT_METHOD
    tolerance: float = DEFAULT_TOLERANCE
    max_iter: int = DEFAULT_MAX_ITER

    def __post_init__(self) -> None:
        self.matrix = _to_float_matrix(self.matrix)
        self.vector = _to_float_list(self.vector)
        validate_system(self.matrix, self.vector)
        self.method = _method_from_data(self.method)
        self.tolerance = _to_float(self.tolerance, "tolerance")
        self.max_iter = _to_int(self.max_iter, "max_iter")
        if not self.tolerance >= 0:
            raise ValueError("Tolerance must be non-negative")
        if self.max_iter < 0:
            raise ValueError("max_iter must be non-negative")

    @property
    def size(self) -> int:
        return len(self.vector)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representing the system."""

        return {
            "label": self.label,
            "description": self.description,
            "method": self.method,
            "tolerance": self.tolerance,
            "max_iter": self.max_iter,
            "matrix": [list(row) for row in self.matrix],
            "vector": list(self.vector),
        }

    def to_json(self, *, indent: Optional[int] = 2) -> str:
        """Serialize the system to a JSON string."""

        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SystemConfiguration":
        """Create a configuration from a dictionary."""

        if "matrix" not in data or "vector" not in data:
            raise ValueError("System configuration requires 'matrix' and 'vector'")
        return cls(
            matrix=data["matrix"],
            vector=data["vector"],
            label=str(data.get("label", "")),
            description=str(data.get("description", "")),
            method=_method_from_data(data.get("method")),
            tolerance=data.get("tolerance", DEFAULT_TOLERANCE),
            max_iter=data.get("max_iter", DEFAULT_MAX_ITER),
        )

    @classmethod
    def from_json(cls, source: _JSONSource) -> "SystemConfiguration":
        """Load a configuration from a JSON file path or file-like object."""

        if hasattr(source, "read"):
            data = json.load(source)  # type: ignore[arg-type]
        else:
            path = Path(source)
            with path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        if not isinstance(data, dict):
            raise ValueError("System configuration JSON must contain an object at the top level")
        return cls.from_dict(data)

    def save(self, target: Union[str, Path, IO[str]], *, indent: Optional[int] = 2) -> None:
        """Write the configuration to disk or a file-like object."""

        payload = self.to_json(indent=indent)
        if hasattr(target, "write"):
            target.write(payload)  # type: ignore[arg-type]
        else:
            path = Path(target)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(payload, encoding="utf-8")


def load_system_from_json(source: _JSONSource) -> SystemConfiguration:
    return SystemConfiguration.from_json(source)


__all__ = [
    "SystemConfiguration",
    "load_system_from_json",
]
