"""
Method Comparator.

Runs every solver on the same system, derives a metrics record per method,
picks a recommended method and ranks all of them for display.

Two scores are used on purpose:
- the recommendation score ignores the efficiency baseline
  (``1000/(steps+1)`` for direct methods, ``500/(steps+1)`` for converged
  iterative methods);
- the ranking score multiplies the same ratio by the efficiency baseline.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .linalg import copy_vector, residual_norm, validate_system
from .methods import DIRECT_METHODS, ITERATIVE_METHODS, METHODS
from .trace import DIRECT, SolveResult


@dataclass
class Metric:
    """
    Comparison record for a single method.

    Attributes:
        key: Method identifier (e.g., 'gauss', 'seidel')
        name: Display name
        type: 'direct' or 'iterative'
        steps: Number of recorded trace steps
        solution: Solution vector returned by the method
        converged: Convergence flag (None for direct methods)
        time_complexity: Fixed complexity label
        efficiency: Baseline efficiency in [0, 1]
        advantage: Short selling point of the method
        description: One-line description of the method
        residual: ||A x - b|| of the returned solution (informational only)
    """
    key: str
    name: str
    type: str
    steps: int
    solution: List[float] = field(default_factory=list)
    converged: Optional[bool] = None
    time_complexity: str = ""
    efficiency: float = 0.0
    advantage: Optional[str] = None
    description: Optional[str] = None
    residual: float = 0.0

    @property
    def is_direct(self) -> bool:
        return self.type == DIRECT

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "key": self.key,
            "name": self.name,
            "type": self.type,
            "steps": self.steps,
            "solution": list(self.solution),
            "timeComplexity": self.time_complexity,
            "efficiency": self.efficiency,
            "residual": self.residual,
        }
        if self.converged is not None:
            data["converged"] = self.converged
        if self.advantage is not None:
            data["advantage"] = self.advantage
        if self.description is not None:
            data["description"] = self.description
        return data


@dataclass
class RankedMetric:
    """A metric paired with its display score."""
    metric: Metric
    score: float

    @property
    def key(self) -> str:
        return self.metric.key

    @property
    def name(self) -> str:
        return self.metric.name


@dataclass
class ComparisonResult:
    """
    Outcome of running every method on one system.

    Attributes:
        best_method: Key of the recommended method
        reason: Canned recommendation sentence for the best method
        all_metrics: Dict mapping method key to Metric
        results: Dict mapping method key to the full SolveResult
    """
    best_method: Optional[str]
    reason: str
    all_metrics: Dict[str, Metric] = field(default_factory=dict)
    results: Dict[str, SolveResult] = field(default_factory=dict)

    @property
    def best_metric(self) -> Optional[Metric]:
        if self.best_method is None:
            return None
        return self.all_metrics[self.best_method]

    def ranking(self) -> List[RankedMetric]:
        return get_ranking(self.all_metrics)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bestMethod": self.best_method,
            "reason": self.reason,
            "allMetrics": {key: metric.as_dict() for key, metric in self.all_metrics.items()},
            "results": {key: result.to_dict() for key, result in self.results.items()},
        }


# =============================================================================
# Scoring Policy
# =============================================================================

DIRECT_COMPLEXITY = "O(n³)"
ITERATIVE_COMPLEXITY = "O(n²) per iteration"

# Static baselines keyed by method, not measured.  Iterative methods fall back
# to an efficiency of 0.0 when they do not converge.
METHOD_PROFILES: Dict[str, Dict[str, Any]] = {
    "gauss": {
        "name": "Gauss Elimination",
        "time_complexity": DIRECT_COMPLEXITY,
        "efficiency": 1.0,
        "advantage": None,
        "description": "Basic elimination without pivoting",
    },
    "pivoting": {
        "name": "Gauss with Pivoting",
        "time_complexity": DIRECT_COMPLEXITY,
        "efficiency": 0.95,
        "advantage": "Better numerical stability",
        "description": "Elimination with row pivoting for improved stability",
    },
    "gaussJordan": {
        "name": "Gauss-Jordan",
        "time_complexity": DIRECT_COMPLEXITY,
        "efficiency": 0.85,
        "advantage": "Finds RREF, useful for matrix inverse",
        "description": "Complete elimination to reduced row echelon form",
    },
    "jacobi": {
        "name": "Jacobi Iteration",
        "time_complexity": ITERATIVE_COMPLEXITY,
        "efficiency": 0.7,
        "advantage": "Easy parallelization",
        "description": "Iterative method using Jacobi approach",
    },
    "seidel": {
        "name": "Gauss-Seidel",
        "time_complexity": ITERATIVE_COMPLEXITY,
        "efficiency": 0.8,
        "advantage": "Faster convergence than Jacobi",
        "description": "Iterative method with improved convergence",
    },
}

DIRECT_WEIGHT = 1000.0
ITERATIVE_WEIGHT = 500.0

DIRECT_REASONS = {
    "gauss": "✓ Best for well-conditioned systems. Simple and fastest.",
    "pivoting": "✓ RECOMMENDED! Better stability with minimal overhead.",
    "gaussJordan": "✓ Good for finding inverse or RREF. More operations required.",
}
NO_METHOD_REASON = "Unable to determine best method."
NOT_CONVERGED_REASON = "✗ Did not converge. Try direct methods or check diagonal dominance."


def recommendation_score(metric: Metric) -> float:
    """Score used to pick the best method (efficiency is not applied)."""
    if metric.is_direct:
        return DIRECT_WEIGHT / (metric.steps + 1)
    if metric.converged:
        return ITERATIVE_WEIGHT / (metric.steps + 1)
    return 0.0


def display_score(metric: Metric) -> float:
    """Score used by :func:`get_ranking` (efficiency-weighted)."""
    if metric.is_direct:
        return metric.efficiency * (DIRECT_WEIGHT / (metric.steps + 1))
    if metric.converged:
        return metric.efficiency * (ITERATIVE_WEIGHT / (metric.steps + 1))
    return 0.0


# =============================================================================
# Comparison Functions
# =============================================================================

def build_metric(
    key: str,
    result: SolveResult,
    matrix: Optional[Sequence[Sequence[float]]] = None,
    vector: Optional[Sequence[float]] = None,
) -> Metric:
    """
    Build the metrics record for one method's result.

    Args:
        key: Method identifier
        result: The method's SolveResult
        matrix: Original system matrix (for the residual, optional)
        vector: Original right-hand side (for the residual, optional)

    Returns:
        Metric populated from the static profile and the result
    """
    profile = METHOD_PROFILES[key]
    info = METHODS[key]
    efficiency = float(profile["efficiency"])
    converged = None
    if info.is_iterative:
        converged = bool(result.converged)
        if not converged:
            efficiency = 0.0

    residual = 0.0
    if matrix is not None and vector is not None:
        residual = residual_norm(matrix, vector, result.solution)

    return Metric(
        key=key,
        name=profile["name"],
        type=info.type,
        steps=len(result.steps),
        solution=copy_vector(result.solution),
        converged=converged,
        time_complexity=profile["time_complexity"],
        efficiency=efficiency,
        advantage=profile["advantage"],
        description=profile["description"],
        residual=residual,
    )


def select_best_method(metrics: Mapping[str, Metric]) -> Optional[str]:
    """
    Pick the recommended method.

    Direct methods are scanned first, then iterative ones.  A method only
    replaces the current best when its score is strictly higher, so ties keep
    the earlier method.
    """
    best_method: Optional[str] = None
    best_score = -1.0
    for key in DIRECT_METHODS + ITERATIVE_METHODS:
        if key not in metrics:
            continue
        score = recommendation_score(metrics[key])
        if score > best_score:
            best_score = score
            best_method = key
    return best_method


def get_reason(method_key: Optional[str], metrics: Mapping[str, Metric]) -> str:
    """Return the canned recommendation sentence for ``method_key``."""
    if not method_key:
        return NO_METHOD_REASON

    metric = metrics[method_key]
    if metric.is_direct:
        return DIRECT_REASONS.get(method_key, NO_METHOD_REASON)
    if not metric.converged:
        return NOT_CONVERGED_REASON
    if method_key == "seidel":
        return f"✓ RECOMMENDED for iterative! Converged in {metric.steps} steps. Faster convergence."
    return f"✓ Converged in {metric.steps} steps. Good for sparse systems."


def compare_all_methods(
    matrix: Sequence[Sequence[float]],
    vector: Sequence[float],
) -> ComparisonResult:
    """
    Run all five methods on ``(matrix, vector)`` and compare them.

    Iterative methods use their default tolerance and iteration cap.

    Returns:
        ComparisonResult with the recommendation, metrics and raw results
    """
    validate_system(matrix, vector)

    results: Dict[str, SolveResult] = {}
    for key, info in METHODS.items():
        results[key] = info.solver(matrix, vector)

    metrics = {key: build_metric(key, result, matrix, vector) for key, result in results.items()}
    best_method = select_best_method(metrics)

    return ComparisonResult(
        best_method=best_method,
        reason=get_reason(best_method, metrics),
        all_metrics=metrics,
        results=results,
    )


def get_ranking(metrics: Mapping[str, Metric]) -> List[RankedMetric]:
    """
    Rank methods by display score, highest first.

    The sort is stable, so methods with equal scores keep the order of
    ``metrics``.
    """
    ranked = [RankedMetric(metric=metric, score=display_score(metric)) for metric in metrics.values()]
    return sorted(ranked, key=lambda item: item.score, reverse=True)


__all__ = [
    "Metric",
    "RankedMetric",
    "ComparisonResult",
    "METHOD_PROFILES",
    "DIRECT_COMPLEXITY",
    "ITERATIVE_COMPLEXITY",
    "recommendation_score",
    "display_score",
    "build_metric",
    "select_best_method",
    "get_reason",
    "compare_all_methods",
    "get_ranking",
]
