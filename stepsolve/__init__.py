"""Traced direct and iterative solvers for small dense linear systems."""

from .linalg import LinearSystemError
from .trace import Highlights, Step, StepRecorder, SolveResult
from .direct import solve_gauss_elimination, solve_gauss_elimination_with_pivoting, solve_gauss_jordan
from .iterative import solve_jacobi, solve_gauss_seidel
from .methods import METHODS, normalize_method, solve
from .comparison import Metric, RankedMetric, ComparisonResult, compare_all_methods, get_ranking
from .config import SystemConfiguration, load_system_from_json
from .examples import default_system, identity_system, pivot_required_system

__all__ = [
    "LinearSystemError",
    "Highlights",
    "Step",
    "StepRecorder",
    "SolveResult",
    "solve_gauss_elimination",
    "solve_gauss_elimination_with_pivoting",
    "solve_gauss_jordan",
    "solve_jacobi",
    "solve_gauss_seidel",
    "METHODS",
    "normalize_method",
    "solve",
    "Metric",
    "RankedMetric",
    "ComparisonResult",
    "compare_all_methods",
    "get_ranking",
    "SystemConfiguration",
    "load_system_from_json",
    "default_system",
    "identity_system",
    "pivot_required_system",
]
