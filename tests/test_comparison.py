"""Tests for the method comparator and ranking."""
import pytest

from stepsolve.comparison import (
    METHOD_PROFILES,
    Metric,
    build_metric,
    compare_all_methods,
    display_score,
    get_ranking,
    get_reason,
    recommendation_score,
    select_best_method,
)
from stepsolve.iterative import solve_jacobi

A = [[4.0, -1.0, 0.0], [-1.0, 4.0, -1.0], [0.0, -1.0, 3.0]]
B = [1.0, 2.0, 0.0]
ALL_KEYS = ["gauss", "pivoting", "gaussJordan", "jacobi", "seidel"]


def _metric(key, kind, steps, efficiency, converged=None):
    return Metric(key=key, name=key, type=kind, steps=steps, efficiency=efficiency, converged=converged)


def test_compare_runs_every_method():
    comparison = compare_all_methods(A, B)

    assert list(comparison.results) == ALL_KEYS
    assert list(comparison.all_metrics) == ALL_KEYS
    for key, metric in comparison.all_metrics.items():
        assert metric.steps == len(comparison.results[key].steps)
        assert metric.solution == comparison.results[key].solution


def test_reference_system_metrics():
    metrics = compare_all_methods(A, B).all_metrics

    assert metrics["gauss"].steps == 11
    assert metrics["pivoting"].steps == 11
    assert metrics["gaussJordan"].steps == 13
    assert metrics["jacobi"].steps == 9
    assert metrics["seidel"].steps == 6

    assert metrics["gauss"].time_complexity == "O(n³)"
    assert metrics["seidel"].time_complexity == "O(n²) per iteration"
    assert metrics["gauss"].converged is None
    assert metrics["jacobi"].converged is True
    assert [metrics[k].efficiency for k in ALL_KEYS] == [1.0, 0.95, 0.85, 0.7, 0.8]
    assert metrics["pivoting"].advantage == "Better numerical stability"
    assert metrics["gauss"].advantage is None
    assert metrics["gauss"].residual == pytest.approx(0.0, abs=1e-12)


def test_reference_system_recommendation():
    comparison = compare_all_methods(A, B)

    # gauss and pivoting tie at 1000/12; the earlier method wins.
    assert comparison.best_method == "gauss"
    assert comparison.reason == "✓ Best for well-conditioned systems. Simple and fastest."
    assert comparison.best_metric.name == "Gauss Elimination"


def test_reference_system_ranking_order_and_scores():
    ranking = compare_all_methods(A, B).ranking()

    assert [item.key for item in ranking] == ["gauss", "pivoting", "gaussJordan", "seidel", "jacobi"]
    scores = [item.score for item in ranking]
    assert scores == sorted(scores, reverse=True)
    assert ranking[0].score == pytest.approx(1000 / 12)
    assert ranking[1].score == pytest.approx(0.95 * 1000 / 12)
    assert ranking[3].score == pytest.approx(0.8 * 500 / 7)


def test_ranking_is_a_permutation_of_input():
    comparison = compare_all_methods(A, B)
    ranking = get_ranking(comparison.all_metrics)

    assert sorted(item.key for item in ranking) == sorted(ALL_KEYS)
    assert all(item.metric is comparison.all_metrics[item.key] for item in ranking)


def test_non_converged_iterative_method_ranks_below_direct_methods():
    comparison = compare_all_methods(A, B)
    metrics = dict(comparison.all_metrics)
    metrics["jacobi"] = build_metric("jacobi", solve_jacobi(A, B, max_iter=0), A, B)

    assert metrics["jacobi"].converged is False
    assert metrics["jacobi"].efficiency == 0.0

    ranking = get_ranking(metrics)
    keys = [item.key for item in ranking]
    assert keys[-1] == "jacobi"
    assert ranking[-1].score == 0.0
    for direct in ("gauss", "pivoting", "gaussJordan"):
        assert keys.index(direct) < keys.index("jacobi")


def test_scores_use_different_formulas():
    direct = _metric("gauss", "direct", steps=9, efficiency=0.5)
    converged = _metric("seidel", "iterative", steps=4, efficiency=0.8, converged=True)
    stalled = _metric("jacobi", "iterative", steps=51, efficiency=0.0, converged=False)

    assert recommendation_score(direct) == pytest.approx(100.0)
    assert display_score(direct) == pytest.approx(50.0)
    assert recommendation_score(converged) == pytest.approx(100.0)
    assert display_score(converged) == pytest.approx(80.0)
    assert recommendation_score(stalled) == 0.0
    assert display_score(stalled) == 0.0


def test_iterative_method_can_be_recommended():
    metrics = {
        "gauss": _metric("gauss", "direct", steps=99, efficiency=1.0),
        "pivoting": _metric("pivoting", "direct", steps=99, efficiency=0.95),
        "gaussJordan": _metric("gaussJordan", "direct", steps=99, efficiency=0.85),
        "jacobi": _metric("jacobi", "iterative", steps=3, efficiency=0.7, converged=True),
        "seidel": _metric("seidel", "iterative", steps=3, efficiency=0.8, converged=True),
    }

    best = select_best_method(metrics)

    # 500/4 beats 1000/100; jacobi is checked before seidel and ties keep it.
    assert best == "jacobi"
    assert get_reason(best, metrics) == "✓ Converged in 3 steps. Good for sparse systems."
    assert get_reason("seidel", metrics) == (
        "✓ RECOMMENDED for iterative! Converged in 3 steps. Faster convergence."
    )


def test_reason_table():
    metrics = {
        "pivoting": _metric("pivoting", "direct", steps=5, efficiency=0.95),
        "gaussJordan": _metric("gaussJordan", "direct", steps=5, efficiency=0.85),
        "jacobi": _metric("jacobi", "iterative", steps=51, efficiency=0.0, converged=False),
    }

    assert get_reason(None, metrics) == "Unable to determine best method."
    assert get_reason("pivoting", metrics) == "✓ RECOMMENDED! Better stability with minimal overhead."
    assert get_reason("gaussJordan", metrics).startswith("✓ Good for finding inverse or RREF.")
    assert get_reason("jacobi", metrics).startswith("✗ Did not converge.")


def test_select_best_method_with_no_metrics():
    assert select_best_method({}) is None


def test_zero_pivot_system_comparison():
    comparison = compare_all_methods([[0.0, 1.0], [1.0, 0.0]], [1.0, 2.0])
    metrics = comparison.all_metrics

    assert not comparison.results["gauss"].is_finite
    assert comparison.results["pivoting"].solution == pytest.approx([2.0, 1.0])
    assert comparison.results["gaussJordan"].solution == pytest.approx([2.0, 1.0])
    assert metrics["jacobi"].converged is False
    assert metrics["seidel"].converged is False
    # Scoring only looks at step counts, so the shorter (broken) trace still wins.
    assert comparison.best_method == "gauss"


def test_profiles_cover_every_method():
    assert set(METHOD_PROFILES) == set(ALL_KEYS)


def test_to_dict_uses_camel_case_keys():
    data = compare_all_methods(A, B).to_dict()

    assert data["bestMethod"] == "gauss"
    assert set(data["allMetrics"]) == set(ALL_KEYS)
    assert data["allMetrics"]["seidel"]["timeComplexity"] == "O(n²) per iteration"
    assert data["results"]["jacobi"]["converged"] is True


def test_shape_mismatch_is_rejected():
    with pytest.raises(ValueError):
        compare_all_methods([[1.0, 2.0]], [1.0])
