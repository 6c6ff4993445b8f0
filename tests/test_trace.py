import math

import pytest

from stepsolve.trace import Highlights, SolveResult, Step, StepRecorder
from stepsolve.direct import solve_gauss_elimination_with_pivoting
from stepsolve.iterative import solve_gauss_seidel


def test_recorder_copies_on_record():
    matrix = [[1.0, 2.0], [3.0, 4.0]]
    vector = [5.0, 6.0]
    recorder = StepRecorder()

    step = recorder.record(matrix, vector, "start")
    matrix[0][0] = -1.0
    vector[1] = -1.0

    assert step.matrix == [[1.0, 2.0], [3.0, 4.0]]
    assert step.vector == [5.0, 6.0]
    assert len(recorder) == 1


def test_build_hands_over_steps_and_resets_recorder():
    recorder = StepRecorder()
    recorder.record([[1.0]], [2.0], "only step")

    result = recorder.build([2.0], "direct", method="gauss")

    assert len(result.steps) == 1
    assert result.method == "gauss"
    assert len(recorder) == 0


def test_build_requires_at_least_one_step():
    with pytest.raises(ValueError):
        StepRecorder().build([1.0], "direct")


def test_highlights_roundtrip_and_emptiness():
    highlights = Highlights.of(rows=[1, 0], cells=[[1, 0]])

    assert highlights.as_dict() == {"rows": [1, 0], "cells": [[1, 0]]}
    assert Highlights.from_dict(highlights.as_dict()) == highlights
    assert Highlights.from_dict(None).is_empty
    assert Highlights().as_dict() == {}


def test_step_is_frozen():
    step = Step(matrix=[[1.0]], vector=[1.0], description="x")
    with pytest.raises(AttributeError):
        step.description = "changed"


def test_solve_result_to_dict_uses_camel_case_field_names():
    result = solve_gauss_seidel([[4.0, 1.0], [1.0, 3.0]], [1.0, 2.0])
    data = result.to_dict()

    assert data["type"] == "iterative"
    assert data["converged"] is True
    assert data["method"] == "seidel"
    assert "xCurrent" in data["steps"][1]
    assert len(data["steps"][-1]["errorHistory"]) == result.iterations

    restored = SolveResult.from_dict(data)
    assert restored.solution == result.solution
    assert restored.iterations == result.iterations
    assert restored.steps[1].x_current == result.steps[1].x_current


def test_direct_result_dict_has_no_iterative_fields():
    result = solve_gauss_elimination_with_pivoting([[0.0, 1.0], [1.0, 0.0]], [1.0, 2.0])
    data = result.to_dict()

    assert "converged" not in data
    assert "xCurrent" not in data["steps"][0]
    assert data["steps"][1]["highlights"] == {"rows": [0, 1]}
    assert result.iterations == 0


def test_step_at_clamps_index():
    result = solve_gauss_elimination_with_pivoting([[2.0, 0.0], [0.0, 4.0]], [2.0, 4.0])

    assert result.step_at(-5) is result.steps[0]
    assert result.step_at(1000) is result.steps[-1]
    assert result.step_at(1) is result.steps[1]


def test_format_solution():
    result = SolveResult(
        steps=[Step(matrix=[[1.0]], vector=[1.0], description="")],
        solution=[2.0, 1.0],
        type="direct",
    )
    assert result.format_solution() == "x1 = 2.0000, x2 = 1.0000"
    assert result.is_finite

    result.solution[0] = math.nan
    assert not result.is_finite
