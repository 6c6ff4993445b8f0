import io
import json

import pytest

from stepsolve.config import SystemConfiguration, load_system_from_json
from stepsolve.examples import EXAMPLES, default_system, identity_system, load_example, pivot_required_system
from stepsolve.methods import METHODS, normalize_method, solve


def test_configuration_json_roundtrip(tmp_path):
    config = SystemConfiguration(
        matrix=[[2, 1], [1, 3]],
        vector=[3, 5],
        label="Small",
        method="gauss-seidel",
        tolerance=1e-6,
        max_iter=25,
    )
    path = tmp_path / "system.json"
    config.save(path)

    loaded = load_system_from_json(path)

    assert loaded == config
    assert loaded.matrix == [[2.0, 1.0], [1.0, 3.0]]
    assert loaded.method == "seidel"
    assert loaded.max_iter == 25


def test_configuration_from_file_like_object():
    payload = json.dumps({"matrix": [[1, 0], [0, 1]], "vector": [4, 5], "method": "Gauss Jordan"})

    config = SystemConfiguration.from_json(io.StringIO(payload))

    assert config.method == "gaussJordan"
    assert config.tolerance == 0.001
    assert config.max_iter == 50


def test_save_to_file_like_object():
    buffer = io.StringIO()
    default_system().save(buffer)

    data = json.loads(buffer.getvalue())
    assert data["vector"] == [1.0, 2.0, 0.0]
    assert data["method"] == "gauss"


def test_missing_method_defaults_to_gauss():
    config = SystemConfiguration.from_dict({"matrix": [[1.0]], "vector": [1.0], "method": None})
    assert config.method == "gauss"


def test_invalid_configurations():
    with pytest.raises(ValueError, match="requires"):
        SystemConfiguration.from_dict({"matrix": [[1.0]]})
    with pytest.raises(ValueError, match="square"):
        SystemConfiguration(matrix=[[1.0, 2.0]], vector=[1.0])
    with pytest.raises(ValueError, match="Unknown method"):
        SystemConfiguration(matrix=[[1.0]], vector=[1.0], method="cholesky")
    with pytest.raises(ValueError):
        SystemConfiguration.from_json(io.StringIO("[1, 2, 3]"))
    with pytest.raises(ValueError):
        SystemConfiguration(matrix=[[1.0]], vector=[1.0], max_iter=-1)


@pytest.mark.parametrize(
    "alias, key",
    [
        ("gauss", "gauss"),
        ("pivoting", "pivoting"),
        ("gauss-jordan", "gaussJordan"),
        ("gaussJordan", "gaussJordan"),
        ("jacobi", "jacobi"),
        ("seidel", "seidel"),
        ("Gauss-Seidel", "seidel"),
    ],
)
def test_method_aliases(alias, key):
    assert normalize_method(alias) == key


def test_solve_dispatch_passes_iteration_settings():
    config = default_system()

    capped = solve("jacobi", config.matrix, config.vector, max_iter=2)
    direct = solve("gauss-jordan", config.matrix, config.vector, tolerance=1.0)

    assert capped.iterations == 2
    assert capped.converged is False
    assert direct.method == "gaussJordan"
    assert [info.type for info in METHODS.values()] == ["direct"] * 3 + ["iterative"] * 2


def test_examples():
    assert set(EXAMPLES) == {"default", "pivot", "identity2", "identity3", "identity4"}
    assert pivot_required_system().method == "pivoting"
    assert identity_system(4).matrix[3] == [0.0, 0.0, 0.0, 1.0]
    assert load_example("identity2").vector == [0.0, 0.0]
    with pytest.raises(ValueError):
        identity_system(5)
    with pytest.raises(ValueError):
        load_example("missing")


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"matrix": [[1.0]], "vector": [None]}, "vector"),
        ({"matrix": [[1.0]], "vector": [1.0], "max_iter": None}, "max_iter"),
        ({"matrix": 5, "vector": [1.0]}, "matrix"),
        ({"matrix": [[1.0]], "vector": "1"}, "vector"),
        ({"matrix": [[1.0, "x"], [0.0, 1.0]], "vector": [1.0, 1.0]}, r"matrix\[0\]"),
        ({"matrix": [[1.0]], "vector": [1.0], "tolerance": "tight"}, "tolerance"),
    ],
)
def test_malformed_values_raise_value_error(payload, message):
    with pytest.raises(ValueError, match=message):
        SystemConfiguration.from_dict(payload)


def test_iteration_settings_are_checked():
    with pytest.raises(ValueError, match="non-negative"):
        SystemConfiguration(matrix=[[1.0]], vector=[1.0], tolerance=float("nan"))
    with pytest.raises(ValueError, match="integer"):
        SystemConfiguration.from_dict({"matrix": [[1.0]], "vector": [1.0], "max_iter": 2.7})
    with pytest.raises(ValueError, match="integer"):
        SystemConfiguration.from_dict({"matrix": [[1.0]], "vector": [1.0], "max_iter": True})

    config = SystemConfiguration.from_dict({"matrix": [[1.0]], "vector": [1.0], "max_iter": 3.0})
    assert config.max_iter == 3
    assert isinstance(config.max_iter, int)


def test_save_creates_parent_directories(tmp_path):
    target = tmp_path / "nested" / "dir" / "system.json"

    default_system().save(target)

    assert load_system_from_json(target) == default_system()
