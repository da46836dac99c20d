"""simulate.py argument handling (no physics)."""
import json

import pytest

from simulate import build_parser, load_parameters


def test_load_parameters_list(tmp_path):
    path = tmp_path / "genes.json"
    path.write_text(json.dumps([0.1, 0.2, 0.3]))
    assert load_parameters(path) == [0.1, 0.2, 0.3]


def test_load_parameters_object(tmp_path):
    path = tmp_path / "genes.json"
    path.write_text(json.dumps({"parameters": [1, 0.5], "fitness": -0.2}))
    assert load_parameters(path) == [1.0, 0.5]


def test_load_parameters_rejects_other_shapes(tmp_path):
    path = tmp_path / "genes.json"
    path.write_text(json.dumps({"genes": [1, 2]}))
    with pytest.raises(ValueError):
        load_parameters(path)


def test_parser_requires_a_source():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
    args = build_parser().parse_args(["--random", "--seed", "4", "--step-limit", "2"])
    assert args.random and args.seed == 4 and args.step_limit == 2.0


def test_bad_obstacle_count_exits_with_1(tmp_path):
    from simulate import main

    assert main(["--random", "--obstacles", "-1", "--urdf", str(tmp_path / "body.urdf")]) == 1


def test_bad_env_value_exits_with_1(monkeypatch, tmp_path):
    from simulate import main

    monkeypatch.setenv("OBSTACLE_COUNT", "lots")
    assert main(["--random", "--urdf", str(tmp_path / "body.urdf")]) == 1
