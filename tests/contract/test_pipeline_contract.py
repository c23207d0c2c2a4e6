import json
from pathlib import Path

import pytest

from perceptron.core.errors import ConfigurationError, ResourceNotFoundError
from perceptron.core.types import StopReason
from perceptron.data.textfiles import read_vectors
from perceptron.training import pipelines


def _config(run_dir, **train):
    base = {
        "data": {"name": "and", "options": {}},
        "model": {
            "d_in": 2,
            "hidden": [2],
            "d_out": 1,
            "weights": {"mode": "randomize", "low": -1.5, "high": 1.5},
        },
        "train": {
            "lr": 0.5,
            "max_iterations": 200,
            "stopping_error": 0.0,
            "seed": 11,
            "log_every": 50,
            "run_dir": str(run_dir),
        },
    }
    base["train"].update(train)
    return base


def test_pipeline_produces_artifacts(tmp_path, capsys):
    result = pipelines.run_pipeline(_config(tmp_path / "run"))
    run_dir = Path(result.run_dir)

    assert result.summary.iterations == 200
    assert result.summary.stop_reason is StopReason.MAX_ITERATIONS_REACHED
    assert "=== Perceptron run ===" in capsys.readouterr().out

    metrics = [json.loads(line) for line in Path(result.metrics_path).read_text().splitlines() if line]
    assert [m["iteration"] for m in metrics] == [50, 100, 150, 200]
    assert all("total_error" in m and "sha" in m for m in metrics)
    assert metrics[0]["seed"] == 11
    assert (run_dir / "metrics.csv").read_text().splitlines()[0] == "iteration,total_error"

    manifest = json.loads(Path(result.manifest_path).read_text())
    assert manifest["config"]["train"]["seed"] == 11
    assert manifest["dataset"] == {"type": "truth_table", "op": "and"}

    outputs = read_vectors(run_dir / "outputs.txt")
    assert len(outputs) == 4
    cases = json.loads((run_dir / "cases.json").read_text())
    assert [c["targets"] for c in cases] == [[0.0], [0.0], [0.0], [1.0]]
    assert [c["actual"] for c in cases] == outputs
    assert len(Path(result.weights_path).read_text().splitlines()) == 2
    stored = json.loads((run_dir / "result.json").read_text())
    assert stored["stop_reason"] == "MAX_ITERATIONS_REACHED"

    summary = json.loads(Path(result.summary_path).read_text())
    assert summary["records"] == 4
    assert summary["training"]["iterations"] == 200


def test_pipeline_is_deterministic(tmp_path):
    first = pipelines.run_pipeline(_config(tmp_path / "a"))
    second = pipelines.run_pipeline(_config(tmp_path / "b"))
    assert Path(first.summary_path).read_bytes() == Path(second.summary_path).read_bytes()
    assert Path(first.weights_path).read_text() == Path(second.weights_path).read_text()
    assert first.summary.total_error == second.summary.total_error


def test_pipeline_saves_error_curve(tmp_path):
    result = pipelines.run_pipeline(_config(tmp_path / "run", max_iterations=20, log_every=5, enable_plots=True))
    assert (Path(result.run_dir) / "error.png").exists()


def test_pipeline_loads_explicit_weights(tmp_path):
    config = _config(tmp_path / "run", max_iterations=0)
    config["model"].update({"hidden": [1], "weights": {"mode": "load", "values": [1.0, 1.0, 1.0]}})
    result = pipelines.run_pipeline(config)
    assert result.summary.iterations == 0
    assert Path(result.weights_path).read_text().split() == ["1.0", "1.0", "1.0"]


def test_pipeline_runs_legacy_config(tmp_path):
    files = tmp_path / "files"
    files.mkdir()
    (files / "inputs.txt").write_text("0 0\n0 1\n1 0\n1 1\n")
    (files / "targets.txt").write_text("0\n1\n1\n1\n")
    (files / "weights.txt").write_text("0.1 0.2 0.3 0.4\n0.5 0.6\n")
    legacy = tmp_path / "config.txt"
    legacy.write_text(
        "2\n2\n1\n0.5\n30\nfiles/weights.txt\nfiles/inputs.txt\nfiles/targets.txt\n-1 1\n0.0001\n"
    )
    config = dict(pipelines.load_config_file(legacy))
    config["train"]["run_dir"] = str(tmp_path / "run")
    result = pipelines.run_pipeline(config)
    assert result.summary.iterations == 30
    assert len(result.summary.cases) == 4


def test_pipeline_runs_legacy_config_without_hidden_layers(tmp_path):
    files = tmp_path / "files"
    files.mkdir()
    (files / "inputs.txt").write_text("0 0\n0 1\n1 0\n1 1\n")
    (files / "targets.txt").write_text("0\n0\n0\n1\n")
    legacy = tmp_path / "config.txt"
    legacy.write_text("2\n\n1\n0.5\n10\nrandomize\nfiles/inputs.txt\nfiles/targets.txt\n-1 1\n")
    config = dict(pipelines.load_config_file(legacy))
    config["train"]["run_dir"] = str(tmp_path / "run")
    result = pipelines.run_pipeline(config)
    assert result.summary.iterations == 10
    assert len(Path(result.weights_path).read_text().splitlines()) == 1


def test_pipeline_rejects_mismatched_target_width(tmp_path):
    config = _config(tmp_path / "run")
    config["model"]["d_out"] = 2
    with pytest.raises(ConfigurationError):
        pipelines.run_pipeline(config)


@pytest.mark.parametrize(
    "patch",
    [
        {"model": {"d_in": 2, "hidden": [0], "d_out": 1}},
        {"model": {"d_in": 2, "hidden": [2], "d_out": 1, "weights": {"mode": "xavier"}}},
        {"model": {"d_in": 2, "hidden": [2], "d_out": 1, "weights": {"mode": "load"}}},
        {"data": {"name": "nand"}},
    ],
)
def test_pipeline_configuration_errors(tmp_path, patch):
    config = _config(tmp_path / "run")
    config.update(patch)
    with pytest.raises(ConfigurationError):
        pipelines.run_pipeline(config)


@pytest.mark.parametrize(
    "train",
    [
        {"max_iterations": 2.5},
        {"max_iterations": float("inf")},
        {"max_iterations": "many"},
        {"seed": "abc"},
        {"seed": 1.5},
        {"seed": True},
        {"log_every": float("nan")},
    ],
)
def test_pipeline_rejects_malformed_integer_settings(tmp_path, train):
    with pytest.raises(ConfigurationError):
        pipelines.run_pipeline(_config(tmp_path / "run", **train))


def test_pipeline_accepts_whole_float_settings(tmp_path):
    result = pipelines.run_pipeline(_config(tmp_path / "run", max_iterations=20.0, seed=11.0, log_every=10.0))
    assert result.summary.iterations == 20


@pytest.mark.parametrize(
    "section, key, value",
    [
        ("data", "options", None),
        ("data", "options", ["width"]),
        ("model", "hidden", 2),
        ("model", "weights", "randomize"),
    ],
)
def test_pipeline_rejects_malformed_sections(tmp_path, section, key, value):
    config = _config(tmp_path / "run")
    config[section][key] = value
    with pytest.raises(ConfigurationError):
        pipelines.run_pipeline(config)


def test_pipeline_rejects_non_mapping_section(tmp_path):
    config = _config(tmp_path / "run")
    config["train"] = None
    with pytest.raises(ConfigurationError, match="train must be a mapping"):
        pipelines.run_pipeline(config)


def test_missing_sections_and_presets():
    with pytest.raises(ConfigurationError, match="missing required sections"):
        pipelines.run_pipeline({"data": {"name": "xor"}})
    with pytest.raises(ConfigurationError, match="Unknown preset"):
        pipelines.load_preset("nope")
    assert {"xor-2-2-1", "and-2-2-1", "or-2-2-1", "xor-2-4-3-1"} <= set(pipelines.presets())


def test_load_config_file_formats(tmp_path):
    yaml_path = tmp_path / "run.yaml"
    yaml_path.write_text("train:\n  lr: 0.25\n  max_iterations: 10\n")
    assert pipelines.load_config_file(yaml_path) == {"train": {"lr": 0.25, "max_iterations": 10}}

    json_path = tmp_path / "run.json"
    json_path.write_text(json.dumps({"train": {"seed": 3}}))
    assert pipelines.load_config_file(json_path) == {"train": {"seed": 3}}

    with pytest.raises(ResourceNotFoundError):
        pipelines.load_config_file(tmp_path / "missing.json")
    bad = tmp_path / "run.ini"
    bad.write_text("[train]\n")
    with pytest.raises(ConfigurationError):
        pipelines.load_config_file(bad)
