import numpy as np
import pytest

from perceptron.core.activations import sigmoid, sigmoid_deriv
from perceptron.core.errors import (
    ConfigurationError,
    DataFormatError,
    DataShapeError,
    ErrorKind,
    ResourceNotFoundError,
    capture,
)
from perceptron.core.network import build_network
from perceptron.core.types import StopReason, TrainingSummary
from perceptron.core.weights import flatten_weights, load_weights, randomize_weights, weight_count
from perceptron.reporting.plots import PlotAdapter


def test_build_network_allocates_per_layer_storage():
    state = build_network(2, [4, 3], 1)
    assert state.topology.layer_sizes == (2, 4, 3, 1)
    assert state.topology.layer_count == 4
    assert state.max_nodes == 4
    assert [w.shape for w in state.weights] == [(2, 4), (4, 3), (3, 1)]
    assert [r.shape for r in state.raw] == [(2,), (4,), (3,), (1,)]
    assert [t.shape for t in state.transformed] == [(2,), (4,), (3,), (1,)]
    assert state.parameter_count() == weight_count(state.topology) == 2 * 4 + 4 * 3 + 3


def test_build_network_without_hidden_layers():
    state = build_network(3, [], 2)
    assert state.topology.layer_sizes == (3, 2)
    assert len(state.weights) == 1


@pytest.mark.parametrize(
    "d_in, hidden, d_out",
    [(0, [2], 1), (2, [0], 1), (2, [2], -1), (2, [2, -3], 1), (2.5, [2], 1), (True, [2], 1)],
)
def test_build_network_rejects_bad_layer_sizes(d_in, hidden, d_out):
    with pytest.raises(ConfigurationError):
        build_network(d_in, hidden, d_out)


def test_sigmoid_values_and_derivative():
    assert np.isclose(sigmoid(0.0), 0.5)
    assert np.isclose(sigmoid(1.0), 1.0 / (1.0 + np.exp(-1.0)))
    assert np.isclose(sigmoid_deriv(0.0), 0.25)
    x = np.array([-3.0, -0.5, 0.0, 0.5, 3.0])
    assert np.allclose(sigmoid_deriv(x), sigmoid(x) * (1.0 - sigmoid(x)))


def test_sigmoid_does_not_overflow():
    with np.errstate(over="raise"):
        out = sigmoid(np.array([-1000.0, 1000.0]))
    assert np.allclose(out, [0.0, 1.0])
    assert np.all(np.isfinite(sigmoid_deriv(np.array([-1000.0, 1000.0]))))


def test_load_weights_uses_canonical_order():
    state = build_network(2, [2], 1)
    load_weights(state, [1, 2, 3, 4, 5, 6])
    # weights[m][prev][next]
    assert state.weights[0][0][0] == 1
    assert state.weights[0][0][1] == 2
    assert state.weights[0][1][0] == 3
    assert state.weights[0][1][1] == 4
    assert state.weights[1][0][0] == 5
    assert state.weights[1][1][0] == 6
    assert flatten_weights(state) == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]


def test_load_weights_accepts_numeric_strings():
    state = build_network(2, [1], 1)
    load_weights(state, ["1.0", "-0.5", "2e-1"])
    assert flatten_weights(state) == [1.0, -0.5, 0.2]


def test_load_weights_rejects_non_numeric():
    state = build_network(2, [1], 1)
    with pytest.raises(DataFormatError):
        load_weights(state, ["1.0", "abc", "1.0"])
    with pytest.raises(DataFormatError):
        load_weights(state, [1.0, None, 1.0])


def test_load_weights_requires_enough_values():
    state = build_network(2, [2], 1)
    with pytest.raises(DataShapeError, match="requires 6 weights"):
        load_weights(state, [1.0] * 5)


def test_load_weights_warns_about_surplus_values():
    state = build_network(2, [1], 1)
    with pytest.warns(RuntimeWarning, match="surplus"):
        load_weights(state, [1.0, 1.0, 1.0, 9.0])
    assert flatten_weights(state) == [1.0, 1.0, 1.0]


def test_randomize_weights_respects_bounds_and_seed():
    first = randomize_weights(build_network(3, [5, 4], 2), -1.5, 1.5, rng=np.random.default_rng(7))
    second = randomize_weights(build_network(3, [5, 4], 2), -1.5, 1.5, rng=np.random.default_rng(7))
    values = np.array(flatten_weights(first))
    assert values.shape == (3 * 5 + 5 * 4 + 4 * 2,)
    assert np.all(values >= -1.5) and np.all(values < 1.5)
    assert flatten_weights(first) == flatten_weights(second)


@pytest.mark.parametrize("low, high", [(1.0, 1.0), (2.0, -2.0), (float("nan"), 1.0)])
def test_randomize_weights_rejects_bad_bounds(low, high):
    with pytest.raises(ConfigurationError):
        randomize_weights(build_network(2, [2], 1), low, high)


def test_capture_folds_errors_into_results():
    ok = capture(build_network, 2, [2], 1)
    assert ok.ok and ok.kind is None
    assert ok.unwrap().topology.layer_sizes == (2, 2, 1)

    failed = capture(build_network, 2, [0], 1)
    assert not failed.ok
    assert failed.kind is ErrorKind.CONFIGURATION
    with pytest.raises(ConfigurationError):
        failed.unwrap()


def test_resource_not_found_is_a_file_not_found_error():
    assert issubclass(ResourceNotFoundError, FileNotFoundError)
    assert ResourceNotFoundError.kind is ErrorKind.RESOURCE_NOT_FOUND


def test_plot_adapter_headless(tmp_path):
    adapter = PlotAdapter(tmp_path, enable_plots=True, stopping_error=0.01)
    adapter.on_epoch(1, {"total_error": 1.0})
    adapter.on_epoch(2, {"total_error": float("inf")})
    adapter(3, {"total_error": 0.5})
    assert adapter.history == [(1, 1.0), (3, 0.5)]
    summary = TrainingSummary(
        iterations=3,
        stop_reason=StopReason.MAX_ITERATIONS_REACHED,
        total_error=0.0,
        elapsed_seconds=0.0,
    )
    path = adapter.close(summary)
    assert path == tmp_path / "error.png"
    assert path.exists()


def test_plot_adapter_disabled_writes_nothing(tmp_path):
    adapter = PlotAdapter(tmp_path / "off")
    adapter.on_epoch(1, {"total_error": 1.0})
    assert adapter.history == []
    assert adapter.close() is None
    assert not (tmp_path / "off").exists()
