"""
Tests for the dense structure-of-arrays engine.
"""

import pytest
import sys
from pathlib import Path

import numpy as np

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from snn_engine.base import RefractoryParams, LAYER_INPUT, LAYER_HIDDEN
from snn_engine.dense import DenseNetwork
from snn_engine.errors import ConfigurationError, SimulationError


class TestDenseConstruction:

    def test_arrays_sized(self):
        net = DenseNetwork(100, 1000, eta=0.01, rng=0)
        assert net.n_neurons == 100
        assert net.n_synapses == 1000
        assert net.pre.shape == net.post.shape == (1000,)
        assert net.potentials.shape == (100,)

    def test_no_self_connections(self):
        net = DenseNetwork(5, 500, rng=1)
        assert np.all(net.pre != net.post)
        assert net.pre.max() < 5 and net.post.max() < 5

    def test_initial_weights(self):
        weights = DenseNetwork(50, 400, rng=2).weights
        assert np.all((weights >= 0.0) & (weights < 1.0))

    def test_seeded_construction_is_reproducible(self):
        a = DenseNetwork(40, 300, rng=9)
        b = DenseNetwork(40, 300, rng=9)
        np.testing.assert_array_equal(a.synapse_endpoints, b.synapse_endpoints)
        np.testing.assert_array_equal(a.weights, b.weights)

    def test_invalid_counts(self):
        with pytest.raises(ConfigurationError):
            DenseNetwork(-1, 0)
        with pytest.raises(ConfigurationError):
            DenseNetwork(10, -5)
        with pytest.raises(ConfigurationError):
            DenseNetwork(1, 1)
        with pytest.raises(ConfigurationError):
            DenseNetwork(10, 10, eta=-0.1)

    def test_empty_network(self):
        net = DenseNetwork(0, 0)
        assert net.step(0.0, 1.0, [1.0]) == []
        assert net.synapse_endpoints.shape == (0, 2)

    def test_layers(self):
        net = DenseNetwork(4, 3, n_inputs=2, rng=0)
        assert net.layers == [LAYER_INPUT, LAYER_INPUT, LAYER_HIDDEN, LAYER_HIDDEN]
        assert net.labels == ["Neuron_0", "Neuron_1", "Neuron_2", "Neuron_3"]


class TestDenseStep:

    def test_invalid_dt(self):
        with pytest.raises(SimulationError):
            DenseNetwork(4, 4, rng=0).step(0.0, 0.0)

    def test_inject_inputs_tolerates_length_mismatch(self):
        net = DenseNetwork(4, 4, n_inputs=2, rng=0)
        net.inject_inputs([])
        assert np.all(net.potentials == 0.0)
        net.inject_inputs([1.0, 1.0, 1.0, 1.0])
        np.testing.assert_array_equal(net.potentials, [1.0, 1.0, 0.0, 0.0])

    def test_injected_neuron_fires_same_tick(self):
        net = DenseNetwork(4, 0, n_inputs=4, rng=0)
        assert net.step(0.0, 1.0, [1.0, 0.0, 1.0]) == [0, 2]
        np.testing.assert_array_equal(net.spiked, [True, False, True, False])
        assert net.potentials[0] == 0.0

    def test_refractory_period(self):
        net = DenseNetwork(1, 0, params=RefractoryParams(refractory_period=3), rng=0)
        assert net.step(0.0, 1.0, [1.0]) == [0]
        for t in range(1, 4):
            assert net.step(float(t), 1.0, [1.0]) == [], "Refractory neuron must not fire"
        assert net.step(4.0, 1.0, [1.0]) == [0]

    def test_transmission_uses_previous_tick_spikes(self):
        net = DenseNetwork(2, 1, n_inputs=1, rng=0)
        net.pre[:] = 0
        net.post[:] = 1
        net._weights[:] = 1.0

        assert net.step(0.0, 1.0, [1.0]) == [0]
        assert net.potentials[1] == 0.0, "Spike is not delivered in the tick it happens"
        assert net.step(1.0, 1.0) == [1]

    def test_coincidence_rule(self):
        """Weights change by exactly eta iff pre and post spike in the same tick."""
        eta = 0.02
        net = DenseNetwork(30, 300, eta=eta, params=RefractoryParams(refractory_period=1), rng=4)
        rng = np.random.RandomState(4)
        changed_once = False

        for t in range(100):
            before = net.weights
            net.step(float(t), 1.0, (rng.random_sample(30) > 0.6).astype(float))
            spikes = net.spiked
            coincident = spikes[net.pre] & spikes[net.post]
            expected = np.where(coincident, np.minimum(before + eta, 1.0), before)
            np.testing.assert_allclose(net.weights, expected)
            assert np.all(net.weights <= 1.0)
            changed_once = changed_once or bool(coincident.any())

        assert changed_once, "Drive should produce at least one coincidence"

    def test_no_lower_clamp(self):
        net = DenseNetwork(3, 2, rng=0)
        net._weights[:] = -0.5
        for t in range(10):
            net.step(float(t), 1.0)
        np.testing.assert_array_equal(net.weights, [-0.5, -0.5])

    def test_reset_keeps_weights(self):
        net = DenseNetwork(20, 150, eta=0.1, rng=6)
        for t in range(40):
            net.step(float(t), 1.0, [1.0] * 20)
        weights = net.weights

        net.reset()

        assert not net.spiked.any()
        assert np.all(net.potentials == 0.0)
        assert np.all(net.refractory_timers == 0)
        np.testing.assert_array_equal(net.weights, weights)

    def test_silent_run(self):
        net = DenseNetwork(50, 500, rng=8)
        for t in range(1000):
            net.step(float(t), 1.0)
        assert not net.spiked.any()
        assert np.all(np.isfinite(net.potentials))

    def test_accessors_return_copies(self):
        net = DenseNetwork(5, 10, rng=0)
        net.spiked[:] = True
        net.potentials[:] = 3.0
        assert not net.spiked.any()
        assert np.all(net.potentials == 0.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
