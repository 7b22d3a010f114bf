"""
Tests for synapse models.
"""

import pytest
import sys
from pathlib import Path

import numpy as np

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from snn_engine.base import SynapseParams, HebbianParams, NeuronParams, LAYER_HIDDEN_EXC, LAYER_HIDDEN_INH
from snn_engine.errors import ConfigurationError
from snn_engine.neurons import LIFNeuron, RefractoryNeuron
from snn_engine.synapses import STDPSynapse, HebbianSynapse


def make_pair(post_inhibitory=False):
    pre = LIFNeuron(0, "HiddenExc_0", LAYER_HIDDEN_EXC, False, NeuronParams())
    post_layer = LAYER_HIDDEN_INH if post_inhibitory else LAYER_HIDDEN_EXC
    post = LIFNeuron(1, f"{post_layer}_0", post_layer, post_inhibitory, NeuronParams())
    return [pre, post]


class TestSTDPSynapseTransmission:
    """Spike delivery and delay queue."""

    def test_self_connection_rejected(self):
        with pytest.raises(ConfigurationError):
            STDPSynapse(0, 2, 2, 0.1)

    def test_initial_weight_clamped(self):
        syn = STDPSynapse(0, 0, 1, 5.0, SynapseParams(min_weight=-1.0, max_weight=1.0))
        assert syn.weight == 1.0

    def test_no_transmission_without_presynaptic_spike(self):
        neurons = make_pair()
        syn = STDPSynapse(0, 0, 1, 0.5)
        syn.transmit_spike(neurons, t=0.0, dt=0.01)
        assert neurons[1].potential == 0.0
        assert len(syn.spike_queue) == 0

    def test_zero_delay_delivers_immediately(self):
        neurons = make_pair()
        syn = STDPSynapse(0, 0, 1, 0.5, SynapseParams(delay=0.0))
        neurons[0].spiked = True

        syn.transmit_spike(neurons, t=1.0, dt=0.01)

        assert neurons[1].potential == pytest.approx(0.5)
        assert len(syn.spike_queue) == 0, "Zero-delay spikes are not queued"

    def test_synaptic_delay(self):
        """Spike emitted at t=0 arrives once t >= 0 + delay."""
        neurons = make_pair()
        syn = STDPSynapse(0, 0, 1, 0.5, SynapseParams(delay=0.05))

        neurons[0].spiked = True
        syn.transmit_spike(neurons, t=0.0, dt=0.01)
        assert neurons[1].potential == 0.0
        assert list(syn.spike_queue) == [0.0]

        neurons[0].spiked = False
        syn.transmit_spike(neurons, t=0.03, dt=0.01)
        assert neurons[1].potential == 0.0, "No delivery before the delay has elapsed"

        syn.transmit_spike(neurons, t=0.05, dt=0.01)
        assert neurons[1].potential == pytest.approx(0.5)
        assert len(syn.spike_queue) == 0

    def test_delivery_and_enqueue_in_same_call(self):
        neurons = make_pair()
        syn = STDPSynapse(0, 0, 1, 0.5, SynapseParams(delay=1.0))
        syn.spike_queue.append(0.0)
        neurons[0].spiked = True

        syn.transmit_spike(neurons, t=1.0, dt=1.0)

        assert neurons[1].potential == pytest.approx(0.5)
        assert list(syn.spike_queue) == [1.0]

    def test_inhibitory_target_subtracts(self):
        neurons = make_pair(post_inhibitory=True)
        syn = STDPSynapse(0, 0, 1, 0.5)
        neurons[0].spiked = True
        syn.transmit_spike(neurons, t=0.0, dt=0.01)
        assert neurons[1].potential == pytest.approx(-0.5)

    def test_reset_clears_queue_keeps_weight(self):
        syn = STDPSynapse(0, 0, 1, 0.3, SynapseParams(delay=1.0))
        syn.spike_queue.extend([0.0, 0.5])
        syn.reset_dynamic_state()
        assert len(syn.spike_queue) == 0
        assert syn.weight == 0.3


class TestSTDPSynapsePlasticity:
    """Pair-based STDP sign and magnitude."""

    def test_pre_before_post_potentiates(self):
        neurons = make_pair()
        p = SynapseParams()
        syn = STDPSynapse(0, 0, 1, 0.0, p)
        neurons[0].spiked = True
        neurons[0].last_spike_time = 0.0
        neurons[1].last_spike_time = 0.01

        syn.stdp_update(neurons, t=0.01, dt=0.01)

        expected = p.A_plus * np.exp(-0.01 / p.tau_plus)
        assert syn.weight > 0.0, "Causal pairing should strengthen the synapse"
        assert syn.weight == pytest.approx(expected)

    def test_post_before_pre_depresses(self):
        neurons = make_pair()
        p = SynapseParams()
        syn = STDPSynapse(0, 0, 1, 0.0, p)
        neurons[1].spiked = True
        neurons[1].last_spike_time = 0.0
        neurons[0].last_spike_time = 0.01

        syn.stdp_update(neurons, t=0.01, dt=0.01)

        expected = -p.A_minus * np.exp(-0.01 / p.tau_minus)
        assert syn.weight < 0.0, "Anti-causal pairing should weaken the synapse"
        assert syn.weight == pytest.approx(expected)

    def test_post_spike_after_earlier_pre_spike_potentiates(self):
        """The usual in-network case: post fires now, pre fired earlier."""
        neurons = make_pair()
        syn = STDPSynapse(0, 0, 1, 0.2)
        neurons[0].last_spike_time = 0.0
        neurons[1].spiked = True
        neurons[1].last_spike_time = 0.02

        syn.stdp_update(neurons, t=0.02, dt=0.01)

        assert syn.weight > 0.2

    def test_pre_spike_after_earlier_post_spike_depresses(self):
        neurons = make_pair()
        syn = STDPSynapse(0, 0, 1, 0.2)
        neurons[1].last_spike_time = 0.0
        neurons[0].spiked = True
        neurons[0].last_spike_time = 0.02

        syn.stdp_update(neurons, t=0.02, dt=0.01)

        assert syn.weight < 0.2

    def test_no_update_without_spikes(self):
        neurons = make_pair()
        syn = STDPSynapse(0, 0, 1, 0.2)
        neurons[0].last_spike_time = 0.0
        neurons[1].last_spike_time = 0.01
        syn.stdp_update(neurons, t=0.02, dt=0.01)
        assert syn.weight == 0.2

    def test_simultaneous_spikes_no_change(self):
        neurons = make_pair()
        syn = STDPSynapse(0, 0, 1, 0.2)
        for n in neurons:
            n.spiked = True
            n.last_spike_time = 0.5
        syn.stdp_update(neurons, t=0.5, dt=0.01)
        assert syn.weight == 0.2

    def test_never_spiked_partner_leaves_weight_finite(self):
        neurons = make_pair()
        syn = STDPSynapse(0, 0, 1, 0.2)
        neurons[0].spiked = True
        neurons[0].last_spike_time = 0.0
        syn.stdp_update(neurons, t=0.0, dt=0.01)
        assert np.isfinite(syn.weight)
        assert syn.weight == 0.2

    def test_weight_clamped_after_update(self):
        neurons = make_pair()
        p = SynapseParams(A_plus=10.0, A_minus=10.0, min_weight=-0.5, max_weight=0.5)
        syn = STDPSynapse(0, 0, 1, 0.0, p)

        neurons[0].spiked = True
        neurons[0].last_spike_time = 0.0
        neurons[1].last_spike_time = 0.001
        syn.stdp_update(neurons, t=0.001, dt=0.001)
        assert syn.weight == 0.5

        neurons[0].spiked = False
        neurons[1].spiked = True
        neurons[1].last_spike_time = 0.0
        neurons[0].last_spike_time = 0.001
        syn.stdp_update(neurons, t=0.001, dt=0.001)
        assert syn.weight == -0.5


class TestHebbianSynapse:
    """Coincidence Hebbian synapse."""

    def setup_method(self):
        self.neurons = [RefractoryNeuron(0), RefractoryNeuron(1)]

    def test_self_connection_rejected(self):
        with pytest.raises(ConfigurationError):
            HebbianSynapse(0, 1, 1, 0.5)

    def test_transmit(self):
        syn = HebbianSynapse(0, 0, 1, 0.4)
        assert syn.transmit(self.neurons) == 0.0
        self.neurons[0].spiked = True
        assert syn.transmit(self.neurons) == pytest.approx(0.4)
        assert self.neurons[1].potential == pytest.approx(0.4)

    def test_coincident_spikes_add_eta(self):
        syn = HebbianSynapse(0, 0, 1, 0.4, HebbianParams(eta=0.1))
        self.neurons[0].spiked = True
        self.neurons[1].spiked = True
        syn.hebbian_update(self.neurons)
        assert syn.weight == pytest.approx(0.5)

    def test_single_spike_no_change(self):
        syn = HebbianSynapse(0, 0, 1, 0.4, HebbianParams(eta=0.1))
        self.neurons[0].spiked = True
        syn.hebbian_update(self.neurons)
        assert syn.weight == 0.4

    def test_upper_clamp_only(self):
        syn = HebbianSynapse(0, 0, 1, 0.95, HebbianParams(eta=0.1))
        self.neurons[0].spiked = True
        self.neurons[1].spiked = True
        syn.hebbian_update(self.neurons)
        assert syn.weight == 1.0

        low = HebbianSynapse(1, 0, 1, -3.0, HebbianParams(eta=0.1))
        assert low.weight == -3.0, "There is no lower bound on Hebbian weights"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
