"""
Network models built from neuron and synapse objects.

  - LayeredSTDPNetwork: input / hidden-excitatory / hidden-inhibitory /
    output layers, adaptive LIF neurons, delayed STDP synapses
  - HebbianNetwork: unstructured random graph of refractory neurons with
    coincidence Hebbian synapses
  - create_network: select a backend by name (object or dense)

Each step runs four phases in a fixed order:
  1. Inject external input into the input neurons
  2. Transmit spikes over every synapse (reads last step's spike flags)
  3. Update every neuron and collect the ones that fired
  4. Apply plasticity on every synapse (reads this step's spikes)
"""

import numpy as np
from typing import List, Optional, Sequence

from .base import (
    NeuronParams, SynapseParams, RefractoryParams, HebbianParams,
    INPUT_SPIKE_THRESHOLD, INPUT_SPIKE_WEIGHT, LAYER_HIDDEN_INH,
    encode_inputs, make_rng,
)
from .dense import DenseNetwork
from .engine import (
    SpikingNetwork, layered_neuron_layers, layered_synapse_pairs,
    sample_random_pairs, unstructured_layers, resolve_n_inputs,
)
from .errors import ConfigurationError
from .neurons import LIFNeuron, RefractoryNeuron
from .synapses import STDPSynapse, HebbianSynapse


# ============================================================================
# LAYERED STDP NETWORK
# ============================================================================

class LayeredSTDPNetwork(SpikingNetwork):
    """
    Four-layer network of adaptive LIF neurons with STDP synapses.

    Every allowed ordered pair of neurons is connected, so the synapse
    count grows quadratically with the neuron count. Hidden-inhibitory
    neurons subtract whatever they receive.
    """

    def __init__(self, n_inputs: int, n_hidden_excitatory: int,
                 n_hidden_inhibitory: int, n_outputs: int,
                 neuron_params: NeuronParams = None,
                 synapse_params: SynapseParams = None,
                 rng=None):
        super().__init__()
        self.neuron_params = neuron_params or NeuronParams()
        self.synapse_params = synapse_params or SynapseParams()
        self.rng = make_rng(rng)

        self.n_inputs = n_inputs
        self.n_hidden_excitatory = n_hidden_excitatory
        self.n_hidden_inhibitory = n_hidden_inhibitory
        self.n_outputs = n_outputs

        self.neurons: List[LIFNeuron] = []
        self.synapses: List[STDPSynapse] = []
        self._create_neurons()
        self._create_connections()

    def _create_neurons(self):
        layer_tags = layered_neuron_layers(
            self.n_inputs, self.n_hidden_excitatory,
            self.n_hidden_inhibitory, self.n_outputs,
        )
        counters = {}
        for neuron_id, layer in enumerate(layer_tags):
            k = counters.get(layer, 0)
            counters[layer] = k + 1
            self.neurons.append(LIFNeuron(
                neuron_id, f"{layer}_{k}", layer,
                is_inhibitory=(layer == LAYER_HIDDEN_INH),
                params=self.neuron_params,
            ))

    def _create_connections(self):
        p = self.synapse_params
        pairs = layered_synapse_pairs([n.layer for n in self.neurons])
        for pre, post in pairs:
            weight = self.rng.uniform(p.init_weight_low, p.init_weight_high)
            syn = STDPSynapse(len(self.synapses), pre, post, weight, p)
            self.synapses.append(syn)
            self.neurons[pre].outgoing.append(syn.id)
            self.neurons[post].incoming.append(syn.id)

    # ---- mutation ----------------------------------------------------------

    def inject_inputs(self, values: Optional[Sequence[float]]):
        """Input values above the activation threshold deliver a unit spike."""
        for i, value in enumerate(encode_inputs(values, self.n_inputs)):
            if value > INPUT_SPIKE_THRESHOLD:
                self.neurons[i].receive_spike(INPUT_SPIKE_WEIGHT, self.current_time)

    def step(self, current_time: float, dt: float,
             inputs: Optional[Sequence[float]] = None) -> List[int]:
        self._check_dt(dt)
        self.current_time = current_time

        if inputs is not None:
            self.inject_inputs(inputs)

        for syn in self.synapses:
            syn.transmit_spike(self.neurons, current_time, dt)

        fired = [n.id for n in self.neurons if n.update(current_time, dt)]

        for syn in self.synapses:
            syn.stdp_update(self.neurons, current_time, dt)

        return fired

    def reset(self):
        """Clear potentials, spike flags and in-flight spikes; keep weights and thresholds."""
        for neuron in self.neurons:
            neuron.potential = 0.0
            neuron.reset()
        for syn in self.synapses:
            syn.reset_dynamic_state()

    # ---- read accessors ----------------------------------------------------

    @property
    def n_neurons(self) -> int:
        return len(self.neurons)

    @property
    def n_synapses(self) -> int:
        return len(self.synapses)

    @property
    def labels(self) -> List[str]:
        return [n.label for n in self.neurons]

    @property
    def layers(self) -> List[str]:
        return [n.layer for n in self.neurons]

    @property
    def spiked(self) -> np.ndarray:
        return np.array([n.spiked for n in self.neurons], dtype=bool)

    @property
    def potentials(self) -> np.ndarray:
        return np.array([n.potential for n in self.neurons], dtype=float)

    @property
    def thresholds(self) -> np.ndarray:
        return np.array([n.threshold for n in self.neurons], dtype=float)

    @property
    def firing_rates(self) -> np.ndarray:
        return np.array([n.firing_rate for n in self.neurons], dtype=float)

    @property
    def weights(self) -> np.ndarray:
        return np.array([s.weight for s in self.synapses], dtype=float)

    @property
    def synapse_endpoints(self) -> np.ndarray:
        return np.array([(s.pre, s.post) for s in self.synapses],
                        dtype=np.int64).reshape(-1, 2)


# ============================================================================
# UNSTRUCTURED HEBBIAN NETWORK
# ============================================================================

class HebbianNetwork(SpikingNetwork):
    """
    Random graph of refractory neurons with coincidence Hebbian synapses.

    Object-level counterpart of DenseNetwork: given the same seed both draw
    the same topology and initial weights and produce the same spikes.
    """

    def __init__(self, n_neurons: int, n_synapses: int, eta: float = 0.01,
                 n_inputs: Optional[int] = None,
                 params: RefractoryParams = None, rng=None,
                 max_weight: float = 1.0):
        super().__init__()
        self.params = params or RefractoryParams()
        self.hebbian_params = HebbianParams(eta=eta, max_weight=max_weight)
        self.eta = eta
        self.rng = make_rng(rng)

        pre, post = sample_random_pairs(n_neurons, n_synapses, self.rng)
        weights = self.rng.random_sample(n_synapses)
        self.n_inputs = resolve_n_inputs(n_neurons, n_inputs)

        self.neurons: List[RefractoryNeuron] = [
            RefractoryNeuron(i, f"Neuron_{i}", layer, self.params)
            for i, layer in enumerate(unstructured_layers(n_neurons, self.n_inputs))
        ]
        self.synapses: List[HebbianSynapse] = [
            HebbianSynapse(k, int(pre[k]), int(post[k]), weights[k], self.hebbian_params)
            for k in range(n_synapses)
        ]

    def inject_inputs(self, values: Optional[Sequence[float]]):
        """Active inputs raise the neuron straight to its threshold."""
        for i, value in enumerate(encode_inputs(values, self.n_inputs)):
            if value > INPUT_SPIKE_THRESHOLD:
                self.neurons[i].potential += self.neurons[i].threshold

    def step(self, current_time: float, dt: float,
             inputs: Optional[Sequence[float]] = None) -> List[int]:
        self._check_dt(dt)
        self.current_time = current_time

        if inputs is not None:
            self.inject_inputs(inputs)

        for syn in self.synapses:
            syn.transmit(self.neurons)

        # Synaptic input is already in the potentials
        fired = [n.id for n in self.neurons if n.update(0.0)]

        for syn in self.synapses:
            syn.hebbian_update(self.neurons)

        return fired

    def reset(self):
        for neuron in self.neurons:
            neuron.reset()

    @property
    def n_neurons(self) -> int:
        return len(self.neurons)

    @property
    def n_synapses(self) -> int:
        return len(self.synapses)

    @property
    def labels(self) -> List[str]:
        return [n.label for n in self.neurons]

    @property
    def layers(self) -> List[str]:
        return [n.layer for n in self.neurons]

    @property
    def spiked(self) -> np.ndarray:
        return np.array([n.spiked for n in self.neurons], dtype=bool)

    @property
    def potentials(self) -> np.ndarray:
        return np.array([n.potential for n in self.neurons], dtype=float)

    @property
    def refractory_timers(self) -> np.ndarray:
        return np.array([n.refractory_timer for n in self.neurons], dtype=np.int64)

    @property
    def weights(self) -> np.ndarray:
        return np.array([s.weight for s in self.synapses], dtype=float)

    @property
    def synapse_endpoints(self) -> np.ndarray:
        return np.array([(s.pre, s.post) for s in self.synapses],
                        dtype=np.int64).reshape(-1, 2)


# ============================================================================
# BACKEND SELECTION
# ============================================================================

BACKENDS = {
    "stdp": LayeredSTDPNetwork,
    "hebbian": HebbianNetwork,
    "dense": DenseNetwork,
}


def create_network(backend: str, *args, **kwargs) -> SpikingNetwork:
    """
    Build a network for the named backend.

        create_network("stdp", n_inputs, n_hidden_exc, n_hidden_inh, n_outputs)
        create_network("hebbian", n_neurons, n_synapses, eta)
        create_network("dense", n_neurons, n_synapses, eta)
    """
    try:
        cls = BACKENDS[backend]
    except KeyError:
        raise ConfigurationError(
            f"Unknown backend {backend!r}; expected one of {sorted(BACKENDS)}"
        ) from None
    return cls(*args, **kwargs)
