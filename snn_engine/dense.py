"""
Dense structure-of-arrays engine.

Same four-phase step as the object networks, over flat numpy arrays indexed
by neuron / synapse id. Fixed threshold, refractory period and the
coincidence Hebbian rule only: no leak, no adaptive threshold, no
inhibition, no delays. Use it when neuron and synapse counts are large.
"""

import numpy as np
from typing import List, Optional, Sequence

from .base import RefractoryParams, HebbianParams, INPUT_SPIKE_THRESHOLD, encode_inputs, make_rng
from .engine import SpikingNetwork, sample_random_pairs, unstructured_layers, resolve_n_inputs


class DenseNetwork(SpikingNetwork):
    """
    Array-backed Hebbian network.

    State arrays:
      potentials        float, per neuron
      spikes            bool, per neuron (set by the last neuron phase)
      refractory_timers int, per neuron
      pre, post         int, per synapse
      weights           float, per synapse, initially uniform in [0, 1)
    """

    def __init__(self, n_neurons: int, n_synapses: int, eta: float = 0.01,
                 n_inputs: Optional[int] = None,
                 params: RefractoryParams = None, rng=None,
                 max_weight: float = 1.0):
        super().__init__()
        self.params = params or RefractoryParams()
        self.hebbian_params = HebbianParams(eta=eta, max_weight=max_weight)
        self.eta = eta
        self.threshold = self.params.threshold
        self.refractory_period = self.params.refractory_period
        self.rng = make_rng(rng)

        self.pre, self.post = sample_random_pairs(n_neurons, n_synapses, self.rng)
        self._weights = self.rng.random_sample(n_synapses)
        self.n_inputs = resolve_n_inputs(n_neurons, n_inputs)
        self._layers = unstructured_layers(n_neurons, self.n_inputs)

        self._potentials = np.zeros(n_neurons, dtype=float)
        self._spikes = np.zeros(n_neurons, dtype=bool)
        self.refractory_timers = np.zeros(n_neurons, dtype=np.int64)

    # ---- mutation ----------------------------------------------------------

    def inject_inputs(self, values: Optional[Sequence[float]]):
        encoded = encode_inputs(values, self.n_inputs)
        active = np.flatnonzero(encoded > INPUT_SPIKE_THRESHOLD)
        self._potentials[active] += self.threshold

    def step(self, current_time: float, dt: float,
             inputs: Optional[Sequence[float]] = None) -> List[int]:
        self._check_dt(dt)
        self.current_time = current_time

        if inputs is not None:
            self.inject_inputs(inputs)

        # Transmit: spikes still hold the previous neuron phase
        active = self._spikes[self.pre]
        np.add.at(self._potentials, self.post[active], self._weights[active])

        # Neurons
        self._spikes[:] = False
        refractory = self.refractory_timers > 0
        self.refractory_timers[refractory] -= 1
        fire = ~refractory & (self._potentials >= self.threshold)
        self._spikes[fire] = True
        self._potentials[fire] = 0.0
        self.refractory_timers[fire] = self.refractory_period

        # Hebbian: coincident pre/post spikes only
        coincident = self._spikes[self.pre] & self._spikes[self.post]
        self._weights[coincident] += self.eta
        np.minimum(self._weights, self.hebbian_params.max_weight,
                   out=self._weights, where=coincident)

        return np.flatnonzero(fire).tolist()

    def reset(self):
        self._potentials.fill(0.0)
        self._spikes.fill(False)
        self.refractory_timers.fill(0)

    # ---- read accessors ----------------------------------------------------

    @property
    def n_neurons(self) -> int:
        return len(self._potentials)

    @property
    def n_synapses(self) -> int:
        return len(self._weights)

    @property
    def labels(self) -> List[str]:
        return [f"Neuron_{i}" for i in range(self.n_neurons)]

    @property
    def layers(self) -> List[str]:
        return list(self._layers)

    @property
    def spiked(self) -> np.ndarray:
        return self._spikes.copy()

    @property
    def potentials(self) -> np.ndarray:
        return self._potentials.copy()

    @property
    def weights(self) -> np.ndarray:
        return self._weights.copy()

    @property
    def synapse_endpoints(self) -> np.ndarray:
        return np.stack([self.pre, self.post], axis=1)
