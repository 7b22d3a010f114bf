"""
Synapse models.

  - STDPSynapse: signed weight, transmission delay queue, pair-based STDP
  - HebbianSynapse: coincidence Hebbian rule, no delay

Synapses store the (pre, post) neuron indices and receive the network's
neuron list when they need to read or write neuron state.
"""

import numpy as np
from collections import deque
from typing import Sequence

from .base import SynapseParams, HebbianParams
from .errors import ConfigurationError
from .neurons import LIFNeuron, RefractoryNeuron


# ============================================================================
# STDP SYNAPSE
# ============================================================================

class STDPSynapse:
    """
    Synapse with transmission delay and spike-timing-dependent plasticity.

    Transmission:
        - A presynaptic spike is queued with its emission time and delivered
          once emission time + delay has been reached
        - A zero-delay synapse delivers straight away, which still lands one
          step after the spike because it reads the previous step's flag

    STDP (Δt = t_post - t_pre, from each neuron's last spike time):
        - Δt > 0: pre before post -> weight increases by A+ exp(-Δt/τ+)
        - Δt < 0: post before pre -> weight decreases by A- exp(Δt/τ-)
    """

    def __init__(self, synapse_id: int, pre: int, post: int, weight: float = 0.0,
                 params: SynapseParams = None):
        if pre == post:
            raise ConfigurationError(f"Self-connection on neuron {pre} is not allowed")
        self.id = synapse_id
        self.pre = pre
        self.post = post
        self.params = params or SynapseParams()
        self.delay = self.params.delay
        self.weight = float(np.clip(weight, self.params.min_weight, self.params.max_weight))

        self.spike_queue: deque = deque()

    def transmit_spike(self, neurons: Sequence[LIFNeuron], t: float, dt: float):
        """Deliver due queued spikes, then queue (or deliver) a new one."""
        post = neurons[self.post]
        while self.spike_queue and t >= self.spike_queue[0] + self.delay:
            self.spike_queue.popleft()
            post.receive_spike(self.weight, t)

        if neurons[self.pre].spiked:
            if self.delay <= 0:
                post.receive_spike(self.weight, t)
            else:
                self.spike_queue.append(t)

    def stdp_update(self, neurons: Sequence[LIFNeuron], t: float, dt: float):
        """
        Apply the STDP rule after this step's neuron updates.

        The spike pair is evaluated whenever either endpoint fired this step;
        potentiation is checked before depression. The weight is always
        clamped afterwards.
        """
        pre = neurons[self.pre]
        post = neurons[self.post]
        p = self.params

        if pre.spiked or post.spiked:
            delta_t = post.last_spike_time - pre.last_spike_time
            if np.isfinite(delta_t):
                if delta_t > 0:
                    self.weight += p.A_plus * np.exp(-delta_t / p.tau_plus)
                if delta_t < 0:
                    self.weight -= p.A_minus * np.exp(delta_t / p.tau_minus)

        self.weight = float(np.clip(self.weight, p.min_weight, p.max_weight))

    def reset_dynamic_state(self):
        """Drop in-flight spikes, preserve learned weight."""
        self.spike_queue.clear()


# ============================================================================
# HEBBIAN SYNAPSE
# ============================================================================

class HebbianSynapse:
    """Immediate transmission; Δw = eta * pre_spike * post_spike."""

    def __init__(self, synapse_id: int, pre: int, post: int, weight: float,
                 params: HebbianParams = None):
        if pre == post:
            raise ConfigurationError(f"Self-connection on neuron {pre} is not allowed")
        self.id = synapse_id
        self.pre = pre
        self.post = post
        self.weight = float(weight)
        self.params = params or HebbianParams()

    def transmit(self, neurons: Sequence[RefractoryNeuron]) -> float:
        if neurons[self.pre].spiked:
            neurons[self.post].potential += self.weight
            return self.weight
        return 0.0

    def hebbian_update(self, neurons: Sequence[RefractoryNeuron]):
        if neurons[self.pre].spiked and neurons[self.post].spiked:
            self.weight = min(self.weight + self.params.eta, self.params.max_weight)
