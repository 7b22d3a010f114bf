"""
Neuron models.

  - LIFNeuron: leaky integrate-and-fire with homeostatic adaptive threshold,
    optionally inhibitory (layered STDP network)
  - RefractoryNeuron: fixed threshold with an absolute refractory period
    (unstructured Hebbian network)

Neurons live in a flat list owned by their network and are addressed by
index; connectivity is kept as lists of synapse indices, never as
references to other objects.
"""

import numpy as np
from typing import List

from .base import NeuronParams, RefractoryParams, LAYER_HIDDEN


# ============================================================================
# ADAPTIVE-THRESHOLD LIF NEURON
# ============================================================================

class LIFNeuron:
    """
    Leaky integrate-and-fire neuron with an adaptive threshold.

    Includes:
      - Multiplicative leak applied before the firing check
      - Homeostatic threshold drift driven by the previous step's spike
      - Exponentially decaying firing-rate trace
      - Inhibitory flag: incoming spikes are subtracted instead of added
    """

    def __init__(self, neuron_id: int, label: str, layer: str,
                 is_inhibitory: bool = False, params: NeuronParams = None):
        self.id = neuron_id
        self.label = label
        self.layer = layer
        self.is_inhibitory = is_inhibitory
        self.params = params or NeuronParams()

        self.base_threshold = self.params.threshold
        self.threshold = self.params.threshold
        self.leak = self.params.leak

        # State variables
        self.potential = 0.0
        self.spiked = False
        self.last_spike_time = -np.inf
        self.firing_rate = 0.0

        # Synapse indices into the owning network's synapse list
        self.outgoing: List[int] = []
        self.incoming: List[int] = []

    @property
    def threshold_bounds(self):
        p = self.params
        return (self.base_threshold * p.threshold_min_ratio,
                self.base_threshold * p.threshold_max_ratio)

    def receive_spike(self, weight: float, t: float):
        """Integrate a delivered spike. Potential is not bounded here."""
        if self.is_inhibitory:
            self.potential -= weight
        else:
            self.potential += weight

    def update(self, t: float, dt: float) -> bool:
        """
        Advance neuron by one time step.

        The threshold is adapted from the spike flag of the previous step
        before this step's firing decision overwrites it.

        Returns True if the neuron spiked this step.
        """
        p = self.params

        self.potential *= self.leak

        self.threshold += p.threshold_up if self.spiked else -p.threshold_down
        low, high = self.threshold_bounds
        self.threshold = max(low, min(self.threshold, high))

        if self.potential >= self.threshold:
            self.spiked = True
            self.potential = 0.0
            self.last_spike_time = t
            self.firing_rate += 1.0
        else:
            self.spiked = False

        self.firing_rate *= p.firing_rate_decay

        return self.spiked

    def reset(self):
        """Clear the spike flag. Potential is zeroed by the network reset."""
        self.spiked = False


# ============================================================================
# REFRACTORY NEURON
# ============================================================================

class RefractoryNeuron:
    """Fixed-threshold unit that sits out a number of steps after firing."""

    def __init__(self, neuron_id: int, label: str = None, layer: str = LAYER_HIDDEN,
                 params: RefractoryParams = None):
        self.id = neuron_id
        self.label = label or f"Neuron_{neuron_id}"
        self.layer = layer
        self.params = params or RefractoryParams()
        self.threshold = self.params.threshold

        self.potential = 0.0
        self.spiked = False
        self.refractory_timer = 0

    def update(self, inputs: float = 0.0) -> bool:
        """Returns True if the neuron spiked this step."""
        if self.refractory_timer > 0:
            self.refractory_timer -= 1
            self.spiked = False
            return False

        self.potential += inputs

        if self.potential >= self.threshold:
            self.spiked = True
            self.potential = 0.0
            self.refractory_timer = self.params.refractory_period
        else:
            self.spiked = False

        return self.spiked

    def reset(self):
        self.potential = 0.0
        self.spiked = False
        self.refractory_timer = 0
