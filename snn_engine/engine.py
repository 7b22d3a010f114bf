"""
Shared engine interface and topology construction.

Every backend (layered STDP, unstructured Hebbian, dense arrays) exposes the
same capability set so callers and tests can swap them:

    inject_inputs(values)        external drive into the input neurons
    step(current_time, dt)       one tick; returns the ids that fired
    reset()                      clear transient state, keep learned state

plus read-only accessors (spiked, labels, layers, weights, endpoints) for
rendering and motor-output consumers. Accessors return copies; all mutation
goes through the three methods above.
"""

import numpy as np
from typing import List, Optional, Sequence, Tuple

from .base import (
    LAYER_INPUT, LAYER_OUTPUT, LAYER_HIDDEN, LAYERED_ORDER, check_count,
)
from .errors import ConfigurationError, SimulationError


# ============================================================================
# TOPOLOGY BUILDERS
# ============================================================================

def layered_neuron_layers(n_inputs: int, n_hidden_excitatory: int,
                          n_hidden_inhibitory: int, n_outputs: int) -> List[str]:
    """Layer tag of every neuron, in construction order."""
    sizes = (n_inputs, n_hidden_excitatory, n_hidden_inhibitory, n_outputs)
    names = ("n_inputs", "n_hidden_excitatory", "n_hidden_inhibitory", "n_outputs")
    for name, size in zip(names, sizes):
        check_count(name, size)
    layers = []
    for layer, size in zip(LAYERED_ORDER, sizes):
        layers.extend([layer] * size)
    return layers


def layered_synapse_pairs(layers: Sequence[str]) -> List[Tuple[int, int]]:
    """
    All ordered (pre, post) pairs allowed in the layered architecture.

    Excluded: self-loops, synapses leaving the output layer, synapses
    entering the input layer.
    """
    pairs = []
    n = len(layers)
    for i in range(n):
        if layers[i] == LAYER_OUTPUT:
            continue
        for j in range(n):
            if i == j or layers[j] == LAYER_INPUT:
                continue
            pairs.append((i, j))
    return pairs


def sample_random_pairs(n_neurons: int, n_synapses: int,
                        rng: np.random.RandomState) -> Tuple[np.ndarray, np.ndarray]:
    """
    Draw n_synapses random (pre, post) pairs, redrawing any self-pair.

    Duplicate pairs are allowed.
    """
    check_count("n_neurons", n_neurons)
    check_count("n_synapses", n_synapses)
    if n_synapses > 0 and n_neurons < 2:
        raise ConfigurationError(
            f"Cannot place {n_synapses} synapses without self-loops "
            f"among {n_neurons} neuron(s)"
        )

    pre = np.zeros(n_synapses, dtype=np.int64)
    post = np.zeros(n_synapses, dtype=np.int64)
    for k in range(n_synapses):
        while True:
            i = rng.randint(n_neurons)
            j = rng.randint(n_neurons)
            if i != j:
                break
        pre[k] = i
        post[k] = j
    return pre, post


def unstructured_layers(n_neurons: int, n_inputs: int) -> List[str]:
    return [LAYER_INPUT if i < n_inputs else LAYER_HIDDEN for i in range(n_neurons)]


def resolve_n_inputs(n_neurons: int, n_inputs: Optional[int]) -> int:
    if n_inputs is None:
        return n_neurons
    check_count("n_inputs", n_inputs)
    if n_inputs > n_neurons:
        raise ConfigurationError(
            f"'n_inputs' ({n_inputs}) cannot exceed 'n_neurons' ({n_neurons})"
        )
    return n_inputs


# ============================================================================
# ENGINE INTERFACE
# ============================================================================

class SpikingNetwork:
    """
    Base class for all simulation backends.

    Subclasses implement inject_inputs, step, reset and the accessor
    properties; run() and the summary helpers are shared.
    """

    def __init__(self):
        self.current_time = 0.0
        self.spike_history: List[Tuple[float, int]] = []
        self.weight_snapshots: List[float] = []

    # ---- mutation ----------------------------------------------------------

    def inject_inputs(self, values: Optional[Sequence[float]]):
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement inject_inputs()"
        )

    def step(self, current_time: float, dt: float,
             inputs: Optional[Sequence[float]] = None) -> List[int]:
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement step()"
        )

    def reset(self):
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement reset()"
        )

    # ---- read accessors ----------------------------------------------------

    @property
    def n_neurons(self) -> int:
        return len(self.labels)

    @property
    def n_synapses(self) -> int:
        return len(self.weights)

    @property
    def labels(self) -> List[str]:
        raise NotImplementedError

    @property
    def layers(self) -> List[str]:
        raise NotImplementedError

    @property
    def spiked(self) -> np.ndarray:
        raise NotImplementedError

    @property
    def potentials(self) -> np.ndarray:
        raise NotImplementedError

    @property
    def weights(self) -> np.ndarray:
        raise NotImplementedError

    @property
    def synapse_endpoints(self) -> np.ndarray:
        raise NotImplementedError

    def layer_indices(self, layer: str) -> List[int]:
        """Neuron ids carrying the given layer tag, in id order."""
        return [i for i, tag in enumerate(self.layers) if tag == layer]

    def mean_weight(self) -> float:
        weights = self.weights
        return float(np.mean(weights)) if len(weights) else 0.0

    # ---- driver ------------------------------------------------------------

    @staticmethod
    def _check_dt(dt: float):
        if not dt > 0:
            raise SimulationError(f"'dt' must be > 0, got {dt}")

    def run(self, input_sequence: Sequence[Sequence[float]], dt: float = 1.0,
            start_time: float = 0.0,
            report_every: Optional[int] = None) -> List[Tuple[float, int]]:
        """
        Step the network once per input vector.

        Spikes are appended to spike_history as (time, neuron_id) and the
        mean weight is snapshotted at the start, every report_every steps
        and at the end. Returns the spikes of this run only.
        """
        self._check_dt(dt)
        n_steps = len(input_sequence)

        print(f"Running {n_steps} steps (dt={dt:g})...")
        print(f"Network: {self.n_neurons} neurons, {self.n_synapses} synapses")

        if not self.weight_snapshots:
            self.weight_snapshots.append(self.mean_weight())

        run_spikes: List[Tuple[float, int]] = []
        for k, values in enumerate(input_sequence):
            t = start_time + k * dt
            fired = self.step(t, dt, values)
            run_spikes.extend((t, nid) for nid in fired)

            if report_every and (k + 1) % report_every == 0:
                mean_w = self.mean_weight()
                self.weight_snapshots.append(mean_w)
                print(f"  Step {k + 1:6d}/{n_steps} | "
                      f"Spikes: {len(run_spikes):6d} | "
                      f"Mean weight: {mean_w:.4f}")

        self.weight_snapshots.append(self.mean_weight())
        self.spike_history.extend(run_spikes)
        print(f"Run complete! Total spikes: {len(run_spikes)}")
        return run_spikes
