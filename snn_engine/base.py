"""
Shared data structures, parameters, and utility functions.

All parameter dataclasses and constants used across the engine.

Default values follow the walker demo the engine was written for:
  - Time is measured in seconds, one step per physics frame (~16.7 ms)
  - STDP time constants of 20 ms (Bi & Poo 1998)
  - LTD slightly larger than LTP (Song et al. 2000)
  - Homeostatic threshold drift (Turrigiano & Nelson 2004)
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from .errors import ConfigurationError


# ============================================================================
# CONSTANTS
# ============================================================================

INPUT_SPIKE_THRESHOLD = 0.5   # Input values above this emit a spike
INPUT_SPIKE_WEIGHT = 1.0      # Potential injected by one input spike (LIF)

# Layer tags (also the label prefix of each neuron)
LAYER_INPUT = "Input"
LAYER_HIDDEN_EXC = "HiddenExc"
LAYER_HIDDEN_INH = "HiddenInh"
LAYER_OUTPUT = "Output"
LAYER_HIDDEN = "Hidden"       # Unstructured networks: every non-input unit

LAYERED_ORDER = (LAYER_INPUT, LAYER_HIDDEN_EXC, LAYER_HIDDEN_INH, LAYER_OUTPUT)


def check_count(name: str, value: int):
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ConfigurationError(f"'{name}' must be an integer, got {value!r}")
    if value < 0:
        raise ConfigurationError(f"'{name}' must be >= 0, got {value}")


# ============================================================================
# PARAMETER DATACLASSES
# ============================================================================

@dataclass
class NeuronParams:
    """
    Adaptive-threshold leaky integrate-and-fire parameters.

    The threshold drifts up after a spike and down otherwise, bounded to
    [threshold_min_ratio, threshold_max_ratio] x base threshold.
    """
    threshold: float = 1.0            # Base firing threshold
    leak: float = 0.9                 # Potential retained per step, (0, 1]
    threshold_up: float = 0.01        # Threshold increase after a spike
    threshold_down: float = 0.001     # Threshold decrease otherwise
    threshold_min_ratio: float = 0.5
    threshold_max_ratio: float = 1.5
    firing_rate_decay: float = 0.99   # Per-step decay of the firing-rate trace

    def __post_init__(self):
        if not 0.0 < self.leak <= 1.0:
            raise ConfigurationError(f"'leak' must be in (0, 1], got {self.leak}")
        if self.threshold_min_ratio > self.threshold_max_ratio:
            raise ConfigurationError("'threshold_min_ratio' must be <= 'threshold_max_ratio'")
        if not 0.0 <= self.firing_rate_decay <= 1.0:
            raise ConfigurationError("'firing_rate_decay' must be in [0, 1]")


@dataclass
class RefractoryParams:
    """Fixed-threshold unit with an absolute refractory period (in steps)."""
    threshold: float = 1.0
    refractory_period: int = 5

    def __post_init__(self):
        check_count("refractory_period", self.refractory_period)


@dataclass
class SynapseParams:
    """
    STDP synapse parameters.

    Weights may be negative (signed connections); transmission delay is in
    seconds and a zero delay means delivery on the step after the
    presynaptic spike.
    """
    min_weight: float = -1.0
    max_weight: float = 1.0
    delay: float = 0.0            # Transmission delay (s)
    init_weight_low: float = -0.05
    init_weight_high: float = 0.05

    # Pair-based STDP (Song et al. 2000)
    A_plus: float = 0.01          # Potentiation amplitude
    A_minus: float = 0.012        # Depression amplitude
    tau_plus: float = 20e-3       # Potentiation window (s)
    tau_minus: float = 20e-3      # Depression window (s)

    def __post_init__(self):
        if self.min_weight > self.max_weight:
            raise ConfigurationError("'min_weight' must be <= 'max_weight'")
        if self.init_weight_low > self.init_weight_high:
            raise ConfigurationError("'init_weight_low' must be <= 'init_weight_high'")
        if self.delay < 0:
            raise ConfigurationError(f"'delay' must be >= 0, got {self.delay}")
        if self.tau_plus <= 0 or self.tau_minus <= 0:
            raise ConfigurationError("'tau_plus' and 'tau_minus' must be > 0")
        if self.A_plus < 0 or self.A_minus < 0:
            raise ConfigurationError("'A_plus' and 'A_minus' must be >= 0")


@dataclass
class HebbianParams:
    """Coincidence Hebbian rule: w += eta when pre and post spike together."""
    eta: float = 0.01
    max_weight: float = 1.0

    def __post_init__(self):
        if self.eta < 0:
            raise ConfigurationError(f"'eta' must be >= 0, got {self.eta}")


@dataclass
class SimulationParams:
    """Driver parameters used by examples and network.run()."""
    dt: float = 1.0 / 60.0          # One physics frame (s)
    duration: float = 10.0          # Total simulated time (s)
    input_frequency: float = 0.05   # Rhythmic input angular frequency
    random_input_prob: float = 0.05 # Chance of a random input spike per channel
    seed: Optional[int] = None

    def __post_init__(self):
        if self.dt <= 0:
            raise ConfigurationError(f"'dt' must be > 0, got {self.dt}")
        if self.duration < 0:
            raise ConfigurationError(f"'duration' must be >= 0, got {self.duration}")

    @property
    def n_steps(self) -> int:
        return int(round(self.duration / self.dt))


# ============================================================================
# RANDOMNESS
# ============================================================================

def make_rng(rng: Union[None, int, np.random.RandomState] = None) -> np.random.RandomState:
    """
    Return a RandomState for topology and weight initialisation.

    Accepts an existing RandomState (used as-is), an integer seed, or None
    for an unseeded generator.
    """
    if isinstance(rng, np.random.RandomState):
        return rng
    return np.random.RandomState(rng)


# ============================================================================
# INPUT UTILITIES
# ============================================================================

def encode_inputs(values: Optional[Sequence[float]], n_inputs: int) -> np.ndarray:
    """
    Read input values positionally into a vector of length n_inputs.

    Extra values are ignored and missing values are treated as 0.
    """
    encoded = np.zeros(n_inputs, dtype=float)
    if values is None:
        return encoded
    values = np.asarray(values, dtype=float).ravel()
    n = min(n_inputs, len(values))
    encoded[:n] = values[:n]
    return encoded


def create_rhythmic_input(time: float, frequency: float = 0.05) -> List[float]:
    """
    Two-channel central pattern generator.

    Channel 0 is on during the positive half-cycle of sin(time * frequency),
    channel 1 during the negative half-cycle.
    """
    signal = math.sin(time * frequency)
    return [1.0 if signal > 0 else 0.0, 1.0 if signal < 0 else 0.0]


def add_random_input(values: Sequence[float], prob: float,
                     rng: np.random.RandomState) -> List[float]:
    """Set each channel to 1.0 with probability prob."""
    return [1.0 if rng.random_sample() < prob else float(v) for v in values]


def create_input_sequence(n_steps: int, dt: float = 1.0, frequency: float = 0.05,
                          random_prob: float = 0.0, seed: int = 0) -> List[List[float]]:
    """
    Build a rhythmic input sequence, optionally with random extra spikes.

    Same seed always produces the same sequence.
    """
    rng = np.random.RandomState(seed)
    sequence = []
    for step in range(n_steps):
        values = create_rhythmic_input(step * dt, frequency)
        if random_prob > 0:
            values = add_random_input(values, random_prob, rng)
        sequence.append(values)
    return sequence
