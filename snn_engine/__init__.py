"""
Spiking Neural Network Engine

Tick-driven simulation core: leaky integrate-and-fire neurons, delayed
spike transmission, STDP and coincidence Hebbian plasticity. Three
interchangeable backends share one interface (inject_inputs, step, reset,
read accessors).
"""

# Base types and utilities
from .base import (
    NeuronParams,
    RefractoryParams,
    SynapseParams,
    HebbianParams,
    SimulationParams,
    INPUT_SPIKE_THRESHOLD,
    LAYER_INPUT,
    LAYER_HIDDEN_EXC,
    LAYER_HIDDEN_INH,
    LAYER_OUTPUT,
    LAYER_HIDDEN,
    make_rng,
    encode_inputs,
    create_rhythmic_input,
    add_random_input,
    create_input_sequence,
)

# Errors
from .errors import SNNError, ConfigurationError, SimulationError

# Neuron models
from .neurons import LIFNeuron, RefractoryNeuron

# Synapse models
from .synapses import STDPSynapse, HebbianSynapse

# Engines
from .engine import SpikingNetwork
from .dense import DenseNetwork
from .networks import LayeredSTDPNetwork, HebbianNetwork, create_network

# Visualization
from .visualization import plot_activity, plot_weight_distribution

__version__ = "1.0.0"
__all__ = [
    # Base
    "NeuronParams", "RefractoryParams", "SynapseParams", "HebbianParams",
    "SimulationParams", "INPUT_SPIKE_THRESHOLD",
    "LAYER_INPUT", "LAYER_HIDDEN_EXC", "LAYER_HIDDEN_INH", "LAYER_OUTPUT", "LAYER_HIDDEN",
    "make_rng", "encode_inputs", "create_rhythmic_input", "add_random_input",
    "create_input_sequence",
    # Errors
    "SNNError", "ConfigurationError", "SimulationError",
    # Neurons
    "LIFNeuron", "RefractoryNeuron",
    # Synapses
    "STDPSynapse", "HebbianSynapse",
    # Engines
    "SpikingNetwork", "DenseNetwork", "LayeredSTDPNetwork", "HebbianNetwork",
    "create_network",
    # Visualization
    "plot_activity", "plot_weight_distribution",
]
