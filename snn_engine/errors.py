"""
Exception hierarchy for the simulation engine.

SNNError (base)
├── ConfigurationError - invalid construction parameters
└── SimulationError    - invalid arguments to a running simulation

Numeric bounds (weights, thresholds) are enforced by clamping, so there is
no exception for a value drifting out of range.
"""


class SNNError(Exception):
    """Base exception for all engine-specific errors."""


class ConfigurationError(SNNError, ValueError):
    """Invalid configuration parameters.

    Raised at construction time: negative neuron/synapse counts, leak outside
    (0, 1], non-positive time constants, inverted weight bounds, unknown
    backend names.
    """


class SimulationError(SNNError, ValueError):
    """Invalid arguments passed to step() or run()."""
