"""
Example 02: Coincidence Hebbian Learning

Repeatedly presents two input patterns to an unstructured network and
tracks how synapses between co-active neurons saturate towards 1.0.
Weights never decrease under the coincidence rule.

Level: Basic
Runtime: ~5 seconds
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
from snn_engine.base import RefractoryParams
from snn_engine.networks import HebbianNetwork
from snn_engine.visualization import plot_activity


def main():
    print("=== Example 02: Coincidence Hebbian Learning ===\n")

    n_neurons = 40
    n_inputs = 10
    network = HebbianNetwork(n_neurons, 400, eta=0.05, n_inputs=n_inputs,
                             params=RefractoryParams(threshold=1.0, refractory_period=3),
                             rng=7)

    patterns = {
        'A': [1.0] * 5 + [0.0] * 5,
        'B': [0.0] * 5 + [1.0] * 5,
    }

    for epoch in range(5):
        for name, pattern in patterns.items():
            network.reset()
            network.run([pattern] * 20, dt=1.0)
        print(f"  Epoch {epoch + 1} | Mean weight: {network.mean_weight():.4f}")

    weights = network.weights
    print(f"\nSaturated synapses: {int(np.sum(weights >= 1.0))} / {network.n_synapses}")

    plot_activity(network, save_path='02_hebbian_activity.png')


if __name__ == "__main__":
    main()
