"""
Example 01: Rhythmic Drive Through a Layered STDP Network

Drives the 2-6-2-4 walker controller with a two-channel central pattern
generator plus sparse random spikes, and reports which output neurons fire.
The output spikes are what a motor layer would turn into joint torques.

Level: Basic
Runtime: ~5 seconds
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from snn_engine.base import SimulationParams, LAYER_OUTPUT, create_input_sequence
from snn_engine.networks import LayeredSTDPNetwork
from snn_engine.visualization import plot_activity, plot_weight_distribution


def main():
    print("=== Example 01: Walker CPG ===\n")

    sim = SimulationParams(dt=1.0 / 60.0, duration=20.0, input_frequency=0.5,
                           random_input_prob=0.05, seed=42)

    network = LayeredSTDPNetwork(2, 6, 2, 4, rng=sim.seed)
    inputs = create_input_sequence(sim.n_steps, dt=sim.dt,
                                   frequency=sim.input_frequency,
                                   random_prob=sim.random_input_prob,
                                   seed=sim.seed)

    initial_w = network.mean_weight()
    spikes = network.run(inputs, dt=sim.dt, report_every=200)

    outputs = set(network.layer_indices(LAYER_OUTPUT))
    labels = network.labels
    counts = {labels[i]: 0 for i in sorted(outputs)}
    for _, nid in spikes:
        if nid in outputs:
            counts[labels[nid]] += 1

    print(f"\n=== Results ===")
    for label, count in counts.items():
        print(f"  {label}: {count} spikes")
    print(f"Mean weight: {initial_w:.4f} -> {network.mean_weight():.4f}")

    plot_activity(network, save_path='01_walker_cpg_activity.png')
    plot_weight_distribution(network, save_path='01_walker_cpg_weights.png')


if __name__ == "__main__":
    main()
