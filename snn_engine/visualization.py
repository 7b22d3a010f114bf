"""
Visualization functions for any engine backend.

Plots are built only from the read accessors and the histories recorded by
network.run(); they never touch engine state.
  - plot_activity: spike raster coloured by layer + weight evolution
  - plot_weight_distribution: weight histogram + pre/post weight matrix
"""

import numpy as np
import matplotlib.pyplot as plt

from .base import LAYER_INPUT, LAYER_HIDDEN_EXC, LAYER_HIDDEN_INH, LAYER_OUTPUT, LAYER_HIDDEN


LAYER_COLORS = {
    LAYER_INPUT: 'tab:green',
    LAYER_HIDDEN_EXC: 'tab:blue',
    LAYER_HIDDEN_INH: 'tab:red',
    LAYER_OUTPUT: 'tab:purple',
    LAYER_HIDDEN: 'tab:gray',
}


def _finish(fig, save_path: str, show: bool):
    fig.tight_layout()
    fig.savefig(save_path, dpi=150)
    print(f"Results saved to: {save_path}")
    if show:
        plt.show()
    else:
        plt.close(fig)


def plot_activity(network, save_path: str = 'activity.png', show: bool = True):
    """Visualise a run: spike raster by layer and mean-weight evolution."""
    fig, axes = plt.subplots(2, 1, figsize=(12, 8))
    layers = network.layers

    # Spike raster
    ax = axes[0]
    if network.spike_history:
        times, neuron_ids = zip(*network.spike_history)
        times = np.array(times)
        neuron_ids = np.array(neuron_ids)
        for layer, color in LAYER_COLORS.items():
            mask = np.array([layers[i] == layer for i in neuron_ids], dtype=bool)
            if mask.any():
                ax.scatter(times[mask], neuron_ids[mask], s=10, c=color,
                           marker='|', label=layer)
        ax.legend(loc='upper right')
    ax.set_xlabel('Time')
    ax.set_ylabel('Neuron ID')
    ax.set_title('Spike Raster Plot')
    ax.set_ylim(-0.5, max(network.n_neurons, 1) - 0.5)
    ax.grid(True, alpha=0.3)

    # Weight evolution
    ax = axes[1]
    if network.weight_snapshots:
        ax.plot(network.weight_snapshots, 'b-o', linewidth=2, markersize=4)
        ax.axhline(y=network.weight_snapshots[0], color='r', linestyle='--',
                   alpha=0.5, label='Initial weight')
        ax.legend()
    ax.set_xlabel('Snapshot')
    ax.set_ylabel('Mean Weight')
    ax.set_title('Weight Evolution')
    ax.grid(True, alpha=0.3)

    _finish(fig, save_path, show)


def plot_weight_distribution(network, save_path: str = 'weights.png', show: bool = True):
    """Visualise current weights: histogram and pre x post matrix."""
    fig, axes = plt.subplots(1, 2, figsize=(14, 6))
    weights = network.weights
    endpoints = network.synapse_endpoints

    ax = axes[0]
    if len(weights):
        ax.hist(weights, bins=30, color='steelblue', edgecolor='white', alpha=0.8)
        ax.axvline(x=float(np.mean(weights)), color='r', linestyle='--',
                   label=f'Mean: {np.mean(weights):.3f}')
        ax.legend()
    ax.set_xlabel('Weight')
    ax.set_ylabel('Count')
    ax.set_title('Weight Distribution')
    ax.grid(True, alpha=0.3)

    # Duplicate pairs (unstructured networks) are summed
    ax = axes[1]
    n = network.n_neurons
    matrix = np.zeros((n, n))
    if len(weights):
        np.add.at(matrix, (endpoints[:, 0], endpoints[:, 1]), weights)
    limit = max(float(np.abs(matrix).max()) if n else 0.0, 1e-9)
    im = ax.imshow(matrix, cmap='coolwarm', vmin=-limit, vmax=limit)
    fig.colorbar(im, ax=ax, label='Weight')
    ax.set_xlabel('Post-synaptic neuron')
    ax.set_ylabel('Pre-synaptic neuron')
    ax.set_title('Weight Matrix')

    _finish(fig, save_path, show)
