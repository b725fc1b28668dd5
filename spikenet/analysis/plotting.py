"""
Plotting utilities for simulation results.
"""

import os

import numpy as np
import matplotlib.pyplot as plt

from spikenet.config import FIGURE_DIR


def ensure_figures_dir(figure_dir=FIGURE_DIR):
    os.makedirs(figure_dir, exist_ok=True)


def _save(fig, save_name, figure_dir):
    if save_name:
        ensure_figures_dir(figure_dir)
        fig.savefig(os.path.join(figure_dir, save_name), dpi=150,
                    bbox_inches='tight')


def plot_raster(result, layer=None, title='', save_name=None,
                figure_dir=FIGURE_DIR):
    """Spike raster of one layer.

    Parameters
    ----------
    result : SimulationResult
    layer : int, optional
        Layer index; requires a run with record_all=True. Defaults to the
        final layer's outputs.
    """
    if layer is None:
        raster = result.outputs
    else:
        if result.layer_outputs is None:
            raise ValueError("per-layer outputs were not recorded (record_all=False)")
        raster = result.layer_outputs[layer]

    fig, ax = plt.subplots(figsize=(12, 4))
    events = [result.times[raster[:, i] > 0] for i in range(raster.shape[1])]
    ax.eventplot(events, lineoffsets=np.arange(len(events)), linelengths=0.8,
                 color='k')
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Neuron')
    ax.set_xlim(result.times[0] if len(result.times) else 0.0,
                result.times[-1] + result.dt if len(result.times) else result.dt)
    ax.set_title(title if title else 'Spike raster')

    plt.tight_layout()
    _save(fig, save_name, figure_dir)
    plt.close(fig)
    return fig


def plot_state_traces(result, layer=0, neurons=None, variable=0, title='',
                      save_name=None, figure_dir=FIGURE_DIR):
    """Plot one state variable (default: membrane potential) over time.

    Requires a run with track_state=True.
    """
    if result.states is None:
        raise ValueError("states were not recorded (track_state=False)")
    states = result.states[layer]
    neurons = list(range(states.shape[1]) if neurons is None else neurons)

    fig, ax = plt.subplots(figsize=(12, 4))
    for i in neurons:
        ax.plot(result.times, states[:, i, variable], linewidth=0.7,
                label=f'neuron {i}')
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('v (mV)' if variable == 0 else f'state[{variable}]')
    ax.set_title(title if title else f'Layer {layer} state')
    if len(neurons) <= 10:
        ax.legend(fontsize=8)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    _save(fig, save_name, figure_dir)
    plt.close(fig)
    return fig
