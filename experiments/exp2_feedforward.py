"""
Experiment 2: Heterogeneous two-layer feed-forward network.

  Poisson input (20 channels) --random--> layer 0 (40 AdEx, recurrent)
                                             |
                                block-diagonal (4 groups)
                                             v
                                          layer 1 (20 AdEx)

Layer 0 parameters are sampled with LogNormal heterogeneity. Reports
per-layer firing rates and the population rate of the output layer.
"""

import logging

import numpy as np

from spikenet import ADEXP, Network, batch_layer_construction, run, sample_parameters
from spikenet import config
from spikenet.analysis.spike_analysis import firing_rates, population_rate
from spikenet.analysis.plotting import plot_raster
from spikenet.population.weights import (
    block_diagonal_weights, random_weights, weight_stats,
)

logger = logging.getLogger(__name__)


def poisson_input(n_channels, n_steps, rate_hz, dt, rng):
    """Binary Poisson spike trains, shape (n_steps, n_channels)."""
    return (rng.random((n_steps, n_channels)) < rate_hz * dt).astype(float)


def build_network(seed=42):
    rng = np.random.default_rng(seed)

    w_in = random_weights(40, 20, p=0.3, total_weight=30.0, seed=seed)
    w_rec = -random_weights(40, 40, p=0.1, total_weight=5.0, autapses=False,
                            seed=seed + 1)
    hidden = batch_layer_construction(
        ADEXP, w_in, 40, params=sample_parameters(40, rng),
        recurrent_weights=w_rec)

    # Each group of 5 output neurons pools one group of 10 hidden neurons
    w_out = block_diagonal_weights([np.full((5, 10), 8.0)] * 4)
    weight_stats(w_out)
    output = batch_layer_construction(ADEXP, w_out, 20, params={'I': 0.0})

    return Network([hidden, output])


def run_experiment(duration_s=2.0, dt=config.DT, rate_hz=40.0, seed=42):
    rng = np.random.default_rng(seed + 100)
    n_steps = int(round(duration_s / dt))
    net = build_network(seed)
    result = run(net, poisson_input(net.n_inputs, n_steps, rate_hz, dt, rng),
                 dt, record_all=True)

    for k, raster in enumerate(result.layer_outputs):
        logger.info(f"layer {k}: mean rate {firing_rates(raster, dt).mean():.1f} Hz")
    _, rate = population_rate(result.outputs, dt, bin_ms=20.0)
    logger.info(f"output population rate: peak {rate.max():.1f} Hz")
    return result


def main():
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    result = run_experiment()
    plot_raster(result, layer=0, title='Hidden layer',
                save_name='exp2_hidden_raster.png')
    plot_raster(result, title='Output layer', save_name='exp2_output_raster.png')


if __name__ == '__main__':
    main()
