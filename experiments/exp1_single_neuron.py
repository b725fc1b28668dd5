"""
Experiment 1: Single AdEx neuron driven by its background current.

Runs one default AdEx neuron (I = 25 pA) and a strongly driven copy for
one second, records (v, w) traces and reports firing rates and ISI
regularity. Adaptation should lengthen the inter-spike interval of the
driven neuron over time.
"""

import logging

import numpy as np

from spikenet import ADEXP, Layer, Network, run
from spikenet import config
from spikenet.analysis.spike_analysis import firing_rates, isi_cv, spike_times
from spikenet.analysis.plotting import plot_raster, plot_state_traces

logger = logging.getLogger(__name__)


def run_experiment(duration_s=1.0, dt=config.DT, drive_pA=600.0):
    neurons = [ADEXP(), ADEXP(I=drive_pA)]
    net = Network([Layer(neurons, np.zeros((2, 1)))])
    result = run(net, np.zeros((int(round(duration_s / dt)), 1)), dt,
                 track_state=True)

    rates = firing_rates(result.outputs, dt)
    trains = spike_times(result.outputs, result.times)
    for i, (rate, train) in enumerate(zip(rates, trains)):
        logger.info(f"neuron {i}: I={neurons[i].I:.1f} pA, rate={rate:.1f} Hz, "
                    f"ISI CV={isi_cv(train):.3f}")
    return result


def main():
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    result = run_experiment()
    plot_state_traces(result, title='AdEx membrane potential',
                      save_name='exp1_adexp_traces.png')
    plot_raster(result, title='AdEx spikes', save_name='exp1_adexp_raster.png')


if __name__ == '__main__':
    main()
