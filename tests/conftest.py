import matplotlib

matplotlib.use('Agg')

import numpy as np
import pytest

from spikenet import ADEXP


@pytest.fixture
def neuron():
    return ADEXP()


@pytest.fixture
def rest_state(neuron):
    return neuron.reset()


def euler_adexp(neuron, v, w, dt_ms):
    """Hand-written forward Euler step of the AdEx equations."""
    dv = ((neuron.v_rest - v)
          + neuron.delta_T * np.exp((v - neuron.v_thresh) / neuron.delta_T)) / neuron.tau_m \
        + (neuron.I - w) / neuron.cm * 1e-3
    dw = (neuron.a * (v - neuron.v_rest) - w) / neuron.tau_w
    return v + dv * dt_ms, w + dw * dt_ms
