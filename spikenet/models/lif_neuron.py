"""
Leaky integrate-and-fire neuron.

  tau dv/dt = -(v - v0) + R I

Unlike the AdEx and Izhikevich models the reset is immediate: on the step
where v exceeds theta the neuron spikes and v returns to v0.
"""

from dataclasses import dataclass

import numpy as np

from spikenet.config import LIF_PARAMS, MS_PER_S
from spikenet.models.base import NeuronModel, check_finite, total_input

V = 0


@dataclass(frozen=True)
class LIF(NeuronModel):
    """Leaky integrate-and-fire parameters."""

    tau: float = LIF_PARAMS['tau']
    R: float = LIF_PARAMS['R']
    theta: float = LIF_PARAMS['theta']
    I: float = LIF_PARAMS['I']
    v0: float = LIF_PARAMS['v0']

    state_size = 1
    positive_params = ('tau',)

    def reset(self):
        return np.array([self.v0])

    def update(self, state, synaptic_input, dt, t=0.0, force_spike=False):
        dt_ms = dt * MS_PER_S

        v = state[V] + total_input(synaptic_input)
        v += (-(v - self.v0) + self.R * self.I) / self.tau * dt_ms
        check_finite(self, v)

        spiked = force_spike or v > self.theta
        if spiked:
            v = self.v0

        return bool(spiked), np.array([v])

    def get_state(self, state):
        return (float(state[V]),)
