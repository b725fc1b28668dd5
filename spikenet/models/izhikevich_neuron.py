"""
Izhikevich simple spiking neuron model.

Izhikevich 2003 (IEEE Trans Neural Netw 14:1569-1572):
  dv/dt = 0.04 v^2 + 5 v + 140 - u + I
  du/dt = a (b v - u)
  v >= theta  ->  spike; v <- c, u <- u + d

Same spike/reset timing as the AdEx model: the peak is clamped to theta on
the spiking step and the reset is applied on the next update.
"""

from dataclasses import dataclass

import numpy as np

from spikenet.config import IZHIKEVICH_PARAMS, MS_PER_S
from spikenet.models.base import NeuronModel, check_finite, total_input

V, U, FIRED = 0, 1, 2


@dataclass(frozen=True)
class Izhikevich(NeuronModel):
    """Izhikevich neuron parameters (regular-spiking defaults)."""

    a: float = IZHIKEVICH_PARAMS['a']
    b: float = IZHIKEVICH_PARAMS['b']
    c: float = IZHIKEVICH_PARAMS['c']
    d: float = IZHIKEVICH_PARAMS['d']
    I: float = IZHIKEVICH_PARAMS['I']
    theta: float = IZHIKEVICH_PARAMS['theta']
    v0: float = IZHIKEVICH_PARAMS['v0']
    u0: float = IZHIKEVICH_PARAMS['u0']

    state_size = 3

    def reset(self):
        return np.array([self.v0, self.u0, 0.0])

    def update(self, state, synaptic_input, dt, t=0.0, force_spike=False):
        dt_ms = dt * MS_PER_S

        v = state[V] + total_input(synaptic_input)
        u = state[U]
        if state[FIRED] or force_spike:
            v = self.c
            u += self.d

        dv = 0.04 * v * v + 5.0 * v + 140.0 - u + self.I
        du = self.a * (self.b * v - u)
        v += dv * dt_ms
        u += du * dt_ms
        check_finite(self, v, u)

        spiked = v >= self.theta
        if spiked:
            v = self.theta

        return bool(spiked), np.array([v, u, 1.0 if spiked else 0.0])

    def get_state(self, state):
        return float(state[V]), float(state[U])
