"""
Adaptive exponential integrate-and-fire (AdEx) neuron model.

Based on Brette & Gerstner 2005 (J Neurophysiol 94:3637-3642).

Two state variables:
  v  - membrane potential (mV)
  w  - adaptation current (pA)

  dv/dt = [(v_rest - v) + delta_T * exp((v - v_thresh) / delta_T)] / tau_m
          + (I - w) / cm
  dw/dt = [a * (v - v_rest) - w] / tau_w

Units: mV, ms, pA (I, b, w), nS (a), nF (cm). (I - w) / cm comes out in
mV/s and is scaled by CURRENT_SCALE to mV/ms, so the current term is
(I - w) / cm * 1e-3 rather than the bare (I - w) / cm. Read literally in
mV/ms, the default 25 pA background would push a resting neuron about
89 mV in one 1 ms step; with the scale it rises by about 0.09 mV.

Spike/reset timing: when v crosses v_thresh the neuron reports a spike and
its potential is clamped to the peak value spike_delta. The reset to v_reset
(and the w += b adaptation jump) is applied at the start of the *next*
update, so the peak is visible for exactly one step.
"""

import math
from dataclasses import dataclass

import numpy as np

from spikenet.config import ADEXP_PARAMS, CURRENT_SCALE, MS_PER_S
from spikenet.models.base import NeuronModel, check_finite, total_input
from spikenet.errors import NumericalInstability

# Indices into the state array
V, W, FIRED = 0, 1, 2


@dataclass(frozen=True)
class ADEXP(NeuronModel):
    """Adaptive exponential integrate-and-fire neuron parameters.

    The object itself is immutable; state arrays are created by ``reset``
    and advanced by ``update``.
    """

    a: float = ADEXP_PARAMS['a']                  # subthreshold adaptation (nS)
    b: float = ADEXP_PARAMS['b']                  # spike-triggered adaptation (pA)
    cm: float = ADEXP_PARAMS['cm']                # membrane capacitance (nF)
    v_rest: float = ADEXP_PARAMS['v_rest']        # resting potential (mV)
    tau_m: float = ADEXP_PARAMS['tau_m']          # membrane time constant (ms)
    tau_w: float = ADEXP_PARAMS['tau_w']          # adaptation time constant (ms)
    v_thresh: float = ADEXP_PARAMS['v_thresh']    # spike threshold (mV)
    delta_T: float = ADEXP_PARAMS['delta_T']      # slope factor (mV)
    v_reset: float = ADEXP_PARAMS['v_reset']      # reset potential (mV)
    spike_delta: float = ADEXP_PARAMS['spike_delta']  # peak potential (mV)
    I: float = ADEXP_PARAMS['I']                  # background current (pA)

    state_size = 3
    positive_params = ('cm', 'tau_m', 'tau_w', 'delta_T')

    def reset(self):
        return np.array([self.v_rest, 0.0, 0.0])

    def derivatives(self, v, w):
        """Return (dv/dt, dw/dt) in mV/ms and pA/ms."""
        try:
            spike_term = self.delta_T * math.exp((v - self.v_thresh) / self.delta_T)
        except OverflowError:
            raise NumericalInstability(
                f"exponential term overflowed at v={v} mV") from None
        dv = ((self.v_rest - v) + spike_term) / self.tau_m \
            + (self.I - w) / self.cm * CURRENT_SCALE
        dw = (self.a * (v - self.v_rest) - w) / self.tau_w
        return dv, dw

    def update(self, state, synaptic_input, dt, t=0.0, force_spike=False):
        """Advance the neuron by one forward-Euler step.

        Parameters
        ----------
        state : np.ndarray
            Current [v, w, fired] state. Not modified.
        synaptic_input : float or array-like
            Voltage increment (mV) added to v before integration. Vector
            inputs are summed.
        dt : float
            Timestep in seconds.
        t : float
            Simulation time (s). The model is autonomous; t is unused.
        force_spike : bool
            Apply the post-spike reset this step regardless of history.

        Returns
        -------
        spiked : bool
        new_state : np.ndarray
        """
        dt_ms = dt * MS_PER_S

        v = state[V] + total_input(synaptic_input)
        w = state[W]
        if state[FIRED] or force_spike:
            v = self.v_reset
            w += self.b

        dv, dw = self.derivatives(v, w)
        v += dv * dt_ms
        w += dw * dt_ms
        check_finite(self, v, w)

        spiked = v > self.v_thresh
        if spiked:
            v = self.spike_delta

        return bool(spiked), np.array([v, w, 1.0 if spiked else 0.0])

    def get_state(self, state):
        return float(state[V]), float(state[W])
