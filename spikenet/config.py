"""
spikenet configuration: defaults in one place.

Organized by concern:
  - Time and units
  - Neuron defaults
  - Output / logging
"""

import logging

# =============================================================================
# Time and units
# =============================================================================

DT = 0.001                   # 1 ms default integration step (seconds)
MS_PER_S = 1000.0            # callers pass seconds, models integrate in ms
CURRENT_SCALE = 1e-3         # pA / nF = mV/s -> mV/ms

# =============================================================================
# Neuron defaults
# =============================================================================

# Adaptive exponential integrate-and-fire (Brette & Gerstner 2005)
# Units: mV, ms, pA (I, b, w), nS (a), nF (cm)
ADEXP_PARAMS = {
    'a': 4.0,
    'b': 0.0805,
    'cm': 0.281,
    'v_rest': -70.6,
    'tau_m': 9.3667,
    'tau_w': 144.0,
    'v_thresh': -50.4,
    'delta_T': 2.0,
    'v_reset': -70.6,
    'spike_delta': 30.0,
    'I': 25.0,
}

# Izhikevich 2003, regular spiking
IZHIKEVICH_PARAMS = {
    'a': 0.02,
    'b': 0.2,
    'c': -65.0,
    'd': 8.0,
    'I': 25.0,
    'theta': 30.0,
    'v0': -65.0,
    'u0': -13.0,
}

# Leaky integrate-and-fire
LIF_PARAMS = {
    'tau': 8.0,              # ms
    'R': 10.0,               # MOhm
    'theta': 30.0,           # mV
    'I': 40.0,               # nA
    'v0': -55.0,             # mV
}

# Lognormal CVs used by heterogeneity sampling
ADEXP_PARAMETER_CVS = {
    'a': 0.10,
    'b': 0.10,
    'tau_m': 0.10,
    'tau_w': 0.15,
    'cm': 0.05,
}

# =============================================================================
# Output / logging
# =============================================================================

FIGURE_DIR = "figures"
LOG_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"
