"""
Spike-train analysis on recorded spike rasters.

A raster is a (T, N) array of 0/1 outputs, one row per timestep, as stored
in SimulationResult.outputs / layer_outputs.
"""

import numpy as np


def spike_times(raster, times):
    """Spike times of every neuron.

    Parameters
    ----------
    raster : np.ndarray (T, N)
        Binary spike raster.
    times : np.ndarray (T,)
        Step times (s).

    Returns
    -------
    spike_times : list of np.ndarray
        One array of spike times (s) per neuron.
    """
    raster = np.asarray(raster)
    times = np.asarray(times)
    if raster.shape[0] != times.shape[0]:
        raise ValueError(
            f"raster has {raster.shape[0]} steps but {times.shape[0]} times")
    return [times[raster[:, i] > 0] for i in range(raster.shape[1])]


def firing_rates(raster, dt):
    """Mean firing rate per neuron (Hz)."""
    raster = np.asarray(raster)
    duration_s = raster.shape[0] * dt
    if duration_s == 0:
        return np.zeros(raster.shape[1])
    return raster.sum(axis=0) / duration_s


def population_rate(raster, dt, bin_ms=10.0):
    """Population firing rate in bins.

    Returns
    -------
    bin_starts : np.ndarray
        Bin start times (s).
    rate : np.ndarray
        Mean rate per neuron within each bin (Hz).
    """
    raster = np.asarray(raster)
    steps_per_bin = max(1, int(round(bin_ms / (dt * 1000.0))))
    n_bins = raster.shape[0] // steps_per_bin
    n_neurons = max(raster.shape[1], 1)
    trimmed = raster[:n_bins * steps_per_bin]
    counts = trimmed.reshape(n_bins, steps_per_bin, raster.shape[1]).sum(axis=(1, 2))
    rate = counts / (n_neurons * steps_per_bin * dt)
    return np.arange(n_bins) * steps_per_bin * dt, rate


def isi_cv(spike_times_s):
    """Coefficient of variation of inter-spike intervals.

    Returns nan for fewer than three spikes.
    """
    spike_times_s = np.asarray(spike_times_s)
    if len(spike_times_s) < 3:
        return float('nan')
    isi = np.diff(spike_times_s)
    mean = isi.mean()
    if mean == 0:
        return float('nan')
    return float(isi.std() / mean)
