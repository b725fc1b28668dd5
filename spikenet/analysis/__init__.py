from spikenet.analysis.spike_analysis import spike_times, firing_rates, population_rate, isi_cv
from spikenet.analysis.plotting import plot_raster, plot_state_traces
