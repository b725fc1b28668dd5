"""
Network assembly: ordered layers plus routing between them.

Architecture (default routing, feed-forward chain):
  external input --W0--> layer 0 --W1--> layer 1 --> ... --> layer L-1
                            ^  |
                            +--+  (optional per-layer recurrence)

Routing: every layer names its sources, an ordered list whose outputs are
concatenated into the layer's input vector. A source is either 'input'
(the external input at the current step) or the index of another layer.
Layer-to-layer traffic always carries the source's output from the
*previous* step, so a spike emitted by layer k at step t arrives at its
targets at step t+1. Layers are evaluated in list order, and no layer ever
sees another layer's same-step output.

The one-step delay is intentional: layer k does not consume layer k-1's
spikes from the same step. Every route, forward or backward, then has the
same timing, and routes to later layers need no special case.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from spikenet.errors import DimensionMismatch

logger = logging.getLogger(__name__)

INPUT = 'input'


def feedforward_routing(n_layers):
    """Default chain: layer 0 <- input, layer k <- layer k-1."""
    return [(INPUT,)] + [(k - 1,) for k in range(1, n_layers)]


class Network:
    """Ordered collection of Layers with explicit routing.

    Parameters
    ----------
    layers : sequence of Layer
    routing : sequence, optional
        routing[k] is a source or a sequence of sources for layer k. A
        source is 'input' or a layer index other than k (self-feedback is
        configured on the Layer via recurrent weights). Defaults to a
        feed-forward chain.
    """

    def __init__(self, layers, routing=None):
        self.layers = list(layers)
        if not self.layers:
            raise ValueError("a network needs at least one layer")
        n_layers = len(self.layers)

        if routing is None:
            routing = feedforward_routing(n_layers)
        if len(routing) != n_layers:
            raise ValueError(
                f"routing has {len(routing)} entries for {n_layers} layers")
        self.routing = [self._normalize_sources(k, r) for k, r in enumerate(routing)]

        self.n_inputs = self._infer_input_size()
        self.n_outputs = self.layers[-1].N

        # Pre-allocated: per-layer input assembly and previous-step outputs
        self._inputs = [np.zeros(layer.n_inputs) for layer in self.layers]
        self._prev_outputs = [np.zeros(layer.N) for layer in self.layers]
        self._slices = []
        for k, sources in enumerate(self.routing):
            offset = 0
            slices = []
            for src in sources:
                size = self._source_size(src)
                slices.append((src, slice(offset, offset + size)))
                offset += size
            if offset != self.layers[k].n_inputs:
                raise DimensionMismatch(
                    f"layer {k} expects {self.layers[k].n_inputs} inputs but its "
                    f"sources {list(sources)} provide {offset}")
            self._slices.append(slices)

        logger.info(f"Network: {n_layers} layers, sizes="
                    f"{[layer.N for layer in self.layers]}, "
                    f"n_inputs={self.n_inputs}, routing={self.routing}")

    def _normalize_sources(self, k, entry):
        if isinstance(entry, (str, int, np.integer)):
            entry = (entry,)
        sources = []
        for src in entry:
            if isinstance(src, str):
                if src != INPUT:
                    raise ValueError(f"layer {k}: unknown source {src!r}")
                sources.append(INPUT)
                continue
            src = int(src)
            if not 0 <= src < len(self.layers):
                raise ValueError(f"layer {k}: source layer {src} does not exist")
            if src == k:
                raise ValueError(
                    f"layer {k} cannot route to itself; "
                    f"use recurrent weights on the Layer")
            sources.append(src)
        if not sources:
            raise ValueError(f"layer {k} has no sources")
        return tuple(sources)

    def _infer_input_size(self):
        """External input length implied by the layers that consume it."""
        size = None
        for k, sources in enumerate(self.routing):
            n_external = sources.count(INPUT)
            if n_external == 0:
                continue
            internal = sum(self.layers[s].N for s in sources if s != INPUT)
            remaining = self.layers[k].n_inputs - internal
            if remaining < 0 or remaining % n_external:
                raise DimensionMismatch(
                    f"layer {k} has {self.layers[k].n_inputs} inputs, "
                    f"cannot fit {internal} internal inputs plus external input")
            implied = remaining // n_external
            if size is not None and implied != size:
                raise DimensionMismatch(
                    f"layer {k} implies external input length {implied}, "
                    f"an earlier layer implies {size}")
            size = implied
        if size is None:
            raise ValueError("no layer receives the external input")
        return size

    def _source_size(self, src):
        return self.n_inputs if src == INPUT else self.layers[src].N

    @property
    def outputs(self):
        """Current output buffers of every layer, in layer order."""
        return tuple(layer.output for layer in self.layers)

    @property
    def output(self):
        return self.layers[-1].output

    def step(self, x, dt, t=0.0):
        """Advance the whole network by one timestep.

        Parameters
        ----------
        x : array-like, shape (n_inputs,)
            External input at this step.
        dt : float
            Timestep in seconds.
        t : float
            Simulation time in seconds.

        Returns
        -------
        output : np.ndarray
            Final layer's output buffer (overwritten by the next step).
        """
        x = np.asarray(x, dtype=np.float64)
        if x.shape != (self.n_inputs,):
            raise DimensionMismatch(
                f"network expects input of length {self.n_inputs}, "
                f"got shape {x.shape}")

        for k, layer in enumerate(self.layers):
            buf = self._inputs[k]
            for src, sl in self._slices[k]:
                buf[sl] = x if src == INPUT else self._prev_outputs[src]
            layer.step(buf, dt, t)

        for prev, layer in zip(self._prev_outputs, self.layers):
            np.copyto(prev, layer.output)

        return self.output

    def reset(self):
        """Return every layer to its initial, history-free state."""
        for layer in self.layers:
            layer.reset()
        for buf in self._inputs:
            buf.fill(0.0)
        for prev in self._prev_outputs:
            prev.fill(0.0)

    def get_state(self):
        """Per-layer lists of per-neuron diagnostic state tuples."""
        return [layer.get_state() for layer in self.layers]

    def __len__(self):
        return len(self.layers)

    def __repr__(self):
        return (f"Network(layers={[layer.N for layer in self.layers]}, "
                f"n_inputs={self.n_inputs})")


def simulate(network, inputs, dt, t0=0.0, record_all=False):
    """Lazily drive network over a sequence of input vectors.

    Yields one item per input step: a copy of the final layer's output, or
    with record_all=True a tuple of copies of every layer's output. The
    network keeps its state when the sequence ends; call reset() to start
    over.
    """
    for k, x in enumerate(inputs):
        network.step(x, dt, t0 + k * dt)
        if record_all:
            yield tuple(out.copy() for out in network.outputs)
        else:
            yield network.output.copy()


@dataclass
class SimulationResult:
    """Recorded outputs of a run.

    times : (T,) step times (s)
    outputs : (T, n_outputs) final-layer spikes
    layer_outputs : per layer (T, N_k) spikes, when record_all was set
    states : per layer (T, N_k, n_vars) diagnostic state after each step,
        when track_state was set
    """
    dt: float
    times: np.ndarray
    outputs: np.ndarray
    layer_outputs: Optional[List[np.ndarray]] = None
    states: Optional[List[np.ndarray]] = None
    metadata: dict = field(default_factory=dict)

    @property
    def n_steps(self):
        return len(self.times)


def run(network, inputs, dt, duration=None, t0=0.0, record_all=False,
        track_state=False):
    """Run a simulation and collect it into a SimulationResult.

    Parameters
    ----------
    network : Network
    inputs : sequence of vectors, 2-D array (T, n_inputs) or callable
        A callable is evaluated as inputs(t) at every step and needs
        duration.
    dt : float
        Timestep in seconds.
    duration : float, optional
        Simulated time in seconds (callable inputs only).
    t0 : float
        Start time in seconds.
    record_all : bool
        Keep every layer's output, not only the final layer's.
    track_state : bool
        Keep every layer's diagnostic state after each step.
    """
    if callable(inputs):
        if duration is None:
            raise ValueError("duration is required when inputs is a function of time")
        n_steps = int(round(duration / dt))
        fn = inputs
        inputs = (fn(t0 + k * dt) for k in range(n_steps))

    times = []
    outputs = []
    layer_outputs = [[] for _ in network.layers] if record_all else None
    states = [[] for _ in network.layers] if track_state else None

    for k, out in enumerate(simulate(network, inputs, dt, t0=t0,
                                     record_all=record_all)):
        times.append(t0 + k * dt)
        if record_all:
            outputs.append(out[-1])
            for rec, layer_out in zip(layer_outputs, out):
                rec.append(layer_out)
        else:
            outputs.append(out)
        if track_state:
            for rec, layer in zip(states, network.layers):
                rec.append(layer.state_matrix())

    result = SimulationResult(
        dt=dt,
        times=np.array(times),
        outputs=np.array(outputs).reshape(len(times), network.n_outputs),
        layer_outputs=([np.array(rec).reshape(len(times), layer.N)
                        for rec, layer in zip(layer_outputs, network.layers)]
                       if record_all else None),
        states=[np.array(rec) for rec in states] if track_state else None,
        metadata={'t0': t0, 'n_layers': len(network.layers)},
    )
    logger.info(f"Simulated {result.n_steps} steps (dt={dt * 1000:.3f} ms), "
                f"{int(result.outputs.sum())} output spikes")
    return result
