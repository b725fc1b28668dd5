"""
Layer of independent neurons behind a shared synaptic weight matrix.

  synaptic_input = W @ x  (+ W_rec @ previous_output, if recurrent)
  neuron i advances with synaptic_input[i]

Neurons do not interact inside a layer except through the weights, so the
per-neuron loop is order-independent. Input and output buffers are
allocated once and overwritten in place every step.
"""

import logging

import numpy as np
from scipy import sparse

from spikenet.errors import DimensionMismatch, InvalidParameter
from spikenet.models.base import NeuronModel
from spikenet.population.weights import as_weight_matrix

logger = logging.getLogger(__name__)


class Layer:
    """A population of N neurons driven through an (N, n_inputs) matrix.

    Parameters
    ----------
    neurons : sequence of NeuronModel
        One parameter object per neuron. Variants may be mixed.
    weights : array-like or scipy.sparse matrix, shape (N, n_inputs)
        Input weights. Dense and block-sparse matrices are both accepted.
    recurrent_weights : array-like or scipy.sparse matrix, shape (N, N), optional
        If given, the layer's own output from the previous step is fed back
        through this matrix and summed with the feed-forward input.
    """

    def __init__(self, neurons, weights, recurrent_weights=None):
        self.neurons = list(neurons)
        for neuron in self.neurons:
            if not isinstance(neuron, NeuronModel):
                raise InvalidParameter(
                    f"layer members must be NeuronModel instances, "
                    f"got {type(neuron).__name__}")
        self.N = len(self.neurons)

        self.W = self._freeze(as_weight_matrix(weights))
        if self.W.shape[0] != self.N:
            raise DimensionMismatch(
                f"weight matrix has {self.W.shape[0]} rows for {self.N} neurons")
        self.n_inputs = self.W.shape[1]

        if recurrent_weights is None:
            self.W_rec = None
        else:
            self.W_rec = self._freeze(as_weight_matrix(recurrent_weights))
            if self.W_rec.shape != (self.N, self.N):
                raise DimensionMismatch(
                    f"recurrent weights must be {self.N}x{self.N}, "
                    f"got {self.W_rec.shape[0]}x{self.W_rec.shape[1]}")

        # Pre-allocated buffers, reused every step
        self._input = np.zeros(self.N)
        self._recurrent_input = np.zeros(self.N) if self.recurrent else None
        self._output = np.zeros(self.N)
        self.states = [neuron.reset() for neuron in self.neurons]

        logger.debug(f"Layer: {self.N} neurons, {self.n_inputs} inputs, "
                     f"recurrent={self.recurrent}, "
                     f"sparse={sparse.issparse(self.W)}")

    @staticmethod
    def _freeze(W):
        if sparse.issparse(W):
            for arr in (W.data, W.indices, W.indptr):
                arr.setflags(write=False)
        else:
            W.setflags(write=False)
        return W

    @property
    def recurrent(self):
        return self.W_rec is not None

    @property
    def output(self):
        """Spike vector from the most recent step (the live buffer)."""
        return self._output

    @property
    def synaptic_input(self):
        """Synaptic input delivered on the most recent step (the live buffer)."""
        return self._input

    def _project(self, W, x, out):
        if sparse.issparse(W):
            out[:] = W @ x
        else:
            np.dot(W, x, out=out)

    def step(self, x, dt, t=0.0):
        """Advance every neuron by one step.

        Parameters
        ----------
        x : array-like, shape (n_inputs,)
            Input vector (external drive or upstream spikes).
        dt : float
            Timestep in seconds.
        t : float
            Simulation time in seconds.

        Returns
        -------
        output : np.ndarray, shape (N,)
            The layer's output buffer, overwritten in place. Copy it if it
            must outlive the next step.
        """
        x = np.asarray(x, dtype=np.float64)
        if x.shape != (self.n_inputs,):
            raise DimensionMismatch(
                f"layer expects input of length {self.n_inputs}, "
                f"got shape {x.shape}")

        self._project(self.W, x, self._input)
        if self.recurrent:
            # _output still holds the previous step's spikes here
            self._project(self.W_rec, self._output, self._recurrent_input)
            self._input += self._recurrent_input

        for i, neuron in enumerate(self.neurons):
            spiked, new_state = neuron.update(self.states[i], self._input[i],
                                              dt, t)
            self.states[i][:] = new_state
            self._output[i] = 1.0 if spiked else 0.0

        return self._output

    def reset(self):
        """Restore every neuron to its initial state and clear buffers."""
        for i, neuron in enumerate(self.neurons):
            self.states[i][:] = neuron.reset()
        self._input.fill(0.0)
        self._output.fill(0.0)
        if self._recurrent_input is not None:
            self._recurrent_input.fill(0.0)

    def get_state(self):
        """Per-neuron diagnostic state tuples, e.g. (v, w) for AdEx."""
        return [neuron.get_state(state)
                for neuron, state in zip(self.neurons, self.states)]

    def state_matrix(self):
        """Diagnostic states stacked into an (N, k) array.

        All neurons must report the same number of variables.
        """
        return np.array(self.get_state(), dtype=np.float64).reshape(self.N, -1)

    def __len__(self):
        return self.N

    def __repr__(self):
        return (f"Layer(N={self.N}, n_inputs={self.n_inputs}, "
                f"recurrent={self.recurrent})")
