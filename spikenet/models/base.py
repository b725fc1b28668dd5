"""
Capability interface shared by all neuron variants.

A neuron object holds only its immutable parameters. Dynamical state lives
in a small float array owned by the caller (normally a Layer), so every
update is a pure function of (parameters, state, input, dt).
"""

import dataclasses
import math

import numpy as np

from spikenet.errors import InvalidParameter, NumericalInstability


class NeuronModel:
    """Interface for single-neuron integrators.

    Subclasses are frozen dataclasses and implement ``reset``, ``update``
    and ``get_state``. ``state_size`` is the fixed length of the state
    array the variant works with.
    """

    state_size = 0

    # Parameters that appear as divisors in the ODE step
    positive_params = ()

    def __post_init__(self):
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            try:
                value = float(value)
            except (TypeError, ValueError):
                raise InvalidParameter(
                    f"{type(self).__name__}.{f.name} must be a real number, "
                    f"got {value!r}") from None
            if not math.isfinite(value):
                raise InvalidParameter(
                    f"{type(self).__name__}.{f.name} must be finite, got {value}")
            # Normalise numpy scalars/ints so parameters hash and compare cleanly
            object.__setattr__(self, f.name, value)

        for name in self.positive_params:
            if getattr(self, name) <= 0.0:
                raise InvalidParameter(
                    f"{type(self).__name__}.{name} must be > 0, "
                    f"got {getattr(self, name)}")

    def reset(self):
        """Return the construction-time default state."""
        raise NotImplementedError

    def update(self, state, synaptic_input, dt, t=0.0, force_spike=False):
        """Advance one step.

        Returns
        -------
        spiked : bool
        new_state : np.ndarray
            Fresh array; ``state`` is never modified.
        """
        raise NotImplementedError

    def get_state(self, state):
        """Return the dynamical variables as a tuple of floats."""
        raise NotImplementedError

    @classmethod
    def param_names(cls):
        return tuple(f.name for f in dataclasses.fields(cls))


def total_input(synaptic_input):
    """Collapse a scalar or vector synaptic increment to a scalar."""
    if np.ndim(synaptic_input) == 0:
        return float(synaptic_input)
    return float(np.sum(synaptic_input))


def check_finite(model, *values):
    """Raise NumericalInstability if any state value is NaN or infinite."""
    for value in values:
        if not math.isfinite(value):
            raise NumericalInstability(
                f"{type(model).__name__} update produced non-finite state "
                f"{values}")
