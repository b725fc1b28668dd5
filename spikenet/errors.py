"""
Exception hierarchy for spikenet.

Every error raised by the simulator derives from SpikenetError, and also
from the builtin type callers would naturally catch (ValueError for bad
construction input, ArithmeticError for numerical blow-up).
"""


class SpikenetError(Exception):
    """Base class for simulator errors."""


class DimensionMismatch(SpikenetError, ValueError):
    """Weight matrix shape, neuron count and input length disagree."""


class InvalidParameter(SpikenetError, ValueError):
    """A neuron parameter is missing, unknown or outside its domain."""


class NumericalInstability(SpikenetError, ArithmeticError):
    """An update produced a non-finite state value."""
