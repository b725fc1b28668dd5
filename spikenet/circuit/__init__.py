"""
Network-level composition and simulation drivers.
"""

from spikenet.circuit.network import (
    INPUT, Network, SimulationResult, feedforward_routing, run, simulate,
)

__all__ = [
    'INPUT',
    'Network',
    'SimulationResult',
    'feedforward_routing',
    'run',
    'simulate',
]
