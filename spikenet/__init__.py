"""
spikenet: layered spiking neural network simulator.

Neuron models (AdEx, Izhikevich, LIF) integrated with forward Euler,
batched into Layers behind synaptic weight matrices and chained into
Networks with optional per-layer recurrence.

Quick start:
    import numpy as np
    import spikenet

    layer = spikenet.batch_layer_construction(
        spikenet.ADEXP, np.eye(4) * 20.0, 4)
    net = spikenet.make_network([layer])
    for out in spikenet.simulate(net, np.ones((100, 4)), dt=0.001):
        ...
"""

import dataclasses

from spikenet.errors import (
    SpikenetError, DimensionMismatch, InvalidParameter, NumericalInstability,
)
from spikenet.models import ADEXP, Izhikevich, LIF, NeuronModel, MODELS
from spikenet.population import (
    Layer, batch_layer_construction, build_neurons, sample_parameters,
    block_weights, block_diagonal_weights, identity_weights, random_weights,
)
from spikenet.circuit import Network, SimulationResult, run, simulate

__version__ = "0.1.0"


def make_neuron(model='adexp', **params):
    """Construct a neuron from a model class or its registered name."""
    if isinstance(model, str):
        try:
            model = MODELS[model.lower()]
        except KeyError:
            raise InvalidParameter(
                f"unknown neuron model {model!r}, "
                f"expected one of {sorted(MODELS)}") from None
    if not (isinstance(model, type) and issubclass(model, NeuronModel)
            and dataclasses.is_dataclass(model)):
        raise InvalidParameter(
            f"model must be a NeuronModel subclass or one of "
            f"{sorted(MODELS)}, got {model!r}")
    unknown = sorted(set(params) - set(model.param_names()))
    if unknown:
        raise InvalidParameter(
            f"unknown {model.__name__} parameter(s): {', '.join(unknown)}")
    return model(**params)


def make_layer(neurons, weights, recurrent_weights=None):
    return Layer(neurons, weights, recurrent_weights=recurrent_weights)


def make_network(layers, routing=None):
    return Network(layers, routing=routing)


def step(obj, *args, **kwargs):
    """Advance a neuron, layer or network by one step.

    Neurons: step(neuron, state, synaptic_input, dt, t=0.0) -> (spiked, state)
    Layers / networks: step(obj, x, dt, t=0.0) -> output buffer
    """
    if isinstance(obj, NeuronModel):
        return obj.update(*args, **kwargs)
    return obj.step(*args, **kwargs)


def reset(obj):
    """Reset a layer or network in place; for a neuron, return its initial state."""
    return obj.reset()


def get_state(obj, state=None):
    """Diagnostic state of a neuron (given its state array), layer or network."""
    if isinstance(obj, NeuronModel):
        if state is None:
            raise ValueError("a neuron's state array must be passed explicitly")
        return obj.get_state(state)
    return obj.get_state()


__all__ = [
    'SpikenetError',
    'DimensionMismatch',
    'InvalidParameter',
    'NumericalInstability',
    'NeuronModel',
    'ADEXP',
    'Izhikevich',
    'LIF',
    'MODELS',
    'Layer',
    'Network',
    'SimulationResult',
    'batch_layer_construction',
    'build_neurons',
    'sample_parameters',
    'block_weights',
    'block_diagonal_weights',
    'identity_weights',
    'random_weights',
    'make_neuron',
    'make_layer',
    'make_network',
    'step',
    'simulate',
    'run',
    'reset',
    'get_state',
]
