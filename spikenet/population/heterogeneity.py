"""
Per-neuron parameter broadcasting and heterogeneity sampling.

build_neurons turns a parameter record {name: scalar_or_array} into N
neuron objects: scalars are replicated, length-N arrays give one value per
neuron. sample_parameters produces such a record with LogNormal spread
around a base parameter set, matching biological variability (CV 5-15%).
"""

import logging

import numpy as np

from spikenet.config import ADEXP_PARAMETER_CVS, ADEXP_PARAMS
from spikenet.errors import DimensionMismatch, InvalidParameter
from spikenet.population.layer import Layer

logger = logging.getLogger(__name__)


def broadcast_parameters(model, n_neurons, params=None):
    """Resolve a parameter record into one keyword dict per neuron.

    Parameters
    ----------
    model : type
        NeuronModel subclass, e.g. ADEXP.
    n_neurons : int
        Number of neurons.
    params : dict, optional
        {field_name: scalar or array of length n_neurons}. Fields not given
        keep the model's defaults.

    Returns
    -------
    params_list : list of dict
    """
    if n_neurons < 0:
        raise InvalidParameter(f"n_neurons must be >= 0, got {n_neurons}")
    params = dict(params or {})

    known = set(model.param_names())
    unknown = sorted(set(params) - known)
    if unknown:
        raise InvalidParameter(
            f"unknown {model.__name__} parameter(s): {', '.join(unknown)}")

    columns = {}
    for name, value in params.items():
        arr = np.asarray(value, dtype=np.float64)
        if arr.ndim == 0:
            columns[name] = np.full(n_neurons, float(arr))
        elif arr.shape == (n_neurons,):
            columns[name] = arr
        else:
            raise DimensionMismatch(
                f"parameter '{name}' has shape {arr.shape}, "
                f"expected a scalar or ({n_neurons},)")

    return [{name: float(col[i]) for name, col in columns.items()}
            for i in range(n_neurons)]


def build_neurons(model, n_neurons, params=None):
    """Construct n_neurons instances of model from a parameter record."""
    neurons = [model(**p) for p in broadcast_parameters(model, n_neurons, params)]
    logger.debug(f"Built {n_neurons} {model.__name__} neurons "
                 f"({len(params or {})} overridden parameters)")
    return neurons


def batch_layer_construction(model, weights, n_neurons, params=None,
                             recurrent=False, recurrent_weights=None):
    """Build a Layer of n_neurons model neurons.

    Parameters
    ----------
    model : type
        NeuronModel subclass.
    weights : array-like or sparse matrix, shape (n_neurons, n_inputs)
        Input weight matrix.
    n_neurons : int
    params : dict, optional
        Parameter record, see broadcast_parameters.
    recurrent : bool
        Make the layer recurrent. Without recurrent_weights the input
        matrix is reused for the feedback path, so it must be square.
    recurrent_weights : array-like or sparse matrix, shape (n, n), optional
        Feedback weights. Implies recurrent=True.

    Returns
    -------
    layer : Layer
    """
    neurons = build_neurons(model, n_neurons, params)
    if recurrent and recurrent_weights is None:
        recurrent_weights = weights
    layer = Layer(neurons, weights, recurrent_weights=recurrent_weights)
    logger.info(f"Constructed {layer!r} of {model.__name__}")
    return layer


def _sample_lognormal(mean, cv, rng, size):
    """Sample from LogNormal with specified mean and CV."""
    sigma_ln = np.sqrt(np.log(1 + cv ** 2))
    mu_ln = np.log(mean) - 0.5 * sigma_ln ** 2
    return rng.lognormal(mu_ln, sigma_ln, size=size)


def sample_parameters(n, rng, base_params=None, cvs=None):
    """Sample heterogeneous parameters around a base set.

    Parameters listed in cvs are drawn from LogNormal with the base value as
    mean; their sign is preserved, so negative parameters spread around
    their (negative) mean. Everything else is copied as a scalar.

    Parameters
    ----------
    n : int
        Number of neurons.
    rng : np.random.Generator
    base_params : dict, optional
        Defaults to the AdEx defaults.
    cvs : dict, optional
        {name: coefficient of variation}. Defaults to ADEXP_PARAMETER_CVS.

    Returns
    -------
    params : dict
        Record suitable for build_neurons / batch_layer_construction.
    """
    base = dict(ADEXP_PARAMS if base_params is None else base_params)
    cvs = ADEXP_PARAMETER_CVS if cvs is None else cvs

    params = dict(base)
    for key, cv in cvs.items():
        if key not in base:
            raise InvalidParameter(f"no base value for heterogeneous parameter '{key}'")
        if cv < 0:
            raise InvalidParameter(f"CV for '{key}' must be >= 0, got {cv}")
        mean = base[key]
        if mean == 0.0 or cv == 0.0:
            params[key] = np.full(n, float(mean))
        else:
            params[key] = np.sign(mean) * _sample_lognormal(abs(mean), cv, rng, n)
    return params
