"""
Populations of neurons: layers, weight builders and parameter broadcasting.
"""

from spikenet.population.layer import Layer
from spikenet.population.weights import (
    as_weight_matrix, dense_weights, identity_weights, build_connectivity,
    normalize_weights, random_weights, block_weights, block_diagonal_weights,
    weight_stats,
)
from spikenet.population.heterogeneity import (
    broadcast_parameters, build_neurons, batch_layer_construction,
    sample_parameters,
)

__all__ = [
    'Layer',
    'as_weight_matrix',
    'dense_weights',
    'identity_weights',
    'build_connectivity',
    'normalize_weights',
    'random_weights',
    'block_weights',
    'block_diagonal_weights',
    'weight_stats',
    'broadcast_parameters',
    'build_neurons',
    'batch_layer_construction',
    'sample_parameters',
]
