"""
Synaptic weight matrix builders.

A weight matrix maps a layer's input vector onto its neurons:
weights[i, j] is the voltage increment (mV) neuron i receives per unit of
input j. Rows = postsynaptic neurons, columns = inputs.

Dense matrices are plain float64 ndarrays. Block-structured matrices
(one block per input source, or one block per sub-population) are built
as scipy CSR matrices; Layer treats both the same way.
"""

import logging

import numpy as np
from scipy import sparse

from spikenet.errors import DimensionMismatch

logger = logging.getLogger(__name__)


def as_weight_matrix(weights):
    """Copy weights into a float64 ndarray or CSR matrix.

    Raises DimensionMismatch for anything that is not two-dimensional.
    """
    if sparse.issparse(weights):
        W = sparse.csr_matrix(weights, dtype=np.float64, copy=True)
    else:
        W = np.array(weights, dtype=np.float64)
    if W.ndim != 2:
        raise DimensionMismatch(
            f"weight matrix must be 2-D, got shape {W.shape}")
    return W


def dense_weights(n_post, n_pre, value=1.0):
    """Uniform all-to-all weight matrix."""
    return np.full((n_post, n_pre), float(value))


def identity_weights(n, scale=1.0):
    """One-to-one weights: input j drives neuron j only."""
    return np.eye(n) * scale


def build_connectivity(n_post, n_pre, p=0.2, autapses=True, seed=42):
    """Sparse random (Bernoulli) connectivity.

    Parameters
    ----------
    n_post : int
        Number of postsynaptic neurons.
    n_pre : int
        Number of presynaptic inputs.
    p : float
        Connection probability.
    autapses : bool
        If False, the diagonal is cleared (square matrices only).
    seed : int
        Random seed.

    Returns
    -------
    connectivity : ndarray (n_post, n_pre)
        Binary matrix. connectivity[j, i] = 1 means input i -> neuron j.
    """
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"connection probability must be in [0, 1], got {p}")
    rng = np.random.default_rng(seed)
    connectivity = (rng.random((n_post, n_pre)) < p).astype(np.int8)
    if not autapses:
        if n_post != n_pre:
            raise DimensionMismatch(
                f"autapse removal needs a square matrix, got {n_post}x{n_pre}")
        np.fill_diagonal(connectivity, 0)
    return connectivity


def normalize_weights(connectivity, total_weight):
    """Split total_weight evenly over each neuron's inputs.

    Every postsynaptic neuron receives total_weight summed over its
    presynaptic connections; neurons with no inputs keep a zero row.
    """
    n_inputs = connectivity.sum(axis=1)
    per_synapse = total_weight / np.maximum(n_inputs, 1)
    return connectivity.astype(np.float64) * per_synapse[:, np.newaxis]


def random_weights(n_post, n_pre, p=0.2, total_weight=10.0, autapses=True,
                   seed=42):
    """Random sparse connectivity normalised by convergence (dense ndarray)."""
    connectivity = build_connectivity(n_post, n_pre, p=p, autapses=autapses,
                                      seed=seed)
    weights = normalize_weights(connectivity, total_weight)
    logger.debug(f"random_weights: {n_post}x{n_pre}, "
                 f"{int(connectivity.sum())} connections, "
                 f"p_eff={connectivity.mean():.3f}")
    return weights


def block_weights(blocks):
    """Assemble a block matrix from a grid of sub-matrices.

    Parameters
    ----------
    blocks : list of list
        blocks[r][c] is an array-like, a sparse matrix or None (all-zero
        block). Block rows map to groups of neurons, block columns to
        input sources.

    Returns
    -------
    weights : scipy.sparse.csr_matrix
    """
    try:
        W = sparse.bmat(blocks, format='csr', dtype=np.float64)
    except ValueError as e:
        raise DimensionMismatch(f"incompatible block shapes: {e}") from None
    logger.debug(f"block_weights: shape={W.shape}, nnz={W.nnz}")
    return W


def block_diagonal_weights(blocks):
    """Block-diagonal matrix: sub-population k only sees input group k."""
    W = sparse.block_diag(blocks, format='csr', dtype=np.float64)
    logger.debug(f"block_diagonal_weights: {len(blocks)} blocks, shape={W.shape}")
    return W


def weight_stats(weights):
    """Log summary statistics of a weight matrix and return them."""
    W = as_weight_matrix(weights)
    if sparse.issparse(W):
        nnz = W.nnz
        row_sums = np.asarray(W.sum(axis=1)).ravel()
    else:
        nnz = int(np.count_nonzero(W))
        row_sums = W.sum(axis=1)
    n_post, n_pre = W.shape
    density = nnz / (n_post * n_pre) if n_post * n_pre else 0.0
    stats = {
        'shape': W.shape,
        'nnz': nnz,
        'density': density,
        'mean_row_sum': float(row_sums.mean()) if n_post else 0.0,
    }
    logger.info(f"Weights {n_post}x{n_pre}: {nnz} non-zero, "
                f"density={density:.3f}, mean row sum={stats['mean_row_sum']:.2f}")
    return stats
