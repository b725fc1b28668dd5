"""
Tests for parameter broadcasting, batch layer construction and sampling.
"""
import numpy as np
import pytest

from spikenet import (
    ADEXP, Izhikevich, DimensionMismatch, InvalidParameter,
    batch_layer_construction, build_neurons, sample_parameters,
)
from spikenet.config import ADEXP_PARAMS, IZHIKEVICH_PARAMS
from spikenet.population.heterogeneity import broadcast_parameters


class TestBroadcast:

    def test_scalars_replicated(self):
        neurons = build_neurons(ADEXP, 4, {'I': 10.0, 'b': 1.0})
        assert len(neurons) == 4
        assert all(n.I == 10.0 and n.b == 1.0 for n in neurons)
        assert all(n.tau_m == ADEXP_PARAMS['tau_m'] for n in neurons)

    def test_arrays_one_per_neuron(self):
        neurons = build_neurons(ADEXP, 3, {'I': [1.0, 2.0, 3.0], 'a': 0.5})
        assert [n.I for n in neurons] == [1.0, 2.0, 3.0]
        assert all(n.a == 0.5 for n in neurons)

    def test_no_params_gives_defaults(self):
        assert build_neurons(ADEXP, 2) == [ADEXP(), ADEXP()]

    def test_wrong_length_array(self):
        with pytest.raises(DimensionMismatch):
            build_neurons(ADEXP, 3, {'I': [1.0, 2.0]})

    def test_two_dimensional_array_rejected(self):
        with pytest.raises(DimensionMismatch):
            broadcast_parameters(ADEXP, 2, {'I': np.ones((2, 2))})

    def test_unknown_parameter(self):
        with pytest.raises(InvalidParameter):
            build_neurons(ADEXP, 3, {'theta': 1.0})

    def test_invalid_value_caught_at_construction(self):
        with pytest.raises(InvalidParameter):
            build_neurons(ADEXP, 3, {'tau_w': [1.0, 0.0, 1.0]})

    def test_negative_count(self):
        with pytest.raises(InvalidParameter):
            build_neurons(ADEXP, -1)

    def test_other_models(self):
        neurons = build_neurons(Izhikevich, 2, {'d': [2.0, 8.0]})
        assert [n.d for n in neurons] == [2.0, 8.0]


class TestBatchLayerConstruction:

    def test_builds_layer(self):
        layer = batch_layer_construction(ADEXP, np.ones((5, 2)), 5,
                                         params={'I': np.arange(5.0)})
        assert layer.N == 5
        assert layer.n_inputs == 2
        assert [n.I for n in layer.neurons] == [0.0, 1.0, 2.0, 3.0, 4.0]

    def test_construction_is_deterministic(self):
        params = {'I': [5.0, 6.0, 7.0], 'b': 0.2}
        a = batch_layer_construction(ADEXP, np.eye(3), 3, params=params)
        b = batch_layer_construction(ADEXP, np.eye(3), 3, params=params)
        assert a.neurons == b.neurons
        for sa, sb in zip(a.states, b.states):
            np.testing.assert_array_equal(sa, sb)

    def test_weight_shape_checked(self):
        with pytest.raises(DimensionMismatch):
            batch_layer_construction(ADEXP, np.ones((4, 2)), 5)

    def test_separate_recurrent_weights(self):
        layer = batch_layer_construction(ADEXP, np.ones((2, 3)), 2,
                                         recurrent_weights=-np.eye(2))
        assert layer.recurrent
        np.testing.assert_array_equal(layer.W_rec, -np.eye(2))


class TestSampling:

    def test_reproducible_with_seed(self):
        a = sample_parameters(10, np.random.default_rng(7))
        b = sample_parameters(10, np.random.default_rng(7))
        for key in a:
            np.testing.assert_array_equal(a[key], b[key])

    def test_heterogeneous_keys_are_arrays(self):
        params = sample_parameters(10, np.random.default_rng(0),
                                   cvs={'tau_m': 0.1})
        assert params['tau_m'].shape == (10,)
        assert np.all(params['tau_m'] > 0)
        assert params['v_rest'] == ADEXP_PARAMS['v_rest']

    def test_mean_close_to_base(self):
        params = sample_parameters(20000, np.random.default_rng(1),
                                   cvs={'tau_w': 0.15})
        assert params['tau_w'].mean() == pytest.approx(ADEXP_PARAMS['tau_w'], rel=0.01)
        cv = params['tau_w'].std() / params['tau_w'].mean()
        assert cv == pytest.approx(0.15, rel=0.05)

    def test_sign_preserved_for_negative_parameters(self):
        params = sample_parameters(50, np.random.default_rng(2),
                                   cvs={'v_thresh': 0.02})
        assert np.all(params['v_thresh'] < 0)

    def test_zero_cv_is_constant(self):
        params = sample_parameters(5, np.random.default_rng(0), cvs={'a': 0.0})
        np.testing.assert_array_equal(params['a'], np.full(5, ADEXP_PARAMS['a']))

    def test_unknown_key(self):
        with pytest.raises(InvalidParameter):
            sample_parameters(5, np.random.default_rng(0), cvs={'g_Na': 0.1})

    def test_other_base(self):
        params = sample_parameters(4, np.random.default_rng(0),
                                   base_params=IZHIKEVICH_PARAMS,
                                   cvs={'d': 0.1})
        neurons = build_neurons(Izhikevich, 4, params)
        assert len({n.d for n in neurons}) == 4

    def test_sampled_layer_runs(self):
        rng = np.random.default_rng(5)
        layer = batch_layer_construction(ADEXP, np.eye(8) * 10.0, 8,
                                         params=sample_parameters(8, rng))
        for _ in range(100):
            layer.step(np.ones(8), 0.001)
        assert np.all(np.isfinite(layer.state_matrix()))
