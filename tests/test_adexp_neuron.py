"""
Tests for the AdEx neuron integrator.
"""
import dataclasses

import numpy as np
import pytest

from spikenet import ADEXP, InvalidParameter, NumericalInstability
from spikenet.config import ADEXP_PARAMS

from conftest import euler_adexp


class TestConstruction:

    def test_default_parameters(self, neuron):
        for name, value in ADEXP_PARAMS.items():
            assert getattr(neuron, name) == pytest.approx(value)

    def test_parameters_are_immutable(self, neuron):
        with pytest.raises(dataclasses.FrozenInstanceError):
            neuron.v_thresh = 0.0

    def test_identical_parameters_compare_equal(self):
        assert ADEXP(a=2.0) == ADEXP(a=2.0)
        assert hash(ADEXP(a=2.0)) == hash(ADEXP(a=2.0))

    def test_integer_parameters_are_normalised(self):
        assert isinstance(ADEXP(tau_w=100).tau_w, float)

    @pytest.mark.parametrize("name", ['tau_m', 'tau_w', 'cm', 'delta_T'])
    def test_zero_divisor_rejected(self, name):
        with pytest.raises(InvalidParameter):
            ADEXP(**{name: 0.0})

    def test_negative_time_constant_rejected(self):
        with pytest.raises(InvalidParameter):
            ADEXP(tau_m=-1.0)

    def test_non_finite_rejected(self):
        with pytest.raises(InvalidParameter):
            ADEXP(v_rest=float('nan'))

    def test_non_numeric_rejected(self):
        with pytest.raises(InvalidParameter):
            ADEXP(a='fast')

    def test_invalid_parameter_is_value_error(self):
        with pytest.raises(ValueError):
            ADEXP(cm=0.0)


class TestReset:

    def test_reset_state(self, neuron):
        state = neuron.reset()
        assert state.shape == (ADEXP.state_size,)
        assert neuron.get_state(state) == (-70.6, 0.0)
        assert state[2] == 0.0

    def test_reset_is_history_independent(self, neuron):
        state = neuron.reset()
        for _ in range(50):
            _, state = neuron.update(state, 15.0, 0.001)
        assert neuron.get_state(state) != (-70.6, 0.0)
        fresh = neuron.reset()
        assert neuron.get_state(fresh) == (-70.6, 0.0)
        np.testing.assert_array_equal(fresh, ADEXP().reset())

    def test_reset_returns_new_array(self, neuron):
        assert neuron.reset() is not neuron.reset()


class TestUpdate:

    def test_default_single_step_rises_without_spike(self, neuron, rest_state):
        spiked, state = neuron.update(rest_state, 0.0, 0.001, 0.0)
        v, w = neuron.get_state(state)
        assert not spiked
        assert v > -70.6

    def test_dt_seconds_integrates_as_milliseconds(self, neuron, rest_state):
        _, state = neuron.update(rest_state, 0.0, 0.001)
        v_expected, w_expected = euler_adexp(neuron, -70.6, 0.0, 1.0)
        v, w = neuron.get_state(state)
        assert v == pytest.approx(v_expected, rel=1e-12)
        assert w == pytest.approx(w_expected, abs=1e-15)

    def test_dt_scaling_half_step(self, neuron, rest_state):
        _, state = neuron.update(rest_state, 0.0, 0.0005)
        v_expected, _ = euler_adexp(neuron, -70.6, 0.0, 0.5)
        assert state[0] == pytest.approx(v_expected, rel=1e-12)

    def test_off_rest_step_matches_hand_euler(self):
        neuron = ADEXP(I=100.0)
        state = np.array([-60.0, 3.0, 0.0])
        _, new_state = neuron.update(state, 0.0, 0.001)
        v_expected, w_expected = euler_adexp(neuron, -60.0, 3.0, 1.0)
        assert new_state[0] == pytest.approx(v_expected, rel=1e-12)
        assert new_state[1] == pytest.approx(w_expected, rel=1e-12)

    def test_synaptic_input_added_before_integration(self, neuron, rest_state):
        _, state = neuron.update(rest_state, 5.0, 0.001)
        v_expected, _ = euler_adexp(neuron, -65.6, 0.0, 1.0)
        assert state[0] == pytest.approx(v_expected, rel=1e-12)

    def test_vector_input_is_summed(self, neuron, rest_state):
        _, a = neuron.update(rest_state, np.array([2.0, 3.0]), 0.001)
        _, b = neuron.update(rest_state, 5.0, 0.001)
        np.testing.assert_allclose(a, b)

    def test_update_does_not_mutate_state(self, neuron, rest_state):
        before = rest_state.copy()
        neuron.update(rest_state, 40.0, 0.001)
        np.testing.assert_array_equal(rest_state, before)

    def test_update_is_deterministic(self, neuron, rest_state):
        a = neuron.update(rest_state, 3.0, 0.001)
        b = neuron.update(rest_state, 3.0, 0.001)
        assert a[0] == b[0]
        np.testing.assert_array_equal(a[1], b[1])

    def test_time_argument_is_ignored(self, neuron, rest_state):
        _, a = neuron.update(rest_state, 1.0, 0.001, t=0.0)
        _, b = neuron.update(rest_state, 1.0, 0.001, t=12.5)
        np.testing.assert_array_equal(a, b)


class TestSpikeAndReset:
    """Reset to v_reset happens one step after the threshold crossing."""

    def test_threshold_crossing_clamps_to_peak(self, neuron, rest_state):
        spiked, state = neuron.update(rest_state, 30.0, 0.001)
        assert spiked
        assert state[0] == neuron.spike_delta
        assert state[2] == 1.0

    def test_reset_applied_on_following_step(self, neuron, rest_state):
        _, fired = neuron.update(rest_state, 30.0, 0.001)
        w_after_spike = fired[1]
        spiked, state = neuron.update(fired, 0.0, 0.001)
        v_expected, w_expected = euler_adexp(
            neuron, neuron.v_reset, w_after_spike + neuron.b, 1.0)
        assert not spiked
        assert state[0] == pytest.approx(v_expected, rel=1e-12)
        assert state[1] == pytest.approx(w_expected, rel=1e-12)
        assert state[2] == 0.0

    def test_reset_overrides_synaptic_input(self, neuron, rest_state):
        _, fired = neuron.update(rest_state, 30.0, 0.001)
        _, a = neuron.update(fired, 0.0, 0.001)
        _, b = neuron.update(fired, 10.0, 0.001)
        np.testing.assert_array_equal(a, b)

    def test_force_spike_applies_reset(self, neuron):
        state = np.array([-55.0, 1.0, 0.0])
        _, forced = neuron.update(state, 0.0, 0.001, force_spike=True)
        v_expected, w_expected = euler_adexp(neuron, neuron.v_reset,
                                             1.0 + neuron.b, 1.0)
        assert forced[0] == pytest.approx(v_expected, rel=1e-12)
        assert forced[1] == pytest.approx(w_expected, rel=1e-12)

    def test_adaptation_grows_with_repeated_spiking(self):
        neuron = ADEXP(b=60.0, I=800.0)
        state = neuron.reset()
        n_spikes = 0
        for _ in range(300):
            spiked, state = neuron.update(state, 0.0, 0.001)
            n_spikes += spiked
        assert n_spikes > 1
        assert state[1] > 0.0


class TestNumericalErrors:

    def test_exponential_overflow_raises(self, neuron, rest_state):
        with pytest.raises(NumericalInstability):
            neuron.update(rest_state, 1e6, 0.001)

    def test_non_finite_input_raises(self, neuron, rest_state):
        with pytest.raises(NumericalInstability):
            neuron.update(rest_state, float('nan'), 0.001)

    def test_numerical_instability_is_arithmetic_error(self, neuron, rest_state):
        with pytest.raises(ArithmeticError):
            neuron.update(rest_state, 1e6, 0.001)
