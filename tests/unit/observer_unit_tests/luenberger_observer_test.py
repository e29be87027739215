# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Unit Tests for LuenbergerObserver

Tests gain handling, residual computation, the discrete update
x̂ ← Φ(x̂ + B·u·dt + K·r·dt), and reset behaviour.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from shosim.discretization.discretizer import Discretizer
from shosim.observers.luenberger_observer import LuenbergerObserver
from shosim.systems.mass_spring_damper import MassSpringDamper
from shosim.validation import InvalidConfiguration

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def system():
    return MassSpringDamper()


@pytest.fixture
def discretizer(system):
    return Discretizer(system.A, dt=0.1)


@pytest.fixture
def observer(system, discretizer):
    return LuenbergerObserver(system, [0.5, -0.1], discretizer)


# ============================================================================
# Test: Initialization
# ============================================================================


class TestInitialization:
    """Gain shape and initial estimate."""

    def test_flat_gain_reshaped_to_column(self, observer):
        assert observer.K.shape == (2, 1)
        assert_array_equal(observer.K[:, 0], [0.5, -0.1])

    def test_column_gain_accepted(self, system, discretizer):
        obs = LuenbergerObserver(system, [[0.5], [-0.1]], discretizer)
        assert obs.K.shape == (2, 1)

    def test_default_estimate_is_zero(self, observer):
        assert_array_equal(observer.x_hat, [0.0, 0.0])

    def test_initial_estimate_copied(self, system, discretizer):
        xhat0 = np.array([0.2, -0.4])
        obs = LuenbergerObserver(system, [0.5, -0.1], discretizer, xhat0=xhat0)
        xhat0[0] = 99.0
        assert_array_equal(obs.x_hat, [0.2, -0.4])

    def test_wrong_gain_length(self, system, discretizer):
        with pytest.raises(InvalidConfiguration, match="Observer gain K"):
            LuenbergerObserver(system, [0.5, -0.1, 0.0], discretizer)

    def test_wrong_estimate_length(self, system, discretizer):
        with pytest.raises(InvalidConfiguration, match="Initial estimate"):
            LuenbergerObserver(system, [0.5, -0.1], discretizer, xhat0=[1.0])


# ============================================================================
# Test: Residual
# ============================================================================


class TestResidual:
    """r = y - C·x̂."""

    def test_predicted_output(self, observer):
        observer.reset([0.3, 0.7])
        assert_allclose(observer.predicted_output(), [0.3])

    def test_residual(self, observer):
        observer.reset([0.3, 0.7])
        assert_allclose(observer.residual([1.0]), [0.7])

    def test_scalar_measurement(self, observer):
        assert_allclose(observer.residual(1.0), [1.0])


# ============================================================================
# Test: Update
# ============================================================================


class TestUpdate:
    """One observer step."""

    def test_correction_from_zero_estimate(self, observer, discretizer):
        r = observer.update(np.array([1.0]))
        assert_allclose(r, [1.0])
        expected = discretizer.transition_matrix @ np.array([0.05, -0.01])
        assert_allclose(observer.x_hat, expected)

    def test_matched_estimate_tracks_plant(self, system, discretizer, observer):
        x = np.array([1.0, 0.0])
        observer.reset(x)
        for _ in range(20):
            r = observer.update(system.output(x), u=0.3)
            x = discretizer.step(x, 0.3, system.B)
            assert_allclose(r, [0.0], atol=1e-12)
        assert_allclose(observer.x_hat, x, atol=1e-12)

    def test_input_enters_estimate(self, system, discretizer, observer):
        observer.update(np.array([0.0]), u=2.0)
        expected = discretizer.transition_matrix @ (system.B[:, 0] * 2.0 * 0.1)
        assert_allclose(observer.x_hat, expected)

    def test_error_shrinks_with_stable_gain(self, system, discretizer, observer):
        x = np.array([1.0, 0.0])
        initial_error = np.linalg.norm(x - observer.x_hat)
        for _ in range(250):
            observer.update(system.output(x))
            x = discretizer.step(x, 0.0, system.B)
        assert np.linalg.norm(x - observer.x_hat) < 0.05 * initial_error


# ============================================================================
# Test: Reset
# ============================================================================


class TestReset:
    """Reset to a given or zero estimate."""

    def test_reset_to_zero(self, observer):
        observer.update(np.array([1.0]))
        observer.reset()
        assert_array_equal(observer.x_hat, [0.0, 0.0])

    def test_reset_to_value(self, observer):
        observer.reset([1.0, -1.0])
        assert_array_equal(observer.x_hat, [1.0, -1.0])
