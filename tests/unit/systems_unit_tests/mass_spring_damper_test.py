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
Unit Tests for MassSpringDamper

Tests symbolic definition, numeric state-space matrices, output and
energy evaluation, and parameter validation.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from shosim.systems.mass_spring_damper import MassSpringDamper
from shosim.validation import InvalidConfiguration

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def unit_oscillator():
    return MassSpringDamper()


@pytest.fixture
def damped_oscillator():
    """k=4, m=2, b=1."""
    return MassSpringDamper(k=4.0, m=2.0, b=1.0)


# ============================================================================
# Test: State-Space Matrices
# ============================================================================


class TestMatrices:
    """A, B, C, D from the symbolic Jacobians."""

    def test_default_matrices(self, unit_oscillator):
        assert_array_equal(unit_oscillator.A, [[0.0, 1.0], [-1.0, 0.0]])
        assert_array_equal(unit_oscillator.B, [[0.0], [1.0]])
        assert_array_equal(unit_oscillator.C, [[1.0, 0.0]])
        assert_array_equal(unit_oscillator.D, [[0.0]])

    def test_damped_matrices(self, damped_oscillator):
        assert_allclose(damped_oscillator.A, [[0.0, 1.0], [-2.0, -0.5]])
        assert_allclose(damped_oscillator.B, [[0.0], [0.5]])

    def test_matrix_dtypes_and_shapes(self, damped_oscillator):
        for name, shape in (("A", (2, 2)), ("B", (2, 1)), ("C", (1, 2)), ("D", (1, 1))):
            matrix = getattr(damped_oscillator, name)
            assert matrix.dtype == np.float64
            assert matrix.shape == shape

    def test_dimensions(self, unit_oscillator):
        assert unit_oscillator.nx == 2
        assert unit_oscillator.nu == 1
        assert unit_oscillator.ny == 1

    def test_general_parameters(self):
        k, m, b = 3.0, 0.7, 0.25
        system = MassSpringDamper(k=k, m=m, b=b)
        assert_allclose(system.A, [[0.0, 1.0], [-k / m, -b / m]], rtol=1e-14)
        assert_allclose(system.B, [[0.0], [1.0 / m]], rtol=1e-14)


# ============================================================================
# Test: Symbolic Definition
# ============================================================================


class TestSymbolicDefinition:
    """Symbolic variables and dynamics."""

    def test_variables(self, unit_oscillator):
        assert [str(v) for v in unit_oscillator.state_vars] == ["q", "q_dot"]
        assert [str(v) for v in unit_oscillator.control_vars] == ["u"]
        assert [str(v) for v in unit_oscillator.output_vars] == ["q"]

    def test_dynamics_expression(self, unit_oscillator):
        q, q_dot = unit_oscillator.state_vars
        (u,) = unit_oscillator.control_vars
        f = unit_oscillator._f_sym.subs(unit_oscillator.parameters)
        point = {q: 0.3, q_dot: -0.2, u: 0.5}
        assert float(f[0].subs(point)) == pytest.approx(-0.2)
        assert float(f[1].subs(point)) == pytest.approx(0.5 - 0.3)

    def test_parameters_stored(self, damped_oscillator):
        values = {str(symbol): value for symbol, value in damped_oscillator.parameters.items()}
        assert values == {"k": 4.0, "m": 2.0, "b": 1.0}


# ============================================================================
# Test: Evaluation
# ============================================================================


class TestEvaluation:
    """Output equation and mechanical energy."""

    def test_output_is_position(self, unit_oscillator):
        y = unit_oscillator.output(np.array([0.3, -1.2]))
        assert y.shape == (1,)
        assert y[0] == pytest.approx(0.3)

    def test_output_ignores_input_without_feedthrough(self, unit_oscillator):
        y = unit_oscillator.output(np.array([0.3, -1.2]), u=5.0)
        assert y[0] == pytest.approx(0.3)

    def test_energy(self, damped_oscillator):
        # 0.5*2*1.5^2 + 0.5*4*0.5^2
        assert damped_oscillator.energy(np.array([0.5, 1.5])) == pytest.approx(2.75)

    def test_energy_at_rest(self, unit_oscillator):
        assert unit_oscillator.energy([0.0, 0.0]) == 0.0


# ============================================================================
# Test: Validation
# ============================================================================


class TestValidation:
    """Degenerate parameters fail before A and B are formed."""

    def test_zero_mass(self):
        with pytest.raises(InvalidConfiguration, match="nonzero"):
            MassSpringDamper(m=0.0)

    def test_negative_mass(self):
        with pytest.raises(InvalidConfiguration, match="positive"):
            MassSpringDamper(m=-1.0)

    @pytest.mark.parametrize("field", ["k", "m", "b"])
    def test_non_finite(self, field):
        with pytest.raises(InvalidConfiguration, match="non-finite"):
            MassSpringDamper(**{field: float("inf")})

    def test_negative_stiffness_allowed(self):
        system = MassSpringDamper(k=-1.0)
        assert_array_equal(system.A, [[0.0, 1.0], [1.0, 0.0]])

    def test_repr(self, damped_oscillator):
        assert repr(damped_oscillator) == "MassSpringDamper(k=4.0, m=2.0, b=1.0)"
