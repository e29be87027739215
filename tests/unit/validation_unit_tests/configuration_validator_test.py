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
Unit Tests for ConfigurationValidator
======================================

Test Coverage:
- Physical parameter checks (errors and warnings)
- Time grid checks
- Dimension checks
- Error aggregation and exception hierarchy
"""

import warnings

import numpy as np
import pytest

from shosim.simulation.config import SimulationConfig
from shosim.validation import (
    ConfigurationValidator,
    InvalidConfiguration,
    ValidationError,
    check_physical_parameters,
)


def _errors(**changes):
    config = SimulationConfig().replace(**changes)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        return ConfigurationValidator(config).validate(raise_on_error=False).errors


# ============================================================================
# Test: Physical Parameters
# ============================================================================


class TestPhysicalParameters:
    """check_physical_parameters()"""

    def test_defaults_clean(self):
        assert check_physical_parameters(1.0, 1.0, 0.0) == ([], [])

    def test_zero_mass(self):
        errors, _ = check_physical_parameters(1.0, 0.0, 0.0)
        assert errors == [
            "Mass m = 0.0 must be nonzero: A = [[0, 1], [-k/m, -b/m]] divides by m."
        ]

    def test_negative_mass(self):
        errors, _ = check_physical_parameters(1.0, -2.0, 0.0)
        assert len(errors) == 1
        assert "positive" in errors[0]

    def test_nan_parameter(self):
        errors, _ = check_physical_parameters(float("nan"), 1.0, 0.0)
        assert "Parameter k has non-finite value" in errors[0]

    def test_non_numeric_parameter(self):
        errors, _ = check_physical_parameters(1.0, "heavy", 0.0)
        assert "Parameter m" in errors[0]

    def test_negative_stiffness_and_damping_warn(self):
        errors, warns = check_physical_parameters(-1.0, 1.0, -0.5)
        assert errors == []
        assert len(warns) == 2


# ============================================================================
# Test: Validator
# ============================================================================


class TestConfigurationValidator:
    """ConfigurationValidator.validate()"""

    def test_default_config_valid(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = ConfigurationValidator(SimulationConfig()).validate()
        assert result.is_valid
        assert result.errors == []
        assert result.info["n_steps"] == 251

    @pytest.mark.parametrize(
        "changes, fragment",
        [
            ({"dt": 0.0}, "dt must be positive"),
            ({"dt": -0.1}, "dt must be positive"),
            ({"dt": float("inf")}, "dt must be a finite number"),
            ({"t0": float("nan")}, "t0 must be a finite number"),
            ({"u": float("inf")}, "u must be a finite number"),
            ({"n_steps": 0}, "at least 1"),
            ({"n_steps": 2.5}, "must be an integer"),
            ({"n_steps": True}, "must be an integer"),
            ({"K": (0.5,)}, "Observer gain K"),
            ({"K": (0.5, float("nan"))}, "non-finite"),
            ({"x0": (1.0, 0.0, 0.0)}, "x0 must have length 2"),
            ({"xhat0": (0.0,)}, "xhat0 must have length 2"),
            ({"method": "rk4"}, "Unknown discretization method"),
        ],
    )
    def test_single_error(self, changes, fragment):
        errors = _errors(**changes)
        assert len(errors) == 1
        assert fragment in errors[0]

    def test_column_gain_accepted(self):
        assert _errors(K=np.array([[0.5], [-0.1]])) == []

    def test_numpy_integer_steps_accepted(self):
        assert _errors(n_steps=np.int64(10)) == []

    def test_errors_aggregated(self):
        config = SimulationConfig(m=0.0, dt=-1.0, x0=(1.0,))
        with pytest.raises(InvalidConfiguration) as exc_info:
            ConfigurationValidator(config).validate()
        message = str(exc_info.value)
        assert message.startswith("Simulation configuration is invalid:")
        assert message.count("  • ") == 3

    def test_warning_issued(self):
        with pytest.warns(UserWarning, match="Configuration warning: Damping b"):
            result = ConfigurationValidator(SimulationConfig(b=-0.1)).validate()
        assert result.is_valid
        assert len(result.warnings) == 1

    def test_no_raise_returns_result(self):
        result = ConfigurationValidator(SimulationConfig(m=0.0)).validate(raise_on_error=False)
        assert not result.is_valid

    def test_exception_hierarchy(self):
        assert issubclass(InvalidConfiguration, ValidationError)
        assert issubclass(InvalidConfiguration, ValueError)
