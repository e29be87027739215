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
Configuration Validator for the Oscillator/Observer Simulation

Checks a simulation configuration before any matrix is built or any
buffer is allocated, so that degenerate inputs fail fast instead of
propagating NaN/Inf through the time-stepping loop.

Checks:
- Physical parameters (finite k, m, b; nonzero, positive mass)
- Time grid (finite t0, positive finite dt, at least one sample)
- Dimensions (observer gain (2,) or (2, 1), initial states of length 2)
- Method name (known discretization method)

Errors are collected first and reported together; non-fatal findings
(negative stiffness or damping) are issued as ``UserWarning``.
"""

import warnings
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

import numpy as np

from shosim.types.backends import VALID_DISCRETIZATION_METHODS

# ============================================================================
# Exceptions
# ============================================================================


class ValidationError(ValueError):
    """Raised when configuration validation fails"""

    pass


class InvalidConfiguration(ValidationError):
    """
    Raised when a simulation cannot be constructed from its configuration.

    Always raised before the first simulation step, e.g. for m = 0
    (A and B would divide by zero) or for a gain/initial state whose
    dimension does not match the 2-state model.
    """

    pass


# ============================================================================
# Validation Result Container
# ============================================================================


@dataclass
class ValidationResult:
    """
    Container for validation results.

    Attributes
    ----------
    is_valid : bool
        True if configuration passed all checks
    errors : List[str]
        Validation errors (empty if valid)
    warnings : List[str]
        Non-fatal findings
    info : Dict
        Summary of the validated configuration
    """

    is_valid: bool
    errors: List[str]
    warnings: List[str]
    info: Dict


# ============================================================================
# Parameter Checks (shared with MassSpringDamper)
# ============================================================================


def check_physical_parameters(k: float, m: float, b: float) -> Tuple[List[str], List[str]]:
    """
    Check oscillator parameters.

    Returns
    -------
    errors, warnings : Tuple[List[str], List[str]]

    Examples
    --------
    >>> errors, _ = check_physical_parameters(k=1.0, m=0.0, b=0.0)
    >>> errors[0]
    'Mass m = 0.0 must be nonzero: A = [[0, 1], [-k/m, -b/m]] divides by m.'
    """
    errors: List[str] = []
    warns: List[str] = []

    for name, value in (("k", k), ("m", m), ("b", b)):
        if not _is_finite_scalar(value):
            errors.append(
                f"Parameter {name} has non-finite value: {value}. "
                f"Parameters must be finite numbers."
            )

    if errors:
        return errors, warns

    if m == 0:
        errors.append(
            f"Mass m = {m} must be nonzero: A = [[0, 1], [-k/m, -b/m]] divides by m."
        )
    elif m < 0:
        errors.append(
            f"Mass m = {m} should be positive. Negative mass is physically invalid."
        )

    if k < 0:
        warns.append(f"Spring constant k = {k} is negative; the origin is unstable.")
    if b < 0:
        warns.append(f"Damping b = {b} is negative; the oscillator gains energy.")

    return errors, warns


def _is_finite_scalar(value: Any) -> bool:
    try:
        return bool(np.isfinite(float(value)))
    except (TypeError, ValueError):
        return False


# ============================================================================
# Configuration Validator
# ============================================================================


class ConfigurationValidator:
    """
    Validates a ``SimulationConfig`` (or any object with the same fields).

    Examples
    --------
    >>> validator = ConfigurationValidator(SimulationConfig(m=0.0))
    >>> result = validator.validate(raise_on_error=False)
    >>> result.is_valid
    False
    >>>
    >>> # Raise exception on error
    >>> try:
    ...     validator.validate()
    ... except InvalidConfiguration as e:
    ...     print(f"Validation failed: {e}")
    """

    def __init__(self, config):
        self.config = config
        self._errors: List[str] = []
        self._warnings: List[str] = []

    # ========================================================================
    # Public API
    # ========================================================================

    def validate(self, raise_on_error: bool = True) -> ValidationResult:
        """
        Validate the configuration.

        Parameters
        ----------
        raise_on_error : bool
            If True, raise InvalidConfiguration on failure.
            If False, return ValidationResult with errors.

        Returns
        -------
        ValidationResult

        Raises
        ------
        InvalidConfiguration
            If validation fails and raise_on_error=True
        """
        self._errors = []
        self._warnings = []

        self._validate_physical_parameters()
        self._validate_time_grid()
        self._validate_dimensions()
        self._validate_method()

        is_valid = len(self._errors) == 0

        result = ValidationResult(
            is_valid=is_valid,
            errors=self._errors.copy(),
            warnings=self._warnings.copy(),
            info=self._build_info(),
        )

        if result.warnings:
            self._issue_warnings(result.warnings)

        if not is_valid and raise_on_error:
            raise InvalidConfiguration(self._format_error_message())

        return result

    # ========================================================================
    # Validation Checks
    # ========================================================================

    def _validate_physical_parameters(self):
        cfg = self.config
        errors, warns = check_physical_parameters(cfg.k, cfg.m, cfg.b)
        self._errors.extend(errors)
        self._warnings.extend(warns)

    def _validate_time_grid(self):
        cfg = self.config

        for name in ("t0", "u"):
            value = getattr(cfg, name)
            if not _is_finite_scalar(value):
                self._errors.append(f"{name} must be a finite number, got {value!r}")

        if not _is_finite_scalar(cfg.dt):
            self._errors.append(f"Time step dt must be a finite number, got {cfg.dt!r}")
        elif cfg.dt <= 0:
            self._errors.append(f"Time step dt must be positive, got {cfg.dt}")

        n = cfg.n_steps
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            self._errors.append(f"n_steps must be an integer, got {type(n).__name__}")
        elif n < 1:
            self._errors.append(f"n_steps must be at least 1, got {n}")

    def _validate_dimensions(self):
        cfg = self.config

        gain = np.asarray(cfg.K, dtype=float)
        if gain.shape not in ((2,), (2, 1)):
            self._errors.append(
                f"Observer gain K must have shape (2,) or (2, 1), got {gain.shape}"
            )
        elif not np.all(np.isfinite(gain)):
            self._errors.append(f"Observer gain K has non-finite entries: {gain.ravel()}")

        for name in ("x0", "xhat0"):
            vec = np.asarray(getattr(cfg, name), dtype=float)
            if vec.shape != (2,):
                self._errors.append(
                    f"Initial state {name} must have length 2, got shape {vec.shape}"
                )
            elif not np.all(np.isfinite(vec)):
                self._errors.append(f"Initial state {name} has non-finite entries: {vec}")

    def _validate_method(self):
        method = self.config.method
        if method not in VALID_DISCRETIZATION_METHODS:
            self._errors.append(
                f"Unknown discretization method '{method}'. "
                f"Choose from {VALID_DISCRETIZATION_METHODS}"
            )

    # ========================================================================
    # Reporting
    # ========================================================================

    def _build_info(self) -> Dict:
        cfg = self.config
        return {
            "nx": 2,
            "nu": 1,
            "ny": 1,
            "n_steps": cfg.n_steps,
            "dt": cfg.dt,
            "method": cfg.method,
        }

    def _issue_warnings(self, warnings_list: List[str]):
        for warning in warnings_list:
            warnings.warn(f"Configuration warning: {warning}", UserWarning)

    def _format_error_message(self) -> str:
        msg = "Simulation configuration is invalid:\n"
        msg += "\n".join(f"  • {error}" for error in self._errors)
        return msg
