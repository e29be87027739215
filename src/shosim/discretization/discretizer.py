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
Discretizer - One-Step Transition Operator for Linear Systems

Converts the continuous dynamics dx/dt = A x + B u into the discrete
update used by the simulator:

    x[k+1] = Φ (x[k] + B u dt)

with Φ the state-transition operator over one step.

Methods
-------
- 'expm':  Φ = exp(A·dt)   exact free response, independent of dt
- 'euler': Φ = I + A·dt    first-order approximation, for comparison

A and dt are fixed at construction, so Φ is computed once and reused
for every step.

Examples
--------
>>> discretizer = Discretizer(np.array([[0., 1.], [-1., 0.]]), dt=0.1)
>>> Phi = discretizer.transition_matrix
>>>
>>> # Single step
>>> x_next = discretizer.step(x, u=0.0, B=np.array([[0.], [1.]]))
"""

from typing import Any, Dict, Optional

import numpy as np
from scipy.linalg import expm

from shosim.types.backends import VALID_DISCRETIZATION_METHODS, DiscretizationMethod
from shosim.types.core import InputMatrix, StateMatrix, StateVector
from shosim.validation import InvalidConfiguration


class Discretizer:
    """
    Transition operator for a linear time-invariant system.

    Attributes
    ----------
    A : StateMatrix
        Continuous dynamics matrix (nx, nx)
    dt : float
        Time step
    method : str
        'expm' or 'euler'
    transition_matrix : StateMatrix
        Φ (nx, nx), computed once at construction

    Examples
    --------
    >>> system = MassSpringDamper(k=1.0, m=1.0, b=0.0)
    >>> discretizer = Discretizer(system.A, dt=0.1)
    >>> np.allclose(discretizer.transition_matrix,
    ...             [[np.cos(0.1), np.sin(0.1)], [-np.sin(0.1), np.cos(0.1)]])
    True
    """

    def __init__(
        self,
        A: StateMatrix,
        dt: float,
        method: DiscretizationMethod = "expm",
    ):
        """
        Initialize discretizer.

        Parameters
        ----------
        A : StateMatrix
            Continuous dynamics matrix, must be square
        dt : float
            Time step (must be positive and finite)
        method : str
            'expm' (default, exact) or 'euler'

        Raises
        ------
        InvalidConfiguration
            If dt <= 0 or A is not square
        ValueError
            If method is unknown
        """
        A = np.asarray(A, dtype=np.float64)
        if A.ndim != 2 or A.shape[0] != A.shape[1]:
            raise InvalidConfiguration(f"A must be a square matrix, got shape {A.shape}")
        if not np.isfinite(dt) or dt <= 0:
            raise InvalidConfiguration(f"Time step dt must be positive, got {dt}")
        if method not in VALID_DISCRETIZATION_METHODS:
            raise ValueError(
                f"Unknown discretization method '{method}'. "
                f"Choose from {VALID_DISCRETIZATION_METHODS}"
            )

        self.A = A
        self.dt = float(dt)
        self.method = method
        self.nx = A.shape[0]

        self._transition_matrix = self._compute_transition_matrix()

    # ========================================================================
    # Transition Operator
    # ========================================================================

    def _compute_transition_matrix(self) -> StateMatrix:
        if self.method == "expm":
            return expm(self.A * self.dt)
        return np.eye(self.nx) + self.A * self.dt

    @property
    def transition_matrix(self) -> StateMatrix:
        """Φ over one step (read-only copy)."""
        return self._transition_matrix.copy()

    # ========================================================================
    # Primary Interface - Discrete Dynamics
    # ========================================================================

    def step(
        self,
        x: StateVector,
        u: float = 0.0,
        B: Optional[InputMatrix] = None,
        correction: Optional[StateVector] = None,
    ) -> StateVector:
        """
        Advance one step: Φ·(x + B·u·dt + correction).

        The input term B·u·dt (and an optional additive ``correction``,
        used by the observer for K·r·dt) is injected before propagation.

        Parameters
        ----------
        x : StateVector
            Current state (nx,)
        u : float
            Input, held constant over the step
        B : Optional[InputMatrix]
            Input matrix (nx, nu). If None, the system is treated as free.
        correction : Optional[StateVector]
            Additional state increment (nx,) applied before propagation

        Returns
        -------
        StateVector
            Next state (nx,)
        """
        increment = np.asarray(x, dtype=np.float64).copy()
        if B is not None:
            u_vec = np.atleast_1d(np.asarray(u, dtype=np.float64))
            increment = increment + (B @ u_vec) * self.dt
        if correction is not None:
            increment = increment + np.asarray(correction, dtype=np.float64)
        return self._transition_matrix @ increment

    def __call__(self, x: StateVector, u: float = 0.0, B: Optional[InputMatrix] = None):
        return self.step(x, u, B)

    def get_info(self) -> Dict[str, Any]:
        return {
            "method": self.method,
            "dt": self.dt,
            "nx": self.nx,
            "is_exact": self.method == "expm",
        }

    def __repr__(self) -> str:
        return f"Discretizer(method='{self.method}', dt={self.dt}, nx={self.nx})"
