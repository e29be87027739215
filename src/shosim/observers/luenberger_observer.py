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

from typing import Optional

import numpy as np

from shosim.discretization.discretizer import Discretizer
from shosim.systems.mass_spring_damper import MassSpringDamper
from shosim.types.core import (
    GainMatrix,
    OutputVector,
    ResidualVector,
    StateVector,
    VectorLike,
)
from shosim.validation import InvalidConfiguration


class LuenbergerObserver:
    """
    Linear state observer with constant gain.

    Runs a copy of the plant model in parallel with the plant and
    corrects it with the gain-weighted output residual:

        d x̂/dt = A x̂ + B u + K (y - ŷ),     ŷ = C x̂ + D u

    Discretized with the same transition operator Φ as the plant:

        x̂[k+1] = Φ (x̂[k] + B u dt + K r[k] dt),   r[k] = y[k] - ŷ[k]

    The free response is propagated exactly by Φ; the correction K·r·dt
    is a first-order injection, accurate while dt is small.

    Attributes:
        system: MassSpringDamper providing B, C, D
        K: Observer gain matrix (nx, ny)
        discretizer: Discretizer providing Φ and dt
        x_hat: Current state estimate (nx,)

    Example:
        >>> system = MassSpringDamper()
        >>> discretizer = Discretizer(system.A, dt=0.1)
        >>> observer = LuenbergerObserver(system, [0.5, -0.1], discretizer)
        >>>
        >>> x = np.array([1.0, 0.0])
        >>> for k in range(n_steps):
        >>>     y = system.output(x)
        >>>     observer.update(y)
        >>>     x = discretizer.step(x, 0.0, system.B)

    Notes:
        - The estimate converges when A - K·C is asymptotically stable
          (see ``shosim.control.analysis.observer_error_dynamics``)
        - No covariance tracking
    """

    def __init__(
        self,
        system: MassSpringDamper,
        K: VectorLike,
        discretizer: Discretizer,
        xhat0: Optional[VectorLike] = None,
    ):
        """
        Initialize observer.

        Args:
            system: Plant model
            K: Observer gain, shape (nx,) or (nx, ny)
            discretizer: Transition operator built from system.A
            xhat0: Initial estimate (nx,). Zeros if None.

        Raises:
            InvalidConfiguration: If K or xhat0 does not match the model
        """
        gain = np.asarray(K, dtype=np.float64)
        if gain.ndim == 1:
            gain = gain.reshape(-1, 1)
        if gain.shape != (system.nx, system.ny):
            raise InvalidConfiguration(
                f"Observer gain K must have shape ({system.nx}, {system.ny}), "
                f"got {np.shape(K)}"
            )

        self.system = system
        self.K: GainMatrix = gain
        self.discretizer = discretizer
        self.x_hat: StateVector = np.zeros(system.nx)
        self.reset(xhat0)

    def predicted_output(self, u: float = 0.0) -> OutputVector:
        """Expected output ŷ = C·x̂ + D·u."""
        return self.system.output(self.x_hat, u)

    def residual(self, y: OutputVector, u: float = 0.0) -> ResidualVector:
        """Residual r = y - ŷ, shape (ny,)."""
        return np.atleast_1d(np.asarray(y, dtype=np.float64)) - self.predicted_output(u)

    def update(self, y: OutputVector, u: float = 0.0) -> ResidualVector:
        """
        Advance the estimate by one step.

        Args:
            y: Measured plant output at the current step (ny,)
            u: Input applied over the step

        Returns:
            The residual r used for the correction
        """
        r = self.residual(y, u)
        correction = (self.K @ r) * self.discretizer.dt
        self.x_hat = self.discretizer.step(
            self.x_hat, u, self.system.B, correction=correction
        )
        return r

    def reset(self, xhat0: Optional[VectorLike] = None):
        """
        Reset observer to an initial estimate.

        Args:
            xhat0: Initial estimate (nx,). Uses zeros if None.
        """
        if xhat0 is None:
            self.x_hat = np.zeros(self.system.nx)
            return

        x0 = np.asarray(xhat0, dtype=np.float64)
        if x0.shape != (self.system.nx,):
            raise InvalidConfiguration(
                f"Initial estimate must have length {self.system.nx}, got shape {x0.shape}"
            )
        self.x_hat = x0.copy()
