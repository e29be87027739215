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

import numpy as np
import sympy as sp

from shosim.types.core import (
    FeedthroughMatrix,
    InputMatrix,
    OutputMatrix,
    OutputVector,
    StateMatrix,
    StateVector,
)
from shosim.validation import InvalidConfiguration, check_physical_parameters


class MassSpringDamper:
    """
    Damped mass-spring oscillator - first-order state-space formulation.

    Physical System:
    ---------------
    A point mass on a linear spring with viscous damping, driven by an
    external force. The mass experiences:
    - Spring force (proportional to displacement)
    - Damping force (proportional to velocity)
    - External force u

    State Space:
    -----------
    State: x = [q, q̇]
        - q: Position [m]
        - q̇: Velocity [m/s]

    Control: u = [F]
        - F: Applied force [N]

    Output: y = [q]
        - Measures only the position (partial observation)

    Dynamics:
    --------
        m q̈ = -k q - b q̇ + u

    Rewritten as first-order system:
        dx/dt = A x + B u,   y = C x + D u

        A = [[0, 1], [-k/m, -b/m]]
        B = [[0], [1/m]]
        C = [[1, 0]]
        D = [[0]]

    A and B are the Jacobians of the symbolic dynamics; since the model
    is linear they do not depend on the operating point.

    Parameters:
    ----------
    k : float, default=1.0
        Spring constant [N/m].
    m : float, default=1.0
        Mass [kg]. Must be nonzero and positive.
    b : float, default=0.0
        Damping constant [N⋅s/m]. b = 0 gives an undamped oscillator
        whose energy is conserved.

    Raises:
    ------
    InvalidConfiguration
        If m = 0, m < 0, or any parameter is non-finite.
    """

    def __init__(self, k: float = 1.0, m: float = 1.0, b: float = 0.0):
        errors, _ = check_physical_parameters(k, m, b)
        if errors:
            raise InvalidConfiguration(
                "Invalid oscillator parameters:\n"
                + "\n".join(f"  • {error}" for error in errors)
            )

        self.k_val = float(k)
        self.m_val = float(m)
        self.b_val = float(b)
        self.define_system(self.k_val, self.m_val, self.b_val)

        self.A: StateMatrix = self._to_numpy(self._A_sym)
        self.B: InputMatrix = self._to_numpy(self._B_sym)
        self.C: OutputMatrix = self._to_numpy(self._C_sym)
        self.D: FeedthroughMatrix = self._to_numpy(self._D_sym)

    def define_system(self, k_val, m_val, b_val):
        q, q_dot = sp.symbols("q q_dot", real=True)
        u = sp.symbols("u", real=True)
        k, m, b = sp.symbols("k m b", real=True)

        self.parameters = {k: k_val, m: m_val, b: b_val}
        self.state_vars = [q, q_dot]
        self.control_vars = [u]
        self.output_vars = [q]

        self._f_sym = sp.Matrix([q_dot, (u - k * q - b * q_dot) / m])
        self._h_sym = sp.Matrix([q])

        x = sp.Matrix(self.state_vars)
        u_vec = sp.Matrix(self.control_vars)
        self._A_sym = self._f_sym.jacobian(x).subs(self.parameters)
        self._B_sym = self._f_sym.jacobian(u_vec).subs(self.parameters)
        self._C_sym = self._h_sym.jacobian(x)
        self._D_sym = self._h_sym.jacobian(u_vec)

    @staticmethod
    def _to_numpy(matrix: sp.Matrix) -> np.ndarray:
        return np.array(matrix.evalf(), dtype=np.float64)

    @property
    def nx(self) -> int:
        return len(self.state_vars)

    @property
    def nu(self) -> int:
        return len(self.control_vars)

    @property
    def ny(self) -> int:
        return len(self.output_vars)

    def output(self, x: StateVector, u: float = 0.0) -> OutputVector:
        """Output equation y = C·x + D·u, shape (ny,)."""
        x = np.asarray(x, dtype=np.float64)
        return self.C @ x + self.D @ np.atleast_1d(np.asarray(u, dtype=np.float64))

    def energy(self, x: StateVector) -> float:
        """
        Mechanical energy 0.5·m·q̇² + 0.5·k·q².

        Constant along free (u = 0), undamped (b = 0) trajectories.
        """
        q, q_dot = np.asarray(x, dtype=np.float64)
        return float(0.5 * self.m_val * q_dot**2 + 0.5 * self.k_val * q**2)

    def __repr__(self) -> str:
        return f"MassSpringDamper(k={self.k_val}, m={self.m_val}, b={self.b_val})"
