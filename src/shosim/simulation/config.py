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
Simulation Configuration

Immutable parameter set for one oscillator/observer run. Defaults
reproduce the reference scenario: an undamped unit oscillator released
from x0 = [1, 0], observed from position only, with the estimate
starting at the origin.
"""

from dataclasses import dataclass, replace
from typing import Tuple

from shosim.types.backends import DiscretizationMethod


@dataclass(frozen=True)
class SimulationConfig:
    """
    Configuration of a ``Simulator`` run.

    Attributes
    ----------
    k : float
        Spring constant [N/m]
    m : float
        Mass [kg]
    b : float
        Damping constant [N⋅s/m]
    K : Tuple[float, float]
        Observer gain, residual --> estimate derivative
    x0 : Tuple[float, float]
        Initial true state [position, velocity]
    xhat0 : Tuple[float, float]
        Initial state estimate
    t0 : float
        Initial time [s]
    u : float
        Constant input force [N]
    n_steps : int
        Number of recorded samples N
    dt : float
        Time step [s]
    method : str
        Discretization method, 'expm' (exact) or 'euler'

    Examples
    --------
    >>> config = SimulationConfig()
    >>> config.n_steps, config.dt
    (251, 0.1)
    >>>
    >>> # Parameter sweep
    >>> damped = config.replace(b=0.2)
    """

    k: float = 1.0
    m: float = 1.0
    b: float = 0.0
    K: Tuple[float, float] = (0.5, -0.1)
    x0: Tuple[float, float] = (1.0, 0.0)
    xhat0: Tuple[float, float] = (0.0, 0.0)
    t0: float = 0.0
    u: float = 0.0
    n_steps: int = 251
    dt: float = 0.1
    method: DiscretizationMethod = "expm"

    def replace(self, **changes) -> "SimulationConfig":
        """Return a copy with the given fields changed."""
        return replace(self, **changes)

    @property
    def duration(self) -> float:
        """Time of the last recorded sample relative to t0."""
        return (self.n_steps - 1) * self.dt
