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
shosim: State-Space Harmonic Oscillator with a Luenberger Observer

Simulates a damped mass-spring oscillator with exact matrix-exponential
discretization, runs a linear observer alongside it that reconstructs
the velocity from position measurements, and records both trajectories.

>>> from shosim import Simulator
>>> xs, xhats, ts = Simulator().run()

Plotting lives in ``shosim.visualization`` and is imported separately.
"""

from shosim.simulation import NumericDivergence, SimulationConfig, Simulator
from shosim.systems import MassSpringDamper
from shosim.validation import InvalidConfiguration, ValidationError

__version__ = "0.1.0"

__all__ = [
    "Simulator",
    "SimulationConfig",
    "MassSpringDamper",
    "NumericDivergence",
    "InvalidConfiguration",
    "ValidationError",
]
