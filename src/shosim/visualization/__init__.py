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
Visualization Tools
===================

Plotly figures for a plant/observer run. The plotters only read the
arrays returned by ``Simulator.run()``; the numeric core does not
depend on this package.

>>> from shosim.visualization import TrajectoryPlotter, PhasePortraitPlotter
>>>
>>> xs, xhats, ts = Simulator().run()
>>> TrajectoryPlotter().plot_states(ts, xs, xhats).show()
>>> PhasePortraitPlotter().plot_phase_space(xs, xhats).show()
"""

from .phase_portrait import PhasePortraitPlotter
from .themes import ObserverStyle, to_numpy
from .trajectory_plotter import TrajectoryPlotter

__all__ = [
    "TrajectoryPlotter",
    "PhasePortraitPlotter",
    "ObserverStyle",
    "to_numpy",
]
