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
Control Analysis

Stateless stability and observability checks for linear systems and
Luenberger observer designs.

>>> from shosim.control import analyze_stability, observer_error_dynamics
>>> A_err = observer_error_dynamics(system.A, K, system.C)
>>> analyze_stability(A_err)['is_stable']
True
"""

from .analysis import analyze_observability, analyze_stability, observer_error_dynamics

__all__ = [
    "analyze_stability",
    "analyze_observability",
    "observer_error_dynamics",
]
