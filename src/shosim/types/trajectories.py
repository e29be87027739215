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
Trajectory Result Types

Result dictionary for a joint plant/observer simulation.
"""

from typing import Any, Dict

from typing_extensions import TypedDict

from .core import ArrayLike


class ObserverSimulationResult(TypedDict, total=False):
    """
    Result from ``Simulator.simulate()``.

    All sequences share the same sample axis: entry i (column i for
    state-major arrays) belongs to time ``time[i]``.

    **SHAPE CONVENTION**: state-major ordering (nx, N), matching the
    ``xs[:, i]`` indexing used by ``Simulator.run()``.

    Attributes
    ----------
    time : TimePoints
        Sample times (N,), ``time[i] = t0 + i*dt``
    states : StateTrajectory
        True state trajectory (2, N)
    estimates : StateTrajectory
        Observer estimate trajectory (2, N)
    outputs : OutputSequence
        Measured output y = C·x + D·u (1, N)
    residuals : OutputSequence
        Residual r = y - ŷ used for the correction at each sample (1, N)
    estimation_error : ArrayLike
        Euclidean norm ||x[:, i] - x̂[:, i]|| (N,)
    success : bool
        True when every sample was recorded
    metadata : Dict[str, Any]
        - 'method': discretization method
        - 'dt': time step
        - 'n_steps': number of recorded samples
        - 'observer_eigenvalues': eigenvalues of A - K·C
        - 'observer_stable': whether A - K·C is asymptotically stable

    Examples
    --------
    >>> result: ObserverSimulationResult = Simulator().simulate()
    >>> result['states'].shape
    (2, 251)
    >>> result['estimation_error'][-1] < result['estimation_error'][0]
    True
    """

    time: ArrayLike
    states: ArrayLike
    estimates: ArrayLike
    outputs: ArrayLike
    residuals: ArrayLike
    estimation_error: ArrayLike
    success: bool
    metadata: Dict[str, Any]
