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
Types Module

Central import point for the type definitions used across shosim.

Module Organization
------------------
- core: semantic array aliases (vectors, matrices, trajectories)
- backends: backend and discretization method literals
- control_classical: stability / observability result dicts
- trajectories: simulation result dict
"""

from .backends import (
    VALID_BACKENDS,
    VALID_DISCRETIZATION_METHODS,
    Backend,
    DiscretizationMethod,
    SystemType,
)
from .control_classical import ObservabilityInfo, StabilityInfo
from .core import (
    ArrayLike,
    FeedthroughMatrix,
    GainMatrix,
    InputMatrix,
    NumpyArray,
    ObservabilityMatrix,
    OutputMatrix,
    OutputSequence,
    OutputVector,
    ResidualVector,
    StateMatrix,
    StateTrajectory,
    StateVector,
    TimePoints,
    VectorLike,
)
from .trajectories import ObserverSimulationResult

__all__ = [
    # Backends
    "Backend",
    "DiscretizationMethod",
    "SystemType",
    "VALID_BACKENDS",
    "VALID_DISCRETIZATION_METHODS",
    # Core
    "ArrayLike",
    "NumpyArray",
    "VectorLike",
    "StateVector",
    "OutputVector",
    "ResidualVector",
    "StateMatrix",
    "InputMatrix",
    "OutputMatrix",
    "FeedthroughMatrix",
    "GainMatrix",
    "ObservabilityMatrix",
    "TimePoints",
    "StateTrajectory",
    "OutputSequence",
    # Results
    "StabilityInfo",
    "ObservabilityInfo",
    "ObserverSimulationResult",
]
