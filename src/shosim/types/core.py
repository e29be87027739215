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
Core Types - Semantic Array Aliases

Names for the arrays that flow through the oscillator/observer pipeline.
All aliases resolve to array types; they exist so signatures read in the
language of state-space models rather than as bare ``np.ndarray``.

Shape conventions (nx = 2 states, nu = 1 input, ny = 1 output):

- State vector x, x̂: (nx,)
- State matrix A, Φ: (nx, nx)
- Input matrix B: (nx, nu)
- Output matrix C: (ny, nx)
- Feedthrough D: (ny, nu)
- Observer gain K: (nx, ny)
- Trajectories: **state-major** (nx, N), sample i is ``traj[:, i]``

Usage
-----
>>> from shosim.types.core import StateVector, StateMatrix, GainMatrix
>>>
>>> def correction(K: GainMatrix, r: float, dt: float) -> StateVector:
...     return K[:, 0] * r * dt
"""

from typing import TYPE_CHECKING, Sequence, Union

import numpy as np

if TYPE_CHECKING:
    import jax.numpy as jnp
    import torch


# ============================================================================
# Basic Array Types
# ============================================================================

ArrayLike = Union[np.ndarray, "torch.Tensor", "jnp.ndarray"]
"""
Array-like type supporting the numpy, torch and jax backends.

Numerical work is always done in NumPy; torch/jax only appear when a
result is converted for the caller.
"""

NumpyArray = np.ndarray

VectorLike = Union[Sequence[float], np.ndarray]
"""Anything ``np.asarray`` turns into a 1-D float vector (tuples, lists, arrays)."""


# ============================================================================
# Vector Types
# ============================================================================

StateVector = NumpyArray
"""State vector x = [position, velocity], shape (2,)."""

OutputVector = NumpyArray
"""Output vector y = C·x + D·u, shape (1,)."""

ResidualVector = NumpyArray
"""Output residual r = y - ŷ, shape (ny,)."""


# ============================================================================
# Matrix Types
# ============================================================================

StateMatrix = NumpyArray
"""Continuous dynamics A or discrete transition Φ, shape (nx, nx)."""

InputMatrix = NumpyArray
"""Input matrix B, shape (nx, nu)."""

OutputMatrix = NumpyArray
"""Output matrix C, shape (ny, nx)."""

FeedthroughMatrix = NumpyArray
"""Feedthrough D, shape (ny, nu)."""

GainMatrix = NumpyArray
"""Observer gain K mapping residual to estimate correction, shape (nx, ny)."""

ObservabilityMatrix = NumpyArray
"""
Observability matrix O = [C; CA; CA²; ...; CA^(n-1)], shape (nx*ny, nx).
"""


# ============================================================================
# Trajectory Types
# ============================================================================

TimePoints = NumpyArray
"""Sample times, shape (N,). ``ts[i] = t0 + i*dt``."""

StateTrajectory = NumpyArray
"""State-major trajectory, shape (nx, N)."""

OutputSequence = NumpyArray
"""Output-major sequence, shape (ny, N)."""
