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
Backend and Method Types

Literal identifiers for output backends and discretization methods.

Usage
-----
>>> from shosim.types.backends import Backend, DiscretizationMethod
>>>
>>> backend: Backend = 'numpy'
>>> method: DiscretizationMethod = 'expm'
"""

from typing import Literal, Tuple

Backend = Literal["numpy", "torch", "jax"]
"""
Backend identifier for returned arrays.

- 'numpy': NumPy arrays (default, no extra dependency)
- 'torch': PyTorch tensors (requires the ``torch`` extra)
- 'jax': JAX arrays (requires the ``jax`` extra)

Computation always happens in NumPy/SciPy; the backend only controls
the type of the arrays handed back to the caller.
"""

VALID_BACKENDS: Tuple[str, ...] = ("numpy", "torch", "jax")

DiscretizationMethod = Literal["expm", "euler"]
"""
Discretization method for the one-step transition operator.

- 'expm': Φ = exp(A·dt), exact for linear systems
- 'euler': Φ = I + A·dt, first-order, kept for comparison
"""

VALID_DISCRETIZATION_METHODS: Tuple[str, ...] = ("expm", "euler")

SystemType = Literal["continuous", "discrete"]
"""Stability criterion selector: left half-plane or unit circle."""
