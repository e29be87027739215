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
Classical Analysis Result Types

Result dictionaries returned by the eigenvalue stability test and the
observability rank test in ``shosim.control.analysis``.
"""

import numpy as np
from typing_extensions import TypedDict

from .core import ObservabilityMatrix


class StabilityInfo(TypedDict):
    """
    Stability analysis result dictionary.

    Stability Criteria:
    - Continuous: All Re(λ) < 0 (left half-plane)
    - Discrete: All |λ| < 1 (inside unit circle)

    Fields
    ------
    eigenvalues : np.ndarray
        Eigenvalues of system matrix (complex)
    magnitudes : np.ndarray
        Absolute values |λ| of eigenvalues
    spectral_radius : float
        Maximum |λ|
    stability_margin : float
        max Re(λ) (continuous) or max|λ| - 1 (discrete); negative when stable
    is_stable : bool
        True if system is asymptotically stable
    is_marginally_stable : bool
        True if max|λ| ≈ 1 or max Re(λ) ≈ 0
    is_unstable : bool
        True if any |λ| > 1 or Re(λ) > 0

    Examples
    --------
    >>> A = np.array([[0, 1], [-1, 0]])  # undamped oscillator
    >>> info: StabilityInfo = analyze_stability(A, system_type='continuous')
    >>> info['is_marginally_stable']
    True
    """

    eigenvalues: np.ndarray
    magnitudes: np.ndarray
    spectral_radius: float
    stability_margin: float
    is_stable: bool
    is_marginally_stable: bool
    is_unstable: bool


class ObservabilityInfo(TypedDict):
    """
    Observability analysis result.

    A pair (A, C) is observable if the initial state can be determined
    from output measurements over a finite time interval, i.e. if
    rank([C; CA; ...; CAⁿ⁻¹]) = nx.

    Fields
    ------
    observability_matrix : ObservabilityMatrix
        O of shape (nx*ny, nx)
    rank : int
        Rank of O
    is_observable : bool
        True if rank == nx
    """

    observability_matrix: ObservabilityMatrix
    rank: int
    is_observable: bool
