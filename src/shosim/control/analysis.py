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
Linear System Analysis Functions

Pure stateless functions used to sanity-check an observer design before
simulating it:

- Stability analysis - eigenvalue-based
- Observability - rank test
- Observer error dynamics - A - K·C

Mathematical Background
-----------------------
With estimation error e = x - x̂, a Luenberger observer gives

    de/dt = (A - K C) e

so the estimate converges for any initial error iff A - K·C is
asymptotically stable. Such a K exists iff (A, C) is observable
(or at least detectable).

Stability:
    Continuous: All Re(λ) < 0 (left half-plane)
    Discrete:   All |λ| < 1 (inside unit circle)

Observability:   rank([C; CA; CA²; ...; CAⁿ⁻¹]) = n

Usage
-----
>>> A = np.array([[0, 1], [-1, 0]])
>>> C = np.array([[1, 0]])
>>> K = np.array([[0.5], [-0.1]])
>>>
>>> analyze_observability(A, C)['is_observable']
True
>>> analyze_stability(observer_error_dynamics(A, K, C))['is_stable']
True
"""

import numpy as np

from shosim.types.backends import SystemType
from shosim.types.control_classical import ObservabilityInfo, StabilityInfo
from shosim.types.core import GainMatrix, OutputMatrix, StateMatrix

# ============================================================================
# Stability Analysis
# ============================================================================


def analyze_stability(
    A: StateMatrix,
    system_type: SystemType = "continuous",
    tolerance: float = 1e-10,
) -> StabilityInfo:
    """
    Analyze system stability via eigenvalue analysis.

    Stability criteria:
        Continuous (dx/dt = Ax): All Re(λ) < 0 (left half-plane)
        Discrete (x[k+1] = Ax): All |λ| < 1 (inside unit circle)

    Args:
        A: State matrix (nx, nx)
        system_type: 'continuous' or 'discrete'
        tolerance: Tolerance for marginal stability detection

    Returns:
        StabilityInfo with eigenvalues, magnitudes and stability flags

    Examples
    --------
    >>> # Undamped oscillator: eigenvalues ±i
    >>> A = np.array([[0, 1], [-1, 0]])
    >>> analyze_stability(A)['is_marginally_stable']
    True
    >>>
    >>> # Its exact discretization keeps |λ| = 1
    >>> analyze_stability(expm(A * 0.1), system_type='discrete')['is_marginally_stable']
    True
    """
    A_np = np.asarray(A, dtype=np.float64)
    if A_np.ndim != 2 or A_np.shape[0] != A_np.shape[1]:
        raise ValueError(f"A must be square matrix, got shape {A_np.shape}")

    eigenvalues = np.linalg.eigvals(A_np)
    magnitudes = np.abs(eigenvalues)
    spectral_radius = float(np.max(magnitudes))

    # Distance from the stability boundary: Re(λ) = 0 or |λ| = 1
    if system_type == "continuous":
        margin = float(np.max(eigenvalues.real))
    elif system_type == "discrete":
        margin = spectral_radius - 1.0
    else:
        raise ValueError(f"system_type must be 'continuous' or 'discrete', got '{system_type}'")

    return {
        "eigenvalues": eigenvalues,
        "magnitudes": magnitudes,
        "spectral_radius": spectral_radius,
        "stability_margin": margin,
        "is_stable": margin < -tolerance,
        "is_marginally_stable": abs(margin) <= tolerance,
        "is_unstable": margin > tolerance,
    }


# ============================================================================
# Observability Analysis
# ============================================================================


def analyze_observability(
    A: StateMatrix,
    C: OutputMatrix,
    tolerance: float = 1e-10,
) -> ObservabilityInfo:
    """
    Test observability of linear system (A, C).

    Observability test:
        rank(O) = n, where O = [C; CA; CA²; ...; CAⁿ⁻¹]

    Args:
        A: State matrix (nx, nx)
        C: Output matrix (ny, nx)
        tolerance: Tolerance for rank computation

    Returns:
        ObservabilityInfo with observability matrix, rank and flag

    Examples
    --------
    >>> # Position measurement of an oscillator: observable
    >>> A = np.array([[0, 1], [-1, 0]])
    >>> analyze_observability(A, np.array([[1, 0]]))['rank']
    2
    >>>
    >>> # Double integrator measured by velocity only: not observable
    >>> A = np.array([[0, 1], [0, 0]])
    >>> analyze_observability(A, np.array([[0, 1]]))['is_observable']
    False
    """
    A_np = np.asarray(A, dtype=np.float64)
    C_np = np.atleast_2d(np.asarray(C, dtype=np.float64))
    nx = A_np.shape[0]

    if A_np.shape != (nx, nx):
        raise ValueError(f"A must be square, got shape {A_np.shape}")
    if C_np.shape[1] != nx:
        raise ValueError(f"C must have {nx} columns, got {C_np.shape[1]}")

    O = np.vstack([C_np @ np.linalg.matrix_power(A_np, i) for i in range(nx)])
    rank = int(np.linalg.matrix_rank(O, tol=tolerance))

    return {
        "observability_matrix": O,
        "rank": rank,
        "is_observable": rank == nx,
    }


# ============================================================================
# Observer Design Checks
# ============================================================================


def observer_error_dynamics(
    A: StateMatrix,
    K: GainMatrix,
    C: OutputMatrix,
) -> StateMatrix:
    """
    Error dynamics matrix A - K·C of a Luenberger observer.

    Args:
        A: State matrix (nx, nx)
        K: Observer gain (nx, ny) or (nx,) for a single output
        C: Output matrix (ny, nx)

    Returns:
        A - K·C, shape (nx, nx)

    Examples
    --------
    >>> A = np.array([[0., 1.], [-1., 0.]])
    >>> observer_error_dynamics(A, np.array([0.5, -0.1]), np.array([[1., 0.]]))
    array([[-0.5,  1. ],
           [-0.9,  0. ]])
    """
    A_np = np.asarray(A, dtype=np.float64)
    C_np = np.atleast_2d(np.asarray(C, dtype=np.float64))
    K_np = np.asarray(K, dtype=np.float64)
    if K_np.ndim == 1:
        K_np = K_np.reshape(-1, 1)

    if K_np.shape != (A_np.shape[0], C_np.shape[0]):
        raise ValueError(
            f"K must have shape ({A_np.shape[0]}, {C_np.shape[0]}), got {K_np.shape}"
        )

    return A_np - K_np @ C_np
