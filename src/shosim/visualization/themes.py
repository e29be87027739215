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
Plotting Styles

Colors and trace styles shared by the trajectory and phase-space plots,
so that "true" and "estimated" look the same in every figure.

Usage
-----
>>> from shosim.visualization.themes import ObserverStyle
>>> go.Scatter(x=ts, y=xs[0], **ObserverStyle.trace_style('true'))
"""

from typing import Any, Dict

import numpy as np


class ObserverStyle:
    """
    Trace styles for true vs. estimated trajectories.

    Attributes
    ----------
    TRUE_COLOR : str
        Plotly blue, used for the plant state
    ESTIMATE_COLOR : str
        Plotly red, used for the observer estimate
    PHASE_TRUE_COLOR : str
        Red, used for the true orbit in phase space
    PHASE_ESTIMATE_COLOR : str
        Blue, used for the estimate in phase space
    TEMPLATE : str
        Plotly layout template
    """

    TRUE_COLOR = "#636EFA"
    ESTIMATE_COLOR = "#EF553B"
    PHASE_TRUE_COLOR = "#EF553B"
    PHASE_ESTIMATE_COLOR = "#636EFA"
    TEMPLATE = "plotly_white"

    _STYLES: Dict[str, Dict[str, Any]] = {
        "true": {
            "mode": "lines+markers",
            "line": {"color": TRUE_COLOR, "width": 2},
            "marker": {"color": TRUE_COLOR, "size": 4, "symbol": "circle"},
        },
        "estimated": {
            "mode": "lines+markers",
            "line": {"color": ESTIMATE_COLOR, "width": 1.5},
            "marker": {"color": ESTIMATE_COLOR, "size": 7, "symbol": "circle-open"},
        },
        "true_phase": {
            "mode": "lines",
            "line": {"color": PHASE_TRUE_COLOR, "width": 2, "dash": "dashdot"},
        },
        "estimated_phase": {
            "mode": "lines+markers",
            "line": {"color": PHASE_ESTIMATE_COLOR, "width": 1.5},
            "marker": {"color": PHASE_ESTIMATE_COLOR, "size": 6, "symbol": "circle-open"},
        },
    }

    @classmethod
    def trace_style(cls, kind: str) -> Dict[str, Any]:
        """
        Keyword arguments for ``go.Scatter`` for one trace kind.

        Parameters
        ----------
        kind : str
            'true', 'estimated', 'true_phase' or 'estimated_phase'
        """
        if kind not in cls._STYLES:
            raise ValueError(f"Unknown trace kind '{kind}'. Choose from {list(cls._STYLES)}")
        style = cls._STYLES[kind]
        return {key: dict(value) if isinstance(value, dict) else value for key, value in style.items()}


def to_numpy(arr) -> np.ndarray:
    """
    Convert array from any backend to NumPy.

    Parameters
    ----------
    arr : array-like
        NumPy array, torch tensor, JAX array or nested sequence

    Returns
    -------
    np.ndarray
    """
    if isinstance(arr, np.ndarray):
        return arr

    # PyTorch
    if hasattr(arr, "cpu") and hasattr(arr, "detach"):
        return arr.detach().cpu().numpy()

    return np.asarray(arr)
