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
Phase Portrait Plotter - Position/Velocity Plane

Overlays the observer estimate and the true state in phase space. The
undamped true trajectory is a closed orbit; the estimate spirals onto it
as the estimation error decays.

Usage
-----
>>> xs, xhats, ts = Simulator().run()
>>> fig = PhasePortraitPlotter().plot_phase_space(xs, xhats)
>>> fig.show()
"""

from typing import Tuple

import plotly.graph_objects as go

from shosim.types.core import StateTrajectory
from shosim.visualization.themes import ObserverStyle, to_numpy


class PhasePortraitPlotter:
    """
    Phase space visualization of a plant/observer run.

    Attributes
    ----------
    limits : Tuple[float, float]
        Axis range used for both axes

    Examples
    --------
    >>> plotter = PhasePortraitPlotter()
    >>> fig = plotter.plot_phase_space(xs, xhats)
    >>> fig.layout.title.text
    'phase space trajectory'
    """

    def __init__(self, limits: Tuple[float, float] = (-1.5, 1.5)):
        self.limits = limits

    def plot_phase_space(
        self,
        xs: StateTrajectory,
        xhats: StateTrajectory,
        state_names: Tuple[str, str] = ("position [m]", "velocity [m/s]"),
        title: str = "phase space trajectory",
        size: int = 600,
    ) -> go.Figure:
        """
        Create the phase portrait (velocity vs. position).

        Parameters
        ----------
        xs : StateTrajectory
            True states, state-major (2, N)
        xhats : StateTrajectory
            Estimates, state-major (2, N)
        state_names : Tuple[str, str]
            Horizontal and vertical axis titles
        title : str
            Plot title
        size : int
            Width and height in pixels (square figure)

        Returns
        -------
        go.Figure
            Estimated trace first, then true trace

        Raises
        ------
        ValueError
            If xs and xhats are not both (2, N)
        """
        xs_np = to_numpy(xs)
        xhats_np = to_numpy(xhats)

        if xs_np.ndim != 2 or xs_np.shape[0] != 2:
            raise ValueError(
                f"plot_phase_space requires 2D state, got shape {xs_np.shape} (expected (2, N))"
            )
        if xhats_np.shape != xs_np.shape:
            raise ValueError(
                f"xhats shape {xhats_np.shape} does not match xs shape {xs_np.shape}"
            )

        fig = go.Figure()

        fig.add_trace(
            go.Scatter(
                x=xhats_np[0],
                y=xhats_np[1],
                name="estimated state",
                **ObserverStyle.trace_style("estimated_phase"),
            )
        )
        fig.add_trace(
            go.Scatter(
                x=xs_np[0],
                y=xs_np[1],
                name="true state",
                **ObserverStyle.trace_style("true_phase"),
            )
        )

        fig.update_layout(
            title=title,
            xaxis_title=state_names[0],
            yaxis_title=state_names[1],
            template=ObserverStyle.TEMPLATE,
            width=size,
            height=size,
            showlegend=True,
        )

        fig.update_xaxes(range=list(self.limits), showgrid=True)
        fig.update_yaxes(range=list(self.limits), showgrid=True, scaleanchor="x", scaleratio=1)

        return fig
