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
Trajectory Plotter - True vs. Estimated States over Time

Interactive Plotly figure with two stacked subplots, position and
velocity against time, each overlaying the plant state and the
observer estimate.

Usage
-----
>>> xs, xhats, ts = Simulator().run()
>>> fig = TrajectoryPlotter().plot_states(ts, xs, xhats)
>>> fig.show()
"""

from typing import Tuple

import numpy as np
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from shosim.types.core import StateTrajectory, TimePoints
from shosim.visualization.themes import ObserverStyle, to_numpy


class TrajectoryPlotter:
    """
    Time-series visualization of a plant/observer run.

    Consumes the arrays returned by ``Simulator.run()`` read-only.

    Examples
    --------
    >>> plotter = TrajectoryPlotter()
    >>> fig = plotter.plot_states(ts, xs, xhats)
    >>> fig.layout.yaxis.title.text
    'position [m]'
    """

    STATE_LABELS: Tuple[str, str] = ("position [m]", "velocity [m/s]")
    TIME_LABEL = "time [s]"

    def plot_states(
        self,
        ts: TimePoints,
        xs: StateTrajectory,
        xhats: StateTrajectory,
        title: str = "",
        width: int = 800,
        height: int = 600,
    ) -> go.Figure:
        """
        Plot position and velocity, true and estimated, against time.

        Parameters
        ----------
        ts : TimePoints
            Sample times (N,)
        xs : StateTrajectory
            True states, state-major (2, N)
        xhats : StateTrajectory
            Estimates, state-major (2, N)
        title : str
            Figure title
        width, height : int
            Figure size in pixels

        Returns
        -------
        go.Figure
            Two rows: position (row 1) and velocity (row 2)

        Raises
        ------
        ValueError
            If the arrays are not aligned (2, N), (2, N), (N,)
        """
        ts_np, xs_np, xhats_np = self._validate(ts, xs, xhats)

        fig = make_subplots(rows=2, cols=1, shared_xaxes=False, vertical_spacing=0.12)

        for row, label in enumerate(self.STATE_LABELS, start=1):
            component = row - 1
            fig.add_trace(
                go.Scatter(
                    x=ts_np,
                    y=xs_np[component],
                    name="true",
                    legendgroup="true",
                    showlegend=(row == 1),
                    **ObserverStyle.trace_style("true"),
                ),
                row=row,
                col=1,
            )
            fig.add_trace(
                go.Scatter(
                    x=ts_np,
                    y=xhats_np[component],
                    name="estimated",
                    legendgroup="estimated",
                    showlegend=(row == 1),
                    **ObserverStyle.trace_style("estimated"),
                ),
                row=row,
                col=1,
            )
            fig.update_xaxes(title_text=self.TIME_LABEL, showgrid=True, row=row, col=1)
            fig.update_yaxes(title_text=label, showgrid=True, row=row, col=1)

        fig.update_layout(
            title=title,
            template=ObserverStyle.TEMPLATE,
            width=width,
            height=height,
            showlegend=True,
        )

        return fig

    @staticmethod
    def _validate(ts, xs, xhats):
        ts_np = to_numpy(ts)
        xs_np = to_numpy(xs)
        xhats_np = to_numpy(xhats)

        if ts_np.ndim != 1:
            raise ValueError(f"ts must be 1-D (N,), got shape {ts_np.shape}")
        n = ts_np.shape[0]
        for name, arr in (("xs", xs_np), ("xhats", xhats_np)):
            if arr.shape != (2, n):
                raise ValueError(f"{name} must have shape (2, {n}), got {arr.shape}")

        return ts_np, np.asarray(xs_np), np.asarray(xhats_np)
