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
Unit Tests for Phase Portrait Plotter

Tests the position/velocity overlay of estimate and true state.
"""

import numpy as np
import plotly.graph_objects as go
import pytest

from shosim.visualization.phase_portrait import PhasePortraitPlotter
from shosim.visualization.themes import ObserverStyle

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def plotter():
    return PhasePortraitPlotter()


@pytest.fixture
def circular_orbit():
    """Unit circle (true) and a spiral converging onto it (estimate)."""
    t = np.linspace(0, 4 * np.pi, 200)
    xs = np.vstack([np.cos(t), -np.sin(t)])
    xhats = xs * (1 - np.exp(-0.3 * t))
    return xs, xhats


# ============================================================================
# Initialization Tests
# ============================================================================


class TestInitialization:
    def test_default_limits(self):
        assert PhasePortraitPlotter().limits == (-1.5, 1.5)

    def test_custom_limits(self):
        assert PhasePortraitPlotter(limits=(-3, 3)).limits == (-3, 3)


# ============================================================================
# Phase Space Tests
# ============================================================================


class TestPlotPhaseSpace:
    """Test plot_phase_space()."""

    def test_returns_figure(self, plotter, circular_orbit):
        assert isinstance(plotter.plot_phase_space(*circular_orbit), go.Figure)

    def test_trace_order(self, plotter, circular_orbit):
        """Estimate drawn first, true state on top."""
        fig = plotter.plot_phase_space(*circular_orbit)
        assert [trace.name for trace in fig.data] == ["estimated state", "true state"]

    def test_trace_data(self, plotter, circular_orbit):
        xs, xhats = circular_orbit
        fig = plotter.plot_phase_space(xs, xhats)
        np.testing.assert_array_equal(fig.data[0].x, xhats[0])
        np.testing.assert_array_equal(fig.data[0].y, xhats[1])
        np.testing.assert_array_equal(fig.data[1].x, xs[0])
        np.testing.assert_array_equal(fig.data[1].y, xs[1])

    def test_true_trace_dashdot(self, plotter, circular_orbit):
        fig = plotter.plot_phase_space(*circular_orbit)
        assert fig.data[1].line.dash == "dashdot"

    def test_trace_colors(self, plotter, circular_orbit):
        fig = plotter.plot_phase_space(*circular_orbit)
        assert fig.data[0].line.color == ObserverStyle.PHASE_ESTIMATE_COLOR
        assert fig.data[1].line.color == ObserverStyle.PHASE_TRUE_COLOR

    def test_default_title(self, plotter, circular_orbit):
        fig = plotter.plot_phase_space(*circular_orbit)
        assert fig.layout.title.text == "phase space trajectory"

    def test_custom_state_names(self, plotter, circular_orbit):
        fig = plotter.plot_phase_space(*circular_orbit, state_names=("q", "q_dot"))
        assert fig.layout.xaxis.title.text == "q"
        assert fig.layout.yaxis.title.text == "q_dot"

    def test_fixed_limits(self, circular_orbit):
        fig = PhasePortraitPlotter(limits=(-2.0, 2.0)).plot_phase_space(*circular_orbit)
        assert tuple(fig.layout.xaxis.range) == (-2.0, 2.0)
        assert tuple(fig.layout.yaxis.range) == (-2.0, 2.0)

    def test_equal_aspect_ratio(self, plotter, circular_orbit):
        fig = plotter.plot_phase_space(*circular_orbit)
        assert fig.layout.yaxis.scaleanchor == "x"
        assert fig.layout.yaxis.scaleratio == 1

    def test_square_figure(self, plotter, circular_orbit):
        fig = plotter.plot_phase_space(*circular_orbit, size=450)
        assert fig.layout.width == fig.layout.height == 450

    def test_invalid_dimension_1d(self, plotter):
        with pytest.raises(ValueError, match="requires 2D state"):
            plotter.plot_phase_space(np.zeros(10), np.zeros(10))

    def test_invalid_dimension_3_states(self, plotter):
        with pytest.raises(ValueError, match="requires 2D state"):
            plotter.plot_phase_space(np.zeros((3, 10)), np.zeros((3, 10)))

    def test_shape_mismatch(self, plotter, circular_orbit):
        xs, xhats = circular_orbit
        with pytest.raises(ValueError, match="does not match"):
            plotter.plot_phase_space(xs, xhats[:, :50])
