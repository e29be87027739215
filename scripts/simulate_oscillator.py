#!/usr/bin/env python3
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
Oscillator/Observer Demonstration

Runs the reference scenario (k = m = 1, b = 0, K = [0.5, -0.1],
x0 = [1, 0], x̂0 = [0, 0], 251 samples at dt = 0.1) and opens the
time-series and phase-space figures in the browser.

Usage:
    python scripts/simulate_oscillator.py
"""

import numpy as np

from shosim import SimulationConfig, Simulator
from shosim.visualization import PhasePortraitPlotter, TrajectoryPlotter


def main():
    config = SimulationConfig()
    simulator = Simulator(config)
    result = simulator.simulate()

    error = result["estimation_error"]
    print("=" * 60)
    print(f"{simulator!r}")
    print(f"Observer eigenvalues: {np.round(result['metadata']['observer_eigenvalues'], 4)}")
    print(f"Estimation error: {error[0]:.4f} at t = {result['time'][0]:.1f} s, "
          f"{error[-1]:.2e} at t = {result['time'][-1]:.1f} s")
    print("=" * 60)

    xs, xhats, ts = result["states"], result["estimates"], result["time"]
    TrajectoryPlotter().plot_states(ts, xs, xhats).show()
    PhasePortraitPlotter().plot_phase_space(xs, xhats).show()


if __name__ == "__main__":
    main()
