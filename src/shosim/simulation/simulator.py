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
Simulator - Plant and Observer in Lock-Step

Advances a mass-spring-damper and a Luenberger observer of it over a
fixed horizon and records both trajectories on a shared time grid.

Per step i = 0..N-1:

    1. record x, x̂, t at index i
    2. y = C x + D u,  ŷ = C x̂ + D u,  r = y - ŷ
    3. x  ← Φ (x + B u dt)
    4. x̂ ← Φ (x̂ + B u dt + K r dt)
    5. t  ← t0 + (i+1) dt

Recording happens before advancing, so N advances are performed and the
state produced by the last one is never stored.

Usage
-----
>>> simulator = Simulator()                 # reference scenario
>>> xs, xhats, ts = simulator.run()
>>> xs.shape, xhats.shape, ts.shape
((2, 251), (2, 251), (251,))
>>>
>>> # Full result with outputs, residuals and diagnostics
>>> result = Simulator(SimulationConfig(b=0.1)).simulate()
>>> result['metadata']['observer_stable']
True
"""

import warnings
from typing import Optional, Tuple

import numpy as np

from shosim.control.analysis import (
    analyze_observability,
    analyze_stability,
    observer_error_dynamics,
)
from shosim.discretization.discretizer import Discretizer
from shosim.observers.luenberger_observer import LuenbergerObserver
from shosim.simulation.config import SimulationConfig
from shosim.systems.mass_spring_damper import MassSpringDamper
from shosim.types.backends import VALID_BACKENDS, Backend
from shosim.types.core import ArrayLike, NumpyArray, StateVector
from shosim.types.trajectories import ObserverSimulationResult
from shosim.validation import ConfigurationValidator


class NumericDivergence(RuntimeError):
    """
    Raised when a state or estimate about to be recorded is non-finite.

    Attributes
    ----------
    step : int
        Sample index that could not be recorded
    xs, xhats : np.ndarray
        Recorded states/estimates for indices < step, shape (2, step)
    ts : np.ndarray
        Recorded times for indices < step, shape (step,)
    """

    def __init__(self, step: int, xs: NumpyArray, xhats: NumpyArray, ts: NumpyArray):
        self.step = step
        self.xs = xs
        self.xhats = xhats
        self.ts = ts
        super().__init__(
            f"Non-finite state encountered at step {step}; "
            f"{step} sample(s) were recorded before divergence"
        )


def _from_numpy(arr: np.ndarray, backend: Backend) -> ArrayLike:
    """Convert a NumPy result array to the requested backend."""
    if backend == "numpy":
        return arr
    if backend == "torch":
        import torch

        return torch.from_numpy(arr)
    if backend == "jax":
        import jax.numpy as jnp

        return jnp.asarray(arr)


class Simulator:
    """
    Joint simulation of a mass-spring-damper and its Luenberger observer.

    All parameters are fixed at construction. The plant state, the
    estimate and the clock are private to the instance and are reset at
    the start of every run, so repeated runs give identical results and
    independent instances can be used side by side (e.g. in a sweep).

    Attributes
    ----------
    config : SimulationConfig
        Validated configuration
    system : MassSpringDamper
        Plant model (A, B, C, D)
    discretizer : Discretizer
        One-step transition operator Φ, computed once
    observer : LuenbergerObserver
        Estimator holding x̂
    backend : Backend
        Array type of returned results

    Examples
    --------
    >>> simulator = Simulator(SimulationConfig(k=4.0, b=0.5), backend='numpy')
    >>> xs, xhats, ts = simulator.run()
    >>>
    >>> # Keyword overrides on top of the defaults
    >>> xs, xhats, ts = Simulator(n_steps=101, dt=0.05).run()
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        backend: Backend = "numpy",
        **overrides,
    ):
        """
        Build the plant, discretizer and observer.

        Parameters
        ----------
        config : Optional[SimulationConfig]
            Run configuration. Defaults to the reference scenario.
        backend : Backend
            Type of returned arrays ('numpy', 'torch', 'jax'). 'jax' keeps
            float64 only when jax_enable_x64 is set; otherwise a UserWarning
            is issued on each run and results are float32.
        **overrides
            Field overrides applied on top of ``config``

        Raises
        ------
        InvalidConfiguration
            If the configuration is degenerate (m = 0, bad dimensions,
            dt <= 0, ...). Raised before any buffer is allocated.
        ValueError
            If backend is unknown
        """
        if backend not in VALID_BACKENDS:
            raise ValueError(f"Unknown backend '{backend}'. Choose from {VALID_BACKENDS}")

        config = config if config is not None else SimulationConfig()
        if overrides:
            config = config.replace(**overrides)

        ConfigurationValidator(config).validate(raise_on_error=True)

        self.config = config
        self.backend = backend

        self.system = MassSpringDamper(k=config.k, m=config.m, b=config.b)
        self.discretizer = Discretizer(self.system.A, dt=config.dt, method=config.method)
        self.observer = LuenbergerObserver(
            self.system, config.K, self.discretizer, xhat0=config.xhat0
        )

        self._observer_stability = self._check_observer_design()

        self._x: StateVector = np.asarray(config.x0, dtype=np.float64).copy()
        self._t: float = float(config.t0)

    # ========================================================================
    # Design Checks
    # ========================================================================

    def _check_observer_design(self):
        A, C = self.system.A, self.system.C

        if not analyze_observability(A, C)["is_observable"]:
            warnings.warn(
                "(A, C) is not observable: the estimate cannot converge "
                "for every initial error.",
                UserWarning,
            )

        stability = analyze_stability(observer_error_dynamics(A, self.observer.K, C))
        if not stability["is_stable"]:
            warnings.warn(
                f"Observer error dynamics A - K·C are not asymptotically stable "
                f"(eigenvalues {stability['eigenvalues']}); the estimate will not converge.",
                UserWarning,
            )
        return stability

    def _check_backend_precision(self):
        if self.backend != "jax":
            return
        import jax

        if not jax.config.jax_enable_x64:
            warnings.warn(
                "JAX 64-bit mode is disabled: results will be converted to float32 "
                "and ts will no longer equal t0 + i*dt exactly. Enable it with "
                "jax.config.update('jax_enable_x64', True).",
                UserWarning,
            )

    # ========================================================================
    # Primary Interface
    # ========================================================================

    def run(self) -> Tuple[ArrayLike, ArrayLike, ArrayLike]:
        """
        Run the simulation.

        Returns
        -------
        xs : StateTrajectory
            True states (2, N); ``xs[:, i]`` is the state at ``ts[i]``
        xhats : StateTrajectory
            Estimates (2, N)
        ts : TimePoints
            Times (N,), ``ts[i] = t0 + i*dt``

        Raises
        ------
        NumericDivergence
            If a state or estimate becomes non-finite
        """
        buffers = self._integrate()
        self._check_backend_precision()
        return (
            _from_numpy(buffers["states"], self.backend),
            _from_numpy(buffers["estimates"], self.backend),
            _from_numpy(buffers["time"], self.backend),
        )

    def simulate(self) -> ObserverSimulationResult:
        """
        Run the simulation and return every recorded series.

        Returns
        -------
        ObserverSimulationResult
            time, states, estimates, outputs, residuals, estimation_error,
            success and metadata

        Raises
        ------
        NumericDivergence
            If a state or estimate becomes non-finite
        """
        buffers = self._integrate()
        self._check_backend_precision()
        error = np.linalg.norm(buffers["states"] - buffers["estimates"], axis=0)

        result: ObserverSimulationResult = {
            "time": _from_numpy(buffers["time"], self.backend),
            "states": _from_numpy(buffers["states"], self.backend),
            "estimates": _from_numpy(buffers["estimates"], self.backend),
            "outputs": _from_numpy(buffers["outputs"], self.backend),
            "residuals": _from_numpy(buffers["residuals"], self.backend),
            "estimation_error": _from_numpy(error, self.backend),
            "success": True,
            "metadata": {
                "method": self.discretizer.method,
                "dt": self.discretizer.dt,
                "n_steps": self.config.n_steps,
                "observer_eigenvalues": self._observer_stability["eigenvalues"],
                "observer_stable": self._observer_stability["is_stable"],
            },
        }
        return result

    # ========================================================================
    # Time-Stepping Loop
    # ========================================================================

    def _integrate(self):
        cfg = self.config
        n = cfg.n_steps
        dt = self.discretizer.dt
        u = cfg.u

        self._x = np.asarray(cfg.x0, dtype=np.float64).copy()
        self._t = float(cfg.t0)
        self.observer.reset(cfg.xhat0)

        # NaN marks unset slots
        xs = np.full((self.system.nx, n), np.nan)
        xhats = np.full((self.system.nx, n), np.nan)
        ts = np.full(n, np.nan)
        ys = np.full((self.system.ny, n), np.nan)
        rs = np.full((self.system.ny, n), np.nan)

        for i in range(n):
            if not (np.all(np.isfinite(self._x)) and np.all(np.isfinite(self.observer.x_hat))):
                raise NumericDivergence(
                    i, xs[:, :i].copy(), xhats[:, :i].copy(), ts[:i].copy()
                )

            xs[:, i] = self._x
            xhats[:, i] = self.observer.x_hat
            ts[i] = self._t

            y = self.system.output(self._x, u)
            r = self.observer.update(y, u)
            ys[:, i] = y
            rs[:, i] = r

            self._x = self.discretizer.step(self._x, u, self.system.B)
            self._t = cfg.t0 + (i + 1) * dt

        return {
            "time": ts,
            "states": xs,
            "estimates": xhats,
            "outputs": ys,
            "residuals": rs,
        }

    def __repr__(self) -> str:
        return (
            f"Simulator({self.system!r}, n_steps={self.config.n_steps}, "
            f"dt={self.config.dt}, method='{self.config.method}')"
        )
