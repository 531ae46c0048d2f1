"""
Numerical integrators for the SEIRS model.

Implements fixed-step RK4 (Runge-Kutta 4th order). The simulation driver
uses dt=1 day; the step itself accepts any positive dt.
"""
from typing import Callable

import numpy as np

from .dynamics import CompartmentState, rhs
from .errors import NonPositiveValue
from .params import DT, RateConstants


def rk4_step(
    rhs_fn: Callable[[float, np.ndarray, float, RateConstants], np.ndarray],
    t: float,
    x: np.ndarray,
    p: float,
    rates: RateConstants,
    dt: float,
) -> np.ndarray:
    """
    Perform one RK4 (Runge-Kutta 4th order) integration step.

    Parameters
    ----------
    rhs_fn : Callable
        Right-hand side function with signature rhs(t, x, p, rates) -> dxdt.
    t : float
        Current time.
    x : np.ndarray
        Current state vector [s, e, i, r], shape (4,).
    p : float
        Vaccination rate (constant over the step).
    rates : RateConstants
        Model rate constants.
    dt : float
        Time step size.

    Returns
    -------
    x_next : np.ndarray
        Unclamped state at time t + dt, shape (4,).
    """
    k1 = rhs_fn(t, x, p, rates)
    k2 = rhs_fn(t + 0.5 * dt, x + 0.5 * dt * k1, p, rates)
    k3 = rhs_fn(t + 0.5 * dt, x + 0.5 * dt * k2, p, rates)
    k4 = rhs_fn(t + dt, x + dt * k3, p, rates)

    x_next = x + (dt / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4)
    return x_next


def step(
    state: CompartmentState,
    rates: RateConstants,
    p: float,
    h: float = DT,
) -> CompartmentState:
    """Advance a CompartmentState by one RK4 step of size h (no clamping)."""
    if not h > 0:
        raise NonPositiveValue("h", h)
    x_next = rk4_step(rhs, 0.0, state.to_array(), p, rates, h)
    return CompartmentState.from_array(x_next)


def simulate_days(
    x0: np.ndarray,
    rates: RateConstants,
    p: float,
    n_days: int,
    dt: float = DT,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Simulate the SEIRS model over a number of days.

    Each new state is clipped component-wise to [0, 1] before it is stored.

    Parameters
    ----------
    x0 : np.ndarray
        Initial state vector, shape (4,). Stored as given.
    rates : RateConstants
        Model rate constants.
    p : float
        Vaccination rate.
    n_days : int
        Number of RK4 steps.
    dt : float, optional
        Time step for RK4 integration (default 1.0 day).

    Returns
    -------
    ts : np.ndarray
        Time points, shape (N+1,). ts[k] = k * dt.
    xs : np.ndarray
        Clamped state trajectory, shape (N+1, 4).
    clamped : np.ndarray
        Boolean mask, shape (N+1, 4). clamped[k, j] is True when the raw
        RK4 output for compartment j on step k left [0, 1]. Row 0 is False.
    """
    N = int(n_days)
    xs = np.zeros((N + 1, 4), dtype=np.float64)
    clamped = np.zeros((N + 1, 4), dtype=bool)
    ts = np.arange(N + 1, dtype=np.float64) * dt

    xs[0] = x0

    for k in range(N):
        x_raw = rk4_step(rhs, ts[k], xs[k], p, rates, dt)
        clamped[k + 1] = (x_raw < 0.0) | (x_raw > 1.0)
        xs[k + 1] = np.clip(x_raw, 0.0, 1.0)

    return ts, xs, clamped
