"""
Simulation driver for the SEIRS model.

run() validates the inputs, derives the rate constants once, builds the
initial state and integrates day by day with RK4, clamping every state to
[0, 1]. solve() wraps run() and returns the percentage series consumed by
the plotting layer.
"""
import logging
from dataclasses import dataclass

import numpy as np

from .dynamics import CompartmentState
from .integrators import simulate_days
from .params import DT, PERCENTAGE_SCALE, ModelInputs, RateConstants, derive_rates

logger = logging.getLogger(__name__)

COMPARTMENTS = ("s", "e", "i", "r")


@dataclass(frozen=True, eq=False)
class Trajectory:
    """
    Result of one simulation run.

    ts : time points [days], shape (n+1,)
    xs : compartment proportions [s, e, i, r], shape (n+1, 4)
    rates : rate constants used for the run
    clamped : True where the raw value left [0, 1] and was clipped,
        shape (n+1, 4); row 0 refers to the initial state
    """

    ts: np.ndarray
    xs: np.ndarray
    rates: RateConstants
    clamped: np.ndarray

    def __post_init__(self):
        for arr in (self.ts, self.xs, self.clamped):
            arr.flags.writeable = False

    def __len__(self) -> int:
        return self.xs.shape[0]

    def state(self, k: int) -> CompartmentState:
        return CompartmentState.from_array(self.xs[k])

    def series(self, name: str) -> np.ndarray:
        return self.xs[:, COMPARTMENTS.index(name)]

    @property
    def s(self) -> np.ndarray:
        return self.xs[:, 0]

    @property
    def e(self) -> np.ndarray:
        return self.xs[:, 1]

    @property
    def i(self) -> np.ndarray:
        return self.xs[:, 2]

    @property
    def r(self) -> np.ndarray:
        return self.xs[:, 3]

    @property
    def n_clamped(self) -> int:
        """Number of (day, compartment) values that needed clamping."""
        return int(self.clamped.sum())

    def summary(self) -> dict[str, float]:
        peak_idx = int(np.argmax(self.i))
        final = self.state(len(self) - 1)
        return {
            "peak_day": float(self.ts[peak_idx]),
            "peak_infectious": float(self.i[peak_idx]),
            "final_s": final.s,
            "final_e": final.e,
            "final_i": final.i,
            "final_r": final.r,
            "n_clamped": self.n_clamped,
        }


def initial_state(inputs: ModelInputs) -> CompartmentState:
    """
    Initial condition before clamping.

    Vaccinated individuals leave S and start in R, so s0 = S0 - p is
    negative whenever p > S0.
    """
    p = inputs.vaccination_rate
    return CompartmentState(s=inputs.S0 - p, e=1.0 - inputs.S0, i=0.0, r=p)


def run(inputs: ModelInputs) -> Trajectory:
    """
    Run one SEIRS simulation over inputs.n_days days.

    Raises InvalidParameterError (or a subclass) before any integration
    work if an input is out of bounds.
    """
    rates = derive_rates(inputs)
    logger.debug("Derived rates: %s", rates)

    raw0 = initial_state(inputs)
    start = raw0.clamped()
    clamped0 = raw0.to_array() != start.to_array()
    if clamped0.any():
        logger.warning(
            "Initial state %s outside [0, 1] (vaccination_rate > S0), clamping",
            raw0,
        )

    ts, xs, clamped = simulate_days(
        start.to_array(),
        rates,
        inputs.vaccination_rate,
        inputs.n_days,
        dt=DT,
    )
    clamped[0] = clamped0

    trajectory = Trajectory(ts=ts, xs=xs, rates=rates, clamped=clamped)
    n_steps_clamped = int(clamped[1:].any(axis=1).sum())
    if n_steps_clamped:
        logger.warning(
            "RK4 output left [0, 1] on %d of %d steps and was clamped",
            n_steps_clamped,
            int(inputs.n_days),
        )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Simulation finished: %s", trajectory.summary())
    return trajectory


def to_plot_series(
    values: np.ndarray, scale: float = PERCENTAGE_SCALE
) -> list[tuple[int, float]]:
    """Convert proportions to (day_index, percentage) pairs."""
    return [(k, scale * float(v)) for k, v in enumerate(values)]


def to_output(trajectory: Trajectory) -> dict:
    """Percentage series of a trajectory, in the shape returned by solve()."""
    output = {name: to_plot_series(trajectory.series(name)) for name in COMPARTMENTS}
    output["ymax"] = PERCENTAGE_SCALE
    return output


def solve(
    S0,
    R0,
    latent_period,
    infectious_period,
    n,
    death_onset=100,
    immunity_duration=1,
    life_expectancy=76,
    vaccination_rate=0.5,
):
    """
    Simulate the SEIRS model and return percentage series for plotting.

    Returns
    -------
    output : dict
        Keys 's', 'e', 'i', 'r' map to lists of n+1 (day_index, percent)
        pairs; 'ymax' is the percentage scale (100).
    """
    inputs = ModelInputs(
        S0=S0,
        R0=R0,
        latent_period=latent_period,
        infectious_period=infectious_period,
        n_days=n,
        death_onset=death_onset,
        immunity_duration=immunity_duration,
        life_expectancy=life_expectancy,
        vaccination_rate=vaccination_rate,
    )
    return to_output(run(inputs))
