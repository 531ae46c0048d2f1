"""Tests for seirs.simulation: run() driver and solve() output contract.

Reference values for the nominal scenario (S0=0.99, R0=3, latent 7 days,
infectious 14 days, 3000 days, death onset 100 days, immunity 1 year,
life expectancy 76 years, p=0.5) come from the same fixed-step scheme.
"""

import logging

import numpy as np
import pytest

import seirs.simulation as simulation
from seirs.dynamics import CompartmentState, derivatives
from seirs.errors import InvalidParameterError, NonPositiveValue, RangeViolation
from seirs.params import ModelInputs
from seirs.simulation import Trajectory, initial_state, run, solve, to_plot_series


@pytest.fixture(scope="module")
def nominal_run() -> Trajectory:
    return run(ModelInputs(0.99, 3.0, 7, 14, 3000, 100, 1, 76, 0.5))


# ═══════════════════════════════════════════════════════════════════════
# OUTPUT CONTRACT
# ═══════════════════════════════════════════════════════════════════════

class TestSolveOutput:

    def test_keys_and_lengths(self):
        out = solve(0.99, 3.0, 7, 14, 100)
        assert set(out) == {"s", "e", "i", "r", "ymax"}
        for name in "seir":
            assert len(out[name]) == 101
            assert [d for d, _ in out[name]] == list(range(101))
        assert out["ymax"] == 100

    def test_percentage_scale(self):
        out = solve(0.99, 3.0, 7, 14, 10)
        assert out["s"][0] == (0, pytest.approx(49.0))
        assert out["e"][0] == (0, pytest.approx(1.0))
        assert out["i"][0] == (0, 0.0)
        assert out["r"][0] == (0, pytest.approx(50.0))

    def test_default_arguments(self, nominal_run):
        out = solve(0.99, 3.0, 7, 14, 3000)
        np.testing.assert_array_equal(
            [v for _, v in out["i"]], 100 * nominal_run.i
        )

    def test_first_step(self):
        out = solve(0.99, 3.0, 7, 14, 2)
        assert out["s"][1][1] == pytest.approx(49.128866924278604, rel=1e-12)
        assert out["e"][1][1] == pytest.approx(0.87444649302034, rel=1e-12)
        assert out["i"][1][1] == pytest.approx(0.1280789907458042, rel=1e-12)
        assert out["r"][1][1] == pytest.approx(49.867943409565676, rel=1e-12)
        assert out["i"][2][1] == pytest.approx(0.23105268892027211, rel=1e-12)

    def test_deterministic(self):
        args = (0.95, 2.5, 5, 10, 1000, 50, 2, 70, 0.2)
        assert solve(*args) == solve(*args)

    def test_to_plot_series(self):
        assert to_plot_series(np.array([0.0, 0.25, 1.0])) == [(0, 0.0), (1, 25.0), (2, 100.0)]

    def test_invalid_input_raises(self):
        with pytest.raises(RangeViolation):
            solve(1.2, 3.0, 7, 14, 100)
        with pytest.raises(NonPositiveValue):
            solve(0.99, 3.0, 7, 14, 0)


# ═══════════════════════════════════════════════════════════════════════
# RUN
# ═══════════════════════════════════════════════════════════════════════

class TestRun:

    def test_trajectory_shape(self, nominal_run):
        assert len(nominal_run) == 3001
        assert nominal_run.xs.shape == (3001, 4)
        np.testing.assert_array_equal(nominal_run.ts, np.arange(3001.0))

    def test_initial_state(self, nominal_run):
        assert nominal_run.state(0) == CompartmentState(
            pytest.approx(0.49), pytest.approx(0.01), 0.0, 0.5
        )

    def test_rates_attached(self, nominal_run):
        assert nominal_run.rates.beta == pytest.approx(0.24445553249153837, rel=1e-12)

    def test_named_series(self, nominal_run):
        np.testing.assert_array_equal(nominal_run.series("i"), nominal_run.i)
        np.testing.assert_array_equal(nominal_run.series("r"), nominal_run.xs[:, 3])

    def test_arrays_read_only(self, nominal_run):
        with pytest.raises(ValueError):
            nominal_run.xs[0, 0] = 1.0
        with pytest.raises(ValueError):
            nominal_run.clamped[0, 0] = True

    def test_validation_before_integration(self, monkeypatch):
        def fail(*args, **kwargs):
            raise AssertionError("integration must not start")

        monkeypatch.setattr(simulation, "simulate_days", fail)
        with pytest.raises(InvalidParameterError):
            run(ModelInputs(0.99, 3.0, 7, -14, 100))

    def test_single_day(self):
        traj = run(ModelInputs(0.99, 3.0, 7, 14, 1))
        assert len(traj) == 2


# ═══════════════════════════════════════════════════════════════════════
# MODEL PROPERTIES
# ═══════════════════════════════════════════════════════════════════════

class TestProperties:

    @pytest.mark.parametrize(
        "args",
        [
            (0.99, 3.0, 7, 14, 3000, 100, 1, 76, 0.5),
            (0.5, 5.0, 1, 1, 1000, 1, 0.1, 1, 0.0),
            (1.0, 1.0, 30, 30, 500, 0, 10, 100, 1.0),
            (0.01, 4.5, 2, 3, 800, 5, 0.5, 20, 0.9),
        ],
    )
    def test_series_within_percentage_range(self, args):
        out = solve(*args)
        for name in "seir":
            values = np.array([v for _, v in out[name]])
            assert values.min() >= 0.0
            assert values.max() <= 100.0

    def test_population_conserved_without_deaths_or_vaccination(self):
        traj = run(ModelInputs(0.99, 3.0, 7, 14, 3000, death_onset=0, vaccination_rate=0.0))
        assert np.abs(traj.xs.sum(axis=1) - 1.0).max() < 1e-10
        assert traj.n_clamped == 0

    def test_peak_increases_with_R0(self):
        peaks = [
            run(ModelInputs(0.99, R0, 7, 14, 400, vaccination_rate=0.0)).i.max()
            for R0 in (1.5, 2.0, 3.0, 4.0)
        ]
        assert np.all(np.diff(peaks) > 0)
        assert peaks[0] == pytest.approx(0.04709060894067319, rel=1e-9)
        assert peaks[-1] == pytest.approx(0.2525683134512007, rel=1e-9)

    def test_no_seed_no_epidemic(self):
        traj = run(ModelInputs(1.0, 3.0, 7, 14, 500, vaccination_rate=0.0))
        assert traj.e[0] == 0.0
        assert traj.i[0] == 0.0
        assert np.all(traj.i == 0.0)
        assert np.all(traj.e == 0.0)
        assert np.all(traj.s == 1.0)


# ═══════════════════════════════════════════════════════════════════════
# CLAMPING DIAGNOSTICS
# ═══════════════════════════════════════════════════════════════════════

class TestClamping:

    def test_initial_state_unclamped_value(self):
        raw = initial_state(ModelInputs(0.3, 3.0, 7, 14, 10, vaccination_rate=0.5))
        assert raw.s == pytest.approx(-0.2)

    def test_vaccination_above_S0_clamps_initial_state(self, caplog):
        traj_inputs = ModelInputs(0.3, 3.0, 7, 14, 10, vaccination_rate=0.5)
        with caplog.at_level(logging.WARNING, logger="seirs.simulation"):
            traj = run(traj_inputs)
        assert traj.s[0] == 0.0
        assert traj.e[0] == pytest.approx(0.7)
        assert traj.r[0] == 0.5
        assert traj.clamped[0].tolist() == [True, False, False, False]
        assert traj.state(0) == initial_state(traj_inputs).clamped()
        assert traj.n_clamped >= 1
        assert "vaccination_rate > S0" in caplog.text

    def test_nominal_run_never_clamps(self, nominal_run):
        assert nominal_run.n_clamped == 0
        assert nominal_run.summary()["n_clamped"] == 0


# ═══════════════════════════════════════════════════════════════════════
# NOMINAL SCENARIO
# ═══════════════════════════════════════════════════════════════════════

class TestNominalScenario:

    def test_early_peak(self, nominal_run):
        summary = nominal_run.summary()
        assert summary["peak_day"] == 128.0
        assert summary["peak_infectious"] == pytest.approx(0.051131173172035504, rel=1e-9)

    def test_reference_points(self, nominal_run):
        assert nominal_run.i[100] == pytest.approx(0.04371168286060055, rel=1e-9)
        assert nominal_run.s[1000] == pytest.approx(0.32679051376836554, rel=1e-9)
        assert nominal_run.r[3000] == pytest.approx(0.25386499857666767, rel=1e-8)

    def test_settles_toward_endemic_equilibrium(self, nominal_run):
        final = nominal_run.state(3000)
        d = derivatives(nominal_run.rates, 0.5, *final)
        assert max(abs(v) for v in d) < 1e-4
        # disease persists
        assert final.i > 0.005
        # susceptibles near 1/R0
        assert final.s == pytest.approx(1 / 3, abs=0.01)

    def test_no_late_oscillation(self, nominal_run):
        assert np.all(np.diff(nominal_run.i[2000:]) < 0)
