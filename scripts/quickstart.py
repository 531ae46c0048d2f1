#!/usr/bin/env python3
"""
Quickstart script for the SEIRS model.

Runs one scenario (defaults taken from the parameter grids), prints
diagnostics and saves the figure of the four compartments.

Usage (from repository root):
    python3 scripts/quickstart.py [--R0 2.5] [--vaccination-rate 0.3] ...
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src/ to path for imports when running from repo root
REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from seirs.errors import InvalidParameterError
from seirs.params import ModelInputs, default_value
from seirs.plotting import PlotConfig, plot_solution
from seirs.simulation import run, to_output


def configure_logging(verbose: bool = False) -> None:
    """Attach a console handler to the 'seirs' logger (replaces earlier ones)."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger("seirs")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run one SEIRS simulation")
    parser.add_argument("--S0", type=float, default=default_value("S0"),
                        help="Initial susceptible proportion [0-1]")
    parser.add_argument("--R0", type=float, default=default_value("R0"),
                        help="Basic reproduction number")
    parser.add_argument("--latent-period", type=float,
                        default=default_value("latent_period"), help="Days")
    parser.add_argument("--infectious-period", type=float,
                        default=default_value("infectious_period"), help="Days")
    parser.add_argument("--n-days", type=int, default=default_value("n_days"),
                        help="Number of simulated days")
    parser.add_argument("--death-onset", type=float,
                        default=default_value("death_onset"),
                        help="Days until disease death (0 = no disease mortality)")
    parser.add_argument("--immunity-duration", type=float,
                        default=default_value("immunity_duration"), help="Years")
    parser.add_argument("--life-expectancy", type=float,
                        default=default_value("life_expectancy"), help="Years")
    parser.add_argument("--vaccination-rate", type=float,
                        default=default_value("vaccination_rate"),
                        help="Proportion vaccinated at birth [0-1]")
    parser.add_argument("--y-max", type=float, default=default_value("y_max"),
                        help="Upper bound of the y axis [%%]")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Simulate SEIRS and write the output figure."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    inputs = ModelInputs(
        S0=args.S0,
        R0=args.R0,
        latent_period=args.latent_period,
        infectious_period=args.infectious_period,
        n_days=args.n_days,
        death_onset=args.death_onset,
        immunity_duration=args.immunity_duration,
        life_expectancy=args.life_expectancy,
        vaccination_rate=args.vaccination_rate,
    )
    try:
        trajectory = run(inputs)
    except InvalidParameterError as e:
        print(f"Invalid input: {e}")
        return 2

    summary = trajectory.summary()
    mass = trajectory.xs.sum(axis=1)

    print("=" * 60)
    print("SEIRS Model Quickstart - Simulation Results")
    print("=" * 60)
    print(f"Simulation: {inputs.n_days} days, R0 = {inputs.R0}, "
          f"p = {inputs.vaccination_rate}")
    print(f"Rates: {trajectory.rates}")
    print("-" * 60)
    print(f"Peak infectious: {100 * summary['peak_infectious']:.3f}% "
          f"on day {summary['peak_day']:.0f}")
    print(f"Final state: S={summary['final_s']:.4f} E={summary['final_e']:.4f} "
          f"I={summary['final_i']:.4f} R={summary['final_r']:.4f}")
    print(f"Total population range: [{mass.min():.4f}, {mass.max():.4f}]")
    print(f"Clamped values: {summary['n_clamped']}")
    print("-" * 60)

    output = to_output(trajectory)

    output_dir = REPO_ROOT / "outputs" / "figures"
    output_dir.mkdir(parents=True, exist_ok=True)
    fig_path = output_dir / "quickstart_seirs.png"

    config = PlotConfig(y_max=args.y_max, n_days=inputs.n_days)
    fig = plot_solution(output, config)
    fig.tight_layout()
    fig.savefig(fig_path, dpi=200, bbox_inches="tight")
    fig.savefig(fig_path.with_suffix(".pdf"), bbox_inches="tight")
    plt.close(fig)

    print(f"Figure saved: {fig_path}")
    print(f"Figure saved: {fig_path.with_suffix('.pdf')}")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
