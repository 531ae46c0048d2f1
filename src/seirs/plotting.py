"""
Matplotlib rendering of solve() output.

All presentation settings live in a PlotConfig passed to plot_solution();
nothing is kept at module level.
"""
from dataclasses import dataclass, field

import matplotlib.pyplot as plt
from matplotlib.ticker import PercentFormatter

from .params import PERCENTAGE_SCALE


@dataclass
class PlotConfig:
    """
    Figure settings.

    y_max : upper bound of the y axis [%]
    n_days : upper bound of the x axis; None uses the series length
    colors, labels : per compartment, keyed by 's', 'e', 'i', 'r'
    """

    y_max: float = PERCENTAGE_SCALE
    n_days: int | None = None
    figsize: tuple[float, float] = (10.0, 6.0)
    x_ticks: int = 10
    y_ticks: int = 4
    linewidth: float = 2.0
    title: str = "SEIRS model"
    colors: dict[str, str] = field(
        default_factory=lambda: {
            "s": "tab:blue",
            "e": "tab:orange",
            "i": "tab:red",
            "r": "tab:green",
        }
    )
    labels: dict[str, str] = field(
        default_factory=lambda: {
            "s": "Susceptible",
            "e": "Exposed",
            "i": "Infectious",
            "r": "Recovered",
        }
    )


def plot_solution(output: dict, config: PlotConfig | None = None, ax=None):
    """
    Draw the four percentage series of a solve() result.

    Returns the matplotlib Figure that holds the axes.
    """
    if config is None:
        config = PlotConfig()
    if ax is None:
        fig, ax = plt.subplots(figsize=config.figsize)
    else:
        fig = ax.figure

    for name in ("s", "e", "i", "r"):
        days = [d for d, _ in output[name]]
        values = [v for _, v in output[name]]
        ax.plot(
            days,
            values,
            color=config.colors[name],
            linewidth=config.linewidth,
            label=config.labels[name],
        )

    n_days = config.n_days if config.n_days is not None else len(output["s"]) - 1
    ax.set_xlim(0, n_days)
    ax.set_ylim(0, config.y_max)
    ax.locator_params(axis="x", nbins=config.x_ticks)
    ax.locator_params(axis="y", nbins=config.y_ticks)
    ax.yaxis.set_major_formatter(PercentFormatter(xmax=output.get("ymax", PERCENTAGE_SCALE)))

    ax.set_xlabel("Time [days]", fontsize=12)
    ax.set_ylabel("Population", fontsize=12)
    ax.set_title(config.title, fontsize=14)
    ax.legend(loc="upper right", fontsize=10)
    ax.grid(True, alpha=0.3)

    return fig
