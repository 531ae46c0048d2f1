"""
Paramètres et constantes du modèle SEIRS.

Les entrées épidémiologiques (R0, périodes, durées) sont converties en
constantes de taux θ = [α, γ, ω, μ, σ, β]^T, exprimées en jours^-1.
Les grilles de valeurs (PARAM_VALUES) alimentent les curseurs d'une
interface graphique.
"""
from dataclasses import dataclass
from typing import Callable

import numpy as np

from .errors import (
    InvalidParameterError,
    NegativeValue,
    NonPositiveValue,
    RangeViolation,
)


# ---------------------------------------------------------------------------
# Constantes de simulation
# ---------------------------------------------------------------------------

DT: float = 1.0  # Pas de temps [jours] pour RK4
DAYS_PER_YEAR: float = 365.0
PERCENTAGE_SCALE: float = 100.0  # Échelle des séries de sortie (%)


@dataclass(frozen=True)
class ModelInputs:
    """
    Entrées épidémiologiques d'une simulation SEIRS.

    S0 : proportion initiale de susceptibles, dans [0, 1]
    R0 : nombre de reproduction de base (> 0)
    latent_period, infectious_period : durées [jours] (> 0)
    n_days : nombre de jours simulés (entier > 0)
    death_onset : délai avant décès dû à la maladie [jours] (0 = pas de mortalité)
    immunity_duration, life_expectancy : durées [années] (> 0)
    vaccination_rate : part des naissances vaccinées, dans [0, 1]
    """

    S0: float
    R0: float
    latent_period: float
    infectious_period: float
    n_days: int
    death_onset: float = 100.0
    immunity_duration: float = 1.0
    life_expectancy: float = 76.0
    vaccination_rate: float = 0.5


@dataclass(frozen=True)
class RateConstants:
    """
    Constantes de taux du système d'EDO.

    α : taux de décès dû à la maladie
    γ : taux de guérison
    ω : taux de perte d'immunité
    μ : taux de naissance / mortalité naturelle
    σ : taux de passage E -> I
    β : taux de transmission
    """

    alpha: float
    gamma: float
    omega: float
    mu: float
    sigma: float
    beta: float

    def to_array(self) -> np.ndarray:
        """Convertit les taux en array numpy (6,)."""
        return np.array(
            [self.alpha, self.gamma, self.omega, self.mu, self.sigma, self.beta],
            dtype=np.float64,
        )

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "RateConstants":
        """Crée un RateConstants depuis un array [α, γ, ω, μ, σ, β]."""
        assert arr.shape == (6,), f"Attendu (6,), reçu {arr.shape}"
        return cls(
            alpha=float(arr[0]),
            gamma=float(arr[1]),
            omega=float(arr[2]),
            mu=float(arr[3]),
            sigma=float(arr[4]),
            beta=float(arr[5]),
        )

    def basic_reproduction_number(self) -> float:
        """R0 = βσ / [(σ+μ)(γ+μ+α)] (matrice de nouvelle génération)."""
        return self.beta * self.sigma / (
            (self.sigma + self.mu) * (self.gamma + self.mu + self.alpha)
        )


# ---------------------------------------------------------------------------
# Validation des entrées
# ---------------------------------------------------------------------------

def _check_finite(name: str, value: float) -> None:
    if not np.isfinite(value):
        raise InvalidParameterError(name, value, "a finite number")


def _check_range(name: str, value: float, lower: float, upper: float) -> None:
    _check_finite(name, value)
    if value < lower or value > upper:
        raise RangeViolation(name, value, lower, upper)


def _check_positive(name: str, value: float) -> None:
    _check_finite(name, value)
    if value <= 0:
        raise NonPositiveValue(name, value)


def _check_non_negative(name: str, value: float) -> None:
    _check_finite(name, value)
    if value < 0:
        raise NegativeValue(name, value)


def validate_inputs(inputs: ModelInputs) -> None:
    """
    Vérifie toutes les entrées ; lève une InvalidParameterError à la
    première violation. Aucune correction n'est appliquée.
    """
    if isinstance(inputs.n_days, bool):
        raise InvalidParameterError("n_days", inputs.n_days, "an integer")
    _check_positive("n_days", inputs.n_days)
    if int(inputs.n_days) != inputs.n_days:
        raise InvalidParameterError("n_days", inputs.n_days, "an integer")
    _check_range("S0", inputs.S0, 0.0, 1.0)
    _check_positive("R0", inputs.R0)
    _check_positive("infectious_period", inputs.infectious_period)
    _check_positive("latent_period", inputs.latent_period)
    _check_positive("immunity_duration", inputs.immunity_duration)
    _check_positive("life_expectancy", inputs.life_expectancy)
    _check_non_negative("death_onset", inputs.death_onset)
    _check_range("vaccination_rate", inputs.vaccination_rate, 0.0, 1.0)


# Entrée dont dépend chaque taux, dans l'ordre de RateConstants.to_array()
_RATE_SOURCES: dict[str, str] = {
    "alpha": "death_onset",
    "gamma": "infectious_period",
    "omega": "immunity_duration",
    "mu": "life_expectancy",
    "sigma": "latent_period",
    "beta": "R0",
}


def derive_rates(inputs: ModelInputs) -> RateConstants:
    """
    Calcule les constantes de taux à partir des entrées validées.

    β est obtenu en inversant R0 = βσ / [(σ+μ)(γ+μ+α)], de sorte que la
    dynamique vitale et la mortalité n'altèrent pas le R0 demandé.
    """
    validate_inputs(inputs)

    # death_onset = 0 signifie "pas de mortalité due à la maladie"
    alpha = 1.0 / inputs.death_onset if inputs.death_onset > 0 else 0.0
    gamma = 1.0 / inputs.infectious_period
    omega = 1.0 / (DAYS_PER_YEAR * inputs.immunity_duration)
    mu = 1.0 / (DAYS_PER_YEAR * inputs.life_expectancy)
    sigma = 1.0 / inputs.latent_period
    beta = inputs.R0 * (gamma + mu + alpha) * (sigma + mu) / sigma

    rates = RateConstants(
        alpha=alpha, gamma=gamma, omega=omega, mu=mu, sigma=sigma, beta=beta
    )

    # Entrée minuscule (ex. death_onset=1e-320) : 1/x déborde en inf
    for rate, value in zip(_RATE_SOURCES, rates.to_array()):
        if not np.isfinite(value):
            name = _RATE_SOURCES[rate]
            raise InvalidParameterError(
                name, getattr(inputs, name), f"large enough for a finite {rate} rate"
            )
    return rates


# ---------------------------------------------------------------------------
# Scénario nominal
# ---------------------------------------------------------------------------

inputs_nom: ModelInputs = ModelInputs(
    S0=0.99,
    R0=3.0,
    latent_period=7.0,
    infectious_period=14.0,
    n_days=3000,
    death_onset=100.0,
    immunity_duration=1.0,
    life_expectancy=76.0,
    vaccination_rate=0.5,
)


# ---------------------------------------------------------------------------
# Grilles de valeurs des paramètres
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ParamValue:
    """Une position de curseur : valeur, marqueur par défaut, libellé."""

    value: float
    default: bool = False
    label: str | None = None


def day_label(val: float) -> str:
    return f"{val:g} day{'s' if val != 1 else ''}"


def year_label(val: float) -> str:
    return f"{val:g} year{'s' if val != 1 else ''}"


def percent_label(val: float) -> str:
    return f"{round(val * 100)}%"


def generate_values(
    start: float,
    end: float,
    step: float,
    default: float | None = None,
    label_fn: Callable[[float], str] | None = None,
) -> list[ParamValue]:
    """
    Génère la grille [start, end] au pas `step`, arrondie à 2 décimales.

    La valeur égale à `default` est marquée ; `label_fn` fournit le libellé.
    """
    n_steps = round((end - start) / step)
    values = []
    for k in range(n_steps + 1):
        value = round(start + k * step, 2)
        label = label_fn(value) if label_fn is not None else None
        values.append(ParamValue(value=value, default=(value == default), label=label))
    return values


PARAM_VALUES: dict[str, list[ParamValue]] = {
    "n_days": generate_values(50, 3000, 50, 3000),
    "y_max": generate_values(5, 100, 5, 100),
    "R0": generate_values(1, 5, 0.1, 3.0),
    "latent_period": generate_values(1, 30, 1, 7, day_label),
    "infectious_period": generate_values(1, 30, 1, 14, day_label),
    "S0": generate_values(0, 1, 0.01, 0.99, percent_label),
    "death_onset": generate_values(0, 1000, 1, 15, day_label),
    "immunity_duration": generate_values(0.1, 10, 0.1, 1.0, year_label),
    "life_expectancy": generate_values(1, 100, 1, 76, year_label),
    "vaccination_rate": generate_values(0, 1, 0.01, 0.0, percent_label),
}


def default_value(name: str) -> float:
    """Valeur par défaut de la grille `name` (KeyError si inconnue)."""
    for item in PARAM_VALUES[name]:
        if item.default:
            return item.value
    raise KeyError(f"Pas de valeur par défaut pour '{name}'")
