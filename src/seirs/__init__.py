"""
Package du modèle épidémique SEIRS.

Fournit la dérivation des taux, la dynamique EDO, l'intégration RK4 à pas
fixe d'un jour et le pilote de simulation pour le modèle compartimental
SEIRS avec naissances, mortalité, vaccination et perte d'immunité.
"""
from .errors import InvalidParameterError, RangeViolation, NonPositiveValue, NegativeValue
from .params import ModelInputs, RateConstants, derive_rates, validate_inputs
from .params import DT, DAYS_PER_YEAR, PERCENTAGE_SCALE, inputs_nom, PARAM_VALUES
from .dynamics import CompartmentState, Derivatives, derivatives, rhs
from .integrators import rk4_step, step, simulate_days
from .simulation import Trajectory, run, solve

__all__ = [
    "InvalidParameterError",
    "RangeViolation",
    "NonPositiveValue",
    "NegativeValue",
    "ModelInputs",
    "RateConstants",
    "derive_rates",
    "validate_inputs",
    "DT",
    "DAYS_PER_YEAR",
    "PERCENTAGE_SCALE",
    "inputs_nom",
    "PARAM_VALUES",
    "CompartmentState",
    "Derivatives",
    "derivatives",
    "rhs",
    "rk4_step",
    "step",
    "simulate_days",
    "Trajectory",
    "run",
    "solve",
]
