"""
Dynamique du modèle SEIRS.

Système d'EDO avec naissances, mortalité naturelle et due à la maladie,
vaccination à la naissance et perte d'immunité :
    Sdot = -βSI + ωR - μS + μ(1-p)
    Edot =  βSI - σE - μE
    Idot =  σE - γI - (μ+α)I
    Rdot =  γI - ωR - μR + μp
L'état x = [S, E, I, R] représente des fractions de population.
"""
from typing import NamedTuple

import numpy as np

from .params import RateConstants


class CompartmentState(NamedTuple):
    """Proportions (s, e, i, r) de la population à un instant donné."""

    s: float
    e: float
    i: float
    r: float

    def to_array(self) -> np.ndarray:
        return np.array([self.s, self.e, self.i, self.r], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "CompartmentState":
        assert arr.shape == (4,), f"Attendu (4,), reçu {arr.shape}"
        return cls(float(arr[0]), float(arr[1]), float(arr[2]), float(arr[3]))

    def clamped(self, lower: float = 0.0, upper: float = 1.0) -> "CompartmentState":
        """Borne chaque composante indépendamment à [lower, upper]."""
        return CompartmentState(*(max(lower, min(upper, v)) for v in self))


class Derivatives(NamedTuple):
    """Dérivées instantanées (ds, de, di, dr)."""

    ds: float
    de: float
    di: float
    dr: float


def derivatives(
    rates: RateConstants,
    p: float,
    s: float,
    e: float,
    i: float,
    r: float,
) -> Derivatives:
    """
    Calcule les dérivées du système SEIRS.

    Les termes μ(1-p) et μp modélisent les naissances : une fraction μ de
    la population naît chaque jour, répartie entre S et R (vaccinés).
    """
    # Flux entre compartiments
    force_of_infection = rates.beta * s * i  # S -> E
    progression = rates.sigma * e  # E -> I
    recovery = rates.gamma * i  # I -> R
    waning = rates.omega * r  # R -> S

    mu = rates.mu
    return Derivatives(
        ds=-force_of_infection + waning - mu * s + mu * (1.0 - p),
        de=force_of_infection - progression - mu * e,
        di=progression - recovery - (mu + rates.alpha) * i,
        dr=recovery - waning - mu * r + mu * p,
    )


def rhs(
    t: float,
    x: np.ndarray,
    p: float,
    rates: RateConstants,
) -> np.ndarray:
    """
    Membre de droite du système d'EDO SEIRS, forme vectorielle.

    Le système est autonome : t n'intervient pas, il est conservé pour
    respecter la signature attendue par rk4_step.
    """
    assert x.shape == (4,), f"État x doit être de dim 4, reçu {x.shape}"
    s, e, i, r = x
    return np.array(derivatives(rates, p, s, e, i, r), dtype=np.float64)


def get_jacobian_matrix(x, p, rates):
    """
    Calcule la matrice Jacobienne A = df/dx au point d'état x.
    Sert à l'analyse de stabilité locale des équilibres.
    """
    S, E, I, R = x

    J = np.zeros((4, 4))

    # Ligne 1 : dS/dt
    J[0, 0] = -rates.beta * I - rates.mu
    J[0, 2] = -rates.beta * S
    J[0, 3] = rates.omega

    # Ligne 2 : dE/dt
    J[1, 0] = rates.beta * I
    J[1, 1] = -(rates.sigma + rates.mu)
    J[1, 2] = rates.beta * S

    # Ligne 3 : dI/dt
    J[2, 1] = rates.sigma
    J[2, 2] = -(rates.gamma + rates.mu + rates.alpha)

    # Ligne 4 : dR/dt
    J[3, 2] = rates.gamma
    J[3, 3] = -(rates.omega + rates.mu)

    return J


def disease_free_equilibrium(rates: RateConstants, p: float) -> CompartmentState:
    """
    Équilibre sans maladie (E = I = 0).

    R* = μp / (ω+μ) et S* = 1 - R*, donc S* + R* = 1.
    """
    r_eq = rates.mu * p / (rates.omega + rates.mu)
    return CompartmentState(s=1.0 - r_eq, e=0.0, i=0.0, r=r_eq)


def check_stability_eigenvalues(x_eq, p, rates):
    """
    Retourne les valeurs propres de la Jacobienne en x_eq.
    Stable si Max(Re(valeurs propres)) < 0.
    """
    J = get_jacobian_matrix(x_eq, p, rates)
    eigvals = np.linalg.eigvals(J)
    return eigvals
