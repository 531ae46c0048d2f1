"""Shared fixtures for the seirs test suite."""

import matplotlib

matplotlib.use("Agg")

import pytest

from seirs.params import ModelInputs, derive_rates, inputs_nom


@pytest.fixture
def nominal() -> ModelInputs:
    """Nominal scenario: S0=0.99, R0=3, 7/14 days, 3000 days, p=0.5."""
    return inputs_nom


@pytest.fixture
def nominal_rates(nominal):
    return derive_rates(nominal)
