"""Pytest fixtures for achat_location tests."""

import os
import sys

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from achat_location.domain.models import (  # noqa: E402
    DEFAULT_STRATEGY,
    AchatParams,
    LocationParams,
    SimulationParams,
)


def make_params(
    prix_bien: float = 250000,
    apport: float = 25000,
    taux_credit: float = 3.5,
    duree_credit: int = 20,
    surface: float = 60,
    is_neuf: bool = False,
    taux_revalorisation: float = 2.0,
    is_residence_principale: bool = True,
    loyer_mensuel: float = 1000,
    augmentation_loyer: float = 1.0,
    apport_investi: float = 25000,
    rendement_placement: float | None = None,
    revenus_mensuels: float = 3000,
    charges_credits: float = 0,
    horizon_ans: int = 25,
    situation_foyer: str = "celibataire",
) -> SimulationParams:
    """Build a parameter set, reference scenario by default."""
    return SimulationParams(
        achat=AchatParams(
            prix_bien=prix_bien,
            apport=apport,
            taux_credit=taux_credit,
            duree_credit=duree_credit,
            surface=surface,
            is_neuf=is_neuf,
            taux_revalorisation=taux_revalorisation,
            is_residence_principale=is_residence_principale,
        ),
        location=LocationParams(
            loyer_mensuel=loyer_mensuel,
            augmentation_loyer=augmentation_loyer,
            apport_investi=apport_investi,
            rendement_placement=rendement_placement,
        ),
        revenus_mensuels=revenus_mensuels,
        charges_credits=charges_credits,
        horizon_ans=horizon_ans,
        situation_foyer=situation_foyer,
    )


@pytest.fixture
def reference_params() -> SimulationParams:
    """250 000 € resale flat, 20-year loan at 3.5%, 1 000 € rent, 25 years."""
    return make_params()


@pytest.fixture
def low_income_params() -> SimulationParams:
    """Household whose debt ceiling is already consumed by the rent."""
    return make_params(revenus_mensuels=2500)


@pytest.fixture
def short_scpi_loan_strategy():
    """Default strategy with a 10-year SCPI loan instead of the horizon."""
    return DEFAULT_STRATEGY.model_copy(
        update={"scpi_credit": DEFAULT_STRATEGY.scpi_credit.model_copy(update={"duree_credit_ans": 10})}
    )


@pytest.fixture
def high_dividend_strategy():
    """Strategy whose SCPI dividends exceed the credit payment factor."""
    return DEFAULT_STRATEGY.model_copy(
        update={"scpi_credit": DEFAULT_STRATEGY.scpi_credit.model_copy(update={"rendement_dividendes": 12.0})}
    )


@pytest.fixture
def params_factory():
    """Factory building variants of the reference scenario."""
    return make_params
