"""Simulation parameter models.

The parameter set is supplied by the caller (UI, share link, batch) and is
never mutated by the engine. Range checks beyond field types are left to
the caller: the engine computes whatever the formulas produce.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from achat_location.core.constants import DEFAULTS, RATIO_LOYER_PRIX
from achat_location.core.settings import get_settings


class AchatParams(BaseModel):
    """Purchase scenario: the property and its mortgage."""

    prix_bien: float = Field(..., description="Purchase price in €")
    apport: float = Field(default=0.0, description="Down payment in €")
    taux_credit: float = Field(..., description="Annual mortgage rate %")
    duree_credit: int = Field(..., description="Mortgage term in years")
    surface: float = Field(default=DEFAULTS["surface"], description="Surface in m²")
    is_neuf: bool = Field(default=False, description="New build (reduced notary fees)")
    taux_revalorisation: float = Field(default=0.0, description="Annual property appreciation %")
    is_residence_principale: bool = Field(
        default=True, description="Primary residence (capital gains exempt)"
    )

    model_config = {"frozen": True}


class LocationParams(BaseModel):
    """Rental scenario: rent paid and capital invested up front."""

    loyer_mensuel: float = Field(..., description="Starting monthly rent in €")
    augmentation_loyer: float = Field(default=0.0, description="Annual rent increase %")
    apport_investi: float = Field(default=0.0, description="Capital invested at month 0 in €")
    rendement_placement: float | None = Field(
        default=None,
        description="Legacy flat annual yield %. None selects the blended strategy.",
    )

    model_config = {"frozen": True}


class SimulationParams(BaseModel):
    """Complete input of one simulation run."""

    achat: AchatParams
    location: LocationParams
    revenus_mensuels: float = Field(default=DEFAULTS["revenus_mensuels"], description="Net monthly income in €")
    charges_credits: float = Field(default=DEFAULTS["charges_credits"], description="Existing loan payments in €/month")
    horizon_ans: int = Field(..., description="Simulation horizon in years")
    situation_foyer: Literal["celibataire", "couple"] = Field(
        default="celibataire", description="Household, selects the assurance-vie allowance"
    )

    model_config = {"frozen": True}

    @property
    def total_months(self) -> int:
        """Number of simulated months (0 for a non-positive horizon)."""
        return max(0, self.horizon_ans * 12)

    @classmethod
    def defaults(cls, **overrides) -> SimulationParams:
        """Build the default parameter set shown on first load.

        Rent defaults to 0.4% of the price per month and the invested
        capital to the purchase down payment. Overrides are top-level fields
        and go through validation like any other input.
        """
        prix = DEFAULTS["prix_bien"]
        params = cls(
            achat=AchatParams(
                prix_bien=prix,
                apport=DEFAULTS["apport"],
                taux_credit=DEFAULTS["taux_credit"],
                duree_credit=DEFAULTS["duree_credit"],
                surface=DEFAULTS["surface"],
                is_neuf=DEFAULTS["is_neuf"],
                taux_revalorisation=DEFAULTS["taux_revalorisation"],
                is_residence_principale=DEFAULTS["is_residence_principale"],
            ),
            location=LocationParams(
                loyer_mensuel=round(prix * RATIO_LOYER_PRIX),
                augmentation_loyer=DEFAULTS["augmentation_loyer"],
                apport_investi=DEFAULTS["apport"],
            ),
            revenus_mensuels=DEFAULTS["revenus_mensuels"],
            charges_credits=DEFAULTS["charges_credits"],
            horizon_ans=get_settings().default_horizon_years,
        )
        if overrides:
            params = cls.model_validate({**params.model_dump(), **overrides})
        return params
