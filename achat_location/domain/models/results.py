"""Simulation result models.

A result holds the chronological monthly series, the aggregated totals,
the monthly cost breakdown of the purchase, and both terminal tax
computations.
"""

from __future__ import annotations

from typing import Any

import pandas as pd
from pydantic import BaseModel, Field, computed_field

from achat_location.domain.models.strategy import ScpiCreditDetails


class MonthlyData(BaseModel):
    """State of both scenarios at the end of one month."""

    month: int
    year: int
    patrimoine_achat: float
    patrimoine_location: float
    cout_mensuel_achat: float
    cout_mensuel_location: float
    capital_restant_du: float
    valeur_bien: float
    capital_place: float

    model_config = {"frozen": True}

    def to_dict(self) -> dict[str, Any]:
        return {
            "Mois": self.month,
            "Année": self.year,
            "Patrimoine Achat": self.patrimoine_achat,
            "Patrimoine Location": self.patrimoine_location,
            "Coût Mensuel Achat": self.cout_mensuel_achat,
            "Coût Mensuel Location": self.cout_mensuel_location,
            "Capital Restant Dû": self.capital_restant_du,
            "Valeur Bien": self.valeur_bien,
            "Capital Placé": self.capital_place,
        }


class PlusValueImmobiliere(BaseModel):
    """Capital gains tax on the resale of the property."""

    plus_value_brute: float = 0.0
    abattement_ir: float = 0.0
    abattement_ps: float = 0.0
    base_imposable_ir: float = 0.0
    base_imposable_ps: float = 0.0
    impot_ir: float = 0.0
    impot_ps: float = 0.0
    impot_total: float = 0.0
    is_exoneree: bool = False

    model_config = {"frozen": True}


class FlatTaxInvestissement(BaseModel):
    """Flat tax on the gains of the taxable envelopes."""

    gains_av: float = 0.0
    gains_per: float = 0.0
    gains_scpi: float = 0.0
    taxe_av: float = 0.0
    taxe_per: float = 0.0
    taxe_scpi: float = 0.0
    taxe_total: float = 0.0

    model_config = {"frozen": True}


class TaxCalculation(BaseModel):
    plus_value_immobiliere: PlusValueImmobiliere
    flat_tax_investissement: FlatTaxInvestissement

    model_config = {"frozen": True}


class SimulationResult(BaseModel):
    """Complete output of one simulation run."""

    monthly: list[MonthlyData] = Field(default_factory=list, description="One record per month, chronological")

    # Totals
    cout_total_achat: float = 0.0
    cout_total_location: float = 0.0
    patrimoine_net_achat: float = 0.0
    patrimoine_net_location: float = 0.0
    frais_notaire: float = 0.0
    capital_emprunte: float = 0.0
    mensualite_credit: float = 0.0
    cout_mensuel_total_achat: float = 0.0
    investissement_mensuel: float = 0.0

    # Monthly purchase breakdown
    taxe_fonciere_mensuel: float = 0.0
    charges_copro_mensuel: float = 0.0
    assurance_pno_mensuel: float = 0.0
    entretien_mensuel: float = 0.0
    assurance_emprunteur_mensuel: float = 0.0

    # Details
    cout_total_credit: float = 0.0
    taxes_charges_cumulees: float = 0.0
    loyers_cumules: float = 0.0
    rendements_cumules: float = 0.0
    point_croisement: int | None = Field(None, description="First month the net-worth gap changes sign")

    # Strategy actually used
    allocation_effective: dict[str, float] = Field(default_factory=dict)
    scpi_credit: ScpiCreditDetails = Field(default_factory=ScpiCreditDetails.non_viable)

    # Taxation
    tax_calculation: TaxCalculation
    patrimoine_net_achat_apres_fiscalite: float = 0.0
    patrimoine_net_location_apres_fiscalite: float = 0.0

    model_config = {"frozen": True}

    @computed_field
    @property
    def ecart_final_apres_fiscalite(self) -> float:
        """Post-tax wealth of buying minus post-tax wealth of renting."""
        return self.patrimoine_net_achat_apres_fiscalite - self.patrimoine_net_location_apres_fiscalite

    def to_dataframe(self) -> pd.DataFrame:
        """Monthly series as a DataFrame, one row per month."""
        return pd.DataFrame([m.to_dict() for m in self.monthly])
