"""French tax rules applied at the simulation horizon."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PlusValueRules(BaseModel):
    """Plus-value immobilière: rates and holding-period abatements (%)."""

    taux_ir: float = 19.0
    taux_ps: float = 17.2
    debut_abattement_ans: int = 6
    abattement_ir_par_an: float = 6.0
    abattement_ps_par_an: float = 1.65
    abattement_ir_annee_22: float = 4.0
    abattement_ps_annee_22: float = 1.60
    abattement_ps_annee_23: float = 9.0
    exoneration_ir_ans: int = 22
    exoneration_ps_ans: int = 30

    model_config = {"frozen": True}


class FlatTaxRules(BaseModel):
    """Prélèvement forfaitaire unique and assurance-vie seniority rules."""

    taux_standard: float = 30.0
    taux_av_apres_8_ans: float = 24.7  # 7.5% IR + 17.2% PS
    anciennete_av_ans: int = 8
    abattement_av_celibataire: float = 4600.0
    abattement_av_couple: float = 9200.0

    model_config = {"frozen": True}

    def abattement_av(self, situation_foyer: str) -> float:
        """Annual assurance-vie allowance for the household."""
        if situation_foyer == "couple":
            return self.abattement_av_couple
        return self.abattement_av_celibataire


class FiscalRules(BaseModel):
    plus_value: PlusValueRules = Field(default_factory=PlusValueRules)
    flat_tax: FlatTaxRules = Field(default_factory=FlatTaxRules)

    model_config = {"frozen": True}


DEFAULT_FISCAL_RULES = FiscalRules()
