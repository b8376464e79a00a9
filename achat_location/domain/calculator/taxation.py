"""Terminal taxation of both scenarios.

Plus-value immobilière on the resale of the property (purchase side) and
flat tax on the gains of the investment envelopes (rental side). Both are
computed once, from the state at the horizon.
"""

from __future__ import annotations

from achat_location.domain.models.fiscal import (
    DEFAULT_FISCAL_RULES,
    FlatTaxRules,
    PlusValueRules,
)
from achat_location.domain.models.results import FlatTaxInvestissement, PlusValueImmobiliere


def abattement_ir(annees_detention: int, rules: PlusValueRules = DEFAULT_FISCAL_RULES.plus_value) -> float:
    """Income-tax abatement % for a holding period in full years."""
    if annees_detention >= rules.exoneration_ir_ans:
        return 100.0
    if annees_detention < rules.debut_abattement_ans:
        return 0.0

    annees = annees_detention - (rules.debut_abattement_ans - 1)
    if annees_detention < 22:
        return min(100.0, annees * rules.abattement_ir_par_an)
    # Year 22 when the exemption threshold is set later
    return 16 * rules.abattement_ir_par_an + rules.abattement_ir_annee_22


def abattement_ps(annees_detention: int, rules: PlusValueRules = DEFAULT_FISCAL_RULES.plus_value) -> float:
    """Social-levy abatement % for a holding period in full years.

    Three regimes: linear from year 6 to 21, a fixed step at year 22, and
    a steeper linear rate from year 23 until the exemption.
    """
    if annees_detention >= rules.exoneration_ps_ans:
        return 100.0
    if annees_detention < rules.debut_abattement_ans:
        return 0.0

    annees = annees_detention - (rules.debut_abattement_ans - 1)
    palier_22 = 16 * rules.abattement_ps_par_an + rules.abattement_ps_annee_22

    if annees_detention < 22:
        abattement = annees * rules.abattement_ps_par_an
    elif annees_detention == 22:
        abattement = palier_22
    else:
        abattement = palier_22 + (annees_detention - 22) * rules.abattement_ps_annee_23

    return min(100.0, abattement)


def calculate_plus_value_immobiliere(
    prix_achat: float,
    prix_vente: float,
    annees_detention: int,
    is_residence_principale: bool = False,
    rules: PlusValueRules = DEFAULT_FISCAL_RULES.plus_value,
) -> PlusValueImmobiliere:
    """Capital gains tax due on the resale of the property.

    Args:
        prix_achat: Purchase price in € (fees excluded)
        prix_vente: Resale value in €
        annees_detention: Full years held
        is_residence_principale: Primary residence, fully exempt
        rules: Rates and abatement schedule

    Returns:
        Gain, abatements, taxable bases and taxes
    """
    plus_value_brute = max(0.0, prix_vente - prix_achat)

    if is_residence_principale:
        return PlusValueImmobiliere(
            plus_value_brute=plus_value_brute,
            abattement_ir=100.0,
            abattement_ps=100.0,
            is_exoneree=True,
        )

    abatt_ir = abattement_ir(annees_detention, rules)
    abatt_ps = abattement_ps(annees_detention, rules)

    base_ir = plus_value_brute * (1 - abatt_ir / 100.0)
    base_ps = plus_value_brute * (1 - abatt_ps / 100.0)

    impot_ir = base_ir * (rules.taux_ir / 100.0)
    impot_ps = base_ps * (rules.taux_ps / 100.0)
    impot_total = impot_ir + impot_ps

    return PlusValueImmobiliere(
        plus_value_brute=plus_value_brute,
        abattement_ir=abatt_ir,
        abattement_ps=abatt_ps,
        base_imposable_ir=base_ir,
        base_imposable_ps=base_ps,
        impot_ir=impot_ir,
        impot_ps=impot_ps,
        impot_total=impot_total,
        is_exoneree=impot_total == 0,
    )


def calculate_flat_tax(
    capital_initial_av: float,
    capital_final_av: float,
    capital_initial_per: float,
    capital_final_per: float,
    capital_initial_scpi: float,
    capital_final_scpi: float,
    dividendes_cumules_scpi: float,
    horizon_ans: int,
    situation_foyer: str = "celibataire",
    rules: FlatTaxRules = DEFAULT_FISCAL_RULES.flat_tax,
) -> FlatTaxInvestissement:
    """Flat tax on the gains of assurance-vie, PER and SCPI cash.

    Assurance-vie held at least 8 years gets the reduced rate after the
    household allowance; the other envelopes pay the standard rate. The
    SCPI gain adds the dividends received during the run.
    """
    gains_av = max(0.0, capital_final_av - capital_initial_av)
    gains_per = max(0.0, capital_final_per - capital_initial_per)
    gains_scpi = max(0.0, capital_final_scpi - capital_initial_scpi) + dividendes_cumules_scpi

    if horizon_ans >= rules.anciennete_av_ans:
        gains_imposables_av = max(0.0, gains_av - rules.abattement_av(situation_foyer))
        taxe_av = gains_imposables_av * (rules.taux_av_apres_8_ans / 100.0)
    else:
        taxe_av = gains_av * (rules.taux_standard / 100.0)

    taxe_per = gains_per * (rules.taux_standard / 100.0)
    taxe_scpi = gains_scpi * (rules.taux_standard / 100.0)

    return FlatTaxInvestissement(
        gains_av=gains_av,
        gains_per=gains_per,
        gains_scpi=gains_scpi,
        taxe_av=taxe_av,
        taxe_per=taxe_per,
        taxe_scpi=taxe_scpi,
        taxe_total=taxe_av + taxe_per + taxe_scpi,
    )
