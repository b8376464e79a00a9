"""Debt-capacity resolver.

Sizes the SCPI credit envelope from the household's remaining borrowing
capacity under the debt-to-income ceiling, and keeps the historical
sizing from a target net monthly effort.
"""

from __future__ import annotations

from achat_location.core.constants import (
    ASSURANCE_SCPI_PCT,
    DUREE_CREDIT_SCPI_LEGACY_ANS,
    PRIX_PART_SCPI,
    TAUX_ENDETTEMENT_MAX,
)
from achat_location.core.exceptions import ScpiCreditNotViableError
from achat_location.core.logging import get_logger
from achat_location.domain.calculator.financial import (
    calculate_insurance,
    calculate_monthly_payment,
    calculate_principal_from_payment,
    payment_factor,
)
from achat_location.domain.models.strategy import (
    DEFAULT_STRATEGY,
    InvestmentStrategy,
    ScpiCreditDetails,
    ScpiCreditEnvelope,
)

log = get_logger(__name__)


def calculate_debt_capacity(
    revenus_mensuels: float,
    charges_credits: float,
    engagements: float = 0.0,
    taux_endettement_max: float = TAUX_ENDETTEMENT_MAX,
) -> float:
    """Monthly amount still available for debt service.

    Args:
        revenus_mensuels: Net monthly income in €
        charges_credits: Existing loan payments in €/month
        engagements: Other committed outflows counted against the ceiling (rent)
        taux_endettement_max: Debt-to-income ceiling as a fraction

    Returns:
        Available capacity in €/month, negative when already over the ceiling
    """
    return revenus_mensuels * taux_endettement_max - charges_credits - engagements


def calculate_debt_based_scpi_credit(
    revenus_mensuels: float,
    loyer_mensuel: float,
    charges_credits: float,
    duree_credit_ans: int,
    envelope: ScpiCreditEnvelope = DEFAULT_STRATEGY.scpi_credit,
    prix_part: float = PRIX_PART_SCPI,
    assurance_pct: float = ASSURANCE_SCPI_PCT,
) -> ScpiCreditDetails:
    """Size the SCPI credit from the remaining debt capacity.

    The whole capacity left after rent and existing loans goes to the SCPI
    loan payment (insurance included).

    Args:
        revenus_mensuels: Net monthly income in €
        loyer_mensuel: Current rent in €/month
        charges_credits: Existing loan payments in €/month
        duree_credit_ans: SCPI loan term in years
        envelope: SCPI credit envelope (rates)
        prix_part: Price of one SCPI share in €
        assurance_pct: Annual borrower insurance %

    Returns:
        SCPI credit details, or ``ScpiCreditDetails.non_viable()`` when no
        capacity is left
    """
    disponible = calculate_debt_capacity(revenus_mensuels, charges_credits, engagements=loyer_mensuel)
    duree_mois = duree_credit_ans * 12

    if disponible <= 0 or duree_mois <= 0:
        log.debug("scpi_credit_no_capacity", disponible=disponible, duree_mois=duree_mois)
        return ScpiCreditDetails.non_viable()

    montant = calculate_principal_from_payment(
        disponible, envelope.taux_credit, duree_mois, assurance_pct
    )
    nb_parts = montant / prix_part
    dividendes = nb_parts * prix_part * (envelope.rendement_dividendes / 100.0 / 12.0)

    mensualite = calculate_monthly_payment(montant, envelope.taux_credit, duree_mois)
    mensualite_avec_assurance = mensualite + calculate_insurance(montant, assurance_pct)

    return ScpiCreditDetails(
        montant_emprunte=montant,
        mensualite_credit=mensualite_avec_assurance,
        effort_net=mensualite_avec_assurance - dividendes,
        nb_parts_achetees=nb_parts,
        dividendes_mensuels=dividendes,
        fin_credit_mois=duree_mois,
    )


def solve_scpi_credit_from_effort(
    effort_mensuel: float,
    duree_credit_ans: int = DUREE_CREDIT_SCPI_LEGACY_ANS,
    envelope: ScpiCreditEnvelope = DEFAULT_STRATEGY.scpi_credit,
    prix_part: float = PRIX_PART_SCPI,
) -> ScpiCreditDetails:
    """Size the SCPI credit so that payment minus dividends equals an effort.

    Solves ``effort = montant * K - montant * d`` where K is the monthly
    payment factor and d the monthly dividend rate.

    Raises:
        ScpiCreditNotViableError: if ``d >= K`` (unbounded solution)
    """
    duree_mois = duree_credit_ans * 12
    facteur = payment_factor(envelope.taux_credit, duree_mois)
    dividende_mensuel = envelope.rendement_dividendes / 100.0 / 12.0

    denominateur = facteur - dividende_mensuel
    if denominateur <= 0:
        raise ScpiCreditNotViableError(facteur, dividende_mensuel)

    nb_parts = effort_mensuel / (prix_part * denominateur)
    montant = nb_parts * prix_part

    return ScpiCreditDetails(
        montant_emprunte=montant,
        mensualite_credit=montant * facteur,
        effort_net=effort_mensuel,
        nb_parts_achetees=nb_parts,
        dividendes_mensuels=montant * dividende_mensuel,
        fin_credit_mois=duree_mois,
    )


def get_scpi_credit_details(
    investissement_mensuel: float,
    revenus: float | None = None,
    loyer: float | None = None,
    charges_credits: float | None = None,
    horizon: int | None = None,
    strategy: InvestmentStrategy = DEFAULT_STRATEGY,
) -> ScpiCreditDetails:
    """SCPI credit details for display.

    With the full household inputs (income, rent, existing loans, horizon)
    the position is sized from the debt capacity. Otherwise the historical
    sizing is used: the SCPI credit share of the monthly surplus is taken
    as the net effort of a 25-year loan.

    Never raises for a non-viable position; returns the non-viable marker.
    """
    envelope = strategy.scpi_credit

    if revenus and loyer is not None and charges_credits is not None and horizon:
        return calculate_debt_based_scpi_credit(
            revenus,
            loyer,
            charges_credits,
            envelope.loan_years(horizon),
            envelope=envelope,
        )

    effort = investissement_mensuel * (envelope.allocation / 100.0)
    try:
        return solve_scpi_credit_from_effort(effort, envelope=envelope)
    except ScpiCreditNotViableError as e:
        log.info(
            "scpi_credit_not_viable",
            payment_factor=e.payment_factor,
            dividend_rate=e.dividend_rate,
        )
        return ScpiCreditDetails.non_viable()
