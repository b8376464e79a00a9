"""Investment allocation across envelopes.

Decides once per run which strategy the rental scenario follows and splits
invested amounts according to it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from achat_location.core.logging import get_logger
from achat_location.domain.calculator.debt import calculate_debt_based_scpi_credit
from achat_location.domain.models.params import SimulationParams
from achat_location.domain.models.strategy import (
    InvestmentStrategy,
    ScpiCashEnvelope,
    ScpiCreditDetails,
    ScpiCreditEnvelope,
    SimpleEnvelope,
)

log = get_logger(__name__)


class EnvelopeAmounts(NamedTuple):
    """An amount in € split across the four envelopes."""

    assurance_vie: float
    per: float
    scpi_cash: float
    scpi_credit: float


@dataclass(frozen=True)
class InvestmentMode:
    """Strategy resolved for one run."""

    strategy: InvestmentStrategy
    scpi_credit: ScpiCreditDetails
    legacy: bool = False


def resolve_allocation(
    strategy: InvestmentStrategy,
    scpi_credit: ScpiCreditDetails,
) -> InvestmentStrategy:
    """Strategy to use given the SCPI credit outcome.

    A non-viable SCPI credit gives its share to the other envelopes.
    """
    if scpi_credit.viable:
        return strategy
    return strategy.redistributed()


def split_amount(amount: float, strategy: InvestmentStrategy) -> EnvelopeAmounts:
    """Split an amount according to the envelope allocations."""
    return EnvelopeAmounts(
        assurance_vie=amount * strategy.assurance_vie.allocation / 100.0,
        per=amount * strategy.per.allocation / 100.0,
        scpi_cash=amount * strategy.scpi_cash.allocation / 100.0,
        scpi_credit=amount * strategy.scpi_credit.allocation / 100.0,
    )


def freed_cash_shares(strategy: InvestmentStrategy) -> EnvelopeAmounts:
    """Fractions of the cash freed by the end of the SCPI loan.

    Shares of the three non-leveraged envelopes among themselves.
    """
    autres = strategy.autres_allocation
    return EnvelopeAmounts(
        assurance_vie=strategy.assurance_vie.allocation / autres,
        per=strategy.per.allocation / autres,
        scpi_cash=strategy.scpi_cash.allocation / autres,
        scpi_credit=0.0,
    )


def flat_yield_strategy(rendement_pct: float, base: InvestmentStrategy) -> InvestmentStrategy:
    """Single-envelope strategy reproducing the historical flat placement.

    The whole flow goes to a standard-rate envelope at the given yield.
    """
    return InvestmentStrategy(
        assurance_vie=SimpleEnvelope(allocation=0.0, rendement=0.0),
        per=SimpleEnvelope(allocation=100.0, rendement=rendement_pct),
        scpi_cash=ScpiCashEnvelope(allocation=0.0, rendement_dividendes=0.0, rendement_revalo=0.0),
        scpi_credit=ScpiCreditEnvelope(
            allocation=0.0,
            rendement_dividendes=0.0,
            rendement_revalo=0.0,
            taux_credit=base.scpi_credit.taux_credit,
        ),
    )


def resolve_investment_mode(
    params: SimulationParams,
    strategy: InvestmentStrategy,
) -> InvestmentMode:
    """Pick the rental-side investment mode for a run.

    Legacy mode when the parameters carry a flat placement yield, blended
    strategy mode otherwise. In strategy mode the SCPI credit is sized
    from the household debt capacity and redistributed when not viable.
    """
    rendement = params.location.rendement_placement
    if rendement is not None:
        log.debug("investment_mode_resolved", mode="flat_yield", rendement=rendement)
        return InvestmentMode(
            strategy=flat_yield_strategy(rendement, strategy),
            scpi_credit=ScpiCreditDetails.non_viable(),
            legacy=True,
        )

    if strategy.scpi_credit.allocation <= 0:
        scpi_credit = ScpiCreditDetails.non_viable()
    else:
        scpi_credit = calculate_debt_based_scpi_credit(
            params.revenus_mensuels,
            params.location.loyer_mensuel,
            params.charges_credits,
            strategy.scpi_credit.loan_years(params.horizon_ans),
            envelope=strategy.scpi_credit,
        )

    effective = resolve_allocation(strategy, scpi_credit)
    if not scpi_credit.viable:
        log.info("scpi_credit_redistributed", allocation=effective.allocations())

    return InvestmentMode(strategy=effective, scpi_credit=scpi_credit)
