"""Unit tests for envelope allocation and investment mode resolution."""

import pytest

from achat_location.domain.calculator.allocation import (
    freed_cash_shares,
    resolve_allocation,
    resolve_investment_mode,
    split_amount,
)
from achat_location.domain.models import DEFAULT_STRATEGY, ScpiCreditDetails


class TestResolveAllocation:
    def test_viable_keeps_strategy(self):
        details = ScpiCreditDetails(montant_emprunte=10000, fin_credit_mois=300)
        assert resolve_allocation(DEFAULT_STRATEGY, details) is DEFAULT_STRATEGY

    def test_non_viable_redistributes_proportionally(self):
        """25% SCPI credit share spread over 30/20/25 -> 40/26.67/33.33."""
        alloc = resolve_allocation(DEFAULT_STRATEGY, ScpiCreditDetails.non_viable()).allocations()

        assert alloc["scpi_credit"] == 0
        assert alloc["assurance_vie"] == pytest.approx(40.0)
        assert alloc["per"] == pytest.approx(80 / 3)
        assert alloc["scpi_cash"] == pytest.approx(100 / 3)
        assert sum(alloc.values()) == pytest.approx(100.0)


class TestSplitAmount:
    def test_split_follows_allocations(self):
        amounts = split_amount(1000.0, DEFAULT_STRATEGY)
        assert amounts.assurance_vie == pytest.approx(300.0)
        assert amounts.per == pytest.approx(200.0)
        assert amounts.scpi_cash == pytest.approx(250.0)
        assert amounts.scpi_credit == pytest.approx(250.0)
        assert sum(amounts) == pytest.approx(1000.0)


class TestFreedCashShares:
    def test_shares_among_non_leveraged(self):
        shares = freed_cash_shares(DEFAULT_STRATEGY)
        assert shares.assurance_vie == pytest.approx(0.4)
        assert shares.per == pytest.approx(0.2 / 0.75)
        assert shares.scpi_credit == 0.0
        assert sum(shares) == pytest.approx(1.0)


class TestResolveInvestmentMode:
    def test_strategy_mode_with_capacity(self, reference_params):
        mode = resolve_investment_mode(reference_params, DEFAULT_STRATEGY)

        assert not mode.legacy
        assert mode.scpi_credit.viable
        assert mode.strategy == DEFAULT_STRATEGY

    def test_strategy_mode_without_capacity(self, low_income_params):
        mode = resolve_investment_mode(low_income_params, DEFAULT_STRATEGY)

        assert not mode.scpi_credit.viable
        assert mode.strategy.scpi_credit.allocation == 0
        assert sum(mode.strategy.allocations().values()) == pytest.approx(100.0)

    def test_flat_yield_mode(self, params_factory):
        mode = resolve_investment_mode(params_factory(rendement_placement=4.5), DEFAULT_STRATEGY)

        assert mode.legacy
        assert not mode.scpi_credit.viable
        assert mode.strategy.per.allocation == 100.0
        assert mode.strategy.per.rendement == 4.5
