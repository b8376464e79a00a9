"""Unit tests for achat_location.application.services.simulation module."""

import pytest

from achat_location.application.services.simulation import (
    MonthlyState,
    PurchasePlan,
    SimulationEngine,
    get_investment_strategy,
    run_simulation,
)
from achat_location.domain.calculator.financial import calculate_monthly_payment
from achat_location.domain.models import DEFAULT_STRATEGY


class TestPurchasePlan:
    """Fixed monthly figures of the purchase."""

    def test_reference_scenario(self, reference_params):
        plan = PurchasePlan.from_params(reference_params.achat)

        assert plan.frais_notaire == pytest.approx(20000)
        assert plan.capital_emprunte == pytest.approx(245000)
        assert plan.mensualite_credit == pytest.approx(calculate_monthly_payment(245000, 3.5, 240))
        assert plan.taxe_fonciere_mensuel == pytest.approx(250000 * 0.007 / 12)
        assert plan.charges_copro_mensuel == pytest.approx(60 * 25 / 12)
        assert plan.assurance_emprunteur_mensuel == pytest.approx(245000 * 0.003 / 12)

    def test_new_build_notary_rate(self, params_factory):
        plan = PurchasePlan.from_params(params_factory(is_neuf=True).achat)
        assert plan.frais_notaire == pytest.approx(7500)

    def test_cost_drops_to_charges_after_loan(self, reference_params):
        plan = PurchasePlan.from_params(reference_params.achat)

        assert plan.cout_mensuel(240) == pytest.approx(plan.cout_mensuel_total)
        assert plan.cout_mensuel(241) == pytest.approx(plan.charges_fixes)

    def test_down_payment_above_cost(self, params_factory):
        plan = PurchasePlan.from_params(params_factory(apport=300000).achat)
        assert plan.capital_emprunte == 0
        assert plan.mensualite_credit == 0


class TestStep:
    """A single month, in isolation."""

    def test_first_month(self, reference_params):
        engine = SimulationEngine()
        ctx = engine.prepare(reference_params)
        state0 = engine.initial_state(ctx)

        state1, record = engine.step(ctx, state0, 1)

        interets = 245000 * 0.035 / 12
        assert record.month == 1 and record.year == 1
        assert record.capital_restant_du == pytest.approx(245000 - (ctx.plan.mensualite_credit - interets))
        assert record.valeur_bien == 250000
        assert record.cout_mensuel_location == 1000
        assert record.patrimoine_achat == pytest.approx(state1.patrimoine_achat)
        assert state1.point_croisement is None
        # Input state is untouched
        assert state0.capital_restant_du == 245000

    def test_revaluation_on_twelfth_month(self, reference_params):
        engine = SimulationEngine()
        ctx = engine.prepare(reference_params)
        state = engine.initial_state(ctx)

        _, record_11 = engine.step(ctx, state, 11)
        _, record_12 = engine.step(ctx, state, 12)

        assert record_11.valeur_bien == 250000
        assert record_12.valeur_bien == pytest.approx(255000)

    def test_scpi_cash_dividends_on_opening_balance(self, reference_params):
        engine = SimulationEngine()
        ctx = engine.prepare(reference_params)
        state = engine.initial_state(ctx)

        new_state, _ = engine.step(ctx, state, 1)

        opening = state.capital_scpi_cash
        assert new_state.dividendes_cumules_scpi == pytest.approx(opening * 0.055 / 12)

    def test_freed_cash_after_scpi_loan(self, reference_params, short_scpi_loan_strategy):
        """Past its term the SCPI loan payment and dividends feed the other envelopes."""
        engine = SimulationEngine(strategy=short_scpi_loan_strategy)
        ctx = engine.prepare(reference_params)
        scpi = ctx.mode.scpi_credit
        assert scpi.viable and scpi.fin_credit_mois == 120

        state = engine.initial_state(ctx)
        for month in range(1, 121):
            state, _ = engine.step(ctx, state, month)
        assert state.restant_du_scpi == 0

        before = state
        after, record = engine.step(ctx, before, 121)

        investissement = max(0.0, ctx.plan.cout_mensuel(121) - record.cout_mensuel_location)
        cash_libere = scpi.mensualite_credit + scpi.dividendes_mensuels
        expected_av = (
            before.capital_av * (1 + 0.04 / 12)
            + investissement * 0.30
            + cash_libere * 0.30 / 0.75
        )
        assert after.capital_av == pytest.approx(expected_av)
        assert after.restant_du_scpi == 0


class TestSimulate:
    def test_series_length(self, reference_params):
        result = run_simulation(reference_params)

        assert len(result.monthly) == 300
        assert [m.month for m in result.monthly] == list(range(1, 301))
        assert result.monthly[-1].year == 25

    def test_reference_totals(self, reference_params):
        result = run_simulation(reference_params)

        assert result.frais_notaire == pytest.approx(20000)
        assert result.capital_emprunte == pytest.approx(245000)
        assert 1415 < result.mensualite_credit < 1425
        assert result.cout_total_credit == pytest.approx(result.mensualite_credit * 240)
        assert result.loyers_cumules == pytest.approx(result.cout_total_location)
        assert result.patrimoine_net_achat == pytest.approx(result.monthly[-1].patrimoine_achat)
        assert result.tax_calculation.plus_value_immobiliere.impot_total == 0
        assert result.patrimoine_net_achat_apres_fiscalite == result.patrimoine_net_achat

    def test_post_tax_location(self, reference_params):
        result = run_simulation(reference_params)
        taxe = result.tax_calculation.flat_tax_investissement.taxe_total

        assert taxe > 0
        assert result.patrimoine_net_location_apres_fiscalite == pytest.approx(
            result.patrimoine_net_location - taxe
        )

    def test_zero_rate_mortgage(self, params_factory):
        result = run_simulation(params_factory(taux_credit=0.0))
        assert result.mensualite_credit == pytest.approx(245000 / 240)

    def test_zero_horizon(self, params_factory):
        result = run_simulation(params_factory(horizon_ans=0))

        assert result.monthly == []
        assert result.point_croisement is None
        assert result.patrimoine_net_achat == pytest.approx(5000)
        assert result.loyers_cumules == 0

    def test_flat_yield_mode(self, params_factory):
        result = run_simulation(params_factory(rendement_placement=5.0))

        assert result.allocation_effective["per"] == 100.0
        assert not result.scpi_credit.viable
        assert result.tax_calculation.flat_tax_investissement.gains_av == 0
        assert result.tax_calculation.flat_tax_investissement.gains_per > 0

    def test_deterministic(self, reference_params):
        assert run_simulation(reference_params) == run_simulation(reference_params)

    def test_to_dataframe(self, reference_params):
        df = run_simulation(reference_params).to_dataframe()

        assert len(df) == 300
        assert {"Mois", "Patrimoine Achat", "Patrimoine Location", "Capital Restant Dû"} <= set(df.columns)


def test_get_investment_strategy():
    assert get_investment_strategy() is DEFAULT_STRATEGY


def test_monthly_state_net_worth():
    state = MonthlyState(
        capital_restant_du=100.0,
        valeur_bien=1000.0,
        capital_av=10.0,
        capital_per=20.0,
        capital_scpi_cash=30.0,
        capital_scpi_credit=40.0,
        restant_du_scpi=25.0,
    )
    assert state.patrimoine_achat == 900.0
    assert state.patrimoine_location == 75.0
