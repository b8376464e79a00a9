"""Invariant tests for the Achat vs Location simulation.

Verifies rules that must ALWAYS hold, whatever the parameter set.
"""

import random

import numpy_financial as npf
import pytest

from achat_location.application.services.simulation import run_simulation
from achat_location.domain.calculator.financial import calculate_monthly_payment

# --- Fixtures ---

@pytest.fixture
def random_scenarios(params_factory):
    """30 random but plausible parameter sets (seeded)."""
    rng = random.Random(42)
    res = []
    for _ in range(30):
        prix = rng.uniform(100_000, 600_000)
        res.append(params_factory(
            prix_bien=prix,
            apport=rng.uniform(0, 0.3) * prix,
            taux_credit=rng.choice([0.0, 1.2, 3.5, 4.8]),
            duree_credit=rng.choice([10, 15, 20, 25]),
            surface=rng.uniform(20, 120),
            is_neuf=rng.random() < 0.3,
            taux_revalorisation=rng.uniform(-1, 4),
            is_residence_principale=rng.random() < 0.5,
            loyer_mensuel=prix * rng.uniform(0.002, 0.006),
            augmentation_loyer=rng.uniform(0, 3),
            apport_investi=rng.uniform(0, 80_000),
            revenus_mensuels=rng.uniform(1500, 9000),
            charges_credits=rng.choice([0, 200, 800]),
            horizon_ans=rng.randint(1, 35),
        ))
    return res


def _closed_form_balance(principal, annual_rate_pct, months, months_paid):
    """Outstanding principal after `months_paid` payments of a fixed-rate loan."""
    rate = annual_rate_pct / 100.0 / 12.0
    payment = calculate_monthly_payment(principal, annual_rate_pct, months)
    return float(-npf.fv(rate, months_paid, -payment, principal))


def _sign_flip_month(result):
    prev = 0.0
    for m in result.monthly:
        diff = m.patrimoine_achat - m.patrimoine_location
        if m.month > 1 and prev * diff < 0:
            return m.month
        prev = diff
    return None


# --- Invariant Tests ---

class TestMortgageInvariants:
    def test_principal_never_increases_nor_negative(self, random_scenarios):
        for params in random_scenarios:
            result = run_simulation(params)
            term = params.achat.duree_credit * 12
            previous = result.capital_emprunte
            for m in result.monthly:
                assert m.capital_restant_du >= 0
                if m.month <= term:
                    assert m.capital_restant_du <= previous + 1e-9
                else:
                    assert m.capital_restant_du == previous
                previous = m.capital_restant_du

    def test_loop_matches_closed_form_balance(self, reference_params):
        result = run_simulation(reference_params)
        for month in (1, 60, 180):
            expected = _closed_form_balance(245000, 3.5, 240, month)
            assert result.monthly[month - 1].capital_restant_du == pytest.approx(expected, rel=1e-6)
        assert result.monthly[239].capital_restant_du < 0.01

    def test_property_revalued_once_a_year(self, random_scenarios):
        for params in random_scenarios:
            result = run_simulation(params)
            previous = params.achat.prix_bien
            for m in result.monthly:
                if m.month % 12 != 0:
                    assert m.valeur_bien == previous
                previous = m.valeur_bien


class TestRentalInvariants:
    def test_rent_steps_up_yearly(self, reference_params):
        monthly = run_simulation(reference_params).monthly

        assert {m.cout_mensuel_location for m in monthly[:12]} == {1000}
        assert monthly[12].cout_mensuel_location == pytest.approx(1010)
        assert monthly[23].cout_mensuel_location == pytest.approx(1010)

    def test_allocations_sum_to_100(self, random_scenarios):
        for params in random_scenarios:
            alloc = run_simulation(params).allocation_effective
            assert sum(alloc.values()) == pytest.approx(100.0)

    def test_non_viable_leverage_redistributed(self, low_income_params):
        result = run_simulation(low_income_params)

        assert result.scpi_credit.montant_emprunte == 0
        assert result.scpi_credit.mensualite_credit == 0
        assert result.scpi_credit.dividendes_mensuels == 0
        alloc = result.allocation_effective
        assert alloc["scpi_credit"] == 0
        assert alloc["assurance_vie"] == pytest.approx(30 * 4 / 3)
        assert alloc["per"] == pytest.approx(20 * 4 / 3)
        assert alloc["scpi_cash"] == pytest.approx(25 * 4 / 3)


class TestCrossover:
    def test_first_sign_flip(self, random_scenarios):
        for params in random_scenarios:
            result = run_simulation(params)
            assert result.point_croisement == _sign_flip_month(result)


class TestTaxInvariants:
    def test_primary_residence_never_taxed(self, random_scenarios):
        for params in random_scenarios:
            if params.achat.is_residence_principale:
                pv = run_simulation(params).tax_calculation.plus_value_immobiliere
                assert pv.impot_total == 0

    def test_long_holdings_exempt(self, params_factory):
        pv_30 = run_simulation(
            params_factory(is_residence_principale=False, horizon_ans=30)
        ).tax_calculation.plus_value_immobiliere
        pv_22 = run_simulation(
            params_factory(is_residence_principale=False, horizon_ans=22)
        ).tax_calculation.plus_value_immobiliere

        assert pv_30.impot_ps == 0 and pv_30.impot_ir == 0
        assert pv_22.impot_ir == 0
        assert pv_22.impot_ps > 0
