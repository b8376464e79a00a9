"""Achat vs Location simulation.

Month-by-month projection of both scenarios:

- Achat: the mortgage amortizes, recurring ownership costs are paid and
  the property is revalued once a year.
- Location: rent is paid and the difference with the purchase cost is
  invested across the envelopes of the investment strategy.

Each month is an explicit ``step`` from one immutable ``MonthlyState`` to
the next, so a single month can be tested in isolation and independent
runs share nothing.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from achat_location.core.constants import (
    CHARGES_COPRO_M2,
    TAUX_ASSURANCE_EMPRUNTEUR,
    TAUX_ASSURANCE_PNO,
    TAUX_ENTRETIEN,
    TAUX_NOTAIRE_ANCIEN,
    TAUX_NOTAIRE_NEUF,
    TAUX_TAXE_FONCIERE,
)
from achat_location.core.logging import get_logger
from achat_location.domain.calculator.allocation import (
    EnvelopeAmounts,
    InvestmentMode,
    freed_cash_shares,
    resolve_investment_mode,
    split_amount,
)
from achat_location.domain.calculator.financial import calculate_monthly_payment
from achat_location.domain.calculator.taxation import (
    calculate_flat_tax,
    calculate_plus_value_immobiliere,
)
from achat_location.domain.models.fiscal import DEFAULT_FISCAL_RULES, FiscalRules
from achat_location.domain.models.params import AchatParams, SimulationParams
from achat_location.domain.models.results import MonthlyData, SimulationResult, TaxCalculation
from achat_location.domain.models.strategy import DEFAULT_STRATEGY, InvestmentStrategy

log = get_logger(__name__)


def _monthly_rate(annual_pct: float) -> float:
    return annual_pct / 100.0 / 12.0


@dataclass(frozen=True)
class PurchasePlan:
    """Fixed monthly figures of the purchase scenario."""

    frais_notaire: float
    capital_emprunte: float
    mensualite_credit: float
    duree_credit_mois: int
    taxe_fonciere_mensuel: float
    charges_copro_mensuel: float
    assurance_pno_mensuel: float
    entretien_mensuel: float
    assurance_emprunteur_mensuel: float

    @classmethod
    def from_params(cls, achat: AchatParams) -> PurchasePlan:
        taux_notaire = TAUX_NOTAIRE_NEUF if achat.is_neuf else TAUX_NOTAIRE_ANCIEN
        frais_notaire = achat.prix_bien * taux_notaire
        capital_emprunte = max(0.0, achat.prix_bien + frais_notaire - achat.apport)
        duree_credit_mois = achat.duree_credit * 12

        return cls(
            frais_notaire=frais_notaire,
            capital_emprunte=capital_emprunte,
            mensualite_credit=calculate_monthly_payment(
                capital_emprunte, achat.taux_credit, duree_credit_mois
            ),
            duree_credit_mois=duree_credit_mois,
            taxe_fonciere_mensuel=achat.prix_bien * TAUX_TAXE_FONCIERE / 12.0,
            charges_copro_mensuel=achat.surface * CHARGES_COPRO_M2 / 12.0,
            assurance_pno_mensuel=achat.prix_bien * TAUX_ASSURANCE_PNO / 12.0,
            entretien_mensuel=achat.prix_bien * TAUX_ENTRETIEN / 12.0,
            assurance_emprunteur_mensuel=capital_emprunte * TAUX_ASSURANCE_EMPRUNTEUR / 12.0,
        )

    @property
    def charges_fixes(self) -> float:
        """Ownership costs paid every month, loan or not."""
        return (
            self.taxe_fonciere_mensuel
            + self.charges_copro_mensuel
            + self.assurance_pno_mensuel
            + self.entretien_mensuel
        )

    @property
    def cout_mensuel_total(self) -> float:
        """Monthly cost while the mortgage runs."""
        return self.mensualite_credit + self.charges_fixes + self.assurance_emprunteur_mensuel

    def cout_mensuel(self, month: int) -> float:
        if month <= self.duree_credit_mois:
            return self.cout_mensuel_total
        return self.charges_fixes


@dataclass(frozen=True)
class RunContext:
    """Everything fixed for the duration of one run."""

    params: SimulationParams
    plan: PurchasePlan
    mode: InvestmentMode
    apports: EnvelopeAmounts
    parts_liberees: EnvelopeAmounts

    @property
    def strategy(self) -> InvestmentStrategy:
        return self.mode.strategy


@dataclass(frozen=True)
class MonthlyState:
    """Balances and running totals at the end of a month."""

    # Achat
    capital_restant_du: float
    valeur_bien: float

    # Location
    capital_av: float
    capital_per: float
    capital_scpi_cash: float
    capital_scpi_credit: float
    restant_du_scpi: float
    dividendes_cumules_scpi: float = 0.0

    # Running totals
    cout_total_achat: float = 0.0
    cout_total_location: float = 0.0
    loyers_cumules: float = 0.0
    cout_total_credit: float = 0.0
    taxes_charges_cumulees: float = 0.0

    # Crossover detection
    prev_diff: float = 0.0
    point_croisement: int | None = None

    @property
    def patrimoine_achat(self) -> float:
        return self.valeur_bien - self.capital_restant_du

    @property
    def patrimoine_location(self) -> float:
        return (
            self.capital_av
            + self.capital_per
            + self.capital_scpi_cash
            + self.capital_scpi_credit
            - self.restant_du_scpi
        )


class SimulationEngine:
    """Achat vs Location simulation engine.

    The strategy and tax rules are read-only configuration; the engine
    keeps no state between runs and can be shared across threads.
    """

    def __init__(
        self,
        strategy: InvestmentStrategy = DEFAULT_STRATEGY,
        fiscal: FiscalRules = DEFAULT_FISCAL_RULES,
    ):
        self.strategy = strategy
        self.fiscal = fiscal

    def prepare(self, params: SimulationParams) -> RunContext:
        """Resolve the purchase plan and the investment mode of a run."""
        mode = resolve_investment_mode(params, self.strategy)
        return RunContext(
            params=params,
            plan=PurchasePlan.from_params(params.achat),
            mode=mode,
            apports=split_amount(params.location.apport_investi, mode.strategy),
            parts_liberees=freed_cash_shares(mode.strategy),
        )

    def initial_state(self, ctx: RunContext) -> MonthlyState:
        """State at month 0: loan drawn, initial capital invested."""
        return MonthlyState(
            capital_restant_du=ctx.plan.capital_emprunte,
            valeur_bien=ctx.params.achat.prix_bien,
            capital_av=ctx.apports.assurance_vie,
            capital_per=ctx.apports.per,
            capital_scpi_cash=ctx.apports.scpi_cash,
            capital_scpi_credit=ctx.apports.scpi_credit,
            restant_du_scpi=max(0.0, ctx.mode.scpi_credit.montant_emprunte - ctx.apports.scpi_credit),
            cout_total_achat=ctx.params.achat.apport + ctx.plan.frais_notaire,
        )

    def step(
        self,
        ctx: RunContext,
        state: MonthlyState,
        month: int,
    ) -> tuple[MonthlyState, MonthlyData]:
        """Advance both scenarios by one month.

        Args:
            ctx: Run context from ``prepare``
            state: State at the end of the previous month
            month: Month being simulated, starting at 1

        Returns:
            Tuple of (new state, record of the month)
        """
        params, plan, strategy = ctx.params, ctx.plan, ctx.strategy
        year = (month - 1) // 12 + 1
        pendant_credit = month <= plan.duree_credit_mois

        # === Achat ===
        capital_restant_du = state.capital_restant_du
        cout_total_credit = state.cout_total_credit
        if pendant_credit:
            interets = capital_restant_du * _monthly_rate(params.achat.taux_credit)
            capital_rembourse = plan.mensualite_credit - interets
            capital_restant_du = max(0.0, capital_restant_du - capital_rembourse)
            cout_total_credit += plan.mensualite_credit

        cout_mensuel_achat = plan.cout_mensuel(month)
        taxes_charges = plan.charges_fixes + (plan.assurance_emprunteur_mensuel if pendant_credit else 0.0)

        valeur_bien = state.valeur_bien
        if month % 12 == 0:
            valeur_bien *= 1 + params.achat.taux_revalorisation / 100.0

        # === Location ===
        loyer = params.location.loyer_mensuel * (1 + params.location.augmentation_loyer / 100.0) ** (year - 1)
        investissement = max(0.0, cout_mensuel_achat - loyer)
        inv = split_amount(investissement, strategy)

        scpi = ctx.mode.scpi_credit
        pendant_credit_scpi = month <= scpi.fin_credit_mois

        restant_du_scpi = state.restant_du_scpi
        cash_libere = 0.0
        if pendant_credit_scpi:
            # The SCPI credit share of the surplus services the loan
            interets_scpi = restant_du_scpi * _monthly_rate(strategy.scpi_credit.taux_credit)
            capital_rembourse_scpi = min(scpi.mensualite_credit - interets_scpi, restant_du_scpi)
            restant_du_scpi = max(0.0, restant_du_scpi - capital_rembourse_scpi)
        else:
            cash_libere = scpi.mensualite_credit + scpi.dividendes_mensuels

        capital_av = state.capital_av * (1 + _monthly_rate(strategy.assurance_vie.rendement)) + inv.assurance_vie
        capital_per = state.capital_per * (1 + _monthly_rate(strategy.per.rendement)) + inv.per

        dividendes_cash = state.capital_scpi_cash * _monthly_rate(strategy.scpi_cash.rendement_dividendes)
        capital_scpi_cash = (
            state.capital_scpi_cash * (1 + _monthly_rate(strategy.scpi_cash.rendement_revalo))
            + inv.scpi_cash
            + dividendes_cash
        )

        dividendes_credit = state.capital_scpi_credit * _monthly_rate(strategy.scpi_credit.rendement_dividendes)
        capital_scpi_credit = (
            state.capital_scpi_credit * (1 + _monthly_rate(strategy.scpi_credit.rendement_revalo))
            + dividendes_credit
        )

        if not pendant_credit_scpi:
            capital_scpi_credit += inv.scpi_credit
            parts = ctx.parts_liberees
            capital_av += cash_libere * parts.assurance_vie
            capital_per += cash_libere * parts.per
            capital_scpi_cash += cash_libere * parts.scpi_cash

        new_state = replace(
            state,
            capital_restant_du=capital_restant_du,
            valeur_bien=valeur_bien,
            capital_av=capital_av,
            capital_per=capital_per,
            capital_scpi_cash=capital_scpi_cash,
            capital_scpi_credit=capital_scpi_credit,
            restant_du_scpi=restant_du_scpi,
            dividendes_cumules_scpi=state.dividendes_cumules_scpi + dividendes_cash,
            cout_total_achat=state.cout_total_achat + cout_mensuel_achat,
            cout_total_location=state.cout_total_location + loyer,
            loyers_cumules=state.loyers_cumules + loyer,
            cout_total_credit=cout_total_credit,
            taxes_charges_cumulees=state.taxes_charges_cumulees + taxes_charges,
        )

        # === Point de croisement ===
        patrimoine_achat = new_state.patrimoine_achat
        patrimoine_location = new_state.patrimoine_location
        diff = patrimoine_achat - patrimoine_location
        point_croisement = state.point_croisement
        if month > 1 and point_croisement is None and state.prev_diff * diff < 0:
            point_croisement = month
        new_state = replace(new_state, prev_diff=diff, point_croisement=point_croisement)

        record = MonthlyData(
            month=month,
            year=year,
            patrimoine_achat=patrimoine_achat,
            patrimoine_location=patrimoine_location,
            cout_mensuel_achat=cout_mensuel_achat,
            cout_mensuel_location=loyer,
            capital_restant_du=capital_restant_du,
            valeur_bien=valeur_bien,
            capital_place=patrimoine_location,
        )
        return new_state, record

    def simulate(self, params: SimulationParams) -> SimulationResult:
        """Run the full simulation and assemble the result.

        Args:
            params: Complete simulation parameters

        Returns:
            Monthly series, totals and terminal taxation. A horizon of 0
            (or less) yields an empty series and the month-0 figures.
        """
        ctx = self.prepare(params)
        state = self.initial_state(ctx)

        log.debug(
            "simulation_started",
            horizon_ans=params.horizon_ans,
            legacy_mode=ctx.mode.legacy,
            scpi_credit_viable=ctx.mode.scpi_credit.viable,
        )

        monthly: list[MonthlyData] = []
        for month in range(1, params.total_months + 1):
            state, record = self.step(ctx, state, month)
            monthly.append(record)

        result = self._assemble(ctx, state, monthly)

        log.debug(
            "simulation_completed",
            months=len(monthly),
            point_croisement=result.point_croisement,
            ecart_final=result.ecart_final_apres_fiscalite,
        )
        return result

    def _assemble(
        self,
        ctx: RunContext,
        state: MonthlyState,
        monthly: list[MonthlyData],
    ) -> SimulationResult:
        params, plan = ctx.params, ctx.plan

        plus_value = calculate_plus_value_immobiliere(
            params.achat.prix_bien,
            state.valeur_bien,
            params.horizon_ans,
            params.achat.is_residence_principale,
            self.fiscal.plus_value,
        )
        flat_tax = calculate_flat_tax(
            ctx.apports.assurance_vie,
            state.capital_av,
            ctx.apports.per,
            state.capital_per,
            ctx.apports.scpi_cash,
            state.capital_scpi_cash,
            state.dividendes_cumules_scpi,
            params.horizon_ans,
            params.situation_foyer,
            self.fiscal.flat_tax,
        )

        patrimoine_achat = state.patrimoine_achat
        patrimoine_location = state.patrimoine_location

        return SimulationResult(
            monthly=monthly,
            cout_total_achat=state.cout_total_achat,
            cout_total_location=state.cout_total_location,
            patrimoine_net_achat=patrimoine_achat,
            patrimoine_net_location=patrimoine_location,
            frais_notaire=plan.frais_notaire,
            capital_emprunte=plan.capital_emprunte,
            mensualite_credit=plan.mensualite_credit,
            cout_mensuel_total_achat=plan.cout_mensuel_total,
            investissement_mensuel=max(0.0, plan.cout_mensuel_total - params.location.loyer_mensuel),
            taxe_fonciere_mensuel=plan.taxe_fonciere_mensuel,
            charges_copro_mensuel=plan.charges_copro_mensuel,
            assurance_pno_mensuel=plan.assurance_pno_mensuel,
            entretien_mensuel=plan.entretien_mensuel,
            assurance_emprunteur_mensuel=plan.assurance_emprunteur_mensuel,
            cout_total_credit=state.cout_total_credit,
            taxes_charges_cumulees=state.taxes_charges_cumulees,
            loyers_cumules=state.loyers_cumules,
            rendements_cumules=patrimoine_location - params.location.apport_investi - state.loyers_cumules,
            point_croisement=state.point_croisement,
            allocation_effective=ctx.strategy.allocations(),
            scpi_credit=ctx.mode.scpi_credit,
            tax_calculation=TaxCalculation(
                plus_value_immobiliere=plus_value,
                flat_tax_investissement=flat_tax,
            ),
            patrimoine_net_achat_apres_fiscalite=patrimoine_achat - plus_value.impot_total,
            patrimoine_net_location_apres_fiscalite=patrimoine_location - flat_tax.taxe_total,
        )


def run_simulation(
    params: SimulationParams,
    strategy: InvestmentStrategy = DEFAULT_STRATEGY,
    fiscal: FiscalRules = DEFAULT_FISCAL_RULES,
) -> SimulationResult:
    """Simulate one parameter set.

    This is a convenience wrapper around SimulationEngine.
    """
    return SimulationEngine(strategy=strategy, fiscal=fiscal).simulate(params)


def get_investment_strategy() -> InvestmentStrategy:
    """Static investment strategy shown alongside the results."""
    return DEFAULT_STRATEGY
