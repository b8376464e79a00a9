"""Investment strategy models.

The rental scenario invests every monthly surplus across four envelopes:
assurance-vie, PER, SCPI bought cash, and SCPI financed by a dedicated
credit. The strategy is read-only configuration injected into the engine.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

ALLOCATION_TOLERANCE = 1e-6

# Share of the SCPI credit envelope yield counted while the loan runs (display only)
FACTEUR_RENDEMENT_PENDANT_CREDIT = 0.7


class SimpleEnvelope(BaseModel):
    """Envelope compounding at a single net yield (assurance-vie, PER)."""

    allocation: float = Field(..., ge=0, le=100, description="Share of invested flows %")
    rendement: float = Field(..., description="Net annual yield %")

    model_config = {"frozen": True}


class ScpiCashEnvelope(BaseModel):
    """SCPI bought cash: dividends plus share revaluation."""

    allocation: float = Field(..., ge=0, le=100, description="Share of invested flows %")
    rendement_dividendes: float = Field(..., description="Annual dividend yield %")
    rendement_revalo: float = Field(..., description="Annual share price revaluation %")

    model_config = {"frozen": True}

    @property
    def rendement_total(self) -> float:
        return self.rendement_dividendes + self.rendement_revalo


class ScpiCreditEnvelope(ScpiCashEnvelope):
    """SCPI financed by its own amortizing loan."""

    taux_credit: float = Field(..., ge=0, description="Annual loan rate %")
    duree_credit_ans: int | None = Field(
        default=None, ge=1, description="Loan term in years, None = simulation horizon"
    )

    def loan_years(self, horizon_ans: int) -> int:
        """Loan term actually used for a run of ``horizon_ans`` years."""
        return self.duree_credit_ans if self.duree_credit_ans is not None else horizon_ans


class InvestmentStrategy(BaseModel):
    """Allocation of invested flows across the four envelopes."""

    assurance_vie: SimpleEnvelope
    per: SimpleEnvelope
    scpi_cash: ScpiCashEnvelope
    scpi_credit: ScpiCreditEnvelope

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_allocations(self) -> InvestmentStrategy:
        total = sum(self.allocations().values())
        if abs(total - 100.0) > ALLOCATION_TOLERANCE:
            raise ValueError(f"Envelope allocations must sum to 100, got {total}")
        if self.autres_allocation <= 0:
            raise ValueError("At least one non-leveraged envelope needs a positive allocation")
        return self

    def allocations(self) -> dict[str, float]:
        """Allocation percentages keyed by envelope name."""
        return {
            "assurance_vie": self.assurance_vie.allocation,
            "per": self.per.allocation,
            "scpi_cash": self.scpi_cash.allocation,
            "scpi_credit": self.scpi_credit.allocation,
        }

    @property
    def autres_allocation(self) -> float:
        """Sum of the three non-leveraged allocations."""
        return self.assurance_vie.allocation + self.per.allocation + self.scpi_cash.allocation

    def redistributed(self) -> InvestmentStrategy:
        """Move the SCPI credit share proportionally onto the other envelopes.

        Each remaining allocation is scaled by
        ``(sum_remaining + scpi_credit) / sum_remaining`` so the total stays 100.
        """
        autres = self.autres_allocation
        facteur = (autres + self.scpi_credit.allocation) / autres
        return self.model_copy(
            update={
                "assurance_vie": self.assurance_vie.model_copy(
                    update={"allocation": self.assurance_vie.allocation * facteur}
                ),
                "per": self.per.model_copy(update={"allocation": self.per.allocation * facteur}),
                "scpi_cash": self.scpi_cash.model_copy(
                    update={"allocation": self.scpi_cash.allocation * facteur}
                ),
                "scpi_credit": self.scpi_credit.model_copy(update={"allocation": 0.0}),
            }
        )

    def blended_yield(self) -> float:
        """Weighted average annual yield %, for display.

        Ignores the SCPI credit phases: its full yield is damped by a fixed
        factor standing for the in-credit period.
        """
        rendement_av = self.assurance_vie.allocation / 100.0 * self.assurance_vie.rendement
        rendement_per = self.per.allocation / 100.0 * self.per.rendement
        rendement_cash = self.scpi_cash.allocation / 100.0 * self.scpi_cash.rendement_total
        rendement_credit = (
            self.scpi_credit.allocation / 100.0
            * self.scpi_credit.rendement_total
            * FACTEUR_RENDEMENT_PENDANT_CREDIT
        )
        return rendement_av + rendement_per + rendement_cash + rendement_credit


DEFAULT_STRATEGY = InvestmentStrategy(
    assurance_vie=SimpleEnvelope(allocation=30.0, rendement=4.0),
    per=SimpleEnvelope(allocation=20.0, rendement=4.0),
    scpi_cash=ScpiCashEnvelope(allocation=25.0, rendement_dividendes=5.5, rendement_revalo=1.0),
    scpi_credit=ScpiCreditEnvelope(
        allocation=25.0, rendement_dividendes=5.5, rendement_revalo=1.0, taux_credit=5.35
    ),
)


class ScpiCreditDetails(BaseModel):
    """Sizing of the financed SCPI position, or the "not viable" marker."""

    montant_emprunte: float = Field(default=0.0, description="Borrowed principal in €")
    mensualite_credit: float = Field(default=0.0, description="Monthly payment incl. insurance in €")
    effort_net: float = Field(default=0.0, description="Payment minus dividends in €/month (may be < 0)")
    nb_parts_achetees: float = Field(default=0.0, description="Number of SCPI shares bought")
    dividendes_mensuels: float = Field(default=0.0, description="Monthly dividends in €")
    fin_credit_mois: int = Field(default=0, description="Last month of the SCPI loan")
    viable: bool = Field(default=True, description="False when no leveraged position is possible")

    model_config = {"frozen": True}

    @classmethod
    def non_viable(cls) -> ScpiCreditDetails:
        return cls(viable=False)
