"""Data models for achat_location."""

from .fiscal import DEFAULT_FISCAL_RULES, FiscalRules, FlatTaxRules, PlusValueRules
from .params import AchatParams, LocationParams, SimulationParams
from .results import (
    FlatTaxInvestissement,
    MonthlyData,
    PlusValueImmobiliere,
    SimulationResult,
    TaxCalculation,
)
from .strategy import (
    DEFAULT_STRATEGY,
    InvestmentStrategy,
    ScpiCashEnvelope,
    ScpiCreditDetails,
    ScpiCreditEnvelope,
    SimpleEnvelope,
)

__all__ = [
    "AchatParams",
    "LocationParams",
    "SimulationParams",
    "InvestmentStrategy",
    "SimpleEnvelope",
    "ScpiCashEnvelope",
    "ScpiCreditEnvelope",
    "ScpiCreditDetails",
    "DEFAULT_STRATEGY",
    "FiscalRules",
    "PlusValueRules",
    "FlatTaxRules",
    "DEFAULT_FISCAL_RULES",
    "MonthlyData",
    "PlusValueImmobiliere",
    "FlatTaxInvestissement",
    "TaxCalculation",
    "SimulationResult",
]
