"""
achat_location - Simulateur Achat vs Location

Month-by-month comparison of buying a home with a mortgage against renting
and investing the difference across a blended set of envelopes.

Modules:
    - core: Logging, exceptions, settings and constants
    - domain.models: Pydantic models for parameters, strategy, taxes and results
    - domain.calculator: Amortization, debt capacity, allocation and taxation
    - application.services: Simulation engine, share links and batch runs
"""

__version__ = "1.4.0"

from achat_location.application.services.simulation import (
    SimulationEngine,
    get_investment_strategy,
    run_simulation,
)
from achat_location.domain.calculator.debt import get_scpi_credit_details
from achat_location.domain.models import SimulationParams, SimulationResult

__all__ = [
    "SimulationEngine",
    "SimulationParams",
    "SimulationResult",
    "get_investment_strategy",
    "get_scpi_credit_details",
    "run_simulation",
]
