"""Pure calculators: amortization, debt capacity, allocation and taxation."""

from .allocation import (
    EnvelopeAmounts,
    InvestmentMode,
    freed_cash_shares,
    resolve_allocation,
    resolve_investment_mode,
    split_amount,
)
from .debt import (
    calculate_debt_based_scpi_credit,
    calculate_debt_capacity,
    get_scpi_credit_details,
    solve_scpi_credit_from_effort,
)
from .financial import (
    calculate_insurance,
    calculate_monthly_payment,
    calculate_principal_from_payment,
    payment_factor,
)
from .taxation import (
    abattement_ir,
    abattement_ps,
    calculate_flat_tax,
    calculate_plus_value_immobiliere,
)

__all__ = [
    "calculate_monthly_payment",
    "calculate_insurance",
    "calculate_principal_from_payment",
    "payment_factor",
    "calculate_debt_capacity",
    "calculate_debt_based_scpi_credit",
    "solve_scpi_credit_from_effort",
    "get_scpi_credit_details",
    "EnvelopeAmounts",
    "InvestmentMode",
    "resolve_allocation",
    "resolve_investment_mode",
    "split_amount",
    "freed_cash_shares",
    "abattement_ir",
    "abattement_ps",
    "calculate_plus_value_immobiliere",
    "calculate_flat_tax",
]
