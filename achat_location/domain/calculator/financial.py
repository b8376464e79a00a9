"""Financial calculation functions.

Closed-form amortization of fixed-rate loans and its inverse.
"""

from __future__ import annotations

import numpy_financial as npf


def calculate_monthly_payment(
    principal: float,
    annual_rate_pct: float,
    duration_months: int,
) -> float:
    """Calculate monthly loan payment (principal + interest only).

    Args:
        principal: Loan amount in €
        annual_rate_pct: Annual interest rate as percentage (e.g., 3.5 for 3.5%)
        duration_months: Loan term in months

    Returns:
        Monthly payment amount in €
    """
    if principal <= 0 or duration_months <= 0:
        return 0.0

    monthly_rate = (annual_rate_pct / 100.0) / 12.0

    if monthly_rate <= 0:
        return principal / duration_months

    return float(-npf.pmt(monthly_rate, duration_months, principal))


def calculate_insurance(
    principal: float,
    annual_insurance_pct: float,
) -> float:
    """Calculate monthly insurance premium.

    Args:
        principal: Initial loan amount in €
        annual_insurance_pct: Annual insurance rate as percentage

    Returns:
        Monthly insurance amount in €
    """
    if principal <= 0:
        return 0.0
    return (principal * (annual_insurance_pct / 100.0)) / 12.0


def calculate_principal_from_payment(
    payment: float,
    annual_rate_pct: float,
    duration_months: int,
    annual_insurance_pct: float = 0.0,
) -> float:
    """Principal that a given monthly outflow can finance.

    Inverts the annuity formula, with the insurance rate added to the
    monthly interest rate.

    Args:
        payment: Available monthly payment in € (insurance included)
        annual_rate_pct: Annual interest rate %
        duration_months: Loan term in months
        annual_insurance_pct: Annual insurance rate %

    Returns:
        Financeable principal in €
    """
    if duration_months <= 0:
        return 0.0

    monthly_rate = (annual_rate_pct + annual_insurance_pct) / 100.0 / 12.0

    if monthly_rate <= 0:
        return payment * duration_months

    return float(npf.pv(monthly_rate, duration_months, -payment))


def payment_factor(
    annual_rate_pct: float,
    duration_months: int,
    annual_insurance_pct: float = 0.0,
) -> float:
    """Calculate the loan constant.

    K = (Monthly Payment + Monthly Insurance) / Principal

    Args:
        annual_rate_pct: Annual interest rate %
        duration_months: Loan duration in months
        annual_insurance_pct: Annual insurance rate %

    Returns:
        Monthly service per € of principal
    """
    r = (annual_rate_pct / 100.0) / 12.0
    n = max(1, duration_months)

    base = (1.0 / n) if r <= 0 else r / (1.0 - (1.0 + r) ** (-n))
    assur = (annual_insurance_pct / 100.0) / 12.0

    return base + assur
