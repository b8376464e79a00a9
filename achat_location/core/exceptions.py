"""Custom exceptions for achat_location.

Domain-specific exception types for better error handling and debugging.
"""

from __future__ import annotations

from typing import Any


class AchatLocationError(Exception):
    """Base exception for all achat_location errors."""
    pass


# --- Calculation Errors ---

class SimulationError(AchatLocationError):
    """Error during the month-by-month simulation."""
    pass


class AllocationError(AchatLocationError):
    """Error in the split of invested capital across envelopes."""
    pass


class ScpiCreditNotViableError(AllocationError):
    """SCPI dividends reach or exceed the credit payment factor.

    The effort equation has no bounded solution in that case, so the
    financed position cannot be sized from a net monthly effort.
    """

    def __init__(self, payment_factor: float, dividend_rate: float):
        self.payment_factor = payment_factor
        self.dividend_rate = dividend_rate
        super().__init__(
            f"SCPI dividends ({dividend_rate:.6f}/month) >= credit payment factor "
            f"({payment_factor:.6f}/month)"
        )


class InvalidParameterError(AchatLocationError):
    """Invalid parameter value provided."""

    def __init__(self, param_name: str, value: Any, reason: str = ""):
        self.param_name = param_name
        self.value = value
        self.reason = reason
        msg = f"Invalid parameter '{param_name}': {value}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)


# --- Sharing ---

class ShareLinkError(InvalidParameterError):
    """A shared query string carries a value that cannot be decoded."""
    pass
