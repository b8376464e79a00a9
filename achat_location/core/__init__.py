"""Core infrastructure: logging, settings, constants and exceptions."""

from .exceptions import (
    AchatLocationError,
    AllocationError,
    InvalidParameterError,
    ScpiCreditNotViableError,
    ShareLinkError,
    SimulationError,
)
from .logging import configure_logging, get_logger
from .settings import AppSettings, get_settings

__all__ = [
    "configure_logging",
    "get_logger",
    "AppSettings",
    "get_settings",
    # Exceptions
    "AchatLocationError",
    "AllocationError",
    "InvalidParameterError",
    "ScpiCreditNotViableError",
    "ShareLinkError",
    "SimulationError",
]
