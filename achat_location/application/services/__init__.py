"""Application services."""

from .batch import run_batch
from .share_link import decode_params, encode_params
from .simulation import SimulationEngine, get_investment_strategy, run_simulation

__all__ = [
    "SimulationEngine",
    "run_simulation",
    "get_investment_strategy",
    "run_batch",
    "encode_params",
    "decode_params",
]
