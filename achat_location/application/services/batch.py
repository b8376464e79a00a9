"""
Parallel evaluation of independent parameter sets.

Each run builds its own state from an immutable parameter set, so runs can
be fanned out over a thread pool without any locking.
"""
from __future__ import annotations

import concurrent.futures
from collections.abc import Sequence

from achat_location.application.services.simulation import SimulationEngine
from achat_location.core.exceptions import SimulationError
from achat_location.core.logging import get_logger
from achat_location.core.settings import get_settings
from achat_location.domain.models.fiscal import DEFAULT_FISCAL_RULES, FiscalRules
from achat_location.domain.models.params import SimulationParams
from achat_location.domain.models.results import SimulationResult
from achat_location.domain.models.strategy import DEFAULT_STRATEGY, InvestmentStrategy

log = get_logger(__name__)


def run_batch(
    params_list: Sequence[SimulationParams],
    max_workers: int | None = None,
    strategy: InvestmentStrategy = DEFAULT_STRATEGY,
    fiscal: FiscalRules = DEFAULT_FISCAL_RULES,
) -> list[SimulationResult]:
    """Simulate several parameter sets concurrently.

    Args:
        params_list: Parameter sets, one run each
        max_workers: Thread count, defaults to the ``batch_max_workers`` setting
        strategy: Investment strategy shared by all runs
        fiscal: Tax rules shared by all runs

    Returns:
        Results in the order of ``params_list``

    Raises:
        SimulationError: if a run fails, with the index of the failing set
    """
    if not params_list:
        return []

    engine = SimulationEngine(strategy=strategy, fiscal=fiscal)
    n_workers = max_workers or get_settings().batch_max_workers
    n_workers = min(n_workers, len(params_list))

    log.info("batch_started", runs=len(params_list), workers=n_workers)

    results: list[SimulationResult | None] = [None] * len(params_list)
    with concurrent.futures.ThreadPoolExecutor(max_workers=n_workers) as executor:
        future_to_index = {
            executor.submit(engine.simulate, params): i
            for i, params in enumerate(params_list)
        }
        for future in concurrent.futures.as_completed(future_to_index):
            i = future_to_index[future]
            try:
                results[i] = future.result()
            except Exception as e:
                log.error("batch_run_failed", index=i, error=str(e))
                raise SimulationError(f"Run {i} failed: {e}") from e

    log.info("batch_completed", runs=len(results))
    return results
