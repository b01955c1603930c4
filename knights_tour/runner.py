"""
Comparison Runner Module for Knight's Tour Solver

Runs a set of strategies against the same start cell and board size and
collects their results for display. Strategies share no mutable state,
so they may run on separate worker threads; each randomized strategy
gets its own random source derived from the run seed.
"""

import logging
import random
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Sequence

from knights_tour.solver import (
    AlgorithmResult,
    AnnealingSchedule,
    Position,
    create_strategy,
    format_execution_time,
    get_strategy_names,
    validate_board_input,
)

logger = logging.getLogger(__name__)

# Strategies whose constructor takes an rng
RANDOMIZED_STRATEGIES = ("warnsdorff", "simulated_annealing")


def strategy_rng(seed: Optional[int], name: str) -> random.Random:
    """
    Build the random source for one strategy.

    The same (seed, name) pair always yields the same sequence, whatever
    order or thread the strategies run in.

    Args:
        seed: Run seed (None = nondeterministic)
        name: Strategy name

    Returns:
        Strategy-local random generator
    """
    if seed is None:
        return random.Random()
    return random.Random(f"{seed}:{name}")


def strategy_options_from_settings(settings: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """
    Map settings keys onto strategy constructor arguments.

    Args:
        settings: Settings dictionary (see settings.DEFAULT_SETTINGS)

    Returns:
        Dict of strategy name -> constructor kwargs
    """
    options: Dict[str, Dict[str, Any]] = {}
    if settings.get("annealing"):
        options["simulated_annealing"] = {
            "schedule": AnnealingSchedule.from_settings(settings["annealing"])
        }
    if "frontier_max_expansions" in settings:
        options["frontier"] = {"max_expansions": settings["frontier_max_expansions"]}
    return options


def run_comparison(
    start: Position,
    board_size: int,
    strategy_names: Optional[Sequence[str]] = None,
    *,
    parallel: bool = False,
    max_workers: Optional[int] = None,
    timeout_sec: Optional[float] = None,
    seed: Optional[int] = None,
    strategy_options: Optional[Dict[str, Dict[str, Any]]] = None,
    cancel_flag: Optional[threading.Event] = None,
) -> List[AlgorithmResult]:
    """
    Run several strategies on the same input.

    Args:
        start: Start position
        board_size: Board dimension N
        strategy_names: Strategies to run (default: all, in registry order)
        parallel: Run each strategy on its own worker thread
        max_workers: Thread pool size when parallel (default: one per strategy)
        timeout_sec: Per-strategy time budget
        seed: Run seed for randomized strategies
        strategy_options: Extra constructor kwargs per strategy name
        cancel_flag: Event that stops every running strategy when set

    Returns:
        Results in the same order as strategy_names

    Raises:
        InvalidBoardError: If board size or start position is malformed
        ValueError: If a strategy name is unknown
    """
    validate_board_input(start, board_size)
    names = list(strategy_names) if strategy_names else get_strategy_names()
    options = strategy_options or {}
    cancel_flag = cancel_flag or threading.Event()

    # Build every strategy up front so unknown names fail before any search
    strategies = []
    for name in names:
        kwargs = dict(options.get(name, {}))
        if name in RANDOMIZED_STRATEGIES and "rng" not in kwargs:
            kwargs["rng"] = strategy_rng(seed, name)
        strategies.append(create_strategy(name, **kwargs))

    logger.info(
        f"Running {len(strategies)} strategies on {board_size}x{board_size} "
        f"from {start} ({'parallel' if parallel else 'sequential'})"
    )

    def run_one(strategy) -> AlgorithmResult:
        return strategy.solve(
            start, board_size,
            cancel_flag=cancel_flag,
            timeout_sec=timeout_sec,
        )

    if not parallel:
        results = [run_one(strategy) for strategy in strategies]
    else:
        workers = max_workers or max(1, len(strategies))
        with ThreadPoolExecutor(max_workers=workers,
                                thread_name_prefix="tour-solver") as pool:
            futures = [pool.submit(run_one, strategy) for strategy in strategies]
            results = [future.result() for future in futures]

    for result in results:
        logger.info(
            f"  {result.name}: {'success' if result.success else 'failed'}, "
            f"{result.steps_taken} steps, {format_execution_time(result.execution_time_ms)}"
        )
    return results


def summarize(results: Sequence[AlgorithmResult], board_size: int) -> List[Dict[str, Any]]:
    """
    Build display rows for a set of results.

    Args:
        results: Results from run_comparison
        board_size: Board dimension N

    Returns:
        One dict per result with name, success, steps, coverage and time text
    """
    return [
        {
            "name": result.name,
            "success": result.success,
            "steps": result.steps_taken,
            "total": board_size * board_size,
            "coverage": result.coverage(board_size),
            "time": format_execution_time(result.execution_time_ms),
            "cancelled": result.was_cancelled,
        }
        for result in results
    ]


def max_steps(results: Sequence[AlgorithmResult]) -> int:
    """Longest path across results (length of a synchronized playback)."""
    return max((result.steps_taken for result in results), default=0)
