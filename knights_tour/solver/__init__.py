"""
Solver Package - Knight's tour search strategies behind one interface.

Six strategies share the board model and return the same result record,
so callers can run any subset and compare completeness and timing.

Public API:
    - Position, Step, Tour: Board cell, numbered tour step, tour builder
    - knight_moves(), degree(): Move generation and Warnsdorff degree
    - validate_tour(): Correctness oracle for any path
    - AlgorithmResult, SearchMetrics: Result of a strategy run
    - SearchContext: Per-run inputs, cancellation and progress
    - TourStrategy: Abstract base for strategies
    - create_strategy(): Factory function
    - get_strategy_names(): List available strategies
    - solve(): Create a strategy by name and run it once

Usage:
    from knights_tour.solver import Position, create_strategy

    strategy = create_strategy("warnsdorff_dfs")
    result = strategy.solve(Position(2, 2), 5)

    if result.success:
        for step in result.path:
            print(step.step_number, step.row, step.col)
"""

from typing import Any

# Core data structures
from .board import (
    KNIGHT_OFFSETS,
    InvalidBoardError,
    Position,
    TourInputError,
    board_center,
    degree,
    is_knight_move,
    is_power_of_two,
    is_valid_position,
    knight_moves,
    position_key,
    same_position,
    validate_board_input,
)
from .tour import Path, Step, Tour, path_from_positions, path_positions, renumber
from .validation import TourValidation, is_valid_tour, validate_tour
from .result import AlgorithmResult, SearchMetrics, format_execution_time
from .context import SearchContext

# Strategy framework
from .base import TourStrategy
from .factory import (
    create_strategy,
    get_default_strategy_name,
    get_strategy_info,
    get_strategy_names,
    register_strategy,
)

# Import strategies to register them
from . import strategies
from .strategies import AnnealingSchedule, InvalidScheduleError, TourScoring


def solve(name: str, start: Position, board_size: int, **kwargs: Any) -> AlgorithmResult:
    """
    Create a strategy by name and run it once.

    Args:
        name: Registered strategy name
        start: Start position
        board_size: Board dimension N
        **kwargs: Strategy constructor arguments

    Returns:
        AlgorithmResult for the run
    """
    return create_strategy(name, **kwargs).solve(start, board_size)


__all__ = [
    # Board model
    "KNIGHT_OFFSETS",
    "Position",
    "knight_moves",
    "degree",
    "is_knight_move",
    "is_valid_position",
    "is_power_of_two",
    "position_key",
    "same_position",
    "board_center",
    "validate_board_input",
    # Errors
    "TourInputError",
    "InvalidBoardError",
    "InvalidScheduleError",
    # Tours
    "Path",
    "Step",
    "Tour",
    "path_from_positions",
    "path_positions",
    "renumber",
    "TourValidation",
    "validate_tour",
    "is_valid_tour",
    # Results
    "AlgorithmResult",
    "SearchMetrics",
    "format_execution_time",
    "SearchContext",
    # Strategy framework
    "TourStrategy",
    "AnnealingSchedule",
    "TourScoring",
    "create_strategy",
    "get_strategy_names",
    "get_strategy_info",
    "get_default_strategy_name",
    "register_strategy",
    "solve",
]
