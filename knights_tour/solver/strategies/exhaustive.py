"""
Brute Force Strategy - Exhaustive backtracking in fixed move order.
"""

from typing import List

from ..base import TourStrategy
from ..board import Position, knight_moves
from ..context import SearchContext
from ..factory import register_strategy
from ..result import AlgorithmResult
from ..tour import Tour


def unvisited_in_move_order(position: Position, tour: Tour,
                            board_size: int) -> List[Position]:
    """Unvisited knight moves in KNIGHT_OFFSETS order."""
    return [move for move in knight_moves(position, board_size)
            if move not in tour]


@register_strategy
class BruteForceStrategy(TourStrategy):
    """
    Plain depth-first backtracking over the full move tree.

    Tries moves in the fixed generation order and keeps the first
    complete tour it reaches. It is the only strategy that exhausts
    every possibility before reporting failure, so a failed run with no
    cancellation proves no tour exists from the start cell.

    Exponential in the worst case; only practical up to about 6x6.
    """
    name = "brute_force"
    display_name = "Brute Force"
    color = "#E57373"
    description = "Brute Force (complete) - Exhaustive backtracking in move order"

    def search(self, context: SearchContext) -> AlgorithmResult:
        _, path, explored, backtracks, cancelled = self._backtrack(
            context, unvisited_in_move_order
        )
        return self._build_result(
            context, path,
            states_explored=explored,
            backtracks=backtracks,
            was_cancelled=cancelled,
        )
