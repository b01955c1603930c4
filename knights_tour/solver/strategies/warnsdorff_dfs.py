"""
Warnsdorff DFS Strategy - Backtracking with fewest-exits-first move ordering.
"""

from typing import List

from ..base import TourStrategy
from ..board import Position, degree, knight_moves
from ..context import SearchContext
from ..factory import register_strategy
from ..result import AlgorithmResult
from ..tour import Tour


def unvisited_by_degree(position: Position, tour: Tour,
                        board_size: int) -> List[Position]:
    """
    Unvisited knight moves sorted by Warnsdorff degree.

    sorted() is stable, so equal-degree moves keep KNIGHT_OFFSETS order.
    """
    candidates = [move for move in knight_moves(position, board_size)
                  if move not in tour]
    return sorted(candidates, key=lambda move: degree(move, board_size, tour))


@register_strategy
class WarnsdorffDFSStrategy(TourStrategy):
    """
    Backtracking search that tries low-degree cells first.

    Same skeleton as brute force, but candidates are ordered by how
    many unvisited exits they leave. The ordering finds a tour with
    almost no backtracking on most boards, and since dead ends are
    still undone the search stays complete.
    """
    name = "warnsdorff_dfs"
    display_name = "Warnsdorff DFS"
    color = "#9575CD"
    description = "Warnsdorff DFS (fast, complete) - Backtracking, fewest exits first"

    def search(self, context: SearchContext) -> AlgorithmResult:
        _, path, explored, backtracks, cancelled = self._backtrack(
            context, unvisited_by_degree
        )
        return self._build_result(
            context, path,
            states_explored=explored,
            backtracks=backtracks,
            was_cancelled=cancelled,
        )
