"""
Divide and Conquer Strategy - Grid-based backtracking for power-of-two boards.

Despite the name there is no board splitting: the search is the same
single-region backtracking as brute force, run over an integer grid of
visit indices. The label refers to the board-size restriction only.
"""

import logging
from typing import Tuple

import numpy as np

from ..base import CANCEL_CHECK_INTERVAL, TourStrategy
from ..board import is_power_of_two
from ..context import SearchContext
from ..factory import register_strategy
from ..result import AlgorithmResult
from ..tour import Path, Step

logger = logging.getLogger(__name__)

UNVISITED = -1

# (d_row, d_col) pairs tried in this order at every cell
MOVE_TABLE: Tuple[Tuple[int, int], ...] = (
    (2, 1),
    (1, 2),
    (-1, 2),
    (-2, 1),
    (-2, -1),
    (-1, -2),
    (1, -2),
    (2, -1),
)


def grid_to_path(grid: np.ndarray) -> Path:
    """
    Rebuild the visiting order from a grid of visit indices.

    Args:
        grid: N x N array, each cell the 0-based step it was visited at or -1

    Returns:
        Path ordered by increasing visit index
    """
    cells = np.argwhere(grid != UNVISITED)
    indices = grid[cells[:, 0], cells[:, 1]]
    ordered = cells[np.argsort(indices, kind="stable")]
    return tuple(
        Step(row=int(r), col=int(c), step_number=i + 1)
        for i, (r, c) in enumerate(ordered)
    )


@register_strategy
class DivideAndConquerStrategy(TourStrategy):
    """
    Backtracking over a visit-index grid, restricted to N = 4, 8, 16, ...

    For any other N the strategy returns at once with an unsuccessful
    one-step result and does no search. On power-of-two boards it marks
    each cell with the index it was reached at, tries MOVE_TABLE in
    order, resets cells to -1 on backtrack, and reads the path back off
    the grid when done.
    """
    name = "divide_and_conquer"
    display_name = "Divide and Conquer"
    color = "#64B5F6"
    description = "Divide and Conquer (power-of-two N) - Grid backtracking"

    def search(self, context: SearchContext) -> AlgorithmResult:
        n = context.board_size
        start = context.start

        if n < 4 or not is_power_of_two(n):
            logger.info(
                f"[{self.display_name}] Board size {n} is not a power of two >= 4, skipping"
            )
            return self._build_result(
                context, (Step.at(start, 1),), precondition_met=False
            )

        grid = np.full((n, n), UNVISITED, dtype=np.int32)
        grid[start.row, start.col] = 0

        explored, backtracks, cancelled = self._fill_grid(grid, start.row, start.col, context)

        return self._build_result(
            context, grid_to_path(grid),
            states_explored=explored,
            backtracks=backtracks,
            was_cancelled=cancelled,
        )

    def _fill_grid(
        self,
        grid: np.ndarray,
        row: int,
        col: int,
        context: SearchContext,
    ) -> Tuple[int, int, bool]:
        """
        Extend the knight's walk on the grid until every cell is numbered.

        next_choice[d] is the next MOVE_TABLE index to try from the cell
        reached at step d; history holds the cells before the current one.
        On failure the grid is left holding only the start cell.

        Returns:
            Tuple of (states_explored, backtracks, was_cancelled)
        """
        n = context.board_size
        last_index = n * n - 1
        move_count = 0
        next_choice = [0]
        history = []
        explored = 1
        backtracks = 0
        iterations = 0

        while move_count < last_index:
            iterations += 1
            if iterations % CANCEL_CHECK_INTERVAL == 0 and self._check_cancelled(context):
                logger.info(f"[{self.display_name}] Cancelled at depth {move_count + 1}")
                return explored, backtracks, True

            choice = next_choice[-1]
            if choice == len(MOVE_TABLE):
                if move_count == 0:
                    break
                grid[row, col] = UNVISITED
                next_choice.pop()
                row, col = history.pop()
                move_count -= 1
                backtracks += 1
                continue

            next_choice[-1] = choice + 1
            d_row, d_col = MOVE_TABLE[choice]
            next_row = row + d_row
            next_col = col + d_col
            if 0 <= next_row < n and 0 <= next_col < n and grid[next_row, next_col] == UNVISITED:
                history.append((row, col))
                row, col = next_row, next_col
                move_count += 1
                grid[row, col] = move_count
                next_choice.append(0)
                explored += 1

        return explored, backtracks, False
