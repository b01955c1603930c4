"""
Warnsdorff Strategy - Greedy fewest-exits-first walk without backtracking.
"""

import logging
import random
from typing import Optional

from ..base import TourStrategy
from ..board import degree, knight_moves
from ..context import SearchContext
from ..factory import register_strategy
from ..result import AlgorithmResult
from ..tour import Tour

logger = logging.getLogger(__name__)


@register_strategy
class WarnsdorffStrategy(TourStrategy):
    """
    Greedy Warnsdorff walk: always step to the unvisited cell with fewest exits.

    Every choice is final, so the walk can get stuck before covering the
    board; success is only reported for a complete tour. This is the
    fast, usually-right counterpart of warnsdorff_dfs.

    Ties go to the earliest move in KNIGHT_OFFSETS order unless
    randomize_ties is set, in which case the random source picks among
    the tied cells.
    """
    name = "warnsdorff"
    display_name = "Warnsdorff"
    color = "#FFB74D"
    description = "Warnsdorff (instant) - Greedy fewest exits first, no backtracking"

    def __init__(self, randomize_ties: bool = False, seed: Optional[int] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize greedy Warnsdorff strategy.

        Args:
            randomize_ties: Break equal-degree ties at random
            seed: Seed for the strategy-local random source
            rng: Explicit random source (overrides seed)
        """
        self.randomize_ties = randomize_ties
        self.rng = rng if rng is not None else random.Random(seed)

    def search(self, context: SearchContext) -> AlgorithmResult:
        n = context.board_size
        total = context.total_cells
        tour = Tour(context.start)
        current = context.start
        explored = 1
        cancelled = False

        while len(tour) < total:
            if self._check_cancelled(context):
                cancelled = True
                break

            candidates = [move for move in knight_moves(current, n) if move not in tour]
            if not candidates:
                logger.debug(f"[{self.display_name}] Stuck at {current} after {len(tour)} cells")
                break

            ranked = [(degree(move, n, tour), move) for move in candidates]
            lowest = min(rank for rank, _ in ranked)
            tied = [move for rank, move in ranked if rank == lowest]

            if self.randomize_ties and len(tied) > 1:
                current = self.rng.choice(tied)
            else:
                current = tied[0]

            tour.push(current)
            explored += len(candidates)
            context.report_progress(len(tour) / total, f"{len(tour)} cells")

        return self._build_result(
            context, tour.snapshot(),
            states_explored=explored,
            was_cancelled=cancelled,
        )
