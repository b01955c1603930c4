"""
Frontier Search Strategy - Best-first search ordered by Warnsdorff degree.

Shown as "A* Search" for comparison with the other strategies, but the
degree heuristic is not an admissible cost estimate: this is a greedy
best-first search with a completion bias, not a shortest-path search.

Scalability: every frontier entry holds a full path snapshot, and up to
seven children are queued per pop, so memory grows quickly with N. The
max_expansions cap bounds a run; pass None to search until the frontier
empties.
"""

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..base import CANCEL_CHECK_INTERVAL, TourStrategy
from ..board import Position, degree, knight_moves
from ..context import SearchContext
from ..factory import register_strategy
from ..result import AlgorithmResult
from ..tour import Tour, path_from_positions

logger = logging.getLogger(__name__)


@dataclass(order=True)
class FrontierNode:
    """
    Entry in the best-first frontier.

    Ordered by (priority, sequence): lowest degree first, ties in
    insertion order.

    Attributes:
        priority: Warnsdorff degree of the last cell
        sequence: Insertion counter for stable tie-breaking
        path: Cells visited so far (snapshot, never mutated)
    """
    priority: int
    sequence: int
    path: Tuple[Position, ...] = field(compare=False)

    @property
    def depth(self) -> int:
        """Number of cells on the path."""
        return len(self.path)


@register_strategy
class FrontierSearchStrategy(TourStrategy):
    """
    Best-first search over partial tours keyed by onward-move count.

    Algorithm:
        1. Queue the start path with priority 0
        2. Pop the lowest-priority path; done if it covers the board
        3. Queue every unvisited knight move from its last cell, keyed by
           the move's degree once it has been visited
        4. Remember the longest path popped as the fallback result
    """
    name = "frontier"
    display_name = "A* Search"
    color = "#6D28D9"
    description = "Frontier Search (best-first) - Lowest onward degree expanded first"

    def __init__(self, max_expansions: Optional[int] = 50_000):
        """
        Initialize frontier search strategy.

        Args:
            max_expansions: Pops allowed before giving up (None = unbounded)
        """
        self.max_expansions = max_expansions

    def search(self, context: SearchContext) -> AlgorithmResult:
        n = context.board_size
        total = context.total_cells
        sequence = itertools.count()

        frontier: List[FrontierNode] = [
            FrontierNode(priority=0, sequence=next(sequence), path=(context.start,))
        ]
        best: Tuple[Position, ...] = (context.start,)
        pops = 0
        peak_frontier = 1
        cancelled = False

        while frontier:
            if self.max_expansions is not None and pops >= self.max_expansions:
                logger.warning(
                    f"[{self.display_name}] Expansion cap {self.max_expansions} reached "
                    f"with {len(frontier)} queued paths"
                )
                break
            if pops and pops % CANCEL_CHECK_INTERVAL == 0:
                if self._check_cancelled(context):
                    cancelled = True
                    break
                context.report_progress(len(best) / total, f"{pops} paths expanded")

            node = heapq.heappop(frontier)
            pops += 1

            if node.depth > len(best):
                best = node.path
            if node.depth == total:
                break

            tour = Tour.from_positions(node.path)
            for move in knight_moves(tour.last, n):
                if move in tour:
                    continue
                # A cell is never its own knight neighbor, so the degree
                # against the parent's visited set equals the child's.
                heapq.heappush(frontier, FrontierNode(
                    priority=degree(move, n, tour),
                    sequence=next(sequence),
                    path=node.path + (move,),
                ))
            peak_frontier = max(peak_frontier, len(frontier))

        logger.debug(
            f"[{self.display_name}] {pops} pops, peak frontier {peak_frontier}, "
            f"best {len(best)}/{total}"
        )

        return self._build_result(
            context, path_from_positions(best),
            states_explored=pops,
            was_cancelled=cancelled,
        )
