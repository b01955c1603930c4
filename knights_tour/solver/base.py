"""
Base Strategy Module - Abstract base class for tour search strategies.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple

from .board import Position
from .context import SearchContext
from .result import AlgorithmResult, SearchMetrics
from .tour import Path, Tour
from .validation import validate_tour

logger = logging.getLogger(__name__)

# How many search states to expand between cancellation checks
CANCEL_CHECK_INTERVAL = 1024

# Orders the candidate moves out of a cell given the tour so far
MoveOrdering = Callable[[Position, Tour, int], List[Position]]


class TourStrategy(ABC):
    """
    Abstract base class for all knight's tour strategies.

    Subclasses must implement search() and define the name,
    display_name, color and description class attributes.

    Attributes:
        name: Registry key for the strategy
        display_name: Label used in result records
        color: Presentation hint passed through to results
        description: Human-readable description
    """
    name: str = "base"
    display_name: str = "Base"
    color: str = "#9E9E9E"
    description: str = "Base strategy"

    def solve(
        self,
        start: Position,
        board_size: int,
        *,
        cancel_flag: Optional[threading.Event] = None,
        timeout_sec: Optional[float] = None,
        progress_callback: Optional[Callable[[float, str], None]] = None,
    ) -> AlgorithmResult:
        """
        Search for a tour from start on an N x N board.

        Args:
            start: Start position (must lie on the board)
            board_size: Board dimension N
            cancel_flag: Optional event that stops the search when set
            timeout_sec: Optional time budget in seconds
            progress_callback: Optional (percent, message) callback

        Returns:
            AlgorithmResult for this run

        Raises:
            InvalidBoardError: If board size or start position is malformed
        """
        context = SearchContext(
            start=start,
            board_size=board_size,
            cancel_flag=cancel_flag or threading.Event(),
            timeout_sec=timeout_sec,
            progress_callback=progress_callback,
        )
        logger.debug(
            f"[{self.display_name}] Starting on {board_size}x{board_size} from {start}"
        )
        return self.search(context)

    @abstractmethod
    def search(self, context: SearchContext) -> AlgorithmResult:
        """
        Run the strategy for an already validated context.

        Must periodically check context.is_cancelled() and return
        the best partial path if True.

        Args:
            context: Search context with start, size and cancellation

        Returns:
            AlgorithmResult with path and metrics
        """
        pass

    def _check_cancelled(self, context: SearchContext) -> bool:
        """Convenience method to check cancellation."""
        return context.is_cancelled()

    def _backtrack(
        self,
        context: SearchContext,
        order_moves: MoveOrdering,
    ) -> Tuple[bool, Path, int, int, bool]:
        """
        Depth-first search with backtracking over knight moves.

        Uses an explicit stack of candidate iterators (one per cell on
        the tour), so depth is limited only by memory. The tour and the
        stack are pushed and popped together.

        Args:
            context: Search context
            order_moves: Returns candidate moves out of a cell, in try order

        Returns:
            Tuple of (found, path, states_explored, backtracks, was_cancelled).
            When no tour is found, path is the deepest one reached.
        """
        board_size = context.board_size
        total = context.total_cells
        tour = Tour(context.start)
        best = tour.snapshot()

        if len(tour) == total:
            return True, best, 1, 0, False

        stack = [iter(order_moves(context.start, tour, board_size))]
        states_explored = 1
        backtracks = 0
        iterations = 0

        while stack:
            iterations += 1
            if iterations % CANCEL_CHECK_INTERVAL == 0:
                if self._check_cancelled(context):
                    logger.info(
                        f"[{self.display_name}] Cancelled after {states_explored} states"
                    )
                    return False, best, states_explored, backtracks, True
                context.report_progress(len(best) / total, f"depth {len(tour)}")

            move = next(stack[-1], None)
            if move is None:
                stack.pop()
                if stack:
                    tour.pop()
                    backtracks += 1
                continue

            if move in tour:
                continue

            tour.push(move)
            states_explored += 1

            if len(tour) == total:
                return True, tour.snapshot(), states_explored, backtracks, False
            if len(tour) > len(best):
                best = tour.snapshot()

            stack.append(iter(order_moves(move, tour, board_size)))

        return False, best, states_explored, backtracks, False

    def _build_result(
        self,
        context: SearchContext,
        path: Path,
        states_explored: int = 0,
        backtracks: int = 0,
        was_cancelled: bool = False,
        precondition_met: bool = True,
    ) -> AlgorithmResult:
        """
        Build an AlgorithmResult, using the validator as the success oracle.

        A strategy that refused to search passes precondition_met=False,
        which keeps the result unsuccessful whatever the path looks like.
        """
        elapsed_ms = context.elapsed_ms()
        validation = validate_tour(path, context.board_size)
        success = precondition_met and validation.is_valid

        logger.info(
            f"[{self.display_name}] {'Tour found' if success else 'No tour'}: "
            f"{len(path)}/{context.total_cells} cells, "
            f"{states_explored} states, {elapsed_ms:.1f}ms"
        )
        if not validation.is_valid:
            logger.debug(f"[{self.display_name}] Validation issues: {validation.issues[:3]}")

        return AlgorithmResult(
            name=self.display_name,
            path=path,
            execution_time_ms=elapsed_ms,
            success=success,
            color=self.color,
            was_cancelled=was_cancelled,
            metrics=SearchMetrics(
                states_explored=states_explored,
                backtracks=backtracks,
                strategy_name=self.name,
            ),
        )
