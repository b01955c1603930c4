"""
Result Module - Uniform record returned by every strategy.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from .tour import Path


@dataclass(frozen=True)
class SearchMetrics:
    """
    Performance metrics for one strategy run.

    Attributes:
        states_explored: Search states expanded (nodes, pops or neighbors)
        backtracks: Steps undone by backtracking strategies
        strategy_name: Registry name of the strategy
    """
    states_explored: int = 0
    backtracks: int = 0
    strategy_name: str = ""


@dataclass(frozen=True)
class AlgorithmResult:
    """
    Result of one strategy invocation.

    Attributes:
        name: Display name of the strategy
        path: Steps in visiting order (read-only)
        execution_time_ms: Wall time spent in the search
        success: True only if the path passes tour validation
        color: Presentation hint, opaque to the solver
        was_cancelled: True if the run stopped on cancellation or timeout
        metrics: Search statistics
    """
    name: str
    path: Path
    execution_time_ms: float
    success: bool
    color: str = ""
    was_cancelled: bool = False
    metrics: SearchMetrics = field(default_factory=SearchMetrics)

    @property
    def steps_taken(self) -> int:
        """Number of cells on the returned path."""
        return len(self.path)

    def coverage(self, board_size: int) -> float:
        """Fraction of the board visited (0.0 - 1.0)."""
        return len(self.path) / float(board_size * board_size)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation."""
        return {
            "name": self.name,
            "path": [
                {"row": s.row, "col": s.col, "stepNumber": s.step_number}
                for s in self.path
            ],
            "executionTimeMillis": self.execution_time_ms,
            "success": self.success,
            "color": self.color,
            "wasCancelled": self.was_cancelled,
            "statesExplored": self.metrics.states_explored,
            "backtracks": self.metrics.backtracks,
        }


def format_execution_time(time_ms: float) -> str:
    """
    Format a duration for display.

    Args:
        time_ms: Duration in milliseconds

    Returns:
        '< 1 ms', whole milliseconds below one second, else seconds
    """
    if time_ms < 1:
        return "< 1 ms"
    if time_ms < 1000:
        return f"{round(time_ms)} ms"
    return f"{time_ms / 1000:.2f} s"
