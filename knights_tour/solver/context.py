"""
Search Context Module - Per-invocation inputs shared with a strategy.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .board import Position, validate_board_input


@dataclass
class SearchContext:
    """
    Inputs and run controls for one strategy invocation.

    Attributes:
        start: Start position of the tour
        board_size: Board dimension N
        cancel_flag: Threading event for external cancellation
        timeout_sec: Optional time budget (None = run to completion)
        start_time: When computation started
        progress_callback: Optional callback for progress updates
    """
    start: Position
    board_size: int
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    timeout_sec: Optional[float] = None
    start_time: float = field(default_factory=time.perf_counter)
    progress_callback: Optional[Callable[[float, str], None]] = None

    def __post_init__(self):
        validate_board_input(self.start, self.board_size)

    @property
    def total_cells(self) -> int:
        """Cells a complete tour must visit."""
        return self.board_size * self.board_size

    def is_cancelled(self) -> bool:
        """
        Check if cancellation requested or timeout exceeded.

        Returns:
            True if strategy should stop execution
        """
        if self.cancel_flag.is_set():
            return True
        if self.timeout_sec is not None and self.elapsed_time() > self.timeout_sec:
            return True
        return False

    def report_progress(self, percent: float, message: str = "") -> None:
        """
        Report progress to the caller.

        Args:
            percent: Progress from 0.0 to 1.0
            message: Optional status message
        """
        if self.progress_callback:
            self.progress_callback(percent, message)

    def elapsed_time(self) -> float:
        """Seconds elapsed since computation started."""
        return time.perf_counter() - self.start_time

    def elapsed_ms(self) -> float:
        """Milliseconds elapsed since computation started."""
        return self.elapsed_time() * 1000
