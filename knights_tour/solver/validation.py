"""
Tour Validation Module - Correctness oracle shared by every strategy.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Set

from .board import Position, is_knight_move


@dataclass(frozen=True)
class TourValidation:
    """
    Outcome of checking a path against the complete-tour rules.

    Attributes:
        complete_length: Path visits exactly N*N cells
        legal_moves: Every consecutive pair is one knight move apart
        no_repeats: No cell appears twice
        issues: Human readable description of each violation
    """
    complete_length: bool
    legal_moves: bool
    no_repeats: bool
    issues: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """A tour is valid only if all three checks hold."""
        return self.complete_length and self.legal_moves and self.no_repeats


def validate_tour(path: Sequence, board_size: int) -> TourValidation:
    """
    Check a path (Steps or Positions) for a complete knight's tour.

    Args:
        path: Ordered cells, anything with row/col attributes
        board_size: Board dimension N

    Returns:
        TourValidation with per-rule flags and issue messages
    """
    issues: List[str] = []
    expected = board_size * board_size

    complete_length = len(path) == expected
    if not complete_length:
        issues.append(f"Tour has {len(path)} steps, expected {expected}")

    legal_moves = True
    for prev, cur in zip(path, path[1:]):
        a = Position(prev.row, prev.col)
        b = Position(cur.row, cur.col)
        if not is_knight_move(a, b):
            legal_moves = False
            issues.append(f"Invalid knight move from {a} to {b}")

    no_repeats = True
    seen: Set[Position] = set()
    for step in path:
        pos = Position(step.row, step.col)
        if pos in seen:
            no_repeats = False
            issues.append(f"Position {pos} visited multiple times")
        seen.add(pos)

    return TourValidation(
        complete_length=complete_length,
        legal_moves=legal_moves,
        no_repeats=no_repeats,
        issues=issues,
    )


def is_valid_tour(path: Sequence, board_size: int) -> bool:
    """Shortcut for validate_tour(path, board_size).is_valid."""
    return validate_tour(path, board_size).is_valid
