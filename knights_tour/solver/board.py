"""
Board Module - Knight move generation and board geometry helpers.

All helpers are pure functions of their arguments. Callers are expected
to have validated the board size (see validate_board_input) before
generating moves.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Container, Tuple


class TourInputError(ValueError):
    """Base class for malformed input handed to the solver."""


class InvalidBoardError(TourInputError):
    """Board size or start position violates the caller contract."""


@dataclass(frozen=True)
class Position:
    """
    Cell on the board, 0-indexed.

    Attributes:
        row: Row index
        col: Column index
    """
    row: int
    col: int

    def offset(self, d_row: int, d_col: int) -> 'Position':
        """Position shifted by the given deltas (may be off the board)."""
        return Position(self.row + d_row, self.col + d_col)

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


# Fixed candidate order. Order-sensitive strategies keep the first move
# in this order that completes a tour.
KNIGHT_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)


def is_valid_position(position: Position, board_size: int) -> bool:
    """
    Check whether a position lies on an N x N board.

    Args:
        position: Position to check
        board_size: Board dimension N

    Returns:
        True if both coordinates are in [0, N)
    """
    return 0 <= position.row < board_size and 0 <= position.col < board_size


@lru_cache(maxsize=4096)
def knight_moves(position: Position, board_size: int) -> Tuple[Position, ...]:
    """
    Get all on-board knight moves from a position.

    Results follow KNIGHT_OFFSETS order and are cached, since every
    strategy asks for the same cells over and over.

    Args:
        position: Current position
        board_size: Board dimension N

    Returns:
        Tuple of reachable positions (at most 8)
    """
    moves = []
    for d_row, d_col in KNIGHT_OFFSETS:
        move = position.offset(d_row, d_col)
        if is_valid_position(move, board_size):
            moves.append(move)
    return tuple(moves)


def degree(position: Position, board_size: int,
           visited: Container[Position]) -> int:
    """
    Count onward moves from a position that lead to unvisited cells.

    This is the Warnsdorff ranking key: lower means fewer ways out.

    Args:
        position: Candidate position
        board_size: Board dimension N
        visited: Cells already on the tour (set or Tour)

    Returns:
        Number of unvisited knight moves from position
    """
    return sum(1 for move in knight_moves(position, board_size)
               if move not in visited)


def is_knight_move(a: Position, b: Position) -> bool:
    """True if a and b are one legal knight move apart."""
    d_row = abs(a.row - b.row)
    d_col = abs(a.col - b.col)
    return (d_row == 1 and d_col == 2) or (d_row == 2 and d_col == 1)


def position_key(position: Position) -> str:
    """Canonical string key for a position, e.g. '2-3'."""
    return f"{position.row}-{position.col}"


def same_position(a: Position, b: Position) -> bool:
    """Compare two cells by coordinates only (works for Step as well)."""
    return a.row == b.row and a.col == b.col


def is_power_of_two(value: int) -> bool:
    """True for 1, 2, 4, 8, ..."""
    return value > 0 and (value & (value - 1)) == 0


def board_center(board_size: int) -> Position:
    """Default start cell used by the command line runner."""
    return Position(board_size // 2, board_size // 2)


def validate_board_input(start: Position, board_size: int) -> None:
    """
    Reject malformed solver input.

    Args:
        start: Requested start position
        board_size: Board dimension N

    Raises:
        InvalidBoardError: If N is not a positive integer or start is off the board
    """
    if isinstance(board_size, bool) or not isinstance(board_size, int):
        raise InvalidBoardError(f"Board size must be an integer, got {board_size!r}")
    if board_size <= 0:
        raise InvalidBoardError(f"Board size must be positive, got {board_size}")
    if not isinstance(start, Position):
        raise InvalidBoardError(f"Start must be a Position, got {start!r}")
    if not is_valid_position(start, board_size):
        raise InvalidBoardError(
            f"Start {start} is outside the {board_size}x{board_size} board"
        )
