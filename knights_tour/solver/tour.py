"""
Tour Module - Ordered step sequence plus the visited set kept in sync with it.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from .board import Position


@dataclass(frozen=True)
class Step:
    """
    Position annotated with its 1-based order in a tour.

    Steps are never mutated: renumbering produces new Step objects.

    Attributes:
        row: Row index
        col: Column index
        step_number: 1-based index in the tour
    """
    row: int
    col: int
    step_number: int

    @classmethod
    def at(cls, position: Position, step_number: int) -> 'Step':
        """Create a Step for a position."""
        return cls(row=position.row, col=position.col, step_number=step_number)

    @property
    def position(self) -> Position:
        """The cell this step occupies."""
        return Position(self.row, self.col)

    def __str__(self) -> str:
        return f"({self.row},{self.col},{self.step_number})"


Path = Tuple[Step, ...]


def path_from_positions(positions: Iterable[Position]) -> Path:
    """Number a position sequence 1..n as a Path."""
    return tuple(Step.at(pos, i + 1) for i, pos in enumerate(positions))


def renumber(path: Iterable[Step]) -> Path:
    """Rebuild step numbers sequentially, keeping the cell order."""
    return path_from_positions(step.position for step in path)


def path_positions(path: Iterable[Step]) -> List[Position]:
    """Strip step numbers from a path."""
    return [step.position for step in path]


class Tour:
    """
    Tour under construction: path plus visited set.

    The visited set always mirrors the path: push() and pop() are the
    only mutators, so backtracking undoes both together.
    """

    def __init__(self, start: Optional[Position] = None):
        self._positions: List[Position] = []
        self._visited: Set[Position] = set()
        if start is not None:
            self.push(start)

    @classmethod
    def from_positions(cls, positions: Iterable[Position]) -> 'Tour':
        """Build a tour from an ordered cell sequence (no repeats allowed)."""
        tour = cls()
        for pos in positions:
            tour.push(pos)
        return tour

    def push(self, position: Position) -> None:
        """
        Append a cell to the tour.

        Raises:
            ValueError: If the cell is already on the tour
        """
        if position in self._visited:
            raise ValueError(f"{position} already visited")
        self._positions.append(position)
        self._visited.add(position)

    def pop(self) -> Position:
        """Remove and return the last cell."""
        position = self._positions.pop()
        self._visited.discard(position)
        return position

    def copy(self) -> 'Tour':
        """Independent clone (shares no mutable state)."""
        clone = Tour()
        clone._positions = list(self._positions)
        clone._visited = set(self._visited)
        return clone

    def snapshot(self) -> Path:
        """Immutable numbered copy of the current path."""
        return path_from_positions(self._positions)

    @property
    def positions(self) -> Tuple[Position, ...]:
        """Cells in visiting order."""
        return tuple(self._positions)

    @property
    def visited(self) -> frozenset:
        """Read-only view of the visited set."""
        return frozenset(self._visited)

    @property
    def last(self) -> Optional[Position]:
        """Current knight position, or None for an empty tour."""
        return self._positions[-1] if self._positions else None

    def __contains__(self, position: object) -> bool:
        return position in self._visited

    def __len__(self) -> int:
        return len(self._positions)

    def __iter__(self) -> Iterator[Position]:
        return iter(self._positions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tour):
            return NotImplemented
        return self._positions == other._positions

    def __repr__(self) -> str:
        return f"Tour(len={len(self._positions)}, last={self.last})"
