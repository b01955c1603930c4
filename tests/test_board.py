"""
Tests for the board model, tour representation and tour validation.

Usage:
    pytest tests/test_board.py
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from knights_tour.solver import (
    InvalidBoardError,
    Position,
    Step,
    Tour,
    TourInputError,
    board_center,
    degree,
    is_knight_move,
    is_power_of_two,
    is_valid_position,
    is_valid_tour,
    knight_moves,
    path_from_positions,
    path_positions,
    position_key,
    renumber,
    same_position,
    validate_board_input,
    validate_tour,
)
from knights_tour.solver.strategies.warnsdorff_dfs import WarnsdorffDFSStrategy


def _positions(*pairs):
    return [Position(r, c) for r, c in pairs]


# ---------------------------------------------------------------------------
# Board model
# ---------------------------------------------------------------------------

def test_knight_moves_from_corner():
    """Only two moves leave a corner, in fixed offset order."""
    assert knight_moves(Position(0, 0), 8) == tuple(_positions((1, 2), (2, 1)))


def test_knight_moves_from_center_keeps_offset_order():
    """All eight moves from the 5x5 center, ordered by KNIGHT_OFFSETS."""
    expected = _positions(
        (0, 1), (0, 3), (1, 0), (1, 4), (3, 0), (3, 4), (4, 1), (4, 3)
    )
    assert list(knight_moves(Position(2, 2), 5)) == expected


def test_knight_moves_cache_is_bounded():
    assert knight_moves.cache_info().maxsize == 4096


def test_knight_moves_stay_on_board():
    for n in range(1, 7):
        for r in range(n):
            for c in range(n):
                for move in knight_moves(Position(r, c), n):
                    assert is_valid_position(move, n)
                    assert is_knight_move(Position(r, c), move)


def test_degree_excludes_visited():
    # (1,2) on 8x8 reaches (0,0),(0,4),(2,0),(2,4),(3,1),(3,3)
    assert degree(Position(1, 2), 8, set()) == 6
    assert degree(Position(1, 2), 8, {Position(0, 0)}) == 5


def test_degree_accepts_tour_as_visited():
    tour = Tour.from_positions(_positions((0, 0), (2, 1)))
    assert degree(Position(1, 2), 8, tour) == 5


def test_is_knight_move():
    assert is_knight_move(Position(0, 0), Position(1, 2))
    assert is_knight_move(Position(3, 3), Position(1, 2))
    assert not is_knight_move(Position(0, 0), Position(1, 1))
    assert not is_knight_move(Position(0, 0), Position(0, 0))
    assert not is_knight_move(Position(0, 0), Position(2, 2))


def test_position_helpers():
    assert position_key(Position(2, 3)) == "2-3"
    assert same_position(Position(1, 4), Step(1, 4, 9))
    assert not same_position(Position(1, 4), Position(4, 1))
    assert Position(1, 2) == Position(1, 2)
    assert len({Position(1, 2), Position(1, 2)}) == 1
    assert not is_valid_position(Position(-1, 0), 5)
    assert not is_valid_position(Position(0, 5), 5)
    assert board_center(5) == Position(2, 2)
    assert board_center(8) == Position(4, 4)


def test_is_power_of_two():
    assert [n for n in range(1, 20) if is_power_of_two(n)] == [1, 2, 4, 8, 16]
    assert not is_power_of_two(0)


@pytest.mark.parametrize("start, size", [
    (Position(0, 0), 0),
    (Position(0, 0), -3),
    (Position(5, 0), 5),
    (Position(0, -1), 5),
    (Position(0, 0), 2.5),
    (Position(0, 0), True),
    ((0, 0), 5),
])
def test_validate_board_input_rejects_malformed(start, size):
    with pytest.raises(InvalidBoardError):
        validate_board_input(start, size)


def test_input_errors_are_value_errors():
    assert issubclass(InvalidBoardError, TourInputError)
    assert issubclass(TourInputError, ValueError)


# ---------------------------------------------------------------------------
# Tour representation
# ---------------------------------------------------------------------------

def test_tour_push_pop_keeps_visited_in_sync():
    tour = Tour(Position(0, 0))
    tour.push(Position(1, 2))
    assert len(tour) == 2
    assert Position(1, 2) in tour
    assert tour.last == Position(1, 2)

    assert tour.pop() == Position(1, 2)
    assert Position(1, 2) not in tour
    assert tour.visited == frozenset({Position(0, 0)})


def test_tour_rejects_revisit():
    tour = Tour(Position(0, 0))
    with pytest.raises(ValueError):
        tour.push(Position(0, 0))


def test_tour_copy_is_independent():
    tour = Tour.from_positions(_positions((0, 0), (1, 2)))
    clone = tour.copy()
    assert clone == tour

    clone.push(Position(2, 4))
    assert clone != tour
    assert Position(2, 4) not in tour
    assert len(tour) == 2


def test_snapshot_numbers_steps_from_one():
    tour = Tour.from_positions(_positions((0, 0), (1, 2), (2, 0)))
    path = tour.snapshot()
    assert path == (Step(0, 0, 1), Step(1, 2, 2), Step(2, 0, 3))
    assert path_positions(path) == list(tour.positions)


def test_steps_are_immutable():
    step = Step(0, 0, 1)
    with pytest.raises(AttributeError):
        step.step_number = 2


def test_renumber_produces_sequential_steps():
    shuffled = (Step(2, 0, 3), Step(0, 0, 1), Step(1, 2, 2))
    assert renumber(shuffled) == (Step(2, 0, 1), Step(0, 0, 2), Step(1, 2, 3))


# ---------------------------------------------------------------------------
# Tour validation
# ---------------------------------------------------------------------------

def _complete_tour(n=5, start=Position(0, 0)):
    result = WarnsdorffDFSStrategy().solve(start, n)
    assert result.success
    return result.path


def test_validator_accepts_complete_tour():
    path = _complete_tour()
    report = validate_tour(path, 5)
    assert report.is_valid
    assert report.issues == []


def test_validator_accepts_single_cell_board():
    assert is_valid_tour(path_from_positions(_positions((0, 0))), 1)


def test_validator_flags_short_path():
    path = _complete_tour()[:-1]
    report = validate_tour(path, 5)
    assert not report.is_valid
    assert not report.complete_length
    assert report.legal_moves and report.no_repeats


def test_validator_flags_illegal_move():
    path = list(_complete_tour())
    # Two knight moves always preserve (row + col) parity, so path[2] -> path[4]
    # can never be a single knight move
    path[3], path[4] = path[4], path[3]
    report = validate_tour(renumber(path), 5)
    assert report.complete_length
    assert not report.legal_moves
    assert not report.is_valid
    assert any("Invalid knight move" in issue for issue in report.issues)


def test_validator_flags_repeat():
    path = list(_complete_tour())
    path[-1] = path[-3]
    report = validate_tour(renumber(path), 5)
    assert not report.no_repeats
    assert not report.is_valid


def test_validator_on_positions():
    assert not is_valid_tour(_positions((0, 0), (1, 2)), 3)
