"""
Simulated Annealing Strategy - Randomized tour construction plus local search.

Two phases:
    1. Construction: random walk from the start until stuck
    2. Improvement: pivot-based neighbors accepted by the Metropolis rule
       under a geometric cooling schedule

A neighbor keeps the current tour up to a random pivot and regrows the
rest with a fresh random walk, so every tour the search holds is made of
legal moves; the scoring policy still penalizes illegal transitions and
repeats so it can rank arbitrary paths.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from ..base import TourStrategy
from ..board import Position, TourInputError, is_knight_move, knight_moves
from ..context import SearchContext
from ..factory import register_strategy
from ..result import AlgorithmResult
from ..tour import Tour, path_from_positions
from ..validation import is_valid_tour

logger = logging.getLogger(__name__)

Positions = Tuple[Position, ...]
TourScorer = Callable[[Sequence[Position], int], float]


class InvalidScheduleError(TourInputError):
    """Annealing parameters out of range."""


@dataclass(frozen=True)
class AnnealingSchedule:
    """
    Temperature schedule for the improvement phase.

    The defaults give about 920 temperature steps of 100 neighbors each.

    Attributes:
        initial_temperature: Starting temperature (> 0)
        cooling_rate: Multiplier applied after each temperature step, in (0, 1)
        min_temperature: Floor; cooling stops once temperature drops to it
        iterations_per_temperature: Neighbors tried at each temperature
    """
    initial_temperature: float = 10.0
    cooling_rate: float = 0.99
    min_temperature: float = 0.001
    iterations_per_temperature: int = 100

    def __post_init__(self):
        if self.initial_temperature <= 0:
            raise InvalidScheduleError(
                f"initial_temperature must be positive, got {self.initial_temperature}"
            )
        if not 0 < self.cooling_rate < 1:
            raise InvalidScheduleError(
                f"cooling_rate must be in (0, 1), got {self.cooling_rate}"
            )
        if not 0 < self.min_temperature < self.initial_temperature:
            raise InvalidScheduleError(
                f"min_temperature must be in (0, {self.initial_temperature}), "
                f"got {self.min_temperature}"
            )
        if self.iterations_per_temperature < 1:
            raise InvalidScheduleError(
                f"iterations_per_temperature must be >= 1, got {self.iterations_per_temperature}"
            )

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> 'AnnealingSchedule':
        """Build a schedule from a settings dict, defaulting missing keys."""
        defaults = cls()
        return cls(
            initial_temperature=float(settings.get(
                "initial_temperature", defaults.initial_temperature)),
            cooling_rate=float(settings.get("cooling_rate", defaults.cooling_rate)),
            min_temperature=float(settings.get(
                "min_temperature", defaults.min_temperature)),
            iterations_per_temperature=int(settings.get(
                "iterations_per_temperature", defaults.iterations_per_temperature)),
        )

    @property
    def temperature_steps(self) -> int:
        """Number of temperature levels the schedule visits."""
        steps = 0
        temperature = self.initial_temperature
        while temperature > self.min_temperature:
            steps += 1
            temperature *= self.cooling_rate
        return steps


@dataclass(frozen=True)
class TourScoring:
    """
    Default fitness policy: higher is better.

    Longer paths score higher, each legal transition earns a bonus, each
    illegal transition or repeated cell costs a heavy penalty, and a
    complete valid tour gets an extra bonus on top.
    """
    length_weight: float = 1.0
    legal_move_bonus: float = 1.0
    illegal_move_penalty: float = 50.0
    repeat_penalty: float = 50.0
    complete_bonus: float = 100.0

    def __call__(self, positions: Sequence[Position], board_size: int) -> float:
        score = self.length_weight * len(positions)
        clean = True

        for a, b in zip(positions, positions[1:]):
            if is_knight_move(a, b):
                score += self.legal_move_bonus
            else:
                score -= self.illegal_move_penalty
                clean = False

        repeats = len(positions) - len(set(positions))
        if repeats:
            score -= self.repeat_penalty * repeats
            clean = False

        if clean and len(positions) == board_size * board_size:
            score += self.complete_bonus
        return score


def random_walk(tour: Tour, board_size: int, rng: random.Random) -> Tour:
    """
    Extend a tour with uniformly random unvisited moves until stuck.

    Args:
        tour: Tour to extend in place (must be non-empty)
        board_size: Board dimension N
        rng: Random source

    Returns:
        The same tour, for chaining
    """
    total = board_size * board_size
    while len(tour) < total:
        moves = [m for m in knight_moves(tour.last, board_size) if m not in tour]
        if not moves:
            break
        tour.push(rng.choice(moves))
    return tour


def pivot_neighbor(positions: Positions, board_size: int,
                   rng: random.Random) -> Positions:
    """
    Keep a random prefix of the tour and regrow the suffix at random.

    The pivot is at least 1, so the start cell is always kept.

    Args:
        positions: Current tour cells
        board_size: Board dimension N
        rng: Random source

    Returns:
        Neighbor tour cells
    """
    pivot = rng.randint(1, len(positions) - 1) if len(positions) > 1 else 1
    tour = Tour.from_positions(positions[:pivot])
    return random_walk(tour, board_size, rng).positions


@register_strategy
class SimulatedAnnealingStrategy(TourStrategy):
    """
    Simulated annealing over pivot-regrown tours.

    Non-deterministic unless seeded: pass seed or rng for reproducible
    runs. The best-scoring tour seen is kept regardless of what is
    currently accepted, and is what gets returned. Cooling stops early
    once the best tour is a complete valid tour, since nothing can
    score higher.
    """
    name = "simulated_annealing"
    display_name = "Simulated Annealing"
    color = "#81C784"
    description = "Simulated Annealing (randomized) - Pivot regrowth with cooling"

    def __init__(self, schedule: Optional[AnnealingSchedule] = None,
                 scorer: Optional[TourScorer] = None,
                 seed: Optional[int] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize annealing strategy.

        Args:
            schedule: Temperature schedule (defaults documented on AnnealingSchedule)
            scorer: Fitness policy (defaults to TourScoring())
            seed: Seed for the strategy-local random source
            rng: Explicit random source (overrides seed)
        """
        self.schedule = schedule or AnnealingSchedule()
        self.scorer = scorer or TourScoring()
        self.rng = rng if rng is not None else random.Random(seed)

    def search(self, context: SearchContext) -> AlgorithmResult:
        n = context.board_size
        total = context.total_cells
        schedule = self.schedule
        rng = self.rng

        current = random_walk(Tour(context.start), n, rng).positions
        current_score = self.scorer(current, n)
        best, best_score = current, current_score
        explored = 1
        cancelled = False
        solved = self._is_complete(best, n)

        logger.debug(
            f"[{self.display_name}] Initial tour {len(current)}/{total} cells, "
            f"score {current_score:.1f}"
        )

        temperature = schedule.initial_temperature
        level = 0
        steps = schedule.temperature_steps
        while not solved and temperature > schedule.min_temperature:
            if self._check_cancelled(context):
                cancelled = True
                break

            for _ in range(schedule.iterations_per_temperature):
                candidate = pivot_neighbor(current, n, rng)
                candidate_score = self.scorer(candidate, n)
                explored += 1

                delta = candidate_score - current_score
                if delta > 0 or rng.random() < math.exp(delta / temperature):
                    current, current_score = candidate, candidate_score
                    if current_score > best_score:
                        best, best_score = current, current_score
                        if self._is_complete(best, n):
                            solved = True
                            break

            temperature *= schedule.cooling_rate
            level += 1
            context.report_progress(
                min(0.99, level / steps),
                f"T={temperature:.4f}, best {len(best)}/{total}"
            )

        logger.debug(
            f"[{self.display_name}] Finished at T={temperature:.4f} after "
            f"{level} levels, best score {best_score:.1f}"
        )

        return self._build_result(
            context, path_from_positions(best),
            states_explored=explored,
            was_cancelled=cancelled,
        )

    @staticmethod
    def _is_complete(positions: Positions, board_size: int) -> bool:
        return (len(positions) == board_size * board_size
                and is_valid_tour(positions, board_size))
