"""
Strategies Package - Concrete strategy implementations.

Import this module to register all built-in strategies. Registration
order is the order the comparison runner uses by default.
"""

from .exhaustive import BruteForceStrategy
from .divide_and_conquer import DivideAndConquerStrategy
from .annealing import (
    AnnealingSchedule,
    InvalidScheduleError,
    SimulatedAnnealingStrategy,
    TourScoring,
)
from .warnsdorff import WarnsdorffStrategy
from .warnsdorff_dfs import WarnsdorffDFSStrategy
from .frontier import FrontierSearchStrategy

__all__ = [
    "BruteForceStrategy",
    "DivideAndConquerStrategy",
    "SimulatedAnnealingStrategy",
    "WarnsdorffStrategy",
    "WarnsdorffDFSStrategy",
    "FrontierSearchStrategy",
    "AnnealingSchedule",
    "TourScoring",
    "InvalidScheduleError",
]
