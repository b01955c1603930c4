"""
Strategy registry.

Strategy modules register their class with @register_strategy at import
time; the registry keeps that order, which is also the order a full
comparison runs in. Everything else looks strategies up by their short
name ("warnsdorff", "frontier", ...).
"""

from typing import Any, Dict, List, Type

from .base import TourStrategy


_STRATEGIES: Dict[str, Type[TourStrategy]] = {}

DEFAULT_STRATEGY = "warnsdorff_dfs"


def register_strategy(cls: Type[TourStrategy]) -> Type[TourStrategy]:
    """Class decorator: add a TourStrategy subclass under its `name`."""
    _STRATEGIES[cls.name] = cls
    return cls


def create_strategy(name: str, **kwargs: Any) -> TourStrategy:
    """
    Instantiate a registered strategy.

    Keyword arguments go to the strategy's constructor unchanged, so
    `create_strategy("simulated_annealing", seed=3)` seeds the annealer.

    Raises:
        ValueError: If no strategy is registered under `name`
    """
    try:
        cls = _STRATEGIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown strategy: {name}. Available: {', '.join(_STRATEGIES)}"
        ) from None
    return cls(**kwargs)


def get_strategy_names() -> List[str]:
    """Short names in registration order."""
    return list(_STRATEGIES)


def get_strategy_info() -> List[Dict[str, str]]:
    """Name, display name, color tag and description of each strategy."""
    return [
        dict(
            name=cls.name,
            display_name=cls.display_name,
            color=cls.color,
            description=cls.description,
        )
        for cls in _STRATEGIES.values()
    ]


def get_default_strategy_name() -> str:
    # Heuristic-ordered backtracking is the one that reliably finds tours
    if DEFAULT_STRATEGY in _STRATEGIES:
        return DEFAULT_STRATEGY
    return next(iter(_STRATEGIES), "")
