"""components.resources — World-level singletons (not per-tile)."""

from __future__ import annotations
from dataclasses import dataclass

from core.constants import START_MONEY, START_WATER


@dataclass
class SimClock:
    """In-game calendar.

    ``ms_into_day`` accumulates frame time and rolls over into ``day``.
    While ``paused`` no continuous or daily update runs.
    """
    day: int = 1
    ms_into_day: float = 0.0
    paused: bool = False


@dataclass
class Wallet:
    """The player's money, score and water tank.

    ``money`` is never clamped: daily tax may push it below zero.
    Owned land lives on ``FarmWorld.owned``.
    """
    money: float = START_MONEY
    score: int = 0
    water: float = START_WATER
    unlocked_count: int = 0


@dataclass
class Camera:
    """Renderer-only viewport centre, in tiles."""
    x: float = 0.0
    y: float = 0.0
