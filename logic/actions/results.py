"""logic/actions/results.py — Outcome objects returned by every player action.

Rule violations are ordinary results, never exceptions.  The scene reads
``result.ok`` / ``result.reason`` / ``result.message`` and shows the
text; ``result.events`` carries whatever the action emitted (ripe,
drowned, crop unlocked, game over ...).
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class Reason(Enum):
    OK = "ok"
    OUT_OF_BOUNDS = "out_of_bounds"
    NOT_OWNED = "not_owned"
    ALREADY_OWNED = "already_owned"
    WRONG_TILE_TYPE = "wrong_tile_type"
    ALREADY_OCCUPIED = "already_occupied"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_WATER = "insufficient_water"
    TANK_FULL = "tank_full"
    TANK_CAPACITY_EXCEEDED = "tank_capacity_exceeded"
    TRANSACTION_LIMIT = "transaction_limit"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_ADJACENCY = "invalid_adjacency"
    SHORELINE = "shoreline"
    WATER_TILE = "water_tile"
    NO_PLANT = "no_plant"
    NOT_RIPE = "not_ripe"
    PLANT_UNHEALTHY = "plant_unhealthy"
    PLANT_HEALTHY = "plant_healthy"
    UNKNOWN_CROP = "unknown_crop"
    CROP_LOCKED = "crop_locked"
    GAME_OVER = "game_over"


@dataclass(frozen=True, slots=True)
class ActionResult:
    ok: bool
    reason: Reason = Reason.OK
    message: str = ""
    # state delta for the HUD, e.g. {"money": -10.0, "water": -1}
    delta: dict[str, float] = field(default_factory=dict)
    events: tuple[Any, ...] = ()

    def __bool__(self) -> bool:
        return self.ok

    def with_events(self, events) -> "ActionResult":
        return replace(self, events=self.events + tuple(events))


def success(message: str = "", **delta: float) -> ActionResult:
    return ActionResult(ok=True, message=message, delta=dict(delta))


def rejected(reason: Reason, message: str = "") -> ActionResult:
    return ActionResult(ok=False, reason=reason, message=message)
