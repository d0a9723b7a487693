"""core/events.py — Lightweight event bus.

Decouples the rules that *signal* something (a plant withered, a crop
unlocked) from the front end that *shows* it.  Each ``FarmState`` owns
one bus::

    from core.events import EventBus, PlantRipened
    state.bus.emit(PlantRipened(x=3, y=4, crop="carrot"))

Consumers subscribe with a callable::

    bus.subscribe("PlantRipened", my_handler)

And the orchestrator drains once per frame / action::

    events = bus.drain()   # calls all handlers, returns the events

Design rules:
  - Events are plain dataclasses — no behaviour.
  - ``emit()`` is O(1) (just appends).
  - ``drain()`` processes all queued events in FIFO order.
  - Handlers may emit new events; those are processed in the same drain.
"""

from __future__ import annotations
import traceback
from dataclasses import dataclass
from typing import Any, Callable
from collections import defaultdict


# ═══════════════════════════════════════════════════════════════════
#  Event definitions
# ═══════════════════════════════════════════════════════════════════

@dataclass
class PlantWithered:
    """Moisture ran out."""
    x: int
    y: int
    crop: str


@dataclass
class PlantDrowned:
    """Watered up to the flood limit."""
    x: int
    y: int
    crop: str


@dataclass
class PlantRipened:
    """Growth reached the crop's growth time — ready to harvest."""
    x: int
    y: int
    crop: str


@dataclass
class Harvested:
    x: int
    y: int
    crop: str
    value: float


@dataclass
class CropUnlocked:
    """Score crossed a crop's requirement; the seed is now on sale."""
    crop: str
    name: str
    requirement: int


@dataclass
class DayStarted:
    day: int


@dataclass
class TaxCharged:
    day: int
    amount: float
    tiles: int


@dataclass
class LandPurchased:
    x: int
    y: int
    cost: float


@dataclass
class WaterPurchased:
    amount: int
    cost: float


@dataclass
class GameOver:
    """No money for a seed and nothing growing.  Terminal."""
    day: int
    score: int


# ═══════════════════════════════════════════════════════════════════
#  Event Bus
# ═══════════════════════════════════════════════════════════════════

class EventBus:
    """Fire-and-forget event bus owned by a ``FarmState``."""

    def __init__(self):
        self._queue: list[Any] = []
        self._subs: dict[str, list[Callable]] = defaultdict(list)
        self._stats: dict[str, int] = defaultdict(int)

    # ── Public API ───────────────────────────────────────────────────

    def emit(self, event) -> None:
        """Queue an event for processing on next ``drain()``."""
        self._queue.append(event)

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Register *handler* to receive events of *event_type*.

        *event_type* is the class name, e.g. ``"PlantWithered"``.
        """
        self._subs[event_type].append(handler)

    def drain(self) -> list[Any]:
        """Process all queued events.  Returns the events processed.

        Handlers may emit new events — those are processed in the
        same drain pass (breadth-first).
        """
        processed: list[Any] = []
        safety = 1000  # prevent infinite loops
        while self._queue and safety > 0:
            batch = self._queue[:]
            self._queue.clear()
            for event in batch:
                name = type(event).__name__
                self._stats[name] += 1
                for handler in self._subs.get(name, []):
                    try:
                        handler(event)
                    except Exception as exc:
                        print(f"[EVENT] handler error for {name}: {exc}")
                        traceback.print_exc()
            processed.extend(batch)
            safety -= 1
        return processed

    def stats(self) -> dict[str, int]:
        """Return cumulative event counts by type."""
        return dict(self._stats)

    def pending_count(self) -> int:
        """Number of events waiting to be drained."""
        return len(self._queue)

    def __repr__(self) -> str:
        return f"EventBus(pending={len(self._queue)}, subs={len(self._subs)})"
