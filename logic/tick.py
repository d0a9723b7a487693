"""logic/tick.py — Farm clock orchestration.

Houses the per-frame pipeline (continuous moisture drain, clock advance)
and the day-rollover pipeline (growth, tax, game-over check).

Usage::

    from logic.tick import tick_farm, advance_day
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from core.events import DayStarted
from logic.plants import moisture_system, growth_system, day_duration_ms
from simulation.economy import charge_daily_tax, check_game_over

if TYPE_CHECKING:
    from core.farm import FarmState


def advance_day(state: "FarmState") -> None:
    """Run one day rollover.

    Order matters: growth sees the moisture at the end of the day, tax is
    charged on the land owned at rollover, and the game-over check sees
    both.
    """
    clock = state.clock
    clock.day += 1
    state.bus.emit(DayStarted(day=clock.day))

    ripened = growth_system(state)
    tax = charge_daily_tax(state)
    print(f"[CLOCK] Day {clock.day}: {ripened} ripened, tax {tax:.2f}, "
          f"money={state.wallet.money:.2f}")

    check_game_over(state)


def tick_farm(state: "FarmState", elapsed_ms: float) -> int:
    """Advance the farm by ``elapsed_ms`` of wall time.

    Parameters
    ----------
    state : FarmState
        The farm aggregate.
    elapsed_ms : float
        Frame delta in milliseconds.

    Returns the number of day rollovers that happened.
    """
    clock = state.clock
    if clock.paused or state.game_over or elapsed_ms <= 0:
        return 0

    day_ms = day_duration_ms()
    remaining = elapsed_ms
    days = 0
    # one day boundary at a time: growth reads the moisture at rollover
    while remaining > 0 and not state.game_over:
        step = max(0.0, min(remaining, day_ms - clock.ms_into_day))
        moisture_system(state, step)
        clock.ms_into_day += step
        remaining -= step
        if clock.ms_into_day >= day_ms:
            clock.ms_into_day -= day_ms
            advance_day(state)
            days += 1
    return days
