"""logic/plants.py — Moisture drain, watering, daily growth.

Runs on every plant in ``FarmWorld.plants``.  Status machine::

    ALIVE ──moisture <= 0──────────▶ WITHERED
      │  ──watered to >= 10───────▶ DROWNED
      └──growth_stage == growth──▶ RIPE

WITHERED, DROWNED and RIPE are terminal: only the hoe (dead plants) or
a harvest (ripe plants) takes a plant out of the machine.

Moisture thresholds:
    <= 0      withered
    2 .. 8    optimal — the plant grows one stage on day rollover
    >= 10     drowned
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from components import Plant, PlantStatus, Crop
from core.constants import (
    MAX_MOISTURE, OPTIMAL_MIN, OPTIMAL_MAX, WATER_PER_USE,
    DAY_DURATION_MS,
)
from core.events import PlantWithered, PlantDrowned, PlantRipened
from core.tuning import get as _tun

if TYPE_CHECKING:
    from core.farm import FarmState


def day_duration_ms() -> float:
    return float(_tun("clock", "day_duration_ms", DAY_DURATION_MS))


def in_optimal_band(moisture: float) -> bool:
    return (_tun("plants", "optimal_min", OPTIMAL_MIN)
            <= moisture
            <= _tun("plants", "optimal_max", OPTIMAL_MAX))


# ── Continuous ──────────────────────────────────────────────────────

def moisture_system(state: "FarmState", elapsed_ms: float) -> int:
    """Drain moisture for every living plant.  Returns plants withered."""
    day_ms = day_duration_ms()
    withered = 0
    for (x, y), plant in state.world.plants.items():
        if plant.status is not PlantStatus.ALIVE:
            continue
        crop = state.catalog[plant.crop]
        plant.moisture -= crop.water_need * (elapsed_ms / day_ms)
        if plant.moisture <= 0:
            plant.status = PlantStatus.WITHERED
            state.bus.emit(PlantWithered(x=x, y=y, crop=plant.crop))
            withered += 1
    return withered


# ── Watering ────────────────────────────────────────────────────────

def water_plant(state: "FarmState", x: int, y: int, plant: Plant) -> None:
    """Add one watering to a living plant; may drown it."""
    cap = _tun("plants", "max_moisture", MAX_MOISTURE)
    plant.moisture = min(cap, plant.moisture + _tun("plants", "water_per_use", WATER_PER_USE))
    if plant.moisture >= cap:
        plant.status = PlantStatus.DROWNED
        state.bus.emit(PlantDrowned(x=x, y=y, crop=plant.crop))


# ── Daily ───────────────────────────────────────────────────────────

def growth_system(state: "FarmState") -> int:
    """Advance living plants in the optimal band.  Returns plants ripened."""
    ripened = 0
    for (x, y), plant in state.world.plants.items():
        if plant.status is not PlantStatus.ALIVE:
            continue
        crop = state.catalog[plant.crop]
        if in_optimal_band(plant.moisture) and plant.growth_stage < crop.growth_time:
            plant.growth_stage += 1
        if plant.growth_stage >= crop.growth_time:
            plant.status = PlantStatus.RIPE
            state.bus.emit(PlantRipened(x=x, y=y, crop=plant.crop))
            ripened += 1
    return ripened


# ── Readouts (hand tool) ────────────────────────────────────────────

def moisture_label(plant: Plant) -> str:
    if plant.status is PlantStatus.WITHERED:
        return "withered"
    if plant.status is PlantStatus.DROWNED:
        return "drowned"
    if in_optimal_band(plant.moisture):
        return "optimal"
    if plant.moisture < _tun("plants", "optimal_min", OPTIMAL_MIN):
        return "too dry"
    return "too wet"


def growth_percent(plant: Plant, crop: Crop) -> int:
    if crop.growth_time <= 0:
        return 100
    return int(plant.growth_stage / crop.growth_time * 100)


def days_to_harvest(plant: Plant, crop: Crop) -> int:
    return max(0, crop.growth_time - plant.growth_stage)
