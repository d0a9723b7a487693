"""logic/actions/tools.py — Hoe, seed bag, watering can, harvest, hand.

One function per tool.  Each validates the click against the farm
rules, mutates ``FarmState`` on success and returns an ``ActionResult``.
Nothing here raises for a rule violation.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from components import Plant, PlantStatus
from core.constants import TileType, START_MOISTURE, LAND_COST
from core.events import Harvested
from core.tuning import get as _tun
from logic.actions.results import ActionResult, Reason, success, rejected
from logic.plants import water_plant, moisture_label, growth_percent, days_to_harvest
from simulation import economy

if TYPE_CHECKING:
    from core.farm import FarmState


def _guard(state: "FarmState", x: int, y: int) -> ActionResult | None:
    """Shared preconditions: game still running, tile on the map."""
    if state.game_over:
        return rejected(Reason.GAME_OVER, "The farm is closed.")
    if not state.world.in_bounds(x, y):
        return rejected(Reason.OUT_OF_BOUNDS, "That's off the map.")
    return None


# ── Hoe ─────────────────────────────────────────────────────────────

def attempt_till(state: "FarmState", x: int, y: int) -> ActionResult:
    """Till owned grass, or clear a dead plant back to tilled soil."""
    bad = _guard(state, x, y)
    if bad is not None:
        return bad
    world = state.world

    plant = world.plant_at(x, y)
    if plant is not None:
        if plant.status.is_dead:
            world.remove_plant(x, y, revert_to=TileType.TILLED_SOIL)
            return success("Field cleared.")
        return rejected(Reason.PLANT_HEALTHY,
                        "A healthy plant can't be hoed. Harvest it when it's ripe.")

    if not world.is_owned(x, y):
        return rejected(Reason.NOT_OWNED, "You don't own this land.")
    if world.tile_at(x, y) != TileType.GRASS:
        return rejected(Reason.WRONG_TILE_TYPE, "Only grass can be tilled.")

    world.till(x, y)
    return success("Field tilled.")


# ── Seed bag ────────────────────────────────────────────────────────

def attempt_plant(state: "FarmState", x: int, y: int, crop_key: str) -> ActionResult:
    bad = _guard(state, x, y)
    if bad is not None:
        return bad
    world, wallet = state.world, state.wallet

    crop = state.catalog.get(crop_key)
    if crop is None:
        return rejected(Reason.UNKNOWN_CROP, f"No such seed: {crop_key}.")
    if wallet.score < crop.score_requirement:
        return rejected(Reason.CROP_LOCKED,
                        f"{crop.name} unlocks at {crop.score_requirement} points.")
    if not world.is_owned(x, y):
        return rejected(Reason.NOT_OWNED, "You don't own this land.")
    if world.plant_at(x, y) is not None:
        return rejected(Reason.ALREADY_OCCUPIED, "Something is already growing here.")
    if world.tile_at(x, y) != TileType.TILLED_SOIL:
        return rejected(Reason.WRONG_TILE_TYPE, "Till the grass first.")
    if wallet.money < crop.price:
        return rejected(Reason.INSUFFICIENT_FUNDS, f"Not enough money for {crop.name}!")

    wallet.money -= crop.price
    world.put_plant(x, y, Plant(
        crop=crop.key,
        moisture=_tun("plants", "start_moisture", START_MOISTURE),
    ))
    economy.check_game_over(state)
    return success(f"Planted {crop.name}.", money=-crop.price)


# ── Watering can ────────────────────────────────────────────────────

def attempt_water(state: "FarmState", x: int, y: int) -> ActionResult:
    bad = _guard(state, x, y)
    if bad is not None:
        return bad
    wallet = state.wallet

    if wallet.water < 1:
        return rejected(Reason.INSUFFICIENT_WATER, "Out of water! Buy more at the lake.")
    plant = state.world.plant_at(x, y)
    if plant is None:
        return rejected(Reason.NO_PLANT, "Nothing to water here.")
    if plant.status is not PlantStatus.ALIVE:
        return rejected(Reason.PLANT_UNHEALTHY,
                        f"This plant is {plant.status.value}; watering won't help.")

    wallet.water -= 1
    water_plant(state, x, y, plant)
    crop = state.catalog[plant.crop]
    if plant.status is PlantStatus.DROWNED:
        msg = f"{crop.name} drowned!"
    else:
        msg = (f"{crop.name}: {days_to_harvest(plant, crop)} days to harvest, "
               f"moisture {round(plant.moisture)}")
    return success(msg, water=-1)


# ── Harvest ─────────────────────────────────────────────────────────

def attempt_harvest(state: "FarmState", x: int, y: int) -> ActionResult:
    bad = _guard(state, x, y)
    if bad is not None:
        return bad
    world, wallet = state.world, state.wallet

    plant = world.plant_at(x, y)
    if plant is None:
        return rejected(Reason.NO_PLANT, "Nothing to harvest here.")
    if plant.status is not PlantStatus.RIPE:
        return rejected(Reason.NOT_RIPE, "This plant isn't ripe.")

    crop = state.catalog[plant.crop]
    world.remove_plant(x, y, revert_to=TileType.TILLED_SOIL)
    wallet.money += crop.sell
    wallet.score += int(crop.sell)
    state.bus.emit(Harvested(x=x, y=y, crop=crop.key, value=crop.sell))
    economy.check_unlocks(state)
    return success(f"+{crop.sell:.2f}€ for {crop.name}",
                   money=crop.sell, score=crop.sell)


# ── Hand (read-only) ────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class TileReport:
    x: int
    y: int
    tile: TileType | None
    owned: bool
    crop: str = ""
    status: str = ""
    growth_percent: int = 0
    moisture: str = ""
    text: str = ""


def inspect_tile(state: "FarmState", x: int, y: int) -> TileReport:
    world = state.world
    tile = world.tile_at(x, y)
    owned = world.is_owned(x, y)
    plant = world.plant_at(x, y)

    if plant is not None:
        crop = state.catalog[plant.crop]
        pct = growth_percent(plant, crop)
        label = moisture_label(plant)
        if plant.status is PlantStatus.RIPE:
            text = f"{crop.name}: ready to harvest!"
        else:
            text = f"{crop.name}: {pct}% / moisture: {label}"
        return TileReport(x, y, tile, owned, crop=crop.key,
                          status=plant.status.value, growth_percent=pct,
                          moisture=label, text=text)

    if owned and tile == TileType.TILLED_SOIL:
        text = "Tilled soil — pick a seed to plant."
    elif owned and tile == TileType.GRASS:
        text = "Till the grass first."
    elif tile == TileType.GRASS:
        text = f"Buy this land for {_tun('economy', 'land_cost', LAND_COST):.0f}€."
    elif tile is None:
        text = ""
    else:
        text = tile.name.replace("_", " ").title()
    return TileReport(x, y, tile, owned, text=text)
