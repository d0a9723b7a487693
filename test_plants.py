"""test_plants.py — Plant moisture / growth state machine and player tools.

Exercises the continuous moisture drain, watering and drowning, daily
growth inside the optimal band, ripening, and the hoe / seed bag /
watering can / harvest rules on a small hand-built farm.

Run:  python test_plants.py
"""
from __future__ import annotations
import sys, traceback

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from components import Coord, Crop, CropCatalog, Farmhouse, Plant, PlantStatus
from core.constants import TileType
from core.events import PlantWithered, PlantDrowned, PlantRipened, Harvested
from core.farm import FarmWorld, blank_grid
from logic.actions import (
    Reason, attempt_till, attempt_plant, attempt_water, attempt_harvest,
    inspect_tile,
)
from logic.plants import (
    moisture_system, growth_system, water_plant, moisture_label,
    day_duration_ms,
)
from logic.tick import tick_farm
from simulation.farm_sim import new_state


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    msg = f"  [FAIL] {label}"
    if detail:
        msg += f" — {detail}"
    print(msg)

def check(cond: bool, label: str, detail: str = ""):
    if cond:
        ok(label)
    else:
        fail(label, detail)

CARROT = Crop("carrot", "Carrot", 10, 30, 10, 1.0, 0)
DAY = day_duration_ms()


def _farm(catalog: CropCatalog | None = None):
    """12x12 grass farm, house at (5,5), owning the two cells right of it."""
    state = new_state(catalog)
    state.world = FarmWorld(
        tiles=blank_grid(12, 12),
        farmhouse=Farmhouse(x=5, y=5, size=2, placed=True),
        owned={Coord(7, 5), Coord(7, 6)},
    )
    return state


def _planted(moisture: float = 4.0, crop: Crop = CARROT):
    state = _farm(CropCatalog.from_crops([crop]))
    state.world.till(7, 5)
    state.world.put_plant(7, 5, Plant(crop=crop.key, moisture=moisture))
    return state, state.world.plant_at(7, 5)


def _drained(state) -> list:
    return state.bus.drain()


# ═════════════════════════════════════════════════════════════════════
#  1. Moisture drain
# ═════════════════════════════════════════════════════════════════════

def test_moisture_drain():
    print("\n=== 1: Continuous Moisture Drain ===")
    before = _failed
    state, plant = _planted()

    readings = [plant.moisture]
    for _ in range(30):
        moisture_system(state, DAY / 10)
        readings.append(plant.moisture)
    check(all(b < a for a, b in zip(readings, readings[1:])),
          "Moisture strictly decreases while alive and time passes")
    check(abs(plant.moisture - 1.0) < 1e-9,
          "Three days at water_need 1 drains 3 units", f"{plant.moisture}")

    state, plant = _planted()
    for day in range(5):
        moisture_system(state, DAY)
    check(plant.status is PlantStatus.WITHERED,
          "Five dry days wither a plant starting at 4")
    check(plant.moisture <= 0, "Withered plant has no moisture left")
    events = _drained(state)
    check(sum(isinstance(e, PlantWithered) for e in events) == 1,
          "PlantWithered is emitted exactly once")

    frozen = plant.moisture
    moisture_system(state, DAY)
    check(plant.moisture == frozen, "Dead plants stop draining")

    growth_system(state)
    check(plant.growth_stage == 0, "Withered plant never grows")

    assert _failed == before, "moisture drain section failed"


# ═════════════════════════════════════════════════════════════════════
#  2. Watering + drowning
# ═════════════════════════════════════════════════════════════════════

def test_watering():
    print("\n=== 2: Watering + Drowning ===")
    before = _failed

    state, plant = _planted(moisture=9.0)
    water_before = state.wallet.water
    r = attempt_water(state, 7, 5)
    check(r.ok, "Watering a living plant succeeds")
    check(plant.moisture == 10.0 and plant.status is PlantStatus.DROWNED,
          "9 -> 10 drowns the plant", f"{plant.moisture} {plant.status}")
    check(state.wallet.water == water_before - 1, "One unit of water used")
    check(any(isinstance(e, PlantDrowned) for e in _drained(state)),
          "PlantDrowned emitted")

    r = attempt_water(state, 7, 5)
    check(not r.ok and r.reason is Reason.PLANT_UNHEALTHY,
          "Watering a drowned plant is rejected", str(r.reason))
    check(plant.moisture == 10.0 and state.wallet.water == water_before - 1,
          "Rejected watering changes nothing")

    state, plant = _planted(moisture=9.5)
    water_plant(state, 7, 5, plant)
    check(plant.moisture == 10.0, "Watering clamps at 10")

    state, plant = _planted(moisture=5.0)
    state.wallet.water = 0
    r = attempt_water(state, 7, 5)
    check(r.reason is Reason.INSUFFICIENT_WATER and plant.moisture == 5.0,
          "Empty tank: INSUFFICIENT_WATER, moisture unchanged")

    state.wallet.water = 0.5
    r = attempt_water(state, 7, 5)
    check(r.reason is Reason.INSUFFICIENT_WATER and state.wallet.water == 0.5,
          "Half a unit left is not enough to water")

    state.wallet.water = 3
    r = attempt_water(state, 8, 8)
    check(r.reason is Reason.NO_PLANT, "Nothing to water on bare ground")

    assert _failed == before, "watering section failed"


# ═════════════════════════════════════════════════════════════════════
#  3. Daily growth + ripening
# ═════════════════════════════════════════════════════════════════════

def test_growth():
    print("\n=== 3: Daily Growth + Ripening ===")
    before = _failed

    state, plant = _planted(moisture=5.0)
    for day in range(1, 10):
        growth_system(state)
    check(plant.growth_stage == 9 and plant.status is PlantStatus.ALIVE,
          "Nine optimal days: stage 9, still alive")
    growth_system(state)
    check(plant.growth_stage == 10 and plant.status is PlantStatus.RIPE,
          "Tenth day: stage reaches growth_time and the plant is ripe")
    check(sum(isinstance(e, PlantRipened) for e in _drained(state)) == 1,
          "PlantRipened emitted once")
    for _ in range(5):
        growth_system(state)
    check(plant.growth_stage == 10, "Stage never exceeds growth_time")

    for m, label in ((1.9, "too dry"), (8.1, "too wet")):
        state, plant = _planted(moisture=m)
        growth_system(state)
        check(plant.growth_stage == 0, f"No growth when {label} ({m})")
        check(moisture_label(plant) == label, f"Label reads '{label}'")

    for m in (2.0, 8.0):
        state, plant = _planted(moisture=m)
        growth_system(state)
        check(plant.growth_stage == 1, f"Band edge {m} is inclusive")

    state, plant = _planted(moisture=5.0)
    plant.status = PlantStatus.RIPE
    moisture_system(state, DAY * 3)
    check(plant.moisture == 5.0, "Ripe plants no longer drain")

    assert _failed == before, "growth section failed"


# ═════════════════════════════════════════════════════════════════════
#  4. Tools
# ═════════════════════════════════════════════════════════════════════

def test_tools():
    print("\n=== 4: Hoe / Seeds / Harvest ===")
    before = _failed
    state = _farm()
    world, wallet = state.world, state.wallet

    check(attempt_till(state, 0, 0).reason is Reason.NOT_OWNED, "Hoe on unowned land")
    check(attempt_till(state, 99, 0).reason is Reason.OUT_OF_BOUNDS, "Hoe off the map")
    check(attempt_plant(state, 7, 5, "carrot").reason is Reason.WRONG_TILE_TYPE,
          "Seeds need tilled soil")
    r = attempt_till(state, 7, 5)
    check(r.ok and world.tile_at(7, 5) == TileType.TILLED_SOIL, "Hoe tills owned grass")
    check(attempt_till(state, 7, 5).reason is Reason.WRONG_TILE_TYPE,
          "Tilling twice is rejected")

    check(attempt_plant(state, 7, 5, "turnip").reason is Reason.UNKNOWN_CROP,
          "Unknown seed rejected")
    check(attempt_plant(state, 7, 5, "pumpkin").reason is Reason.CROP_LOCKED,
          "Locked seed rejected")

    money = wallet.money
    r = attempt_plant(state, 7, 5, "carrot")
    check(r.ok and wallet.money == money - 10, "Carrot costs 10", f"{wallet.money}")
    plant = world.plant_at(7, 5)
    check(plant is not None and plant.moisture == 4.0 and plant.growth_stage == 0
          and plant.status is PlantStatus.ALIVE,
          "New plant: stage 0, moisture 4, alive")
    check(attempt_plant(state, 7, 5, "carrot").reason is Reason.ALREADY_OCCUPIED,
          "One plant per tile")

    world.till(7, 6)
    wallet.money = 3
    check(attempt_plant(state, 7, 6, "carrot").reason is Reason.INSUFFICIENT_FUNDS,
          "Can't afford the seed")
    wallet.money = money

    check(attempt_till(state, 7, 5).reason is Reason.PLANT_HEALTHY,
          "Hoe refuses a healthy plant")
    check(attempt_harvest(state, 7, 5).reason is Reason.NOT_RIPE,
          "Unripe plant can't be harvested")

    plant.status = PlantStatus.WITHERED
    r = attempt_till(state, 7, 5)
    check(r.ok and world.plant_at(7, 5) is None
          and world.tile_at(7, 5) == TileType.TILLED_SOIL,
          "Hoe clears a dead plant back to tilled soil")

    assert _failed == before, "tools section failed"


# ═════════════════════════════════════════════════════════════════════
#  5. Carrot scenario + harvest idempotence
# ═════════════════════════════════════════════════════════════════════

def test_carrot_scenario():
    print("\n=== 5: Carrot Scenario ===")
    before = _failed
    state = _farm(CropCatalog.from_crops([CARROT]))
    wallet = state.wallet
    check(wallet.money == 100, "Start with 100")

    attempt_till(state, 7, 5)
    attempt_plant(state, 7, 5, "carrot")
    check(wallet.money == 90, "Planting a carrot leaves 90")

    plant = state.world.plant_at(7, 5)
    for day in range(10):
        plant.moisture = 5.0          # hold inside [2, 8]
        growth_system(state)
    check(plant.growth_stage == 10 and plant.status is PlantStatus.RIPE,
          "Ten optimal days ripen the carrot")

    r = attempt_harvest(state, 7, 5)
    check(r.ok and wallet.money == 120 and wallet.score == 30,
          "Harvest credits 30 money and 30 score",
          f"money={wallet.money} score={wallet.score}")
    check(state.world.tile_at(7, 5) == TileType.TILLED_SOIL
          and state.world.plant_at(7, 5) is None,
          "Harvested tile is tilled soil, plant gone")
    check(any(isinstance(e, Harvested) and e.value == 30 for e in _drained(state)),
          "Harvested event carries the sale value")

    r = attempt_harvest(state, 7, 5)
    check(not r.ok and r.reason is Reason.NO_PLANT and wallet.money == 120,
          "Second harvest is a no-op")

    report = inspect_tile(state, 7, 5)
    check(report.owned and report.tile == TileType.TILLED_SOIL,
          "Hand tool reports owned tilled soil")

    assert _failed == before, "carrot scenario section failed"


# ═════════════════════════════════════════════════════════════════════
#  6. Frame splitting
# ═════════════════════════════════════════════════════════════════════

def test_frame_splitting():
    print("\n=== 6: One Long Frame vs Many Short Ones ===")
    before = _failed

    # 3.5 at dawn: 2.5 at the first rollover (grows), 1.5 at the second (too dry)
    big, big_plant = _planted(moisture=3.5)
    days = tick_farm(big, DAY * 2)
    check(days == 2, "A two-day frame rolls over twice", f"{days}")

    small, small_plant = _planted(moisture=3.5)
    rolled = sum(tick_farm(small, DAY / 100) for _ in range(200))
    check(rolled == 2 and small.clock.day == big.clock.day, "Same day after 200 short frames")

    check(small_plant.growth_stage == 1,
          "Short frames: only the first rollover was in the band",
          f"stage={small_plant.growth_stage}")
    check(big_plant.growth_stage == small_plant.growth_stage,
          "One long frame grows exactly like many short ones",
          f"big={big_plant.growth_stage} small={small_plant.growth_stage}")
    check(abs(big_plant.moisture - small_plant.moisture) < 1e-6
          and abs(big_plant.moisture - 1.5) < 1e-6,
          "Both end the second day at 1.5 moisture", f"{big_plant.moisture}")
    check(abs(big.clock.ms_into_day) < 1e-6, "Long frame ends exactly on the boundary")

    assert _failed == before, "frame splitting section failed"


if __name__ == "__main__":
    sections = [
        ("Moisture Drain", test_moisture_drain),
        ("Watering", test_watering),
        ("Growth", test_growth),
        ("Tools", test_tools),
        ("Carrot Scenario", test_carrot_scenario),
        ("Frame Splitting", test_frame_splitting),
    ]

    for name, fn in sections:
        try:
            fn()
        except AssertionError:
            pass  # already counted by fail()
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name} — unhandled exception:")
            traceback.print_exc()

    total = _passed + _failed
    print(f"\n{'=' * 60}")
    print(f"  Plant Tests: {_passed} passed, {_failed} failed  "
          f"(total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
