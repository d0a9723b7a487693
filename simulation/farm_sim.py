"""simulation/farm_sim.py — Top-level farm simulation facade.

Provides the ``FarmSim`` class that owns one ``FarmState`` aggregate and
exposes everything the front end needs: world generation, the per-frame
``tick()``, and one ``attempt_*`` method per player intent.

Usage in farm_scene.py::

    # In on_enter():
    self.sim = FarmSim(load_crops())
    self.sim.generate_world(seed)

    # In update():
    for event in self.sim.tick(dt * 1000.0):
        ...

    # On click:
    result = self.sim.attempt_till(tx, ty)

Every ``attempt_*`` drains the event bus and attaches what the action
emitted to ``result.events``; ``tick()`` returns the drained events.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Any

from components import Coord, CropCatalog, Crop, Wallet
from core.constants import (
    TileType, MAP_WIDTH, MAP_HEIGHT, FARMHOUSE_SIZE, MAX_REGENERATIONS,
    START_MONEY, START_WATER,
)
from core.farm import FarmState, FarmWorld
from core import tuning
from core.tuning import get as _tun
from logic import mapgen
from logic.actions import (
    ActionResult, TileReport, attempt_till, attempt_plant, attempt_water,
    attempt_harvest, inspect_tile,
)
from logic.tick import tick_farm, advance_day
from simulation import economy


class RegenerationRequired(RuntimeError):
    """No usable map could be generated within the retry budget."""

    def __init__(self, seed: int, attempts: int) -> None:
        super().__init__(f"no valid farm after {attempts} seeds starting at {seed}")
        self.seed = seed
        self.attempts = attempts


@dataclass(frozen=True, slots=True)
class WorldSnapshot:
    """Read-only view of a running farm for renderers and tests."""
    seed: int | None
    width: int
    height: int
    tiles: tuple[tuple[TileType, ...], ...]
    farmhouse: tuple[int, int, int]
    owned: frozenset[Coord]
    plants: tuple[tuple[Coord, str, str, int, float], ...]
    day: int
    money: float
    score: int
    water: float
    paused: bool
    game_over: bool


def new_state(catalog: CropCatalog | None = None) -> FarmState:
    """A blank farm with the tuned starting money and water."""
    catalog = catalog if catalog is not None else CropCatalog.default()
    wallet = Wallet(
        money=float(_tun("economy", "start_money", START_MONEY)),
        water=float(_tun("economy", "start_water", START_WATER)),
    )
    wallet.unlocked_count = len(catalog.available(wallet.score))
    return FarmState(wallet=wallet, catalog=catalog)


class FarmSim:
    """Orchestrates one farm: generation, clock and player actions."""

    def __init__(self, catalog: CropCatalog | None = None,
                 width: int | None = None, height: int | None = None) -> None:
        self.catalog = catalog if catalog is not None else CropCatalog.default()
        self.width = width or _tun("worldgen", "width", MAP_WIDTH)
        self.height = height or _tun("worldgen", "height", MAP_HEIGHT)
        self.state = new_state(self.catalog)

    # ── Setup ────────────────────────────────────────────────────────

    def generate_world(self, seed: int | None = None) -> WorldSnapshot:
        """Generate terrain, farmhouse and starter plot; start a fresh game.

        Seeds ``seed, seed + 1, ...`` are tried until one yields a placed
        farmhouse with at least one starter tile.  Raises
        ``RegenerationRequired`` when ``worldgen.max_regenerations`` seeds
        all fail.
        """
        if seed is None:
            seed = random.randrange(2 ** 31)
        attempts = _tun("worldgen", "max_regenerations", MAX_REGENERATIONS)
        size = _tun("worldgen", "farmhouse_size", FARMHOUSE_SIZE)

        for i in range(attempts):
            gen = mapgen.generate_world(self.width, self.height, seed + i, size)
            if gen.ok:
                self._install(gen)
                return self.snapshot()
            print(f"[FARM] seed={seed + i} unusable, retrying")
        raise RegenerationRequired(seed, attempts)

    def _install(self, gen: mapgen.GeneratedMap) -> None:
        state = new_state(self.catalog)
        state.world = FarmWorld(tiles=gen.tiles, farmhouse=gen.farmhouse,
                                owned=set(gen.starter))
        state.seed = gen.seed
        self.state = state
        print(f"[FARM] New farm (seed={gen.seed}): "
              f"{len(state.world.owned)} starter tiles, "
              f"money={state.wallet.money:.2f}")

    def reroll_farmhouse(self, rng: random.Random | None = None) -> bool:
        """Re-place farmhouse and starter plot on the current terrain.

        Plants are cleared either way; ownership is replaced only when a
        new spot was found.  Money, water and score are kept.
        """
        if self.state.game_over:
            return False
        world = self.state.world
        world.reset_plants()
        # losing every plant can leave nothing to farm with
        if economy.check_game_over(self.state):
            return False
        gen = mapgen.GeneratedMap(tiles=world.tiles, seed=self.state.seed)
        size = _tun("worldgen", "farmhouse_size", FARMHOUSE_SIZE)
        mapgen.place_farmhouse_and_starters(gen, rng or random.Random(), size)
        if not gen.ok:
            return False
        world.farmhouse = gen.farmhouse
        world.owned = set(gen.starter)
        print(f"[FARM] Farmhouse moved to ({gen.farmhouse.x},{gen.farmhouse.y})")
        return True

    def drain_events(self) -> list[Any]:
        """Events raised outside tick / attempt_* (reroll game over)."""
        return self.state.bus.drain()

    # ── Clock ────────────────────────────────────────────────────────

    def tick(self, elapsed_ms: float) -> list[Any]:
        """Advance continuous time; returns the notification events emitted."""
        tick_farm(self.state, elapsed_ms)
        return self.state.bus.drain()

    def advance_day(self) -> list[Any]:
        """Force one day rollover (debug key, tests)."""
        if not self.state.game_over:
            advance_day(self.state)
        return self.state.bus.drain()

    def set_paused(self, paused: bool) -> None:
        # game over keeps the clock stopped for good
        self.state.clock.paused = bool(paused) or self.state.game_over

    def toggle_pause(self) -> bool:
        self.set_paused(not self.state.clock.paused)
        return self.state.clock.paused

    @property
    def paused(self) -> bool:
        return self.state.clock.paused

    def is_game_over(self) -> bool:
        return self.state.game_over

    # ── Queries ──────────────────────────────────────────────────────

    def tile_at(self, x: int, y: int) -> TileType | None:
        return self.state.world.tile_at(x, y)

    def inspect(self, x: int, y: int) -> TileReport:
        return inspect_tile(self.state, x, y)

    def available_crops(self) -> list[Crop]:
        return self.catalog.available(self.state.wallet.score)

    def quote_water(self) -> economy.WaterQuote:
        return economy.quote_water(self.state)

    def snapshot(self) -> WorldSnapshot:
        state = self.state
        world, wallet, fh = state.world, state.wallet, state.world.farmhouse
        return WorldSnapshot(
            seed=state.seed,
            width=world.width,
            height=world.height,
            tiles=tuple(tuple(row) for row in world.tiles),
            farmhouse=(fh.x, fh.y, fh.size),
            owned=frozenset(world.owned),
            plants=tuple((c, p.crop, p.status.value, p.growth_stage, p.moisture)
                         for c, p in world.plants.items()),
            day=state.clock.day,
            money=wallet.money,
            score=wallet.score,
            water=wallet.water,
            paused=state.clock.paused,
            game_over=state.game_over,
        )

    # ── Player actions ───────────────────────────────────────────────

    def _finish(self, result: ActionResult) -> ActionResult:
        return result.with_events(self.state.bus.drain())

    def attempt_till(self, x: int, y: int) -> ActionResult:
        return self._finish(attempt_till(self.state, x, y))

    def attempt_plant(self, x: int, y: int, crop_key: str) -> ActionResult:
        return self._finish(attempt_plant(self.state, x, y, crop_key))

    def attempt_water(self, x: int, y: int) -> ActionResult:
        return self._finish(attempt_water(self.state, x, y))

    def attempt_harvest(self, x: int, y: int) -> ActionResult:
        return self._finish(attempt_harvest(self.state, x, y))

    def attempt_purchase_land(self, x: int, y: int) -> ActionResult:
        return self._finish(economy.attempt_purchase_land(self.state, x, y))

    def attempt_purchase_water(self, amount: int) -> ActionResult:
        return self._finish(economy.attempt_purchase_water(self.state, amount))

    # ── Debug ────────────────────────────────────────────────────────

    def debug_info(self) -> dict:
        state = self.state
        return {
            "seed": state.seed,
            "day": state.clock.day,
            "ms_into_day": round(state.clock.ms_into_day),
            "owned": len(state.world.owned),
            "plants": len(state.world.plants),
            "viable": len(state.world.viable_plants()),
            "money": round(state.wallet.money, 2),
            "water": state.wallet.water,
            "score": state.wallet.score,
            "tuning": tuning.source().name if tuning.source() else "-",
            "bus": state.bus.stats(),
        }
