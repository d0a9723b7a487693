"""core/farm.py — Tile grid, ownership and plants; the simulation aggregate.

``FarmWorld`` is the mutable map: a ``width × height`` grid of
``TileType`` values indexed ``tiles[y][x]``, the farmhouse overlay, the
set of owned tiles and the plants keyed by ``Coord``.

``FarmState`` bundles everything one running game needs — world,
wallet, clock, crop catalog and event bus — and is passed explicitly to
every rule function.  Several states can coexist (tests do this a lot).

Invariants kept by the mutators, not by construction:
  - a tile holding a plant is TILLED_SOIL in the grid
  - owned tiles are never water and never inside the farmhouse
"""

from __future__ import annotations
from dataclasses import dataclass, field

from components import (
    Coord, Plant, Farmhouse, CropCatalog, SimClock, Wallet,
)
from core.constants import TileType, MAP_WIDTH, MAP_HEIGHT
from core.events import EventBus

Grid = list[list[TileType]]


def blank_grid(width: int, height: int,
               fill: TileType = TileType.GRASS) -> Grid:
    return [[fill] * width for _ in range(height)]


@dataclass
class FarmWorld:
    tiles: Grid = field(default_factory=lambda: blank_grid(MAP_WIDTH, MAP_HEIGHT))
    farmhouse: Farmhouse = field(default_factory=Farmhouse)
    owned: set[Coord] = field(default_factory=set)
    plants: dict[Coord, Plant] = field(default_factory=dict)

    @property
    def height(self) -> int:
        return len(self.tiles)

    @property
    def width(self) -> int:
        return len(self.tiles[0]) if self.tiles else 0

    # ── Queries ──────────────────────────────────────────────────────

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> TileType | None:
        """Tile type at (x, y); FARMHOUSE over its footprint; ``None`` off-map."""
        if not self.in_bounds(x, y):
            return None
        if self.farmhouse.contains(x, y):
            return TileType.FARMHOUSE
        return self.tiles[y][x]

    def is_water(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.tiles[y][x] == TileType.WATER

    def is_shoreline(self, x: int, y: int) -> bool:
        """Any cardinal neighbour is water."""
        return any(self.is_water(nx, ny) for nx, ny in Coord(x, y).cardinal())

    def is_owned(self, x: int, y: int) -> bool:
        return Coord(x, y) in self.owned

    def is_adjacent_to_owned_or_farmhouse(self, x: int, y: int) -> bool:
        if any(c in self.owned for c in Coord(x, y).cardinal()):
            return True
        return self.farmhouse.is_adjacent(x, y)

    def plant_at(self, x: int, y: int) -> Plant | None:
        return self.plants.get(Coord(x, y))

    def viable_plants(self) -> list[Plant]:
        return [p for p in self.plants.values() if p.status.is_viable]

    def has_viable_plants(self) -> bool:
        return any(p.status.is_viable for p in self.plants.values())

    def count(self, tile: TileType) -> int:
        return sum(row.count(tile) for row in self.tiles)

    # ── Mutators ─────────────────────────────────────────────────────

    def till(self, x: int, y: int) -> None:
        self.tiles[y][x] = TileType.TILLED_SOIL

    def claim(self, x: int, y: int) -> None:
        self.owned.add(Coord(x, y))

    def put_plant(self, x: int, y: int, plant: Plant) -> None:
        key = Coord(x, y)
        if key in self.plants:
            raise ValueError(f"tile {key} already has a plant")
        if self.tiles[y][x] != TileType.TILLED_SOIL:
            raise ValueError(f"tile {key} is not tilled soil")
        self.plants[key] = plant

    def remove_plant(self, x: int, y: int,
                     revert_to: TileType = TileType.TILLED_SOIL) -> Plant | None:
        """Remove and return the plant at (x, y); the tile becomes *revert_to*."""
        plant = self.plants.pop(Coord(x, y), None)
        if plant is not None:
            self.tiles[y][x] = revert_to
        return plant

    def reset_plants(self) -> None:
        """Drop every plant and turn tilled soil back into grass."""
        self.plants.clear()
        for row in self.tiles:
            for x, tile in enumerate(row):
                if tile == TileType.TILLED_SOIL:
                    row[x] = TileType.GRASS


@dataclass
class FarmState:
    """Everything a single running game owns."""
    world: FarmWorld = field(default_factory=FarmWorld)
    wallet: Wallet = field(default_factory=Wallet)
    clock: SimClock = field(default_factory=SimClock)
    catalog: CropCatalog = field(default_factory=CropCatalog.default)
    bus: EventBus = field(default_factory=EventBus)
    game_over: bool = False
    seed: int | None = None

    def cheapest_price(self) -> float:
        return self.catalog.cheapest_price(self.wallet.score)
