"""logic/mapgen.py — Procedural farm map generation.

Pipeline (all deterministic for a fixed seed):

    1. sample simplex noise per cell, normalise to 0..1
    2. threshold into terrain (water < grass < forest < rock < mountain)
    3. shoreline smoothing — non-grass land touching water (8-neighbour)
       becomes grass, so forest / rock / mountain never meet water
    4. farmhouse placement — bounded random retries around the map centre
    5. starter plot — up to 3 grass, non-shoreline cells on the farmhouse
       perimeter

Placement can fail (small or watery maps).  That is reported through
``GeneratedMap.ok`` instead of an exception; callers retry with a new
seed.
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field

from components import Coord, Farmhouse
from core.constants import (
    TileType, NOISE_SCALE, WATER_BELOW, GRASS_BELOW, FOREST_BELOW, ROCK_BELOW,
    FARMHOUSE_SIZE, FARMHOUSE_ATTEMPTS, FARMHOUSE_SPREAD, STARTER_TILES,
)
from core.farm import Grid
from core.tuning import get as _tun
from logic.noise import make_noise2d


@dataclass
class GeneratedMap:
    tiles: Grid
    seed: int | None
    farmhouse: Farmhouse | None = None
    starter: list[Coord] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Farmhouse placed and at least one starter tile found."""
        return self.farmhouse is not None and bool(self.starter)


# ── Terrain ─────────────────────────────────────────────────────────

def classify(value: float) -> TileType:
    """Map a 0..1 noise value to terrain."""
    th = "worldgen.thresholds"
    if value < _tun(th, "water", WATER_BELOW):
        return TileType.WATER
    if value < _tun(th, "grass", GRASS_BELOW):
        return TileType.GRASS
    if value < _tun(th, "forest", FOREST_BELOW):
        return TileType.FOREST
    if value < _tun(th, "rock", ROCK_BELOW):
        return TileType.ROCK
    return TileType.MOUNTAIN


def generate_tiles(width: int, height: int, seed: int | None) -> Grid:
    noise = make_noise2d(seed)
    scale = _tun("worldgen", "noise_scale", NOISE_SCALE)
    tiles: Grid = []
    for y in range(height):
        row = []
        for x in range(width):
            value = (noise(x * scale, y * scale) + 1.0) / 2.0
            row.append(classify(value))
        tiles.append(row)
    smooth_shoreline(tiles)
    return tiles


def smooth_shoreline(tiles: Grid) -> int:
    """Turn forest / rock / mountain next to water into grass.

    Only ever writes GRASS, so the set of water cells is unchanged and
    a single in-place pass is enough.  Returns the number of cells changed.
    """
    height = len(tiles)
    width = len(tiles[0]) if height else 0

    def _water(x: int, y: int) -> bool:
        return 0 <= x < width and 0 <= y < height and tiles[y][x] == TileType.WATER

    changed = 0
    for y in range(height):
        for x in range(width):
            if tiles[y][x] in (TileType.GRASS, TileType.WATER):
                continue
            if any(_water(nx, ny) for nx, ny in Coord(x, y).ring()):
                tiles[y][x] = TileType.GRASS
                changed += 1
    return changed


# ── Farmhouse + starter plot ────────────────────────────────────────

def place_farmhouse(tiles: Grid, rng: random.Random,
                    size: int = FARMHOUSE_SIZE,
                    attempts: int | None = None) -> Farmhouse | None:
    """Try up to *attempts* random spots; ``None`` if none is all grass."""
    height = len(tiles)
    width = len(tiles[0]) if height else 0
    if attempts is None:
        attempts = _tun("worldgen", "farmhouse_attempts", FARMHOUSE_ATTEMPTS)
    spread = _tun("worldgen", "farmhouse_spread", FARMHOUSE_SPREAD)

    for _ in range(attempts):
        hx = width // 2 + rng.randint(-spread, spread - 1)
        hy = height // 2 + rng.randint(-spread, spread - 1)
        if hx < 0 or hy < 0 or hx + size > width or hy + size > height:
            continue
        if all(tiles[hy + dy][hx + dx] == TileType.GRASS
               for dy in range(size) for dx in range(size)):
            return Farmhouse(x=hx, y=hy, size=size, placed=True)
    return None


def pick_starter_tiles(tiles: Grid, farmhouse: Farmhouse,
                       rng: random.Random,
                       count: int | None = None) -> list[Coord]:
    """Up to *count* shuffled perimeter cells that are grass and not shoreline."""
    height = len(tiles)
    width = len(tiles[0]) if height else 0
    if count is None:
        count = _tun("worldgen", "starter_tiles", STARTER_TILES)

    def _ok(c: Coord) -> bool:
        if not (0 <= c.x < width and 0 <= c.y < height):
            return False
        if tiles[c.y][c.x] != TileType.GRASS:
            return False
        return not any(0 <= n.x < width and 0 <= n.y < height
                       and tiles[n.y][n.x] == TileType.WATER
                       for n in c.cardinal())

    candidates = farmhouse.perimeter()
    rng.shuffle(candidates)
    return [c for c in candidates if _ok(c)][:count]


def place_farmhouse_and_starters(gen: GeneratedMap, rng: random.Random,
                                 size: int = FARMHOUSE_SIZE) -> GeneratedMap:
    gen.farmhouse = place_farmhouse(gen.tiles, rng, size)
    gen.starter = []
    if gen.farmhouse is None:
        print(f"[MAPGEN] seed={gen.seed}: no farmhouse spot found")
        return gen
    gen.starter = pick_starter_tiles(gen.tiles, gen.farmhouse, rng)
    return gen


def generate_world(width: int, height: int, seed: int | None,
                   size: int = FARMHOUSE_SIZE) -> GeneratedMap:
    """Full pipeline for one seed."""
    tiles = generate_tiles(width, height, seed)
    gen = GeneratedMap(tiles=tiles, seed=seed)
    # Separate stream so placement does not shift the terrain sampling
    rng = random.Random(f"farmhouse:{seed}") if seed is not None else random.Random()
    place_farmhouse_and_starters(gen, rng, size)
    if gen.farmhouse is not None:
        print(f"[MAPGEN] seed={seed}: {width}x{height}, farmhouse at "
              f"({gen.farmhouse.x},{gen.farmhouse.y}), "
              f"{len(gen.starter)} starter tiles")
    return gen
