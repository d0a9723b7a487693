"""test_farm_world.py — Noise, map generation and the tile grid.

Covers simplex determinism, terrain thresholds, shoreline smoothing
across many seeds, farmhouse / starter placement, and the FarmWorld
queries and mutators (tile_at over the farmhouse, shoreline, adjacency,
plant bookkeeping).

Run:  python test_farm_world.py
"""
from __future__ import annotations
import sys, random, traceback

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from components import Coord, Plant, PlantStatus, Farmhouse
from core.constants import TileType
from core.farm import FarmWorld, blank_grid
from logic.noise import make_noise2d, make_perm
from logic.mapgen import (
    classify, generate_tiles, smooth_shoreline, place_farmhouse,
    pick_starter_tiles, generate_world,
)


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

SEEDS = range(1, 21)
STONY = (TileType.FOREST, TileType.MOUNTAIN, TileType.ROCK)


def _world_with_house(w: int = 12, h: int = 12) -> FarmWorld:
    return FarmWorld(tiles=blank_grid(w, h),
                     farmhouse=Farmhouse(x=5, y=5, size=2, placed=True))


# ═════════════════════════════════════════════════════════════════════
#  1. Noise
# ═════════════════════════════════════════════════════════════════════

def test_noise():
    print("\n=== 1: Simplex Noise ===")
    before = _failed

    a, b = make_noise2d(42), make_noise2d(42)
    samples = [(x * 0.37, y * 0.61) for x in range(30) for y in range(30)]
    check(all(a(x, y) == b(x, y) for x, y in samples),
          "Same seed gives an identical field")

    c = make_noise2d(43)
    check(any(a(x, y) != c(x, y) for x, y in samples),
          "Different seeds give different fields")

    values = [a(x, y) for x, y in samples]
    check(all(-1.0 <= v <= 1.0 for v in values),
          "Values stay in [-1, 1]",
          f"min={min(values):.3f} max={max(values):.3f}")
    check(max(values) - min(values) > 0.5, "Field is not flat")

    perm = make_perm(random.Random(7))
    check(len(perm) == 512 and perm[:256] == perm[256:],
          "Permutation is doubled to 512 entries")
    check(sorted(perm[:256]) == list(range(256)),
          "Permutation is a shuffle of 0..255")

    assert _failed == before, "noise section failed"


# ═════════════════════════════════════════════════════════════════════
#  2. Terrain
# ═════════════════════════════════════════════════════════════════════

def test_terrain():
    print("\n=== 2: Terrain Thresholds + Shoreline ===")
    before = _failed

    check(classify(0.0) == TileType.WATER and classify(0.299) == TileType.WATER,
          "Below 0.30 is water")
    check(classify(0.30) == TileType.GRASS and classify(0.599) == TileType.GRASS,
          "0.30 .. 0.60 is grass")
    check(classify(0.60) == TileType.FOREST, "0.60 .. 0.80 is forest")
    check(classify(0.85) == TileType.ROCK, "0.80 .. 0.90 is rock")
    check(classify(0.95) == TileType.MOUNTAIN, "0.90 and up is mountain")

    # Hand-built grid: forest ring around a pond
    tiles = blank_grid(5, 5, TileType.FOREST)
    tiles[2][2] = TileType.WATER
    changed = smooth_shoreline(tiles)
    check(changed == 8, "All 8 neighbours of the pond become grass",
          f"changed={changed}")
    check(tiles[0][0] == TileType.FOREST, "Cells two away keep their terrain")
    check(tiles[2][2] == TileType.WATER, "Water is left alone")

    bad_seeds = []
    for seed in SEEDS:
        grid = generate_tiles(50, 50, seed)
        for y in range(50):
            for x in range(50):
                if grid[y][x] not in STONY:
                    continue
                for n in Coord(x, y).ring():
                    if 0 <= n.x < 50 and 0 <= n.y < 50 and grid[n.y][n.x] == TileType.WATER:
                        bad_seeds.append((seed, x, y))
    check(not bad_seeds,
          f"No forest/rock/mountain touches water over {len(SEEDS)} seeds",
          f"first offenders: {bad_seeds[:3]}")

    check(generate_tiles(50, 50, 99) == generate_tiles(50, 50, 99),
          "Same seed gives the same terrain")

    assert _failed == before, "terrain section failed"


# ═════════════════════════════════════════════════════════════════════
#  3. Farmhouse + starter plot
# ═════════════════════════════════════════════════════════════════════

def test_placement():
    print("\n=== 3: Farmhouse + Starter Plot ===")
    before = _failed

    lake = blank_grid(20, 20, TileType.WATER)
    check(place_farmhouse(lake, random.Random(1)) is None,
          "All-water map: placement fails instead of looping")

    field_ = blank_grid(30, 30)
    fh = place_farmhouse(field_, random.Random(3))
    check(fh is not None and fh.placed, "All-grass map: farmhouse placed")
    if fh is not None:
        check(all(field_[c.y][c.x] == TileType.GRASS for c in fh.footprint()),
              "Footprint sits on grass")
        check(len(fh.perimeter()) == 8, "2x2 farmhouse has 8 perimeter cells")
        starter = pick_starter_tiles(field_, fh, random.Random(3))
        check(len(starter) == 3, "Three starter tiles on open grass",
              f"got {len(starter)}")
        check(all(fh.is_adjacent(c.x, c.y) for c in starter),
              "Starter tiles touch the farmhouse")

    # Pond right next to the house: shoreline cells are skipped
    fh = Farmhouse(x=5, y=5, size=2, placed=True)
    tiles = blank_grid(12, 12)
    tiles[5][3] = TileType.WATER
    tiles[3][5] = TileType.WATER
    tiles[3][6] = TileType.WATER
    starter = pick_starter_tiles(tiles, fh, random.Random(0), count=8)
    check(Coord(4, 5) not in starter and Coord(5, 4) not in starter
          and Coord(6, 4) not in starter,
          "Shoreline perimeter cells are never starter tiles")
    check(len(starter) == 5, "The other five perimeter cells qualify",
          f"got {sorted(starter)}")

    ok_maps = 0
    for seed in SEEDS:
        gen = generate_world(50, 50, seed)
        if not gen.ok:
            continue
        ok_maps += 1
        fh = gen.farmhouse
        w = FarmWorld(tiles=gen.tiles, farmhouse=fh, owned=set(gen.starter))
        good = all(w.tile_at(c.x, c.y) == TileType.GRASS and not w.is_shoreline(c.x, c.y)
                   and fh.is_adjacent(c.x, c.y) for c in gen.starter)
        if not good or len(gen.starter) > 3:
            fail(f"seed {seed}: starter tiles invalid", str(gen.starter))
    check(ok_maps > len(SEEDS) // 2, f"Most seeds yield a usable farm ({ok_maps})")

    a, b = generate_world(50, 50, 5), generate_world(50, 50, 5)
    check(a.tiles == b.tiles and a.starter == b.starter
          and (a.farmhouse is None) == (b.farmhouse is None)
          and (a.farmhouse is None or (a.farmhouse.x, a.farmhouse.y)
               == (b.farmhouse.x, b.farmhouse.y)),
          "Whole world is reproducible from the seed")

    assert _failed == before, "placement section failed"


# ═════════════════════════════════════════════════════════════════════
#  4. FarmWorld queries
# ═════════════════════════════════════════════════════════════════════

def test_world_queries():
    print("\n=== 4: FarmWorld Queries ===")
    before = _failed
    w = _world_with_house()
    w.tiles[5][5] = TileType.FOREST   # underlying value must not leak

    check(all(w.tile_at(c.x, c.y) == TileType.FARMHOUSE
              for c in w.farmhouse.footprint()),
          "Footprint reports FARMHOUSE regardless of the grid")
    check(TileType.FARMHOUSE not in {t for row in w.tiles for t in row},
          "FARMHOUSE is never stored in the grid")
    check(w.tile_at(-1, 0) is None and w.tile_at(0, 12) is None,
          "Out of bounds is None")
    check(all(isinstance(w.tile_at(x, y), TileType)
              for y in range(w.height) for x in range(w.width)),
          "Every in-bounds cell has exactly one TileType")

    w.tiles[0][3] = TileType.WATER
    check(w.is_shoreline(3, 1) and w.is_shoreline(2, 0),
          "Cardinal neighbour of water is shoreline")
    check(not w.is_shoreline(2, 1), "Diagonal neighbour is not shoreline")
    check(not w.is_water(-1, -1), "Off-map is not water")

    check(w.is_adjacent_to_owned_or_farmhouse(5, 4), "Above the farmhouse is adjacent")
    check(w.is_adjacent_to_owned_or_farmhouse(7, 6), "Right of the farmhouse is adjacent")
    check(not w.is_adjacent_to_owned_or_farmhouse(7, 7),
          "Diagonal corner of the farmhouse is not adjacent")
    w.claim(8, 5)
    check(w.is_adjacent_to_owned_or_farmhouse(9, 5), "Next to owned land is adjacent")
    check(not w.is_adjacent_to_owned_or_farmhouse(10, 5), "Two cells away is not")

    assert _failed == before, "world query section failed"


# ═════════════════════════════════════════════════════════════════════
#  5. FarmWorld mutators
# ═════════════════════════════════════════════════════════════════════

def test_world_mutators():
    print("\n=== 5: FarmWorld Mutators ===")
    before = _failed
    w = _world_with_house()

    try:
        w.put_plant(1, 1, Plant(crop="carrot"))
        fail("Planting on grass must raise")
    except ValueError:
        ok("Planting on grass raises ValueError")

    w.till(1, 1)
    w.put_plant(1, 1, Plant(crop="carrot"))
    check(w.plant_at(1, 1) is not None and w.tiles[1][1] == TileType.TILLED_SOIL,
          "Plant sits on tilled soil")
    try:
        w.put_plant(1, 1, Plant(crop="carrot"))
        fail("Second plant on the same tile must raise")
    except ValueError:
        ok("At most one plant per tile")

    removed = w.remove_plant(1, 1)
    check(removed is not None and w.plant_at(1, 1) is None
          and w.tiles[1][1] == TileType.TILLED_SOIL,
          "remove_plant leaves tilled soil by default")
    check(w.remove_plant(1, 1) is None, "Removing twice is a no-op")

    w.till(2, 2)
    w.put_plant(2, 2, Plant(crop="carrot", status=PlantStatus.RIPE))
    check(w.has_viable_plants(), "A ripe plant counts as viable")
    w.plants[Coord(2, 2)].status = PlantStatus.DROWNED
    check(not w.has_viable_plants(), "A drowned plant does not")

    w.reset_plants()
    check(not w.plants and w.count(TileType.TILLED_SOIL) == 0,
          "reset_plants clears plants and tilled soil")

    assert _failed == before, "world mutator section failed"


if __name__ == "__main__":
    sections = [
        ("Noise", test_noise),
        ("Terrain", test_terrain),
        ("Placement", test_placement),
        ("World Queries", test_world_queries),
        ("World Mutators", test_world_mutators),
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
    print(f"  Farm World Tests: {_passed} passed, {_failed} failed  "
          f"(total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
