"""core/constants.py — Shared constants used across the codebase.

Centralises magic numbers so there's exactly one place to change them.
Every gameplay value here is the *default*; ``data/tuning.toml`` may
override it at startup (see ``core.tuning``).

Unit System
-----------
All positions are measured in **tiles** (integer grid cells).

    Position                tile    (x = column, y = row)
    Time                    ms      (real milliseconds of frame time)
    Game time               day     (one day = ``DAY_DURATION_MS``)
    Money                   €       (float, two decimals in the HUD)
    Moisture                —       (0 = dry, 10 = flooded)
    Water stock             units   (one unit per watering)

Rendering converts to pixels via ``TILE_SIZE`` (px per tile).
No gameplay code should reference pixels — only the renderer.

Moisture Bands
~~~~~~~~~~~~~~
     0        withered (terminal)
     2 – 8    optimal: the plant grows on day rollover
    10        drowned (terminal)
"""

from enum import IntEnum

# ── Map ─────────────────────────────────────────────────────────────
MAP_WIDTH: int = 50
MAP_HEIGHT: int = 50
NOISE_SCALE: float = 0.05
FARMHOUSE_SIZE: int = 2
FARMHOUSE_ATTEMPTS: int = 200
FARMHOUSE_SPREAD: int = 15          # candidates within ±15 tiles of centre
STARTER_TILES: int = 3
MAX_REGENERATIONS: int = 20

# Noise thresholds, ascending: anything above ROCK is mountain
WATER_BELOW: float = 0.30
GRASS_BELOW: float = 0.60
FOREST_BELOW: float = 0.80
ROCK_BELOW: float = 0.90

# ── Game-time conversion ────────────────────────────────────────────
DAY_DURATION_MS: float = 10000.0    # real ms per in-game day

# ── Economy ─────────────────────────────────────────────────────────
START_MONEY: float = 100.0
START_WATER: float = 100.0
LAND_COST: float = 100.0
TAX_PER_TILE: float = 0.25
MAX_WATER: float = 999.0
WATER_UNIT_PRICE: float = 0.5
WATER_PER_PURCHASE: int = 10        # per-transaction cap

# ── Plants ──────────────────────────────────────────────────────────
START_MOISTURE: float = 4.0
MAX_MOISTURE: float = 10.0
OPTIMAL_MIN: float = 2.0
OPTIMAL_MAX: float = 8.0
WATER_PER_USE: float = 1.0


class TileType(IntEnum):
    """Tile IDs.  ``FARMHOUSE`` is an overlay and never stored in a grid."""
    WATER = 0
    GRASS = 1
    FOREST = 2
    MOUNTAIN = 3
    ROCK = 4
    TILLED_SOIL = 5
    FARMHOUSE = 6


# Render
TILE_SIZE = 24

# Simple tile palette: index → color
TILE_COLORS = {
    TileType.WATER: (40, 90, 160),
    TileType.GRASS: (70, 140, 60),
    TileType.FOREST: (30, 85, 40),
    TileType.MOUNTAIN: (120, 115, 110),
    TileType.ROCK: (95, 95, 100),
    TileType.TILLED_SOIL: (110, 75, 45),
    TileType.FARMHOUSE: (170, 60, 45),
}
