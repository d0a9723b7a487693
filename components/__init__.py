"""components — Farm data classes, organised by domain.

Submodules
----------
farm           Coord, Plant, PlantStatus, Farmhouse
crop_catalog   Crop, CropCatalog
resources      SimClock, Wallet, Camera

All public names are re-exported here so code can do
``from components import Plant``.
"""

# ── Farm ─────────────────────────────────────────────────────────────
from components.farm import Coord, Plant, PlantStatus, Farmhouse

# ── Catalog ──────────────────────────────────────────────────────────
from components.crop_catalog import Crop, CropCatalog, DEFAULT_CROPS

# ── World resources / singletons ─────────────────────────────────────
from components.resources import SimClock, Wallet, Camera

__all__ = [
    # farm
    "Coord", "Plant", "PlantStatus", "Farmhouse",
    # catalog
    "Crop", "CropCatalog", "DEFAULT_CROPS",
    # resources
    "SimClock", "Wallet", "Camera",
]
