"""
core/data.py — TOML → crop catalog loader

Reads ``data/crops.toml`` and builds the immutable ``CropCatalog``.
Each top-level table is one crop; its key becomes the crop ID.

    [carrot]
    name = "Carrot"
    price = 10
    ...

Usage:
    catalog = load_crops()                     # data/crops.toml
    catalog = load_crops("mods/crops.toml")    # any other file
"""

from __future__ import annotations
try:
    import tomllib
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib
from pathlib import Path
from dataclasses import fields

from components.crop_catalog import Crop, CropCatalog


DEFAULT_CROPS_PATH = Path(__file__).resolve().parent.parent / "data" / "crops.toml"


def load_crops(path: str | Path | None = None) -> CropCatalog:
    """Load a crop file.  Falls back to the built-in table if missing."""
    path = Path(path) if path is not None else DEFAULT_CROPS_PATH
    if not path.exists():
        print(f"[CROPS] {path} not found — using built-in catalog")
        return CropCatalog.default()

    with open(path, "rb") as f:
        data = tomllib.load(f)

    crops: list[Crop] = []
    for key, section in data.items():
        if not isinstance(section, dict):
            continue
        crops.append(_build_crop(key, section))

    print(f"[CROPS] Loaded {len(crops)} crops from {path}")
    return CropCatalog.from_crops(crops)


def _build_crop(key: str, section: dict) -> Crop:
    """Build a ``Crop``, skipping unknown fields."""
    valid = {f.name for f in fields(Crop)}
    kwargs = {k: v for k, v in section.items() if k in valid}
    kwargs.setdefault("name", key)
    kwargs["key"] = key
    return Crop(**kwargs)
