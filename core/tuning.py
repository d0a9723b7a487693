"""core/tuning.py — Farm tunables read from ``data/tuning.toml``.

``core.constants`` holds the defaults; the TOML file only overrides
them.  Every lookup passes its default, so a farm built before (or
without) ``load()`` plays with the stock numbers::

    from core.tuning import get as _tun
    cost = _tun("economy", "land_cost", LAND_COST)

Tables nest with dots: ``get("worldgen.thresholds", "water", 0.30)``.
F4 in the farm scene calls ``reload()``.
"""

from __future__ import annotations
from pathlib import Path

try:
    import tomllib                         # Python 3.11+
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib


DEFAULT_PATH = Path(__file__).resolve().parent.parent / "data" / "tuning.toml"

_tables: dict = {}
_source: Path | None = None


def load(path: str | Path | None = None) -> None:
    """Read *path* (default ``data/tuning.toml``) and replace every override."""
    global _tables, _source
    _source = DEFAULT_PATH if path is None else Path(path)

    if not _source.exists():
        print(f"[TUNING] {_source} not found, farm uses stock numbers")
        _tables = {}
        return

    with open(_source, "rb") as f:
        _tables = tomllib.load(f)
    print(f"[TUNING] {_leaf_count(_tables)} overrides from {_source.name}")


def reload() -> None:
    """Re-read the last loaded file."""
    load(_source)


def reset() -> None:
    """Drop all overrides; lookups return their defaults again."""
    global _tables, _source
    _tables = {}
    _source = None


def source() -> Path | None:
    """Path of the file currently in effect, or ``None``."""
    return _source


def get(section: str, key: str, default=None):
    """Override for ``[section] key``, else *default*."""
    table = _tables
    for part in section.split("."):
        table = table.get(part) if isinstance(table, dict) else None
        if table is None:
            return default
    if not isinstance(table, dict):
        return default
    return table.get(key, default)


def _leaf_count(table: dict) -> int:
    return sum(_leaf_count(v) if isinstance(v, dict) else 1 for v in table.values())
