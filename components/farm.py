"""components.farm — Per-tile farm data: coordinates, plants, farmhouse."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from core.constants import START_MOISTURE, FARMHOUSE_SIZE


class Coord(NamedTuple):
    """Tile coordinate used as a dict / set key (x = column, y = row)."""
    x: int
    y: int

    def cardinal(self) -> tuple["Coord", "Coord", "Coord", "Coord"]:
        """Up, down, left, right."""
        x, y = self
        return (Coord(x, y - 1), Coord(x, y + 1),
                Coord(x - 1, y), Coord(x + 1, y))

    def ring(self) -> list["Coord"]:
        """All 8 neighbours."""
        x, y = self
        return [Coord(x + dx, y + dy)
                for dy in (-1, 0, 1) for dx in (-1, 0, 1)
                if dx or dy]


class PlantStatus(Enum):
    ALIVE = "alive"
    WITHERED = "withered"
    DROWNED = "drowned"
    RIPE = "ripe"

    @property
    def is_viable(self) -> bool:
        """Can still turn into money (growing or ready to harvest)."""
        return self in (PlantStatus.ALIVE, PlantStatus.RIPE)

    @property
    def is_dead(self) -> bool:
        return self in (PlantStatus.WITHERED, PlantStatus.DROWNED)


@dataclass
class Plant:
    """One crop on one tilled tile.

    ``growth_stage`` counts optimal-moisture days; the plant is ripe once
    it reaches the crop's ``growth_time``.
    """
    crop: str
    growth_stage: int = 0
    moisture: float = START_MOISTURE
    status: PlantStatus = PlantStatus.ALIVE


@dataclass
class Farmhouse:
    """Square footprint overlaid on grass.  Not stored in the tile grid."""
    x: int = 0
    y: int = 0
    size: int = FARMHOUSE_SIZE
    placed: bool = False

    def contains(self, x: int, y: int) -> bool:
        return (self.placed
                and self.x <= x < self.x + self.size
                and self.y <= y < self.y + self.size)

    def is_adjacent(self, x: int, y: int) -> bool:
        """True if (x, y) touches one of the footprint's four sides."""
        if not self.placed:
            return False
        hx, hy, size = self.x, self.y, self.size
        # above / below
        if hx <= x < hx + size and (y == hy - 1 or y == hy + size):
            return True
        # left / right
        if hy <= y < hy + size and (x == hx - 1 or x == hx + size):
            return True
        return False

    def footprint(self) -> list[Coord]:
        return [Coord(self.x + dx, self.y + dy)
                for dy in range(self.size) for dx in range(self.size)]

    def perimeter(self) -> list[Coord]:
        """Cells sharing an edge with the footprint, ``size`` per side."""
        hx, hy, size = self.x, self.y, self.size
        cells: list[Coord] = []
        for i in range(size):
            cells.append(Coord(hx + i, hy - 1))       # top
            cells.append(Coord(hx + i, hy + size))    # bottom
            cells.append(Coord(hx - 1, hy + i))       # left
            cells.append(Coord(hx + size, hy + i))    # right
        return cells
