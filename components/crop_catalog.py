"""components.crop_catalog — Crop data lookup table.

The only component with real query logic (availability by score,
cheapest seed price) so it lives in its own module.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Crop:
    key: str
    name: str
    price: float
    sell: float
    growth_time: int
    water_need: float
    score_requirement: int = 0


DEFAULT_CROPS: tuple[Crop, ...] = (
    Crop("sunflower", "Sunflower", 5, 15, 5, 0.5, 0),
    Crop("carrot", "Carrot", 10, 30, 10, 1.0, 0),
    Crop("tomato", "Tomato", 15, 45, 15, 2.0, 0),
    Crop("strawberry", "Strawberry", 20, 65, 17, 2.5, 250),
    Crop("pumpkin", "Pumpkin", 25, 80, 20, 3.0, 500),
)


@dataclass
class CropCatalog:
    """Lookup table mapping crop IDs → ``Crop``.

    Built once (``core.data.load_crops`` or ``CropCatalog.default()``)
    and never mutated afterwards::

        catalog = state.catalog
        carrot = catalog.get("carrot")
        seeds = catalog.available(score=300)
    """
    _entries: dict[str, Crop] = field(default_factory=dict)

    @classmethod
    def default(cls) -> "CropCatalog":
        return cls.from_crops(DEFAULT_CROPS)

    @classmethod
    def from_crops(cls, crops) -> "CropCatalog":
        return cls({c.key: c for c in crops})

    # ── core helpers ─────────────────────────────────────────────────

    def get(self, key: str) -> Crop | None:
        return self._entries.get(key)

    def __getitem__(self, key: str) -> Crop:
        return self._entries[key]

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries.values())

    def display_name(self, key: str) -> str:
        """Human-readable name for a crop ID, falling back to the ID itself."""
        crop = self._entries.get(key)
        return crop.name if crop else key

    # ── score-gated queries ──────────────────────────────────────────

    def available(self, score: int) -> list[Crop]:
        """Crops unlocked at *score*, cheapest first."""
        crops = [c for c in self._entries.values()
                 if score >= c.score_requirement]
        return sorted(crops, key=lambda c: c.price)

    def sorted_by_requirement(self) -> list[Crop]:
        # stable sort keeps file order between equal requirements
        return sorted(self._entries.values(),
                      key=lambda c: c.score_requirement)

    def cheapest_price(self, score: int) -> float:
        """Lowest seed price unlocked at *score*; ``inf`` if none."""
        crops = self.available(score)
        if not crops:
            return math.inf
        return crops[0].price
