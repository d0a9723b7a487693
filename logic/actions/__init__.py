"""logic/actions — High-level player actions.

Thin rule functions that ``FarmSim`` (and through it the scene) calls in
response to tool clicks.  Each function does everything needed so the
scene stays small.

Public API (re-exported here)
-----------------------------
``ActionResult`` / ``Reason``  — outcome of every action
``attempt_till``               — hoe: till grass / clear dead plants
``attempt_plant``              — seed bag: buy and plant a seed
``attempt_water``              — watering can
``attempt_harvest``            — harvest a ripe plant
``inspect_tile``               — hand tool read-out (``TileReport``)
"""

from __future__ import annotations

from logic.actions.results import ActionResult, Reason, success, rejected   # noqa: F401
from logic.actions.tools import (                                          # noqa: F401
    attempt_till, attempt_plant, attempt_water, attempt_harvest,
    inspect_tile, TileReport,
)


# ── Tools (the toolbar order) ────────────────────────────────────────

TOOLS = ("hand", "hoe", "seeds", "watering_can", "harvest", "buy_land")
