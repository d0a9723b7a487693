"""logic — Farm rules package.

Subpackages
-----------
actions/    — player tools (hoe, seeds, watering can, harvest, hand)
              and the ActionResult / Reason outcome types

Top-level modules
-----------------
tick        — clock orchestrator: per-frame drain + day rollover
noise       — seedable 2D simplex noise
mapgen      — terrain, shoreline smoothing, farmhouse + starter plot
plants      — moisture drain, watering, daily growth, readouts
"""
