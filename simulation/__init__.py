"""simulation — Farm economy and the top-level simulation facade.

``FarmSim`` owns one farm and is the only thing the front end talks to;
``economy`` holds the money rules it delegates to.

Submodules
----------
farm_sim        FarmSim, WorldSnapshot, RegenerationRequired, new_state
economy         Land purchase, daily tax, water shop, unlocks, game over
"""
