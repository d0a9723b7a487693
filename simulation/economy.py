"""simulation/economy.py — Farm economic loop.

Land purchase, daily land tax, the water shop, score-gated crop
unlocks and the game-over test all live here.

Reserve rule
------------
Purchases must not strand the player: after buying land the player
must still afford the cheapest unlocked seed, and while nothing is
growing, water can only be bought with money above that seed price.

Game over
---------
Money below the cheapest seed *and* no ALIVE / RIPE plant — no way to
earn again.  Terminal: the clock pauses and every action is refused.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from core.constants import (
    TileType, LAND_COST, TAX_PER_TILE, MAX_WATER, WATER_UNIT_PRICE,
    WATER_PER_PURCHASE,
)
from core.events import (
    CropUnlocked, GameOver, LandPurchased, TaxCharged, WaterPurchased,
)
from core.tuning import get as _tun
from logic.actions.results import ActionResult, Reason, success, rejected

if TYPE_CHECKING:
    from core.farm import FarmState


def land_cost() -> float:
    return float(_tun("economy", "land_cost", LAND_COST))


def max_water() -> float:
    return float(_tun("economy", "max_water", MAX_WATER))


def water_unit_price() -> float:
    return float(_tun("economy", "water_unit_price", WATER_UNIT_PRICE))


def cheapest_available_price(state: "FarmState") -> float:
    """Price of the cheapest unlocked seed; ``inf`` if nothing is unlocked."""
    return state.catalog.cheapest_price(state.wallet.score)


# ── Land ─────────────────────────────────────────────────────────────

def attempt_purchase_land(state: "FarmState", x: int, y: int) -> ActionResult:
    """Buy one grass tile next to owned land or the farmhouse."""
    world, wallet = state.world, state.wallet
    if state.game_over:
        return rejected(Reason.GAME_OVER, "The farm is closed.")
    if not world.in_bounds(x, y):
        return rejected(Reason.OUT_OF_BOUNDS, "That's off the map.")
    if world.is_water(x, y):
        # the front end opens the water shop on this reason
        return rejected(Reason.WATER_TILE, "That's the lake — buy water instead.")
    if world.is_owned(x, y):
        return rejected(Reason.ALREADY_OWNED, "You already own this land.")
    if world.tile_at(x, y) != TileType.GRASS:
        return rejected(Reason.WRONG_TILE_TYPE, "You can only buy grassland.")
    if world.is_shoreline(x, y):
        return rejected(Reason.SHORELINE, "Lakeside plots can't be bought.")
    if not world.is_adjacent_to_owned_or_farmhouse(x, y):
        return rejected(Reason.INVALID_ADJACENCY,
                        "Must border your land or the farmhouse.")

    cost = land_cost()
    required = cost + cheapest_available_price(state)
    if wallet.money < required:
        return rejected(Reason.INSUFFICIENT_FUNDS,
                        f"You need {required:.2f}€ to buy land and still afford seeds.")

    wallet.money -= cost
    wallet.score += int(cost)
    world.claim(x, y)
    state.bus.emit(LandPurchased(x=x, y=y, cost=cost))
    print(f"[ECON] Bought ({x},{y}) for {cost:.2f}, money={wallet.money:.2f}, "
          f"tiles={len(world.owned)}")
    check_unlocks(state)
    check_game_over(state)
    return success(f"Land bought for {cost:.0f}€.", money=-cost, score=cost)


# ── Tax ──────────────────────────────────────────────────────────────

def charge_daily_tax(state: "FarmState") -> float:
    """Deduct land tax for every owned tile.  No floor — money may go negative."""
    tiles = len(state.world.owned)
    amount = tiles * float(_tun("economy", "tax_per_tile", TAX_PER_TILE))
    state.wallet.money -= amount
    state.bus.emit(TaxCharged(day=state.clock.day, amount=amount, tiles=tiles))
    return amount


# ── Water ────────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class WaterQuote:
    """What the water shop can offer right now."""
    max_amount: int
    unit_price: float
    reserve: float
    reason: Reason = Reason.OK

    @property
    def ok(self) -> bool:
        return self.max_amount > 0


def quote_water(state: "FarmState") -> WaterQuote:
    wallet = state.wallet
    price = water_unit_price()
    space = max_water() - wallet.water
    # keep one seed's worth of money while nothing is growing
    reserve = 0.0 if state.world.has_viable_plants() else cheapest_available_price(state)

    if space <= 0:
        return WaterQuote(0, price, reserve, Reason.TANK_FULL)

    available = wallet.money - reserve
    if available < price:
        return WaterQuote(0, price, reserve, Reason.INSUFFICIENT_FUNDS)

    by_money = math.floor(available / price)
    cap = int(_tun("economy", "water_per_purchase", WATER_PER_PURCHASE))
    amount = int(min(cap, by_money, space))
    if amount <= 0:
        return WaterQuote(0, price, reserve, Reason.TANK_CAPACITY_EXCEEDED)
    return WaterQuote(amount, price, reserve)


def attempt_purchase_water(state: "FarmState", amount: int) -> ActionResult:
    wallet = state.wallet
    if state.game_over:
        return rejected(Reason.GAME_OVER, "The farm is closed.")
    if amount <= 0:
        return rejected(Reason.INVALID_AMOUNT, "Pick an amount to buy.")

    space = max_water() - wallet.water
    if space <= 0:
        return rejected(Reason.TANK_FULL, "Your water tank is full.")
    if amount > space:
        return rejected(Reason.TANK_CAPACITY_EXCEEDED,
                        f"Only {int(space)} units fit in the tank.")
    cap = int(_tun("economy", "water_per_purchase", WATER_PER_PURCHASE))
    if amount > cap:
        return rejected(Reason.TRANSACTION_LIMIT,
                        f"At most {cap} units per purchase.")

    quote = quote_water(state)
    if amount > quote.max_amount:
        if quote.reserve > 0:
            msg = (f"Keep at least {quote.reserve:.2f}€ for seeds "
                   f"while nothing is growing.")
        else:
            msg = "Not enough money for that much water."
        return rejected(Reason.INSUFFICIENT_FUNDS, msg)

    cost = amount * quote.unit_price
    wallet.money -= cost
    wallet.water += amount
    state.bus.emit(WaterPurchased(amount=amount, cost=cost))
    print(f"[ECON] Bought {amount} water for {cost:.2f}, money={wallet.money:.2f}")
    check_game_over(state)
    return success(f"{amount} water bought for {cost:.2f}€.",
                   money=-cost, water=amount)


# ── Unlocks / game over ──────────────────────────────────────────────

def check_unlocks(state: "FarmState") -> list[str]:
    """Emit ``CropUnlocked`` for crops that became available.

    Returns the newly unlocked crop keys, lowest requirement first.
    """
    wallet = state.wallet
    available = state.catalog.available(wallet.score)
    if len(available) <= wallet.unlocked_count:
        return []

    ordered = state.catalog.sorted_by_requirement()
    new = ordered[wallet.unlocked_count:len(available)]
    for crop in new:
        state.bus.emit(CropUnlocked(crop=crop.key, name=crop.name,
                                    requirement=crop.score_requirement))
        print(f"[ECON] Unlocked {crop.name} at score {wallet.score}")
    wallet.unlocked_count = len(available)
    return [c.key for c in new]


def check_game_over(state: "FarmState") -> bool:
    if state.game_over:
        return True
    broke = state.wallet.money < cheapest_available_price(state)
    if broke and not state.world.has_viable_plants():
        state.game_over = True
        state.clock.paused = True
        state.bus.emit(GameOver(day=state.clock.day, score=state.wallet.score))
        print(f"[ECON] Game over on day {state.clock.day}, "
              f"score={state.wallet.score}")
    return state.game_over
