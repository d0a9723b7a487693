"""scenes/farm_draw.py — Rendering helpers for the farm scene.

All pure-draw functions live here so that FarmScene.draw() stays thin.
Every function receives the data it needs as parameters and only reads
simulation state.
"""

from __future__ import annotations
import pygame
from core.app import App
from core.constants import TILE_SIZE, TILE_COLORS
from components import PlantStatus
from core.farm import FarmWorld


PLANT_COLORS = {
    PlantStatus.ALIVE: (120, 200, 80),
    PlantStatus.RIPE: (240, 200, 60),
    PlantStatus.WITHERED: (130, 100, 60),
    PlantStatus.DROWNED: (90, 110, 140),
}

OWNED_OUTLINE = (235, 225, 170)
HOVER_OUTLINE = (255, 255, 255)


def visible_range(surface: pygame.Surface, world: FarmWorld,
                  ox: int, oy: int) -> tuple[int, int, int, int]:
    """(start_col, start_row, end_col, end_row) of tiles on screen."""
    sw, sh = surface.get_size()
    start_col = max(0, -ox // TILE_SIZE)
    start_row = max(0, -oy // TILE_SIZE)
    end_col = min(world.width, (sw - ox) // TILE_SIZE + 1)
    end_row = min(world.height, (sh - oy) // TILE_SIZE + 1)
    return start_col, start_row, end_col, end_row


# ── Tiles ───────────────────────────────────────────────────────────

def draw_tiles(surface: pygame.Surface, world: FarmWorld,
               ox: int, oy: int, show_grid: bool) -> None:
    c0, r0, c1, r1 = visible_range(surface, world, ox, oy)
    for y in range(r0, r1):
        for x in range(c0, c1):
            tile = world.tile_at(x, y)
            color = TILE_COLORS.get(tile, (255, 0, 255))
            rect = pygame.Rect(ox + x * TILE_SIZE, oy + y * TILE_SIZE,
                               TILE_SIZE, TILE_SIZE)
            pygame.draw.rect(surface, color, rect)
            if show_grid:
                pygame.draw.rect(surface, (0, 0, 0), rect, 1)


def draw_owned(surface: pygame.Surface, world: FarmWorld,
               ox: int, oy: int) -> None:
    for c in world.owned:
        rect = pygame.Rect(ox + c.x * TILE_SIZE, oy + c.y * TILE_SIZE,
                           TILE_SIZE, TILE_SIZE)
        pygame.draw.rect(surface, OWNED_OUTLINE, rect, 1)


def draw_plants(surface: pygame.Surface, world: FarmWorld, catalog,
                ox: int, oy: int) -> None:
    """One dot per plant; it grows with the growth stage."""
    half = TILE_SIZE // 2
    for c, plant in world.plants.items():
        crop = catalog.get(plant.crop)
        frac = 1.0
        if crop is not None and crop.growth_time > 0:
            frac = min(1.0, plant.growth_stage / crop.growth_time)
        radius = max(2, int(3 + frac * (half - 5)))
        center = (ox + c.x * TILE_SIZE + half, oy + c.y * TILE_SIZE + half)
        pygame.draw.circle(surface, PLANT_COLORS[plant.status], center, radius)


def draw_hover(surface: pygame.Surface, tile: tuple[int, int] | None,
               ox: int, oy: int) -> None:
    if tile is None:
        return
    x, y = tile
    rect = pygame.Rect(ox + x * TILE_SIZE, oy + y * TILE_SIZE,
                       TILE_SIZE, TILE_SIZE)
    pygame.draw.rect(surface, HOVER_OUTLINE, rect, 2)


# ── HUD ─────────────────────────────────────────────────────────────

def draw_hud(surface: pygame.Surface, app: App, sim, tool: str,
             crop_key: str, day_fraction: float) -> None:
    state = sim.state
    wallet = state.wallet
    crop = sim.catalog.get(crop_key)
    lines = [
        f"Day {state.clock.day}  {int(day_fraction * 100):3d}%"
        + ("  [PAUSED]" if state.clock.paused and not state.game_over else ""),
        f"Money {wallet.money:8.2f}   Score {wallet.score}",
        f"Water {wallet.water:5.0f}   Land {len(state.world.owned)} tiles",
        f"Tool  {tool}" + (f"  ({crop.name}, {crop.price:.0f})" if tool == "seeds" and crop else ""),
    ]
    y = 8
    for line in lines:
        app.draw_text_bg(surface, line, 8, y)
        y += 18

    # day progress bar
    pygame.draw.rect(surface, (40, 40, 40), (8, y + 2, 160, 5))
    pygame.draw.rect(surface, (230, 200, 90), (8, y + 2, int(160 * day_fraction), 5))


def draw_debug(surface: pygame.Surface, app: App, info: dict) -> None:
    """F3 overlay: raw FarmSim.debug_info() plus event counts, top right."""
    bus = info.get("bus", {})
    lines = [f"{k}: {v}" for k, v in info.items() if k != "bus"]
    lines += [f"  {name} x{n}" for name, n in sorted(bus.items())]
    sw = surface.get_width()
    y = 8
    for line in lines:
        w = app.font_sm.size(line)[0]
        app.draw_text_bg(surface, line, sw - w - 12, y, font=app.font_sm)
        y += 15


def draw_toolbar(surface: pygame.Surface, app: App, tools: tuple[str, ...],
                 active: str) -> None:
    sw, sh = surface.get_size()
    x = 8
    for i, name in enumerate(tools, start=1):
        color = (255, 230, 120) if name == active else (200, 200, 200)
        rect = app.draw_text_bg(surface, f"{i}:{name}", x, sh - 24, color=color,
                                font=app.font_sm)
        x = rect.right + 12


def draw_notifications(surface: pygame.Surface, app: App,
                       notes: list[list]) -> None:
    """Newest last; each entry is ``[text, seconds_left]``."""
    sw, _ = surface.get_size()
    y = 8
    for text, ttl in notes[-6:]:
        alpha = 200 if ttl > 0.5 else int(400 * ttl)
        w = app.font.size(text)[0]
        app.draw_text_bg(surface, text, sw - w - 12, y, bg=(0, 0, 0, alpha))
        y += 20


def draw_tile_info(surface: pygame.Surface, app: App, text: str) -> None:
    if not text:
        return
    sw, sh = surface.get_size()
    app.draw_text_bg(surface, text, 8, sh - 48, color=(220, 235, 255))


def draw_game_over(surface: pygame.Surface, app: App, day: int, score: int) -> None:
    sw, sh = surface.get_size()
    shade = pygame.Surface((sw, sh), pygame.SRCALPHA)
    shade.fill((0, 0, 0, 170))
    surface.blit(shade, (0, 0))
    lines = (
        ("GAME OVER", app.font_lg, (240, 90, 80)),
        (f"Your farm lasted {day} days.", app.font, (230, 230, 230)),
        (f"Final score: {score}", app.font, (240, 210, 110)),
        ("N: new farm    Esc: quit", app.font_sm, (180, 180, 180)),
    )
    y = sh // 2 - 50
    for text, font, color in lines:
        w = font.size(text)[0]
        app.draw_text(surface, text, (sw - w) // 2, y, color=color, font=font)
        y += font.get_linesize() + 8


def farmhouse_center(world: FarmWorld) -> tuple[float, float]:
    fh = world.farmhouse
    return fh.x + fh.size / 2.0, fh.y + fh.size / 2.0