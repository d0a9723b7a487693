"""scenes/farm_scene.py — The playable farm.

Thin pygame collaborator: turns keys and clicks into ``FarmSim`` calls
and shows the results.  No farm rule lives here.

Controls
--------
1-6         select tool (hand, hoe, seeds, watering can, harvest, buy land)
Tab         cycle the seed type among unlocked crops
Left click  use the tool on a tile (buy-land on the lake opens the water shop)
B           buy as much water as the shop allows (max 10)
P / Space   pause
WASD/arrows pan the camera
R           move the farmhouse (same terrain, plants cleared)
N           new map
G           toggle grid
F3          debug overlay (FarmSim.debug_info, event counts)
F4          hot-reload data/tuning.toml
F5          skip to the next day (debug)
"""

from __future__ import annotations
import pygame

from core.app import App
from core.scene import Scene
from core.constants import TILE_SIZE
from components import Camera
from core import tuning as tuning_mod
from core.data import load_crops
from core.events import (
    PlantWithered, PlantDrowned, PlantRipened, Harvested, CropUnlocked,
    DayStarted, LandPurchased, WaterPurchased, GameOver,
)
from logic.actions import TOOLS, Reason
from logic.plants import day_duration_ms
from simulation.farm_sim import FarmSim, RegenerationRequired
from scenes.farm_draw import (
    draw_tiles, draw_owned, draw_plants, draw_hover, draw_hud, draw_debug,
    draw_toolbar, draw_notifications, draw_tile_info, draw_game_over,
    farmhouse_center,
)

NOTE_SECONDS = 3.0
PAN_SPEED = 12.0   # tiles per second


def describe_event(event, catalog) -> str | None:
    """Notification text for a simulation event, or ``None`` to stay quiet."""
    def _name(key):
        return catalog.display_name(key)

    if isinstance(event, PlantWithered):
        return f"Your {_name(event.crop)} withered from lack of water!"
    if isinstance(event, PlantDrowned):
        return f"Your {_name(event.crop)} drowned!"
    if isinstance(event, PlantRipened):
        return f"{_name(event.crop)} is ready to harvest!"
    if isinstance(event, Harvested):
        return f"+{event.value:.0f} for {_name(event.crop)}"
    if isinstance(event, CropUnlocked):
        return f"New seed unlocked: {event.name}!"
    if isinstance(event, DayStarted):
        return f"Day {event.day}"
    if isinstance(event, LandPurchased):
        return f"Land bought for {event.cost:.0f}"
    if isinstance(event, WaterPurchased):
        return f"+{event.amount} water for {event.cost:.2f}"
    return None


class FarmScene(Scene):
    def __init__(self, seed: int | None = None):
        self.seed = seed
        self.sim: FarmSim | None = None
        self.tool = "hand"
        self.crop_key = ""
        self.camera = Camera()
        self.show_grid = False
        self.show_debug = False
        self.hover: tuple[int, int] | None = None
        self.notes: list[list] = []
        self._app: App | None = None

    # ── lifecycle ────────────────────────────────────────────────────

    def on_enter(self, app: App):
        self._app = app
        if self.sim is not None:
            return
        tuning_mod.load()  # idempotent
        self.sim = FarmSim(load_crops())
        self._new_map(self.seed)

    def _new_map(self, seed: int | None) -> None:
        try:
            snap = self.sim.generate_world(seed)
        except RegenerationRequired as exc:
            print(f"[FARM] {exc}")
            self.notify("Could not find a spot for the farm, press N to retry.")
            return
        self.seed = snap.seed
        crops = self.sim.available_crops()
        self.crop_key = crops[0].key if crops else ""
        self._center_camera()
        self.notify(f"Welcome to your farm! (seed {snap.seed})")

    def _center_camera(self) -> None:
        self.camera.x, self.camera.y = farmhouse_center(self.sim.state.world)

    def notify(self, text: str) -> None:
        self.notes.append([text, NOTE_SECONDS])

    # ── helpers ──────────────────────────────────────────────────────

    def _origin(self, app: App) -> tuple[int, int]:
        sw, sh = app.size
        return (sw // 2 - int(self.camera.x * TILE_SIZE),
                sh // 2 - int(self.camera.y * TILE_SIZE))

    def _screen_to_tile(self, mx: int, my: int, app: App) -> tuple[int, int] | None:
        ox, oy = self._origin(app)
        x = (mx - ox) // TILE_SIZE
        y = (my - oy) // TILE_SIZE
        if self.sim.state.world.in_bounds(x, y):
            return x, y
        return None

    def _cycle_crop(self) -> None:
        keys = [c.key for c in self.sim.available_crops()]
        if not keys:
            return
        i = keys.index(self.crop_key) if self.crop_key in keys else -1
        self.crop_key = keys[(i + 1) % len(keys)]
        self.notify(f"Seed: {self.sim.catalog.display_name(self.crop_key)}")

    def _buy_water(self) -> None:
        quote = self.sim.quote_water()
        if not quote.ok:
            if quote.reason is Reason.TANK_FULL:
                self.notify("Your water tank is full.")
            else:
                self.notify("Not enough money for water.")
            return
        self._show(self.sim.attempt_purchase_water(quote.max_amount))

    def _show(self, result) -> None:
        # successful actions that emitted events are described by those
        if result.message and (not result.ok or not result.events):
            self.notify(result.message)
        self._consume(result.events)

    def _consume(self, events) -> None:
        for event in events:
            text = describe_event(event, self.sim.catalog)
            if text:
                self.notify(text)
            if isinstance(event, GameOver):
                self._app.push_scene(GameOverScene(self, event.day, event.score))

    def _use_tool(self, x: int, y: int) -> None:
        sim = self.sim
        if self.tool == "hand":
            self.notify(sim.inspect(x, y).text or "Nothing here.")
            return
        if self.tool == "hoe":
            result = sim.attempt_till(x, y)
        elif self.tool == "seeds":
            result = sim.attempt_plant(x, y, self.crop_key)
        elif self.tool == "watering_can":
            result = sim.attempt_water(x, y)
        elif self.tool == "harvest":
            result = sim.attempt_harvest(x, y)
        else:
            result = sim.attempt_purchase_land(x, y)
            if result.reason is Reason.WATER_TILE:
                self._buy_water()
                return
        self._show(result)

    # ── event handler ────────────────────────────────────────────────

    def handle_event(self, event: pygame.event.Event, app: App):
        self._app = app
        if event.type == pygame.KEYDOWN:
            key = event.key
            if pygame.K_1 <= key < pygame.K_1 + len(TOOLS):
                self.tool = TOOLS[key - pygame.K_1]
            elif key == pygame.K_TAB:
                self._cycle_crop()
            elif key == pygame.K_b:
                self._buy_water()
            elif key in (pygame.K_p, pygame.K_SPACE):
                paused = self.sim.toggle_pause()
                self.notify("Paused" if paused else "Resumed")
            elif key == pygame.K_r:
                if self.sim.reroll_farmhouse():
                    self._center_camera()
                elif not self.sim.is_game_over():
                    self.notify("No other spot for the farmhouse.")
                self._consume(self.sim.drain_events())
            elif key == pygame.K_n:
                self._new_map(None)
            elif key == pygame.K_g:
                self.show_grid = not self.show_grid
            elif key == pygame.K_F3:
                self.show_debug = not self.show_debug
            elif key == pygame.K_F4:
                tuning_mod.reload()
                self.notify("Tuning reloaded")
            elif key == pygame.K_F5:
                self._consume(self.sim.advance_day())
            elif key == pygame.K_ESCAPE:
                app.running = False

        elif event.type == pygame.MOUSEMOTION:
            self.hover = self._screen_to_tile(*event.pos, app)

        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            tile = self._screen_to_tile(*event.pos, app)
            if tile is not None:
                self._use_tool(*tile)

    # ── update ───────────────────────────────────────────────────────

    def update(self, dt: float, app: App):
        self._app = app
        keys = pygame.key.get_pressed()
        dx = (keys[pygame.K_d] or keys[pygame.K_RIGHT]) - (keys[pygame.K_a] or keys[pygame.K_LEFT])
        dy = (keys[pygame.K_s] or keys[pygame.K_DOWN]) - (keys[pygame.K_w] or keys[pygame.K_UP])
        world = self.sim.state.world
        cam = self.camera
        cam.x = min(max(0.0, cam.x + dx * PAN_SPEED * dt), world.width)
        cam.y = min(max(0.0, cam.y + dy * PAN_SPEED * dt), world.height)
        if dx or dy:
            self.hover = self._screen_to_tile(*app.mouse_pos(), app)

        self._consume(self.sim.tick(dt * 1000.0))

        for note in self.notes:
            note[1] -= dt
        self.notes = [n for n in self.notes if n[1] > 0]

    # ── draw ─────────────────────────────────────────────────────────

    def draw(self, surface: pygame.Surface, app: App):
        surface.fill((20, 24, 20))
        sim = self.sim
        world = sim.state.world
        ox, oy = self._origin(app)

        draw_tiles(surface, world, ox, oy, self.show_grid)
        draw_owned(surface, world, ox, oy)
        draw_plants(surface, world, sim.catalog, ox, oy)
        draw_hover(surface, self.hover, ox, oy)

        frac = sim.state.clock.ms_into_day / day_duration_ms()
        draw_hud(surface, app, sim, self.tool, self.crop_key, min(1.0, frac))
        draw_toolbar(surface, app, TOOLS, self.tool)
        if self.hover is not None:
            draw_tile_info(surface, app, sim.inspect(*self.hover).text)
        draw_notifications(surface, app, self.notes)
        if self.show_debug:
            draw_debug(surface, app, sim.debug_info())


class GameOverScene(Scene):
    """Final score over the frozen farm.  The farm state stays readable."""
    overlay = True

    def __init__(self, farm: FarmScene, day: int, score: int):
        self.farm = farm
        self.day = day
        self.score = score

    def handle_event(self, event: pygame.event.Event, app: App):
        if event.type != pygame.KEYDOWN:
            return
        if event.key == pygame.K_n:
            app.pop_scene()
            self.farm._new_map(None)
        elif event.key == pygame.K_ESCAPE:
            app.running = False

    def draw(self, surface: pygame.Surface, app: App):
        draw_game_over(surface, app, self.day, self.score)
