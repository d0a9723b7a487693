"""
core/scene.py — Scene interface

A Scene is one screen (the farm, the game-over screen).  The app holds
a stack of them; only the top one gets events, update and draw calls.

    class ShopScene(Scene):
        def on_enter(self, app):
            # called when the scene becomes active
            ...

        def handle_event(self, event, app):
            # one pygame event
            ...

        def update(self, dt, app):
            # dt is seconds since last frame
            ...

        def draw(self, surface, app):
            ...
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame
    from core.app import App


class Scene:
    # Overlays (game-over screen) let the scene below draw first
    overlay = False

    def on_enter(self, app: App):
        """Called when this scene becomes active (pushed or revealed)."""
        pass

    def on_exit(self, app: App):
        """Called when this scene is removed or covered."""
        pass

    def handle_event(self, event: pygame.event.Event, app: App):
        pass

    def update(self, dt: float, app: App):
        """Advance one frame. dt is seconds."""
        pass

    def draw(self, surface: pygame.Surface, app: App):
        pass
