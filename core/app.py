"""
core/app.py — Pygame window and frame loop

Owns the display, the frame clock and a stack of scenes; only the top
scene is driven.  Each frame the top scene receives, in order:

    handle_events(events, app)   this frame's events (QUIT already handled)
    update(dt, app)              dt in seconds since the previous frame
    draw(surface, app)

    app = App(title="Escape", width=1020, height=600)
    app.push_scene(EscapeScene(sim))
    app.run()
"""

from __future__ import annotations
import pygame
from core.scene import Scene


class App:
    def __init__(self, title: str = "Escape", width: int = 800,
                 height: int = 600, fps: int = 60):
        pygame.init()
        self.size = (width, height)
        self.screen = pygame.display.set_mode(self.size)
        pygame.display.set_caption(title)
        self.clock = pygame.time.Clock()
        self.fps = fps
        self.running = True

        self._scenes: list[Scene] = []

        self.font = pygame.font.SysFont("monospace", 15)
        self.font_sm = pygame.font.SysFont("monospace", 12)
        self.font_lg = pygame.font.SysFont("sans", 30, bold=True)

    # -- Scenes --

    @property
    def scene(self) -> Scene | None:
        return self._scenes[-1] if self._scenes else None

    def push_scene(self, scene: Scene):
        if self.scene:
            self.scene.on_exit(self)
        self._scenes.append(scene)
        scene.on_enter(self)

    def pop_scene(self):
        if not self._scenes:
            return
        self._scenes.pop().on_exit(self)
        if self.scene:
            self.scene.on_enter(self)

    def quit(self):
        self.running = False

    # -- Loop --

    def run(self):
        """Drive the top scene until ``quit()`` or the window closes."""
        while self.running and self.scene:
            dt = self.clock.tick(self.fps) / 1000.0

            events = pygame.event.get()
            if any(e.type == pygame.QUIT for e in events):
                self.running = False
                break
            scene = self.scene
            scene.handle_events(events, self)
            scene.update(dt, self)
            scene.draw(self.screen, self)
            pygame.display.flip()

        while self._scenes:
            self.pop_scene()
        pygame.quit()

    # -- Text helpers --

    def draw_text(self, surface: pygame.Surface, text: str, x: int, y: int,
                  color=(235, 235, 235), font=None) -> pygame.Rect:
        img = (font or self.font).render(text, True, color)
        return surface.blit(img, (x, y))

    def draw_text_bg(self, surface: pygame.Surface, text: str, x: int, y: int,
                     color=(235, 235, 235), bg=(0, 0, 0, 160), font=None,
                     pad: int = 2) -> pygame.Rect:
        """Text over a translucent box, for overlays drawn on the map."""
        img = (font or self.font).render(text, True, color)
        box = pygame.Surface((img.get_width() + pad * 2,
                              img.get_height() + pad * 2), pygame.SRCALPHA)
        box.fill(bg)
        surface.blit(box, (x - pad, y - pad))
        return surface.blit(img, (x, y))
