"""scenes/escape_scene.py — The one playable scene.

Feeds keyboard intent into the sim every frame, then draws a snapshot:
checkerboard floor, walls, door, key, the guard with its vision cone and
suspicion ring, the player, a status panel on the right, and a timed
outcome banner.

Keys: WASD / arrows move, Space sprints, R resets, F3 debug overlay,
F5 reloads tuning and restarts the run, Esc quits.
"""

from __future__ import annotations
import math
import pygame

from core import tuning
from core.app import App
from core.constants import (
    CHASE, OUTCOME_ESCAPED, OUTCOME_CAUGHT, MESSAGE_SECONDS, MAX_DT,
    COLOR_BG, COLOR_WALL, COLOR_WALL_EDGE, COLOR_FLOOR_A, COLOR_FLOOR_B,
    COLOR_KEY, COLOR_KEY_RIM, COLOR_DOOR_OPEN, COLOR_DOOR_CLOSED,
    COLOR_PLAYER, COLOR_PLAYER_EYE, COLOR_GUARD, COLOR_GUARD_RING, COLOR_CONE,
)
from core.grid import PlacementError
from core.scene import Scene
from components import SimConfig
from logic.input_manager import InputManager
from scenes.drawing import draw_cone_alpha, draw_ring_alpha, draw_banner
from simulation.world_sim import EscapeSim, create_sim
from simulation.snapshot import Snapshot

PANEL_W = 220

OUTCOME_TEXT = {
    OUTCOME_ESCAPED: "You escaped!",
    OUTCOME_CAUGHT: "You were caught",
}


def status_lines(view: Snapshot) -> list[str]:
    """Human-readable status panel lines for a snapshot."""
    g = view.guard
    if g.state == CHASE:
        vision = "Vision: chasing!"
    else:
        vision = f"Vision: {round(g.suspicion_ratio * 100)}% suspicion"
    return [
        "Key secured" if view.key.collected else "Key pending",
        vision,
        f"Stamina: {round(view.player.stamina_ratio * 100)}%",
        "Door open" if view.door.open else "Door closed",
    ]


class EscapeScene(Scene):
    def __init__(self, sim: EscapeSim):
        self.input = InputManager()
        self.message = ""
        self.message_timer = 0.0
        self.show_debug = False
        self._attach(sim)

    def _attach(self, sim: EscapeSim) -> None:
        self.sim = sim
        sim.bus.subscribe("DoorOpened", self._on_outcome)
        sim.bus.subscribe("PlayerCaught", self._on_outcome)

    # ── Events ───────────────────────────────────────────────────────

    def _on_outcome(self, _event) -> None:
        self.message = OUTCOME_TEXT.get(self.sim.outcome, "")
        self.message_timer = MESSAGE_SECONDS

    def handle_events(self, events, app: App):
        self.input.begin_frame()
        for event in events:
            self.input.feed(event)

        if self.input.just("quit"):
            app.quit()
        if self.input.just("reset"):
            self.sim.reset()
            self.message = ""
            self.message_timer = 0.0
        if self.input.just("toggle_debug"):
            self.show_debug = not self.show_debug
        if self.input.just("reload_tuning"):
            self.reload_tuning()

    def reload_tuning(self) -> None:
        """Re-read the tuning file and start over on a sim built from it."""
        tuning.reload()
        sim = create_sim(self.sim.level)
        if isinstance(sim, PlacementError):
            return
        self._attach(sim)
        self.message = ""
        self.message_timer = 0.0
        print("[SIM] Rebuilt with reloaded tuning")

    # ── Update ───────────────────────────────────────────────────────

    def update(self, dt: float, app: App):
        cfg = self.sim.world.res(SimConfig)
        dt = min(dt, cfg.max_dt if cfg else MAX_DT)
        if self.sim.running:
            self.sim.step(dt, self.input.intent())
        if self.message_timer > 0:
            self.message_timer = max(0.0, self.message_timer - dt)

    # ── Drawing ──────────────────────────────────────────────────────

    def draw(self, surface: pygame.Surface, app: App):
        surface.fill(COLOR_BG)
        view = self.sim.snapshot()
        self._draw_grid(surface)
        self._draw_door(surface, view)
        self._draw_key(surface, view)
        self._draw_guard(surface, view)
        self._draw_player(surface, view)
        self._draw_panel(surface, app, view)
        if self.message_timer > 0 and self.message:
            map_area = surface.subsurface((0, 0, int(self.sim.grid.width),
                                           int(self.sim.grid.height)))
            draw_banner(map_area, self.message, app.font_lg)
        if self.show_debug:
            self._draw_debug(surface, app)

    def _draw_grid(self, surface: pygame.Surface):
        grid = self.sim.grid
        ts = int(grid.tile_size)
        for row in range(grid.rows):
            for col in range(grid.cols):
                color = COLOR_FLOOR_A if (row + col) % 2 == 0 else COLOR_FLOOR_B
                pygame.draw.rect(surface, color, (col * ts, row * ts, ts, ts))
        for col, row in grid.wall_tiles():
            rect = pygame.Rect(col * ts, row * ts, ts, ts)
            pygame.draw.rect(surface, COLOR_WALL, rect)
            pygame.draw.rect(surface, COLOR_WALL_EDGE, rect, 1)

    def _draw_door(self, surface: pygame.Surface, view: Snapshot):
        d = view.door
        r = int(d.radius)
        rect = pygame.Rect(int(d.x) - r, int(d.y) - r, r * 2, r * 2)
        pygame.draw.rect(surface, COLOR_DOOR_OPEN if d.open else COLOR_DOOR_CLOSED, rect)
        pygame.draw.rect(surface, (0, 0, 0), rect, 3)

    def _draw_key(self, surface: pygame.Surface, view: Snapshot):
        k = view.key
        if k.collected:
            return
        center = (int(k.x), int(k.y))
        pygame.draw.circle(surface, COLOR_KEY, center, int(k.radius))
        pygame.draw.circle(surface, COLOR_KEY_RIM, center,
                           max(2, int(k.radius) - 6), 3)

    def _draw_guard(self, surface: pygame.Surface, view: Snapshot):
        g = view.guard
        cx, cy = int(g.x), int(g.y)
        draw_cone_alpha(surface, COLOR_CONE, cx, cy, int(g.detection_range),
                        g.facing, g.fov / 2.0)
        pygame.draw.circle(surface, COLOR_GUARD, (cx, cy), int(g.radius))
        alpha = int(255 * (0.2 + g.suspicion_ratio * 0.6))
        draw_ring_alpha(surface, (*COLOR_GUARD_RING, alpha), cx, cy,
                        int(g.radius) + 6, 4)

    def _draw_player(self, surface: pygame.Surface, view: Snapshot):
        p = view.player
        cx, cy = int(p.x), int(p.y)
        pygame.draw.circle(surface, COLOR_PLAYER, (cx, cy), int(p.radius))
        ex = cx + int(math.cos(p.facing) * p.radius * 0.6)
        ey = cy + int(math.sin(p.facing) * p.radius * 0.6)
        pygame.draw.circle(surface, COLOR_PLAYER_EYE, (ex, ey), 5)

    def _draw_panel(self, surface: pygame.Surface, app: App, view: Snapshot):
        x0 = int(self.sim.grid.width) + 12
        y = 16
        app.draw_text(surface, "STATUS", x0, y, (200, 200, 210))
        y += 24
        for line in status_lines(view):
            app.draw_text(surface, line, x0, y)
            y += 20
        y += 16
        for hint in ("WASD/arrows  move", "Space  sprint",
                     "R  reset", "F3  debug", "Esc  quit"):
            app.draw_text(surface, hint, x0, y, (130, 130, 140), app.font_sm)
            y += 16

    def _draw_debug(self, surface: pygame.Surface, app: App):
        info = self.sim.debug_info()
        y = 8
        for k in ("time", "player_tile", "guard_state", "suspicion", "memory",
                  "waypoint"):
            v = info[k]
            text = f"{k}: {v:.2f}" if isinstance(v, float) else f"{k}: {v}"
            app.draw_text_bg(surface, text, 8, y, font=app.font_sm)
            y += 14
        for entry in self.sim.dev_log.recent(6):
            app.draw_text_bg(surface, f"[{entry['t']:.1f}] {entry['cat']}: "
                             f"{entry['msg']}", 8, y, (255, 220, 120),
                             font=app.font_sm)
            y += 14
