"""logic/input_manager.py — Keyboard → InputIntent.

The escape scene feeds every pygame event through here.  Movement and
sprint are *held* actions and end up in the per-tick ``InputIntent``;
reset, quit, the debug overlay and tuning reload are *pressed* actions,
true only on the frame the key went down.

    im.begin_frame()
    for ev in events:
        im.feed(ev)
    if im.just("reset"):
        sim.reset()
    sim.step(dt, im.intent())
"""

from __future__ import annotations
import pygame

from components import InputIntent


BINDINGS: dict[str, tuple[int, ...]] = {
    # held
    "move_up":       (pygame.K_w, pygame.K_UP),
    "move_down":     (pygame.K_s, pygame.K_DOWN),
    "move_left":     (pygame.K_a, pygame.K_LEFT),
    "move_right":    (pygame.K_d, pygame.K_RIGHT),
    "sprint":        (pygame.K_SPACE,),
    # pressed
    "reset":         (pygame.K_r,),
    "quit":          (pygame.K_ESCAPE,),
    "toggle_debug":  (pygame.K_F3,),
    "reload_tuning": (pygame.K_F5,),
}

_ACTIONS_BY_KEY: dict[int, list[str]] = {}
for _action, _keys in BINDINGS.items():
    for _k in _keys:
        _ACTIONS_BY_KEY.setdefault(_k, []).append(_action)


class InputManager:
    """Tracks physical keys, answers in terms of actions.

    Keys are followed individually through KEYDOWN / KEYUP, so W and UP
    can both hold ``move_up`` and releasing one leaves it held.
    """

    def __init__(self):
        self._down: set[int] = set()
        self._pressed: set[str] = set()

    def begin_frame(self):
        self._pressed.clear()

    def feed(self, event: pygame.event.Event):
        if event.type == pygame.KEYDOWN:
            self._down.add(event.key)
            self._pressed.update(_ACTIONS_BY_KEY.get(event.key, ()))
        elif event.type == pygame.KEYUP:
            self._down.discard(event.key)
        elif event.type == pygame.WINDOWFOCUSLOST:
            # KEYUPs are lost while unfocused
            self.release_all()

    def release_all(self):
        self._down.clear()

    def just(self, action: str) -> bool:
        """Pressed this frame."""
        return action in self._pressed

    def held(self, action: str) -> bool:
        return not self._down.isdisjoint(BINDINGS.get(action, ()))

    def intent(self) -> InputIntent:
        return InputIntent(
            up=self.held("move_up"),
            down=self.held("move_down"),
            left=self.held("move_left"),
            right=self.held("move_right"),
            sprint=self.held("sprint"),
        )
