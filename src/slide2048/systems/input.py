from __future__ import annotations

from typing import Dict, Mapping

from slide2048.components.move import Direction
from slide2048.events.bus import (
    EventBus,
    EVENT_KEY_RELEASE,
    EVENT_MOUSE_PRESS,
    EVENT_MOVE_REQUEST,
    EVENT_NEW_GAME_REQUEST,
)

NEW_GAME = "new_game"


def default_key_bindings() -> Dict[int, str]:
    """Arrow keys move, N starts a new game."""
    import arcade
    return {
        arcade.key.LEFT: Direction.LEFT.value,
        arcade.key.RIGHT: Direction.RIGHT.value,
        arcade.key.UP: Direction.UP.value,
        arcade.key.DOWN: Direction.DOWN.value,
        arcade.key.N: NEW_GAME,
    }


class InputSystem:
    """Translates raw key and mouse input into move and new-game requests."""

    def __init__(self, event_bus: EventBus, window=None, bindings: Mapping[int, str] | None = None):
        self.event_bus = event_bus
        self.window = window
        self.bindings = dict(bindings) if bindings is not None else default_key_bindings()
        self.event_bus.subscribe(EVENT_KEY_RELEASE, self.on_key_release)
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_key_release(self, sender, **kwargs):
        action = self.bindings.get(kwargs.get('symbol'))
        if action is None:
            return
        if action == NEW_GAME:
            self.event_bus.emit(EVENT_NEW_GAME_REQUEST)
            return
        self.event_bus.emit(EVENT_MOVE_REQUEST, direction=Direction(action))

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        # Left button (1) only.
        if kwargs.get('button') != 1:
            return
        render_system = getattr(self.window, 'render_system', None)
        if render_system and render_system.get_new_game_button_at_point(x, y):
            self.event_bus.emit(EVENT_NEW_GAME_REQUEST)
