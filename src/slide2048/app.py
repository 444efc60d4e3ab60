"""Arcade window for slide2048.

Sets up the ECS world, event bus and systems, and forwards window callbacks to
the bus.
"""
import logging

from arcade import Window, run, set_background_color

from slide2048.constants import UPDATE_RATE
from slide2048.events.bus import EventBus, EVENT_KEY_RELEASE, EVENT_MOUSE_PRESS, EVENT_TICK
from slide2048.systems.animation import AnimationSystem
from slide2048.systems.board import BoardSystem
from slide2048.systems.input import InputSystem
from slide2048.systems.move_scheduler import MoveScheduler
from slide2048.systems.render import RenderSystem
from slide2048.ui.layout import default_window_size
from slide2048.world import create_world


class Slide2048Window(Window):
    def __init__(self):
        width, height = default_window_size()
        super().__init__(width, height, "2048")
        self.set_update_rate(UPDATE_RATE)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus)

        # Board and scheduling
        self.board_system = BoardSystem(self.world, self.event_bus)
        self.move_scheduler = MoveScheduler(self.board_system, self.event_bus)

        # Presentation
        self.animation_system = AnimationSystem(self.world, self.event_bus)
        self.render_system = RenderSystem(self.world, self.event_bus, self)
        self.input_system = InputSystem(self.event_bus, self)

        set_background_color((250, 248, 239))

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_key_release(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_RELEASE, symbol=symbol, modifiers=modifiers)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    Slide2048Window()
    run()


if __name__ == "__main__":
    main()
