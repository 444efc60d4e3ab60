from __future__ import annotations

from esper import World

from slide2048.components.game_state import GameState


def get_game_state(world: World) -> GameState:
    """Return the singleton GameState, creating it when the world has none."""

    for _, state in world.get_component(GameState):
        return state
    state = GameState()
    world.add_component(world.create_entity(), state)
    return state
