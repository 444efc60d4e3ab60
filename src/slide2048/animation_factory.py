from typing import Iterable, List

from esper import World

from slide2048.components.animation_fade import FadeAnimation
from slide2048.components.animation_slide import SlideAnimation
from slide2048.components.duration import Duration
from slide2048.components.move import TileEvent
from slide2048.components.pending_spawn import PendingSpawn
from slide2048.constants import MERGE_FADE_SECONDS, SLIDE_SECONDS_PER_CELL


class AnimationFactory:
    def __init__(self, world: World):
        self.world = world

    def create_slide_group(self, move_id: int, events: Iterable[TileEvent],
                           seconds_per_cell: float = SLIDE_SECONDS_PER_CELL) -> List[int]:
        ents = []
        for ev in events:
            src, dst = ev.from_cell, ev.to_cell
            cells = abs(dst[0] - src[0]) + abs(dst[1] - src[1])
            # A merge carries the doubled value; the travelling tile still shows its own.
            value = ev.value // 2 if ev.target_id is not None else ev.value
            ent = self.world.create_entity()
            self.world.add_component(ent, SlideAnimation(
                tile_id=ev.tile_id,
                move_id=move_id,
                src=src,
                dst=dst,
                value=value,
                target_id=ev.target_id,
            ))
            self.world.add_component(ent, Duration(max(cells, 1) * seconds_per_cell))
            ents.append(ent)
        return ents

    def create_pending_spawns(self, move_id: int, events: Iterable[TileEvent]) -> List[int]:
        ents = []
        for ev in events:
            ents.append(self.world.create_entity(PendingSpawn(tile_id=ev.tile_id, move_id=move_id)))
        return ents

    def create_fade(self, pos, value: int, duration: float = MERGE_FADE_SECONDS) -> int:
        ent = self.world.create_entity()
        self.world.add_component(ent, FadeAnimation(pos=pos, value=value))
        self.world.add_component(ent, Duration(duration))
        return ent
