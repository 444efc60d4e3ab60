from slide2048.events.bus import (EVENT_TICK, EventBus, EVENT_ANIMATION_COMPLETE,
                                 EVENT_MOVE_RESOLVED, EVENT_GAME_RESET)
from slide2048.components.animation_fade import FadeAnimation
from slide2048.components.animation_slide import SlideAnimation
from slide2048.components.duration import Duration
from slide2048.components.move import MoveResult, TileEventKind
from slide2048.components.pending_spawn import PendingSpawn
from slide2048.animation_factory import AnimationFactory
from esper import World


class AnimationSystem:
    """Drives timing of move animations and reports when a move has settled.

    Each travelling tile is its own SlideAnimation entity. Once every slide of
    a move reaches the end, the move's spawned tiles are revealed, consumed
    merge tiles start fading and ``animation_complete(kind='move')`` is emitted.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.factory = AnimationFactory(world)
        event_bus.subscribe(EVENT_TICK, self.on_tick)
        event_bus.subscribe(EVENT_MOVE_RESOLVED, self.on_move_resolved)
        event_bus.subscribe(EVENT_GAME_RESET, self.on_game_reset)

    def on_move_resolved(self, sender, **kwargs):
        result: MoveResult | None = kwargs.get('result')
        if result is None or not result.changed:
            return
        moving = [ev for ev in result.events if ev.kind in (TileEventKind.SLID, TileEventKind.MERGED)]
        self.factory.create_pending_spawns(result.move_id, result.events_of(TileEventKind.SPAWNED))
        if not moving:
            self._complete_move(result.move_id)
            return
        self.factory.create_slide_group(result.move_id, moving)

    def on_game_reset(self, sender, **kwargs):
        for comp_type in (SlideAnimation, FadeAnimation, PendingSpawn):
            self._remove_component(comp_type)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        # Slide progression
        slides = list(self.world.get_component(SlideAnimation))
        if slides:
            for ent, slide in slides:
                if slide.linear < 1.0:
                    d = self.world.component_for_entity(ent, Duration)
                    slide.linear += dt / d.value
                    if slide.linear > 1.0:
                        slide.linear = 1.0
            for move_id in sorted({slide.move_id for _, slide in slides}):
                group = [(ent, slide) for ent, slide in slides if slide.move_id == move_id]
                if all(slide.linear >= 1.0 for _, slide in group):
                    for ent, slide in group:
                        if slide.target_id is not None:
                            self.factory.create_fade(slide.dst, slide.value)
                        self.world.delete_entity(ent, immediate=True)
                    self._complete_move(move_id)
        # Fade progression (cosmetic only, does not gate moves)
        fades = list(self.world.get_component(FadeAnimation))
        if fades:
            positions = []
            for ent, fade in fades:
                d = self.world.component_for_entity(ent, Duration)
                fade.alpha -= dt / d.value
                if fade.alpha <= 0.0:
                    positions.append(fade.pos)
                    self.world.delete_entity(ent, immediate=True)
            if positions:
                self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind='fade', items=positions)

    def is_animating(self) -> bool:
        return any(True for _ in self.world.get_component(SlideAnimation))

    def _complete_move(self, move_id: int):
        for ent, pending in list(self.world.get_component(PendingSpawn)):
            if pending.move_id == move_id:
                self.world.delete_entity(ent, immediate=True)
        self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind='move', move_id=move_id)

    def _remove_component(self, comp_type):
        ents = [ent for ent, _ in self.world.get_component(comp_type)]
        for ent in ents:
            self.world.delete_entity(ent, immediate=True)
