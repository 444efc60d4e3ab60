from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from esper import World

from slide2048.components.animation_fade import FadeAnimation
from slide2048.components.animation_slide import SlideAnimation
from slide2048.components.board_position import BoardPosition
from slide2048.components.pending_spawn import PendingSpawn
from slide2048.components.tile import Tile


@dataclass(slots=True)
class TileDraw:
    """Frame-scoped description of one tile to draw."""

    row: float
    col: float
    value: int
    alpha: float = 1.0
    layer: int = 1


def _ease(p: float) -> float:
    if p < 0.5:
        return 2 * p * p
    return -2 * p * p + 4 * p - 1


def collect_tile_draws(world: World, *, use_easing: bool = True) -> List[TileDraw]:
    """Build the draw list for the current frame from board tiles and animations.

    Tiles that are mid-slide are drawn from their animation, merge targets keep
    showing their pre-merge value until the incoming tile arrives, and tiles
    spawned by an unsettled move stay hidden.
    """
    sliding: Dict[int, SlideAnimation] = {}
    incoming_merges: Dict[int, int] = {}
    for _, slide in world.get_component(SlideAnimation):
        sliding[slide.tile_id] = slide
        if slide.target_id is not None:
            incoming_merges[slide.target_id] = slide.value
    hidden = {pending.tile_id for _, pending in world.get_component(PendingSpawn)}

    draws: List[TileDraw] = []
    for _, fade in world.get_component(FadeAnimation):
        draws.append(TileDraw(fade.pos[0], fade.pos[1], fade.value, alpha=fade.alpha, layer=0))
    for ent, (tile, position) in world.get_components(Tile, BoardPosition):
        if ent in hidden:
            continue
        slide = sliding.get(ent)
        if slide is not None:
            continue
        value = incoming_merges.get(ent, tile.value)
        draws.append(TileDraw(position.row, position.col, value))
    for slide in sliding.values():
        t = _ease(slide.linear) if use_easing else slide.linear
        row = slide.src[0] + (slide.dst[0] - slide.src[0]) * t
        col = slide.src[1] + (slide.dst[1] - slide.src[1]) * t
        # Merging tiles travel above the tile they land on.
        draws.append(TileDraw(row, col, slide.value, layer=2 if slide.target_id is not None else 1))
    draws.sort(key=lambda d: d.layer)
    return draws
