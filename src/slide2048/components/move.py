"""Immutable move descriptions handed from the board to collaborators."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

Cell = Tuple[int, int]


class Direction(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @classmethod
    def parse(cls, token: Direction | str) -> Direction:
        """Return the Direction named by ``token`` or raise ValueError."""
        if isinstance(token, Direction):
            return token
        if isinstance(token, str):
            try:
                return cls(token.strip().lower())
            except ValueError:
                pass
        raise ValueError(f"Unknown direction '{token}'")


class TileEventKind(Enum):
    SLID = "slid"
    MERGED = "merged"
    SPAWNED = "spawned"
    REMOVED = "removed"


@dataclass(frozen=True, slots=True)
class TileEvent:
    """What happened to one tile during a move or reset.

    ``from_cell`` is None for spawned tiles and ``to_cell`` is None for removed
    ones. For merges ``tile_id`` is the consumed source tile and ``target_id``
    the tile that survives at ``to_cell`` holding ``value``.
    """
    tile_id: int
    kind: TileEventKind
    from_cell: Optional[Cell]
    to_cell: Optional[Cell]
    value: int
    target_id: Optional[int] = None


@dataclass(frozen=True, slots=True)
class MoveResult:
    move_id: int
    direction: Direction
    changed: bool
    events: Tuple[TileEvent, ...] = ()
    score: int = 0
    game_over: bool = False

    def events_of(self, kind: TileEventKind) -> Tuple[TileEvent, ...]:
        return tuple(ev for ev in self.events if ev.kind is kind)
