import logging
from typing import List, Optional, Sequence, Tuple

from esper import World

from slide2048.components.board import Board
from slide2048.components.board_position import BoardPosition
from slide2048.components.game_state import GameState
from slide2048.components.move import Direction, MoveResult, TileEvent, TileEventKind
from slide2048.components.tile import Tile
from slide2048.constants import (
    GRID_COLS,
    GRID_ROWS,
    INITIAL_TILE_COUNT,
    SPAWN_FOUR_PROBABILITY,
    TILES_PER_MOVE,
)
from slide2048.events.bus import (
    EventBus,
    EVENT_BOARD_CHANGED,
    EVENT_GAME_OVER,
    EVENT_GAME_RESET,
    EVENT_MOVE_RESOLVED,
)
from slide2048.systems.board_ops import (
    CellValues,
    find_destination,
    get_entity_at,
    index_to_cell,
    is_terminal_cells,
    is_valid_tile_value,
    move_lines,
    snapshot_cells,
    tile_entities_by_slot,
)
from slide2048.utils.game_state import get_game_state

logger = logging.getLogger(__name__)


class BoardSystem:
    """Owns the grid of tile entities and resolves moves against it.

    Collaborators never get a handle on the tiles: every change is published as
    immutable TileEvent snapshots on the event bus.
    """

    def __init__(self, world: World, event_bus: EventBus, rows: int = GRID_ROWS, cols: int = GRID_COLS):
        self.world = world
        self.event_bus = event_bus
        # Create a single board entity with Board component
        self.board_entity = self.world.create_entity()
        self.world.add_component(self.board_entity, Board(rows=rows, cols=cols))
        self._move_counter = 0
        self._reset_count = 0
        self.spawn_tiles(INITIAL_TILE_COUNT)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    @property
    def state(self) -> GameState:
        return get_game_state(self.world)

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    def cells(self) -> CellValues:
        """Value per slot in row-major order, None for empty slots."""
        board = self.board
        return snapshot_cells(self.world, board.rows, board.cols)

    def value_rows(self) -> Tuple[CellValues, ...]:
        cells = self.cells()
        cols = self.board.cols
        return tuple(cells[start:start + cols] for start in range(0, len(cells), cols))

    def tile_at(self, row: int, col: int) -> Optional[int]:
        return get_entity_at(self.world, row, col)

    def is_terminal(self) -> bool:
        board = self.board
        return is_terminal_cells(self.cells(), board.rows, board.cols)

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    def apply_move(self, direction) -> MoveResult:
        direction = Direction.parse(direction)
        state = self.state
        self._move_counter += 1
        move_id = self._move_counter
        if state.game_over or state.resetting or state.resolving_move:
            logger.debug(
                "Ignoring move %s (game_over=%s resetting=%s resolving=%s)",
                direction.value, state.game_over, state.resetting, state.resolving_move,
            )
            return MoveResult(move_id=move_id, direction=direction, changed=False,
                              score=state.score, game_over=state.game_over)

        state.resolving_move = True
        try:
            events = self._resolve_lines(direction)
            changed = bool(events)
            if changed:
                events.extend(self.spawn_tiles(TILES_PER_MOVE))
            became_terminal = self.is_terminal()
            state.game_over = became_terminal
        finally:
            state.resolving_move = False

        result = MoveResult(
            move_id=move_id,
            direction=direction,
            changed=changed,
            events=tuple(events),
            score=state.score,
            game_over=state.game_over,
        )
        logger.debug("Move %d %s changed=%s score=%d", move_id, direction.value, changed, state.score)
        resets = self._reset_count
        self.event_bus.emit(EVENT_MOVE_RESOLVED, result=result)
        if self._reset_count != resets:
            # A move_resolved handler started a new game; this move's board is gone.
            return result
        if changed:
            self.event_bus.emit(EVENT_BOARD_CHANGED, reason="move", score=state.score, cells=self.cells())
        if state.game_over and not state.game_over_notified:
            state.game_over_notified = True
            logger.info("Game over with score %d", state.score)
            self.event_bus.emit(EVENT_GAME_OVER, score=state.score, cells=self.cells())
        return result

    def _resolve_lines(self, direction: Direction) -> List[TileEvent]:
        board = self.board
        slot_entities = tile_entities_by_slot(self.world, board.rows, board.cols)
        slots: List[Optional[Tile]] = [
            self.world.component_for_entity(ent, Tile) if ent is not None else None
            for ent in slot_entities
        ]
        for tile in slots:
            if tile is not None:
                tile.merged_this_move = False

        events: List[TileEvent] = []
        for line in move_lines(direction, board.rows, board.cols):
            for position in range(1, len(line)):
                source = line[position]
                found = find_destination(slots, line, position)
                if found is None:
                    continue
                target, is_merge = found
                ent = slot_entities[source]
                tile = slots[source]
                from_cell = index_to_cell(source, board.cols)
                to_cell = index_to_cell(target, board.cols)
                if is_merge:
                    survivor = slots[target]
                    survivor.value *= 2
                    survivor.merged_this_move = True
                    events.append(TileEvent(
                        tile_id=ent,
                        kind=TileEventKind.MERGED,
                        from_cell=from_cell,
                        to_cell=to_cell,
                        value=survivor.value,
                        target_id=slot_entities[target],
                    ))
                    self.world.delete_entity(ent, immediate=True)
                else:
                    position_comp = self.world.component_for_entity(ent, BoardPosition)
                    position_comp.row, position_comp.col = to_cell
                    slot_entities[target] = ent
                    slots[target] = tile
                    events.append(TileEvent(
                        tile_id=ent,
                        kind=TileEventKind.SLID,
                        from_cell=from_cell,
                        to_cell=to_cell,
                        value=tile.value,
                    ))
                slot_entities[source] = None
                slots[source] = None
        return events

    # ------------------------------------------------------------------
    # Spawning and reset
    # ------------------------------------------------------------------

    def spawn_tiles(self, count: int) -> List[TileEvent]:
        """Place up to ``count`` new tiles on random empty slots and add their values to the score."""
        board = self.board
        state = self.state
        rng = self.world.random
        empty = [index for index, ent in enumerate(tile_entities_by_slot(self.world, board.rows, board.cols))
                 if ent is None]
        chosen = rng.sample(empty, min(max(count, 0), len(empty)))
        spawned: List[TileEvent] = []
        for index in chosen:
            value = 4 if rng.random() < SPAWN_FOUR_PROBABILITY else 2
            row, col = index_to_cell(index, board.cols)
            ent = self.world.create_entity(Tile(value=value), BoardPosition(row=row, col=col))
            state.score += value
            spawned.append(TileEvent(
                tile_id=ent,
                kind=TileEventKind.SPAWNED,
                from_cell=None,
                to_cell=(row, col),
                value=value,
            ))
        return spawned

    def reset(self) -> Tuple[Tuple[TileEvent, ...], Tuple[TileEvent, ...]]:
        """Start a new game: clear every tile, zero the score and seed the board again."""
        state = self.state
        self._reset_count += 1
        state.resetting = True
        try:
            removed = tuple(self._clear_tiles())
            state.score = 0
            state.game_over = False
            state.game_over_notified = False
            state.resolving_move = False
            spawned = tuple(self.spawn_tiles(INITIAL_TILE_COUNT))
        finally:
            state.resetting = False
        cells = self.cells()
        logger.info("New game started")
        self.event_bus.emit(EVENT_GAME_RESET, removed=removed, spawned=spawned, score=state.score, cells=cells)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="reset", score=state.score, cells=cells)
        return removed, spawned

    def load_cells(self, cells: Sequence[Optional[int]]) -> None:
        """Replace the board contents with ``cells`` (row-major, None for empty).

        Score and flags are left alone apart from ``game_over``, which is
        recomputed on the next move.
        """
        board = self.board
        if len(cells) != board.size:
            raise ValueError(f"Expected {board.size} cells, got {len(cells)}")
        for value in cells:
            if value is not None and not is_valid_tile_value(value):
                raise ValueError(f"Invalid tile value {value!r}")
        self._clear_tiles()
        for index, value in enumerate(cells):
            if value is None:
                continue
            row, col = index_to_cell(index, board.cols)
            self.world.create_entity(Tile(value=value), BoardPosition(row=row, col=col))
        self.state.game_over = False
        self.state.game_over_notified = False

    def _clear_tiles(self) -> List[TileEvent]:
        removed: List[TileEvent] = []
        for ent, (tile, position) in list(self.world.get_components(Tile, BoardPosition)):
            removed.append(TileEvent(
                tile_id=ent,
                kind=TileEventKind.REMOVED,
                from_cell=(position.row, position.col),
                to_cell=None,
                value=tile.value,
            ))
            self.world.delete_entity(ent, immediate=True)
        return removed
