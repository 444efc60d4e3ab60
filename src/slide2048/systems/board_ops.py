from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from esper import World

from slide2048.components.board_position import BoardPosition
from slide2048.components.move import Direction
from slide2048.components.tile import Tile

Position = Tuple[int, int]
CellValues = Tuple[Optional[int], ...]


def index_to_cell(index: int, cols: int) -> Position:
    return index // cols, index % cols


def cell_to_index(row: int, col: int, cols: int) -> int:
    return row * cols + col


def is_valid_tile_value(value) -> bool:
    """True for powers of two >= 2."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 2 and value & (value - 1) == 0


def move_lines(direction: Direction, rows: int, cols: int) -> List[List[int]]:
    """Slot indices of every line along ``direction``, each ordered from the target edge outward.

    LEFT walks rows from column 0, RIGHT from the last column, UP walks columns
    from row 0 and DOWN from the last row.
    """
    if direction is Direction.LEFT:
        return [[cell_to_index(r, c, cols) for c in range(cols)] for r in range(rows)]
    if direction is Direction.RIGHT:
        return [[cell_to_index(r, c, cols) for c in reversed(range(cols))] for r in range(rows)]
    if direction is Direction.UP:
        return [[cell_to_index(r, c, cols) for r in range(rows)] for c in range(cols)]
    if direction is Direction.DOWN:
        return [[cell_to_index(r, c, cols) for r in reversed(range(rows))] for c in range(cols)]
    raise ValueError(f"Unknown direction '{direction}'")


def find_destination(
    slots: Sequence[Optional[Tile]],
    line: Sequence[int],
    position: int,
) -> Optional[Tuple[int, bool]]:
    """Find where the tile at ``line[position]`` ends up.

    Scans from the tile back toward the edge. Empty slots become the provisional
    destination and the scan continues; an equal tile that has not merged this
    move is a merge target and ends the scan; anything else ends the scan with
    the last empty slot. Returns ``(slot_index, is_merge)`` or None when the
    tile stays put.
    """
    tile = slots[line[position]]
    if tile is None:
        return None
    found: Optional[Tuple[int, bool]] = None
    for step in range(position - 1, -1, -1):
        index = line[step]
        other = slots[index]
        if other is None:
            found = (index, False)
            continue
        if other.value == tile.value and not other.merged_this_move:
            found = (index, True)
        break
    return found


def is_terminal_cells(cells: Sequence[Optional[int]], rows: int, cols: int) -> bool:
    """True when every slot is filled and no right/down neighbours are equal."""
    for index, value in enumerate(cells):
        if value is None:
            return False
        row, col = index_to_cell(index, cols)
        if col < cols - 1 and cells[index + 1] == value:
            return False
        if row < rows - 1 and cells[index + cols] == value:
            return False
    return True


def tile_entities_by_slot(world: World, rows: int, cols: int) -> List[Optional[int]]:
    """Entity id per slot (row-major), None where the slot is empty."""
    slots: List[Optional[int]] = [None] * (rows * cols)
    for entity, (_, position) in world.get_components(Tile, BoardPosition):
        slots[cell_to_index(position.row, position.col, cols)] = entity
    return slots


def get_entity_at(world: World, row: int, col: int) -> int | None:
    for entity, (_, position) in world.get_components(Tile, BoardPosition):
        if position.row == row and position.col == col:
            return entity
    return None


def snapshot_cells(world: World, rows: int, cols: int) -> CellValues:
    values: List[Optional[int]] = [None] * (rows * cols)
    for _, (tile, position) in world.get_components(Tile, BoardPosition):
        values[cell_to_index(position.row, position.col, cols)] = tile.value
    return tuple(values)

