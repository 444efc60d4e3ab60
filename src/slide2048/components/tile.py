from dataclasses import dataclass

@dataclass(slots=True)
class Tile:
    """Numbered tile occupying one board slot.

    ``merged_this_move`` is only meaningful while a move is being resolved; the
    board system clears it at the start of every move.
    """
    value: int
    merged_this_move: bool = False
