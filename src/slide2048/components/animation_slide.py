from dataclasses import dataclass
from typing import Optional, Tuple

@dataclass(slots=True)
class SlideAnimation:
    """One tile travelling from ``src`` to ``dst`` as part of a resolved move.

    For merges ``target_id`` is the surviving tile waiting at ``dst``.
    """
    tile_id: int
    move_id: int
    src: Tuple[int, int]
    dst: Tuple[int, int]
    value: int
    target_id: Optional[int] = None
    linear: float = 0.0  # 0..1
