from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored anywhere alive.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                          # payload: dt=float


# ============================================================================
# INPUT
# ============================================================================
EVENT_KEY_RELEASE = "key_release"            # payload: symbol=int, modifiers=int
EVENT_MOUSE_PRESS = "mouse_press"            # payload: x, y, button
EVENT_MOVE_REQUEST = "move_request"          # payload: direction=Direction|str
EVENT_NEW_GAME_REQUEST = "new_game_request"  # payload: None


# ============================================================================
# BOARD
# ============================================================================
EVENT_MOVE_RESOLVED = "move_resolved"        # payload: result=MoveResult
EVENT_BOARD_CHANGED = "board_changed"        # payload: reason=str, score=int, cells=tuple[int|None,...]
EVENT_GAME_OVER = "game_over"                # payload: score=int, cells=tuple[int|None,...]
EVENT_GAME_RESET = "game_reset"              # payload: removed=tuple[TileEvent], spawned=tuple[TileEvent], score=int, cells=tuple


# ============================================================================
# ANIMATION
# ============================================================================
EVENT_ANIMATION_COMPLETE = "animation_complete"  # payload: kind=str, move_id=int
