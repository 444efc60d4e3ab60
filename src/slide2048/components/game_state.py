"""Game state resource shared by the board and the systems reading it."""
from dataclasses import dataclass


@dataclass
class GameState:
    """Singleton component holding score and lifecycle flags for the current game."""
    score: int = 0
    game_over: bool = False
    resolving_move: bool = False
    resetting: bool = False
    game_over_notified: bool = False
