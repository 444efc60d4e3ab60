from dataclasses import dataclass

@dataclass(slots=True)
class PendingSpawn:
    """Marks a freshly spawned tile that stays hidden until its move settles."""
    tile_id: int
    move_id: int
