from __future__ import annotations

from typing import Optional, Sequence

_ = None


def grid(*rows: Sequence[Optional[int]]) -> list[Optional[int]]:
    """Flatten up to four rows into 16 row-major cells, padding missing rows with empties."""
    cells: list[Optional[int]] = []
    for row in rows:
        assert len(row) == 4
        cells.extend(row)
    cells.extend([None] * (16 - len(cells)))
    return cells


CHECKERBOARD = grid(
    [2, 4, 2, 4],
    [4, 2, 4, 2],
    [2, 4, 2, 4],
    [4, 2, 4, 2],
)


class Recorder:
    """Collects payloads emitted for one event name."""

    def __init__(self, bus, name: str):
        self.payloads: list[dict] = []
        bus.subscribe(name, self.on_event)

    def on_event(self, sender, **payload):
        self.payloads.append(payload)

    def __len__(self) -> int:
        return len(self.payloads)


def drive(bus, ticks, dt=0.02):
    for _ in range(ticks):
        bus.emit('tick', dt=dt)
