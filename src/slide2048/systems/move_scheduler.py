"""Serializes player move requests against the board.

Requests may arrive at any rate; the scheduler hands them to the board one at
a time and waits for the in-flight move to settle (its animation reported
complete) before starting the next. Backlog beyond ``MOVE_BACKLOG_LIMIT`` is
dropped so input lag stays bounded.
"""
from __future__ import annotations

import logging
from collections import deque
from enum import Enum, auto
from typing import Deque

from slide2048.components.move import Direction, MoveResult
from slide2048.constants import MOVE_BACKLOG_LIMIT, SETTLE_TIMEOUT
from slide2048.events.bus import (
    EventBus,
    EVENT_ANIMATION_COMPLETE,
    EVENT_MOVE_REQUEST,
    EVENT_NEW_GAME_REQUEST,
    EVENT_TICK,
)
from slide2048.systems.board import BoardSystem

logger = logging.getLogger(__name__)


class SchedulerPhase(Enum):
    IDLE = auto()
    RESOLVING = auto()


class MoveScheduler:
    """Two-phase (IDLE/RESOLVING) gate between input and the board."""

    def __init__(
        self,
        board: BoardSystem,
        event_bus: EventBus,
        *,
        backlog_limit: int = MOVE_BACKLOG_LIMIT,
        settle_timeout: float | None = SETTLE_TIMEOUT,
    ) -> None:
        self.board = board
        self.event_bus = event_bus
        self.backlog_limit = max(0, int(backlog_limit))
        self.settle_timeout = settle_timeout
        self._backlog: Deque[Direction] = deque()
        self._phase = SchedulerPhase.IDLE
        self._in_flight: MoveResult | None = None
        self._waited = 0.0
        self._draining = False
        self._settled_early: int | None = None
        self.dropped = 0
        self.event_bus.subscribe(EVENT_MOVE_REQUEST, self._on_move_request)
        self.event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self._on_new_game_request)
        self.event_bus.subscribe(EVENT_ANIMATION_COMPLETE, self._on_animation_complete)
        self.event_bus.subscribe(EVENT_TICK, self._on_tick)

    @property
    def phase(self) -> SchedulerPhase:
        return self._phase

    @property
    def pending(self) -> tuple[Direction, ...]:
        return tuple(self._backlog)

    @property
    def in_flight(self) -> MoveResult | None:
        return self._in_flight

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def request_move(self, direction: Direction | str) -> bool:
        """Queue a move. Returns False when the backlog is full and the request was dropped."""
        direction = Direction.parse(direction)
        if len(self._backlog) >= self.backlog_limit:
            self.dropped += 1
            logger.debug("Backlog full, dropping move %s", direction.value)
            return False
        self._backlog.append(direction)
        self._drain()
        return True

    def request_new_game(self) -> None:
        """Abandon pending and in-flight moves and reset the board."""
        if self._in_flight is not None:
            logger.debug("Abandoning in-flight move %d for new game", self._in_flight.move_id)
        self._backlog.clear()
        self._finish()
        self.board.reset()

    def settle(self, move_id: int) -> bool:
        """Mark the in-flight move as settled. Returns False for a stale or unknown move id."""
        if self._in_flight is None:
            if self._draining and self._phase is SchedulerPhase.RESOLVING:
                # Completion reported before apply_move returned.
                self._settled_early = move_id
                return True
            return False
        if self._in_flight.move_id != move_id:
            return False
        self._finish()
        self._drain()
        return True

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_move_request(self, sender, **payload) -> None:
        self.request_move(payload.get("direction"))

    def _on_new_game_request(self, sender, **payload) -> None:
        self.request_new_game()

    def _on_animation_complete(self, sender, **payload) -> None:
        if payload.get("kind") != "move":
            return
        move_id = payload.get("move_id")
        if move_id is None:
            return
        self.settle(move_id)

    def _on_tick(self, sender, **payload) -> None:
        if self._phase is SchedulerPhase.RESOLVING and self.settle_timeout is not None:
            self._waited += float(payload.get("dt", 0.0))
            if self._waited >= self.settle_timeout and self._in_flight is not None:
                logger.warning(
                    "Move %d did not settle within %.2fs, continuing",
                    self._in_flight.move_id, self.settle_timeout,
                )
                self._finish()
        self._drain()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _drain(self) -> None:
        # A handler reacting to move_resolved may request another move; that
        # request is queued and picked up by the outer loop.
        if self._draining:
            return
        self._draining = True
        try:
            while self._phase is SchedulerPhase.IDLE and self._backlog:
                direction = self._backlog.popleft()
                self._phase = SchedulerPhase.RESOLVING
                self._waited = 0.0
                result = self.board.apply_move(direction)
                if self._phase is not SchedulerPhase.RESOLVING:
                    # Reset while the move was being applied.
                    continue
                if result.changed and self._settled_early != result.move_id:
                    self._in_flight = result
                else:
                    self._finish()
        finally:
            self._draining = False

    def _finish(self) -> None:
        self._in_flight = None
        self._settled_early = None
        self._phase = SchedulerPhase.IDLE
        self._waited = 0.0
