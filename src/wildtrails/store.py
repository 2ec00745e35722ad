# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Game store interface and a file-backed implementation.

Three operations carry the consistency guarantees of the whole core and must be
single conditional updates in any implementation:

- ``acquire_processing_lock``: only one generation attempt per game
- ``update_waypoint_status_if_unvisited``: a waypoint is reached once
- ``complete_generation``: a trail is never stored without its game turning ready
"""

from __future__ import annotations

import json
import time
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wildtrails.errors import GameNotFound, PersistenceError
from wildtrails.logging import get_logger
from wildtrails.models import Game, GameStatus, Waypoint, WaypointStatus

logger = get_logger(__name__)


class GameStore(Protocol):
    """Persistence collaborator for games and waypoints."""

    async def get_game(self, game_id: str) -> Game:
        """Raises GameNotFound / PersistenceError."""
        ...

    async def insert_waypoints(self, game_id: str, waypoints: Sequence[Waypoint]) -> None:
        """Store all waypoints or none of them."""
        ...

    async def update_game_status(
        self,
        game_id: str,
        status: GameStatus,
        attempts: int,
        error: str | None,
        lock: datetime | None,
    ) -> None: ...

    async def complete_generation(self, game_id: str, waypoints: Sequence[Waypoint]) -> None:
        """Insert the trail and mark the game ready in one write, or do neither."""
        ...

    async def update_waypoint_status_if_unvisited(self, waypoint_id: str) -> int:
        """Mark visited; return 1 if this call flipped it, 0 otherwise."""
        ...

    async def acquire_processing_lock(self, game_id: str, now: datetime, stale_before: datetime) -> bool:
        """Set the lock to *now* unless a lock newer than *stale_before* is held."""
        ...

    async def list_waypoints(self, game_id: str) -> list[Waypoint]: ...

    async def list_unvisited_waypoints(self, game_id: str) -> list[Waypoint]: ...

    async def list_games_needing_processing(self, max_attempts: int, stale_before: datetime) -> list[Game]: ...


class StoreState(BaseModel):
    """Store contents persisted to disk."""

    updated_at: float = Field(default_factory=time.time)
    games: dict[str, Game] = Field(default_factory=dict)
    waypoints: dict[str, list[Waypoint]] = Field(default_factory=dict)  # keyed by game id

    model_config = ConfigDict(extra="ignore")

    def find_waypoint(self, waypoint_id: str) -> Waypoint | None:
        for points in self.waypoints.values():
            for point in points:
                if point.id == waypoint_id:
                    return point
        return None


class FileGameStore:
    """JSON-file game store with process-safe updates.

    Every operation holds an exclusive ``fcntl`` lock for its whole
    read-modify-write cycle, which makes the conditional operations atomic
    across processes sharing the file.
    """

    def __init__(self, *, store_file: str | Path, lock_file: str | Path | None = None) -> None:
        self.store_file = Path(store_file)
        self.lock_file = Path(lock_file) if lock_file else self.store_file.with_suffix(".lock")
        self.store_file.parent.mkdir(parents=True, exist_ok=True)
        self.lock_file.parent.mkdir(parents=True, exist_ok=True)

    def _load_state(self) -> StoreState:
        if not self.store_file.exists():
            return StoreState()
        try:
            data = json.loads(self.store_file.read_text(encoding="utf-8"))
            return StoreState.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            raise PersistenceError(f"Cannot read game store {self.store_file}: {e}") from e

    def _save_state(self, state: StoreState) -> None:
        state.updated_at = time.time()
        tmp = self.store_file.with_suffix(".tmp")
        try:
            tmp.write_text(json.dumps(state.model_dump(mode="json", by_alias=True), indent=2), encoding="utf-8")
            tmp.replace(self.store_file)
        except OSError as e:
            raise PersistenceError(f"Cannot write game store {self.store_file}: {e}") from e

    @contextmanager
    def _locked_state(self, write: bool = True) -> Iterator[StoreState]:
        import fcntl

        try:
            lock_handle = self.lock_file.open("a+", encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Cannot open lock file {self.lock_file}: {e}") from e
        with lock_handle:
            fcntl.flock(lock_handle.fileno(), fcntl.LOCK_EX)
            try:
                state = self._load_state()
                yield state
                # Only reached when the body did not raise: failed writes leave the file untouched.
                if write:
                    self._save_state(state)
            finally:
                fcntl.flock(lock_handle.fileno(), fcntl.LOCK_UN)

    @staticmethod
    def _require_game(state: StoreState, game_id: str) -> Game:
        game = state.games.get(game_id)
        if game is None:
            raise GameNotFound(f"Game {game_id} not found")
        return game

    async def save_game(self, game: Game) -> None:
        """Create or replace a game record."""
        with self._locked_state() as state:
            state.games[game.id] = game

    async def get_game(self, game_id: str) -> Game:
        with self._locked_state(write=False) as state:
            return self._require_game(state, game_id)

    @staticmethod
    def _put_waypoints(state: StoreState, game_id: str, waypoints: Sequence[Waypoint]) -> None:
        if state.waypoints.get(game_id):
            raise PersistenceError(f"Waypoints for game {game_id} already exist")
        state.waypoints[game_id] = [point.model_copy(update={"game_id": game_id}) for point in waypoints]

    async def insert_waypoints(self, game_id: str, waypoints: Sequence[Waypoint]) -> None:
        with self._locked_state() as state:
            self._require_game(state, game_id)
            self._put_waypoints(state, game_id, waypoints)
        logger.debug("waypoints_inserted", game_id=game_id, count=len(waypoints))

    async def complete_generation(self, game_id: str, waypoints: Sequence[Waypoint]) -> None:
        with self._locked_state() as state:
            game = self._require_game(state, game_id)
            self._put_waypoints(state, game_id, waypoints)
            state.games[game_id] = game.model_copy(
                update={
                    "status": GameStatus.READY,
                    "processing_attempts": 0,
                    "last_processing_error": None,
                    "processing_started_at": None,
                }
            )
        logger.debug("generation_completed", game_id=game_id, count=len(waypoints))

    async def update_game_status(
        self,
        game_id: str,
        status: GameStatus,
        attempts: int,
        error: str | None,
        lock: datetime | None,
    ) -> None:
        with self._locked_state() as state:
            game = self._require_game(state, game_id)
            state.games[game_id] = game.model_copy(
                update={
                    "status": status,
                    "processing_attempts": attempts,
                    "last_processing_error": error,
                    "processing_started_at": lock,
                }
            )

    async def update_waypoint_status_if_unvisited(self, waypoint_id: str) -> int:
        with self._locked_state() as state:
            point = state.find_waypoint(waypoint_id)
            if point is None or point.status != WaypointStatus.UNVISITED:
                return 0
            point.status = WaypointStatus.VISITED
            return 1

    async def acquire_processing_lock(self, game_id: str, now: datetime, stale_before: datetime) -> bool:
        with self._locked_state() as state:
            game = self._require_game(state, game_id)
            if game.is_locked(stale_before):
                return False
            state.games[game_id] = game.model_copy(update={"processing_started_at": now})
            return True

    async def list_waypoints(self, game_id: str) -> list[Waypoint]:
        with self._locked_state(write=False) as state:
            return sorted(state.waypoints.get(game_id, []), key=lambda p: p.sequence_number)

    async def list_unvisited_waypoints(self, game_id: str) -> list[Waypoint]:
        points = await self.list_waypoints(game_id)
        return [p for p in points if p.status == WaypointStatus.UNVISITED]

    async def list_games_needing_processing(self, max_attempts: int, stale_before: datetime) -> list[Game]:
        with self._locked_state(write=False) as state:
            return [
                game
                for game in state.games.values()
                if game.status == GameStatus.SETUP
                and game.processing_attempts < max_attempts
                and not game.is_locked(stale_before)
            ]
