# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Job orchestration for trail generation.

One call to :meth:`JobOrchestrator.run_attempt` is one generation attempt for
one game. The outcome is recorded on the game itself:

    success                     -> ready  (attempts/error/lock cleared)
    failure, attempt < max      -> setup  (attempts=n, error recorded, lock cleared)
    failure, attempt >= max     -> failed (attempts=n, error recorded)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import structlog

from wildtrails.config import GenerationConfig
from wildtrails.errors import GeometrySourceUnavailable, ProcessingLockHeld
from wildtrails.generation.base import PathGenerationStrategy
from wildtrails.logging import get_logger
from wildtrails.models import BoundingBox, Game, GameStatus, Waypoint
from wildtrails.osm.features import Feature, GeometrySource
from wildtrails.store import GameStore


def utc_now() -> datetime:
    return datetime.now(UTC)


async def fetch_features_or_empty(
    source: GeometrySource | None,
    bbox: BoundingBox,
    log: structlog.BoundLogger,
) -> list[Feature]:
    """Features for *bbox*, or an empty list when the source is missing or down."""
    if source is None:
        return []
    try:
        features = await source.fetch_features(bbox)
    except GeometrySourceUnavailable as e:
        log.warning("geometry_source_unavailable", error=str(e))
        return []
    if not features:
        log.warning("geometry_source_empty")
    return list(features)


@dataclass
class AttemptSuccess:
    game_id: str
    attempt: int
    waypoints: list[Waypoint]
    status: GameStatus = GameStatus.READY
    ok: bool = True


@dataclass
class AttemptFailure:
    game_id: str
    attempt: int
    error: str
    status: GameStatus | None  # None when skipped (nothing written)
    skipped: bool = False
    ok: bool = False


AttemptResult = AttemptSuccess | AttemptFailure


@dataclass
class BatchSummary:
    """Outcome of one :meth:`JobOrchestrator.process_pending` sweep."""

    total: int = 0
    successful: int = 0
    failed: int = 0
    skipped: int = 0
    results: list[AttemptResult] = field(default_factory=list)


class JobOrchestrator:
    """Drives generation attempts against the game store.

    Only failures from fetching, generating or persisting count against the
    attempt budget. A missing or broken geometry source downgrades the run to
    unfiltered generation instead.
    """

    def __init__(
        self,
        store: GameStore,
        strategy: PathGenerationStrategy,
        geometry_source: GeometrySource | None = None,
        config: GenerationConfig | None = None,
        clock: Callable[[], datetime] = utc_now,
        logger: structlog.BoundLogger | None = None,
    ):
        self.store = store
        self.strategy = strategy
        self.geometry_source = geometry_source
        self.config = config or GenerationConfig()
        self.clock = clock
        self.logger = logger or get_logger(__name__)

    @property
    def lock_timeout(self) -> timedelta:
        return timedelta(minutes=self.config.processing_timeout_minutes)

    async def run_attempt(self, game_id: str, attempt_number: int) -> AttemptResult:
        """Run one generation attempt for *game_id*.

        Refuses to start while another attempt holds a fresh processing lock
        or when the game has already left ``setup``.
        Never raises for generation or persistence problems; those end up in
        the returned result and on the game record.
        """
        log = self.logger.bind(game_id=game_id, attempt=attempt_number)
        now = self.clock()

        try:
            acquired = await self.store.acquire_processing_lock(game_id, now, now - self.lock_timeout)
            if not acquired:
                raise ProcessingLockHeld(f"Game {game_id} is already being processed")
        except ProcessingLockHeld as e:
            log.info("generation_attempt_skipped", reason=str(e))
            return AttemptFailure(game_id=game_id, attempt=attempt_number, error=str(e), status=None, skipped=True)
        except Exception as e:
            # Could not even take the lock: record nothing, leave it to the next sweep.
            log.error("processing_lock_failed", error=str(e))
            return AttemptFailure(game_id=game_id, attempt=attempt_number, error=str(e), status=None, skipped=True)

        try:
            game = await self.store.get_game(game_id)
        except Exception as e:
            return await self._record_failure(game_id, attempt_number, e, now, log)
        if game.status != GameStatus.SETUP:
            return await self._release_finished(game, attempt_number, log)

        log.info("generation_attempt_started")
        try:
            features = await fetch_features_or_empty(self.geometry_source, game.bounding_box, log)
            waypoints = await self.strategy.generate(game, features)
            await self.store.complete_generation(game_id, waypoints)
        except Exception as e:
            return await self._record_failure(game_id, attempt_number, e, now, log)

        log.info("generation_attempt_succeeded", waypoints=len(waypoints))
        return AttemptSuccess(game_id=game_id, attempt=attempt_number, waypoints=waypoints)

    async def _release_finished(
        self, game: Game, attempt_number: int, log: structlog.BoundLogger
    ) -> AttemptFailure:
        # Ready and failed games keep their trail and status; only the lock taken above is dropped.
        message = f"Game {game.id} is {game.status.value}, not {GameStatus.SETUP.value}"
        log.info("generation_attempt_skipped", reason=message)
        try:
            await self.store.update_game_status(
                game.id, game.status, game.processing_attempts, game.last_processing_error, None
            )
        except Exception as e:
            log.error("processing_lock_release_failed", error=str(e))
        return AttemptFailure(game_id=game.id, attempt=attempt_number, error=message, status=None, skipped=True)

    async def _record_failure(
        self,
        game_id: str,
        attempt_number: int,
        error: Exception,
        locked_at: datetime,
        log: structlog.BoundLogger,
    ) -> AttemptFailure:
        message = str(error) or type(error).__name__
        terminal = attempt_number >= self.config.max_processing_attempts
        if terminal:
            status = GameStatus.FAILED
            # The lock stays set: a failed game is never picked up again.
            lock = locked_at
        else:
            status = GameStatus.SETUP
            lock = None

        log.error(
            "generation_attempt_failed",
            error=message,
            error_type=type(error).__name__,
            terminal=terminal,
        )
        try:
            await self.store.update_game_status(game_id, status, attempt_number, message, lock)
        except Exception as e:
            log.error("failure_status_update_failed", error=str(e))
        return AttemptFailure(game_id=game_id, attempt=attempt_number, error=message, status=status)

    async def process_pending(self) -> BatchSummary:
        """Run the next attempt for every game waiting on generation."""
        now = self.clock()
        games = await self.store.list_games_needing_processing(
            self.config.max_processing_attempts, now - self.lock_timeout
        )
        summary = BatchSummary(total=len(games))
        if not games:
            self.logger.info("no_games_to_process")
            return summary

        self.logger.info("games_to_process", count=len(games), ids=[g.id for g in games])
        for game in games:
            result = await self.run_attempt(game.id, game.processing_attempts + 1)
            summary.results.append(result)
            if result.ok:
                summary.successful += 1
            elif isinstance(result, AttemptFailure) and result.skipped:
                summary.skipped += 1
            else:
                summary.failed += 1

        self.logger.info(
            "processing_complete",
            successful=summary.successful,
            failed=summary.failed,
            skipped=summary.skipped,
        )
        return summary
