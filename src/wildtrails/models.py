# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Data types shared by generation, storage and proximity.

Games and waypoints are persisted records and use pydantic models; landmarks
and proximity events live only for the duration of one call and are plain
dataclasses.
"""

from __future__ import annotations

import random
import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Difficulty(StrEnum):
    """Game difficulty levels."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class GameStatus(StrEnum):
    """Lifecycle of a game."""

    SETUP = "setup"  # Waiting for (re)generation
    READY = "ready"  # Waypoints generated
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"  # Generation attempts exhausted


class WaypointType(StrEnum):
    START = "start"
    CLUE = "clue"
    END = "end"


class WaypointStatus(StrEnum):
    UNVISITED = "unvisited"
    VISITED = "visited"


class LatLng(BaseModel):
    """A WGS84 coordinate in degrees."""

    lat: float
    lng: float

    model_config = ConfigDict(frozen=True)


class BoundingBox(BaseModel):
    """Play area given by its north-west and south-east corners.

    Corners are stored as entered; the min/max accessors normalise them so a
    box drawn "upside down" still behaves.
    """

    north_west: LatLng = Field(alias="northWest")
    south_east: LatLng = Field(alias="southEast")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def min_lat(self) -> float:
        return min(self.north_west.lat, self.south_east.lat)

    @property
    def max_lat(self) -> float:
        return max(self.north_west.lat, self.south_east.lat)

    @property
    def min_lng(self) -> float:
        return min(self.north_west.lng, self.south_east.lng)

    @property
    def max_lng(self) -> float:
        return max(self.north_west.lng, self.south_east.lng)

    @property
    def center(self) -> LatLng:
        return LatLng(lat=(self.min_lat + self.max_lat) / 2, lng=(self.min_lng + self.max_lng) / 2)

    def contains(self, point: LatLng) -> bool:
        return self.min_lat <= point.lat <= self.max_lat and self.min_lng <= point.lng <= self.max_lng

    def random_point(self, rng: random.Random) -> LatLng:
        """Uniform random point inside the box."""
        return LatLng(
            lat=self.min_lat + rng.random() * (self.max_lat - self.min_lat),
            lng=self.min_lng + rng.random() * (self.max_lng - self.min_lng),
        )


class Game(BaseModel):
    """A game as seen by the generation core.

    The core reads configuration fields and only ever writes ``status``,
    ``processing_attempts``, ``last_processing_error`` and
    ``processing_started_at``.
    """

    id: str
    bounding_box: BoundingBox
    max_radius: float | None = None  # km; None or 0 means "use default"
    starting_point: LatLng | None = None
    difficulty: Difficulty = Difficulty.EASY
    status: GameStatus = GameStatus.SETUP
    processing_attempts: int = 0
    last_processing_error: str | None = None
    processing_started_at: datetime | None = None  # processing lock

    model_config = ConfigDict(extra="ignore")

    def effective_max_radius(self, default_km: float) -> float:
        return self.max_radius or default_km

    def is_locked(self, stale_before: datetime) -> bool:
        """True when a processing lock is held and newer than *stale_before*."""
        if self.processing_started_at is None:
            return False
        return self.processing_started_at > stale_before


class Waypoint(BaseModel):
    """One stop of a generated trail."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    game_id: str | None = None
    latitude: float
    longitude: float
    sequence_number: int
    type: WaypointType
    status: WaypointStatus = WaypointStatus.UNVISITED
    hint: str | None = None

    model_config = ConfigDict(extra="ignore")

    @property
    def position(self) -> LatLng:
        return LatLng(lat=self.latitude, lng=self.longitude)


@dataclass(frozen=True)
class Landmark:
    """An identifiable feature close to a target point."""

    type: str
    name: str | None
    position: LatLng
    priority: int  # 1 = best, 3 = acceptable
    distance_km: float


@dataclass(frozen=True)
class ProximityEvent:
    """Emitted when a player reaches an unvisited waypoint."""

    point_id: str
    point_type: WaypointType
    hint: str | None
    distance: int  # meters, rounded
