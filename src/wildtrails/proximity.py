# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Proximity engine: turn player location fixes into waypoint-reached events.

Location updates for one game can be evaluated concurrently by several
workers. Correctness rests on the store's conditional status update: only
the evaluation that actually flips a waypoint from unvisited to visited
reports it.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import structlog

from wildtrails.defaults import DEFAULT_TRIGGER_DISTANCE_METERS
from wildtrails.errors import InvalidCoordinateError, PersistenceError
from wildtrails.geo import distance_km, is_valid_coordinate
from wildtrails.logging import get_logger
from wildtrails.models import LatLng, ProximityEvent, Waypoint, WaypointType
from wildtrails.store import GameStore


@dataclass(frozen=True)
class ProximityCheck:
    """Distance from the player to one waypoint."""

    point: Waypoint
    distance_m: float
    triggered: bool


def triggerable(points: Iterable[Waypoint]) -> list[Waypoint]:
    """Drop start points; players begin there so they never trigger."""
    return [p for p in points if p.type != WaypointType.START]


def check_point(
    player: LatLng,
    point: Waypoint,
    trigger_distance_m: float = DEFAULT_TRIGGER_DISTANCE_METERS,
) -> ProximityCheck:
    distance = distance_km(player, point.position) * 1000
    return ProximityCheck(point=point, distance_m=distance, triggered=distance <= trigger_distance_m)


def triggered_points(
    player: LatLng,
    points: Iterable[Waypoint],
    trigger_distance_m: float = DEFAULT_TRIGGER_DISTANCE_METERS,
) -> list[ProximityCheck]:
    """Triggerable points within *trigger_distance_m* (boundary inclusive)."""
    checks = (check_point(player, p, trigger_distance_m) for p in triggerable(points))
    return [c for c in checks if c.triggered]


def closest_point(player: LatLng, points: Sequence[Waypoint]) -> ProximityCheck | None:
    if not points:
        return None
    return min((check_point(player, p) for p in points), key=lambda c: c.distance_m)


class ProximityEngine:
    """Evaluates player positions against a game's unvisited waypoints."""

    def __init__(
        self,
        store: GameStore,
        trigger_distance_m: float = DEFAULT_TRIGGER_DISTANCE_METERS,
        logger: structlog.BoundLogger | None = None,
    ):
        self.store = store
        self.trigger_distance_m = trigger_distance_m
        self.logger = logger or get_logger(__name__)

    async def evaluate(
        self,
        player_lat: float,
        player_lng: float,
        unvisited_points: Sequence[Waypoint],
        trigger_radius_m: float | None = None,
    ) -> list[ProximityEvent]:
        """Mark reached waypoints visited and report them.

        A waypoint whose conditional update affects no rows was claimed by a
        concurrent evaluation and is not reported again. A store error on
        one waypoint is logged and the others are still processed.
        """
        radius = self.trigger_distance_m if trigger_radius_m is None else trigger_radius_m
        player = LatLng(lat=player_lat, lng=player_lng)
        events: list[ProximityEvent] = []

        for check in triggered_points(player, unvisited_points, radius):
            point = check.point
            try:
                affected = await self.store.update_waypoint_status_if_unvisited(point.id)
            except PersistenceError as e:
                self.logger.error("waypoint_status_update_failed", point_id=point.id, error=str(e))
                continue
            if affected == 0:
                self.logger.debug("waypoint_already_visited", point_id=point.id)
                continue

            events.append(
                ProximityEvent(
                    point_id=point.id,
                    point_type=point.type,
                    hint=point.hint,
                    distance=math.floor(check.distance_m + 0.5),
                )
            )
            self.logger.info("waypoint_reached", point_id=point.id, point_type=point.type, distance_m=check.distance_m)

        return events

    async def evaluate_for_game(self, game_id: str, player_lat: float, player_lng: float) -> list[ProximityEvent]:
        """Load a game's unvisited waypoints and evaluate a location update.

        Raises:
            InvalidCoordinateError: If the fix is outside the WGS84 range
            PersistenceError: If the waypoints cannot be loaded
        """
        if not is_valid_coordinate(player_lat, player_lng):
            raise InvalidCoordinateError(f"Invalid coordinate: {player_lat}, {player_lng}")
        points = await self.store.list_unvisited_waypoints(game_id)
        if not points:
            return []
        return await self.evaluate(player_lat, player_lng, points)
