# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for shared data types."""

from __future__ import annotations

import random
from datetime import UTC, datetime, timedelta

from wildtrails.models import BoundingBox, Game, GameStatus, LatLng, Waypoint, WaypointStatus, WaypointType


def test_bounding_box_accepts_camel_case_aliases():
    bbox = BoundingBox.model_validate(
        {"northWest": {"lat": 48.01, "lng": 7.99}, "southEast": {"lat": 47.99, "lng": 8.01}}
    )
    assert bbox.north_west == LatLng(lat=48.01, lng=7.99)
    assert bbox.model_dump(by_alias=True)["southEast"] == {"lat": 47.99, "lng": 8.01}


def test_bounding_box_normalises_swapped_corners():
    bbox = BoundingBox(north_west=LatLng(lat=47.99, lng=8.01), south_east=LatLng(lat=48.01, lng=7.99))
    assert (bbox.min_lat, bbox.max_lat) == (47.99, 48.01)
    assert (bbox.min_lng, bbox.max_lng) == (7.99, 8.01)
    assert bbox.center.lat == 48.0


def test_random_point_stays_in_box(small_box):
    rng = random.Random(3)
    for _ in range(200):
        assert small_box.contains(small_box.random_point(rng))


def test_effective_max_radius_treats_zero_as_unset(small_box):
    assert Game(id="g", bounding_box=small_box, max_radius=0).effective_max_radius(5) == 5
    assert Game(id="g", bounding_box=small_box).effective_max_radius(5) == 5
    assert Game(id="g", bounding_box=small_box, max_radius=1.5).effective_max_radius(5) == 1.5


def test_processing_lock_expires(small_box):
    now = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
    stale_before = now - timedelta(minutes=10)
    game = Game(id="g", bounding_box=small_box)
    assert not game.is_locked(stale_before)

    fresh = game.model_copy(update={"processing_started_at": now - timedelta(minutes=2)})
    stale = game.model_copy(update={"processing_started_at": now - timedelta(minutes=11)})
    boundary = game.model_copy(update={"processing_started_at": stale_before})
    assert fresh.is_locked(stale_before)
    assert not stale.is_locked(stale_before)
    assert not boundary.is_locked(stale_before)


def test_new_game_defaults(small_box):
    game = Game(id="g", bounding_box=small_box)
    assert game.status == GameStatus.SETUP
    assert game.processing_attempts == 0
    assert game.last_processing_error is None


def test_waypoint_defaults_and_position():
    point = Waypoint(latitude=48.0, longitude=8.0, sequence_number=0, type=WaypointType.START)
    assert point.status == WaypointStatus.UNVISITED
    assert point.position == LatLng(lat=48.0, lng=8.0)
    assert point.id
    assert point.id != Waypoint(latitude=48.0, longitude=8.0, sequence_number=0, type=WaypointType.START).id
