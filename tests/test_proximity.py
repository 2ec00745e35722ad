# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for the proximity engine."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from wildtrails.errors import InvalidCoordinateError, PersistenceError
from wildtrails.generation import assemble_trail
from wildtrails.geo import distance_km
from wildtrails.models import LatLng, WaypointType
from wildtrails.proximity import ProximityEngine, closest_point, triggered_points

START = LatLng(lat=48.0, lng=8.0)
CLUE = LatLng(lat=48.002, lng=8.0)
END = LatLng(lat=48.004, lng=8.0)


@pytest.fixture
def trail(game):
    return assemble_trail(game.id, START, [(CLUE, "Under the lone pine.")], END)


@pytest.fixture
async def stored_trail(store, game, trail):
    await store.save_game(game)
    await store.insert_waypoints(game.id, trail)
    return trail


def test_start_never_triggers(trail):
    assert triggered_points(START, trail, trigger_distance_m=50) == []


def test_boundary_is_inclusive(trail):
    player = LatLng(lat=48.0016, lng=8.0)
    exact = distance_km(player, CLUE) * 1000

    [hit] = triggered_points(player, trail, trigger_distance_m=exact)
    assert hit.point.type == WaypointType.CLUE
    assert triggered_points(player, trail, trigger_distance_m=exact - 0.01) == []


def test_closest_point(trail):
    check = closest_point(LatLng(lat=48.0039, lng=8.0), trail)
    assert check.point.type == WaypointType.END
    assert check.distance_m == pytest.approx(11.1, abs=0.1)
    assert closest_point(START, []) is None


@pytest.mark.asyncio
async def test_reaching_a_clue_emits_one_event(store, game, stored_trail):
    engine = ProximityEngine(store)

    events = await engine.evaluate_for_game(game.id, 48.0019, 8.0)

    assert len(events) == 1
    event = events[0]
    assert event.point_id == stored_trail[1].id
    assert event.point_type == WaypointType.CLUE
    assert event.hint == "Under the lone pine."
    assert event.distance == 11

    assert await engine.evaluate_for_game(game.id, 48.0019, 8.0) == []


@pytest.mark.asyncio
async def test_concurrent_updates_report_once(store, game, stored_trail):
    engine = ProximityEngine(store)
    unvisited = await store.list_unvisited_waypoints(game.id)

    results = await asyncio.gather(*(engine.evaluate(48.004, 8.0, unvisited) for _ in range(5)))

    events = [event for batch in results for event in batch]
    assert [e.point_type for e in events] == [WaypointType.END]


@pytest.mark.asyncio
async def test_far_away_player_triggers_nothing(store, game, stored_trail):
    assert await ProximityEngine(store).evaluate_for_game(game.id, 47.9, 8.0) == []


@pytest.mark.asyncio
async def test_custom_trigger_radius(store, game, stored_trail):
    engine = ProximityEngine(store, trigger_distance_m=300)
    events = await engine.evaluate_for_game(game.id, 48.003, 8.0)
    assert sorted(e.point_type for e in events) == [WaypointType.CLUE, WaypointType.END]


@pytest.mark.asyncio
@pytest.mark.parametrize("lat,lng", [(91.0, 8.0), (48.0, -181.0), (float("nan"), 8.0)])
async def test_invalid_coordinates_rejected(store, game, lat, lng):
    with pytest.raises(InvalidCoordinateError):
        await ProximityEngine(store).evaluate_for_game(game.id, lat, lng)


@pytest.mark.asyncio
async def test_store_error_on_one_point_does_not_block_others(trail):
    store = AsyncMock()
    store.update_waypoint_status_if_unvisited.side_effect = [PersistenceError("disk full"), 1]
    engine = ProximityEngine(store, trigger_distance_m=300)

    events = await engine.evaluate(48.003, 8.0, trail)

    assert [e.point_type for e in events] == [WaypointType.END]
