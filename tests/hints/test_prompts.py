# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for hint tiers and prompt building."""

from __future__ import annotations

import pytest

from wildtrails.hints.prompts import (
    FEATURELESS_SUMMARY,
    build_prompt,
    features_near_goal,
    summarize_features,
)
from wildtrails.hints.tiers import HintTier, hint_tier
from wildtrails.models import LatLng
from wildtrails.osm.features import Feature

GOAL = LatLng(lat=48.0, lng=8.0)
START = LatLng(lat=47.99, lng=7.99)


@pytest.mark.parametrize(
    "index,total,expected",
    [
        (1, 4, HintTier.EARLY),
        (1, 3, HintTier.MIDDLE),
        (2, 3, HintTier.LATE),
        (3, 3, HintTier.LATE),
        (1, 7, HintTier.EARLY),
        (2, 7, HintTier.EARLY),
        (3, 7, HintTier.MIDDLE),
        (4, 7, HintTier.MIDDLE),
        (5, 7, HintTier.LATE),
        (7, 7, HintTier.LATE),
    ],
)
def test_hint_tier(index, total, expected):
    assert hint_tier(index, total) == expected


def test_goal_south_of_lake_is_described_from_the_lake(square_area):
    # Lake centred 0.004 deg (~0.44 km) north of the goal.
    lake = square_area(LatLng(lat=48.004, lng=8.0), 0.001, natural="water", name="Feldsee")

    [item] = features_near_goal([lake], GOAL, radius_km=2)
    assert item.direction == "S"
    assert item.type == "water"

    summary = summarize_features([lake], GOAL)
    assert summary == 'water "Feldsee" (goal is 0.44km S of this feature)'


def test_summary_orders_by_distance_and_limits():
    features = [Feature.point(48.0 + i * 0.001, 8.0, natural="peak") for i in range(1, 15)]
    summary = summarize_features(features, GOAL, limit=3)
    assert summary.count("peak") == 3
    assert summary.startswith("peak (goal is 0.11km S")


def test_summary_without_features():
    assert summarize_features([], GOAL) == FEATURELESS_SUMMARY


def test_features_outside_radius_are_dropped():
    far = Feature.point(48.05, 8.0, natural="peak")  # ~5.5 km
    assert features_near_goal([far], GOAL, radius_km=2) == []


def test_unnamed_generic_feature_falls_back_to_landmark():
    item = features_near_goal([Feature.point(48.001, 8.0, building="yes")], GOAL, radius_km=2)[0]
    assert item.type == "landmark"


def test_build_prompt_contains_context_and_tier_instructions():
    waypoint = LatLng(lat=47.995, lng=7.995)
    features = [Feature.point(48.002, 8.0, tourism="viewpoint", name="Hochfirst")]

    prompt = build_prompt(HintTier.MIDDLE, waypoint, START, GOAL, features, index=2, total=5)

    assert "Goal point: 48.0000, 8.0000" in prompt
    assert "Current waypoint: 47.9950, 7.9950" in prompt
    assert "MIDDLE hint (waypoint 2/5)" in prompt
    assert 'viewpoint "Hochfirst" (goal is 0.22km S of this feature)' in prompt
    assert "NE" in prompt  # direction from waypoint to goal
