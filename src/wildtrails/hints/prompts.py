# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Prompt building for hint generation.

Feature descriptions always state where the goal lies as seen FROM the
feature ("goal is 0.40km S of this feature"). The model is told to keep that
orientation; reversing it sends players to the wrong side of a lake.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from wildtrails.defaults import HINT_FEATURE_RADIUS_KM, HINT_MAX_FEATURES
from wildtrails.geo import bearing, cardinal, distance_km
from wildtrails.hints.tiers import HintTier
from wildtrails.models import LatLng
from wildtrails.osm.features import Feature

FEATURELESS_SUMMARY = "No distinctive landmarks found nearby. Area appears relatively featureless."

_TYPE_KEYS = ("natural", "landuse", "leisure", "amenity", "waterway", "historic", "tourism", "man_made")


@dataclass(frozen=True)
class FeatureBearing:
    """A feature near the goal and where the goal lies from it."""

    type: str
    name: str | None
    distance_km: float
    direction: str  # from the feature to the goal


def feature_type(feature: Feature) -> str:
    for key in _TYPE_KEYS:
        value = feature.tags.get(key)
        if value and value != "yes":
            return value
    return "landmark"


def features_near_goal(features: Iterable[Feature], goal: LatLng, radius_km: float) -> list[FeatureBearing]:
    """Features within *radius_km* of *goal*, nearest first."""
    found = []
    for feature in features:
        position = feature.representative_point
        distance = distance_km(position, goal)
        if distance > radius_km:
            continue
        found.append(
            FeatureBearing(
                type=feature_type(feature),
                name=feature.name,
                distance_km=distance,
                direction=cardinal(bearing(position, goal)),
            )
        )
    found.sort(key=lambda f: f.distance_km)
    return found


def describe_feature(item: FeatureBearing) -> str:
    label = f'{item.type} "{item.name}"' if item.name else item.type
    return f"{label} (goal is {item.distance_km:.2f}km {item.direction} of this feature)"


def summarize_features(
    features: Iterable[Feature],
    goal: LatLng,
    radius_km: float = HINT_FEATURE_RADIUS_KM,
    limit: int = HINT_MAX_FEATURES,
) -> str:
    nearby = features_near_goal(features, goal, radius_km)
    if not nearby:
        return FEATURELESS_SUMMARY
    return ", ".join(describe_feature(item) for item in nearby[:limit])


TIER_INSTRUCTIONS = {
    HintTier.EARLY: """This is an EARLY hint (waypoint {index}/{total}). Give a BROAD regional hint:
- Mention general direction (northern sector, eastern area, etc.)
- Reference major landmarks if available
- Be vague about exact location - players should need more hints
- Keep search area to several kilometers""",
    HintTier.MIDDLE: """This is a MIDDLE hint (waypoint {index}/{total}). Narrow down the location:
- Reduce search area to 1-2 kilometers
- Use terrain features and nearby landmarks
- Be more specific than early hints but not pinpoint accurate
- Help players eliminate large areas""",
    HintTier.LATE: """This is a LATE hint (waypoint {index}/{total}). Give PRECISE guidance:
- Narrow to within 500 meters
- Use distinctive, identifiable features
- Be specific enough that players can find the goal with this hint
- Reference actual geographic features""",
}

PROMPT_TEMPLATE = """You are generating a location hint for an outdoor orienteering treasure hunt game called Wild Trails.

GAME CONTEXT:
- Start point: {start.lat:.4f}, {start.lng:.4f}
- Goal point: {goal.lat:.4f}, {goal.lng:.4f}
- Current waypoint: {waypoint.lat:.4f}, {waypoint.lng:.4f}
- Distance from waypoint to goal: {distance:.2f}km {direction}
- Nearby features: {features}

HINT REQUIREMENTS:
{instructions}

CRITICAL RULES:
1. Generate ONLY the hint text, nothing else
2. Do NOT include phrases like "Hint:" or "The goal is"
3. Write naturally, as if speaking to a friend outdoors
4. Use actual geographic features mentioned above when possible
5. PAY ATTENTION to directional relationships: "goal is X km DIRECTION of feature" means goal is in that direction from the feature
6. If goal is south of a lake, say "south of the lake" or "southern edge/shore", NOT "north of the lake"
7. Make it engaging and slightly mysterious
8. Keep it under 50 words
9. DO NOT repeat the exact same style as other hints - vary your approach

Generate ONE creative, helpful hint now:"""


def build_prompt(
    tier: HintTier,
    waypoint: LatLng,
    start: LatLng,
    goal: LatLng,
    features: Iterable[Feature],
    index: int,
    total: int,
) -> str:
    """Prompt asking the oracle for one *tier* hint at *waypoint*."""
    return PROMPT_TEMPLATE.format(
        start=start,
        goal=goal,
        waypoint=waypoint,
        distance=distance_km(waypoint, goal),
        direction=cardinal(bearing(waypoint, goal)),
        features=summarize_features(features, goal),
        instructions=TIER_INSTRUCTIONS[tier].format(index=index, total=total),
    )
