# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Landmark selection for snapping the goal to something recognisable."""

from __future__ import annotations

from collections.abc import Iterable

from wildtrails.geo import distance_km
from wildtrails.logging import get_logger
from wildtrails.models import Landmark, LatLng
from wildtrails.osm.features import Feature

logger = get_logger(__name__)

# (tag key, tag value or None for "any value", landmark type, priority)
# Order matters: the first matching row classifies the feature.
LANDMARK_TABLE: tuple[tuple[str, str | None, str, int], ...] = (
    # Tier 1: visible from afar, unambiguous
    ("natural", "peak", "peak", 1),
    ("man_made", "tower", "tower", 1),
    ("historic", "monument", "monument", 1),
    ("historic", "memorial", "memorial", 1),
    ("historic", "ruins", "ruins", 1),
    ("tourism", "viewpoint", "viewpoint", 1),
    # Tier 2
    ("natural", "rock", "rock", 2),
    ("natural", "stone", "stone", 2),
    ("tourism", "attraction", "attraction", 2),
    ("amenity", "shelter", "shelter", 2),
    ("historic", "castle", "castle", 2),
    ("historic", "archaeological_site", "archaeological site", 2),
    ("man_made", "mast", "mast", 2),
    # Tier 3
    ("amenity", "place_of_worship", "church", 3),
    ("building", "church", "church", 3),
    ("building", "chapel", "chapel", 3),
    ("amenity", "parking", "parking", 3),
    ("tourism", "information", "tourist info", 3),
    ("historic", None, "historic", 3),
)


def classify(feature: Feature) -> tuple[str, int] | None:
    """Return ``(landmark type, priority)`` for *feature* or None."""
    tags = feature.tags
    # Trees are everywhere; only named ones are worth walking to.
    if tags.get("natural") == "tree":
        return ("tree", 3) if feature.name else None
    for key, value, landmark_type, priority in LANDMARK_TABLE:
        if key not in tags:
            continue
        if value is None or tags[key] == value:
            return landmark_type, priority
    return None


def nearby_landmarks(target: LatLng, features: Iterable[Feature], radius_km: float) -> list[Landmark]:
    """All recognised landmarks within *radius_km*, best first."""
    landmarks = []
    for feature in features:
        classified = classify(feature)
        if classified is None:
            continue
        landmark_type, priority = classified
        position = feature.representative_point
        distance = distance_km(target, position)
        if distance <= radius_km:
            landmarks.append(
                Landmark(
                    type=landmark_type,
                    name=feature.name,
                    position=position,
                    priority=priority,
                    distance_km=distance,
                )
            )
    landmarks.sort(key=lambda lm: (lm.priority, lm.distance_km))
    return landmarks


def select_landmark(
    target: LatLng,
    features: Iterable[Feature],
    radius_km: float,
    min_count: int,
) -> Landmark | None:
    """Best landmark near *target*, or None when fewer than *min_count* qualify.

    The diversity gate stops every game in a sparse area from ending on the
    same lone feature.
    """
    candidates = nearby_landmarks(target, features, radius_km)
    if len(candidates) < min_count:
        logger.debug(
            "landmark_diversity_insufficient",
            found=len(candidates),
            required=min_count,
            radius_km=radius_km,
        )
        return None
    return candidates[0]
