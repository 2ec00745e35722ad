# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Accessibility filter: keep waypoints off water, buildings and private land."""

from __future__ import annotations

from collections.abc import Iterable

from shapely.geometry import Point
from shapely.strtree import STRtree

from wildtrails.defaults import ACCESSIBILITY_BUFFER_DEGREES
from wildtrails.models import LatLng
from wildtrails.osm.features import Feature

FORBIDDEN_LANDUSE = frozenset({"residential", "industrial", "commercial", "cemetery"})
FORBIDDEN_LEISURE = frozenset({"swimming_pool", "garden"})
FORBIDDEN_NATURAL = frozenset({"water", "wetland"})


def is_forbidden(tags: dict[str, str]) -> bool:
    """True if a feature with *tags* marks ground players cannot stand on."""
    return (
        tags.get("natural") in FORBIDDEN_NATURAL
        or bool(tags.get("waterway"))
        or bool(tags.get("building"))
        or tags.get("landuse") in FORBIDDEN_LANDUSE
        or tags.get("leisure") in FORBIDDEN_LEISURE
    )


class AccessibilityIndex:
    """Spatial index over the forbidden areas of one feature set.

    Buffered geometries are computed once so that the many checks made
    during a single generation run only pay for an R-tree lookup.
    """

    def __init__(self, features: Iterable[Feature], buffer_degrees: float = ACCESSIBILITY_BUFFER_DEGREES):
        self.buffer_degrees = buffer_degrees
        self._areas = [
            feature.geometry.buffer(buffer_degrees)
            for feature in features
            if feature.is_area and is_forbidden(feature.tags)
        ]
        self._tree = STRtree(self._areas) if self._areas else None

    def __len__(self) -> int:
        return len(self._areas)

    def is_accessible(self, point: LatLng) -> bool:
        if self._tree is None:
            return True
        probe = Point(point.lng, point.lat)
        hits = self._tree.query(probe, predicate="intersects")
        return len(hits) == 0


def is_accessible(point: LatLng, features: Iterable[Feature]) -> bool:
    """True if *point* is outside, and not within ~22 m of, every forbidden area."""
    return AccessibilityIndex(features).is_accessible(point)
