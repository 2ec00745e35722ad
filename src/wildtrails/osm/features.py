# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tagged map features and conversion from Overpass JSON."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from shapely.geometry import LineString, MultiPolygon, Point, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import polygonize, unary_union

from wildtrails.logging import get_logger
from wildtrails.models import BoundingBox, LatLng

logger = get_logger(__name__)

# Closed ways carrying these waterway values are areas; other waterways are lines.
_AREA_WATERWAYS = frozenset({"riverbank", "dock", "boatyard"})
_LINEAR_KEYS = frozenset({"highway", "barrier", "power"})


@dataclass(frozen=True)
class Feature:
    """An OSM element reduced to its tags and a shapely geometry.

    Geometries use (lng, lat) axis order like GeoJSON.
    """

    tags: dict[str, str]
    geometry: BaseGeometry
    osm_id: str | None = field(default=None, compare=False)

    @property
    def name(self) -> str | None:
        return self.tags.get("name")

    @property
    def is_area(self) -> bool:
        return isinstance(self.geometry, (Polygon, MultiPolygon))

    @property
    def representative_point(self) -> LatLng:
        """Point used for distances: the point itself or the bounds centre."""
        if isinstance(self.geometry, Point):
            return LatLng(lat=self.geometry.y, lng=self.geometry.x)
        min_lng, min_lat, max_lng, max_lat = self.geometry.bounds
        return LatLng(lat=(min_lat + max_lat) / 2, lng=(min_lng + max_lng) / 2)

    @classmethod
    def point(cls, lat: float, lng: float, **tags: str) -> Feature:
        return cls(tags=dict(tags), geometry=Point(lng, lat))

    @classmethod
    def polygon(cls, ring: list[tuple[float, float]], **tags: str) -> Feature:
        """Build an area feature from a ring of (lat, lng) pairs."""
        return cls(tags=dict(tags), geometry=Polygon([(lng, lat) for lat, lng in ring]))


class GeometrySource(Protocol):
    """Provider of map features for a play area.

    May be slow, may fail, may return nothing. Callers treat an empty list
    as "no constraints".
    """

    async def fetch_features(self, bbox: BoundingBox) -> list[Feature]:
        """Fetch features intersecting *bbox*.

        Raises:
            GeometrySourceUnavailable: When the source cannot be queried
        """
        ...


def _coords(geometry: list[dict[str, float]]) -> list[tuple[float, float]]:
    return [(node["lon"], node["lat"]) for node in geometry]


def _is_area_way(tags: dict[str, str], coords: list[tuple[float, float]]) -> bool:
    if len(coords) < 4 or coords[0] != coords[-1]:
        return False
    if tags.get("area") == "no":
        return False
    if "waterway" in tags:
        return tags["waterway"] in _AREA_WATERWAYS
    return not (_LINEAR_KEYS & tags.keys()) or tags.get("area") == "yes"


def _relation_geometry(element: dict[str, Any]) -> BaseGeometry | None:
    outer_lines = []
    inner_lines = []
    for member in element.get("members", []):
        if member.get("type") != "way" or not member.get("geometry"):
            continue
        line = LineString(_coords(member["geometry"]))
        if member.get("role") == "inner":
            inner_lines.append(line)
        else:
            outer_lines.append(line)

    outer = unary_union(list(polygonize(outer_lines)))
    if outer.is_empty:
        return None
    if inner_lines:
        holes = unary_union(list(polygonize(inner_lines)))
        if not holes.is_empty:
            outer = outer.difference(holes)
    return outer


def features_from_overpass(payload: dict[str, Any]) -> list[Feature]:
    """Convert an Overpass ``out geom`` JSON payload into features.

    Tagged nodes become points, closed area-like ways polygons, other ways
    lines, and multipolygon relations (multi)polygons. Untagged elements and
    elements without geometry are skipped.
    """
    features: list[Feature] = []
    skipped = 0

    for element in payload.get("elements", []):
        tags = element.get("tags") or {}
        if not tags:
            continue
        kind = element.get("type")
        osm_id = f"{kind}/{element.get('id')}"
        geometry: BaseGeometry | None = None

        if kind == "node" and "lat" in element and "lon" in element:
            geometry = Point(element["lon"], element["lat"])
        elif kind == "way" and element.get("geometry"):
            coords = _coords(element["geometry"])
            if _is_area_way(tags, coords):
                geometry = Polygon(coords)
            elif len(coords) >= 2:
                geometry = LineString(coords)
        elif kind == "relation" and tags.get("type") in ("multipolygon", "boundary"):
            geometry = _relation_geometry(element)

        if geometry is None or geometry.is_empty:
            skipped += 1
            continue
        features.append(Feature(tags=dict(tags), geometry=geometry, osm_id=osm_id))

    logger.debug("overpass_features_converted", features=len(features), skipped=skipped)
    return features
