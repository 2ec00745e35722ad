# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for Overpass feature conversion and the Overpass geometry source."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest
from shapely.geometry import LineString, Point, Polygon

from wildtrails.config import OverpassConfig
from wildtrails.errors import GeometrySourceUnavailable
from wildtrails.models import BoundingBox, LatLng
from wildtrails.osm import OverpassGeometrySource, build_query, features_from_overpass


def _ring(lat: float, lng: float, d: float) -> list[dict[str, float]]:
    return [
        {"lat": lat, "lon": lng},
        {"lat": lat, "lon": lng + d},
        {"lat": lat + d, "lon": lng + d},
        {"lat": lat + d, "lon": lng},
        {"lat": lat, "lon": lng},
    ]


def _response(status_code: int = 200, payload: dict | None = None, content_type: str = "application/json"):
    response = MagicMock()
    response.status_code = status_code
    response.headers = {"content-type": content_type}
    response.json.return_value = payload or {"elements": []}
    return response


@pytest.fixture
def bbox() -> BoundingBox:
    return BoundingBox(north_west=LatLng(lat=48.01, lng=7.99), south_east=LatLng(lat=47.99, lng=8.01))


@pytest.fixture
async def overpass():
    source = OverpassGeometrySource(OverpassConfig(max_retries=1, retry_delay_seconds=0))
    yield source
    await source.close()


class TestFeaturesFromOverpass:
    def test_node_becomes_point(self):
        payload = {
            "elements": [
                {"type": "node", "id": 1, "lat": 48.0, "lon": 8.0, "tags": {"natural": "peak", "name": "Kandel"}}
            ]
        }
        [feature] = features_from_overpass(payload)
        assert isinstance(feature.geometry, Point)
        assert feature.name == "Kandel"
        assert feature.osm_id == "node/1"
        assert feature.representative_point == LatLng(lat=48.0, lng=8.0)

    def test_closed_way_becomes_polygon(self):
        payload = {
            "elements": [
                {"type": "way", "id": 2, "tags": {"natural": "water"}, "geometry": _ring(48.0, 8.0, 0.01)}
            ]
        }
        [feature] = features_from_overpass(payload)
        assert isinstance(feature.geometry, Polygon)
        assert feature.is_area

    def test_waterway_line_stays_linear(self):
        line = [{"lat": 48.0, "lon": 8.0}, {"lat": 48.01, "lon": 8.01}]
        payload = {"elements": [{"type": "way", "id": 3, "tags": {"waterway": "stream"}, "geometry": line}]}
        [feature] = features_from_overpass(payload)
        assert isinstance(feature.geometry, LineString)
        assert not feature.is_area

    def test_multipolygon_relation_with_hole(self):
        payload = {
            "elements": [
                {
                    "type": "relation",
                    "id": 4,
                    "tags": {"type": "multipolygon", "natural": "water"},
                    "members": [
                        {"type": "way", "role": "outer", "geometry": _ring(48.0, 8.0, 0.02)},
                        {"type": "way", "role": "inner", "geometry": _ring(48.005, 8.005, 0.005)},
                    ],
                }
            ]
        }
        [feature] = features_from_overpass(payload)
        assert feature.is_area
        assert not feature.geometry.contains(Point(8.0075, 48.0075))
        assert feature.geometry.contains(Point(8.001, 48.001))

    def test_untagged_and_geometryless_elements_skipped(self):
        payload = {
            "elements": [
                {"type": "node", "id": 5, "lat": 48.0, "lon": 8.0},
                {"type": "way", "id": 6, "tags": {"building": "yes"}},
            ]
        }
        assert features_from_overpass(payload) == []


def test_build_query_covers_forbidden_and_landmarks(bbox):
    query = build_query(bbox, timeout_seconds=25)
    assert query.startswith("[out:json][timeout:25];")
    assert query.endswith("out geom;")
    assert 'way["natural"="water"](47.99,7.99,48.01,8.01);' in query
    assert 'relation["natural"="water"](47.99,7.99,48.01,8.01);' in query
    assert 'node["historic"](47.99,7.99,48.01,8.01);' in query


@pytest.mark.asyncio
async def test_fetch_features_success(overpass, bbox):
    payload = {"elements": [{"type": "node", "id": 1, "lat": 48.0, "lon": 8.0, "tags": {"natural": "peak"}}]}

    with patch.object(overpass._client, "post", return_value=_response(payload=payload)) as mock_post:
        features = await overpass.fetch_features(bbox)

    assert len(features) == 1
    assert mock_post.call_args.kwargs["data"]["data"].startswith("[out:json]")


@pytest.mark.asyncio
async def test_fetch_features_retries_when_busy(overpass, bbox):
    responses = [_response(status_code=429), _response()]

    with patch.object(overpass._client, "post", side_effect=responses) as mock_post:
        features = await overpass.fetch_features(bbox)

    assert features == []
    assert mock_post.call_count == 2


@pytest.mark.asyncio
async def test_fetch_features_gives_up_after_retries(overpass, bbox):
    with patch.object(overpass._client, "post", return_value=_response(status_code=504)) as mock_post:
        with pytest.raises(GeometrySourceUnavailable):
            await overpass.fetch_features(bbox)

    assert mock_post.call_count == 2


@pytest.mark.asyncio
async def test_fetch_features_rejects_non_json(overpass, bbox):
    html = _response(content_type="text/html")

    with patch.object(overpass._client, "post", return_value=html):
        with pytest.raises(GeometrySourceUnavailable, match="Expected JSON"):
            await overpass.fetch_features(bbox)


@pytest.mark.asyncio
async def test_fetch_features_connection_error(overpass, bbox):
    with patch.object(overpass._client, "post", side_effect=httpx.ConnectError("refused")):
        with pytest.raises(GeometrySourceUnavailable):
            await overpass.fetch_features(bbox)
