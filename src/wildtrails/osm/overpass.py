# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Overpass API geometry source."""

from __future__ import annotations

import httpx

from wildtrails.config import OverpassConfig
from wildtrails.errors import GeometrySourceUnavailable
from wildtrails.logging import get_logger
from wildtrails.models import BoundingBox
from wildtrails.osm.features import Feature, features_from_overpass
from wildtrails.retry import retry_with_backoff

logger = get_logger(__name__)

# Areas a waypoint must avoid.
FORBIDDEN_SELECTORS = (
    '["natural"="water"]',
    '["waterway"]',
    '["natural"="wetland"]',
    '["building"]',
    '["landuse"="residential"]',
    '["landuse"="industrial"]',
    '["landuse"="commercial"]',
    '["landuse"="cemetery"]',
    '["leisure"="swimming_pool"]',
    '["leisure"="garden"]',
)

# Things the goal can snap to and hints can mention.
LANDMARK_SELECTORS = (
    '["natural"~"^(peak|rock|stone|tree)$"]',
    '["man_made"~"^(tower|mast)$"]',
    '["historic"]',
    '["tourism"~"^(viewpoint|attraction|information)$"]',
    '["amenity"~"^(shelter|parking|place_of_worship)$"]',
)

_RETRYABLE_STATUS = frozenset({429, 502, 503, 504})


class _RetryableOverpassError(Exception):
    """Transient Overpass failure worth another try."""


def _bbox_filter(bbox: BoundingBox) -> str:
    return f"({bbox.min_lat},{bbox.min_lng},{bbox.max_lat},{bbox.max_lng})"


def build_query(bbox: BoundingBox, timeout_seconds: int = 25) -> str:
    """Overpass QL for forbidden areas and landmark candidates in *bbox*."""
    area = _bbox_filter(bbox)
    parts: list[str] = []
    for selector in FORBIDDEN_SELECTORS:
        parts.append(f"way{selector}{area};")
        if selector in ('["natural"="water"]', '["landuse"="residential"]'):
            parts.append(f"relation{selector}{area};")
    for selector in LANDMARK_SELECTORS:
        parts.append(f"node{selector}{area};")
    return f"[out:json][timeout:{timeout_seconds}];({''.join(parts)});out geom;"


class OverpassGeometrySource:
    """Fetches map features from an Overpass API endpoint."""

    name = "overpass"

    def __init__(self, config: OverpassConfig | None = None, client: httpx.AsyncClient | None = None):
        self.config = config or OverpassConfig()
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.timeout_seconds),
            headers={"User-Agent": self.config.user_agent},
        )

    async def fetch_features(self, bbox: BoundingBox) -> list[Feature]:
        query = build_query(bbox, self.config.query_timeout_seconds)

        async def _make_request() -> dict:
            try:
                response = await self._client.post(self.config.url, data={"data": query})
            except httpx.TimeoutException as e:
                raise _RetryableOverpassError(f"Overpass timed out after {self.config.timeout_seconds}s") from e
            except httpx.HTTPError as e:
                raise GeometrySourceUnavailable(f"Failed to reach Overpass at {self.config.url}: {e}") from e

            if response.status_code in _RETRYABLE_STATUS:
                raise _RetryableOverpassError(f"Overpass busy (HTTP {response.status_code})")
            if response.status_code != 200:
                raise GeometrySourceUnavailable(f"Overpass error: HTTP {response.status_code}")

            content_type = response.headers.get("content-type", "")
            if "json" not in content_type:
                raise GeometrySourceUnavailable("Expected JSON response from Overpass")
            try:
                return response.json()
            except ValueError as e:
                raise GeometrySourceUnavailable("Malformed JSON from Overpass") from e

        try:
            payload = await retry_with_backoff(
                _make_request,
                retryable=(_RetryableOverpassError,),
                operation="overpass_query",
                max_retries=self.config.max_retries,
                initial_delay=self.config.retry_delay_seconds,
            )
        except _RetryableOverpassError as e:
            raise GeometrySourceUnavailable(str(e)) from e

        features = features_from_overpass(payload)
        logger.info("overpass_features_fetched", count=len(features), bbox=_bbox_filter(bbox))
        return features

    async def close(self) -> None:
        """Cleanup HTTP client."""
        await self._client.aclose()
