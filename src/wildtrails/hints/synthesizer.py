# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Hint synthesis: oracle prose with a deterministic fallback."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from wildtrails.defaults import (
    FALLBACK_FEATURE_RADIUS_KM,
    FALLBACK_MAX_FEATURES,
    HINT_MAX_RETRIES,
    HINT_TEMPERATURE,
)
from wildtrails.errors import OracleUnavailable
from wildtrails.geo import bearing, cardinal, distance_km
from wildtrails.hints.oracle import HintOracle
from wildtrails.hints.prompts import build_prompt, features_near_goal
from wildtrails.hints.tiers import HintTier
from wildtrails.logging import get_logger
from wildtrails.models import LatLng
from wildtrails.osm.features import Feature


def fallback_hint(waypoint: LatLng, goal: LatLng, features: Sequence[Feature] = ()) -> str:
    """Mathematical hint: distance and direction to the goal plus landmarks."""
    distance = distance_km(waypoint, goal)
    direction = cardinal(bearing(waypoint, goal))
    hint = f"The goal is approximately {distance:.1f}km {direction}."

    nearby = features_near_goal(features, goal, FALLBACK_FEATURE_RADIUS_KM)[:FALLBACK_MAX_FEATURES]
    if nearby:
        clauses = []
        for item in nearby:
            label = f'{item.type} "{item.name}"' if item.name else item.type
            clauses.append(f"{label}, {item.distance_km:.1f}km {item.direction}")
        hint += f" Nearby landmarks: {'; '.join(clauses)}."
    return hint


class HintSynthesizer:
    """Produces tiered hints for clue waypoints.

    Oracle failures never propagate: any error, timeout or empty answer
    yields the fallback hint.
    """

    def __init__(
        self,
        oracle: HintOracle | None = None,
        temperature: float = HINT_TEMPERATURE,
        max_retries: int = HINT_MAX_RETRIES,
        logger: structlog.BoundLogger | None = None,
    ):
        self.oracle = oracle
        self.temperature = temperature
        self.max_retries = max_retries
        self.logger = logger or get_logger(__name__)

    async def hint(
        self,
        tier: HintTier,
        waypoint: LatLng,
        start: LatLng,
        goal: LatLng,
        features: Sequence[Feature],
        index: int = 1,
        total: int = 1,
    ) -> str:
        if self.oracle is None:
            return fallback_hint(waypoint, goal, features)

        prompt = build_prompt(tier, waypoint, start, goal, features, index, total)
        try:
            text = await self.oracle.complete(prompt, self.temperature, self.max_retries)
        except OracleUnavailable as e:
            self.logger.warning("hint_fallback_used", tier=tier, waypoint=index, reason=type(e).__name__, error=str(e))
            return fallback_hint(waypoint, goal, features)
        except Exception as e:
            self.logger.error("hint_oracle_unexpected_error", tier=tier, waypoint=index, error=repr(e))
            return fallback_hint(waypoint, goal, features)

        text = (text or "").strip()
        if not text:
            self.logger.warning("hint_fallback_used", tier=tier, waypoint=index, reason="empty_response")
            return fallback_hint(waypoint, goal, features)

        self.logger.debug("hint_generated", tier=tier, waypoint=index, total=total, hint=text)
        return text
