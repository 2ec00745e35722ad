# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration models for trail generation, proximity and Overpass."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from wildtrails import defaults


class GenerationConfig(BaseModel):
    """Tunables for the corridor path generator and job orchestrator."""

    default_max_radius_km: float = defaults.DEFAULT_MAX_RADIUS_KM
    end_point_max_attempts: int = defaults.END_POINT_MAX_ATTEMPTS
    end_point_radius_expansion: float = defaults.END_POINT_RADIUS_EXPANSION
    landmark_snap_radius_km: float = defaults.LANDMARK_SNAP_RADIUS_KM
    landmark_min_count: int = defaults.LANDMARK_MIN_COUNT
    min_intermediate_points: int = defaults.MIN_INTERMEDIATE_POINTS
    max_intermediate_points: int = defaults.MAX_INTERMEDIATE_POINTS
    nearby_search_fractions: tuple[float, ...] = defaults.NEARBY_SEARCH_FRACTIONS
    nearby_search_attempts: int = defaults.NEARBY_SEARCH_ATTEMPTS
    # Only "easy" is tuned today; other difficulties fall back to it.
    corridor_width_fractions: dict[str, float] = Field(
        default_factory=lambda: dict(defaults.CORRIDOR_WIDTH_FRACTIONS)
    )
    hint_temperature: float = defaults.HINT_TEMPERATURE
    hint_max_retries: int = defaults.HINT_MAX_RETRIES
    hint_timeout_seconds: float = defaults.HINT_TIMEOUT_SECONDS
    max_processing_attempts: int = defaults.MAX_PROCESSING_ATTEMPTS
    processing_timeout_minutes: float = defaults.PROCESSING_TIMEOUT_MINUTES

    model_config = ConfigDict(extra="ignore")

    def corridor_width_fraction(self, difficulty: str) -> float:
        """Width of the corridor as a fraction of the start-to-end distance."""
        if difficulty in self.corridor_width_fractions:
            return self.corridor_width_fractions[difficulty]
        return self.corridor_width_fractions.get("easy", defaults.CORRIDOR_WIDTH_FRACTIONS["easy"])


class ProximityConfig(BaseModel):
    """Geofence settings used during play."""

    trigger_distance_m: float = defaults.DEFAULT_TRIGGER_DISTANCE_METERS

    model_config = ConfigDict(extra="ignore")


class OverpassConfig(BaseModel):
    """Configuration for the Overpass geometry source."""

    url: str = defaults.OVERPASS_URL
    timeout_seconds: float = 30.0
    query_timeout_seconds: int = 25
    max_retries: int = 3
    retry_delay_seconds: float = 0.75
    user_agent: str = "wildtrails/0.1"

    model_config = ConfigDict(extra="ignore")
