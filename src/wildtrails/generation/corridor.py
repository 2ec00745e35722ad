# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Corridor path generation.

Clues are spread evenly along the straight start-to-goal line and pushed
sideways by a random amount inside a corridor whose width scales with the
trail length. Every search is bounded; nothing here loops until success.
"""

from __future__ import annotations

import random
from collections.abc import Sequence

import structlog

from wildtrails.accessibility import AccessibilityIndex
from wildtrails.config import GenerationConfig
from wildtrails.errors import AccessibilityExhausted, GenerationFailure
from wildtrails.generation.base import assemble_trail
from wildtrails.geo import distance_km, perpendicular_offset, random_point_in_radius
from wildtrails.hints.synthesizer import HintSynthesizer
from wildtrails.hints.tiers import hint_tier
from wildtrails.landmarks import select_landmark
from wildtrails.logging import get_logger
from wildtrails.models import Game, LatLng, Waypoint
from wildtrails.osm.features import Feature


class CorridorStrategy:
    """Map-aware strategy: accessible goal, landmark snap, corridor clues."""

    name = "osm"

    def __init__(
        self,
        config: GenerationConfig | None = None,
        synthesizer: HintSynthesizer | None = None,
        rng: random.Random | None = None,
        logger: structlog.BoundLogger | None = None,
    ):
        self.config = config or GenerationConfig()
        self.logger = logger or get_logger(__name__)
        self.synthesizer = synthesizer or HintSynthesizer(logger=self.logger)
        self.rng = rng or random.Random()

    def _search_accessible(
        self,
        center: LatLng,
        radius_km: float,
        attempts: int,
        index: AccessibilityIndex,
    ) -> LatLng:
        for _ in range(attempts):
            point = random_point_in_radius(center, radius_km, self.rng)
            if index.is_accessible(point):
                return point
        raise AccessibilityExhausted(f"No accessible point within {radius_km:.3f}km after {attempts} attempts")

    def find_end_point(self, center: LatLng, radius_km: float, index: AccessibilityIndex) -> LatLng:
        """Accessible goal near *center*, widening the radius once.

        Raises:
            GenerationFailure: If both searches come up empty
        """
        try:
            return self._search_accessible(center, radius_km, self.config.end_point_max_attempts, index)
        except AccessibilityExhausted:
            self.logger.warning("end_point_search_widened", radius_km=radius_km)

        widened = radius_km * self.config.end_point_radius_expansion
        try:
            return self._search_accessible(center, widened, 1, index)
        except AccessibilityExhausted as e:
            raise GenerationFailure("Could not find accessible point after maximum attempts") from e

    def find_point_near(self, candidate: LatLng, corridor_width_km: float, index: AccessibilityIndex) -> LatLng:
        """*candidate* if accessible, else the first accessible point found in
        growing rings around it, else *candidate* anyway.
        """
        if index.is_accessible(candidate):
            return candidate

        half_width = corridor_width_km / 2
        for fraction in self.config.nearby_search_fractions:
            try:
                return self._search_accessible(
                    candidate, half_width * fraction, self.config.nearby_search_attempts, index
                )
            except AccessibilityExhausted:
                continue

        # Degraded but playable: one bad clue should not fail the game.
        self.logger.warning(
            "accessible_point_search_exhausted",
            lat=candidate.lat,
            lng=candidate.lng,
            corridor_width_km=corridor_width_km,
        )
        return candidate

    async def generate(self, game: Game, features: Sequence[Feature] = ()) -> list[Waypoint]:
        log = self.logger.bind(game_id=game.id)
        bbox = game.bounding_box
        index = AccessibilityIndex(features)
        log.info("trail_generation_started", features=len(features), forbidden_areas=len(index))

        start = game.starting_point or bbox.random_point(self.rng)

        radius = game.effective_max_radius(self.config.default_max_radius_km)
        end = self.find_end_point(bbox.center, radius, index)
        log.debug("end_point_found", lat=end.lat, lng=end.lng, radius_km=radius)

        landmark = select_landmark(
            end, features, self.config.landmark_snap_radius_km, self.config.landmark_min_count
        )
        if landmark is not None:
            log.info("end_point_snapped", landmark=landmark.type, name=landmark.name, moved_km=landmark.distance_km)
            end = landmark.position

        corridor_width = distance_km(start, end) * self.config.corridor_width_fraction(game.difficulty)
        count = self.rng.randint(self.config.min_intermediate_points, self.config.max_intermediate_points)
        log.debug("corridor_planned", corridor_width_km=corridor_width, clues=count)

        clues: list[tuple[LatLng, str]] = []
        for i in range(1, count + 1):
            progress = i / (count + 1)
            lateral = self.rng.uniform(-corridor_width, corridor_width)
            candidate = perpendicular_offset(start, end, progress, lateral)
            point = self.find_point_near(candidate, corridor_width, index)

            hint = await self.synthesizer.hint(
                hint_tier(i, count), point, start, end, features, index=i, total=count
            )
            clues.append((point, hint))

        waypoints = assemble_trail(game.id, start, clues, end)
        log.info("trail_generation_finished", waypoints=len(waypoints), snapped=landmark is not None)
        return waypoints
