# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Unconstrained strategy used when map data is not wanted."""

from __future__ import annotations

import random
from collections.abc import Sequence

import structlog

from wildtrails.config import GenerationConfig
from wildtrails.generation.base import assemble_trail
from wildtrails.geo import random_point_in_radius
from wildtrails.hints.synthesizer import fallback_hint
from wildtrails.logging import get_logger
from wildtrails.models import Game, Waypoint
from wildtrails.osm.features import Feature


class RandomStrategy:
    """Start and goal as in the corridor strategy, clues anywhere in the box.

    Ignores map features entirely and uses the mathematical hint only.
    """

    name = "random"

    def __init__(
        self,
        config: GenerationConfig | None = None,
        rng: random.Random | None = None,
        logger: structlog.BoundLogger | None = None,
    ):
        self.config = config or GenerationConfig()
        self.rng = rng or random.Random()
        self.logger = logger or get_logger(__name__)

    async def generate(self, game: Game, features: Sequence[Feature] = ()) -> list[Waypoint]:
        bbox = game.bounding_box
        start = game.starting_point or bbox.random_point(self.rng)
        end = random_point_in_radius(
            bbox.center, game.effective_max_radius(self.config.default_max_radius_km), self.rng
        )
        count = self.rng.randint(self.config.min_intermediate_points, self.config.max_intermediate_points)

        clues = []
        for _ in range(count):
            point = bbox.random_point(self.rng)
            clues.append((point, fallback_hint(point, end)))

        self.logger.info("random_trail_generated", game_id=game.id, clues=count)
        return assemble_trail(game.id, start, clues, end)
