# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Path generation strategy interface and factory."""

from __future__ import annotations

import random
from collections.abc import Sequence
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

import structlog

from wildtrails.config import GenerationConfig
from wildtrails.defaults import END_HINT, START_HINT
from wildtrails.models import Game, LatLng, Waypoint, WaypointType
from wildtrails.osm.features import Feature

if TYPE_CHECKING:
    from wildtrails.hints.synthesizer import HintSynthesizer


class StrategyKind(StrEnum):
    """Available path generation strategies."""

    OSM = "osm"  # Corridor path respecting map features
    RANDOM = "random"  # Unconstrained placement, no map data


class PathGenerationStrategy(Protocol):
    """Turns a game definition into an ordered waypoint list."""

    name: str

    async def generate(self, game: Game, features: Sequence[Feature]) -> list[Waypoint]:
        """Generate start, clue and end waypoints for *game*.

        Raises:
            GenerationFailure: When no acceptable goal can be placed
        """
        ...


def assemble_trail(game_id: str, start: LatLng, clues: list[tuple[LatLng, str]], end: LatLng) -> list[Waypoint]:
    """Wrap start, clue and end positions into sequenced waypoints."""
    waypoints = [
        Waypoint(
            game_id=game_id,
            latitude=start.lat,
            longitude=start.lng,
            sequence_number=0,
            type=WaypointType.START,
            hint=START_HINT,
        )
    ]
    for i, (position, hint) in enumerate(clues, start=1):
        waypoints.append(
            Waypoint(
                game_id=game_id,
                latitude=position.lat,
                longitude=position.lng,
                sequence_number=i,
                type=WaypointType.CLUE,
                hint=hint,
            )
        )
    waypoints.append(
        Waypoint(
            game_id=game_id,
            latitude=end.lat,
            longitude=end.lng,
            sequence_number=len(clues) + 1,
            type=WaypointType.END,
            hint=END_HINT,
        )
    )
    return waypoints


def get_strategy(
    kind: StrategyKind | str,
    *,
    config: GenerationConfig | None = None,
    synthesizer: HintSynthesizer | None = None,
    rng: random.Random | None = None,
    logger: structlog.BoundLogger | None = None,
) -> PathGenerationStrategy:
    """Build the strategy selected by *kind*.

    Raises:
        ValueError: If *kind* is not a known strategy
    """
    kind = StrategyKind(kind)
    if kind is StrategyKind.OSM:
        from wildtrails.generation.corridor import CorridorStrategy

        return CorridorStrategy(config=config, synthesizer=synthesizer, rng=rng, logger=logger)

    from wildtrails.generation.random_strategy import RandomStrategy

    return RandomStrategy(config=config, rng=rng, logger=logger)
