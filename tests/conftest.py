# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Pytest configuration and fixtures."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

import pytest
import structlog

from wildtrails.models import BoundingBox, Game, LatLng
from wildtrails.osm.features import Feature
from wildtrails.store import FileGameStore

if TYPE_CHECKING:
    from pathlib import Path


class FakeOracle:
    """Hint oracle returning canned answers, or raising a given error."""

    def __init__(self, text: str = "Head for the old oak.", error: Exception | None = None):
        self.text = text
        self.error = error
        self.prompts: list[str] = []

    async def complete(self, prompt: str, temperature: float, max_retries: int) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


class FakeGeometrySource:
    """Geometry source serving a fixed feature list."""

    def __init__(self, features: list[Feature] | None = None, error: Exception | None = None):
        self.features = features or []
        self.error = error
        self.calls = 0

    async def fetch_features(self, bbox: BoundingBox) -> list[Feature]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.features


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def small_box() -> BoundingBox:
    """Roughly 2 km square box in the Black Forest."""
    return BoundingBox(
        north_west=LatLng(lat=48.009, lng=7.986),
        south_east=LatLng(lat=47.991, lng=8.014),
    )


@pytest.fixture
def game(small_box: BoundingBox) -> Game:
    return Game(id="game-1", bounding_box=small_box, max_radius=1.0)


@pytest.fixture
def store(tmp_path: Path) -> FileGameStore:
    return FileGameStore(store_file=tmp_path / "games.json")


@pytest.fixture
def fake_oracle() -> FakeOracle:
    return FakeOracle()


def square(center: LatLng, half_side_deg: float, **tags: str) -> Feature:
    """Square area feature centred on *center*."""
    lat, lng = center.lat, center.lng
    ring = [
        (lat - half_side_deg, lng - half_side_deg),
        (lat - half_side_deg, lng + half_side_deg),
        (lat + half_side_deg, lng + half_side_deg),
        (lat + half_side_deg, lng - half_side_deg),
        (lat - half_side_deg, lng - half_side_deg),
    ]
    return Feature.polygon(ring, **tags)


@pytest.fixture
def square_area():
    """Factory for square area features."""
    return square


@pytest.fixture
def make_oracle():
    return FakeOracle


@pytest.fixture
def make_geometry_source():
    return FakeGeometrySource


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any logging configuration a test (e.g. the CLI) applied."""
    yield
    structlog.reset_defaults()
