# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Trail generation strategies.

This package provides:
- CorridorStrategy (osm): map-aware corridor trails
- RandomStrategy (random): unconstrained placement
"""

from wildtrails.generation.base import PathGenerationStrategy, StrategyKind, assemble_trail, get_strategy
from wildtrails.generation.corridor import CorridorStrategy
from wildtrails.generation.random_strategy import RandomStrategy

__all__ = [
    "CorridorStrategy",
    "PathGenerationStrategy",
    "RandomStrategy",
    "StrategyKind",
    "assemble_trail",
    "get_strategy",
]
