# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Hint tiers: how precise a waypoint's hint is allowed to be."""

from __future__ import annotations

from enum import StrEnum


class HintTier(StrEnum):
    EARLY = "early"  # Broad region
    MIDDLE = "middle"  # 1-2 km
    LATE = "late"  # Within ~500 m


def hint_tier(index: int, total: int) -> HintTier:
    """Tier for waypoint *index* of *total* (1-based)."""
    progress = index / total if total else 1.0
    if progress <= 0.33:
        return HintTier.EARLY
    if progress <= 0.66:
        return HintTier.MIDDLE
    return HintTier.LATE
