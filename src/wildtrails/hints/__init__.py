# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tiered hint generation for clue waypoints."""

from wildtrails.hints.oracle import HintOracle, LLMHintOracle
from wildtrails.hints.prompts import build_prompt, summarize_features
from wildtrails.hints.synthesizer import HintSynthesizer, fallback_hint
from wildtrails.hints.tiers import HintTier, hint_tier

__all__ = [
    "HintOracle",
    "HintSynthesizer",
    "HintTier",
    "LLMHintOracle",
    "build_prompt",
    "fallback_hint",
    "hint_tier",
    "summarize_features",
]
