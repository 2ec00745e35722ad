# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Centralized default values for Wild Trails."""

from __future__ import annotations

KM_PER_DEGREE = 111.0

# Generation
DEFAULT_MAX_RADIUS_KM = 5.0
END_POINT_MAX_ATTEMPTS = 20
END_POINT_RADIUS_EXPANSION = 1.5
LANDMARK_SNAP_RADIUS_KM = 0.5
LANDMARK_MIN_COUNT = 3
MIN_INTERMEDIATE_POINTS = 4
MAX_INTERMEDIATE_POINTS = 7
NEARBY_SEARCH_FRACTIONS = (0.25, 0.5, 0.75, 1.0)
NEARBY_SEARCH_ATTEMPTS = 10
CORRIDOR_WIDTH_FRACTIONS = {"easy": 0.10}

# Accessibility (~22 m)
ACCESSIBILITY_BUFFER_DEGREES = 0.0002

# Hints
HINT_TEMPERATURE = 0.8
HINT_MAX_RETRIES = 2
HINT_TIMEOUT_SECONDS = 20.0
HINT_FEATURE_RADIUS_KM = 2.0
HINT_MAX_FEATURES = 10
FALLBACK_FEATURE_RADIUS_KM = 1.5
FALLBACK_MAX_FEATURES = 2
START_HINT = "Starting point"
END_HINT = "Ending point"

# Job orchestration
MAX_PROCESSING_ATTEMPTS = 3
PROCESSING_TIMEOUT_MINUTES = 10

# Proximity
DEFAULT_TRIGGER_DISTANCE_METERS = 50.0

# Overpass
OVERPASS_URL = "https://overpass-api.de/api/interpreter"
