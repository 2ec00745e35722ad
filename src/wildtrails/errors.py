# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Exception hierarchy for trail generation and play.

Only GenerationFailure and PersistenceError escape to the job orchestrator's
retry state machine. Everything else is recovered where it is raised.
"""


class WildTrailsError(Exception):
    """Base exception for wildtrails operations."""

    pass


class GeometrySourceUnavailable(WildTrailsError):
    """Geometry source could not be queried; generation continues unfiltered."""

    pass


class AccessibilityExhausted(WildTrailsError):
    """No accessible point found within the bounded search."""

    pass


class OracleUnavailable(WildTrailsError):
    """Hint oracle is not configured or failed."""

    pass


class OracleTimeout(OracleUnavailable):
    """Hint oracle did not answer in time."""

    pass


class GenerationFailure(WildTrailsError):
    """The goal could not be placed on accessible ground."""

    pass


class PersistenceError(WildTrailsError):
    """Game store read or write failed."""

    pass


class GameNotFound(PersistenceError):
    """Requested game does not exist in the store."""

    pass


class ProcessingLockHeld(WildTrailsError):
    """Another generation attempt holds a fresh processing lock."""

    pass


class InvalidCoordinateError(WildTrailsError, ValueError):
    """Latitude/longitude outside the valid range or not finite."""

    pass
