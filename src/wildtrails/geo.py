# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Geographic primitives shared by generation, hints and proximity.

Distances use a flat-earth approximation that is good enough for trails of a
few kilometres. ``distance_km`` evaluates the longitude correction at the
first argument's latitude, so ``distance_km(a, b)`` and ``distance_km(b, a)``
differ slightly. Callers and tests tolerate that difference.
"""

from __future__ import annotations

import math
import random

from wildtrails.defaults import KM_PER_DEGREE
from wildtrails.models import LatLng

CARDINAL_DIRECTIONS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


def bearing(from_: LatLng, to: LatLng) -> float:
    """Initial great-circle bearing from *from_* to *to*.

    Returns:
        Degrees clockwise from north in [0, 360)
    """
    d_lng = math.radians(to.lng - from_.lng)
    lat1 = math.radians(from_.lat)
    lat2 = math.radians(to.lat)
    y = math.sin(d_lng) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lng)
    result = (math.degrees(math.atan2(y, x)) + 360) % 360
    # (-tiny + 360) % 360 can round up to exactly 360.0
    return 0.0 if result >= 360 else result


def cardinal(bearing_deg: float) -> str:
    """Eight-point compass direction for a bearing.

    Rounds half up, so 22.5 degrees is NE rather than N.
    """
    index = math.floor(bearing_deg / 45 + 0.5) % 8
    return CARDINAL_DIRECTIONS[index]


def distance_km(p1: LatLng, p2: LatLng) -> float:
    """Planar distance in kilometres (see module docstring on asymmetry)."""
    d_lat = (p1.lat - p2.lat) * KM_PER_DEGREE
    d_lng = (p1.lng - p2.lng) * KM_PER_DEGREE * math.cos(math.radians(p1.lat))
    return math.sqrt(d_lat**2 + d_lng**2)


def interpolate(start: LatLng, end: LatLng, t: float) -> LatLng:
    """Point at fraction *t* along the straight lat/lng line."""
    return LatLng(
        lat=start.lat + (end.lat - start.lat) * t,
        lng=start.lng + (end.lng - start.lng) * t,
    )


def perpendicular_offset(line_start: LatLng, line_end: LatLng, t: float, offset_km: float) -> LatLng:
    """Point at fraction *t* along the line, shifted sideways by *offset_km*.

    Positive offsets move right of the direction of travel (bearing + 90
    degrees, clockwise), negative offsets move left. Trails only depend on
    the offsets being symmetric around zero, so the side is a convention.
    """
    on_line = interpolate(line_start, line_end, t)
    side = math.radians((bearing(line_start, line_end) + 90) % 360)

    lat_offset = (offset_km / KM_PER_DEGREE) * math.cos(side)
    lng_offset = (offset_km / KM_PER_DEGREE) * math.sin(side) / math.cos(math.radians(on_line.lat))
    return LatLng(lat=on_line.lat + lat_offset, lng=on_line.lng + lng_offset)


def random_point_in_radius(center: LatLng, radius_km: float, rng: random.Random) -> LatLng:
    """Uniform random point on a disc of *radius_km* around *center*."""
    radius_deg = radius_km / KM_PER_DEGREE
    w = radius_deg * math.sqrt(rng.random())
    theta = 2 * math.pi * rng.random()
    return LatLng(lat=center.lat + w * math.sin(theta), lng=center.lng + w * math.cos(theta))


def is_valid_coordinate(lat: float, lng: float) -> bool:
    """True for finite coordinates inside the WGS84 range."""
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return False
    return -90 <= lat <= 90 and -180 <= lng <= 180
