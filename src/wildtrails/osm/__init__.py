# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""OpenStreetMap geometry source.

Public API:
    - Feature: tagged shapely geometry
    - GeometrySource: protocol for feature providers
    - OverpassGeometrySource: Overpass API implementation
    - features_from_overpass: Overpass JSON conversion
"""

from wildtrails.osm.features import Feature, GeometrySource, features_from_overpass
from wildtrails.osm.overpass import OverpassGeometrySource, build_query

__all__ = [
    "Feature",
    "GeometrySource",
    "OverpassGeometrySource",
    "build_query",
    "features_from_overpass",
]
