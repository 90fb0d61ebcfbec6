"""
Universal Transverse Mercator projection on the WGS84 ellipsoid.

The projection itself is delegated to PROJ through pyproj; this module owns
the zone bookkeeping PROJ leaves to the caller. Zone numbering follows the
standard definition, including the two irregular regions:
    - Norway: 56N..64N, 3E..12E belongs to zone 32 (32V)
    - Svalbard: 72N..84N uses zones 31, 33, 35, 37 only (31X..37X)

Transformers are built once per zone and hemisphere and cached.
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Optional, Tuple

from pyproj import CRS, Transformer
from pyproj.exceptions import ProjError

from geonav_transform.common.constants import (
    UTM_BAND_LETTERS,
    UTM_ELLIPSOID,
    UTM_K0,
    UTM_MAX_LATITUDE,
    UTM_MIN_LATITUDE,
    UTM_ZONE_WIDTH_DEG,
)
from geonav_transform.common.errors import ProjectionBoundaryError
from geonav_transform.common.types import PlanarPoint

_GEODETIC_CRS = "EPSG:4326"


# =============================================================================
# Zone bookkeeping
# =============================================================================


def wrap_longitude(lon: float) -> float:
    """Wrap longitude (deg) into [-180, 180)."""
    return (lon + 180.0) % 360.0 - 180.0


def zone_number(lat: float, lon: float) -> int:
    """UTM zone number for a position, with the Norway/Svalbard exceptions."""
    lon = wrap_longitude(lon)
    number = int(math.floor((lon + 180.0) / UTM_ZONE_WIDTH_DEG)) + 1

    if 56.0 <= lat < 64.0 and 3.0 <= lon < 12.0:
        number = 32

    if 72.0 <= lat < 84.0:
        if 0.0 <= lon < 9.0:
            number = 31
        elif 9.0 <= lon < 21.0:
            number = 33
        elif 21.0 <= lon < 33.0:
            number = 35
        elif 33.0 <= lon < 42.0:
            number = 37

    return number


def band_letter(lat: float) -> str:
    """Latitude band letter (C..X, no I/O). Raises outside [-80, 84]."""
    if math.isnan(lat) or not (UTM_MIN_LATITUDE <= lat <= UTM_MAX_LATITUDE):
        raise ProjectionBoundaryError(lat, float("nan"), "latitude outside UTM bands")
    index = int(math.floor((lat - UTM_MIN_LATITUDE) / 8.0))
    # Band X covers 72..84 (12 degrees)
    index = min(index, len(UTM_BAND_LETTERS) - 1)
    return UTM_BAND_LETTERS[index]


def central_meridian(number: int) -> float:
    """Central meridian (deg) of a UTM zone."""
    return (number - 1) * UTM_ZONE_WIDTH_DEG - 180.0 + UTM_ZONE_WIDTH_DEG / 2.0


def parse_zone(zone: str) -> Tuple[int, str]:
    """Split a zone designator like "15T" into (15, "T")."""
    zone = str(zone).strip().upper()
    if len(zone) < 2 or not zone[:-1].isdigit():
        raise ValueError(f"malformed UTM zone designator: {zone!r}")
    number, letter = int(zone[:-1]), zone[-1]
    if not 1 <= number <= 60:
        raise ValueError(f"UTM zone number out of range: {number}")
    if letter not in UTM_BAND_LETTERS:
        raise ValueError(f"unknown UTM band letter: {letter!r}")
    return number, letter


# =============================================================================
# Projection
# =============================================================================


def _check_input(lat: float, lon: float) -> None:
    if math.isnan(lat) or math.isnan(lon) or math.isinf(lat) or math.isinf(lon):
        raise ProjectionBoundaryError(lat, lon, "non-finite coordinate")
    if not (-180.0 <= lon <= 180.0):
        raise ProjectionBoundaryError(lat, lon, "longitude outside [-180, 180]")
    if not (UTM_MIN_LATITUDE <= lat <= UTM_MAX_LATITUDE):
        raise ProjectionBoundaryError(
            lat, lon, f"latitude outside [{UTM_MIN_LATITUDE}, {UTM_MAX_LATITUDE}]"
        )


@lru_cache(maxsize=None)
def _utm_transformer(number: int, south: bool) -> Transformer:
    crs = CRS.from_dict(
        {"proj": "utm", "zone": number, "south": south, "ellps": UTM_ELLIPSOID}
    )
    return Transformer.from_crs(_GEODETIC_CRS, crs, always_xy=True)


@lru_cache(maxsize=None)
def _local_transformer(number: int) -> Transformer:
    # Zone geometry without false easting/northing, continuous across the equator
    crs = CRS.from_dict(
        {
            "proj": "tmerc",
            "lat_0": 0.0,
            "lon_0": central_meridian(number),
            "k_0": UTM_K0,
            "x_0": 0.0,
            "y_0": 0.0,
            "ellps": UTM_ELLIPSOID,
        }
    )
    return Transformer.from_crs(_GEODETIC_CRS, crs, always_xy=True)


def _forward(tr: Transformer, lat: float, lon: float) -> Tuple[float, float]:
    try:
        x, y = tr.transform(lon, lat, errcheck=True)
    except ProjError as e:
        raise ProjectionBoundaryError(lat, lon, f"projection failed: {e}") from e
    return x, y


def _inverse(tr: Transformer, x: float, y: float) -> Tuple[float, float]:
    try:
        lon, lat = tr.transform(x, y, direction="INVERSE", errcheck=True)
    except ProjError as e:
        raise ProjectionBoundaryError(float("nan"), float("nan"), f"inverse projection failed: {e}") from e
    return lat, wrap_longitude(lon)


def project(lat: float, lon: float, zone: Optional[int] = None) -> PlanarPoint:
    """
    Project geodetic latitude/longitude (deg) to UTM.

    Args:
        lat, lon: WGS84 degrees. Latitude must lie in [-80, 84].
        zone: Force a zone number (e.g. to stay in a datum's zone). The band
            letter is always derived from the latitude.

    Returns:
        PlanarPoint(easting, northing, zone designator)

    Raises:
        ProjectionBoundaryError: Input outside the supported band or non-finite.
    """
    lat = float(lat)
    lon = float(lon)
    _check_input(lat, lon)

    number = zone_number(lat, lon) if zone is None else int(zone)
    if not 1 <= number <= 60:
        raise ValueError(f"UTM zone number out of range: {number}")
    letter = band_letter(lat)

    easting, northing = _forward(_utm_transformer(number, lat < 0.0), lat, lon)
    return PlanarPoint(easting=easting, northing=northing, zone=f"{number}{letter}")


def unproject(easting: float, northing: float, zone: str) -> Tuple[float, float]:
    """
    Inverse of project(): UTM easting/northing in a zone -> (lat, lon) degrees.

    Hemisphere comes from the band letter (letters before "N" are south).
    """
    number, letter = parse_zone(zone)
    return _inverse(_utm_transformer(number, letter < "N"), float(easting), float(northing))


# =============================================================================
# Local planar offsets relative to an origin
# =============================================================================


def ll_to_xy(lat: float, lon: float, origin_lat: float, origin_lon: float) -> Tuple[float, float]:
    """
    Local (x=east, y=north) offset in meters of (lat, lon) from an origin.

    Both points are projected in the origin's zone so offsets stay continuous
    across zone boundaries.
    """
    origin_lat, origin_lon = float(origin_lat), float(origin_lon)
    lat, lon = float(lat), float(lon)
    _check_input(origin_lat, origin_lon)
    _check_input(lat, lon)
    tr = _local_transformer(zone_number(origin_lat, origin_lon))
    ox, oy = _forward(tr, origin_lat, origin_lon)
    px, py = _forward(tr, lat, lon)
    return px - ox, py - oy


def xy_to_ll(x: float, y: float, origin_lat: float, origin_lon: float) -> Tuple[float, float]:
    """Inverse of ll_to_xy(): local offset from an origin -> (lat, lon)."""
    origin_lat, origin_lon = float(origin_lat), float(origin_lon)
    _check_input(origin_lat, origin_lon)
    tr = _local_transformer(zone_number(origin_lat, origin_lon))
    ox, oy = _forward(tr, origin_lat, origin_lon)
    return _inverse(tr, ox + float(x), oy + float(y))
