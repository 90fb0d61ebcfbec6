"""
Error taxonomy for geonav_transform.

None of these is fatal to the node: configuration errors degrade to the
default datum, sample errors drop the sample.
"""

from __future__ import annotations


class GeonavError(Exception):
    """Base class for all geonav_transform errors."""


class ConfigurationError(GeonavError):
    """Missing or malformed datum specification."""


class SampleValidationError(GeonavError):
    """A navigation sample failed the basic validity checks."""


class ProjectionBoundaryError(GeonavError, ValueError):
    """Geodetic input outside the supported UTM band."""

    def __init__(self, latitude: float, longitude: float, reason: str) -> None:
        self.latitude = latitude
        self.longitude = longitude
        super().__init__(f"cannot project ({latitude}, {longitude}): {reason}")
