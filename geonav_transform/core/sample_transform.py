"""
Per-sample utm -> nav transform.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from geonav_transform.common.geometry import RigidTransform
from geonav_transform.common.types import NavigationSample, PlanarPoint
from geonav_transform.common.utm import project


@dataclass(frozen=True)
class NavTransform:
    """utm -> nav transform, its inverse and the projected position."""
    utm_to_nav: RigidTransform
    utm_to_nav_inverse: RigidTransform
    planar: PlanarPoint


def build_nav_transform(sample: NavigationSample) -> NavTransform:
    """
    Project the sample and build utm -> nav.

    Translation is (easting, northing, altitude); rotation is the sample
    orientation as given.

    Raises:
        ProjectionBoundaryError: Sample outside the UTM band.
        ValueError: Degenerate orientation quaternion.
    """
    p = sample.position
    planar = project(p.latitude, p.longitude)
    utm_to_nav = RigidTransform(
        np.array([planar.easting, planar.northing, p.altitude], dtype=float),
        sample.orientation,
    )
    return NavTransform(
        utm_to_nav=utm_to_nav,
        utm_to_nav_inverse=utm_to_nav.inverse(),
        planar=planar,
    )
