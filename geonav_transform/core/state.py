"""
Explicit state for the geonav core.

The context is an immutable value. Every core operation takes the current
context and returns a new one; nothing in the core holds state between calls.

State machine:
    AWAITING_DATUM --establish_datum--> ACTIVE   (ACTIVE is terminal)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

import numpy as np

from geonav_transform.common.constants import DEFAULT_BASE_LINK_FRAME, DEFAULT_WORLD_FRAME
from geonav_transform.common.geometry import RigidTransform


class DatumState(str, Enum):
    AWAITING_DATUM = "AWAITING_DATUM"
    ACTIVE = "ACTIVE"


class CovarianceRotation(str, Enum):
    """
    Which rotation the UTM-frame covariance is rotated by.

    IDENTITY leaves the reported covariance as-is. DATUM_INVERSE uses the
    inverse datum rotation (world -> utm). SAMPLE_INVERSE uses the inverse of
    the current sample's orientation (nav -> utm).
    """
    IDENTITY = "identity"
    DATUM_INVERSE = "datum_inverse"
    SAMPLE_INVERSE = "sample_inverse"


@dataclass(frozen=True)
class GeonavOptions:
    """Output options for the core. Frame names are already prefixed."""
    world_frame: str = DEFAULT_WORLD_FRAME
    base_link_frame: str = DEFAULT_BASE_LINK_FRAME
    zero_altitude: bool = False
    covariance_rotation: CovarianceRotation = CovarianceRotation.IDENTITY


@dataclass(frozen=True)
class GeonavContext:
    """
    Persistent transforms and flags.

    Attributes:
        utm_to_world: Fixed datum transform (identity until the datum is set)
        utm_to_world_inverse: Cached inverse of utm_to_world
        utm_to_nav: Transform of the latest valid sample
        utm_to_nav_inverse: Cached inverse, always replaced with utm_to_nav
        has_datum: Gate for sample processing
        datum_zone: UTM zone designator of the datum ("" until set)
        empty_frame_noted: Whether the empty frame_id notice was emitted
    """
    utm_to_world: RigidTransform = field(default_factory=RigidTransform.identity)
    utm_to_world_inverse: RigidTransform = field(default_factory=RigidTransform.identity)
    utm_to_nav: RigidTransform = field(default_factory=RigidTransform.identity)
    utm_to_nav_inverse: RigidTransform = field(default_factory=RigidTransform.identity)
    has_datum: bool = False
    datum_zone: str = ""
    empty_frame_noted: bool = False

    @property
    def state(self) -> DatumState:
        return DatumState.ACTIVE if self.has_datum else DatumState.AWAITING_DATUM

    def with_datum(self, utm_to_world: RigidTransform, zone: str) -> "GeonavContext":
        return replace(
            self,
            utm_to_world=utm_to_world,
            utm_to_world_inverse=utm_to_world.inverse(),
            has_datum=True,
            datum_zone=zone,
        )

    def with_nav(self, utm_to_nav: RigidTransform, utm_to_nav_inverse: RigidTransform) -> "GeonavContext":
        """Replace the nav pair as a unit."""
        return replace(self, utm_to_nav=utm_to_nav, utm_to_nav_inverse=utm_to_nav_inverse)

    def with_empty_frame_noted(self) -> "GeonavContext":
        return replace(self, empty_frame_noted=True)


def covariance_rotation_matrix(
    context: GeonavContext,
    source: CovarianceRotation,
) -> np.ndarray:
    """Resolve the 3x3 covariance rotation from the current context."""
    source = CovarianceRotation(source)
    if source is CovarianceRotation.IDENTITY:
        return np.eye(3, dtype=float)
    if source is CovarianceRotation.DATUM_INVERSE:
        return context.utm_to_world_inverse.rotation_matrix
    return context.utm_to_nav_inverse.rotation_matrix
