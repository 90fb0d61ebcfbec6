"""
Core data types for geonav_transform.

Plain dataclasses passed between the pure core and the ROS boundary. Field
ordering for geodetic data is explicit here; the Odometry x=lon / y=lat
packing is unpacked once in conversions.py and never again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import numpy as np

from geonav_transform.common.constants import POSE_SIZE


def _as_vector(x, n: int, name: str) -> np.ndarray:
    v = np.asarray(x, dtype=float).reshape(-1)
    if v.shape != (n,):
        raise ValueError(f"{name} must have {n} elements, got shape {v.shape}")
    return v.copy()


def _as_matrix(x, n: int, name: str) -> np.ndarray:
    m = np.asarray(x, dtype=float)
    if m.size == n * n and m.shape != (n, n):
        m = m.reshape(n, n)
    if m.shape != (n, n):
        raise ValueError(f"{name} must be {n}x{n}, got shape {m.shape}")
    return m.copy()


@dataclass(frozen=True)
class GeodeticPoint:
    """WGS84 position. Degrees for latitude/longitude, meters for altitude."""
    latitude: float
    longitude: float
    altitude: float = 0.0


@dataclass(frozen=True)
class PlanarPoint:
    """UTM coordinate with its zone designator (e.g. "15T")."""
    easting: float
    northing: float
    zone: str

    @property
    def zone_number(self) -> int:
        return int(self.zone[:-1])

    @property
    def band(self) -> str:
        return self.zone[-1]


@dataclass(frozen=True)
class DatumConfig:
    """Reference point anchoring the world frame, plus nominal heading (rad)."""
    point: GeodeticPoint
    heading: float = 0.0


@dataclass
class Twist:
    """Linear/angular velocity with 6x6 covariance. Passed through untouched."""
    linear: np.ndarray = field(default_factory=lambda: np.zeros(3))
    angular: np.ndarray = field(default_factory=lambda: np.zeros(3))
    covariance: np.ndarray = field(default_factory=lambda: np.zeros((POSE_SIZE, POSE_SIZE)))

    def __post_init__(self) -> None:
        self.linear = _as_vector(self.linear, 3, "linear")
        self.angular = _as_vector(self.angular, 3, "angular")
        self.covariance = _as_matrix(self.covariance, POSE_SIZE, "twist covariance")


@dataclass
class NavigationSample:
    """
    One incoming navigation fix.

    Attributes:
        stamp: Time of the fix (seconds).
        frame_id: Sensor frame the fix was reported in (may be empty).
        position: Geodetic position of the sensor.
        orientation: Quaternion (x, y, z, w), expressed w.r.t. the UTM axes.
        pose_covariance: 6x6, ordered (x, y, z, roll, pitch, yaw).
        twist: Velocity block, passed through to both outputs.
        child_frame_id: Child frame reported by the source.
    """
    stamp: float
    frame_id: str
    position: GeodeticPoint
    orientation: np.ndarray
    pose_covariance: np.ndarray = field(default_factory=lambda: np.zeros((POSE_SIZE, POSE_SIZE)))
    twist: Twist = field(default_factory=Twist)
    child_frame_id: str = ""

    def __post_init__(self) -> None:
        self.orientation = _as_vector(self.orientation, 4, "orientation")
        self.pose_covariance = _as_matrix(self.pose_covariance, POSE_SIZE, "pose covariance")


@dataclass
class OutputSample:
    """Pose of the sensor expressed in the UTM or world frame."""
    stamp: float
    frame_id: str
    child_frame_id: str
    position: np.ndarray
    orientation: np.ndarray
    pose_covariance: np.ndarray
    twist: Twist

    def __post_init__(self) -> None:
        self.position = _as_vector(self.position, 3, "position")
        self.orientation = _as_vector(self.orientation, 4, "orientation")
        self.pose_covariance = _as_matrix(self.pose_covariance, POSE_SIZE, "pose covariance")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stamp": self.stamp,
            "frame_id": self.frame_id,
            "child_frame_id": self.child_frame_id,
            "position": self.position.tolist(),
            "orientation": self.orientation.tolist(),
        }


@dataclass(frozen=True)
class TransformRecord:
    """A stamped parent->child transform, ready for a TF broadcaster."""
    stamp: float
    parent_frame_id: str
    child_frame_id: str
    translation: Tuple[float, float, float]
    rotation: Tuple[float, float, float, float]
    meta: Optional[Dict[str, Any]] = None
