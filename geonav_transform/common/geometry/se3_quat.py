"""
Rigid transforms as (translation, unit quaternion) pairs.

Quaternions follow the ROS convention q = [x, y, z, w] with w the scalar.
Composition follows tf2: (T1 ∘ T2)(p) = T1(T2(p)), i.e.
    R = R1 R2,  t = R1 t2 + t1

Representation Boundaries:
    - Transforms are stored as quaternions (what ROS messages carry).
    - Rotation matrices are materialized only for applying to points and
      for covariance rotation.
    - Euler angles only appear at the edges (datum heading, diagnostics)
      and go through scipy's Rotation.

Numerical Policy:
    QUATERNION_NORM_EPSILON guards normalization of degenerate input; it is a
    stability threshold, not a model parameter.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np
from scipy.spatial.transform import Rotation

from geonav_transform.common.constants import QUATERNION_NORM_EPSILON


# =============================================================================
# Quaternion helpers
# =============================================================================


def quat_normalize(q) -> np.ndarray:
    """Return q / |q|. Raises on a (near) zero quaternion."""
    q = np.asarray(q, dtype=float).reshape(-1)
    if len(q) != 4:
        raise ValueError(f"Expected 4-element quaternion, got {len(q)}")
    norm = float(np.linalg.norm(q))
    if not math.isfinite(norm) or norm < QUATERNION_NORM_EPSILON:
        raise ValueError("Quaternion norm is too small (near zero) or not finite")
    return q / norm


def quat_multiply(q1, q2) -> np.ndarray:
    """Hamilton product q1 * q2 (both [x, y, z, w])."""
    x1, y1, z1, w1 = np.asarray(q1, dtype=float).reshape(-1)
    x2, y2, z2, w2 = np.asarray(q2, dtype=float).reshape(-1)
    return np.array([
        w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
        w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
        w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
    ], dtype=float)


def quat_conjugate(q) -> np.ndarray:
    x, y, z, w = np.asarray(q, dtype=float).reshape(-1)
    return np.array([-x, -y, -z, w], dtype=float)


def quat_to_rotmat(q) -> np.ndarray:
    """
    Convert quaternion (x, y, z, w) to rotation matrix.

    The quaternion is normalized first.
    """
    x, y, z, w = quat_normalize(q)
    return np.array([
        [1 - 2*(y*y + z*z), 2*(x*y - z*w), 2*(x*z + y*w)],
        [2*(x*y + z*w), 1 - 2*(x*x + z*z), 2*(y*z - x*w)],
        [2*(x*z - y*w), 2*(y*z + x*w), 1 - 2*(x*x + y*y)]
    ], dtype=float)


def quat_from_rpy(roll: float, pitch: float, yaw: float) -> np.ndarray:
    """Fixed-axis roll/pitch/yaw (rad) to quaternion, same as tf2 setRPY."""
    return Rotation.from_euler("xyz", [roll, pitch, yaw]).as_quat()


def quat_to_rpy(q) -> Tuple[float, float, float]:
    """Quaternion to fixed-axis (roll, pitch, yaw) in radians."""
    roll, pitch, yaw = Rotation.from_quat(quat_normalize(q)).as_euler("xyz")
    return float(roll), float(pitch), float(yaw)


# =============================================================================
# Rigid transform
# =============================================================================


@dataclass(frozen=True, eq=False)
class RigidTransform:
    """
    Immutable SE(3) transform.

    Attributes:
        translation: (3,) meters
        rotation: (4,) unit quaternion [x, y, z, w]
    """
    translation: np.ndarray
    rotation: np.ndarray

    def __post_init__(self) -> None:
        t = np.array(self.translation, dtype=float).reshape(-1)
        if t.shape != (3,):
            raise ValueError(f"Expected 3D translation, got shape {t.shape}")
        q = quat_normalize(self.rotation)
        t.setflags(write=False)
        q.setflags(write=False)
        object.__setattr__(self, "translation", t)
        object.__setattr__(self, "rotation", q)

    @classmethod
    def identity(cls) -> "RigidTransform":
        return cls(np.zeros(3), np.array([0.0, 0.0, 0.0, 1.0]))

    @property
    def rotation_matrix(self) -> np.ndarray:
        return quat_to_rotmat(self.rotation)

    def compose(self, other: "RigidTransform") -> "RigidTransform":
        """self ∘ other: apply other first, then self."""
        R = self.rotation_matrix
        t = R @ other.translation + self.translation
        q = quat_multiply(self.rotation, other.rotation)
        return RigidTransform(t, q)

    def inverse(self) -> "RigidTransform":
        """T^{-1} such that T ∘ T^{-1} = I."""
        q_inv = quat_conjugate(self.rotation)
        R_inv = quat_to_rotmat(q_inv)
        return RigidTransform(-R_inv @ self.translation, q_inv)

    def apply(self, p) -> np.ndarray:
        """
        Apply transform to point(s): p' = R p + t.

        Args:
            p: 3D point (3,) or batch of points (N, 3)
        """
        p = np.asarray(p, dtype=float)
        R = self.rotation_matrix
        if p.ndim == 1:
            if len(p) != 3:
                raise ValueError(f"Expected 3D point, got shape {p.shape}")
            return R @ p + self.translation
        elif p.ndim == 2:
            if p.shape[1] != 3:
                raise ValueError(f"Expected (N, 3) points, got shape {p.shape}")
            return (R @ p.T).T + self.translation
        else:
            raise ValueError(f"Expected 1D or 2D array, got shape {p.shape}")

    def with_translation_z(self, z: float) -> "RigidTransform":
        t = np.array(self.translation, dtype=float)
        t[2] = float(z)
        return RigidTransform(t, self.rotation)

    def allclose(self, other: "RigidTransform", atol: float = 1e-9) -> bool:
        """Equality up to tolerance; q and -q describe the same rotation."""
        if not np.allclose(self.translation, other.translation, atol=atol):
            return False
        return abs(abs(float(np.dot(self.rotation, other.rotation))) - 1.0) < atol

    def __repr__(self) -> str:
        t = ", ".join(f"{v:.3f}" for v in self.translation)
        q = ", ".join(f"{v:.4f}" for v in self.rotation)
        return f"RigidTransform(t=[{t}], q=[{q}])"
