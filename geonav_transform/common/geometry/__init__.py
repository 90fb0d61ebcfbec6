"""
Geometry package for geonav_transform.

Modules:
- se3_quat: rigid transforms as (translation, quaternion)
- covariance: 6x6 pose covariance rotation and message packing

Usage:
    from geonav_transform.common.geometry import (
        RigidTransform,
        quat_to_rotmat,
        rotate_pose_covariance,
    )
"""

from __future__ import annotations

from geonav_transform.common.geometry.se3_quat import (
    # Quaternion operations
    quat_normalize,
    quat_multiply,
    quat_conjugate,
    quat_to_rotmat,
    quat_from_rpy,
    quat_to_rpy,
    # SE(3)
    RigidTransform,
)
from geonav_transform.common.geometry.covariance import (
    block_rotation,
    rotate_pose_covariance,
    covariance_from_flat,
    covariance_to_flat,
)

__all__ = [
    # Quaternion operations
    "quat_normalize",
    "quat_multiply",
    "quat_conjugate",
    "quat_to_rotmat",
    "quat_from_rpy",
    "quat_to_rpy",
    # SE(3)
    "RigidTransform",
    # Covariance
    "block_rotation",
    "rotate_pose_covariance",
    "covariance_from_flat",
    "covariance_to_flat",
]
