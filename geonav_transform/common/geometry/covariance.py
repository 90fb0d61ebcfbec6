"""
Pose covariance rotation.

Covariances are 6x6, ordered (x, y, z, roll, pitch, yaw). Rotating into
another frame uses the block-diagonal rotation

    R6 = [R 0]
         [0 R]

so that Σ' = R6 Σ R6ᵀ. This transports the position and orientation blocks
by the same 3x3 rotation; it is exact for the position block and the usual
small-angle treatment for the orientation block.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from geonav_transform.common.constants import POSE_SIZE, POSITION_SIZE


def block_rotation(R: np.ndarray) -> np.ndarray:
    """6x6 block rotation with R in both diagonal blocks, zeros elsewhere."""
    R = np.asarray(R, dtype=float)
    if R.shape != (3, 3):
        raise ValueError(f"Expected 3x3 rotation, got shape {R.shape}")
    R6 = np.zeros((POSE_SIZE, POSE_SIZE), dtype=float)
    R6[:POSITION_SIZE, :POSITION_SIZE] = R
    R6[POSITION_SIZE:, POSITION_SIZE:] = R
    return R6


def rotate_pose_covariance(cov: np.ndarray, R: np.ndarray) -> np.ndarray:
    """
    Rotate a 6x6 pose covariance by a 3x3 rotation.

    Args:
        cov: 6x6 covariance (x, y, z, roll, pitch, yaw)
        R: 3x3 rotation matrix. Required; callers derive it from a current
            transform on every call.

    Returns:
        R6 @ cov @ R6.T
    """
    cov = np.asarray(cov, dtype=float)
    if cov.shape != (POSE_SIZE, POSE_SIZE):
        raise ValueError(f"Expected 6x6 covariance, got shape {cov.shape}")
    R6 = block_rotation(R)
    return R6 @ cov @ R6.T


def covariance_from_flat(values: Sequence[float]) -> np.ndarray:
    """Row-major 36-element sequence (ROS message layout) -> 6x6."""
    arr = np.asarray(values, dtype=float).reshape(-1)
    if arr.size != POSE_SIZE * POSE_SIZE:
        raise ValueError(f"Expected {POSE_SIZE * POSE_SIZE} values, got {arr.size}")
    return arr.reshape(POSE_SIZE, POSE_SIZE).copy()


def covariance_to_flat(cov: np.ndarray) -> list:
    """6x6 -> row-major list of 36 floats."""
    cov = np.asarray(cov, dtype=float)
    if cov.shape != (POSE_SIZE, POSE_SIZE):
        raise ValueError(f"Expected 6x6 covariance, got shape {cov.shape}")
    return [float(v) for v in cov.reshape(-1)]
