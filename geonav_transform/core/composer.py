"""
Frame composition: the two output poses produced for each valid sample.

UTM frame:
    position    = utm -> nav translation
    orientation = sample orientation, verbatim (assumed already w.r.t. UTM axes)
    covariance  = sample covariance rotated by the configured rotation

World frame:
    world -> nav = (utm -> world)^{-1} ∘ (utm -> nav)
    covariance and twist are copied from the UTM output (valid when the datum
    rotation is near identity)
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from geonav_transform.common.constants import UTM_FRAME_ID
from geonav_transform.common.geometry import rotate_pose_covariance
from geonav_transform.common.types import NavigationSample, OutputSample, Twist
from geonav_transform.core.state import (
    GeonavContext,
    GeonavOptions,
    covariance_rotation_matrix,
)


def _copy_twist(twist: Twist) -> Twist:
    return Twist(
        linear=twist.linear.copy(),
        angular=twist.angular.copy(),
        covariance=twist.covariance.copy(),
    )


def compose_utm_output(
    context: GeonavContext,
    sample: NavigationSample,
    options: GeonavOptions,
) -> OutputSample:
    """Sensor pose in the "utm" frame. Expects context.utm_to_nav from this sample."""
    position = np.array(context.utm_to_nav.translation, dtype=float)
    if options.zero_altitude:
        position[2] = 0.0

    R = covariance_rotation_matrix(context, options.covariance_rotation)
    cov = rotate_pose_covariance(sample.pose_covariance, R)

    return OutputSample(
        stamp=sample.stamp,
        frame_id=UTM_FRAME_ID,
        child_frame_id=options.base_link_frame,
        position=position,
        orientation=sample.orientation.copy(),
        pose_covariance=cov,
        twist=_copy_twist(sample.twist),
    )


def compose_world_output(
    context: GeonavContext,
    utm_output: OutputSample,
    options: GeonavOptions,
) -> OutputSample:
    """Sensor pose in the world frame via the inverse datum transform."""
    world_to_nav = context.utm_to_world_inverse.compose(context.utm_to_nav)

    position = np.array(world_to_nav.translation, dtype=float)
    if options.zero_altitude:
        position[2] = 0.0

    return OutputSample(
        stamp=utm_output.stamp,
        frame_id=options.world_frame,
        child_frame_id=utm_output.child_frame_id,
        position=position,
        orientation=np.array(world_to_nav.rotation, dtype=float),
        pose_covariance=utm_output.pose_covariance.copy(),
        twist=_copy_twist(utm_output.twist),
    )


def compose_outputs(
    context: GeonavContext,
    sample: NavigationSample,
    options: GeonavOptions,
) -> Tuple[OutputSample, OutputSample]:
    """(utm output, world output) for a sample already folded into context."""
    utm_output = compose_utm_output(context, sample, options)
    world_output = compose_world_output(context, utm_output, options)
    return utm_output, world_output
