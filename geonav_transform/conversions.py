"""
ROS message conversions.

Pure I/O layer: builds core types from ROS messages and back. The navigation
input packs geodetic data into an Odometry pose as

    position.x = longitude, position.y = latitude, position.z = altitude

and this is the only place that mapping is spelled out.
"""

from __future__ import annotations

import math

import numpy as np
from builtin_interfaces.msg import Time
from geometry_msgs.msg import TransformStamped
from nav_msgs.msg import Odometry

from geonav_transform.common.geometry import covariance_from_flat, covariance_to_flat
from geonav_transform.common.types import (
    GeodeticPoint,
    NavigationSample,
    OutputSample,
    TransformRecord,
    Twist,
)


def stamp_to_sec(stamp) -> float:
    """Convert ROS timestamp to seconds."""
    return float(stamp.sec) + float(stamp.nanosec) * 1e-9


def sec_to_stamp(t: float) -> Time:
    sec = math.floor(t)
    nanosec = int(round((t - sec) * 1e9))
    if nanosec >= 1_000_000_000:
        sec += 1
        nanosec -= 1_000_000_000
    return Time(sec=int(sec), nanosec=nanosec)


def odometry_to_sample(msg) -> NavigationSample:
    """Unpack a navigation Odometry message into a NavigationSample."""
    pos = msg.pose.pose.position
    q = msg.pose.pose.orientation
    tw = msg.twist.twist
    return NavigationSample(
        stamp=stamp_to_sec(msg.header.stamp),
        frame_id=msg.header.frame_id,
        position=GeodeticPoint(
            latitude=float(pos.y),
            longitude=float(pos.x),
            altitude=float(pos.z),
        ),
        orientation=np.array([q.x, q.y, q.z, q.w], dtype=float),
        pose_covariance=covariance_from_flat(msg.pose.covariance),
        twist=Twist(
            linear=[tw.linear.x, tw.linear.y, tw.linear.z],
            angular=[tw.angular.x, tw.angular.y, tw.angular.z],
            covariance=covariance_from_flat(msg.twist.covariance),
        ),
        child_frame_id=msg.child_frame_id,
    )


def output_to_odometry(out: OutputSample) -> Odometry:
    msg = Odometry()
    msg.header.stamp = sec_to_stamp(out.stamp)
    msg.header.frame_id = out.frame_id
    msg.child_frame_id = out.child_frame_id

    msg.pose.pose.position.x = float(out.position[0])
    msg.pose.pose.position.y = float(out.position[1])
    msg.pose.pose.position.z = float(out.position[2])
    msg.pose.pose.orientation.x = float(out.orientation[0])
    msg.pose.pose.orientation.y = float(out.orientation[1])
    msg.pose.pose.orientation.z = float(out.orientation[2])
    msg.pose.pose.orientation.w = float(out.orientation[3])
    msg.pose.covariance = covariance_to_flat(out.pose_covariance)

    msg.twist.twist.linear.x = float(out.twist.linear[0])
    msg.twist.twist.linear.y = float(out.twist.linear[1])
    msg.twist.twist.linear.z = float(out.twist.linear[2])
    msg.twist.twist.angular.x = float(out.twist.angular[0])
    msg.twist.twist.angular.y = float(out.twist.angular[1])
    msg.twist.twist.angular.z = float(out.twist.angular[2])
    msg.twist.covariance = covariance_to_flat(out.twist.covariance)
    return msg


def record_to_transform(record: TransformRecord, stamp=None) -> TransformStamped:
    """
    Build a TransformStamped from a TransformRecord.

    stamp: ROS Time message to use instead of the record's own stamp.
    """
    tf_msg = TransformStamped()
    tf_msg.header.stamp = stamp if stamp is not None else sec_to_stamp(record.stamp)
    tf_msg.header.frame_id = record.parent_frame_id
    tf_msg.child_frame_id = record.child_frame_id
    tf_msg.transform.translation.x = float(record.translation[0])
    tf_msg.transform.translation.y = float(record.translation[1])
    tf_msg.transform.translation.z = float(record.translation[2])
    tf_msg.transform.rotation.x = float(record.rotation[0])
    tf_msg.transform.rotation.y = float(record.rotation[1])
    tf_msg.transform.rotation.z = float(record.rotation[2])
    tf_msg.transform.rotation.w = float(record.rotation[3])
    return tf_msg
