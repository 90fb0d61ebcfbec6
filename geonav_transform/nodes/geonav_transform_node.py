"""
geonav_transform node.

Subscribes to geodetic navigation fixes (nav_msgs/Odometry with
x = longitude, y = latitude, z = altitude) and republishes them as
Cartesian odometry in the "utm" frame and in the local world frame anchored
at the configured datum.

Topics:
    in:  odometry/nav
    out: odometry/utm, odometry/odom, geonav/status, geonav/report (optional)
TF:
    world -> utm (static, when broadcast_utm_transform is set)
"""

import rclpy
from rcl_interfaces.msg import ParameterDescriptor
from rclpy.node import Node
from rclpy.qos import QoSProfile, ReliabilityPolicy, DurabilityPolicy, HistoryPolicy

import tf2_ros
from nav_msgs.msg import Odometry
from std_msgs.msg import String

from geonav_transform.common import constants
from geonav_transform.common.errors import ProjectionBoundaryError
from geonav_transform.config import default_datum, parse_datum, validate_geonav_params
from geonav_transform.conversions import (
    odometry_to_sample,
    output_to_odometry,
    record_to_transform,
)
from geonav_transform.core import (
    GeonavContext,
    GeonavOptions,
    describe_fix,
    establish_datum_from_config,
    process_sample,
)
from geonav_transform.diagnostics.status import StatusCounters, build_status, check_status
from geonav_transform.utils.sample_buffer import LatestSampleSlot


class GeonavTransformNode(Node):
    """Geodetic -> UTM / world odometry converter."""

    def __init__(self):
        super().__init__("geonav_transform")

        self.declare_parameter("frequency", constants.DEFAULT_FREQUENCY_HZ)
        self.declare_parameter("broadcast_utm_transform", False)
        self.declare_parameter("zero_altitude", False)
        self.declare_parameter(
            "datum", None, ParameterDescriptor(dynamic_typing=True)
        )
        self.declare_parameter("world_frame", constants.DEFAULT_WORLD_FRAME)
        self.declare_parameter("base_link_frame", constants.DEFAULT_BASE_LINK_FRAME)
        self.declare_parameter("tf_prefix", "")
        self.declare_parameter("covariance_rotation", "identity")
        self.declare_parameter("publish_reports", False)
        self.declare_parameter("status_period_sec", constants.DEFAULT_STATUS_PERIOD_SEC)

        self.params = validate_geonav_params(self)
        self.options = GeonavOptions(
            world_frame=self.params.prefixed_world_frame(),
            base_link_frame=self.params.prefixed_base_link_frame(),
            zero_altitude=self.params.zero_altitude,
            covariance_rotation=self.params.covariance_rotation,
        )

        self.context = GeonavContext()
        self.counters = StatusCounters()
        self.slot = LatestSampleSlot("odometry/nav", logger=self.get_logger())

        self.datum_degraded = False
        self._establish_datum()

        qos_latest = QoSProfile(
            reliability=ReliabilityPolicy.RELIABLE,
            durability=DurabilityPolicy.VOLATILE,
            history=HistoryPolicy.KEEP_LAST,
            depth=1,
        )
        qos_out = QoSProfile(
            reliability=ReliabilityPolicy.RELIABLE,
            durability=DurabilityPolicy.VOLATILE,
            history=HistoryPolicy.KEEP_LAST,
            depth=10,
        )

        self.sub_nav = self.create_subscription(Odometry, "odometry/nav", self.on_nav, qos_latest)
        self.pub_utm = self.create_publisher(Odometry, "odometry/utm", qos_out)
        self.pub_odom = self.create_publisher(Odometry, "odometry/odom", qos_out)
        self.pub_status = self.create_publisher(String, "geonav/status", qos_out)
        self.pub_report = None
        if self.params.publish_reports:
            self.pub_report = self.create_publisher(String, "geonav/report", qos_out)

        self.timer = self.create_timer(1.0 / self.params.frequency, self.on_timer)
        self.status_timer = self.create_timer(self.params.status_period_sec, self.on_status)

        self.get_logger().info(
            f"geonav_transform: odometry/nav -> odometry/utm, odometry/odom "
            f"at {self.params.frequency:.1f} Hz (world={self.options.world_frame}, "
            f"base_link={self.options.base_link_frame})"
        )

    def _establish_datum(self) -> None:
        """Parse and apply the datum; fall back to (0, 0, 0) if it cannot be projected."""
        result = parse_datum(self.params.datum)
        result.emit(self.get_logger())
        self.datum_degraded = result.degraded

        stamp = self.get_clock().now()
        stamp_sec = stamp.nanoseconds * 1e-9
        try:
            self.context, record, report = establish_datum_from_config(
                self.context, result.datum, self.options, stamp=stamp_sec
            )
        except ProjectionBoundaryError as exc:
            self.get_logger().error(f"ERROR datum config: {exc}")
            self.get_logger().error("Setting to 0,0,0 which is non-ideal!")
            self.datum_degraded = True
            self.context, record, report = establish_datum_from_config(
                self.context, default_datum(), self.options, stamp=stamp_sec
            )
        report.emit(self.get_logger())

        self.static_broadcaster = None
        if self.params.broadcast_utm_transform:
            self.static_broadcaster = tf2_ros.StaticTransformBroadcaster(self)
            self.static_broadcaster.sendTransform(record_to_transform(record, stamp.to_msg()))
            self.get_logger().info(
                f"Broadcasting static transform {record.parent_frame_id} -> {record.child_frame_id}"
            )

    def on_nav(self, msg: Odometry):
        """Park the newest fix for the next timer tick."""
        sample = odometry_to_sample(msg)
        if self.slot.put(sample.stamp, sample):
            self.get_logger().debug("Superseded pending navigation sample")

    def on_timer(self):
        item = self.slot.take()
        if item is None:
            return
        _, sample = item

        self.context, outputs, report = process_sample(
            self.context, sample, self.options, logger=self.get_logger()
        )
        self.counters.record(report.accepted, report.drop_reason)
        if report.accepted:
            self.get_logger().debug(describe_fix(sample, report), throttle_duration_sec=2.0)

        if outputs:
            utm_output, world_output = outputs
            self.pub_utm.publish(output_to_odometry(utm_output))
            self.pub_odom.publish(output_to_odometry(world_output))

        if self.pub_report is not None:
            msg = String()
            msg.data = report.to_json()
            self.pub_report.publish(msg)

    def on_status(self):
        status = build_status(
            self.context,
            self.counters,
            self.slot.stats(),
            datum_degraded=self.datum_degraded,
        )
        msg = String()
        msg.data = check_status(status, self.counters, logger=self.get_logger())
        self.pub_status.publish(msg)


def main():
    rclpy.init()
    node = GeonavTransformNode()

    try:
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    finally:
        node.destroy_node()
        rclpy.shutdown()


if __name__ == "__main__":
    main()
