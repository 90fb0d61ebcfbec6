"""
Datum establishment.

Projects the configured reference point and builds the fixed utm -> world
transform. Also produces the record for the one-shot static broadcast of
world -> "utm".
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from geonav_transform.common.constants import DATUM_YAW_WARN_THRESHOLD, UTM_FRAME_ID
from geonav_transform.common.geometry import RigidTransform, quat_to_rpy
from geonav_transform.common.op_report import OpReport
from geonav_transform.common.types import DatumConfig, GeodeticPoint, TransformRecord
from geonav_transform.common.utm import project
from geonav_transform.core.state import GeonavContext, GeonavOptions


IDENTITY_QUATERNION = np.array([0.0, 0.0, 0.0, 1.0])


def datum_orientation(datum: DatumConfig) -> Tuple[np.ndarray, list[str]]:
    """
    Orientation used for the datum transform, plus diagnostics.

    The configured heading does not rotate the world frame; it is reported
    and otherwise ignored.
    """
    warnings = []
    if abs(datum.heading) > DATUM_YAW_WARN_THRESHOLD:
        warnings.append("Yaw of the datum is ignored!")
    return IDENTITY_QUATERNION.copy(), warnings


def establish_datum(
    context: GeonavContext,
    point: GeodeticPoint,
    orientation,
    options: GeonavOptions,
    stamp: float = 0.0,
) -> Tuple[GeonavContext, TransformRecord, OpReport]:
    """
    Set utm -> world from a geodetic reference point and orientation.

    Args:
        context: Current context (any state; a second call overwrites)
        point: Datum position
        orientation: Quaternion (x, y, z, w) for the datum rotation
        options: Output options (world frame name, zero_altitude)
        stamp: Stamp for the broadcast record

    Returns:
        (new context, world -> "utm" TransformRecord, OpReport)

    Raises:
        ProjectionBoundaryError: Datum outside the UTM band.
    """
    planar = project(point.latitude, point.longitude)

    utm_to_world = RigidTransform(
        np.array([planar.easting, planar.northing, point.altitude], dtype=float),
        orientation,
    )
    new_context = context.with_datum(utm_to_world, planar.zone)

    # Broadcast copy may drop altitude; the stored transform keeps it
    broadcast = utm_to_world.with_translation_z(0.0) if options.zero_altitude else utm_to_world
    record = TransformRecord(
        stamp=float(stamp),
        parent_frame_id=options.world_frame,
        child_frame_id=UTM_FRAME_ID,
        translation=tuple(float(v) for v in broadcast.translation),
        rotation=tuple(float(v) for v in broadcast.rotation),
        meta={"zone": planar.zone},
    )

    roll, pitch, yaw = quat_to_rpy(utm_to_world.rotation)
    report = OpReport(
        name="EstablishDatum",
        accepted=True,
        notices=[
            f"Datum (latitude, longitude, altitude) is "
            f"({point.latitude:.6f}, {point.longitude:.6f}, {point.altitude:.6f})",
            f"Datum UTM coordinate is ({planar.easting:.6f}, {planar.northing:.6f}) zone {planar.zone}",
            f"Datum orientation roll, pitch, yaw is ({roll:.6f}, {pitch:.6f}, {yaw:.6f})",
        ],
        metrics={
            "easting": planar.easting,
            "northing": planar.northing,
            "zone": planar.zone,
            "roll": roll,
            "pitch": pitch,
            "yaw": yaw,
            "broadcast_z": record.translation[2],
        },
    )
    return new_context, record, report


def establish_datum_from_config(
    context: GeonavContext,
    datum: DatumConfig,
    options: GeonavOptions,
    stamp: float = 0.0,
) -> Tuple[GeonavContext, TransformRecord, OpReport]:
    """establish_datum() for a parsed DatumConfig, carrying the heading diagnostic."""
    orientation, warnings = datum_orientation(datum)
    new_context, record, report = establish_datum(
        context, datum.point, orientation, options, stamp=stamp
    )
    report.warnings.extend(warnings)
    report.metrics["configured_heading"] = float(datum.heading)
    return new_context, record, report
