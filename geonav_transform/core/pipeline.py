"""
Sample pipeline for geonav_transform.

    (GeonavContext, NavigationSample) -> (GeonavContext, [OutputSample], OpReport)

Steps:
1. Datum gate (AWAITING_DATUM drops the sample)
2. Validation (non-finite position drops the sample)
3. utm -> nav transform (out-of-band latitude drops the sample)
4. Context update (nav transform pair replaced together)
5. Frame composition (UTM output, world output)

A dropped sample leaves the persistent transforms unchanged. Nothing here
raises for bad input; the reason is recorded in the report.
"""

from __future__ import annotations

from typing import List, Tuple

from geonav_transform.common.errors import ProjectionBoundaryError, SampleValidationError
from geonav_transform.common.op_report import OpReport
from geonav_transform.common.types import NavigationSample, OutputSample
from geonav_transform.common.utm import parse_zone
from geonav_transform.core.composer import compose_outputs
from geonav_transform.core.sample_transform import build_nav_transform
from geonav_transform.core.state import DatumState, GeonavContext, GeonavOptions
from geonav_transform.core.validation import has_empty_frame, validate_sample


DROP_NO_DATUM = "no_datum"
DROP_INVALID_SAMPLE = "invalid_sample"
DROP_PROJECTION_BOUNDARY = "projection_boundary"
DROP_BAD_ORIENTATION = "bad_orientation"


def _dropped(reason: str, message: str, stamp: float) -> OpReport:
    return OpReport(
        name="ProcessSample",
        accepted=False,
        drop_reason=reason,
        warnings=[message],
        metrics={"stamp": stamp},
    )


def process_sample(
    context: GeonavContext,
    sample: NavigationSample,
    options: GeonavOptions,
    logger=None,
) -> Tuple[GeonavContext, List[OutputSample], OpReport]:
    """
    Run one navigation sample through the transform chain.

    Args:
        context: Current context
        sample: Incoming navigation sample
        options: Output options
        logger: Optional ROS-style logger; the report is emitted to it

    Returns:
        (new context, [utm output, world output] or [], report)
    """
    new_context, outputs, report = _run(context, sample, options)
    report.emit(logger)
    return new_context, outputs, report


def describe_fix(sample: NavigationSample, report: OpReport) -> str:
    """One-line summary of an accepted fix. Rate limiting is left to the caller."""
    return (
        f"Latest GPS (lat, lon, alt): {sample.position.latitude}, "
        f"{sample.position.longitude}, {sample.position.altitude}; "
        f"UTM (x, y): {report.metrics['easting']:.3f}, {report.metrics['northing']:.3f}"
    )


def _run(
    context: GeonavContext,
    sample: NavigationSample,
    options: GeonavOptions,
) -> Tuple[GeonavContext, List[OutputSample], OpReport]:
    if context.state is DatumState.AWAITING_DATUM:
        return context, [], _dropped(
            DROP_NO_DATUM, "No datum established; discarding sample", sample.stamp
        )

    try:
        validate_sample(sample)
    except SampleValidationError as exc:
        return context, [], _dropped(DROP_INVALID_SAMPLE, str(exc), sample.stamp)

    notices = []
    if has_empty_frame(sample) and not context.empty_frame_noted:
        notices.append(
            "Odometry message has empty frame_id. "
            "Will assume navsat device is mounted at robot's origin."
        )
        context = context.with_empty_frame_noted()

    try:
        nav = build_nav_transform(sample)
    except ProjectionBoundaryError as exc:
        report = _dropped(DROP_PROJECTION_BOUNDARY, str(exc), sample.stamp)
        report.notices.extend(notices)
        return context, [], report
    except ValueError as exc:
        report = _dropped(DROP_BAD_ORIENTATION, f"Bad orientation: {exc}", sample.stamp)
        report.notices.extend(notices)
        return context, [], report

    context = context.with_nav(nav.utm_to_nav, nav.utm_to_nav_inverse)
    utm_output, world_output = compose_outputs(context, sample, options)

    report = OpReport(
        name="ProcessSample",
        accepted=True,
        notices=notices,
        metrics={
            "stamp": sample.stamp,
            "easting": nav.planar.easting,
            "northing": nav.planar.northing,
            "zone": nav.planar.zone,
            "zone_matches_datum": nav.planar.zone_number == parse_zone(context.datum_zone)[0],
            "world_position": world_output.position.tolist(),
        },
    )
    return context, [utm_output, world_output], report


def process_samples(
    context: GeonavContext,
    samples,
    options: GeonavOptions,
    logger=None,
) -> Tuple[GeonavContext, List[OutputSample], List[OpReport]]:
    """Fold a sequence of samples through process_sample() in order."""
    outputs: List[OutputSample] = []
    reports: List[OpReport] = []
    for sample in samples:
        context, out, report = process_sample(context, sample, options, logger=logger)
        outputs.extend(out)
        reports.append(report)
    return context, outputs, reports
