"""
Tests for datum establishment.

Verifies:
- utm -> world is the projected datum with identity rotation
- Establishing twice from the same input is deterministic
- zero_altitude only affects the broadcast record
- The configured heading is reported, not applied
"""

import numpy as np
import pytest

from geonav_transform.common.constants import UTM_FRAME_ID
from geonav_transform.common.errors import ProjectionBoundaryError
from geonav_transform.common.geometry import RigidTransform, quat_from_rpy
from geonav_transform.common.types import DatumConfig, GeodeticPoint
from geonav_transform.common.utm import project
from geonav_transform.core import (
    DatumState,
    GeonavContext,
    GeonavOptions,
    datum_orientation,
    establish_datum,
    establish_datum_from_config,
)


IDENTITY_Q = np.array([0.0, 0.0, 0.0, 1.0])


class TestEstablishDatum:

    def test_transitions_to_active(self, datum, options):
        ctx = GeonavContext()
        assert ctx.state is DatumState.AWAITING_DATUM
        new_ctx, _, report = establish_datum_from_config(ctx, datum, options)
        assert new_ctx.state is DatumState.ACTIVE
        assert new_ctx.datum_zone == "15T"
        assert report.accepted
        report.validate()
        # Input context is untouched
        assert ctx.state is DatumState.AWAITING_DATUM

    def test_utm_to_world_is_projected_datum(self, datum, options):
        ctx, _, _ = establish_datum_from_config(GeonavContext(), datum, options)
        p = project(45.0, -93.0)
        assert np.allclose(ctx.utm_to_world.translation, [p.easting, p.northing, 0.0])
        assert np.allclose(ctx.utm_to_world.rotation, IDENTITY_Q)

    def test_cached_inverse(self, datum, options):
        ctx, _, _ = establish_datum_from_config(GeonavContext(), datum, options)
        composed = ctx.utm_to_world.compose(ctx.utm_to_world_inverse)
        assert composed.allclose(RigidTransform.identity(), atol=1e-6)

    def test_deterministic(self, datum, options):
        a, rec_a, _ = establish_datum_from_config(GeonavContext(), datum, options)
        b, rec_b, _ = establish_datum_from_config(GeonavContext(), datum, options)
        assert np.array_equal(a.utm_to_world.translation, b.utm_to_world.translation)
        assert np.array_equal(a.utm_to_world.rotation, b.utm_to_world.rotation)
        assert rec_a.translation == rec_b.translation

    def test_second_call_overwrites(self, datum, options):
        ctx, _, _ = establish_datum_from_config(GeonavContext(), datum, options)
        other = DatumConfig(point=GeodeticPoint(-33.86, 151.21, 0.0))
        ctx, _, _ = establish_datum_from_config(ctx, other, options)
        assert ctx.datum_zone == project(-33.86, 151.21).zone

    def test_explicit_orientation_is_used(self, options):
        """establish_datum() itself applies whatever orientation it is given."""
        q = quat_from_rpy(0.0, 0.0, 0.5)
        ctx, record, report = establish_datum(
            GeonavContext(), GeodeticPoint(45.0, -93.0, 0.0), q, options
        )
        assert ctx.utm_to_world.allclose(RigidTransform(ctx.utm_to_world.translation, q))
        assert report.metrics["yaw"] == pytest.approx(0.5)

    def test_out_of_band_datum_raises(self, options):
        with pytest.raises(ProjectionBoundaryError):
            establish_datum_from_config(
                GeonavContext(), DatumConfig(point=GeodeticPoint(85.0, 0.0, 0.0)), options
            )


class TestBroadcastRecord:
    """world -> "utm" record used for the static broadcast."""

    def test_frames(self, datum, options):
        _, record, _ = establish_datum_from_config(GeonavContext(), datum, options, stamp=12.5)
        assert record.parent_frame_id == options.world_frame
        assert record.child_frame_id == UTM_FRAME_ID
        assert record.stamp == 12.5
        assert record.meta["zone"] == "15T"

    def test_zero_altitude_only_affects_broadcast(self):
        """Stored transform keeps the altitude; the broadcast copy drops it."""
        point = DatumConfig(point=GeodeticPoint(45.0, -93.0, 250.0))
        opts = GeonavOptions(zero_altitude=True)
        ctx, record, report = establish_datum_from_config(GeonavContext(), point, opts)
        assert ctx.utm_to_world.translation[2] == 250.0
        assert record.translation[2] == 0.0
        assert report.metrics["broadcast_z"] == 0.0

    def test_altitude_kept_without_zero_altitude(self, options):
        point = DatumConfig(point=GeodeticPoint(45.0, -93.0, 250.0))
        _, record, _ = establish_datum_from_config(GeonavContext(), point, options)
        assert record.translation[2] == 250.0


class TestDatumHeading:
    """Heading is reported and otherwise ignored."""

    def test_small_heading_no_warning(self):
        q, warnings = datum_orientation(DatumConfig(point=GeodeticPoint(45.0, -93.0), heading=0.005))
        assert np.allclose(q, IDENTITY_Q)
        assert warnings == []

    def test_large_heading_warns(self, options):
        datum = DatumConfig(point=GeodeticPoint(45.0, -93.0), heading=1.2)
        ctx, _, report = establish_datum_from_config(GeonavContext(), datum, options)
        assert "Yaw of the datum is ignored!" in report.warnings
        assert np.allclose(ctx.utm_to_world.rotation, IDENTITY_Q)
        assert report.metrics["configured_heading"] == 1.2
        assert report.metrics["yaw"] == pytest.approx(0.0)

    def test_negative_heading_warns(self):
        _, warnings = datum_orientation(DatumConfig(point=GeodeticPoint(45.0, -93.0), heading=-0.02))
        assert warnings == ["Yaw of the datum is ignored!"]

    def test_report_notices(self, datum, options):
        _, _, report = establish_datum_from_config(GeonavContext(), datum, options)
        assert any("Datum (latitude, longitude, altitude)" in n for n in report.notices)
        assert any("zone 15T" in n for n in report.notices)
