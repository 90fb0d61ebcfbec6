"""
Tests for OpReport and the node status record.
"""

import json

import pytest

from geonav_transform.common.op_report import OpReport
from geonav_transform.core import GeonavContext
from geonav_transform.diagnostics.status import StatusCounters, build_status, check_status


class TestOpReport:

    def test_validate_accepted_with_reason(self):
        with pytest.raises(ValueError):
            OpReport(name="ProcessSample", accepted=True, drop_reason="x").validate()

    def test_validate_dropped_without_reason(self):
        with pytest.raises(ValueError):
            OpReport(name="ProcessSample", accepted=False).validate()

    def test_json(self, active_context, make_sample, options):
        from geonav_transform.core import process_sample
        _, _, report = process_sample(active_context, make_sample(), options)
        data = json.loads(report.to_json())
        assert data["name"] == "ProcessSample"
        assert data["accepted"] is True
        assert data["metrics"]["zone"] == "15T"
        assert len(data["metrics"]["world_position"]) == 3

    def test_emit_routes_levels(self):
        calls = []

        class Logger:
            def info(self, msg):
                calls.append(("info", msg))

            def warn(self, msg):
                calls.append(("warn", msg))

        OpReport(name="x", accepted=True, notices=["n"], warnings=["w"]).emit(Logger())
        assert calls == [("info", "n"), ("warn", "w")]


class TestStatus:

    def test_awaiting_datum(self):
        counters = StatusCounters(node_start_time=0.0)
        status = build_status(GeonavContext(), counters, {}, now=1.0)
        assert status["state"] == "AWAITING_DATUM"
        assert status["samples_processed"] == 0

    def test_counts(self, active_context):
        counters = StatusCounters(node_start_time=0.0)
        counters.record(True, now=8.0)
        counters.record(False, "invalid_sample")
        counters.record(False, "invalid_sample")
        slot_stats = {"received": 5, "superseded": 2}
        status = build_status(active_context, counters, slot_stats, now=10.0)
        assert status["state"] == "ACTIVE"
        assert status["datum_zone"] == "15T"
        assert status["samples_received"] == 5
        assert status["samples_superseded"] == 2
        assert status["samples_dropped"] == 2
        assert status["drop_reasons"] == {"invalid_sample": 2}
        assert status["last_output_age_sec"] == pytest.approx(2.0)
        assert json.loads(check_status(status, counters))["samples_processed"] == 1

    def test_warns_once_without_output(self):
        warnings = []

        class Logger:
            def warn(self, msg):
                warnings.append(msg)

        counters = StatusCounters(node_start_time=0.0)
        for now in (20.0, 25.0):
            status = build_status(GeonavContext(), counters, {}, now=now)
            check_status(status, counters, logger=Logger())
        assert len(warnings) == 1
        assert counters.warned_no_output
