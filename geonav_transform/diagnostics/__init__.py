"""Diagnostics for the geonav_transform node."""

from geonav_transform.diagnostics.status import StatusCounters, build_status, check_status

__all__ = ["StatusCounters", "build_status", "check_status"]
