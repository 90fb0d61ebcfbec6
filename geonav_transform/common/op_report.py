"""
Operation report for the geonav core.

Every core operation (datum establishment, sample processing) returns an
OpReport alongside its result. The report is the single place where the pure
core records what happened:
1. Whether the input was accepted or dropped (and why)
2. Warnings and informational notices that the caller should log
3. Metrics useful for debugging (UTM coordinates, zone, rotations)

The node forwards warnings/notices to its ROS logger and can publish the
JSON form on a diagnostics topic.
"""

import json
import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class OpReport:
    """
    Audit record for one core operation.

    Attributes:
        name: Operation name (e.g., "EstablishDatum", "ProcessSample")
        accepted: True if the input produced outputs / state changes
        drop_reason: Machine-readable reason when accepted is False
        warnings: Messages to log at WARN level
        notices: Messages to log at INFO level
        metrics: Additional metrics for debugging
        notes: Human-readable explanation
        timestamp: When the report was generated
    """
    name: str
    accepted: bool
    drop_reason: Optional[str] = None
    warnings: list[str] = field(default_factory=list)
    notices: list[str] = field(default_factory=list)
    metrics: dict = field(default_factory=dict)
    notes: Optional[str] = None
    timestamp: float = field(default_factory=time.time)

    def validate(self) -> None:
        """
        Validate the report is internally consistent.

        Raises ValueError if validation fails.
        """
        if self.accepted and self.drop_reason is not None:
            raise ValueError("Accepted op cannot declare a drop reason.")
        if not self.accepted and not self.drop_reason:
            raise ValueError("Dropped op must declare a drop reason.")

    def emit(self, logger) -> None:
        """Forward notices/warnings to a ROS-style logger (None = silent)."""
        if logger is None:
            return
        for msg in self.notices:
            logger.info(msg)
        for msg in self.warnings:
            logger.warn(msg)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "accepted": self.accepted,
            "drop_reason": self.drop_reason,
            "warnings": list(self.warnings),
            "notices": list(self.notices),
            "metrics": dict(self.metrics),
            "notes": self.notes,
            "timestamp": self.timestamp,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)
