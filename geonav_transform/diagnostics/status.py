"""
Node status monitoring.

Builds the periodic status record published on geonav/status and warns once
when the node has been up for a while without producing any output.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from typing import Optional

from geonav_transform.core.state import GeonavContext


STALE_INPUT_WARN_SEC = 15.0


@dataclass
class StatusCounters:
    """Running counts maintained by the node."""
    node_start_time: float = field(default_factory=time.time)
    samples_processed: int = 0
    samples_dropped: int = 0
    drop_reasons: dict = field(default_factory=dict)
    last_output_time: Optional[float] = None
    warned_no_output: bool = False

    def record(self, accepted: bool, drop_reason: Optional[str] = None, now: Optional[float] = None) -> None:
        if accepted:
            self.samples_processed += 1
            self.last_output_time = time.time() if now is None else now
        else:
            self.samples_dropped += 1
            key = drop_reason or "unknown"
            self.drop_reasons[key] = self.drop_reasons.get(key, 0) + 1


def build_status(
    context: GeonavContext,
    counters: StatusCounters,
    slot_stats: dict,
    datum_degraded: bool = False,
    now: Optional[float] = None,
) -> dict:
    """
    Status snapshot.

    Args:
        context: Current core context
        counters: Node counters
        slot_stats: LatestSampleSlot.stats()
        datum_degraded: True if the datum fell back to (0, 0, 0)
        now: Wall time override (tests)
    """
    now = time.time() if now is None else now
    elapsed = now - counters.node_start_time
    output_rate = counters.samples_processed / max(elapsed, 1.0)

    return {
        "timestamp": now,
        "elapsed_sec": elapsed,
        "state": context.state.value,
        "datum_zone": context.datum_zone,
        "datum_degraded": datum_degraded,
        "samples_received": slot_stats.get("received", 0),
        "samples_superseded": slot_stats.get("superseded", 0),
        "samples_processed": counters.samples_processed,
        "samples_dropped": counters.samples_dropped,
        "drop_reasons": dict(counters.drop_reasons),
        "output_rate_hz": round(output_rate, 1),
        "last_output_age_sec": (now - counters.last_output_time) if counters.last_output_time else None,
    }


def check_status(status: dict, counters: StatusCounters, logger=None) -> str:
    """
    Warn once if nothing has been produced after startup; return JSON.
    """
    if (
        logger is not None
        and status["elapsed_sec"] > STALE_INPUT_WARN_SEC
        and counters.samples_processed == 0
        and not counters.warned_no_output
    ):
        counters.warned_no_output = True
        logger.warn(
            "No navigation output after "
            f"{status['elapsed_sec']:.0f}s. "
            "Check: Is odometry/nav being published? Is the datum inside the UTM band?\n"
            f"Stats: received={status['samples_received']}, dropped={status['samples_dropped']}, "
            f"reasons={status['drop_reasons']}"
        )
    return json.dumps(status, sort_keys=True)
