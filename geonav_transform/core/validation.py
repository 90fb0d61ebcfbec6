"""
Basic validity checks for incoming navigation samples.

No fusion or outlier rejection happens here; only input that cannot be
projected at all is refused.
"""

from __future__ import annotations

import math

from geonav_transform.common.errors import SampleValidationError
from geonav_transform.common.types import NavigationSample


def validate_sample(sample: NavigationSample) -> None:
    """
    Raise SampleValidationError if any position component is NaN or infinite.

    The three fields are checked together; one bad component rejects the fix.
    """
    p = sample.position
    bad = [
        name
        for name, value in (
            ("latitude", p.latitude),
            ("longitude", p.longitude),
            ("altitude", p.altitude),
        )
        if not math.isfinite(value)
    ]
    if bad:
        raise SampleValidationError(f"Bad GPS! Won't transform (non-finite {', '.join(bad)})")


def has_empty_frame(sample: NavigationSample) -> bool:
    """Empty frame_id is informational only: the sensor is assumed at the robot origin."""
    return not sample.frame_id
