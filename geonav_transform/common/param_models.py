"""
Pydantic models for geonav_transform parameters.

One flat model mirrors the ROS parameters declared by the node. The datum is
kept as a raw list here; it is parsed separately by config.parse_datum() so a
bad datum degrades instead of failing validation.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from geonav_transform.common.constants import (
    DEFAULT_BASE_LINK_FRAME,
    DEFAULT_FREQUENCY_HZ,
    DEFAULT_STATUS_PERIOD_SEC,
    DEFAULT_WORLD_FRAME,
)
from geonav_transform.core.state import CovarianceRotation


class GeonavParams(BaseModel):
    """Validated node parameters."""

    model_config = ConfigDict(extra="ignore")

    frequency: float = Field(DEFAULT_FREQUENCY_HZ, gt=0.0)
    broadcast_utm_transform: bool = False
    zero_altitude: bool = False
    datum: Optional[List[Any]] = None
    world_frame: str = DEFAULT_WORLD_FRAME
    base_link_frame: str = DEFAULT_BASE_LINK_FRAME
    tf_prefix: str = ""
    covariance_rotation: CovarianceRotation = CovarianceRotation.IDENTITY
    publish_reports: bool = False
    status_period_sec: float = Field(DEFAULT_STATUS_PERIOD_SEC, gt=0.0)

    @field_validator("world_frame", "base_link_frame")
    @classmethod
    def _frame_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("frame name must not be empty")
        return value

    @field_validator("datum", mode="before")
    @classmethod
    def _datum_as_list(cls, value):
        # ROS hands over arrays as tuples; an unset parameter may arrive as []
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return list(value) or None
        return [value]

    def prefixed_world_frame(self) -> str:
        return join_frame(self.tf_prefix, self.world_frame)

    def prefixed_base_link_frame(self) -> str:
        return join_frame(self.tf_prefix, self.base_link_frame)


def join_frame(prefix: str, frame: str) -> str:
    """tf-style prefixing: "robot1" + "odom" -> "robot1/odom"."""
    prefix = prefix.strip("/")
    frame = frame.lstrip("/")
    if not prefix:
        return frame
    return f"{prefix}/{frame}"
