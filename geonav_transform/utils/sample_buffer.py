"""
Latest-sample slot.

The node receives navigation fixes faster or slower than it publishes. Only
the newest fix matters: a new arrival replaces any pending one, and the timer
takes whatever is parked once per tick.
"""

from collections import deque
from typing import Any, Optional, Tuple

from geonav_transform.common import constants


class LatestSampleSlot:
    """
    Single-slot buffer for timestamped data.

    Handles the common pattern of:
    1. Parking the newest sample from a subscription callback
    2. Counting samples superseded before they were consumed
    3. Warning (rate-limited) when the consumer finds nothing to do
    """

    def __init__(self, name: str, logger=None):
        """
        Args:
            name: Slot name for logging
            logger: Optional ROS logger for warnings
        """
        self.name = name
        self.buffer: deque = deque(maxlen=1)
        self.logger = logger

        self.received = 0
        self.consumed = 0
        self.superseded = 0
        self.empty_polls = 0

        self._warning_count = 0
        self._max_warnings = constants.MAX_WARNING_COUNT

    def put(self, timestamp: float, data: Any) -> bool:
        """
        Park data, replacing any pending entry.

        Returns True if a pending entry was superseded.
        """
        replaced = bool(self.buffer)
        if replaced:
            self.superseded += 1
        self.buffer.append((timestamp, data))
        self.received += 1
        return replaced

    def take(self) -> Optional[Tuple[float, Any]]:
        """Remove and return (timestamp, data), or None if nothing is pending."""
        if not self.buffer:
            self.empty_polls += 1
            if self.logger and self.received == 0 and self._warning_count < self._max_warnings:
                self.logger.debug(f"SampleSlot[{self.name}]: no sample received yet")
                self._warning_count += 1
            return None
        self.consumed += 1
        return self.buffer.popleft()

    def peek(self) -> Optional[Tuple[float, Any]]:
        return self.buffer[0] if self.buffer else None

    def clear(self):
        """Drop any pending entry and reset statistics."""
        self.buffer.clear()
        self.received = 0
        self.consumed = 0
        self.superseded = 0
        self.empty_polls = 0
        self._warning_count = 0

    def stats(self) -> dict:
        return {
            "received": self.received,
            "consumed": self.consumed,
            "superseded": self.superseded,
            "empty_polls": self.empty_polls,
            "pending": len(self.buffer),
        }

    def __len__(self) -> int:
        return len(self.buffer)

    def is_empty(self) -> bool:
        return len(self.buffer) == 0
