"""
Tests for the latest-sample slot used between the subscription and the timer.
"""

from geonav_transform.utils.sample_buffer import LatestSampleSlot


class TestLatestSampleSlot:

    def test_empty_take(self):
        slot = LatestSampleSlot("nav")
        assert slot.take() is None
        assert slot.is_empty()
        assert slot.stats()["empty_polls"] == 1

    def test_put_take(self):
        slot = LatestSampleSlot("nav")
        assert slot.put(1.0, "a") is False
        assert len(slot) == 1
        assert slot.take() == (1.0, "a")
        assert slot.take() is None

    def test_newest_wins(self):
        """Only the latest sample survives; older ones are counted as superseded."""
        slot = LatestSampleSlot("nav")
        slot.put(1.0, "a")
        assert slot.put(2.0, "b") is True
        slot.put(3.0, "c")
        assert slot.peek() == (3.0, "c")
        assert slot.take() == (3.0, "c")
        stats = slot.stats()
        assert stats["received"] == 3
        assert stats["superseded"] == 2
        assert stats["consumed"] == 1
        assert stats["pending"] == 0

    def test_clear(self):
        slot = LatestSampleSlot("nav")
        slot.put(1.0, "a")
        slot.put(2.0, "b")
        slot.clear()
        assert slot.is_empty()
        assert slot.stats()["superseded"] == 0

    def test_debug_log_rate_limited(self):
        class Logger:
            def __init__(self):
                self.count = 0

            def debug(self, msg):
                self.count += 1

        logger = Logger()
        slot = LatestSampleSlot("nav", logger=logger)
        for _ in range(50):
            slot.take()
        assert logger.count == 10
