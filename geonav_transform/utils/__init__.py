"""Utility helpers for the geonav_transform node."""

from geonav_transform.utils.sample_buffer import LatestSampleSlot

__all__ = ["LatestSampleSlot"]
