"""Segment planner: cut a stream duration into fixed-length ranges."""

import math

from bwfsplit.config import MAX_SEGMENT_DURATION
from bwfsplit.models import SegmentSpan


def segment_count(duration: float, max_segment_duration: int = MAX_SEGMENT_DURATION) -> int:
    """Number of segments needed; a zero-length stream still gets one."""
    if max_segment_duration <= 0:
        raise ValueError(f"max_segment_duration must be positive, got {max_segment_duration}")
    if not math.isfinite(duration):
        raise ValueError(f"duration must be finite, got {duration}")
    if duration < 0:
        raise ValueError(f"duration must not be negative, got {duration}")
    return max(1, math.ceil(duration / max_segment_duration))


def plan_segments(
    duration: float, max_segment_duration: int = MAX_SEGMENT_DURATION
) -> list[SegmentSpan]:
    """Return contiguous 1-indexed segments covering ``[0, duration]``.

    Every segment but the last is exactly ``max_segment_duration`` long; the
    last one ends at ``duration`` itself.
    """
    count = segment_count(duration, max_segment_duration)

    segments: list[SegmentSpan] = []
    for i in range(count):
        start = i * max_segment_duration
        end = duration if i == count - 1 else start + max_segment_duration
        segments.append(SegmentSpan(index=i + 1, start=float(start), end=float(end)))
    return segments
