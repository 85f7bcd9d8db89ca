"""
BWF time_reference propagation.

A time_reference counts samples since midnight, so it lives in a cyclic day
of ``sample_rate * 86400`` samples. Each segment after the first starts one
full ``max_segment_duration`` later than the previous one.
"""

import logging

from bwfsplit.config import MAX_SEGMENT_DURATION, SAMPLE_RATE, SECONDS_PER_DAY
from bwfsplit.models import SegmentTimecode

logger = logging.getLogger(__name__)


def samples_per_day(sample_rate: int = SAMPLE_RATE) -> int:
    return sample_rate * SECONDS_PER_DAY


def advance(timecode: int, samples: int, sample_rate: int = SAMPLE_RATE) -> tuple[int, bool]:
    """Add ``samples`` and wrap into the day. Returns ``(value, wrapped)``."""
    total = timecode + samples
    value = total % samples_per_day(sample_rate)
    return value, value < total


def format_clock(samples: int, sample_rate: int = SAMPLE_RATE) -> str:
    """Render a sample count as HH:MM:SS, truncating partial seconds."""
    total_seconds = (samples // sample_rate) % SECONDS_PER_DAY
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def propagate_timecodes(
    initial: int,
    num_segments: int,
    max_segment_duration: int = MAX_SEGMENT_DURATION,
    sample_rate: int = SAMPLE_RATE,
) -> list[SegmentTimecode]:
    """Compute the starting time_reference of each segment.

    Segment 1 keeps ``initial`` unchanged, even past one day. Every later
    segment advances the previous value by
    ``round(max_segment_duration * sample_rate)`` modulo one day.
    Wraps are logged and flagged on the entry, never fatal.
    """
    if initial < 0:
        raise ValueError(f"time_reference must not be negative, got {initial}")

    step = round(max_segment_duration * sample_rate)
    current, wrapped = initial, False
    if initial >= samples_per_day(sample_rate):
        logger.warning(
            "Initial time_reference %d exceeds one day; later segments wrap into it",
            initial,
        )

    timecodes: list[SegmentTimecode] = []
    for i in range(num_segments):
        if i > 0:
            current, wrapped = advance(current, step, sample_rate)
            if wrapped:
                logger.warning(
                    "time_reference wrapped around 24 hours at segment %d", i + 1
                )
        timecodes.append(
            SegmentTimecode(
                index=i + 1,
                samples=current,
                clock=format_clock(current, sample_rate),
                wrapped=wrapped,
            )
        )
    return timecodes
