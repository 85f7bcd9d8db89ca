"""Per-file pipeline: probe, plan, propagate timecode, cut segments."""

import logging
from pathlib import Path
from typing import Callable

from bwfsplit import ffutil
from bwfsplit.config import SplitterConfig
from bwfsplit.metadata import ProbeData
from bwfsplit.models import SplitResult
from bwfsplit.planner import plan_segments
from bwfsplit.timecode import propagate_timecodes

logger = logging.getLogger(__name__)

# Output tag -> expanded comment attribute it is copied from
TAG_SOURCES = {
    "encoded_by": "sTRK1",
    "sSPEED": "sSPEED",
}


def segment_output_path(input_path: Path, output_dir: Path, segment: int) -> Path:
    """``<output_dir>/<stem>_<segment><suffix>``, segments numbered from 1."""
    return output_dir / f"{input_path.stem}_{segment}{input_path.suffix}"


def override_tags(probe: ProbeData) -> dict[str, str]:
    """Tags to stamp on every segment. Absent source attributes are skipped."""
    tags: dict[str, str] = {}
    for tag, source in TAG_SOURCES.items():
        value = probe.format.attribute(source)
        if value is not None:
            tags[tag] = value
    return tags


def split_file(
    input_path: Path,
    output_dir: Path,
    config: SplitterConfig,
    on_progress: Callable[[int, int], None] | None = None,
) -> SplitResult:
    """Split one BWF file into segments with continuous time_reference.

    Segments are cut one after another; the first failure stops the file and
    leaves already-written segments in place.

    Args:
        input_path: Source .wav file.
        output_dir: Directory that receives the segments.
        config: Run configuration (tool paths, durations, sample rate).
        on_progress: Optional callback(segments_done, segments_total).
    """
    probe = ffutil.probe(input_path, ffprobe=config.ffprobe)
    logger.debug("Probe result for %s: %s", input_path.name, probe.model_dump())

    duration = probe.duration
    segments = plan_segments(duration, config.max_segment_duration)
    logger.info("%s: duration %.3f sec, max segment %d sec, %d segment(s)",
                input_path.name, duration, config.max_segment_duration, len(segments))

    if probe.sample_rate is not None and probe.sample_rate != config.sample_rate:
        logger.warning(
            "%s: stream sample rate is %d Hz, time_reference is advanced at %d Hz",
            input_path.name, probe.sample_rate, config.sample_rate,
        )

    initial = probe.time_reference
    logger.info("%s: starting with time_reference %d", input_path.name, initial)
    timecodes = propagate_timecodes(
        initial,
        len(segments),
        max_segment_duration=config.max_segment_duration,
        sample_rate=config.sample_rate,
    )
    tags = override_tags(probe)

    result = SplitResult(source=input_path, segments=segments, timecodes=timecodes)
    for seg, tc in zip(segments, timecodes):
        output_path = segment_output_path(input_path, output_dir, seg.index)
        logger.info("%s: segment %d timecode %s -> %s",
                    input_path.name, seg.index, tc.clock, output_path.name)
        ffutil.cut_segment(
            input_path,
            output_path,
            seg.start,
            seg.end,
            tc.samples,
            tags=tags,
            ffmpeg=config.ffmpeg,
            segment=seg.index,
        )
        result.outputs.append(output_path)
        if on_progress:
            on_progress(seg.index, len(segments))

    logger.info("Split %s into %d segment(s)", input_path.name, len(result.outputs))
    return result
