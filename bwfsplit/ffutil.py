"""FFmpeg/ffprobe subprocess helpers."""

import logging
import subprocess
from pathlib import Path

from bwfsplit.errors import ProbeError, SegmentExecutionError
from bwfsplit.metadata import ProbeData, parse_probe_output

logger = logging.getLogger(__name__)

# Only the end of ffmpeg's stderr is useful in an error message
STDERR_TAIL_CHARS = 2000


def _tail(text: str | None) -> str:
    if not text:
        return ""
    return text.strip()[-STDERR_TAIL_CHARS:]


def format_seconds(value: float) -> str:
    """Format a time offset for ffmpeg without losing precision."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def probe(input_path: Path, ffprobe: str = "ffprobe") -> ProbeData:
    """Extract format and stream metadata via ffprobe."""
    cmd = [
        ffprobe,
        "-v", "error",
        "-print_format", "json",
        "-show_format",
        "-show_streams",
        str(input_path),
    ]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as exc:
        raise ProbeError(str(input_path), f"failed to start ffprobe: {exc}") from exc

    if result.returncode != 0:
        raise ProbeError(
            str(input_path),
            f"ffprobe exited with code {result.returncode}: {_tail(result.stderr)}",
        )

    data = parse_probe_output(result.stdout, filepath=str(input_path))
    if data.format.filename is None:
        data.format.filename = str(input_path)
    return data


def build_cut_command(
    input_path: Path,
    output_path: Path,
    start: float,
    end: float,
    time_reference: int,
    tags: dict[str, str] | None = None,
    ffmpeg: str = "ffmpeg",
) -> list[str]:
    """Stream-copy ``[start, end]`` into a new BWF with overridden metadata."""
    cmd = [
        ffmpeg,
        "-ss", format_seconds(start),
        "-to", format_seconds(end),
        "-i", str(input_path),
        "-c", "copy",
        "-map_metadata", "0",
        "-metadata", f"time_reference={time_reference}",
    ]
    for key, value in (tags or {}).items():
        cmd += ["-metadata", f"{key}={value}"]
    cmd += ["-write_bext", "1", "-y", str(output_path)]
    return cmd


def cut_segment(
    input_path: Path,
    output_path: Path,
    start: float,
    end: float,
    time_reference: int,
    tags: dict[str, str] | None = None,
    ffmpeg: str = "ffmpeg",
    segment: int = 1,
) -> Path:
    """Run ffmpeg for one segment and wait for it to exit.

    Raises:
        SegmentExecutionError: If ffmpeg cannot start or exits non-zero.
    """
    cmd = build_cut_command(
        input_path, output_path, start, end, time_reference, tags=tags, ffmpeg=ffmpeg
    )
    logger.debug("Executing: %s", subprocess.list2cmdline(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as exc:
        raise SegmentExecutionError(
            str(output_path), segment, f"failed to start ffmpeg: {exc}"
        ) from exc

    if result.returncode != 0:
        raise SegmentExecutionError(
            str(output_path),
            segment,
            f"ffmpeg exited with code {result.returncode}: {_tail(result.stderr)}",
        )
    return output_path
