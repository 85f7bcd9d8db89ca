"""
Error types for bwfsplit.

All errors inherit from SplitterError so callers can catch one type.
Each failure is scoped to a single file; the batch orchestrator records
it and moves on.
"""


class SplitterError(Exception):
    """Base exception for all bwfsplit failures."""
    pass


class ToolNotFoundError(SplitterError):
    """Raised when ffmpeg or ffprobe cannot be located or executed."""
    pass


class ProbeError(SplitterError):
    """Raised when ffprobe cannot start or exits non-zero."""

    def __init__(self, filepath: str, reason: str):
        self.filepath = filepath
        self.reason = reason
        super().__init__(f"Failed to probe {filepath}: {reason}")


class ProbeParseError(ProbeError):
    """Raised when ffprobe output is not the JSON document we expect."""

    def __init__(self, reason: str, filepath: str = "<ffprobe output>"):
        super().__init__(filepath, f"could not parse ffprobe output: {reason}")


class SegmentExecutionError(SplitterError):
    """Raised when ffmpeg fails while cutting a segment."""

    def __init__(self, output_path: str, segment: int, reason: str):
        self.output_path = output_path
        self.segment = segment
        self.reason = reason
        super().__init__(f"Segment {segment} ({output_path}) failed: {reason}")
