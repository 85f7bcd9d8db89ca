"""Shared data types used across bwfsplit."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class SegmentSpan:
    """A 1-indexed start/end time range in seconds."""

    index: int
    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass
class SegmentTimecode:
    """The BWF time_reference stamped on one segment, in samples."""

    index: int
    samples: int
    clock: str
    wrapped: bool = False


@dataclass
class SplitResult:
    source: Path
    segments: list[SegmentSpan] = field(default_factory=list)
    timecodes: list[SegmentTimecode] = field(default_factory=list)
    outputs: list[Path] = field(default_factory=list)


@dataclass
class FileOutcome:
    """Result of one unit of batch work (a copy or a split)."""

    name: str
    action: str
    ok: bool = True
    error: str | None = None
    outputs: int = 0


@dataclass
class BatchReport:
    large: list[str] = field(default_factory=list)
    small: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    outcomes: list[FileOutcome] = field(default_factory=list)

    @property
    def copied(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if o.action == "copy" and o.ok]

    @property
    def split(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if o.action == "split" and o.ok]

    @property
    def failed(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return not self.failed
