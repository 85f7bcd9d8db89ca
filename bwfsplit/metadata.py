"""
ffprobe output schema and BWF tag expansion.

ffprobe reports the bext description of a broadcast-wave file as a single
``comment`` tag holding ``KEY=VALUE`` lines, and the coding history as one
delimiter-separated string. Both are expanded here into structured fields
before anything downstream looks at them.

Required fields are required in the schema; everything ffprobe may omit is
Optional and checked explicitly by the accessors below.
"""

import json
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from bwfsplit.errors import ProbeParseError

COMMENT_LINE_SEPARATOR = "\r\n"
CODING_HISTORY_DELIMITERS = re.compile(r"[,;\\]")
ESCAPED_CRLF = "\\r\\n"


def _not_available_to_none(value: Any) -> Any:
    # ffprobe prints "N/A" for durations it cannot determine
    if isinstance(value, str) and value.strip() in ("", "N/A"):
        return None
    return value


class FormatTags(BaseModel):
    """Container-level tags. Unknown tags are kept as extra fields."""

    model_config = ConfigDict(extra="allow")

    comment: str | None = None
    time_reference: str | None = None
    coding_history: str | dict[str, str] | None = None

    @field_validator("time_reference", mode="before")
    @classmethod
    def coerce_time_reference(cls, v: Any) -> Any:
        if isinstance(v, int):
            return str(v)
        return v


class ProbeStream(BaseModel):
    model_config = ConfigDict(extra="allow")

    index: int | None = None
    codec_type: str | None = None
    codec_name: str | None = None
    sample_rate: int | None = None
    duration: float | None = None

    @field_validator("sample_rate", "duration", mode="before")
    @classmethod
    def drop_not_available(cls, v: Any) -> Any:
        return _not_available_to_none(v)


class ProbeFormat(BaseModel):
    """
    Format section of the probe result.

    Keys expanded from the ``comment`` tag become extra attributes of this
    model, read back with :meth:`attribute`.
    """

    model_config = ConfigDict(extra="allow")

    filename: str | None = None
    duration: float | None = None
    tags: FormatTags | None = None

    @field_validator("duration", mode="before")
    @classmethod
    def drop_not_available(cls, v: Any) -> Any:
        return _not_available_to_none(v)

    def attribute(self, key: str) -> str | None:
        """Return an expanded comment attribute, or None if it is absent."""
        value = (self.model_extra or {}).get(key)
        if value is None:
            return None
        return str(value)


class ProbeData(BaseModel):
    """Structured ``ffprobe -show_format -show_streams`` output."""

    model_config = ConfigDict(extra="allow")

    format: ProbeFormat
    streams: list[ProbeStream] = []

    @property
    def duration(self) -> float:
        """Duration in seconds of the first stream, else of the container."""
        if self.streams and self.streams[0].duration is not None:
            return self.streams[0].duration
        if self.format.duration is not None:
            return self.format.duration
        raise ProbeParseError(
            "no stream or format duration reported", filepath=self._source()
        )

    @property
    def time_reference(self) -> int:
        """Sample offset since midnight; 0 when the file carries none."""
        tags = self.format.tags
        if tags is None or not tags.time_reference:
            return 0
        try:
            return int(tags.time_reference)
        except ValueError as exc:
            raise ProbeParseError(
                f"time_reference is not an integer: {tags.time_reference!r}",
                filepath=self._source(),
            ) from exc

    def _source(self) -> str:
        return self.format.filename or "<ffprobe output>"

    @property
    def sample_rate(self) -> int | None:
        audio = next((s for s in self.streams if s.codec_type == "audio"), None)
        return audio.sample_rate if audio else None


def parse_comment(comment: str) -> dict[str, str]:
    """Split ``K1=V1\\r\\nK2=V2`` into a mapping. Lines without ``=`` are ignored."""
    parsed: dict[str, str] = {}
    for line in comment.split(COMMENT_LINE_SEPARATOR):
        key, sep, value = line.partition("=")
        if sep and key:
            parsed[key] = value
    return parsed


def parse_coding_history(history: str) -> dict[str, str]:
    """Split a BWF coding history on ``,`` ``;`` or ``\\`` into a mapping.

    Each entry is split on its first ``=``. A trailing escaped CR-LF is
    removed from values; entries with no ``=`` are dropped.
    """
    parsed: dict[str, str] = {}
    for entry in CODING_HISTORY_DELIMITERS.split(history):
        key, sep, value = entry.partition("=")
        if not sep or not key:
            continue
        while value.endswith(ESCAPED_CRLF):
            value = value[: -len(ESCAPED_CRLF)]
        parsed[key] = value.rstrip("\r\n")
    return parsed


def expand_tags(data: dict[str, Any]) -> dict[str, Any]:
    """Merge comment attributes into ``format`` and structure the coding history.

    Returns ``data`` itself when there is no comment to expand.
    """
    fmt = data.get("format")
    if not isinstance(fmt, dict):
        return data
    tags = fmt.get("tags")
    if not isinstance(tags, dict) or not tags.get("comment"):
        return data

    new_tags = dict(tags)
    new_tags["comment"] = ""
    history = tags.get("coding_history")
    if isinstance(history, str) and history:
        new_tags["coding_history"] = parse_coding_history(history)

    new_format = {**fmt, **parse_comment(tags["comment"])}
    new_format["tags"] = new_tags
    return {**data, "format": new_format}


def parse_probe_output(raw: str, filepath: str = "<ffprobe output>") -> ProbeData:
    """Parse ffprobe JSON into a :class:`ProbeData`, expanding BWF tags.

    ``filepath`` names the probed file in error messages.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ProbeParseError(str(exc), filepath=filepath) from exc

    if not isinstance(data, dict):
        raise ProbeParseError(
            f"expected a JSON object, got {type(data).__name__}", filepath=filepath
        )

    try:
        return ProbeData.model_validate(expand_tags(data))
    except ValidationError as exc:
        raise ProbeParseError(str(exc), filepath=filepath) from exc
