"""Run configuration and external tool discovery."""

import os
import shutil
from dataclasses import dataclass, replace
from pathlib import Path

from bwfsplit.errors import ToolNotFoundError

# Files at or above this size are split; smaller ones are copied as-is.
SIZE_THRESHOLD = 3_840_000_172
MAX_SEGMENT_DURATION = 21000
SAMPLE_RATE = 48000
SECONDS_PER_DAY = 86400
SAMPLES_PER_DAY = SAMPLE_RATE * SECONDS_PER_DAY
WAV_EXTENSION = ".wav"

DEFAULT_INPUT_DIR = Path("inputFiles")
DEFAULT_OUTPUT_DIR = Path("outputFiles")

# Environment variable overrides for the external tools
ENV_FFMPEG = "BWFSPLIT_FFMPEG"
ENV_FFPROBE = "BWFSPLIT_FFPROBE"


@dataclass
class SplitterConfig:
    """Everything a batch run needs to know."""

    input_dir: Path = DEFAULT_INPUT_DIR
    output_dir: Path = DEFAULT_OUTPUT_DIR
    size_threshold: int = SIZE_THRESHOLD
    max_segment_duration: int = MAX_SEGMENT_DURATION
    sample_rate: int = SAMPLE_RATE
    ffmpeg: str = "ffmpeg"
    ffprobe: str = "ffprobe"
    max_workers: int | None = None


def locate_tool(name: str, env_var: str) -> str:
    """
    Resolve an external tool to an executable path.

    Discovery priority:
    1. Environment variable override (a path to the binary)
    2. ``name`` looked up on PATH

    Raises:
        ToolNotFoundError: If the tool is missing or not executable.
    """
    override = os.environ.get(env_var)
    if override:
        path = Path(override)
        if not path.is_file():
            raise ToolNotFoundError(
                f"{name} override from {env_var} does not exist: {override}"
            )
        if not os.access(path, os.X_OK):
            raise ToolNotFoundError(
                f"{name} override from {env_var} is not executable: {override}"
            )
        return str(path)

    found = shutil.which(name)
    if found is None:
        raise ToolNotFoundError(
            f"{name} not found on PATH. Install ffmpeg or set {env_var}."
        )
    return found


def resolve_tools(config: SplitterConfig) -> SplitterConfig:
    """Return a copy of ``config`` with ffmpeg/ffprobe resolved to real paths."""
    return replace(
        config,
        ffmpeg=locate_tool(config.ffmpeg, ENV_FFMPEG),
        ffprobe=locate_tool(config.ffprobe, ENV_FFPROBE),
    )
