"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

from bwfsplit.config import SplitterConfig

PROBE_JSON = {
    "streams": [
        {
            "index": 0,
            "codec_type": "audio",
            "codec_name": "pcm_s24le",
            "sample_rate": "48000",
            "duration": "45000.000000",
        },
    ],
    "format": {
        "filename": "long.wav",
        "duration": "45000.000000",
        "tags": {
            "comment": "sSPEED=025.000-ND\r\nsTRK1=Boom\r\nsTRK2=Lav",
            "time_reference": "0",
            "coding_history": "A=PCM,F=48000,W=24\\r\\n",
        },
    },
}


@pytest.fixture
def probe_json() -> dict:
    return json.loads(json.dumps(PROBE_JSON))


@pytest.fixture
def probe_stdout(probe_json) -> str:
    return json.dumps(probe_json)


@pytest.fixture
def config(tmp_path: Path) -> SplitterConfig:
    input_dir = tmp_path / "in"
    output_dir = tmp_path / "out"
    input_dir.mkdir()
    return SplitterConfig(
        input_dir=input_dir,
        output_dir=output_dir,
        ffmpeg="/usr/bin/ffmpeg",
        ffprobe="/usr/bin/ffprobe",
    )
