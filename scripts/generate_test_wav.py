#!/usr/bin/env python3
"""Generate a synthetic broadcast-wave file for bwfsplit pipeline testing.

Produces a 48 kHz stereo tone with a bext chunk carrying:
  time_reference  starting sample (default: 86000 s into the day, so a
                  split with a small max segment duration wraps midnight)
  comment         sSPEED / sTRK1 lines, as written by field recorders

Usage: generate_test_wav.py [OUTPUT] [DURATION_SECONDS]
"""

import subprocess
import sys
from pathlib import Path

SAMPLE_RATE = 48000


def generate_test_wav(output: Path, duration: float = 60.0,
                      time_reference: int = 86000 * SAMPLE_RATE) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)

    comment = "\r\n".join([
        "sSPEED=025.000-ND",
        "sTRK1=Boom",
        "sTRK2=Lav",
    ])

    cmd = [
        "ffmpeg", "-y",
        "-f", "lavfi",
        "-i", f"sine=f=440:d={duration}:sample_rate={SAMPLE_RATE}",
        "-ac", "2",
        "-c:a", "pcm_s24le",
        "-metadata", f"time_reference={time_reference}",
        "-metadata", f"comment={comment}",
        "-metadata", "coding_history=A=PCM,F=48000,W=24,M=stereo,T=synthetic",
        "-write_bext", "1",
        str(output),
    ]
    subprocess.run(cmd, check=True)
    print(f"Generated: {output}")


if __name__ == "__main__":
    out = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("inputFiles/synthetic.wav")
    dur = float(sys.argv[2]) if len(sys.argv) > 2 else 60.0
    generate_test_wav(out, dur)
