"""Batch orchestrator: classify a directory, copy small files, split large ones."""

import logging
import shutil
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Callable

from bwfsplit.config import WAV_EXTENSION, SplitterConfig, resolve_tools
from bwfsplit.errors import SplitterError
from bwfsplit.models import BatchReport, FileOutcome
from bwfsplit.splitter import split_file

logger = logging.getLogger(__name__)


@dataclass
class Classification:
    large: list[Path] = field(default_factory=list)
    small: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)


def scan_directory(input_dir: Path, size_threshold: int) -> Classification:
    """Sort the .wav files directly inside ``input_dir`` by size.

    Subdirectories and anything whose extension is not exactly ``.wav`` are
    skipped. Files of ``size_threshold`` bytes or more are large.
    """
    result = Classification()
    for entry in sorted(input_dir.iterdir()):
        if entry.is_dir() or entry.suffix != WAV_EXTENSION:
            result.skipped.append(entry)
            continue
        if entry.stat().st_size >= size_threshold:
            result.large.append(entry)
        else:
            result.small.append(entry)
    return result


def copy_file(input_path: Path, output_dir: Path) -> Path:
    output_path = output_dir / input_path.name
    shutil.copy2(input_path, output_path)
    return output_path


def _verb(action: str) -> str:
    return "copying" if action == "copy" else "splitting"


def _run_job(name: str, action: str, job: Callable[[], int]) -> FileOutcome:
    """Run one file's work, turning its failure into a FileOutcome."""
    try:
        outputs = job()
    except (SplitterError, OSError, ValueError) as exc:
        logger.error("Error while %s %s: %s", _verb(action), name, exc)
        return FileOutcome(name=name, action=action, ok=False, error=str(exc))
    except Exception as exc:
        logger.exception("Unexpected error while %s %s", _verb(action), name)
        return FileOutcome(name=name, action=action, ok=False,
                           error=f"{type(exc).__name__}: {exc}")
    return FileOutcome(name=name, action=action, outputs=outputs)


def run_batch(config: SplitterConfig) -> BatchReport:
    """Process every .wav in ``config.input_dir`` into ``config.output_dir``.

    Copies and splits run concurrently, one thread per file unless
    ``config.max_workers`` caps it. All of them finish before the report is
    built.

    Raises:
        FileNotFoundError: If the input directory does not exist.
        ToolNotFoundError: If there are files to split but ffmpeg/ffprobe
            cannot be located.
    """
    input_dir = Path(config.input_dir)
    output_dir = Path(config.output_dir)
    if not input_dir.is_dir():
        raise FileNotFoundError(f'Input directory "{input_dir}" does not exist.')

    if not output_dir.exists():
        output_dir.mkdir(parents=True)
        logger.info("Created output directory: %s", output_dir)

    found = scan_directory(input_dir, config.size_threshold)
    report = BatchReport(
        large=[p.name for p in found.large],
        small=[p.name for p in found.small],
        skipped=[p.name for p in found.skipped],
    )
    logger.info("Found %d large file(s) to split, %d to copy, %d skipped",
                len(found.large), len(found.small), len(found.skipped))

    if found.large:
        config = resolve_tools(config)

    def copy_job(path: Path) -> int:
        copy_file(path, output_dir)
        return 1

    def split_job(path: Path) -> int:
        return len(split_file(path, output_dir, config).outputs)

    jobs: list[tuple[str, str, Callable[[], int]]] = []
    for path in found.small:
        jobs.append((path.name, "copy", partial(copy_job, path)))
    for path in found.large:
        jobs.append((path.name, "split", partial(split_job, path)))

    if not jobs:
        return report

    workers = config.max_workers or len(jobs)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(_run_job, name, action, job) for name, action, job in jobs]
        report.outcomes = [f.result() for f in futures]

    logger.info("Copied %d file(s), split %d file(s), %d failure(s)",
                len(report.copied), len(report.split), len(report.failed))
    return report
