"""Thin CLI entry point: builds a SplitterConfig and runs the batch."""

import argparse
import logging
import sys
from pathlib import Path

from bwfsplit.batch import run_batch
from bwfsplit.config import DEFAULT_INPUT_DIR, DEFAULT_OUTPUT_DIR, SplitterConfig
from bwfsplit.errors import ToolNotFoundError

logger = logging.getLogger("bwfsplit")


class JoinedPathAction(argparse.Action):
    """Collect every token up to the next flag into one path.

    Lets ``-i My Recordings`` mean the directory ``My Recordings``.
    """

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, Path(" ".join(values)))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bwfsplit",
        description="Split long broadcast-wave files into segments with continuous timecode.",
    )
    parser.add_argument("-i", dest="input_dir", nargs="+", action=JoinedPathAction,
                        default=DEFAULT_INPUT_DIR, help="Input directory (default: inputFiles)")
    parser.add_argument("-o", dest="output_dir", nargs="+", action=JoinedPathAction,
                        default=DEFAULT_OUTPUT_DIR, help="Output directory (default: outputFiles)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log ffmpeg commands and probe data")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print(f"Using input directory: {args.input_dir}")
    print(f"Using output directory: {args.output_dir}")

    if not args.input_dir.is_dir():
        print(f'Error: input directory "{args.input_dir}" does not exist.', file=sys.stderr)
        sys.exit(1)

    config = SplitterConfig(input_dir=args.input_dir, output_dir=args.output_dir)
    try:
        report = run_batch(config)
    except ToolNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except Exception:
        logger.exception("Error in main process")
        sys.exit(1)

    print()
    print(f"Split: {len(report.split)} of {len(report.large)} large file(s)")
    print(f"Copied: {len(report.copied)} of {len(report.small)} small file(s)")
    for outcome in report.failed:
        print(f"  FAILED {outcome.name}: {outcome.error}")

    if not report.ok:
        sys.exit(1)
    print("All files processed.")


if __name__ == "__main__":
    main()
