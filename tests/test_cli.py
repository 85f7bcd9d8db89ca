"""Tests for the command-line entry point."""

from pathlib import Path
from unittest.mock import patch

import pytest

from bwfsplit.cli import build_parser, main
from bwfsplit.errors import ToolNotFoundError
from bwfsplit.models import BatchReport, FileOutcome


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.input_dir == Path("inputFiles")
        assert args.output_dir == Path("outputFiles")
        assert args.verbose is False

    def test_multi_token_paths_joined(self):
        args = build_parser().parse_args(
            ["-i", "/Volumes/Sound", "Roll", "3", "-o", "/tmp/split", "out"]
        )
        assert args.input_dir == Path("/Volumes/Sound Roll 3")
        assert args.output_dir == Path("/tmp/split out")


class TestMain:
    def test_missing_input_dir_exits_nonzero(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["-i", str(tmp_path / "missing")])
        assert excinfo.value.code == 1
        assert "does not exist" in capsys.readouterr().err

    @patch("bwfsplit.cli.run_batch")
    def test_success(self, mock_run, tmp_path, capsys):
        mock_run.return_value = BatchReport(
            large=["long.wav"],
            small=["short.wav"],
            outcomes=[
                FileOutcome(name="short.wav", action="copy", outputs=1),
                FileOutcome(name="long.wav", action="split", outputs=3),
            ],
        )
        main(["-i", str(tmp_path), "-o", str(tmp_path / "out")])

        config = mock_run.call_args[0][0]
        assert config.input_dir == tmp_path
        assert config.output_dir == tmp_path / "out"
        out = capsys.readouterr().out
        assert "Split: 1 of 1" in out
        assert "Copied: 1 of 1" in out
        assert "All files processed." in out

    @patch("bwfsplit.cli.run_batch")
    def test_file_failure_exits_nonzero(self, mock_run, tmp_path, capsys):
        mock_run.return_value = BatchReport(
            large=["long.wav"],
            outcomes=[FileOutcome(name="long.wav", action="split", ok=False, error="boom")],
        )
        with pytest.raises(SystemExit) as excinfo:
            main(["-i", str(tmp_path)])
        assert excinfo.value.code == 1
        assert "FAILED long.wav: boom" in capsys.readouterr().out

    @patch("bwfsplit.cli.run_batch", side_effect=ToolNotFoundError("ffmpeg not found on PATH"))
    def test_missing_tool(self, mock_run, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["-i", str(tmp_path)])
        assert excinfo.value.code == 1
        assert "ffmpeg not found" in capsys.readouterr().err

    @patch("bwfsplit.cli.run_batch", side_effect=RuntimeError("unexpected"))
    def test_unexpected_error(self, mock_run, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            main(["-i", str(tmp_path)])
        assert excinfo.value.code == 1
