"""Tests for CLI module."""

import argparse
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from shell_test_runner.cli import build_config, build_parser, main
from shell_test_runner.errors import ConfigurationError, SummaryWriteError


def parse(*args: str) -> argparse.Namespace:
    return build_parser().parse_args(list(args))


class TestBuildConfig:
    """Tests for build_config function."""

    def test_builds_config(self) -> None:
        args = parse("--jobs", "3", "--outdir", "out", "t00*.sh", "t1*.sh")
        argv = ["shell-test-runner", "--jobs", "3", "--outdir", "out", "t00*.sh"]

        config = build_config(args, argv)

        assert config.jobs == 3
        assert config.outdir == Path("out")
        assert config.patterns == ("t00*.sh", "t1*.sh")
        assert config.argv == tuple(argv)

    def test_requires_outdir(self) -> None:
        with pytest.raises(ConfigurationError, match="must provide --outdir"):
            build_config(parse("t*.sh"), [])

    def test_requires_pattern(self) -> None:
        with pytest.raises(ConfigurationError, match="provide glob"):
            build_config(parse("--outdir", "out"), [])


class TestMain:
    """Tests for main function."""

    def test_exits_zero_after_run(self) -> None:
        with (
            patch("shell_test_runner.cli.run", new_callable=AsyncMock, return_value=0),
            pytest.raises(SystemExit) as exc_info,
        ):
            main(["shell-test-runner", "--outdir", "out", "t*.sh"])

        assert exc_info.value.code == 0

    def test_missing_outdir_is_fatal(self, caplog: pytest.LogCaptureFixture) -> None:
        with (
            patch("shell_test_runner.cli.run", new_callable=AsyncMock) as mock_run,
            pytest.raises(SystemExit) as exc_info,
        ):
            main(["shell-test-runner", "t*.sh"])

        assert exc_info.value.code == 1
        assert "must provide --outdir." in caplog.text
        mock_run.assert_not_called()

    def test_invalid_jobs_is_fatal(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["shell-test-runner", "--jobs", "0", "--outdir", "out", "t*.sh"])

        assert exc_info.value.code == 1

    def test_runner_error_is_fatal(self, caplog: pytest.LogCaptureFixture) -> None:
        with (
            patch(
                "shell_test_runner.cli.run",
                new_callable=AsyncMock,
                side_effect=SummaryWriteError("cannot write summary"),
            ),
            pytest.raises(SystemExit) as exc_info,
        ):
            main(["shell-test-runner", "--outdir", "out", "t*.sh"])

        assert exc_info.value.code == 1
        assert "cannot write summary" in caplog.text
