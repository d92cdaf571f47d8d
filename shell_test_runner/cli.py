"""CLI entry point for running shell test scripts in parallel."""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from shell_test_runner.discovery import discover_tests
from shell_test_runner.errors import ConfigurationError, RunnerError
from shell_test_runner.models.config import DEFAULT_SHELL, RunConfig, default_jobs
from shell_test_runner.reporting import (
    format_final_line,
    log_results_summary,
    write_summary,
)
from shell_test_runner.scheduler import TestScheduler

log = logging.getLogger("shell_test_runner")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run shell test scripts in parallel and keep their logs",
    )
    parser.add_argument(
        "--jobs",
        type=int,
        default=default_jobs(),
        help="Number of tests to run at once (default: number of CPUs)",
    )
    parser.add_argument(
        "--outdir",
        default="",
        help="Directory for per-test logs and the summary file",
    )
    parser.add_argument(
        "--shell",
        default=DEFAULT_SHELL,
        help=f"Interpreter used to run each script (default: {DEFAULT_SHELL})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "patterns",
        nargs="*",
        metavar="PATTERN",
        help="Glob pattern selecting test scripts, e.g. 't00*.sh'",
    )
    return parser


def build_config(args: argparse.Namespace, argv: Sequence[str]) -> RunConfig:
    """Validate parsed arguments into a run configuration.

    Raises:
        ConfigurationError: If the output directory or patterns are missing.
        ValidationError: If a value is out of range.

    """
    if not args.outdir:
        raise ConfigurationError("must provide --outdir.")
    if not args.patterns:
        raise ConfigurationError("usage: provide glob")

    return RunConfig(
        outdir=args.outdir,
        patterns=tuple(args.patterns),
        jobs=args.jobs,
        shell=args.shell,
        argv=tuple(argv),
    )


async def run(config: RunConfig) -> int:
    """Run the selected tests and return the exit code.

    Failing tests do not change the exit code; only fatal errors do, and
    those are raised.
    """
    names = discover_tests(config.patterns)
    log.debug("Discovered %d test script(s)", len(names))

    scheduler = TestScheduler(config=config)
    report = await scheduler.run(names)

    write_summary(report, config.summary_path)
    log_results_summary(log, report)
    print(format_final_line(report))
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    argv = list(sys.argv if argv is None else argv)
    args = build_parser().parse_args(argv[1:])

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = build_config(args, argv)
        exit_code = asyncio.run(run(config))
    except (RunnerError, ValidationError) as exc:
        log.error("%s", exc)
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
