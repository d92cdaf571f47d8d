"""Summary file and final report of a run."""

import logging
from datetime import timedelta
from pathlib import Path

from shell_test_runner.errors import SummaryWriteError
from shell_test_runner.models.result import RunReport

log = logging.getLogger(__name__)


def format_elapsed(elapsed: timedelta) -> str:
    """Format a duration compactly, e.g. ``1h2m3.5s``, ``4.25s`` or ``120ms``."""
    seconds = round(elapsed.total_seconds(), 3)
    if seconds == 0:
        return "0s"
    if abs(seconds) < 1:
        return f"{_trim(seconds * 1000)}ms"

    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    text = f"{_trim(seconds)}s"
    if hours or minutes:
        text = f"{int(minutes)}m{text}"
    if hours:
        text = f"{int(hours)}h{text}"
    return text


def _trim(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


def format_summary(report: RunReport) -> str:
    """Render the summary file contents.

    Two comment lines with the invocation and timing, then one failed test
    per line.
    """
    timestamp = report.finished_at.astimezone().isoformat(timespec="seconds")
    return (
        f"# run [{' '.join(report.argv)}]\n"
        f"# on {timestamp}, elapsed {format_elapsed(report.elapsed)}:\n"
        + "\n".join(report.failures)
    )


def write_summary(report: RunReport, path: Path) -> Path:
    """Write the summary file.

    Raises:
        SummaryWriteError: If the file cannot be written.

    """
    try:
        path.write_text(format_summary(report), encoding="utf-8")
    except OSError as exc:
        raise SummaryWriteError(f"cannot write summary {path}: {exc}") from exc
    log.info("Summary written to %s", path)
    return path


def format_final_line(report: RunReport) -> str:
    return f"{report.failure_count} failures, elapsed {format_elapsed(report.elapsed)}"


def log_results_summary(log: logging.Logger, report: RunReport) -> None:
    """Log the totals and every failed test."""
    log.info(
        "%d/%d test(s) passed in %s",
        report.total - report.failure_count,
        report.total,
        format_elapsed(report.elapsed),
    )
    for name in report.failures:
        log.warning("Failed: %s", name)
