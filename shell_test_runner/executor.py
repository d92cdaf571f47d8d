"""Run a single test script and record its output.

The executor never raises for problems with the test itself. Failing to
create the log, failing to start the interpreter and a non-zero exit all end
up as a failed outcome on the returned result.
"""

import asyncio
import logging
import signal
from pathlib import Path
from typing import BinaryIO

from shell_test_runner.models.config import DEFAULT_SHELL
from shell_test_runner.models.result import CREATE_ERROR, ExecutionOutcome, TestResult

log = logging.getLogger(__name__)

# Index from the end of the stdout lines used as the summary line.
SUMMARY_LINE_FROM_END = 3


async def execute(
    name: str,
    log_path: Path,
    shell: str = DEFAULT_SHELL,
) -> TestResult:
    """Run ``shell name`` to completion and write its log to ``log_path``.

    Args:
        name: Path of the test script, not checked for existence
        log_path: File that is created or truncated for this test
        shell: Interpreter used to run the script

    Returns:
        The result of the test, with a one-line summary of its output

    """
    try:
        log_file = log_path.open("wb")
    except OSError as exc:
        log.warning("Cannot create log file for %s: %s", name, exc)
        return TestResult(
            name=name,
            outcome=ExecutionOutcome.failure(CREATE_ERROR),
            summary=CREATE_ERROR,
        )

    with log_file:
        log.debug("Starting %s", name)
        outcome, stdout, stderr = await run_script(name, shell)
        log.debug("Finished %s: %s", name, outcome.describe())
        try:
            write_log(log_file, outcome, stdout, stderr)
        except OSError as exc:
            log.warning("Cannot write log file for %s: %s", name, exc)

    return TestResult(
        name=name,
        outcome=outcome,
        summary=derive_summary(stdout, succeeded=outcome.succeeded),
    )


async def run_script(name: str, shell: str) -> tuple[ExecutionOutcome, bytes, bytes]:
    """Run a script and capture stdout and stderr separately."""
    try:
        process = await asyncio.create_subprocess_exec(
            shell,
            name,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        return ExecutionOutcome.failure(str(exc)), b"", b""

    stdout, stderr = await process.communicate()
    return outcome_from_returncode(process.returncode), stdout, stderr


def outcome_from_returncode(returncode: int | None) -> ExecutionOutcome:
    """Classify a process exit status.

    Negative codes mean the process was killed by that signal.
    """
    if returncode == 0:
        return ExecutionOutcome.success()
    if returncode is None:
        return ExecutionOutcome.failure("exit status unknown")
    if returncode < 0:
        return ExecutionOutcome.failure(f"signal: {describe_signal(-returncode)}")
    return ExecutionOutcome.failure(f"exit status {returncode}")


def describe_signal(signum: int) -> str:
    try:
        description = signal.strsignal(signum)
    except ValueError:
        description = None
    return description.lower() if description else str(signum)


def write_log(
    log_file: BinaryIO,
    outcome: ExecutionOutcome,
    stdout: bytes,
    stderr: bytes,
) -> None:
    """Write the exit status header followed by both captured streams."""
    log_file.write(f"*** EXIT: {outcome.describe()} ***\n\n".encode())
    log_file.write(b"*** STDOUT: ***\n\n")
    log_file.write(stdout)
    log_file.write(b"\n\n*** STDERR: ***\n\n")
    log_file.write(stderr)


def derive_summary(stdout: bytes, *, succeeded: bool) -> str:
    """Build the one-line summary of a test from its stdout.

    The output is split on line feeds; the empty piece after a terminating
    line feed is not a line. With at least three lines the third line from
    the end is used, otherwise the body is empty. The body is prefixed with
    "ok: " or "error: ".

    Examples:
        >>> derive_summary(b"a\\nb\\nc\\n", succeeded=True)
        'ok: a'
        >>> derive_summary(b"a\\nb\\n", succeeded=False)
        'error: '

    """
    lines = stdout.split(b"\n")
    if lines[-1] == b"":
        lines.pop()

    body = ""
    if len(lines) >= SUMMARY_LINE_FROM_END:
        body = lines[-SUMMARY_LINE_FROM_END].decode("utf-8", errors="replace")

    prefix = "ok: " if succeeded else "error: "
    return prefix + body
