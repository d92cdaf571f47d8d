"""Run many test scripts with a bounded number of workers."""

import asyncio
import functools
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TextIO, TypeAlias

from shell_test_runner.budget import WorkerBudget
from shell_test_runner.errors import NoTestsError, OutputDirectoryError
from shell_test_runner.executor import execute
from shell_test_runner.models.config import RunConfig
from shell_test_runner.models.result import ExecutionOutcome, RunReport, TestResult
from shell_test_runner.progress import ProgressPrinter

log = logging.getLogger(__name__)

Executor: TypeAlias = Callable[[str, Path], Awaitable[TestResult]]


@dataclass(frozen=True, kw_only=True)
class TestScheduler:
    """Dispatches one task per test script and aggregates their results.

    Every task is started right away and waits for a worker slot before
    running its script. Results are collected in completion order.
    """

    __test__ = False

    config: RunConfig
    executor: Executor | None = None
    progress_stream: TextIO | None = None

    async def run(
        self,
        names: Sequence[str],
        budget: WorkerBudget | None = None,
    ) -> RunReport:
        """Run all test scripts and build the run report.

        Args:
            names: Test scripts to run; duplicates run once per occurrence
            budget: Worker slots to use (default: ``config.jobs`` slots)

        Returns:
            Report with the sorted names of the failed tests

        Raises:
            NoTestsError: If ``names`` is empty
            OutputDirectoryError: If the output directory cannot be created

        """
        if not names:
            raise NoTestsError("usage: provide glob")

        self._create_outdir()

        total = len(names)
        budget = budget or WorkerBudget(self.config.jobs)
        completed: asyncio.Queue[TestResult] = asyncio.Queue(maxsize=total)
        progress = ProgressPrinter(total=total)
        if self.progress_stream is not None:
            progress.stream = self.progress_stream

        log.info("Running %d test(s) with %d worker(s)", total, budget.capacity)
        start = time.monotonic()
        tasks = [
            asyncio.create_task(self._run_test(name, budget, completed), name=name)
            for name in names
        ]

        failures: list[str] = []
        for index in range(total):
            result = await completed.get()
            progress.update(index + 1, result)
            if result.failed:
                failures.append(result.name)
        progress.finish()

        await asyncio.gather(*tasks)
        elapsed = timedelta(seconds=time.monotonic() - start)
        log.debug("Peak worker usage: %d/%d", budget.peak, budget.capacity)

        return RunReport(
            argv=self.config.argv,
            finished_at=datetime.now(UTC),
            elapsed=elapsed,
            total=total,
            failures=tuple(sorted(failures)),
        )

    def _create_outdir(self) -> None:
        try:
            self.config.outdir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputDirectoryError(
                f"cannot create output directory {self.config.outdir}: {exc}"
            ) from exc

    async def _run_test(
        self,
        name: str,
        budget: WorkerBudget,
        completed: asyncio.Queue[TestResult],
    ) -> None:
        async with budget:
            result = await self._execute(name)
        # The queue holds one slot per test, so this never blocks or overflows.
        completed.put_nowait(result)

    async def _execute(self, name: str) -> TestResult:
        """Call the executor, turning unexpected errors into a failed result."""
        executor = self.executor or functools.partial(execute, shell=self.config.shell)
        try:
            return await executor(name, self.config.log_path(name))
        except Exception as exc:
            log.error("Test %s crashed: %s", name, exc, exc_info=exc)
            return TestResult(
                name=name,
                outcome=ExecutionOutcome.failure(str(exc) or type(exc).__name__),
                summary=f"error: {exc}",
            )
