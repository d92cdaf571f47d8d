"""Live progress line written as each test finishes."""

import sys
from dataclasses import dataclass, field
from typing import TextIO

from shell_test_runner.models.result import TestResult

NAME_WIDTH = 20
SUMMARY_WIDTH = 60


@dataclass(kw_only=True)
class ProgressPrinter:
    """Renders one overwritable line per completed test.

    Failed tests get a line break so the next update does not overwrite them.
    """

    total: int
    stream: TextIO = field(default_factory=lambda: sys.stdout)

    def update(self, completed: int, result: TestResult) -> None:
        self.stream.write(format_progress(completed, self.total, result))
        if result.failed:
            self.stream.write("\n")
        self.stream.flush()

    def finish(self) -> None:
        self.stream.write("\n")
        self.stream.flush()


def format_progress(completed: int, total: int, result: TestResult) -> str:
    """Return ``"\\r<completed>/<total>: <name> - <summary> "`` padded."""
    return (
        f"\r{completed}/{total}: {result.name:<{NAME_WIDTH}} "
        f"- {result.summary:<{SUMMARY_WIDTH}} "
    )
