"""Models for test execution results."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Self

CREATE_ERROR = "create error"


@dataclass(frozen=True, kw_only=True)
class ExecutionOutcome:
    """Success or failure of a single test process.

    A ``cause`` of None means the process exited cleanly.
    """

    cause: str | None = None

    @classmethod
    def success(cls) -> Self:
        return cls()

    @classmethod
    def failure(cls, cause: str) -> Self:
        return cls(cause=cause)

    @property
    def succeeded(self) -> bool:
        return self.cause is None

    @property
    def failed(self) -> bool:
        return self.cause is not None

    def describe(self) -> str:
        """Return "success" or the failure cause."""
        return "success" if self.cause is None else self.cause


@dataclass(frozen=True, kw_only=True)
class TestResult:
    """Result of running one test script."""

    __test__ = False

    name: str
    outcome: ExecutionOutcome
    summary: str

    @property
    def failed(self) -> bool:
        return self.outcome.failed


@dataclass(frozen=True, kw_only=True)
class RunReport:
    """Aggregate of all results for one invocation."""

    argv: Sequence[str]
    finished_at: datetime
    elapsed: timedelta
    total: int
    failures: Sequence[str]

    @property
    def failure_count(self) -> int:
        return len(self.failures)
