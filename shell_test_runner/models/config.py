"""Run configuration, built once at startup and passed to the scheduler."""

import os
from pathlib import Path

from pydantic import Field, PositiveInt, field_validator

from shell_test_runner.models.base import Model

DEFAULT_SHELL = "/bin/sh"
SUMMARY_NAME = "summary.txt"


def default_jobs() -> int:
    """Return the number of available processing units."""
    return os.cpu_count() or 1


class RunConfig(Model):
    """Immutable settings for one invocation."""

    outdir: Path = Field(..., description="Directory receiving logs and summary")
    patterns: tuple[str, ...] = Field(
        ..., min_length=1, description="Glob patterns selecting test scripts"
    )
    jobs: PositiveInt = Field(
        default_factory=default_jobs,
        description="Maximum number of tests running at once",
    )
    shell: str = Field(default=DEFAULT_SHELL, description="Interpreter for scripts")
    summary_name: str = Field(
        default=SUMMARY_NAME, description="File name of the summary inside outdir"
    )
    argv: tuple[str, ...] = Field(
        default=(), description="Invocation arguments recorded in the summary"
    )

    @field_validator("patterns")
    @classmethod
    def _reject_blank_patterns(cls, patterns: tuple[str, ...]) -> tuple[str, ...]:
        if any(not pattern for pattern in patterns):
            raise ValueError("patterns must not be empty strings")
        return patterns

    @property
    def summary_path(self) -> Path:
        """Location of the summary file."""
        return self.outdir / self.summary_name

    def log_path(self, name: str) -> Path:
        """Location of the log file for the test script ``name``.

        The name is joined onto ``outdir`` with any leading separator
        stripped; ``..`` components are kept. Directories inside the name are
        not created.
        """
        return self.outdir / f"{name}.log".lstrip(os.sep)
