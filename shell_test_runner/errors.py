"""Errors that abort a whole run.

Per-test problems never raise; they are recorded in the test's result.
"""


class RunnerError(Exception):
    """Base class for fatal runner errors."""


class ConfigurationError(RunnerError):
    """Raised when the run cannot start."""


class NoTestsError(ConfigurationError):
    """Raised when there are no test scripts to run."""


class OutputDirectoryError(ConfigurationError):
    """Raised when the output directory cannot be created."""


class SummaryWriteError(RunnerError):
    """Raised when the summary file cannot be written."""
