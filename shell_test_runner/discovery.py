"""Expand glob patterns into the list of test scripts to run."""

import glob
import logging
from collections.abc import Sequence

from shell_test_runner.errors import NoTestsError

log = logging.getLogger(__name__)


def expand_patterns(patterns: Sequence[str]) -> list[str]:
    """Expand each pattern against the filesystem.

    Matches of one pattern are sorted; results of separate patterns are
    concatenated in argument order. A script matched by two patterns is
    listed twice and therefore runs twice. A malformed pattern such as
    ``t[`` is not an error; it simply matches nothing.
    """
    names: list[str] = []
    for pattern in patterns:
        matches = sorted(glob.glob(pattern))
        log.debug("Pattern %r matched %d file(s)", pattern, len(matches))
        names.extend(matches)
    return names


def discover_tests(patterns: Sequence[str]) -> list[str]:
    """Expand patterns and require at least one test script.

    Raises:
        NoTestsError: If no pattern matched anything.

    """
    names = expand_patterns(patterns)
    if not names:
        raise NoTestsError(f"no test scripts match {' '.join(patterns)}")
    return names
