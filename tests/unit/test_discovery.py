"""Tests for test script discovery."""

from pathlib import Path

import pytest

from shell_test_runner.discovery import discover_tests, expand_patterns
from shell_test_runner.errors import NoTestsError


@pytest.fixture
def scripts(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a few scripts and change into their directory."""
    for name in ("t0002.sh", "t0001.sh", "t1000.sh", "helper.sh"):
        (tmp_path / name).write_text("exit 0\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_expands_sorted(scripts: Path) -> None:
    assert expand_patterns(["t000*.sh"]) == ["t0001.sh", "t0002.sh"]


def test_concatenates_patterns_in_order(scripts: Path) -> None:
    """Keeps argument order across patterns."""
    assert expand_patterns(["t1*.sh", "t000*.sh"]) == [
        "t1000.sh",
        "t0001.sh",
        "t0002.sh",
    ]


def test_keeps_duplicates(scripts: Path) -> None:
    """Lists a script once per matching pattern."""
    assert expand_patterns(["t0001.sh", "t000*.sh"]) == [
        "t0001.sh",
        "t0001.sh",
        "t0002.sh",
    ]


def test_malformed_pattern_matches_nothing(scripts: Path) -> None:
    """Treats an unbalanced bracket as a pattern without matches."""
    assert expand_patterns(["t[", "t0001.sh"]) == ["t0001.sh"]


def test_discover_malformed_pattern(scripts: Path) -> None:
    with pytest.raises(NoTestsError):
        discover_tests(["t["])


def test_discover_requires_matches(scripts: Path) -> None:
    with pytest.raises(NoTestsError, match="nothing\\*.sh"):
        discover_tests(["nothing*.sh"])


def test_discover_returns_matches(scripts: Path) -> None:
    assert discover_tests(["helper.sh"]) == ["helper.sh"]
