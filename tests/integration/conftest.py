"""Fixtures for integration tests."""

from pathlib import Path
from typing import Protocol

import pytest


class WriteScriptFn(Protocol):
    """Protocol for test script creation function."""

    def __call__(self, name: str, body: str) -> Path:
        """Create a shell script and return its path."""


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from inside an empty directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_script(workdir: Path) -> WriteScriptFn:
    """Return a function to create shell scripts in the working directory."""

    def _write(name: str, body: str) -> Path:
        path = workdir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body)
        return path

    return _write
