"""
Pytest configuration and shared fixtures for confstack tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest


class RecordingLogger:
    """Logger that keeps every message for assertions."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, str]] = []

    def warning(self, prefix: str, message: str) -> None:
        self.records.append(("warning", prefix, message))

    def verbose(self, prefix: str, message: str) -> None:
        self.records.append(("verbose", prefix, message))

    def debug(self, prefix: str, message: str) -> None:
        self.records.append(("debug", prefix, message))

    def messages(self, level: str) -> list[str]:
        return [m for lvl, _, m in self.records if lvl == level]


@pytest.fixture
def fixtures_dir() -> Path:
    """Provide path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def in_fixtures_dir(fixtures_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test with the fixtures directory as working directory."""
    monkeypatch.chdir(fixtures_dir)
    return fixtures_dir


@pytest.fixture
def logger() -> RecordingLogger:
    """Provide a logger that records messages instead of printing."""
    return RecordingLogger()


@pytest.fixture
def fake_environ() -> dict[str, str]:
    """
    Provide a fake environment mapping.

    Contains one variable under the PREFIX prefix plus unrelated noise.
    """
    return {
        "PREFIX_HTTP_HOST": "localhost",
        "HOME": "/home/test",
        "PATH": "/usr/bin",
    }


@pytest.fixture
def create_json_file(tmp_path: Path):
    """
    Factory fixture for creating temporary JSON config files.

    Usage:
        path = create_json_file("config.json", {"key": "value"})
    """

    def _create(filename: str, data: Any) -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _create
