"""
Pytest configuration and shared fixtures for zkmerkle tests.
"""

import json
import logging
import tempfile
from pathlib import Path
from typing import Generator, List

import pytest
import structlog

from zkmerkle.merkle.hasher import Hasher


class StubHasher(Hasher):
    """
    Deterministic, readable pairwise hash for structural assertions.

    hash(b"a", b"b") == b"H(a,b)", so expected roots can be written out by
    hand.
    """

    name = "stub"
    digest_size = 0

    def hash(self, left: bytes, right: bytes) -> bytes:
        return b"H(" + left + b"," + right + b")"


@pytest.fixture
def stub_hasher() -> StubHasher:
    return StubHasher()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def missing_config_path(temp_dir: Path) -> Path:
    """Config path that does not exist, so the CLI falls back to defaults."""
    return temp_dir / "no-such-config.yaml"


@pytest.fixture
def make_values_file(temp_dir: Path):
    """
    Factory fixture that writes a JSON values file.

    Usage:
        def test_something(make_values_file):
            values_path = make_values_file(["alice", "bob"])
    """
    def _make_values_file(values: List, name: str = "values.json") -> Path:
        path = temp_dir / name
        path.write_text(json.dumps(values))
        return path
    return _make_values_file


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop handlers installed by setup_logging() so tests stay isolated."""
    yield
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(logging.WARNING)
    structlog.reset_defaults()
