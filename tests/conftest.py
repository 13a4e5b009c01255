"""
Shared pytest fixtures for versionslock tests.

These fixtures provide loggers, sample snapshots and lock file locations that
can be used across all test modules.
"""

from pathlib import Path

import pytest

from tests.fixtures import (
    MockLogger,
    SAMPLE_SNAPSHOT_YAML,
    create_guava_snapshot,
)


# =============================================================================
# Logger Fixtures
# =============================================================================

@pytest.fixture
def mock_logger() -> MockLogger:
    """
    Create a logger that captures messages per level.

    Usage:
        def test_something(mock_logger):
            some_function(logger=mock_logger)
            mock_logger.assert_logged('status', 'expected')
    """
    return MockLogger()


# =============================================================================
# Snapshot Fixtures
# =============================================================================

@pytest.fixture
def guava_snapshot():
    """Resolution snapshot with guava requested by two modules."""
    return create_guava_snapshot()


@pytest.fixture
def snapshot_file(tmp_path) -> Path:
    """Sample snapshot written as YAML."""
    path = tmp_path / "snapshot.yml"
    path.write_text(SAMPLE_SNAPSHOT_YAML, encoding="utf-8")
    return path


@pytest.fixture
def lockfile_path(tmp_path) -> Path:
    """Location for a lock file that does not exist yet."""
    return tmp_path / "versions.lock"
