"""
Test fixtures package for versionslock tests.

This package provides a mock logger and sample resolution snapshots.
"""

from tests.fixtures.mock_logger import MockLogger, create_mock_logger
from tests.fixtures.sample_snapshots import (
    GUAVA,
    JACKSON_GUAVA,
    GUAVA_RETRYING,
    TRACING,
    GUAVA_FINGERPRINT,
    GUAVA_WITH_TRACING_FINGERPRINT,
    EMPTY_FINGERPRINT,
    SAMPLE_SNAPSHOT_YAML,
    edge,
    component,
    guava_component,
    create_guava_snapshot,
    create_unresolved_snapshot,
    create_projects,
)

__all__ = [
    'MockLogger',
    'create_mock_logger',
    'GUAVA',
    'JACKSON_GUAVA',
    'GUAVA_RETRYING',
    'TRACING',
    'GUAVA_FINGERPRINT',
    'GUAVA_WITH_TRACING_FINGERPRINT',
    'EMPTY_FINGERPRINT',
    'SAMPLE_SNAPSHOT_YAML',
    'edge',
    'component',
    'guava_component',
    'create_guava_snapshot',
    'create_unresolved_snapshot',
    'create_projects',
]
