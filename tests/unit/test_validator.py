"""
Tests for the staleness check in versionslock.lockfile.validator.

Tests cover:
- Missing, unknown and differing modules
- Reporting every difference at once
- Remediation message
"""

import pytest

from versionslock.errors import ErrorCode, StaleLockStateError
from versionslock.lockfile import (
    diff_lock_states,
    ensure_lock_state_is_up_to_date,
    format_difference_report,
    parse_lock_state,
)
from versionslock.lockstate import ModuleIdentifier, compute_full_lock_state, to_lock_state
from tests.fixtures import (
    GUAVA,
    GUAVA_WITH_TRACING_FINGERPRINT,
    TRACING,
    create_guava_snapshot,
    edge,
)

GUAVA_MODULE = ModuleIdentifier.parse("com.google.guava:guava")


def lock_state_of(snapshot):
    return to_lock_state(compute_full_lock_state(snapshot.components))


class TestDiffLockStates:
    """Tests for diff_lock_states."""

    def test_identical(self, guava_snapshot):
        current = lock_state_of(guava_snapshot)
        difference = diff_lock_states(current, current)
        assert difference.is_empty
        assert difference.summary == "Lock state is up to date"

    def test_parsed_state_equals_computed_state(self, guava_snapshot):
        current = lock_state_of(guava_snapshot)
        persisted = parse_lock_state("".join(f"{line}\n" for line in current.values()))
        assert diff_lock_states(persisted, current).is_empty

    def test_differing_dependents(self):
        persisted = parse_lock_state(f"{GUAVA} (2 constraints: f59715c4)\n")
        current = lock_state_of(create_guava_snapshot(edge(TRACING, "16.0")))
        current = type(current).from_lines([current[GUAVA_MODULE]])

        difference = diff_lock_states(persisted, current)

        assert difference.missing == []
        assert difference.unknown == []
        assert list(difference.differing) == [GUAVA_MODULE]
        line_difference = difference.differing[GUAVA_MODULE]
        assert line_difference.persisted.fingerprint == "f59715c4"
        assert line_difference.current.fingerprint == GUAVA_WITH_TRACING_FINGERPRINT
        assert line_difference.current.num_dependents == 3

    def test_differing_version(self, guava_snapshot):
        current = lock_state_of(guava_snapshot)
        line = current[GUAVA_MODULE]
        persisted = parse_lock_state(
            f"com.google.guava:guava:17.0 ({line.num_dependents} constraints: {line.fingerprint})\n"
        )
        current = type(current).from_lines([line])

        assert list(diff_lock_states(persisted, current).differing) == [GUAVA_MODULE]

    def test_missing_and_unknown(self, guava_snapshot):
        current = lock_state_of(guava_snapshot)
        persisted = parse_lock_state(
            "org.slf4j:slf4j-api:1.7.25 (0 constraints: e3b0c442)\n"
            "com.acme:gone:1.0 (0 constraints: e3b0c442)\n"
        )

        difference = diff_lock_states(persisted, current)

        assert difference.missing == [
            ModuleIdentifier.parse("com.acme:gone"),
            ModuleIdentifier.parse("org.slf4j:slf4j-api"),
        ]
        assert difference.unknown == sorted(current)
        assert difference.differing == {}
        assert difference.summary == "Lock state is stale: 2 missing, 3 unknown"


class TestFormatDifferenceReport:
    """Tests for format_difference_report."""

    def test_lists_each_category(self, guava_snapshot):
        current = lock_state_of(guava_snapshot)
        persisted = parse_lock_state(
            "com.acme:gone:1.0 (0 constraints: e3b0c442)\n"
            f"{GUAVA} (2 constraints: f59715c4)\n"
        )

        report = format_difference_report(diff_lock_states(persisted, current))

        assert "Locked dependencies missing from the resolution result: [com.acme:gone]" in report
        assert "Found dependencies that were not in the lock state" in report
        assert "Found dependencies whose dependents changed: [com.google.guava:guava]" in report
        assert "locked:   com.google.guava:guava:18.0 (2 constraints: f59715c4)" in report


class TestEnsureLockStateIsUpToDate:
    """Tests for ensure_lock_state_is_up_to_date."""

    def test_up_to_date(self, guava_snapshot, mock_logger):
        current = lock_state_of(guava_snapshot)
        difference = ensure_lock_state_is_up_to_date(current, current, logger=mock_logger)

        assert difference.is_empty
        mock_logger.assert_logged('verbose', "up to date")

    def test_stale_raises_with_all_differences(self, guava_snapshot):
        current = lock_state_of(guava_snapshot)
        persisted = parse_lock_state(
            "com.acme:gone:1.0 (0 constraints: e3b0c442)\n"
            f"{GUAVA} (2 constraints: f59715c4)\n"
        )

        with pytest.raises(StaleLockStateError) as exc_info:
            ensure_lock_state_is_up_to_date(current, persisted, path="versions.lock")

        error = exc_info.value
        assert error.code == ErrorCode.LOCK_STATE_STALE
        assert error.missing == [ModuleIdentifier.parse("com.acme:gone")]
        assert len(error.unknown) == 2
        assert list(error.differing) == [GUAVA_MODULE]
        assert "Please run 'versionslock write'." in str(error)
        assert error.suggestion == "Please run 'versionslock write'."
