"""
Unit tests for the data models in explorer_core.models.

Tests cover:
- Enum values used on the command line
- DirectoriesAccessed ordering by access time and access count
- PasteSummary defaults
"""

from pathlib import Path

import pytest

from explorer_core.models import (
    CollisionPolicy,
    DirectoriesAccessed,
    DirectoryAccessEntry,
    ErrorSolution,
    FilePasteState,
    PasteSummary,
)


@pytest.mark.unit
class TestEnums:
    """Tests for the paste enums."""

    def test_collision_policy_values(self):
        assert CollisionPolicy("create_sibling") is CollisionPolicy.CREATE_SIBLING
        assert CollisionPolicy("resolve_later") is CollisionPolicy.RESOLVE_LATER
        assert CollisionPolicy("mark_resolved") is CollisionPolicy.MARK_RESOLVED

    def test_paste_states_in_order(self):
        assert [state.name for state in FilePasteState] == [
            "INIT",
            "COLLISION_DETECTED",
            "COLLISION_RESOLVED",
            "TARGET_COPIED",
            "DONE",
        ]

    def test_error_solutions(self):
        assert {solution.value for solution in ErrorSolution} == {
            "none", "skip", "retry", "cancel",
        }


@pytest.mark.unit
class TestDirectoriesAccessed:
    """Tests for the directory access history."""

    def test_notify_new_and_known(self):
        history = DirectoriesAccessed()

        assert history.notify(Path("/a")) is True
        assert history.notify(Path("/b")) is True
        assert history.notify(Path("/a")) is False

        assert len(history) == 2
        assert [entry.path for entry in history.entries] == [Path("/b"), Path("/a")]
        assert history.entries[1].access_count == 2

    def test_sorted_by_access_time(self):
        history = DirectoriesAccessed()
        for name in ("a", "b", "c", "b"):
            history.notify(Path("/") / name)

        assert history.sorted_by_access_time(10) == [Path("/b"), Path("/c"), Path("/a")]
        assert history.sorted_by_access_time(2) == [Path("/b"), Path("/c")]

    def test_sorted_by_access_count(self):
        history = DirectoriesAccessed()
        for name in ("a", "a", "a", "b", "c", "c", "d"):
            history.notify(Path("/") / name)

        assert history.sorted_by_access_count(10) == [
            Path("/a"), Path("/c"), Path("/d"), Path("/b"),
        ]
        assert history.sorted_by_access_count(1) == [Path("/a")]

    def test_set_initial_and_clear(self):
        history = DirectoriesAccessed()
        history.set_initial_entries([Path("/old"), Path("/new")])

        assert history.sorted_by_access_time(5) == [Path("/new"), Path("/old")]
        assert all(entry.access_count == 1 for entry in history.entries)

        history.clear_entries()
        assert len(history) == 0

    def test_entries_is_a_copy(self):
        history = DirectoriesAccessed()
        history.notify(Path("/a"))

        history.entries.clear()

        assert len(history) == 1

    def test_entry_ordering_by_count(self):
        assert DirectoryAccessEntry(Path("/a"), 1) < DirectoryAccessEntry(Path("/b"), 2)
        assert not DirectoryAccessEntry(Path("/a"), 2) < DirectoryAccessEntry(Path("/b"), 2)


@pytest.mark.unit
class TestPasteSummary:
    """Tests for PasteSummary defaults."""

    def test_defaults(self):
        summary = PasteSummary()

        assert summary.total_items == 0
        assert summary.errors == []
        assert not summary.done
        assert not summary.cancelled

    def test_error_lists_not_shared(self):
        first, second = PasteSummary(), PasteSummary()
        first.errors.append("boom")

        assert second.errors == []
