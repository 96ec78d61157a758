"""Tests for the sample organisations."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from collabgraph.demo import (
    DEMOS,
    EIGHT_PERSON_HISTORY,
    EIGHT_PERSON_STAFF,
    FOUR_PERSON_HISTORY,
    FOUR_PERSON_STAFF,
    build_eight_person_demo,
    build_four_person_demo,
)
from collabgraph.graph.filters import within_last
from collabgraph.graph.types import InteractionType

NOW = datetime(2024, 5, 1, 9, 0, tzinfo=UTC)


class TestFourPersonDemo:
    def test_contents(self):
        store = build_four_person_demo(NOW)
        stats = store.stats()
        assert (stats.employees, stats.chat_identities, stats.interactions) == (
            4,
            4,
            7,
        )
        assert store.resolve_identity("U3") == "E-1003"

    def test_neighbors_and_path(self):
        store = build_four_person_demo(NOW)
        assert store.neighbors("E-1001") == {"E-1002": 2, "E-1003": 1, "E-1004": 1}
        assert store.top_collaborators("E-1001", 1) == [("E-1002", 2)]
        assert store.shortest_path("E-1001", "E-1004") == ["E-1001", "E-1004"]

    def test_last_week_excludes_old_history(self):
        store = build_four_person_demo(NOW)
        view = store.filtered_adjacency(within_last(timedelta(days=7), now=NOW))
        assert "E-1004" not in view["E-1001"]
        assert "E-1003" not in view["E-1002"]
        assert view["E-1001"]["E-1002"] == 2

    def test_timestamps_relative_to_now(self):
        store = build_four_person_demo(NOW)
        assert max(i.timestamp for i in store.interactions) == NOW - timedelta(hours=6)


class TestEightPersonDemo:
    def test_contents(self):
        store = build_eight_person_demo(NOW)
        stats = store.stats()
        assert stats.employees == 8
        assert stats.interactions == 18
        assert stats.components == 1
        assert stats.isolated == 0

    def test_top_collaborators(self):
        store = build_eight_person_demo(NOW)
        assert store.top_collaborators("E-2001", 2) == [("E-2002", 3), ("E-2003", 1)]

    def test_consistent_index(self):
        assert build_eight_person_demo(NOW).verify_adjacency()


def test_demos_by_size():
    assert set(DEMOS) == {4, 8}
    assert DEMOS[4] is build_four_person_demo


def test_rows_have_declared_shapes():
    for row in FOUR_PERSON_STAFF + EIGHT_PERSON_STAFF:
        assert len(row) == 6
        assert all(isinstance(field, str) for field in row)
    for issue_key, chat_a, chat_b, kind, age in [
        *FOUR_PERSON_HISTORY,
        *EIGHT_PERSON_HISTORY,
    ]:
        assert all(isinstance(s, str) for s in (issue_key, chat_a, chat_b))
        assert isinstance(kind, InteractionType)
        assert isinstance(age, timedelta)
