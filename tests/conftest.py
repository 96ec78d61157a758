"""Shared test fixtures and factories."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from collabgraph.graph import ChatIdentity, Employee, GraphStore, InteractionType
from collabgraph.graph.persistence import save_graph

BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


# =============================================================================
# Graph Fixtures
# =============================================================================


@pytest.fixture
def store() -> GraphStore:
    """Empty graph store."""
    return GraphStore()


@pytest.fixture
def team_store() -> GraphStore:
    """Four employees A-D with chat ids u1-u4 and five interactions.

    A-B twice, A-C, B-D, C-D. Timestamps one day apart starting at BASE_TIME.
    """
    store = GraphStore()
    departments = {"A": "Platform", "B": "SRE", "C": "Payments", "D": "Platform"}
    for index, (employee_id, department) in enumerate(departments.items(), start=1):
        store.add_employee(
            Employee(
                employee_id,
                f"Person {employee_id}",
                f"{employee_id.lower()}@acme.com",
                department,
            )
        )
        store.add_chat_identity(
            ChatIdentity(f"u{index}", f"handle{index}", employee_id)
        )

    history = [
        ("JIRA-1", "u1", "u2", InteractionType.ISSUE),
        ("BUG-1", "u1", "u2", InteractionType.BUG),
        ("JIRA-2", "u1", "u3", InteractionType.ISSUE),
        ("BUG-2", "u2", "u4", InteractionType.BUG),
        ("JIRA-3", "u3", "u4", InteractionType.ISSUE),
    ]
    for day, (issue_key, a, b, interaction_type) in enumerate(history):
        store.record_interaction_by_identity(
            issue_key, a, b, interaction_type, BASE_TIME + timedelta(days=day)
        )
    return store


@pytest.fixture
def graph_file(tmp_path: Path, team_store: GraphStore) -> Path:
    """team_store saved to a document on disk."""
    path = tmp_path / "graph.json"
    save_graph(team_store, path)
    return path


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point COLLABGRAPH_HOME at a temp dir and run from an empty cwd."""
    home = tmp_path / "home"
    home.mkdir()
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.setenv("COLLABGRAPH_HOME", str(home))
    monkeypatch.delenv("COLLABGRAPH_DATA", raising=False)
    monkeypatch.delenv("COLLABGRAPH_LOG_LEVEL", raising=False)
    monkeypatch.chdir(workdir)
    return home


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner with colors disabled."""
    from typer.testing import CliRunner

    return CliRunner(env={"NO_COLOR": "1"})


@pytest.fixture(autouse=True)
def root_logger():
    """Undo configure_logging() calls made by a test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)
