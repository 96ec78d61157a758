"""Tests for CLI commands."""

from __future__ import annotations

from pathlib import Path

import pytest

from collabgraph.cli.app import app
from collabgraph.graph import GraphStore, InteractionType, load_graph
from collabgraph.graph.filters import of_types


@pytest.fixture
def invoke(cli_runner, graph_file: Path):
    """Run a command against the team graph document."""

    def _invoke(*args: str):
        return cli_runner.invoke(app, [*args, "--data", str(graph_file)])

    return _invoke


class TestEmployeeCommands:
    def test_add_creates_document(self, cli_runner, tmp_path: Path):
        path = tmp_path / "new.json"
        result = cli_runner.invoke(
            app,
            ["employee", "add", "E-1", "--name", "Alice", "--data", str(path)],
        )
        assert result.exit_code == 0
        assert "Added employee E-1" in result.stdout
        assert load_graph(path).get_employee("E-1").name == "Alice"

    def test_add_duplicate(self, invoke, graph_file: Path):
        before = graph_file.read_text()
        result = invoke("employee", "add", "A")
        assert result.exit_code == 1
        assert "already exists: A" in result.stdout
        assert graph_file.read_text() == before

    def test_list(self, invoke):
        result = invoke("employee", "list")
        assert result.exit_code == 0
        assert "Person A" in result.stdout
        assert "Payments" in result.stdout

    def test_list_empty(self, cli_runner, tmp_path: Path):
        result = cli_runner.invoke(
            app, ["employee", "list", "--data", str(tmp_path / "none.json")]
        )
        assert result.exit_code == 0
        assert "No employees registered" in result.stdout

    def test_uses_data_path_from_environment(self, cli_runner, tmp_path, monkeypatch):
        path = tmp_path / "env.json"
        monkeypatch.setenv("COLLABGRAPH_DATA", str(path))
        result = cli_runner.invoke(app, ["employee", "add", "E-9"])
        assert result.exit_code == 0
        assert load_graph(path).has_employee("E-9")


class TestIdentityCommands:
    def test_add(self, invoke, graph_file: Path):
        result = invoke("identity", "add", "u9", "A", "--handle", "alias")
        assert result.exit_code == 0
        assert load_graph(graph_file).resolve_identity("u9") == "A"

    def test_add_unknown_employee(self, invoke):
        result = invoke("identity", "add", "u9", "Z")
        assert result.exit_code == 1
        assert "Unknown employee(s): Z" in result.stdout

    def test_list(self, invoke):
        result = invoke("identity", "list")
        assert result.exit_code == 0
        assert "handle3" in result.stdout


class TestRecordCommand:
    def test_by_identity(self, invoke, graph_file: Path):
        result = invoke("record", "CR-9", "u3", "u2", "--type", "code_review")
        assert result.exit_code == 0
        assert "Recorded CODE_REVIEW" in result.stdout
        store = load_graph(graph_file)
        assert store.neighbors("C") == {"A": 1, "B": 1, "D": 1}
        assert store.interactions[-1].type is InteractionType.CODE_REVIEW

    def test_by_employee_with_timestamp(self, invoke, graph_file: Path):
        result = invoke(
            "record", "JIRA-9", "A", "D", "--by-employee", "--at", "2024-04-01T10:00:00Z"
        )
        assert result.exit_code == 0
        last = load_graph(graph_file).interactions[-1]
        assert (last.employee_a, last.employee_b) == ("A", "D")
        assert last.timestamp.isoformat() == "2024-04-01T10:00:00+00:00"

    def test_self_interaction(self, invoke, graph_file: Path):
        result = invoke("record", "JIRA-9", "A", "A", "--by-employee")
        assert result.exit_code == 0
        assert "nothing recorded" in result.stdout
        assert len(load_graph(graph_file).interactions) == 5

    def test_unknown_identity(self, invoke, graph_file: Path):
        result = invoke("record", "JIRA-9", "u1", "u404")
        assert result.exit_code == 1
        assert "u404" in result.stdout
        assert len(load_graph(graph_file).interactions) == 5

    def test_unknown_type(self, invoke):
        result = invoke("record", "JIRA-9", "u1", "u2", "--type", "MEETING")
        assert result.exit_code == 1
        assert "Unknown interaction type" in result.stdout

    def test_bad_timestamp(self, invoke):
        result = invoke("record", "JIRA-9", "u1", "u2", "--at", "tomorrow")
        assert result.exit_code == 1


class TestQueryCommands:
    def test_neighbors(self, invoke):
        result = invoke("neighbors", "A")
        assert result.exit_code == 0
        assert "Person B" in result.stdout
        assert "Person C" in result.stdout
        assert "Person D" not in result.stdout

    def test_neighbors_unknown(self, invoke):
        result = invoke("neighbors", "Z")
        assert result.exit_code == 1
        assert "Unknown employee(s): Z" in result.stdout

    def test_top(self, invoke):
        result = invoke("top", "B", "--limit", "1")
        assert result.exit_code == 0
        assert "Person A" in result.stdout
        assert "Person D" not in result.stdout

    def test_top_limit_from_config(self, cli_runner, graph_file: Path, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text("top_limit = 1\n")
        result = cli_runner.invoke(
            app, ["top", "A", "--data", str(graph_file), "--config", str(config)]
        )
        assert result.exit_code == 0
        assert "Person B" in result.stdout
        assert "Person C" not in result.stdout

    def test_path(self, invoke):
        result = invoke("path", "A", "D")
        assert result.exit_code == 0
        assert "A (Person A) -> B (Person B) -> D (Person D)" in result.stdout
        assert "2 hop(s)" in result.stdout

    def test_path_disconnected(self, invoke):
        invoke("employee", "add", "E")
        result = invoke("path", "A", "E")
        assert result.exit_code == 1
        assert "No path between A and E" in result.stdout

    def test_stats(self, invoke):
        result = invoke("stats")
        assert result.exit_code == 0
        assert "Interactions" in result.stdout
        assert "Components" in result.stdout
        assert "Skipped records" not in result.stdout

    def test_stats_reports_skipped_records(self, cli_runner, tmp_path: Path):
        path = tmp_path / "graph.json"
        path.write_text(
            '{"employees": [{"id": "A"}, {"name": "no id"}], '
            '"chatIdentities": [], "interactions": []}'
        )
        result = cli_runner.invoke(app, ["stats", "--data", str(path)])
        assert result.exit_code == 0
        assert "Skipped records" in result.stdout

    def test_verify(self, invoke):
        result = invoke("verify")
        assert result.exit_code == 0
        assert "consistent (5 interactions)" in result.stdout


class TestExportCommand:
    def test_dot_to_stdout(self, invoke, team_store: GraphStore):
        result = invoke("export", "--format", "dot")
        assert result.exit_code == 0
        assert result.stdout == team_store.to_dot()

    def test_default_format_is_mermaid(self, invoke, team_store: GraphStore):
        result = invoke("export")
        assert result.exit_code == 0
        assert result.stdout == team_store.to_mermaid()

    def test_type_filter(self, invoke, team_store: GraphStore):
        result = invoke("export", "-f", "dot", "--type", "bug")
        assert result.exit_code == 0
        assert result.stdout == team_store.to_dot(of_types(InteractionType.BUG))

    def test_days_filter_excludes_old_interactions(self, invoke):
        # team_store interactions are from 2024
        result = invoke("export", "-f", "dot", "--days", "7")
        assert result.exit_code == 0
        assert " -- " not in result.stdout
        assert '"A" [label=' in result.stdout

    def test_output_file(self, invoke, tmp_path: Path, team_store: GraphStore):
        out = tmp_path / "out" / "team.mmd"
        result = invoke("export", "--output", str(out))
        assert result.exit_code == 0
        assert out.read_text() == team_store.to_mermaid()
        assert "Wrote mermaid diagram" in result.stdout

    def test_unknown_format(self, invoke):
        result = invoke("export", "--format", "png")
        assert result.exit_code == 1
        assert "Unknown format: png" in result.stdout

    def test_unknown_type(self, invoke):
        result = invoke("export", "--type", "MEETING")
        assert result.exit_code == 1


class TestDemoCommand:
    def test_writes_four_person_demo(self, cli_runner, tmp_path: Path):
        path = tmp_path / "demo.json"
        result = cli_runner.invoke(app, ["demo", "--data", str(path)])
        assert result.exit_code == 0
        assert "Wrote 4 employees and 7 interactions" in result.stdout
        assert load_graph(path).resolve_identity("U1") == "E-1001"

    def test_eight_person_demo(self, cli_runner, tmp_path: Path):
        path = tmp_path / "demo.json"
        result = cli_runner.invoke(app, ["demo", "--size", "8", "--data", str(path)])
        assert result.exit_code == 0
        assert len(load_graph(path).employees) == 8

    def test_refuses_to_overwrite(self, invoke, graph_file: Path):
        before = graph_file.read_text()
        result = invoke("demo")
        assert result.exit_code == 1
        assert "--force" in result.stdout
        assert graph_file.read_text() == before

    def test_force_overwrites(self, invoke, graph_file: Path):
        result = invoke("demo", "--force")
        assert result.exit_code == 0
        assert load_graph(graph_file).has_employee("E-1001")

    def test_unknown_size(self, cli_runner, tmp_path: Path):
        result = cli_runner.invoke(
            app, ["demo", "--size", "5", "--data", str(tmp_path / "d.json")]
        )
        assert result.exit_code == 1
        assert "Unknown demo size" in result.stdout


class TestErrorHandling:
    def test_malformed_document(self, cli_runner, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text('{"employees": [')
        result = cli_runner.invoke(app, ["stats", "--data", str(path)])
        assert result.exit_code == 1
        assert "Cannot load" in result.stdout

    def test_deeply_nested_document(self, cli_runner, tmp_path: Path):
        path = tmp_path / "deep.json"
        path.write_text('{"employees": ' + "[" * 5000 + "]" * 5000 + "}")
        result = cli_runner.invoke(app, ["stats", "--data", str(path)])
        assert result.exit_code == 1
        assert "Cannot load" in result.stdout

    def test_invalid_config(self, cli_runner, graph_file: Path, tmp_path: Path):
        config = tmp_path / "bad.toml"
        config.write_text("top_limit = 0\n")
        result = cli_runner.invoke(
            app, ["stats", "--data", str(graph_file), "--config", str(config)]
        )
        assert result.exit_code == 1
        assert "Invalid configuration" in result.stdout

    def test_missing_config(self, cli_runner, tmp_path: Path):
        result = cli_runner.invoke(
            app, ["stats", "--config", str(tmp_path / "missing.toml")]
        )
        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_no_args_shows_help(self, cli_runner):
        result = cli_runner.invoke(app, [])
        assert "Usage" in result.output
