"""Diagram exporters for collaboration adjacency.

Both exporters are pure: the same adjacency snapshot and employee registry
always produce byte-identical text. Nodes are emitted in employee id order
and each undirected edge exactly once, as (u, v) with u < v.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from collabgraph.graph.adjacency import AdjacencyView, iter_edges
from collabgraph.graph.types import Employee

_MERMAID_UNSAFE = re.compile(r"[^A-Za-z0-9_]")


def escape_label(text: str | None) -> str:
    """Escape backslash and double quote for quoted diagram strings."""
    if not text:
        return ""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def mermaid_safe_id(node_id: str | None) -> str:
    """Turn an employee id into a Mermaid node identifier."""
    if not node_id:
        return "N_"
    base = _MERMAID_UNSAFE.sub("_", node_id)
    if not base[0].isalpha():
        base = "N_" + base
    return base


def to_dot(adjacency: AdjacencyView, employees: Mapping[str, Employee]) -> str:
    """Render a Graphviz ``graph`` with weight-labelled undirected edges."""
    lines = [
        "graph EmployeeConnections {",
        "  node [shape=circle, style=filled, fillcolor=lightyellow];",
    ]
    for employee_id in sorted(employees):
        employee = employees[employee_id]
        label = f"{escape_label(employee.name)}\\n{escape_label(employee.department)}"
        lines.append(f'  "{escape_label(employee_id)}" [label="{label}"];')
    for u, v, weight in iter_edges(adjacency):
        lines.append(
            f'  "{escape_label(u)}" -- "{escape_label(v)}" [label="{weight}"];'
        )
    lines.append("}")
    return "\n".join(lines) + "\n"


def to_mermaid(adjacency: AdjacencyView, employees: Mapping[str, Employee]) -> str:
    """Render a Mermaid flowchart with weight-labelled links."""
    lines = ["graph TD;"]
    for employee_id in sorted(employees):
        employee = employees[employee_id]
        label = f"{escape_label(employee.name)}<br/>{escape_label(employee.department)}"
        lines.append(f'  {mermaid_safe_id(employee_id)}["{label}"];')
    for u, v, weight in iter_edges(adjacency):
        lines.append(f"  {mermaid_safe_id(u)} ---|{weight}| {mermaid_safe_id(v)};")
    return "\n".join(lines) + "\n"


EXPORTERS = {
    "dot": to_dot,
    "mermaid": to_mermaid,
}
