"""Adjacency index helpers.

The index maps employee id -> neighbor id -> weight, where the weight is the
number of interactions recorded between the pair. It is always symmetric and
always equal to a replay of the interaction log.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType

from collabgraph.graph.types import Interaction

Adjacency = dict[str, dict[str, int]]
AdjacencyView = Mapping[str, Mapping[str, int]]
InteractionPredicate = Callable[[Interaction], bool]


def increment_edge(adjacency: Adjacency, a: str, b: str, delta: int = 1) -> None:
    """Add delta to the undirected edge (a, b). Self edges are ignored."""
    if a == b:
        return
    row_a = adjacency.setdefault(a, {})
    row_a[b] = row_a.get(b, 0) + delta
    row_b = adjacency.setdefault(b, {})
    row_b[a] = row_b.get(a, 0) + delta


def build_adjacency(
    interactions: Iterable[Interaction],
    predicate: InteractionPredicate | None = None,
) -> Adjacency:
    """Fold an interaction log into a fresh adjacency index."""
    adjacency: Adjacency = {}
    for interaction in interactions:
        if predicate is not None and not predicate(interaction):
            continue
        increment_edge(adjacency, interaction.employee_a, interaction.employee_b)
    return adjacency


def freeze_adjacency(
    adjacency: Adjacency,
    employee_ids: Iterable[str] = (),
) -> AdjacencyView:
    """Return a detached, read-only copy of an adjacency index.

    Every id in employee_ids gets a row, empty when it has no edges.
    """
    rows: dict[str, Mapping[str, int]] = {}
    for employee_id in employee_ids:
        rows[employee_id] = MappingProxyType(dict(adjacency.get(employee_id, {})))
    for employee_id, row in adjacency.items():
        if employee_id not in rows:
            rows[employee_id] = MappingProxyType(dict(row))
    return MappingProxyType(rows)


def iter_edges(adjacency: AdjacencyView) -> list[tuple[str, str, int]]:
    """List each undirected edge once as (u, v, weight) with u < v, sorted."""
    seen: dict[tuple[str, str], int] = {}
    for u, row in adjacency.items():
        for v, weight in row.items():
            if u == v:
                continue
            key = (u, v) if u < v else (v, u)
            seen.setdefault(key, weight)
    return [(u, v, weight) for (u, v), weight in sorted(seen.items())]
