"""Graph traversal and ranking over an adjacency index.

Tie-breaks are deterministic: neighbors are visited and ranked in ascending
employee id order. This is a chosen convention, not a canonical answer; any
equal-length path or equal-weight collaborator is equally valid.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Container

from collabgraph.graph.adjacency import AdjacencyView


def top_collaborators(
    adjacency: AdjacencyView,
    employee_id: str,
    limit: int,
) -> list[tuple[str, int]]:
    """Highest-weight neighbors, descending by weight, ties by employee id."""
    if limit <= 0:
        return []
    row = adjacency.get(employee_id, {})
    ranked = sorted(row.items(), key=lambda item: (-item[1], item[0]))
    return ranked[:limit]


def shortest_path(
    adjacency: AdjacencyView,
    from_id: str,
    to_id: str,
    known_ids: Container[str],
) -> list[str]:
    """Fewest-hop path between two employees, or [] if none exists.

    Edge weights are ignored: every edge costs one hop.
    """
    if from_id not in known_ids or to_id not in known_ids:
        return []
    if from_id == to_id:
        return [from_id]

    previous: dict[str, str] = {}
    visited: set[str] = {from_id}
    queue: deque[str] = deque([from_id])

    while queue:
        current = queue.popleft()
        for neighbor in sorted(adjacency.get(current, {})):
            if neighbor in visited:
                continue
            visited.add(neighbor)
            previous[neighbor] = current
            if neighbor == to_id:
                return _reconstruct_path(previous, from_id, to_id)
            queue.append(neighbor)

    return []


def _reconstruct_path(previous: dict[str, str], start: str, end: str) -> list[str]:
    path = [end]
    while path[-1] != start:
        path.append(previous[path[-1]])
    path.reverse()
    return path


def connected_component(adjacency: AdjacencyView, employee_id: str) -> set[str]:
    """All employees reachable from employee_id, including itself."""
    seen: set[str] = {employee_id}
    queue: deque[str] = deque([employee_id])
    while queue:
        current = queue.popleft()
        for neighbor in adjacency.get(current, {}):
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)
    return seen
