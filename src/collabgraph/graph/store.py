"""Collaboration graph store facade.

Owns the employee registry, the chat identity mapping, the append-only
interaction log and the adjacency index derived from it. The index is a
write-through cache: it is updated on every recorded interaction and can
always be reproduced by replaying the log.

Implementation is split across focused mixin modules:
- registry_ops: employee and chat identity registration
- interaction_ops: interaction recording, filtered views, index rebuild
- traversal: neighbor ranking and shortest path
- export: DOT and Mermaid rendering
- document: serialization and parsing

The store is single threaded. Callers sharing one across threads must
serialize writers; readers may not overlap a writer because an edge update
touches two rows.
"""

from __future__ import annotations

from dataclasses import dataclass

from collabgraph.graph import document, export, traversal
from collabgraph.graph.adjacency import (
    Adjacency,
    AdjacencyView,
    InteractionPredicate,
)
from collabgraph.graph.interaction_ops import InteractionOpsMixin
from collabgraph.graph.registry_ops import RegistryOpsMixin
from collabgraph.graph.types import ChatIdentity, Employee, Interaction


@dataclass(frozen=True)
class GraphStats:
    employees: int
    chat_identities: int
    interactions: int
    edges: int
    isolated: int
    components: int


class GraphStore(RegistryOpsMixin, InteractionOpsMixin):
    """In-memory, undirected, weighted collaboration graph."""

    def __init__(self) -> None:
        self._employees: dict[str, Employee] = {}
        self._identities: dict[str, ChatIdentity] = {}
        self._identity_to_employee: dict[str, str] = {}
        self._interactions: list[Interaction] = []
        self._adjacency: Adjacency = {}
        # Set by deserialize
        self.load_report: document.LoadReport | None = None

    def __repr__(self) -> str:
        return (
            f"GraphStore(employees={len(self._employees)}, "
            f"interactions={len(self._interactions)})"
        )

    # -- Queries --

    def neighbors(self, employee_id: str) -> dict[str, int]:
        """Copy of the adjacency row; empty when there are no interactions."""
        return dict(self._adjacency.get(employee_id, {}))

    def top_collaborators(self, employee_id: str, limit: int) -> list[tuple[str, int]]:
        """Up to limit neighbors by descending weight, ties by employee id."""
        return traversal.top_collaborators(self._adjacency, employee_id, limit)

    def shortest_path(self, from_id: str, to_id: str) -> list[str]:
        """Fewest-hop collaboration path, or [] if unknown or disconnected."""
        return traversal.shortest_path(
            self._adjacency, from_id, to_id, self._employees
        )

    def stats(self) -> GraphStats:
        edges = sum(len(row) for row in self._adjacency.values()) // 2
        isolated = sum(1 for e in self._employees if not self._adjacency.get(e))
        remaining = set(self._employees)
        components = 0
        while remaining:
            seed = min(remaining)
            remaining -= traversal.connected_component(self._adjacency, seed)
            components += 1
        return GraphStats(
            employees=len(self._employees),
            chat_identities=len(self._identities),
            interactions=len(self._interactions),
            edges=edges,
            isolated=isolated,
            components=components,
        )

    # -- Export --

    def _view(self, predicate: InteractionPredicate | None) -> AdjacencyView:
        if predicate is None:
            return self.adjacency()
        return self.filtered_adjacency(predicate)

    def to_dot(self, predicate: InteractionPredicate | None = None) -> str:
        """Graphviz export of the live graph, or of a filtered view."""
        return export.to_dot(self._view(predicate), self.employees)

    def to_mermaid(self, predicate: InteractionPredicate | None = None) -> str:
        """Mermaid export of the live graph, or of a filtered view."""
        return export.to_mermaid(self._view(predicate), self.employees)

    # -- Serialization --

    def serialize(self) -> str:
        return document.serialize_store(self)

    @classmethod
    def deserialize(cls, text: str) -> GraphStore:
        """Build a new store from document text.

        Raises MalformedDocumentError when the text cannot be parsed or a
        top-level array is missing. Individual bad records are skipped and
        counted in the new store's ``load_report``.
        """
        store = cls()
        store.load_report = document.load_document(store, text)
        return store
