"""Collaboration graph of employees linked by issue interactions.

Public API:
- GraphStore: Registries, interaction log and adjacency index
- load_graph / save_graph: Document persistence on disk

Types:
- Employee: Company identity node
- ChatIdentity: Chat-system identity mapped to an employee
- Interaction: One collaboration event on an issue
- InteractionType: Interaction kind enumeration
"""

from collabgraph.graph.persistence import load_graph, save_graph
from collabgraph.graph.store import GraphStats, GraphStore
from collabgraph.graph.types import ChatIdentity, Employee, Interaction, InteractionType

__all__ = [
    "ChatIdentity",
    "Employee",
    "GraphStats",
    "GraphStore",
    "Interaction",
    "InteractionType",
    "load_graph",
    "save_graph",
]
