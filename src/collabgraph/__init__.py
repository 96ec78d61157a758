"""collabgraph - who works with whom, from chat and issue interactions."""

from collabgraph.errors import (
    DuplicateKeyError,
    GraphError,
    MalformedDocumentError,
    UnknownEmployeeError,
    UnknownIdentityError,
)
from collabgraph.graph import (
    ChatIdentity,
    Employee,
    GraphStore,
    Interaction,
    InteractionType,
)

__version__ = "0.1.0"

__all__ = [
    "ChatIdentity",
    "DuplicateKeyError",
    "Employee",
    "GraphError",
    "GraphStore",
    "Interaction",
    "InteractionType",
    "MalformedDocumentError",
    "UnknownEmployeeError",
    "UnknownIdentityError",
    "__version__",
]
