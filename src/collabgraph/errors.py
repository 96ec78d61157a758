"""Error types raised by the collaboration graph."""

from __future__ import annotations


class GraphError(Exception):
    """Base class for collaboration graph errors."""


class DuplicateKeyError(GraphError):
    """An employee or chat identity with this key is already registered."""

    def __init__(self, kind: str, key: str) -> None:
        super().__init__(f"{kind} already exists: {key}")
        self.kind = kind
        self.key = key


class UnknownEmployeeError(GraphError):
    """One or more employee ids are not registered."""

    def __init__(self, *employee_ids: str) -> None:
        super().__init__(f"Unknown employee(s): {', '.join(employee_ids)}")
        self.employee_ids = employee_ids


class UnknownIdentityError(GraphError):
    """One or more chat identities have no employee mapping."""

    def __init__(self, *external_ids: str) -> None:
        super().__init__(
            f"Chat identity missing mapping to employee: {', '.join(external_ids)}"
        )
        self.external_ids = external_ids


class MalformedDocumentError(GraphError):
    """Serialized graph document cannot be parsed."""

    def __init__(self, message: str, position: int | None = None) -> None:
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)
        self.position = position
