"""Employee and chat identity registration mixin for GraphStore."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from collabgraph.errors import (
    DuplicateKeyError,
    UnknownEmployeeError,
    UnknownIdentityError,
)
from collabgraph.graph.types import ChatIdentity, Employee

if TYPE_CHECKING:
    from collabgraph.graph.store import GraphStore

logger = logging.getLogger(__name__)


class RegistryOpsMixin:
    """Employee and chat identity registries."""

    def add_employee(self: GraphStore, employee: Employee) -> Employee:
        """Register an employee. Ids are unique for the life of the store."""
        if employee.id in self._employees:
            raise DuplicateKeyError("Employee", employee.id)
        self._employees[employee.id] = employee
        logger.debug(
            "employee_added",
            extra={"employee_id": employee.id, "department": employee.department},
        )
        return employee

    def add_chat_identity(self: GraphStore, identity: ChatIdentity) -> ChatIdentity:
        """Map a chat identity to an already registered employee."""
        if identity.employee_id not in self._employees:
            raise UnknownEmployeeError(identity.employee_id)
        if identity.external_id in self._identities:
            raise DuplicateKeyError("Chat identity", identity.external_id)
        self._identities[identity.external_id] = identity
        self._identity_to_employee[identity.external_id] = identity.employee_id
        logger.debug(
            "chat_identity_added",
            extra={
                "external_id": identity.external_id,
                "employee_id": identity.employee_id,
            },
        )
        return identity

    def get_employee(self: GraphStore, employee_id: str) -> Employee | None:
        return self._employees.get(employee_id)

    def has_employee(self: GraphStore, employee_id: str) -> bool:
        return employee_id in self._employees

    def resolve_identity(self: GraphStore, external_id: str) -> str:
        """Resolve a chat identity to its employee id."""
        employee_id = self._identity_to_employee.get(external_id)
        if employee_id is None:
            raise UnknownIdentityError(external_id)
        return employee_id

    def name_of(self: GraphStore, employee_id: str) -> str:
        """Display name for an employee, falling back to the id itself."""
        employee = self._employees.get(employee_id)
        return employee.name if employee else employee_id

    @property
    def employees(self: GraphStore) -> Mapping[str, Employee]:
        return MappingProxyType(dict(self._employees))

    @property
    def chat_identities(self: GraphStore) -> Mapping[str, ChatIdentity]:
        return MappingProxyType(dict(self._identities))
