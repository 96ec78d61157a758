"""Interaction recording and filtered views mixin for GraphStore."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from collabgraph.errors import UnknownEmployeeError, UnknownIdentityError
from collabgraph.graph.adjacency import (
    AdjacencyView,
    InteractionPredicate,
    build_adjacency,
    freeze_adjacency,
    increment_edge,
)
from collabgraph.graph.types import Interaction, InteractionType

if TYPE_CHECKING:
    from collabgraph.graph.store import GraphStore

logger = logging.getLogger(__name__)


class InteractionOpsMixin:
    """Append-only interaction log plus the incrementally maintained index."""

    def record_interaction_by_identity(
        self: GraphStore,
        issue_key: str,
        external_a: str,
        external_b: str,
        interaction_type: InteractionType,
        timestamp: datetime,
    ) -> Interaction | None:
        """Record an interaction between two chat identities."""
        employee_a = self._identity_to_employee.get(external_a)
        employee_b = self._identity_to_employee.get(external_b)
        if employee_a is None or employee_b is None:
            missing = [
                ext
                for ext, emp in ((external_a, employee_a), (external_b, employee_b))
                if emp is None
            ]
            raise UnknownIdentityError(*missing)
        return self.record_interaction_by_employee(
            issue_key, employee_a, employee_b, interaction_type, timestamp
        )

    def record_interaction_by_employee(
        self: GraphStore,
        issue_key: str,
        employee_a: str,
        employee_b: str,
        interaction_type: InteractionType,
        timestamp: datetime,
    ) -> Interaction | None:
        """Record an interaction between two employees.

        Returns the logged interaction, or None when both ids are the same
        employee. Self interactions are dropped without error and leave the
        log and index untouched.
        """
        missing = [e for e in (employee_a, employee_b) if e not in self._employees]
        if missing:
            raise UnknownEmployeeError(*dict.fromkeys(missing))
        if employee_a == employee_b:
            logger.debug(
                "self_interaction_ignored",
                extra={"issue_key": issue_key, "employee_id": employee_a},
            )
            return None

        interaction = Interaction(
            issue_key=issue_key,
            employee_a=employee_a,
            employee_b=employee_b,
            type=interaction_type,
            timestamp=timestamp,
        )
        self._interactions.append(interaction)
        increment_edge(self._adjacency, employee_a, employee_b)
        logger.debug(
            "interaction_recorded",
            extra={
                "issue_key": issue_key,
                "employee_a": employee_a,
                "employee_b": employee_b,
                "interaction_type": interaction.type.name,
            },
        )
        return interaction

    @property
    def interactions(self: GraphStore) -> tuple[Interaction, ...]:
        return tuple(self._interactions)

    def adjacency(self: GraphStore) -> AdjacencyView:
        """Read-only snapshot of the live adjacency index."""
        return freeze_adjacency(self._adjacency, self._employees)

    def filtered_adjacency(
        self: GraphStore, predicate: InteractionPredicate
    ) -> AdjacencyView:
        """Replay the log through predicate into a detached snapshot.

        Used for time-windowed or type-windowed views. The predicate must not
        mutate the store; the live index is never touched.
        """
        return freeze_adjacency(
            build_adjacency(self._interactions, predicate), self._employees
        )

    def rebuild_adjacency(self: GraphStore) -> None:
        """Recompute the live index from scratch by replaying the log."""
        self._adjacency = build_adjacency(self._interactions)
        logger.debug(
            "adjacency_rebuilt", extra={"interactions": len(self._interactions)}
        )

    def verify_adjacency(self: GraphStore) -> bool:
        """Check that the incremental index equals a replay of the log."""
        replayed = build_adjacency(self._interactions)
        live = {k: v for k, v in self._adjacency.items() if v}
        if live != replayed:
            logger.warning(
                "adjacency_drift",
                extra={"live_rows": len(live), "replayed_rows": len(replayed)},
            )
            return False
        return True
