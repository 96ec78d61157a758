"""Interaction predicates for filtered adjacency views.

Each factory returns a pure callable usable with
``GraphStore.filtered_adjacency`` and the filtered exports.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from collabgraph.graph.adjacency import InteractionPredicate
from collabgraph.graph.types import Interaction, InteractionType


def _aware(dt: datetime) -> datetime:
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt


def between(
    since: datetime | None = None,
    until: datetime | None = None,
) -> InteractionPredicate:
    """Interactions strictly after since and at or before until."""
    lower = _aware(since) if since else None
    upper = _aware(until) if until else None

    def predicate(interaction: Interaction) -> bool:
        if lower is not None and not interaction.timestamp > lower:
            return False
        if upper is not None and interaction.timestamp > upper:
            return False
        return True

    return predicate


def within_last(
    window: timedelta,
    now: datetime | None = None,
) -> InteractionPredicate:
    """Interactions newer than now - window."""
    reference = _aware(now) if now else datetime.now(UTC)
    return between(since=reference - window)


def of_types(*types: InteractionType) -> InteractionPredicate:
    """Interactions whose type is one of types."""
    allowed = frozenset(types)

    def predicate(interaction: Interaction) -> bool:
        return interaction.type in allowed

    return predicate


def on_issue(*issue_keys: str) -> InteractionPredicate:
    keys = frozenset(issue_keys)

    def predicate(interaction: Interaction) -> bool:
        return interaction.issue_key in keys

    return predicate


def all_of(*predicates: InteractionPredicate) -> InteractionPredicate:
    """Combine predicates; an empty combination accepts everything."""

    def predicate(interaction: Interaction) -> bool:
        return all(p(interaction) for p in predicates)

    return predicate


def reject_all(interaction: Interaction) -> bool:
    return False
