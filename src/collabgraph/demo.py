"""Sample organisations for trying the graph out.

Interaction timestamps are relative to ``now`` so that windowed views
(last 7 / 14 days) always have something on both sides of the cutoff.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from collabgraph.graph.store import GraphStore
from collabgraph.graph.types import ChatIdentity, Employee, InteractionType

ISSUE = InteractionType.ISSUE
BUG = InteractionType.BUG
CODE_REVIEW = InteractionType.CODE_REVIEW
DISCUSSION = InteractionType.DISCUSSION

StaffRow = tuple[str, str, str, str, str, str]
HistoryRow = tuple[str, str, str, InteractionType, timedelta]

# (id, name, email, department, chat id, handle)
FOUR_PERSON_STAFF: list[StaffRow] = [
    ("E-1001", "Alice", "alice@acme.com", "Platform", "U1", "alice"),
    ("E-1002", "Bob", "bob@acme.com", "SRE", "U2", "bob"),
    ("E-1003", "Cara", "cara@acme.com", "Payments", "U3", "cara"),
    ("E-1004", "Dave", "dave@acme.com", "Platform", "U4", "dave"),
]

# (issue, chat a, chat b, type, age)
FOUR_PERSON_HISTORY: list[HistoryRow] = [
    ("JIRA-123", "U1", "U2", ISSUE, timedelta(days=3)),
    ("BUG-77", "U1", "U2", BUG, timedelta(days=2)),
    ("JIRA-200", "U1", "U3", ISSUE, timedelta(days=1)),
    ("BUG-90", "U2", "U4", BUG, timedelta(days=1)),
    ("JIRA-201", "U3", "U4", ISSUE, timedelta(hours=6)),
    # Older than a week
    ("JIRA-050", "U1", "U4", ISSUE, timedelta(days=30)),
    ("BUG-10", "U2", "U3", BUG, timedelta(days=15)),
]

EIGHT_PERSON_STAFF: list[StaffRow] = [
    ("E-2001", "Alice", "alice@acme.com", "Platform", "U101", "alice"),
    ("E-2002", "Bob", "bob@acme.com", "SRE", "U102", "bob"),
    ("E-2003", "Cara", "cara@acme.com", "Payments", "U103", "cara"),
    ("E-2004", "Dave", "dave@acme.com", "Platform", "U104", "dave"),
    ("E-2005", "Eve", "eve@acme.com", "Security", "U105", "eve"),
    ("E-2006", "Frank", "frank@acme.com", "Mobile", "U106", "frank"),
    ("E-2007", "Grace", "grace@acme.com", "Data", "U107", "grace"),
    ("E-2008", "Heidi", "heidi@acme.com", "UX", "U108", "heidi"),
]

EIGHT_PERSON_HISTORY: list[HistoryRow] = [
    ("JIRA-800", "U101", "U102", ISSUE, timedelta(days=3)),
    ("BUG-801", "U101", "U102", BUG, timedelta(days=1)),
    ("CR-802", "U101", "U103", CODE_REVIEW, timedelta(days=2)),
    ("JIRA-803", "U101", "U104", ISSUE, timedelta(days=10)),
    ("BUG-804", "U102", "U104", BUG, timedelta(days=5)),
    ("DISC-805", "U102", "U105", DISCUSSION, timedelta(hours=7)),
    ("JIRA-806", "U103", "U107", ISSUE, timedelta(days=6)),
    ("CR-807", "U104", "U106", CODE_REVIEW, timedelta(days=4)),
    ("JIRA-808", "U105", "U106", ISSUE, timedelta(days=1)),
    ("BUG-809", "U105", "U108", BUG, timedelta(days=2)),
    ("DISC-810", "U106", "U107", DISCUSSION, timedelta(days=3)),
    ("CR-811", "U107", "U108", CODE_REVIEW, timedelta(days=1)),
    ("JIRA-812", "U101", "U102", ISSUE, timedelta(days=2)),
    ("DISC-813", "U105", "U106", DISCUSSION, timedelta(hours=12)),
    # Older than two weeks
    ("JIRA-750", "U101", "U108", ISSUE, timedelta(days=40)),
    ("BUG-751", "U102", "U103", BUG, timedelta(days=20)),
    ("DISC-752", "U104", "U107", DISCUSSION, timedelta(days=25)),
    ("JIRA-753", "U106", "U102", ISSUE, timedelta(days=31)),
]


def _build(
    staff: list[StaffRow], history: list[HistoryRow], now: datetime | None
) -> GraphStore:
    now = now or datetime.now(UTC)
    store = GraphStore()
    for employee_id, name, email, department, chat_id, handle in staff:
        store.add_employee(Employee(employee_id, name, email, department))
        store.add_chat_identity(ChatIdentity(chat_id, handle, employee_id))
    for issue_key, chat_a, chat_b, interaction_type, age in history:
        store.record_interaction_by_identity(
            issue_key, chat_a, chat_b, interaction_type, now - age
        )
    return store


def build_four_person_demo(now: datetime | None = None) -> GraphStore:
    """Four employees across three departments, seven interactions."""
    return _build(FOUR_PERSON_STAFF, FOUR_PERSON_HISTORY, now)


def build_eight_person_demo(now: datetime | None = None) -> GraphStore:
    """Eight employees across seven departments, eighteen interactions."""
    return _build(EIGHT_PERSON_STAFF, EIGHT_PERSON_HISTORY, now)


DEMOS = {
    4: build_four_person_demo,
    8: build_eight_person_demo,
}
