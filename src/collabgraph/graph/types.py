"""Node and event types for the collaboration graph."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


def parse_timestamp(s: str) -> datetime:
    """Parse ISO datetime string, handling Z suffix and ensuring timezone awareness."""
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    try:
        return dt.astimezone(UTC)
    except OverflowError as e:
        raise ValueError(f"Timestamp out of range in UTC: {s}") from e


def format_timestamp(dt: datetime) -> str:
    """Render a UTC instant as ISO-8601 with a Z suffix."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


class InteractionType(Enum):
    """Kind of collaboration an interaction records."""

    ISSUE = "ISSUE"
    BUG = "BUG"
    CODE_REVIEW = "CODE_REVIEW"
    DISCUSSION = "DISCUSSION"

    # Older documents call tickets JIRA
    JIRA = "ISSUE"

    @classmethod
    def parse(cls, name: str) -> InteractionType:
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown interaction type: {name}") from None


@dataclass(frozen=True)
class Employee:
    """Company identity. Immutable once registered."""

    id: str
    name: str = ""
    email: str = ""
    department: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "department": self.department,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Employee:
        return cls(
            id=d["id"],
            name=d.get("name", ""),
            email=d.get("email", ""),
            department=d.get("department", ""),
        )


@dataclass(frozen=True)
class ChatIdentity:
    """Chat-system identity mapped to exactly one employee.

    The external_id is the stable anchor; the handle is display only.
    """

    external_id: str
    handle: str = ""
    employee_id: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "externalId": self.external_id,
            "handle": self.handle,
            "employeeId": self.employee_id,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ChatIdentity:
        return cls(
            external_id=d["externalId"],
            handle=d.get("handle", ""),
            employee_id=d["employeeId"],
        )


class Interaction(BaseModel):
    """One collaboration event between two employees on an issue."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    issue_key: str
    employee_a: str
    employee_b: str
    type: InteractionType
    timestamp: datetime

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return InteractionType.parse(value)
        return value

    @field_validator("timestamp", mode="after")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def involves(self, employee_id: str) -> bool:
        return employee_id in (self.employee_a, self.employee_b)

    def to_dict(self) -> dict[str, str]:
        return {
            "issueKey": self.issue_key,
            "employeeA": self.employee_a,
            "employeeB": self.employee_b,
            "type": self.type.name,
            "timestamp": format_timestamp(self.timestamp),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Interaction:
        return cls.model_validate(d)
