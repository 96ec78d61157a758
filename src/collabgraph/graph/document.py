"""Text document format for a full collaboration graph snapshot.

The document is a JSON-compatible object with three arrays of flat,
string-valued records::

    {
      "employees": [{"id": "...", "name": "...", "email": "...", "department": "..."}],
      "chatIdentities": [{"externalId": "...", "handle": "...", "employeeId": "..."}],
      "interactions": [{"issueKey": "...", "employeeA": "...", "employeeB": "...",
                        "type": "BUG", "timestamp": "2024-01-01T00:00:00Z"}]
    }

Parsing is a small recursive-descent parser. Every parse function takes the
text and a position and returns ``(value, new_position)``; no scan state is
shared between calls.

Loading is best effort per record: incomplete or invalid records are skipped
and logged, but a missing top-level array or structural damage raises
MalformedDocumentError. Interactions are always replayed through
``record_interaction_by_employee`` so the adjacency index is derived from
the log, never read from the document.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from collabgraph.errors import GraphError, MalformedDocumentError
from collabgraph.graph.types import (
    ChatIdentity,
    Employee,
    InteractionType,
    parse_timestamp,
)

if TYPE_CHECKING:
    from collabgraph.graph.store import GraphStore

logger = logging.getLogger(__name__)

EMPLOYEES_KEY = "employees"
IDENTITIES_KEY = "chatIdentities"
INTERACTIONS_KEY = "interactions"

# Documents written before chat identities were generalised
LEGACY_IDENTITIES_KEY = "slackUsers"
LEGACY_EXTERNAL_ID_FIELD = "slackId"

INTERACTION_FIELDS = ("issueKey", "employeeA", "employeeB", "type", "timestamp")

# -- Writing --

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def quote(value: str) -> str:
    """Quote a string, escaping characters that cannot be written raw.

    Lone surrogates are written as ``\\uXXXX`` so the document stays
    encodable as UTF-8.
    """
    out = ['"']
    for ch in value:
        escaped = _ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
        elif ord(ch) < 0x20 or 0xD800 <= ord(ch) < 0xE000:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def _format_record(record: dict[str, str]) -> str:
    return "{" + ",".join(f"{quote(k)}:{quote(v)}" for k, v in record.items()) + "}"


def _format_array(key: str, records: list[dict[str, str]]) -> str:
    if not records:
        return f"  {quote(key)}: []"
    body = ",\n".join(f"    {_format_record(r)}" for r in records)
    return f"  {quote(key)}: [\n{body}\n  ]"


def serialize_store(store: GraphStore) -> str:
    """Render the store as a document.

    Employees are sorted by id and identities by external id; interactions
    keep log order.
    """
    employees = [e.to_dict() for _, e in sorted(store.employees.items())]
    identities = [i.to_dict() for _, i in sorted(store.chat_identities.items())]
    interactions = [i.to_dict() for i in store.interactions]
    sections = [
        _format_array(EMPLOYEES_KEY, employees),
        _format_array(IDENTITIES_KEY, identities),
        _format_array(INTERACTIONS_KEY, interactions),
    ]
    return "{\n" + ",\n".join(sections) + "\n}\n"


# -- Parsing --

_WHITESPACE = " \t\r\n"
_STRING_RUN = re.compile(r'[^"\\]*')
_LITERAL = re.compile(r"-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?|true|false|null")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_UNESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
}
_LITERAL_VALUES: dict[str, Any] = {"true": True, "false": False, "null": None}

# Well-formed documents nest three levels deep
MAX_DEPTH = 64


def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _WHITESPACE:
        pos += 1
    return pos


def _peek(text: str, pos: int) -> str:
    if pos >= len(text):
        raise MalformedDocumentError("Unexpected end of document", pos)
    return text[pos]


def _read_hex4(text: str, pos: int) -> int:
    digits = text[pos : pos + 4]
    if len(digits) != 4 or not _HEX_DIGITS.issuperset(digits):
        raise MalformedDocumentError("Invalid \\u escape", pos)
    return int(digits, 16)


def _parse_string(text: str, pos: int) -> tuple[str, int]:
    start = pos
    pos += 1  # opening quote
    chunks: list[str] = []
    while True:
        run = _STRING_RUN.match(text, pos)
        if run is not None and run.end() > pos:
            chunks.append(run.group())
            pos = run.end()
        if pos >= len(text):
            raise MalformedDocumentError("Unterminated string", start)
        ch = text[pos]
        if ch == '"':
            return "".join(chunks), pos + 1
        # Backslash escape
        pos += 1
        esc = _peek(text, pos)
        if esc == "u":
            code = _read_hex4(text, pos + 1)
            pos += 5
            if 0xD800 <= code < 0xDC00 and text.startswith("\\u", pos):
                low = _read_hex4(text, pos + 2)
                if 0xDC00 <= low < 0xE000:
                    code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
                    pos += 6
            chunks.append(chr(code))
            continue
        # Unknown escapes keep the escaped character
        chunks.append(_UNESCAPES.get(esc, esc))
        pos += 1


def _parse_literal(text: str, pos: int) -> tuple[Any, int]:
    match = _LITERAL.match(text, pos)
    if match is None:
        raise MalformedDocumentError(f"Unexpected character {text[pos]!r}", pos)
    token = match.group()
    if token in _LITERAL_VALUES:
        return _LITERAL_VALUES[token], match.end()
    try:
        number = float(token) if any(c in token for c in ".eE") else int(token)
    except ValueError:
        raise MalformedDocumentError("Number too large", pos) from None
    return number, match.end()


def _parse_object(text: str, pos: int, depth: int) -> tuple[dict[str, Any], int]:
    pos = _skip_ws(text, pos + 1)
    members: dict[str, Any] = {}
    while _peek(text, pos) != "}":
        if text[pos] != '"':
            raise MalformedDocumentError("Expected string key", pos)
        key, pos = _parse_string(text, pos)
        pos = _skip_ws(text, pos)
        if _peek(text, pos) != ":":
            raise MalformedDocumentError("Expected ':' after key", pos)
        value, pos = parse_value(text, pos + 1, depth)
        members[key] = value
        pos = _skip_ws(text, pos)
        if _peek(text, pos) == ",":
            pos = _skip_ws(text, pos + 1)
        elif text[pos] != "}":
            raise MalformedDocumentError("Expected ',' or '}'", pos)
    return members, pos + 1


def _parse_array(text: str, pos: int, depth: int) -> tuple[list[Any], int]:
    pos = _skip_ws(text, pos + 1)
    items: list[Any] = []
    while _peek(text, pos) != "]":
        value, pos = parse_value(text, pos, depth)
        items.append(value)
        pos = _skip_ws(text, pos)
        if _peek(text, pos) == ",":
            pos = _skip_ws(text, pos + 1)
        elif text[pos] != "]":
            raise MalformedDocumentError("Expected ',' or ']'", pos)
    return items, pos + 1


def parse_value(text: str, pos: int = 0, depth: int = 0) -> tuple[Any, int]:
    """Parse one value starting at pos, skipping leading whitespace.

    depth is the number of objects and arrays enclosing pos.
    """
    pos = _skip_ws(text, pos)
    ch = _peek(text, pos)
    if ch == '"':
        return _parse_string(text, pos)
    if ch in "{[" and depth >= MAX_DEPTH:
        raise MalformedDocumentError("Document nested too deeply", pos)
    if ch == "{":
        return _parse_object(text, pos, depth + 1)
    if ch == "[":
        return _parse_array(text, pos, depth + 1)
    return _parse_literal(text, pos)


def parse_document(text: str) -> dict[str, Any]:
    """Parse document text into its top-level object."""
    root, pos = parse_value(text, 0)
    if not isinstance(root, dict):
        raise MalformedDocumentError("Document root must be an object", 0)
    pos = _skip_ws(text, pos)
    if pos != len(text):
        raise MalformedDocumentError("Unexpected trailing content", pos)
    return root


# -- Loading --


@dataclass
class LoadReport:
    """Counts of records applied and skipped while loading a document."""

    employees: int = 0
    chat_identities: int = 0
    interactions: int = 0
    skipped: int = 0


def _require_array(root: dict[str, Any], *keys: str) -> list[Any]:
    for key in keys:
        value = root.get(key)
        if isinstance(value, list):
            return value
    raise MalformedDocumentError(f"Missing top-level array: {keys[0]}")


def _string_fields(record: Any) -> dict[str, str] | None:
    """Keep only the string-valued fields of a record."""
    if not isinstance(record, dict):
        return None
    return {k: v for k, v in record.items() if isinstance(v, str)}


def _skip(report: LoadReport, event: str, index: int, reason: str) -> None:
    report.skipped += 1
    logger.warning(event, extra={"record_index": index, "reason": reason})


def load_document(store: GraphStore, text: str) -> LoadReport:
    """Apply a document's records to store, skipping bad records."""
    root = parse_document(text)
    raw_employees = _require_array(root, EMPLOYEES_KEY)
    raw_identities = _require_array(root, IDENTITIES_KEY, LEGACY_IDENTITIES_KEY)
    raw_interactions = _require_array(root, INTERACTIONS_KEY)

    report = LoadReport()

    for index, raw in enumerate(raw_employees):
        fields = _string_fields(raw)
        if not fields or not fields.get("id"):
            _skip(report, "employee_record_skipped", index, "missing id")
            continue
        try:
            store.add_employee(Employee.from_dict(fields))
        except GraphError as e:
            _skip(report, "employee_record_skipped", index, str(e))
            continue
        report.employees += 1

    for index, raw in enumerate(raw_identities):
        fields = _string_fields(raw)
        if fields is not None and "externalId" not in fields:
            legacy_id = fields.get(LEGACY_EXTERNAL_ID_FIELD)
            if legacy_id is not None:
                fields["externalId"] = legacy_id
        if not fields or "externalId" not in fields or "employeeId" not in fields:
            _skip(
                report,
                "identity_record_skipped",
                index,
                "missing externalId or employeeId",
            )
            continue
        try:
            store.add_chat_identity(ChatIdentity.from_dict(fields))
        except GraphError as e:
            _skip(report, "identity_record_skipped", index, str(e))
            continue
        report.chat_identities += 1

    for index, raw in enumerate(raw_interactions):
        fields = _string_fields(raw)
        if not fields or any(f not in fields for f in INTERACTION_FIELDS):
            _skip(report, "interaction_record_skipped", index, "missing field")
            continue
        try:
            interaction_type = InteractionType.parse(fields["type"])
            timestamp = parse_timestamp(fields["timestamp"])
            recorded = store.record_interaction_by_employee(
                fields["issueKey"],
                fields["employeeA"],
                fields["employeeB"],
                interaction_type,
                timestamp,
            )
        except (GraphError, ValueError) as e:
            _skip(report, "interaction_record_skipped", index, str(e))
            continue
        if recorded is not None:
            report.interactions += 1

    logger.info(
        "graph_document_loaded",
        extra={
            "employees": report.employees,
            "chat_identities": report.chat_identities,
            "interactions": report.interactions,
            "skipped": report.skipped,
        },
    )
    return report
