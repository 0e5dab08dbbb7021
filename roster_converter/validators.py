"""Row validation for roster CSV files.

Each field rule group is a small check over ``(HeaderMap, row)`` returning a
``FieldResult``. ``validate_row`` runs the checks in ``ROW_CHECKS`` order and
stops at the first failure, so a row yields either one ``Record`` or exactly
one error message.

Order of rules:
- field count matches the header
- INTERNAL_ID: present, 8 characters, base-10 integer, not negative
- FIRST_NAME: present, at most 15 characters, not empty
- MIDDLE_NAME: present, at most 15 characters
- LAST_NAME: present, at most 15 characters, not empty
- PHONE_NUM: present, DDD-DDD-DDDD
"""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from .schema import (
    FIRST_NAME,
    ID_LENGTH,
    INTEGER_PATTERN,
    INTERNAL_ID,
    LAST_NAME,
    MIDDLE_NAME,
    NAME_MAX_LENGTH,
    PHONE_NUM,
    PHONE_PATTERN,
    Name,
    Record,
)


@dataclass(frozen=True)
class HeaderMap:
    """Column name to index lookup built from a file's header record."""

    columns: dict[str, int]
    width: int

    @classmethod
    def from_row(cls, row: Sequence[str]) -> HeaderMap:
        # Repeated names resolve to their last position
        return cls(columns={name: index for index, name in enumerate(row)}, width=len(row))

    def index_of(self, column: str) -> int | None:
        return self.columns.get(column)


@dataclass(frozen=True)
class RowError:
    """A validation failure for one record of a file."""

    line_number: int
    message: str


@dataclass(frozen=True)
class FieldResult:
    """Outcome of a single check: a value on success, a message on failure."""

    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class RowResult:
    """Outcome of validating a whole row."""

    record: Record | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _quote(value: str) -> str:
    """Double-quote a value for an error message, escaping as JSON does."""
    return json.dumps(value, ensure_ascii=False)


def _lookup(header: HeaderMap, row: Sequence[str], column: str) -> FieldResult:
    index = header.index_of(column)
    if index is None:
        return FieldResult(error=f"err: missing: {_quote(column)} error field in header")
    return FieldResult(value=row[index])


def _check_name(
    header: HeaderMap,
    row: Sequence[str],
    column: str,
    label: str,
    *,
    required: bool,
) -> FieldResult:
    found = _lookup(header, row, column)
    if not found.ok:
        return found

    value = found.value
    if len(value) > NAME_MAX_LENGTH:
        return FieldResult(
            error=(
                f"err: {label} field: {_quote(value)} "
                f"should not exceed {NAME_MAX_LENGTH} characters"
            )
        )
    if required and value == "":
        return FieldResult(error=f"err: {label} field should not be empty")
    return FieldResult(value=value)


def check_field_count(header: HeaderMap, row: Sequence[str]) -> FieldResult:
    """The row must have as many fields as the header."""
    if len(row) != header.width:
        return FieldResult(
            error=f"err: number of fields: {len(row)} does not match header: {header.width}"
        )
    return FieldResult(value=len(row))


def check_internal_id(header: HeaderMap, row: Sequence[str]) -> FieldResult:
    """
    INTERNAL_ID must be 8 characters that parse to a non-negative integer.

    The length is checked on the raw string before parsing, so a sign
    character counts toward the 8 characters.
    """
    found = _lookup(header, row, INTERNAL_ID)
    if not found.ok:
        return found

    raw = found.value
    if len(raw) != ID_LENGTH:
        return FieldResult(error=f"err: id field: {_quote(raw)} is not an {ID_LENGTH} digit integer")

    if not INTEGER_PATTERN.fullmatch(raw):
        return FieldResult(
            error=(
                f"err: id field: {_quote(raw)} either empty, or an invalid integer, "
                f"invalid base-10 syntax"
            )
        )

    internal_id = int(raw)
    if internal_id < 0:
        return FieldResult(error=f"err: id: {internal_id} should not be negative")
    return FieldResult(value=internal_id)


def check_first_name(header: HeaderMap, row: Sequence[str]) -> FieldResult:
    return _check_name(header, row, FIRST_NAME, "first name", required=True)


def check_middle_name(header: HeaderMap, row: Sequence[str]) -> FieldResult:
    return _check_name(header, row, MIDDLE_NAME, "middle name", required=False)


def check_last_name(header: HeaderMap, row: Sequence[str]) -> FieldResult:
    return _check_name(header, row, LAST_NAME, "last name", required=True)


def check_phone(header: HeaderMap, row: Sequence[str]) -> FieldResult:
    """PHONE_NUM must be DDD-DDD-DDDD; an empty value fails the same way."""
    found = _lookup(header, row, PHONE_NUM)
    if not found.ok:
        return found

    phone = found.value
    if not PHONE_PATTERN.fullmatch(phone):
        return FieldResult(
            error=f"err: phone field: {_quote(phone)} either empty, or an invalid phone number"
        )
    return FieldResult(value=phone)


Check = Callable[[HeaderMap, Sequence[str]], FieldResult]

ROW_CHECKS: tuple[tuple[str, Check], ...] = (
    ("field_count", check_field_count),
    ("internal_id", check_internal_id),
    ("first", check_first_name),
    ("middle", check_middle_name),
    ("last", check_last_name),
    ("phone", check_phone),
)


def validate_row(header: HeaderMap, row: Sequence[str]) -> RowResult:
    """Validate one data row, returning a Record or the first failure."""
    values: dict[str, Any] = {}
    for key, check in ROW_CHECKS:
        result = check(header, row)
        if not result.ok:
            return RowResult(error=result.error)
        values[key] = result.value

    return RowResult(
        record=Record(
            internal_id=values["internal_id"],
            name=Name(first=values["first"], middle=values["middle"], last=values["last"]),
            phone=values["phone"],
        )
    )
