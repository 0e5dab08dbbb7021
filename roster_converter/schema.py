"""Schema definitions for roster CSV conversion."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Final

# =============================================================================
# INPUT COLUMNS
# =============================================================================

INTERNAL_ID: Final[str] = "INTERNAL_ID"
FIRST_NAME: Final[str] = "FIRST_NAME"
MIDDLE_NAME: Final[str] = "MIDDLE_NAME"
LAST_NAME: Final[str] = "LAST_NAME"
PHONE_NUM: Final[str] = "PHONE_NUM"

# Must all appear in the header row, in any order. Other columns are ignored.
REQUIRED_COLUMNS: Final[tuple[str, ...]] = (
    INTERNAL_ID,
    FIRST_NAME,
    MIDDLE_NAME,
    LAST_NAME,
    PHONE_NUM,
)

# =============================================================================
# FIELD RULES
# =============================================================================

ID_LENGTH: Final[int] = 8
NAME_MAX_LENGTH: Final[int] = 15

# Optional sign followed by ASCII digits, the accepted base-10 integer syntax
INTEGER_PATTERN: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")

# Matched with fullmatch so a trailing newline is not accepted
PHONE_PATTERN: Final[re.Pattern[str]] = re.compile(r"[0-9]{3}-[0-9]{3}-[0-9]{4}")

# =============================================================================
# OUTPUT
# =============================================================================

CSV_EXTENSION: Final[str] = ".csv"
JSON_EXTENSION: Final[str] = ".json"
JSON_INDENT: Final[int] = 2

ERROR_REPORT_HEADER: Final[tuple[str, str]] = ("LINE_NUM", "ERROR_MSG")


@dataclass(frozen=True)
class Name:
    """A person's name; ``middle`` may be empty."""

    first: str
    middle: str
    last: str

    def to_dict(self) -> dict[str, str]:
        data = {"first": self.first}
        if self.middle:
            data["middle"] = self.middle
        data["last"] = self.last
        return data


@dataclass(frozen=True)
class Record:
    """A validated roster row, ready for JSON output."""

    internal_id: int
    name: Name
    phone: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.internal_id,
            "name": self.name.to_dict(),
            "phone": self.phone,
        }


# =============================================================================
# DATA INTERPRETATION NOTES
# =============================================================================

DATA_INTERPRETATION = """
## Data Interpretation Decisions

### Line Numbers
- Line numbers count CSV records, starting at 1 for the header record
- Malformed records count; blank lines are skipped by the reader and do not
- A quoted value spanning several physical lines is one record

### INTERNAL_ID
- The length rule counts characters, not digits, and runs before parsing
- "-1234567" is 8 characters, parses to -1234567 and fails the sign rule
- "+1234567" is 8 characters and parses to 1234567 (accepted)
- "00000042" is accepted as 42

### Names
- Values are used verbatim; surrounding whitespace is not trimmed
- The 15 limit counts characters, not bytes: "Jérôme" is 6 long
- MIDDLE_NAME may be empty and is then omitted from the JSON object

### Column Sources
| Output Field | Source Column | Rule |
|--------------|---------------|------|
| id | INTERNAL_ID | exactly 8 characters, base-10 integer, >= 0 |
| name.first | FIRST_NAME | 1-15 characters |
| name.middle | MIDDLE_NAME | 0-15 characters, omitted when empty |
| name.last | LAST_NAME | 1-15 characters |
| phone | PHONE_NUM | DDD-DDD-DDDD |
"""
