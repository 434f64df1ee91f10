"""Normalization of the loosely typed yes/no columns used by the data sources."""
from enum import Enum
from typing import Any


class YesNo(Enum):
    """Tri-state value of a free-text Yes/No column."""
    YES = 'yes'
    NO = 'no'
    UNKNOWN = 'unknown'

    def __bool__(self) -> bool:
        return self is YesNo.YES


def parse_yes_no(value: Any) -> YesNo:
    """Parse a startup flag column ('Yes' / 'No', any case)."""
    if not isinstance(value, str):
        return YesNo.UNKNOWN
    normalized = value.strip().lower()
    if normalized == 'yes':
        return YesNo.YES
    if normalized == 'no':
        return YesNo.NO
    return YesNo.UNKNOWN


def parse_csv_flag(value: Any) -> YesNo:
    """Parse a CSV flag column, which also accepts 'true' for yes."""
    if isinstance(value, str) and value.strip().lower() == 'true':
        return YesNo.YES
    return parse_yes_no(value)


def is_loose_true(value: Any) -> bool:
    """Check a partner checkbox column: True, 1 or the string 'true'."""
    if value is True:
        return True
    if isinstance(value, int) and not isinstance(value, bool):
        return value == 1
    return str(value).strip().lower() == 'true'
