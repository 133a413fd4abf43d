from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

EMPTY_VALUE = ""
CHECKED = "☑"
UNCHECKED = "☐"
TRUTHY_GLYPH = "○"
DEFAULT_COLUMN_WIDTH = 120
SENSITIVE_KEYS = {"token", "secret", "password", "access_token"}

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_NUMBER = re.compile(r"^-?\d+(\.\d+)?$")
_LOOSE_DATE = re.compile(r"^(\d{4})[-/](\d{1,2})[-/](\d{1,2})$")


class ColumnKind(str, Enum):
    TEXT = "text"
    DATE = "date"
    DATETIME = "datetime"
    BOOLEAN = "boolean"
    MONEY = "money"


@dataclass(frozen=True)
class ColumnDef:
    key: str
    label: str
    kind: ColumnKind = ColumnKind.TEXT
    sortable: bool = True
    width: int = DEFAULT_COLUMN_WIDTH


def is_truthy(value: Any) -> bool:
    """Boolean-like server values: ``True``, ``"TRUE"`` in any case, or ``"○"``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        clean = value.strip()
        return clean.lower() == "true" or clean == TRUTHY_GLYPH
    return False


def parse_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    loose = _LOOSE_DATE.match(value.strip())
    if loose:
        year, month, day = (int(part) for part in loose.groups())
        try:
            return datetime(year, month, day)
        except ValueError:
            return None
    text = value.strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def to_local(moment: datetime) -> datetime:
    return moment.astimezone() if moment.tzinfo else moment


def format_date(value: Any) -> str:
    if isinstance(value, str) and _ISO_DATE.match(value.strip()):
        year, month, day = (int(part) for part in value.strip().split("-"))
        return f"{year}/{month}/{day}"
    moment = parse_datetime(value)
    if moment is None:
        return normalize_value(value)
    local = to_local(moment)
    return f"{local.year}/{local.month}/{local.day}"


def format_datetime(value: Any) -> str:
    moment = parse_datetime(value)
    if moment is None:
        return normalize_value(value)
    local = to_local(moment)
    return f"{local.year}/{local.month}/{local.day} {local:%H:%M}"


def format_money(value: Any) -> str:
    amount = _to_number(value)
    if amount is None:
        return normalize_value(value)
    if amount == int(amount):
        return f"¥{int(amount):,}"
    return f"¥{amount:,.2f}"


def normalize_value(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    return str(value)


def format_cell(column: ColumnDef, value: Any) -> str:
    if any(token in column.key.lower() for token in SENSITIVE_KEYS):
        return EMPTY_VALUE
    if column.kind is ColumnKind.BOOLEAN:
        return CHECKED if is_truthy(value) else UNCHECKED
    if value is None or value == "":
        return EMPTY_VALUE
    if column.kind is ColumnKind.DATE:
        return format_date(value)
    if column.kind is ColumnKind.DATETIME:
        return format_datetime(value)
    if column.kind is ColumnKind.MONEY:
        return format_money(value)
    return normalize_value(value)


def sort_rows(
    rows: list[dict[str, Any]],
    column: ColumnDef,
    direction: str = "asc",
) -> list[dict[str, Any]]:
    """Client-side ordering for endpoints that return every row at once.

    Empty cells always sink to the bottom, whatever the direction.
    """
    filled = [row for row in rows if not _is_empty(row.get(column.key))]
    empty = [row for row in rows if _is_empty(row.get(column.key))]

    def _sort_key(row: dict[str, Any]) -> tuple[int, Any]:
        value = row.get(column.key)
        if column.kind is ColumnKind.BOOLEAN or isinstance(value, bool):
            return (0, 1 if is_truthy(value) else 0)
        number = _to_number(value)
        if number is not None:
            return (0, number)
        moment = parse_datetime(value)
        if moment is not None:
            return (1, to_local(moment).replace(tzinfo=None).timestamp())
        return (2, normalize_value(value).lower())

    ordered = sorted(filled, key=_sort_key, reverse=direction == "desc")
    return ordered + empty


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text[:1] in {"¥", "$"}:
        text = text[1:].replace(",", "")
    return float(text) if _NUMBER.match(text) else None
