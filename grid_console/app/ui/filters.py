from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DateRange:
    start_key: str = "startDate"
    end_key: str = "endDate"


def is_empty_filter(value: Any) -> bool:
    if value is None or value is False:
        return True
    return isinstance(value, str) and not value.strip()


def clean_filters(filters: dict[str, Any], date_range: DateRange | None = None) -> dict[str, Any]:
    cleaned = {
        key: value.strip() if isinstance(value, str) else value
        for key, value in filters.items()
        if not is_empty_filter(value)
    }
    if date_range is not None:
        has_start = date_range.start_key in cleaned
        has_end = date_range.end_key in cleaned
        if has_start != has_end:
            cleaned.pop(date_range.start_key, None)
            cleaned.pop(date_range.end_key, None)
    return cleaned


def clean_search_term(term: str | None) -> str | None:
    if term is None:
        return None
    clean = term.strip()
    return clean or None
