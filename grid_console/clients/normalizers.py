from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class PageResult:
    rows: list[dict[str, Any]] = field(default_factory=list)
    page: int = 1
    total_pages: int = 1
    total: int = 0


def normalize_listing(payload: Any, *, page: int = 1, limit: int = 50) -> PageResult:
    """Turn a list-endpoint envelope into a ``PageResult``.

    Endpoints that do not paginate answer with ``{success, data}`` only; those are
    treated as a single page holding every row.
    """
    safe_page = max(1, int(page or 1))
    safe_limit = max(1, int(limit or 50))

    rows: list[Any] = []
    if isinstance(payload, list):
        rows = payload
    elif isinstance(payload, dict):
        for key in ("data", "rows", "items"):
            if isinstance(payload.get(key), list):
                rows = payload[key]
                break

    records = [row for row in rows if isinstance(row, dict)]
    if not isinstance(payload, dict):
        return PageResult(rows=records, page=1, total_pages=1, total=len(records))

    total = _to_int(payload.get("total"))
    if total is None:
        total = len(records)

    total_pages = _to_int(payload.get("totalPages")) or _to_int(payload.get("total_pages"))
    if total_pages is None:
        paginated = _to_int(payload.get("page")) is not None
        total_pages = max(1, math.ceil(total / safe_limit)) if paginated else 1

    resolved_page = _to_int(payload.get("page")) or safe_page
    return PageResult(
        rows=records,
        page=max(1, resolved_page),
        total_pages=max(0, total_pages),
        total=max(0, total),
    )


def normalize_options(payload: Any) -> list[str] | dict[str, list[str]]:
    data = payload
    if isinstance(payload, dict):
        # some endpoints spread the option lists next to "success" instead of under "data"
        data = payload.get("data", {key: value for key, value in payload.items() if key != "success"})
    if isinstance(data, list):
        return [str(item) for item in data if item not in (None, "")]
    if isinstance(data, dict):
        return {
            str(key): [str(item) for item in values if item not in (None, "")]
            for key, values in data.items()
            if isinstance(values, list)
        }
    return []


def _to_int(value: Any) -> int | None:
    try:
        if value is None or value == "" or isinstance(value, bool):
            return None
        return int(value)
    except (TypeError, ValueError):
        return None
