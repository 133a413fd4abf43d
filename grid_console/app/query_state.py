from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

DEFAULT_LIMIT = 50


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True)
class QueryState:
    """Everything that decides what the next list request fetches.

    Instances are immutable; every interaction produces a new state, which also makes a
    state usable as the tag of an in-flight request.
    """

    page: int = 1
    limit: int = DEFAULT_LIMIT
    sort_column: str = ""
    sort_direction: SortDirection = SortDirection.ASC
    filters: tuple[tuple[str, Any], ...] = field(default_factory=tuple)
    search_term: str | None = None
    show_deleted: bool = False

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.limit < 1:
            raise ValueError("limit must be >= 1")

    @property
    def filter_map(self) -> dict[str, Any]:
        return dict(self.filters)

    def with_page(self, page: int) -> "QueryState":
        return replace(self, page=page)

    def with_sort(self, column: str, direction: SortDirection) -> "QueryState":
        return replace(self, sort_column=column, sort_direction=direction, page=1)

    def with_filters(self, filters: dict[str, Any]) -> "QueryState":
        return replace(self, filters=tuple(sorted(filters.items())), page=1)

    def with_search(self, term: str | None) -> "QueryState":
        return replace(self, search_term=term, page=1)

    def with_deleted(self, show_deleted: bool) -> "QueryState":
        return replace(self, show_deleted=show_deleted, page=1)

    def to_params(self, search_key: str = "search") -> dict[str, Any]:
        params: dict[str, Any] = {
            "page": self.page,
            "limit": self.limit,
            "sortBy": self.sort_column,
            "sortOrder": self.sort_direction.value,
        }
        params.update(self.filter_map)
        if self.search_term:
            params[search_key] = self.search_term
        return params
