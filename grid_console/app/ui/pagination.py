from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PaginationSummary:
    page: int = 1
    total_pages: int = 1
    total: int = 0

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def label(self) -> str:
        return f"Page {self.page} / {self.total_pages} ({self.total} total)"


def shift_page(page: int, delta: int, total_pages: int) -> int | None:
    """Target page for ``delta``, or ``None`` when it falls outside ``[1, total_pages]``."""
    target = page + delta
    if delta == 0 or target < 1 or target > total_pages:
        return None
    return target
