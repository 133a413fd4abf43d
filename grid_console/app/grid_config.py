from __future__ import annotations

from dataclasses import dataclass

from grid_console.app.query_state import DEFAULT_LIMIT, SortDirection
from grid_console.app.ui.filters import DateRange
from grid_console.app.ui.forms import FieldDef
from grid_console.app.ui.listing_view import ColumnDef


@dataclass(frozen=True)
class FacetDef:
    """Filter-option endpoint ``GET <resource>/<path>``.

    A facet answering with a plain list feeds ``filter_key``. A facet answering with a
    mapping of lists feeds one filter per ``(response_key, filter_key)`` pair.
    """

    path: str
    filter_key: str | None = None
    fields: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class JobDef:
    name: str
    path: str
    label: str
    reload_on_success: bool = True


@dataclass(frozen=True)
class GridConfig:
    table_id: str
    resource_path: str
    title: str
    columns: tuple[ColumnDef, ...]
    default_sort: str
    default_direction: SortDirection = SortDirection.DESC
    new_column_direction: SortDirection = SortDirection.ASC
    limit: int = DEFAULT_LIMIT
    list_path: str | None = None
    search_key: str = "search"
    server_side: bool = True
    facets: tuple[FacetDef, ...] = ()
    filter_keys: tuple[str, ...] = ()
    date_range: DateRange | None = None
    flag_column: str | None = None
    soft_delete: bool = False
    jobs: tuple[JobDef, ...] = ()
    fields: tuple[FieldDef, ...] = ()
    summary_keys: tuple[str, ...] = ()
    id_key: str = "id"
    creatable: bool = True
    editable: bool = True
    deletable: bool = True
    admin_only: bool = False

    def column(self, key: str) -> ColumnDef | None:
        return next((column for column in self.columns if column.key == key), None)

    def job(self, name: str) -> JobDef | None:
        return next((job for job in self.jobs if job.name == name), None)
