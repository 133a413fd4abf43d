from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from grid_console.app.column_layout import ColumnLayoutStore
from grid_console.app.error_presenter import build_error_payload
from grid_console.app.grid_config import FacetDef, GridConfig
from grid_console.app.infrastructure.logging.logger import get_logger, log_action
from grid_console.app.notifications import NotificationChannel, Severity
from grid_console.app.query_state import QueryState, SortDirection
from grid_console.app.record_lifecycle import LifecycleState, lifecycle_state
from grid_console.app.ui.filters import clean_filters, clean_search_term
from grid_console.app.ui.listing_view import format_cell, is_truthy, sort_rows
from grid_console.app.ui.pagination import PaginationSummary, shift_page
from grid_console.clients.http_client import GatewayResult
from grid_console.clients.normalizers import PageResult, normalize_listing, normalize_options
from grid_console.clients.resources_client import ResourceClient

MIN_COLUMN_WIDTH = 50
SORT_INDICATORS = {SortDirection.ASC: "▲", SortDirection.DESC: "▼"}
EMPTY_PLACEHOLDER = "No records found."
FAILED_PLACEHOLDER = "Failed to load data."

logger = get_logger(__name__)


class GridStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class ColumnView:
    key: str
    label: str
    width: int
    sort_indicator: str = ""


@dataclass(frozen=True)
class RenderedRow:
    record: dict[str, Any]
    cells: tuple[str, ...]
    flagged: bool = False
    deleted: bool = False


@dataclass(frozen=True)
class GridView:
    columns: tuple[ColumnView, ...] = ()
    rows: tuple[RenderedRow, ...] = ()
    pagination: PaginationSummary = field(default_factory=PaginationSummary)
    placeholder: str | None = None


@dataclass(frozen=True)
class LoadTicket:
    """Tag of one in-flight list request."""

    sequence: int
    state: QueryState


class GridController:
    """Query state, list loading and rendering for one resource table.

    All interactions are plain method calls; an adapter (terminal, tests) reads
    ``view`` after each call. Loads are not serialized: every load is tagged with the
    query state it was issued for, and a result is applied only while that state is
    still current and no newer result has been applied.
    """

    def __init__(
        self,
        config: GridConfig,
        resources: ResourceClient,
        notifications: NotificationChannel,
        layout_store: ColumnLayoutStore,
    ) -> None:
        self.config = config
        self.resources = resources
        self.notifications = notifications
        self.layout_store = layout_store
        self.state = QueryState(
            limit=config.limit,
            sort_column=config.default_sort,
            sort_direction=config.default_direction,
        )
        self.status = GridStatus.IDLE
        self.page_result = PageResult()
        self.filter_options: dict[str, list[str]] = {}
        self.column_widths = {
            index: max(MIN_COLUMN_WIDTH, width) for index, width in layout_store.get(config.table_id).items()
        }
        self.view = self._render(self.page_result.rows)
        self._issued = 0
        self._applied = 0
        self._abandoned = 0
        self._resize_origin: dict[int, int] = {}

    # loading

    def load(self) -> bool:
        ticket = self.begin_load()
        return self.complete_load(ticket, self._fetch(ticket.state))

    def begin_load(self) -> LoadTicket:
        self._issued += 1
        self.status = GridStatus.LOADING
        return LoadTicket(sequence=self._issued, state=self.state)

    def complete_load(self, ticket: LoadTicket, result: GatewayResult) -> bool:
        """Apply ``result`` if it still belongs to the current query state.

        Returns whether the view was replaced.
        """
        if ticket.state != self.state or ticket.sequence < self._applied or ticket.sequence <= self._abandoned:
            log_action(logger, self.config.table_id, "load", "discarded", sequence=ticket.sequence)
            return False

        if not result.ok:
            error = result.error
            self._applied = ticket.sequence
            if error.terminal:
                self.status = GridStatus.IDLE
                log_action(logger, self.config.table_id, "load", "auth_expired", error.status_code)
                return False
            self.status = GridStatus.FAILED
            self.view = replace(self._render([]), placeholder=FAILED_PLACEHOLDER)
            log_action(logger, self.config.table_id, "load", "error", error.status_code, code=error.code)
            self.notifications.notify(build_error_payload(error)["message"], Severity.ERROR)
            return False

        try:
            page_result = normalize_listing(result.data, page=ticket.state.page, limit=ticket.state.limit)
            rows = page_result.rows
            if not self.config.server_side:
                rows = self._sorted_locally(rows)
            view = self._render(rows, page_result)
        except Exception as exc:
            logger.exception("rendering %s failed", self.config.table_id)
            self._applied = ticket.sequence
            self.status = GridStatus.FAILED
            self.notifications.notify(build_error_payload(exc)["message"], Severity.ERROR)
            return False

        self._applied = ticket.sequence
        self.page_result = replace(page_result, rows=rows)
        self.view = view
        self.status = GridStatus.LOADED
        log_action(logger, self.config.table_id, "load", "success", page=page_result.page, rows=len(rows))
        return True

    def abandon_pending_loads(self) -> None:
        """Drop every load issued so far, e.g. once the session is gone."""
        self._abandoned = self._issued
        self.status = GridStatus.IDLE

    def refresh(self) -> bool:
        self._refresh_filter_options()
        return self.load()

    def load_filter_options(self) -> dict[str, list[str]]:
        """Reload the facets; reloads the list when a selected value was dropped."""
        if self._refresh_filter_options():
            self.load()
        return self.filter_options

    def _refresh_filter_options(self) -> bool:
        for facet in self.config.facets:
            result = self.resources.facet(facet.path)
            if not result.ok:
                logger.warning("filter options %s/%s unavailable: %s", self.config.table_id, facet.path, result.error)
                continue
            self.filter_options.update(_facet_options(facet, normalize_options(result.data)))

        selected = self.state.filter_map
        kept = {
            key: value
            for key, value in selected.items()
            if key not in self.filter_options or str(value) in self.filter_options[key]
        }
        if kept == selected:
            return False
        self.state = self.state.with_filters(kept)
        return True

    # query state

    def sort_by(self, column_key: str) -> bool:
        column = self.config.column(column_key)
        if column is None or not column.sortable:
            raise KeyError(f"{self.config.table_id} cannot sort by {column_key!r}")
        if self.state.sort_column == column_key:
            direction = self.state.sort_direction.flipped()
        else:
            direction = self.config.new_column_direction
        self.state = self.state.with_sort(column_key, direction)
        if not self.config.server_side:
            rows = self._sorted_locally(self.page_result.rows)
            self.page_result = replace(self.page_result, rows=rows)
            self.view = self._render(rows, self.page_result)
            return True
        return self.load()

    def apply_filters(self, values: dict[str, Any]) -> bool:
        if self.config.filter_keys:
            values = {key: value for key, value in values.items() if key in self.config.filter_keys}
        self.state = self.state.with_filters(clean_filters(values, self.config.date_range))
        return self.load()

    def clear_filters(self) -> bool:
        self.state = self.state.with_filters({}).with_search(None)
        return self.load()

    def search(self, term: str | None) -> bool:
        self.state = self.state.with_search(clean_search_term(term))
        return self.load()

    def paginate(self, delta: int) -> bool:
        target = shift_page(self.state.page, delta, self.page_result.total_pages)
        if target is None:
            return False
        self.state = self.state.with_page(target)
        return self.load()

    def toggle_deleted(self) -> bool:
        if not self.config.soft_delete:
            raise ValueError(f"{self.config.table_id} has no deleted records view")
        self.state = self.state.with_deleted(not self.state.show_deleted)
        return self.load()

    # column resize

    def column_width(self, index: int) -> int:
        if index in self.column_widths:
            return self.column_widths[index]
        return self.config.columns[index].width

    def start_resize(self, index: int) -> int:
        self._check_column_index(index)
        self._resize_origin[index] = self.column_width(index)
        return self._resize_origin[index]

    def resize_column(self, index: int, pointer_delta_x: int) -> int:
        if index not in self._resize_origin:
            self.start_resize(index)
        width = max(MIN_COLUMN_WIDTH, self._resize_origin[index] + int(pointer_delta_x))
        self.column_widths[index] = width
        self.view = replace(self.view, columns=self._column_views())
        return width

    def finish_resize(self) -> dict[int, int]:
        if not self._resize_origin:
            return dict(self.column_widths)
        self._resize_origin.clear()
        self.column_widths = {index: max(MIN_COLUMN_WIDTH, width) for index, width in self.column_widths.items()}
        self.layout_store.set(self.config.table_id, self.column_widths)
        return dict(self.column_widths)

    def reset_layout(self) -> None:
        self.layout_store.clear(self.config.table_id)
        self.column_widths = {}
        self._resize_origin.clear()
        self.view = replace(self.view, columns=self._column_views())

    # side jobs

    def run_job(self, name: str) -> bool:
        job = self.config.job(name)
        if job is None:
            raise KeyError(f"{self.config.table_id} has no job {name!r}")
        result = self.resources.run_job(job.path)
        if not result.ok:
            log_action(logger, self.config.table_id, f"job:{name}", "error", result.error.status_code)
            if not result.error.terminal:
                self.notifications.notify(build_error_payload(result.error)["message"], Severity.ERROR)
            return False

        data = result.data if isinstance(result.data, dict) else {}
        log_action(logger, self.config.table_id, f"job:{name}", "success")
        self.notifications.notify(str(data.get("message") or f"{job.label}: done."), Severity.SUCCESS)
        if job.reload_on_success:
            self.refresh()
        return True

    # rendering

    def _fetch(self, state: QueryState) -> GatewayResult:
        if self.config.server_side:
            params = state.to_params(self.config.search_key)
        else:
            params = dict(state.filter_map)
            if state.search_term:
                params[self.config.search_key] = state.search_term
        # the deleted records listing takes no search term
        if state.show_deleted:
            params.pop(self.config.search_key, None)
        return self.resources.list(params, deleted=state.show_deleted, list_path=self.config.list_path)

    def _sorted_locally(self, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        column = self.config.column(self.state.sort_column)
        if column is None:
            return list(rows)
        return sort_rows(rows, column, self.state.sort_direction.value)

    def _render(self, rows: list[dict[str, Any]], page_result: PageResult | None = None) -> GridView:
        page_result = page_result or self.page_result
        rendered = tuple(
            RenderedRow(
                record=dict(row),
                cells=tuple(format_cell(column, row.get(column.key)) for column in self.config.columns),
                flagged=bool(self.config.flag_column) and is_truthy(row.get(self.config.flag_column)),
                deleted=self.config.soft_delete and lifecycle_state(row) is LifecycleState.SOFT_DELETED,
            )
            for row in rows
        )
        return GridView(
            columns=self._column_views(),
            rows=rendered,
            pagination=PaginationSummary(
                page=page_result.page,
                total_pages=page_result.total_pages,
                total=page_result.total,
            ),
            placeholder=None if rendered else EMPTY_PLACEHOLDER,
        )

    def _column_views(self) -> tuple[ColumnView, ...]:
        return tuple(
            ColumnView(
                key=column.key,
                label=column.label,
                width=self.column_width(index),
                sort_indicator=SORT_INDICATORS[self.state.sort_direction] if column.key == self.state.sort_column else "",
            )
            for index, column in enumerate(self.config.columns)
        )

    def _check_column_index(self, index: int) -> None:
        if not 0 <= index < len(self.config.columns):
            raise IndexError(f"{self.config.table_id} has no column {index}")


def _facet_options(facet: FacetDef, options: list[str] | dict[str, list[str]]) -> dict[str, list[str]]:
    if isinstance(options, list):
        return {facet.filter_key: options} if facet.filter_key else {}
    return {filter_key: options.get(response_key, []) for response_key, filter_key in facet.fields}
