from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from grid_console.app.error_presenter import build_error_payload
from grid_console.app.grid_config import GridConfig
from grid_console.app.grid_controller import GridController
from grid_console.app.infrastructure.logging.logger import get_logger, log_action
from grid_console.app.notifications import NotificationChannel, Severity
from grid_console.app.record_lifecycle import CONFIRMATIONS, LifecycleError, Transition, require_transition
from grid_console.app.ui.forms import build_payload, draft_value, map_api_validation_errors, validate_draft
from grid_console.clients.http_client import GatewayResult
from grid_console.clients.resources_client import ResourceClient

REQUIRED_FIELDS_MESSAGE = "Please fill in the required fields."
ACKNOWLEDGEMENT_MESSAGE = "Confirm that you understand this cannot be undone."

logger = get_logger(__name__)


class DialogMode(str, Enum):
    CLOSED = "closed"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    RESTORE = "restore"
    PURGE = "purge"


class DialogError(RuntimeError):
    pass


@dataclass
class Draft:
    values: dict[str, Any] = field(default_factory=dict)
    target_id: Any = None
    target_record: dict[str, Any] | None = None
    field_errors: dict[str, str] = field(default_factory=dict)
    error: str | None = None
    acknowledged: bool = False


class DialogController:
    """Create, edit and delete dialogs for the records of one grid.

    A successful mutation closes the dialog, posts one success notification and
    refreshes the grid (data and filter options). A failed one keeps the dialog open
    with the server message on ``draft.error``.
    """

    def __init__(
        self,
        config: GridConfig,
        resources: ResourceClient,
        grid: GridController,
        notifications: NotificationChannel,
    ) -> None:
        self.config = config
        self.resources = resources
        self.grid = grid
        self.notifications = notifications
        self.mode = DialogMode.CLOSED
        self.submitting = False
        self.draft = Draft()

    @property
    def is_open(self) -> bool:
        return self.mode is not DialogMode.CLOSED

    def open_create(self) -> Draft:
        if not self.config.creatable:
            raise DialogError(f"{self.config.table_id} records cannot be created here")
        self._open(DialogMode.CREATE, Draft(values={f.key: f.initial_value() for f in self.config.fields}))
        return self.draft

    def open_edit(self, record: dict[str, Any]) -> Draft:
        if not self.config.editable:
            raise DialogError(f"{self.config.table_id} records are read-only")
        values = {f.key: draft_value(f, record.get(f.key, f.initial_value())) for f in self.config.fields}
        self._open(DialogMode.EDIT, Draft(values=values, target_id=self._record_id(record)))
        return self.draft

    def open_edit_by_id(self, record_id: Any) -> Draft | None:
        result = self.resources.get(record_id)
        if not result.ok:
            self._report_failure("load_record", result)
            return None
        data = result.data.get("data", result.data) if isinstance(result.data, dict) else None
        if not isinstance(data, dict):
            self.notifications.notify("The record could not be loaded.", Severity.ERROR)
            return None
        data.setdefault(self.config.id_key, record_id)
        return self.open_edit(data)

    def open_delete(self, record: dict[str, Any]) -> Draft:
        if not self.config.deletable:
            raise DialogError(f"{self.config.table_id} records cannot be deleted here")
        transition = Transition.SOFT_DELETE if self.config.soft_delete else Transition.DELETE
        return self._open_confirmation(DialogMode.DELETE, transition, record)

    def open_restore(self, record: dict[str, Any]) -> Draft:
        return self._open_confirmation(DialogMode.RESTORE, Transition.RESTORE, record)

    def open_purge(self, record: dict[str, Any]) -> Draft:
        return self._open_confirmation(DialogMode.PURGE, Transition.PURGE, record)

    def prompt(self) -> str | None:
        transition = self._transition()
        return CONFIRMATIONS[transition].prompt if transition else None

    def set_field(self, key: str, value: Any) -> None:
        if self.mode not in (DialogMode.CREATE, DialogMode.EDIT):
            raise DialogError("no form is open")
        if key not in {f.key for f in self.config.fields}:
            raise KeyError(key)
        self.draft.values[key] = value
        self.draft.field_errors.pop(key, None)

    @property
    def requires_acknowledgement(self) -> bool:
        transition = self._transition()
        return transition is not None and CONFIRMATIONS[transition].requires_acknowledgement

    def acknowledge(self) -> None:
        if not self.requires_acknowledgement:
            raise DialogError("nothing pending needs an acknowledgement")
        self.draft.acknowledged = True

    def close(self) -> None:
        self.mode = DialogMode.CLOSED
        self.submitting = False
        self.draft = Draft()

    def submit(self) -> bool:
        if self.submitting:
            return False
        if self.mode not in (DialogMode.CREATE, DialogMode.EDIT):
            raise DialogError("no form is open")

        editing = self.mode is DialogMode.EDIT
        form = validate_draft(self.config.fields, self.draft.values, editing=editing)
        if not form.is_valid:
            self.draft.field_errors = form.field_errors
            self.draft.error = REQUIRED_FIELDS_MESSAGE
            return False

        payload = build_payload(self.config.fields, form.values)
        if editing:
            return self._mutate("update", lambda: self.resources.update(self.draft.target_id, payload), "Saved.")
        return self._mutate("create", lambda: self.resources.create(payload), "Created.")

    def confirm_delete(self) -> bool:
        self._require_mode(DialogMode.DELETE)
        return self._confirm(lambda: self.resources.delete(self.draft.target_id))

    def confirm_restore(self) -> bool:
        self._require_mode(DialogMode.RESTORE)
        return self._confirm(lambda: self.resources.restore(self.draft.target_id))

    def confirm_purge(self) -> bool:
        self._require_mode(DialogMode.PURGE)
        return self._confirm(lambda: self.resources.purge(self.draft.target_id))

    def _confirm(self, call: Callable[[], GatewayResult]) -> bool:
        transition = self._transition()
        policy = CONFIRMATIONS[transition]
        if policy.requires_acknowledgement and not self.draft.acknowledged:
            self.draft.error = ACKNOWLEDGEMENT_MESSAGE
            return False
        return self._mutate(transition.value, call, policy.success_message)

    def _mutate(self, action: str, call: Callable[[], GatewayResult], success_message: str) -> bool:
        if self.submitting:
            return False
        self.submitting = True
        self.draft.error = None
        try:
            result = call()
        except Exception as exc:
            logger.exception("%s %s failed", self.config.table_id, action)
            self.submitting = False
            self.draft.error = build_error_payload(exc)["message"]
            self.notifications.notify(self.draft.error, Severity.ERROR)
            return False
        self.submitting = False

        if not result.ok:
            self._report_failure(action, result)
            return False

        data = result.data if isinstance(result.data, dict) else {}
        if data.get("restored"):
            success_message = CONFIRMATIONS[Transition.RESTORE].success_message
        elif isinstance(data.get("message"), str) and data["message"].strip():
            success_message = data["message"]
        log_action(logger, self.config.table_id, action, "success", target_id=self.draft.target_id)
        self.close()
        self.notifications.notify(success_message, Severity.SUCCESS)
        self.grid.refresh()
        return True

    def _report_failure(self, action: str, result: GatewayResult) -> None:
        error = result.error
        log_action(logger, self.config.table_id, action, "error", error.status_code, code=error.code)
        if error.terminal:
            self.close()
            return
        message = build_error_payload(error)["message"]
        if self.is_open:
            self.draft.error = message
            self.draft.field_errors = map_api_validation_errors(error.details)
        self.notifications.notify(message, Severity.ERROR)

    def _open(self, mode: DialogMode, draft: Draft) -> None:
        self.mode = mode
        self.submitting = False
        self.draft = draft

    def _open_confirmation(self, mode: DialogMode, transition: Transition, record: dict[str, Any]) -> Draft:
        require_transition(record, transition, self.config.soft_delete)
        keys = self.config.summary_keys or tuple(column.key for column in self.config.columns[:3])
        summary = {key: record.get(key) for key in keys}
        self._open(mode, Draft(target_id=self._record_id(record), target_record=summary))
        return self.draft

    def _transition(self) -> Transition | None:
        if self.mode is DialogMode.DELETE:
            return Transition.SOFT_DELETE if self.config.soft_delete else Transition.DELETE
        if self.mode is DialogMode.RESTORE:
            return Transition.RESTORE
        if self.mode is DialogMode.PURGE:
            return Transition.PURGE
        return None

    def _require_mode(self, mode: DialogMode) -> None:
        if self.mode is not mode:
            raise DialogError(f"expected an open {mode.value} dialog, found {self.mode.value}")

    def _record_id(self, record: dict[str, Any]) -> Any:
        record_id = record.get(self.config.id_key)
        if record_id in (None, ""):
            raise LifecycleError(f"record has no {self.config.id_key}")
        return record_id
