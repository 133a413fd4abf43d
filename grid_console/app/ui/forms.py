from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from grid_console.app.ui.listing_view import is_truthy, parse_datetime, to_local

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class FieldKind(str, Enum):
    TEXT = "text"
    DATE = "date"
    BOOLEAN = "boolean"
    CHOICE = "choice"


@dataclass(frozen=True)
class FieldDef:
    key: str
    label: str
    kind: FieldKind = FieldKind.TEXT
    required: bool = False
    required_on_edit: bool | None = None
    omit_when_blank: bool = False
    choices: tuple[str, ...] = ()
    default: Any = ""

    def is_required(self, editing: bool) -> bool:
        if editing and self.required_on_edit is not None:
            return self.required_on_edit
        return self.required

    def initial_value(self) -> Any:
        if self.kind is FieldKind.BOOLEAN:
            return bool(self.default)
        return self.default


@dataclass
class FormResult:
    values: dict[str, Any]
    field_errors: dict[str, str] = field(default_factory=dict)

    @property
    def first_invalid_field(self) -> str | None:
        return next(iter(self.field_errors), None)

    @property
    def is_valid(self) -> bool:
        return len(self.field_errors) == 0


def to_date_input(value: Any) -> str:
    """``YYYY-MM-DD`` for a date input.

    Values already in that shape are kept verbatim. Anything else is parsed and rebuilt
    from its local-time calendar components so a UTC timestamp does not land on the
    neighbouring day.
    """
    if value is None:
        return ""
    if isinstance(value, str) and ISO_DATE.match(value.strip()):
        return value.strip()
    moment = parse_datetime(value)
    if moment is None:
        return ""
    local = to_local(moment)
    return f"{local.year:04d}-{local.month:02d}-{local.day:02d}"


def draft_value(definition: FieldDef, value: Any) -> Any:
    if definition.kind is FieldKind.BOOLEAN:
        return is_truthy(value)
    if definition.kind is FieldKind.DATE:
        return to_date_input(value)
    if value is None:
        return ""
    return value


def validate_draft(fields: tuple[FieldDef, ...], values: dict[str, Any], *, editing: bool) -> FormResult:
    cleaned: dict[str, Any] = {}
    field_errors: dict[str, str] = {}
    for definition in fields:
        value = values.get(definition.key, definition.initial_value())
        if isinstance(value, str):
            value = value.strip()
        if definition.is_required(editing) and value in (None, ""):
            field_errors[definition.key] = f"{definition.label} is required."
        elif definition.kind is FieldKind.CHOICE and definition.choices and value not in ("", *definition.choices):
            field_errors[definition.key] = f"{definition.label} must be one of: {', '.join(definition.choices)}."
        elif definition.kind is FieldKind.DATE and value and not ISO_DATE.match(str(value)):
            field_errors[definition.key] = f"{definition.label} must use YYYY-MM-DD."
        cleaned[definition.key] = value
    return FormResult(values=cleaned, field_errors=field_errors)


def build_payload(fields: tuple[FieldDef, ...], values: dict[str, Any]) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for definition in fields:
        value = values.get(definition.key)
        if definition.kind is FieldKind.BOOLEAN:
            payload[definition.key] = "TRUE" if value else "FALSE"
            continue
        if definition.omit_when_blank and value in (None, ""):
            continue
        payload[definition.key] = "" if value is None else value
    return payload


def map_api_validation_errors(error_details: Any) -> dict[str, str]:
    if not error_details:
        return {}

    mapped: dict[str, str] = {}
    if isinstance(error_details, dict):
        if isinstance(error_details.get("errors"), dict):
            for key, value in error_details["errors"].items():
                mapped[str(key)] = str(value)
        for key, value in error_details.items():
            if key == "errors":
                continue
            if isinstance(value, str):
                mapped[str(key)] = value
            elif isinstance(value, list) and value and isinstance(value[0], str):
                mapped[str(key)] = value[0]
    elif isinstance(error_details, list):
        for item in error_details:
            if not isinstance(item, dict):
                continue
            field_name = item.get("field") or item.get("path")
            message = item.get("message") or item.get("msg")
            if isinstance(field_name, list):
                field_name = field_name[-1] if field_name else None
            if field_name and message:
                mapped[str(field_name)] = str(message)
    return mapped
