from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

import httpx


class ErrorKind(str, Enum):
    AUTH_EXPIRED = "auth_expired"
    VALIDATION_FAILURE = "validation_failure"
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    NETWORK_FAILURE = "network_failure"
    PARSE_FAILURE = "parse_failure"


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: dict[str, Any] | list[Any] | str | None = None
    status_code: int | None = None
    server_message: str | None = None

    kind = ErrorKind.SERVER_ERROR

    def __str__(self) -> str:
        status = f"[{self.status_code}] " if self.status_code else ""
        return f"{status}{self.code}: {self.message}"

    @property
    def terminal(self) -> bool:
        return self.kind is ErrorKind.AUTH_EXPIRED


class AuthExpiredError(ApiError):
    """The session or bearer token is no longer accepted."""

    kind = ErrorKind.AUTH_EXPIRED


class ValidationFailureError(ApiError):
    kind = ErrorKind.VALIDATION_FAILURE


class PermissionDeniedError(ApiError):
    kind = ErrorKind.PERMISSION_DENIED


class NotFoundError(ApiError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(ApiError):
    kind = ErrorKind.CONFLICT


class ServerError(ApiError):
    """5xx responses, or a 2xx envelope carrying success=false."""

    kind = ErrorKind.SERVER_ERROR


class NetworkFailureError(ApiError):
    """No HTTP response was received."""

    kind = ErrorKind.NETWORK_FAILURE


class ParseFailureError(ApiError):
    """The response body was not JSON."""

    kind = ErrorKind.PARSE_FAILURE


def extract_server_message(payload: Any) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    errors = payload.get("errors")
    if isinstance(errors, list) and errors:
        return ", ".join(str(item) for item in errors)
    for key in ("error", "message"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def map_error(status_code: int, payload: Any) -> ApiError:
    server_message = extract_server_message(payload)
    details = None
    code = "HTTP_ERROR"
    if isinstance(payload, Mapping):
        details = payload.get("details") or (payload.get("errors") if isinstance(payload.get("errors"), dict) else None)
        code = str(payload.get("code") or code)

    mapped: type[ApiError]
    if status_code == 401:
        mapped = AuthExpiredError
        code = "AUTH_EXPIRED" if code == "HTTP_ERROR" else code
    elif status_code == 403:
        mapped = PermissionDeniedError
    elif status_code == 404:
        mapped = NotFoundError
    elif status_code in {400, 422}:
        mapped = ValidationFailureError
    elif status_code == 409:
        mapped = ConflictError
    else:
        mapped = ServerError
    return mapped(
        code=code,
        message=server_message or f"HTTP {status_code}",
        details=details,
        status_code=status_code,
        server_message=server_message,
    )


def from_http_response(response: httpx.Response) -> ApiError:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if payload is None and response.text:
        payload = {"message": response.text[:500]}
    return map_error(response.status_code, payload)
