from __future__ import annotations

from typing import Any

from grid_console.clients.errors import ApiError, ErrorKind

GENERIC_MESSAGES = {
    ErrorKind.AUTH_EXPIRED: "Your session has expired. Please sign in again.",
    ErrorKind.VALIDATION_FAILURE: "Some values were rejected by the server.",
    ErrorKind.PERMISSION_DENIED: "You do not have permission for this operation.",
    ErrorKind.NOT_FOUND: "The record no longer exists.",
    ErrorKind.CONFLICT: "The record was changed by someone else.",
    ErrorKind.SERVER_ERROR: "An error occurred. Please try again.",
    ErrorKind.NETWORK_FAILURE: "Could not reach the server. Check the connection and retry.",
    ErrorKind.PARSE_FAILURE: "The server returned an unexpected response.",
}


def build_error_payload(error: Exception) -> dict[str, Any]:
    if isinstance(error, ApiError):
        category = error.kind.value
        return {
            "category": category,
            "code": error.code,
            "message": error.server_message or GENERIC_MESSAGES.get(error.kind, error.message),
            "status_code": error.status_code,
            "action": _suggest_action(error.kind),
        }
    return {
        "category": "internal",
        "code": "INTERNAL_ERROR",
        "message": "An unexpected error occurred.",
        "status_code": None,
        "action": "Contact support",
    }


def _suggest_action(kind: ErrorKind) -> str:
    if kind in {ErrorKind.NETWORK_FAILURE, ErrorKind.SERVER_ERROR, ErrorKind.CONFLICT}:
        return "Retry"
    if kind is ErrorKind.AUTH_EXPIRED:
        return "Sign in"
    if kind is ErrorKind.VALIDATION_FAILURE:
        return "Fix the highlighted fields"
    if kind is ErrorKind.NOT_FOUND:
        return "Reload the list"
    if kind is ErrorKind.PERMISSION_DENIED:
        return "Ask an administrator"
    return "Contact support"
