from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from grid_console.clients.errors import ApiError
from grid_console.clients.http_client import HttpClient


@dataclass(frozen=True)
class SessionStatus:
    is_authenticated: bool
    user: dict[str, Any] | None = None
    error: ApiError | None = None

    @property
    def role(self) -> str | None:
        if not self.user:
            return None
        role = self.user.get("role")
        return str(role) if role else None

    @property
    def display_name(self) -> str:
        if not self.user:
            return "Unknown"
        for key in ("name", "username", "email"):
            value = self.user.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        return "Unknown"


class AuthClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def status(self) -> SessionStatus:
        result = self.http_client.request("GET", "/api/auth/status")
        if not result.ok:
            return SessionStatus(is_authenticated=False, error=result.error)
        payload = result.data if isinstance(result.data, dict) else {}
        user = payload.get("user") if isinstance(payload.get("user"), dict) else None
        return SessionStatus(is_authenticated=bool(payload.get("isAuthenticated")) and user is not None, user=user)

    def logout(self) -> None:
        try:
            self.http_client.request("POST", "/api/auth/logout")
        finally:
            self.http_client.invalidate_session(redirect=True)
