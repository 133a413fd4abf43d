from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx

from grid_console.app.config import AppConfig
from grid_console.app.infrastructure.logging.logger import get_logger
from grid_console.clients.auth_store import AuthStore
from grid_console.clients.errors import (
    ApiError,
    NetworkFailureError,
    ParseFailureError,
    ServerError,
    ValidationFailureError,
    extract_server_message,
    from_http_response,
)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

logger = get_logger(__name__)


@dataclass(frozen=True)
class GatewayResult:
    data: Any = None
    error: ApiError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.data


class HttpClient:
    """Authenticated request gateway.

    Every call carries the cookie session of the underlying ``httpx.Client`` and, when a
    credential is stored, a bearer header. Expected failures come back inside a
    ``GatewayResult`` instead of being raised. A 401 clears the credential and sends the
    caller to the sign-in entry point before the failure is returned.
    """

    def __init__(
        self,
        config: AppConfig,
        auth_store: AuthStore | None = None,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
        on_unauthenticated: Callable[[str], None] | None = None,
        sleeper: Callable[[float], None] | None = None,
    ) -> None:
        self.config = config
        self._auth_store = auth_store or AuthStore()
        self._client = client or httpx.Client(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            verify=config.verify_ssl,
            transport=transport,
        )
        self._retry_max_attempts = max(1, config.retry_max_attempts)
        self._retry_backoff_ms = max(0, config.retry_backoff_ms)
        self._on_unauthenticated = on_unauthenticated
        self._sleep = sleeper or time.sleep

    def register_unauthenticated_handler(self, handler: Callable[[str], None] | None) -> None:
        self._on_unauthenticated = handler

    def adopt_token(self, token: str) -> None:
        self._auth_store.set_token(token)

    def invalidate_session(self, redirect: bool = True) -> None:
        self._auth_store.clear()
        self._client.cookies.clear()
        if redirect and self._on_unauthenticated:
            self._on_unauthenticated(self.config.sign_in_path)

    def close(self) -> None:
        self._client.close()

    def build_headers(self, extra_headers: dict[str, str] | None = None) -> dict[str, str]:
        headers = dict(DEFAULT_HEADERS)
        token = self._auth_store.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        headers.update(extra_headers or {})
        return headers

    def request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
    ) -> GatewayResult:
        normalized_method = method.upper()
        normalized_path = path if path.startswith("/") else f"/{path}"
        request_headers = self.build_headers(headers)
        allow_retry = normalized_method == "GET"

        for attempt in range(1, self._retry_max_attempts + 1):
            try:
                response = self._client.request(
                    normalized_method,
                    normalized_path,
                    json=body,
                    headers=request_headers,
                    params=params,
                )
            except httpx.TransportError as exc:
                if allow_retry and attempt < self._retry_max_attempts:
                    self._backoff(attempt)
                    continue
                logger.warning("network failure %s %s: %s", normalized_method, normalized_path, exc)
                return GatewayResult(
                    error=NetworkFailureError(
                        code="NETWORK_ERROR",
                        message="Could not reach the server. Check the connection and retry.",
                        details=type(exc).__name__,
                    )
                )

            if response.status_code == 401:
                error = from_http_response(response)
                logger.warning("unauthenticated response on %s %s", normalized_method, normalized_path)
                self.invalidate_session(redirect=True)
                return GatewayResult(error=error)

            if response.status_code >= 400:
                if allow_retry and response.status_code >= 500 and attempt < self._retry_max_attempts:
                    self._backoff(attempt)
                    continue
                return GatewayResult(error=from_http_response(response))

            return _parse_success(response)

        return GatewayResult(
            error=NetworkFailureError(code="NETWORK_ERROR", message="Retry attempts exhausted", details="retry exhausted")
        )

    def _backoff(self, attempt: int) -> None:
        self._sleep((self._retry_backoff_ms * attempt) / 1000)


def _parse_success(response: httpx.Response) -> GatewayResult:
    if not response.content:
        return GatewayResult(data={})
    try:
        payload = response.json()
    except ValueError:
        return GatewayResult(
            error=ParseFailureError(
                code="PARSE_ERROR",
                message="The server returned a response that is not JSON.",
                details=response.text[:200],
                status_code=response.status_code,
            )
        )

    if isinstance(payload, dict) and payload.get("success") is False:
        server_message = extract_server_message(payload)
        error_type: type[ApiError] = ValidationFailureError if isinstance(payload.get("errors"), list) else ServerError
        return GatewayResult(
            error=error_type(
                code=str(payload.get("code") or "REQUEST_FAILED"),
                message=server_message or "The request was not successful.",
                details=payload.get("errors"),
                status_code=response.status_code,
                server_message=server_message,
            )
        )
    return GatewayResult(data=payload)

