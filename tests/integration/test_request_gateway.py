import json

import httpx

from grid_console.app.config import AppConfig
from grid_console.app.local_storage import MemoryStorage
from grid_console.clients.auth_client import AuthClient
from grid_console.clients.auth_store import AuthStore
from grid_console.clients.errors import ErrorKind
from grid_console.clients.http_client import HttpClient

BASE_URL = "http://console.example.com"


class Recorder:
    """MockTransport handler replaying ``responses`` in order."""

    def __init__(self, responses) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(result, Exception):
            raise result
        return result


def _client(responses, token: str | None = "tkn", retry_max_attempts: int = 3):
    recorder = Recorder(responses)
    store = AuthStore(MemoryStorage())
    if token:
        store.set_token(token)
    redirects: list[str] = []
    sleeps: list[float] = []
    config = AppConfig(
        base_url=BASE_URL,
        timeout_seconds=5,
        verify_ssl=True,
        retry_max_attempts=retry_max_attempts,
        retry_backoff_ms=100,
        sign_in_path="/login",
    )
    client = HttpClient(
        config,
        auth_store=store,
        transport=httpx.MockTransport(recorder),
        on_unauthenticated=redirects.append,
        sleeper=sleeps.append,
    )
    return client, recorder, store, redirects, sleeps


def test_bearer_and_json_headers_with_caller_override() -> None:
    client, recorder, _, _, _ = _client([httpx.Response(200, json={"success": True, "data": []})])

    result = client.request("GET", "/api/contests", headers={"Accept": "text/csv"}, params={"page": 1})

    assert result.ok
    request = recorder.requests[0]
    assert request.headers["Authorization"] == "Bearer tkn"
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["Accept"] == "text/csv"
    assert request.url.params["page"] == "1"


def test_missing_credential_omits_authorization() -> None:
    client, recorder, _, _, _ = _client([httpx.Response(200, json={})], token=None)

    client.request("GET", "/api/contests")

    assert "Authorization" not in recorder.requests[0].headers


def test_session_cookie_travels_with_later_requests() -> None:
    client, recorder, _, _, _ = _client(
        [
            httpx.Response(200, json={"success": True}, headers={"Set-Cookie": "sid=abc; Path=/"}),
            httpx.Response(200, json={"success": True}),
        ]
    )

    client.request("GET", "/api/auth/status")
    client.request("GET", "/api/contests")

    assert "sid=abc" in recorder.requests[1].headers.get("Cookie", "")
    assert recorder.requests[1].headers["Authorization"] == "Bearer tkn"


def test_json_body_is_sent_on_mutations() -> None:
    client, recorder, _, _, _ = _client([httpx.Response(200, json={"success": True})])

    client.request("PUT", "/api/contests/7", body={"is_ready": "TRUE"})

    assert recorder.requests[0].method == "PUT"
    assert json.loads(recorder.requests[0].content) == {"is_ready": "TRUE"}


def test_unauthenticated_response_clears_credential_and_redirects() -> None:
    client, _, store, redirects, _ = _client([httpx.Response(401, json={"success": False, "error": "expired"})])

    result = client.request("GET", "/api/contests")

    assert result.error.kind is ErrorKind.AUTH_EXPIRED
    assert result.error.terminal is True
    assert store.get_token() is None
    assert redirects == ["/login"]


def test_get_retries_on_transport_error_and_5xx() -> None:
    client, recorder, _, _, sleeps = _client(
        [
            httpx.ConnectError("refused"),
            httpx.Response(503, json={"error": "busy"}),
            httpx.Response(200, json={"success": True, "data": [1]}),
        ]
    )

    result = client.request("GET", "/api/contests")

    assert result.data == {"success": True, "data": [1]}
    assert len(recorder.requests) == 3
    assert sleeps == [0.1, 0.2]


def test_network_failure_after_retries() -> None:
    client, recorder, _, _, _ = _client([httpx.ConnectError("refused")], retry_max_attempts=2)

    result = client.request("GET", "/api/contests")

    assert result.error.kind is ErrorKind.NETWORK_FAILURE
    assert len(recorder.requests) == 2


def test_mutations_are_not_retried() -> None:
    client, recorder, _, _, _ = _client([httpx.Response(503, json={"success": False, "error": "busy"})])

    result = client.request("POST", "/api/contests", body={"contest_name": "x"})

    assert result.error.kind is ErrorKind.SERVER_ERROR
    assert result.error.server_message == "busy"
    assert len(recorder.requests) == 1


def test_non_json_body_is_a_parse_failure() -> None:
    client, _, _, _, _ = _client([httpx.Response(200, text="<html>sign in</html>")])

    result = client.request("GET", "/api/contests")

    assert result.error.kind is ErrorKind.PARSE_FAILURE


def test_success_false_envelope_is_a_failure() -> None:
    client, _, _, _, _ = _client(
        [
            httpx.Response(200, json={"success": False, "error": "Contest not found"}),
            httpx.Response(200, json={"success": False, "errors": ["Name is required", "Date is invalid"]}),
        ]
    )

    first = client.request("PUT", "/api/contests/7", body={})
    second = client.request("POST", "/api/contests", body={})

    assert first.error.kind is ErrorKind.SERVER_ERROR
    assert first.error.server_message == "Contest not found"
    assert second.error.kind is ErrorKind.VALIDATION_FAILURE
    assert second.error.server_message == "Name is required, Date is invalid"


def test_http_errors_map_to_kinds() -> None:
    client, _, _, _, _ = _client(
        [
            httpx.Response(403, json={"error": "admin only"}),
            httpx.Response(404, json={"error": "missing"}),
            httpx.Response(409, json={"error": "duplicate"}),
            httpx.Response(422, json={"errors": ["bad"]}),
        ]
    )

    kinds = [client.request("DELETE", f"/api/users/{n}").error.kind for n in range(4)]

    assert kinds == [
        ErrorKind.PERMISSION_DENIED,
        ErrorKind.NOT_FOUND,
        ErrorKind.CONFLICT,
        ErrorKind.VALIDATION_FAILURE,
    ]


def test_unwrap_raises_carried_error() -> None:
    client, _, _, _, _ = _client([httpx.Response(404, json={"error": "missing"})])

    try:
        client.request("GET", "/api/users/9").unwrap()
        raised = False
    except Exception as error:
        raised = True
        assert "missing" in str(error)

    assert raised


def test_auth_status_and_logout() -> None:
    client, recorder, store, redirects, _ = _client(
        [
            httpx.Response(200, json={"isAuthenticated": True, "user": {"name": "Aiko", "role": "admin"}}),
            httpx.Response(200, json={"success": True}),
        ]
    )
    auth = AuthClient(client)

    status = auth.status()
    auth.logout()

    assert status.is_authenticated is True
    assert status.display_name == "Aiko"
    assert recorder.requests[1].method == "POST"
    assert recorder.requests[1].url.path == "/api/auth/logout"
    assert store.get_token() is None
    assert redirects == ["/login"]


def test_logout_clears_credential_even_when_call_fails() -> None:
    client, _, store, redirects, _ = _client([httpx.ConnectError("refused")], retry_max_attempts=1)

    AuthClient(client).logout()

    assert store.get_token() is None
    assert redirects == ["/login"]
