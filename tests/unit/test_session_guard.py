from grid_console.app.page_presets import CONTESTS, SUBJECTS
from grid_console.app.session_guard import SessionGuard
from grid_console.clients.auth_client import AuthClient, SessionStatus
from grid_console.clients.errors import NetworkFailureError
from grid_console.clients.http_client import GatewayResult


class DummyHttp:
    def __init__(self, status: GatewayResult) -> None:
        self.status = status
        self.calls: list[tuple[str, str]] = []
        self.invalidated: list[bool] = []

    def request(self, method, path, body=None, headers=None, params=None):
        self.calls.append((method, path))
        if path == "/api/auth/status":
            return self.status
        return GatewayResult(data={"success": True})

    def invalidate_session(self, redirect=True):
        self.invalidated.append(redirect)


def _status(user=None, authenticated=True) -> GatewayResult:
    return GatewayResult(data={"isAuthenticated": authenticated, "user": user})


def test_authenticated_user_passes() -> None:
    http = DummyHttp(_status({"name": "Aiko", "role": "user"}))

    session = SessionGuard(AuthClient(http)).require_session(CONTESTS)

    assert session.display_name == "Aiko"
    assert http.invalidated == []


def test_anonymous_session_is_sent_to_sign_in() -> None:
    http = DummyHttp(_status(authenticated=False))

    assert SessionGuard(AuthClient(http)).require_session(CONTESTS) is None
    assert http.invalidated == [True]


def test_non_admin_is_logged_out_of_admin_page() -> None:
    http = DummyHttp(_status({"email": "aiko@example.com", "role": "user"}))

    assert SessionGuard(AuthClient(http)).require_session(SUBJECTS) is None

    assert ("POST", "/api/auth/logout") in http.calls
    assert http.invalidated == [True]


def test_admin_opens_admin_page() -> None:
    http = DummyHttp(_status({"username": "root", "role": "admin"}))

    session = SessionGuard(AuthClient(http)).require_session(SUBJECTS)

    assert session.role == "admin"
    assert session.display_name == "root"


def test_network_failure_keeps_credential() -> None:
    http = DummyHttp(GatewayResult(error=NetworkFailureError(code="NETWORK_ERROR", message="down")))

    assert SessionGuard(AuthClient(http)).require_session(CONTESTS) is None
    assert http.invalidated == []


def test_display_name_fallbacks() -> None:
    assert SessionStatus(is_authenticated=True, user={"name": " ", "email": "a@b"}).display_name == "a@b"
    assert SessionStatus(is_authenticated=True, user={}).display_name == "Unknown"
    assert SessionStatus(is_authenticated=False).role is None
