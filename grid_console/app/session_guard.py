from __future__ import annotations

from grid_console.app.grid_config import GridConfig
from grid_console.app.infrastructure.logging.logger import get_logger, log_action
from grid_console.clients.auth_client import AuthClient, SessionStatus

ADMIN_ROLE = "admin"

logger = get_logger(__name__)


class SessionGuard:
    """Verifies the server session before a page is shown.

    An anonymous session is invalidated and sent to sign-in. A non-admin opening an
    admin-only page is logged out.
    """

    def __init__(self, auth: AuthClient) -> None:
        self._auth = auth

    def require_session(self, config: GridConfig) -> SessionStatus | None:
        status = self._auth.status()
        if status.error is not None:
            log_action(logger, config.table_id, "session_check", "error", status.error.status_code)
            return None

        if not status.is_authenticated:
            log_action(logger, config.table_id, "session_check", "anonymous")
            self._auth.http_client.invalidate_session(redirect=True)
            return None

        if config.admin_only and status.role != ADMIN_ROLE:
            log_action(logger, config.table_id, "session_check", "forbidden", role=status.role)
            self._auth.logout()
            return None

        log_action(logger, config.table_id, "session_check", "success", role=status.role)
        return status
