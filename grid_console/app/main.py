from __future__ import annotations

import argparse
import os
from collections.abc import Sequence

from grid_console.app.column_layout import ColumnLayoutStore
from grid_console.app.config import AppConfig, ConfigError
from grid_console.app.dialog_controller import DialogController
from grid_console.app.grid_controller import GridController
from grid_console.app.local_storage import LocalStorage
from grid_console.app.notifications import Notification, NotificationChannel
from grid_console.app.page_console import PageConsole
from grid_console.app.page_presets import PRESETS, get_preset
from grid_console.app.session_guard import SessionGuard
from grid_console.clients.auth_client import AuthClient
from grid_console.clients.auth_store import AuthStore
from grid_console.clients.http_client import HttpClient
from grid_console.clients.resources_client import ResourceClient


def _print_runtime_config(config: AppConfig) -> None:
    print("grid_console")
    print(f"Base URL: {config.base_url}")
    print(f"Timeout: {config.timeout_seconds}s")
    print(f"GET Retry: {config.retry_max_attempts} attempts, backoff base {config.retry_backoff_ms}ms")
    print(f"Verify SSL: {config.verify_ssl}")


def _print_notification(notification: Notification) -> None:
    print(f"[{notification.severity.value.upper()}] {notification.message}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="grid-console", description="Manage console records from a terminal.")
    parser.add_argument("page", choices=sorted(PRESETS), help="page to open")
    parser.add_argument("--env-file", default=".env", help="dotenv file with GRID_CONSOLE_* settings")
    parser.add_argument("--token", default=os.getenv("GRID_CONSOLE_TOKEN"), help="bearer token to store before opening")
    parser.add_argument("--reset-layout", action="store_true", help="forget saved column widths for the page")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = AppConfig.from_env(args.env_file)
    except ConfigError as error:
        print(f"Configuration error: {error}")
        return 2
    _print_runtime_config(config)

    preset = get_preset(args.page)
    storage = LocalStorage(config.storage_path)
    notifications = NotificationChannel(sink=_print_notification)
    http_client = HttpClient(config, auth_store=AuthStore(storage))
    if args.token:
        http_client.adopt_token(args.token)

    resources = ResourceClient(http_client, preset.resource_path)
    grid = GridController(preset, resources, notifications, ColumnLayoutStore(storage))
    if args.reset_layout:
        grid.reset_layout()
    dialog = DialogController(preset, resources, grid, notifications)
    console = PageConsole(grid, dialog)
    http_client.register_unauthenticated_handler(console.on_signed_out)

    try:
        session = SessionGuard(AuthClient(http_client)).require_session(preset)
        if session is None:
            print("Not signed in, or not allowed to open this page.")
            return 1
        print(f"Signed in as {session.display_name}")
        console.run()
    finally:
        http_client.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
