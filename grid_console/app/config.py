from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_SIGN_IN_PATH = "/"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class AppConfig:
    base_url: str
    timeout_seconds: float
    verify_ssl: bool
    retry_max_attempts: int
    retry_backoff_ms: int
    storage_path: Path | None = None
    sign_in_path: str = DEFAULT_SIGN_IN_PATH

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "AppConfig":
        if Path(env_file).exists():
            load_dotenv(env_file, override=False)
        storage_path = os.getenv("GRID_CONSOLE_STORAGE_PATH", "").strip()
        config = cls(
            base_url=_normalize_base_url(os.getenv("GRID_CONSOLE_BASE_URL", DEFAULT_BASE_URL)),
            timeout_seconds=_read_float("GRID_CONSOLE_TIMEOUT_SECONDS", "30"),
            verify_ssl=parse_bool(os.getenv("GRID_CONSOLE_VERIFY_SSL"), default=True),
            retry_max_attempts=_read_int("GRID_CONSOLE_RETRY_MAX_ATTEMPTS", "3"),
            retry_backoff_ms=_read_int("GRID_CONSOLE_RETRY_BACKOFF_MS", "150"),
            storage_path=Path(storage_path) if storage_path else None,
            sign_in_path=os.getenv("GRID_CONSOLE_SIGN_IN_PATH", DEFAULT_SIGN_IN_PATH).strip() or DEFAULT_SIGN_IN_PATH,
        )
        config.validate()
        return config

    def validate(self) -> None:
        if not self.base_url:
            raise ConfigError("GRID_CONSOLE_BASE_URL must not be empty")
        if self.timeout_seconds <= 0:
            raise ConfigError("GRID_CONSOLE_TIMEOUT_SECONDS must be greater than 0")
        if self.retry_max_attempts < 1:
            raise ConfigError("GRID_CONSOLE_RETRY_MAX_ATTEMPTS must be >= 1")
        if self.retry_backoff_ms < 0:
            raise ConfigError("GRID_CONSOLE_RETRY_BACKOFF_MS must be >= 0")


def parse_bool(value: str | bool | None, default: bool = True) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default

    normalized = str(value).strip().lower()
    if normalized in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def _normalize_base_url(value: str) -> str:
    return value.strip().rstrip("/")


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc
