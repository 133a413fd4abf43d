import json
import logging
from datetime import datetime, timezone

SENSITIVE_KEYS = {"token", "authorization", "password", "authtoken"}


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    root = logging.getLogger("grid_console")
    if root.handlers:
        return logger
    root.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    return logger


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    outcome: str,
    status_code: int | None = None,
    **context: object,
) -> None:
    safe_context = {key: value for key, value in context.items() if key.lower() not in SENSITIVE_KEYS}
    logger.info(
        json.dumps(
            {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": "INFO",
                "module": module,
                "action": action,
                "outcome": outcome,
                "status_code": status_code,
                **safe_context,
            },
            ensure_ascii=False,
            default=str,
        )
    )
