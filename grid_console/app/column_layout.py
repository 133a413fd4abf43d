from __future__ import annotations

import json

from grid_console.app.infrastructure.logging.logger import get_logger
from grid_console.app.local_storage import LocalStorage

logger = get_logger(__name__)


def storage_key(table_id: str) -> str:
    return f"{table_id}-column-widths"


class ColumnLayoutStore:
    def __init__(self, storage: LocalStorage) -> None:
        self._storage = storage

    def get(self, table_id: str) -> dict[int, int]:
        raw = self._storage.get_item(storage_key(table_id))
        if not raw:
            return {}
        try:
            payload = json.loads(raw)
        except ValueError:
            logger.warning("ignoring unreadable column widths for %s", table_id)
            return {}
        if not isinstance(payload, dict):
            return {}

        widths: dict[int, int] = {}
        for index, width in payload.items():
            try:
                widths[int(index)] = int(float(str(width).removesuffix("px")))
            except (TypeError, ValueError):
                continue
        return widths

    def set(self, table_id: str, widths: dict[int, int]) -> None:
        payload = {str(index): int(width) for index, width in sorted(widths.items())}
        self._storage.set_item(storage_key(table_id), json.dumps(payload))

    def clear(self, table_id: str) -> None:
        self._storage.remove_item(storage_key(table_id))
