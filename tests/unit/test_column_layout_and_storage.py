import json

from grid_console.app.column_layout import ColumnLayoutStore, storage_key
from grid_console.app.local_storage import LocalStorage, MemoryStorage, default_storage_path
from grid_console.clients.auth_store import TOKEN_STORAGE_KEY, AuthStore


def test_layout_round_trips_through_file_storage(tmp_path) -> None:
    storage = LocalStorage(tmp_path / "storage.json")
    store = ColumnLayoutStore(storage)

    store.set("contests", {2: 180, 0: 75})

    raw = json.loads((tmp_path / "storage.json").read_text(encoding="utf-8"))
    assert json.loads(raw["contests-column-widths"]) == {"0": 75, "2": 180}
    assert ColumnLayoutStore(LocalStorage(tmp_path / "storage.json")).get("contests") == {0: 75, 2: 180}


def test_layout_tolerates_px_suffix_and_corrupt_entries() -> None:
    storage = MemoryStorage()
    storage.set_item(storage_key("orders"), json.dumps({"1": "200px", "2": "wide"}))
    storage.set_item(storage_key("tickets"), "{not json")

    store = ColumnLayoutStore(storage)

    assert store.get("orders") == {1: 200}
    assert store.get("tickets") == {}
    assert store.get("users") == {}


def test_layout_clear_is_per_table() -> None:
    store = ColumnLayoutStore(MemoryStorage())
    store.set("contests", {0: 90})
    store.set("orders", {1: 90})

    store.clear("contests")

    assert store.get("contests") == {}
    assert store.get("orders") == {1: 90}


def test_unreadable_storage_file_reads_as_empty(tmp_path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("[oops", encoding="utf-8")

    assert LocalStorage(path).get_item("authToken") is None


def test_default_storage_path_env_override(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("GRID_CONSOLE_STORAGE_PATH", str(tmp_path / "custom.json"))

    assert default_storage_path() == tmp_path / "custom.json"


def test_auth_store_uses_well_known_key() -> None:
    storage = MemoryStorage()
    store = AuthStore(storage)

    assert store.is_authenticated() is False
    store.set_token("abc")
    assert storage.get_item(TOKEN_STORAGE_KEY) == "abc"
    assert TOKEN_STORAGE_KEY == "authToken"

    store.clear()
    assert store.get_token() is None
