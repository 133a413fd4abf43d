from __future__ import annotations

from collections.abc import Callable
from typing import Any

from grid_console.app.dialog_controller import DialogController, DialogError, DialogMode
from grid_console.app.grid_controller import GridController
from grid_console.app.record_lifecycle import LifecycleError
from grid_console.app.ui.forms import FieldKind
from grid_console.app.ui.table_printer import print_table

HELP = """Commands:
  r                 reload            n / p             next / previous page
  s <column>        sort by column    q <text>          search (empty clears)
  f key=value ...   apply filters     c                 clear filters and search
  o                 filter options    w <col#> <dx>     resize a column
  d                 deleted records   j <job>           run a side job
  new               create            e <row#>          edit
  del <row#>        delete            restore <row#>    restore a deleted record
  purge <row#>      delete permanently
  x                 exit"""


class PageConsole:
    """Line-oriented adapter that drives one grid page from ``input()``."""

    def __init__(
        self,
        grid: GridController,
        dialog: DialogController,
        reader: Callable[[str], str] = input,
    ) -> None:
        self.grid = grid
        self.dialog = dialog
        self._read = reader
        self.signed_out = False

    def on_signed_out(self, sign_in_path: str) -> None:
        self.grid.abandon_pending_loads()
        self.dialog.close()
        self.signed_out = True
        print(f"Session ended. Sign in again at {sign_in_path}")

    def run(self) -> None:
        self.grid.refresh()
        while not self.signed_out:
            print_table(self.grid.config.title, self.grid.view)
            option = self._read("Command (h for help): ").strip()
            if option in {"x", "exit"}:
                return
            try:
                self.dispatch(option)
            except (DialogError, LifecycleError, KeyError, IndexError, ValueError) as error:
                print(f"Not possible: {error}")

    def dispatch(self, option: str) -> None:
        command, _, argument = option.partition(" ")
        argument = argument.strip()
        if command in {"", "h", "help"}:
            print(HELP)
        elif command == "r":
            self.grid.refresh()
        elif command == "n":
            self.grid.paginate(1)
        elif command == "p":
            self.grid.paginate(-1)
        elif command == "s":
            self.grid.sort_by(argument)
        elif command == "q":
            self.grid.search(argument)
        elif command == "f":
            self.grid.apply_filters(_parse_pairs(argument))
        elif command == "c":
            self.grid.clear_filters()
        elif command == "o":
            for key, values in self.grid.load_filter_options().items():
                print(f"{key}: {', '.join(values) or '-'}")
        elif command == "w":
            index, delta = argument.split()
            self.grid.start_resize(int(index) - 1)
            self.grid.resize_column(int(index) - 1, int(delta))
            self.grid.finish_resize()
        elif command == "d":
            self.grid.toggle_deleted()
        elif command == "j":
            self.grid.run_job(argument)
        elif command == "new":
            self.dialog.open_create()
            self._fill_form()
        elif command == "e":
            self.dialog.open_edit(self._row(argument))
            self._fill_form()
        elif command == "del":
            self.dialog.open_delete(self._row(argument))
            self._confirm(self.dialog.confirm_delete)
        elif command == "restore":
            self.dialog.open_restore(self._row(argument))
            self._confirm(self.dialog.confirm_restore)
        elif command == "purge":
            self.dialog.open_purge(self._row(argument))
            self._confirm(self.dialog.confirm_purge)
        else:
            print("Unknown command.")

    def _row(self, argument: str) -> dict[str, Any]:
        number = int(argument)
        if not 1 <= number <= len(self.grid.view.rows):
            raise IndexError(f"no row {number}")
        return self.grid.view.rows[number - 1].record

    def _fill_form(self) -> None:
        editing = self.dialog.mode is DialogMode.EDIT
        while self.dialog.is_open:
            for definition in self.dialog.config.fields:
                current = self.dialog.draft.values.get(definition.key)
                required = "*" if definition.is_required(editing) else ""
                hint = f" [{'/'.join(definition.choices)}]" if definition.choices else ""
                raw = self._read(f"{definition.label}{required}{hint} ({_shown(current)}): ").strip()
                if not raw:
                    continue
                if definition.kind is FieldKind.BOOLEAN:
                    self.dialog.set_field(definition.key, raw.lower() in {"y", "yes", "true", "1"})
                else:
                    self.dialog.set_field(definition.key, raw)
            if self.dialog.submit():
                return
            print(self.dialog.draft.error)
            for key, message in self.dialog.draft.field_errors.items():
                print(f"  {key}: {message}")
            if self._read("Try again? (y/N): ").strip().lower() != "y":
                self.dialog.close()

    def _confirm(self, action: Callable[[], bool]) -> None:
        print(self.dialog.prompt())
        for key, value in (self.dialog.draft.target_record or {}).items():
            print(f"  {key}: {_shown(value)}")
        if self._read("Confirm? (y/N): ").strip().lower() != "y":
            self.dialog.close()
            return
        if self.dialog.requires_acknowledgement:
            if self._read("Type YES to continue: ").strip() != "YES":
                self.dialog.close()
                return
            self.dialog.acknowledge()
        if not action():
            print(self.dialog.draft.error)
            self.dialog.close()


def _parse_pairs(argument: str) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for token in argument.split():
        key, sep, value = token.partition("=")
        if not sep:
            raise ValueError(f"expected key=value, got {token!r}")
        pairs[key] = value
    return pairs


def _shown(value: Any) -> str:
    if value is True:
        return "yes"
    if value is False:
        return "no"
    return "" if value is None else str(value)
