from __future__ import annotations

from grid_console.app.grid_controller import GridView

PIXELS_PER_CHAR = 8


def print_table(title: str, view: GridView) -> None:
    print(f"\n{title}")
    headers = [f"{column.label}{column.sort_indicator}" for column in view.columns]
    if not view.rows:
        print(" | ".join(headers))
        print(f"({view.placeholder or 'no rows'})")
        print(view.pagination.label())
        return

    widths = []
    for idx, column in enumerate(view.columns):
        max_cell = max(len(row.cells[idx]) for row in view.rows)
        widths.append(min(max(len(headers[idx]), max_cell), max(4, column.width // PIXELS_PER_CHAR)))

    header_line = "    " + " | ".join(_fit(header, widths[idx]) for idx, header in enumerate(headers))
    separator = "    " + "-+-".join("-" * width for width in widths)
    print(header_line)
    print(separator)

    for number, row in enumerate(view.rows, start=1):
        marker = "x" if row.deleted else ("*" if row.flagged else " ")
        line = " | ".join(_fit(cell, widths[idx]) for idx, cell in enumerate(row.cells))
        print(f"{number:>2}{marker} {line}")
    print(view.pagination.label())


def _fit(text: str, width: int) -> str:
    if len(text) > width:
        return text[: max(1, width - 1)] + "…"
    return text.ljust(width)
