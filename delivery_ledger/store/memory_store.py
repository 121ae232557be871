"""
In-memory tabular store.

Used by the test suite and for dry runs. Keeps cell values, number
formats, header styling and column widths so tests can assert on all
of them.
"""

from collections.abc import Sequence
from typing import Any

from .base import Sheet, TabularStore, a1_to_cell, is_blank

DEFAULT_MAX_ROWS = 1000


class InMemorySheet(Sheet):
    """A sparse grid keyed by (row, column)."""

    def __init__(self, name: str, max_rows: int = DEFAULT_MAX_ROWS):
        self._name = name
        self._max_rows = max_rows
        self.cells: dict[tuple[int, int], Any] = {}
        self.number_formats: dict[tuple[int, int], str] = {}
        self.header_cells: set[tuple[int, int]] = set()
        self.column_widths: dict[int, float] = {}

    @property
    def name(self) -> str:
        return self._name

    def last_row(self) -> int:
        rows = [row for (row, _), value in self.cells.items() if not is_blank(value)]
        return max(rows, default=0)

    def max_rows(self) -> int:
        return max(self._max_rows, self.last_row())

    def read_rows(self, start_row: int, num_rows: int, num_cols: int) -> list[list[Any]]:
        rows = []
        for row in range(start_row, start_row + num_rows):
            values = []
            for col in range(1, num_cols + 1):
                value = self.cells.get((row, col))
                values.append("" if value is None else value)
            rows.append(values)
        return rows

    def write_rows(self, start_row: int, rows: Sequence[Sequence[Any]]) -> None:
        for offset, values in enumerate(rows):
            for col, value in enumerate(values, start=1):
                self.cells[(start_row + offset, col)] = value

    def clear_range(self, start_row: int, num_rows: int, num_cols: int) -> None:
        for row in range(start_row, start_row + num_rows):
            for col in range(1, num_cols + 1):
                self.cells.pop((row, col), None)
                self.number_formats.pop((row, col), None)

    def read_cell(self, a1: str) -> Any:
        value = self.cells.get(a1_to_cell(a1))
        return None if is_blank(value) else value

    def write_cell(self, a1: str, value: Any) -> None:
        self.cells[a1_to_cell(a1)] = value

    def set_number_format(self, start_row: int, column: int, num_rows: int, number_format: str) -> None:
        for row in range(start_row, start_row + num_rows):
            self.number_formats[(row, column)] = number_format

    def style_header(self, row: int, num_cols: int) -> None:
        for col in range(1, num_cols + 1):
            self.header_cells.add((row, col))

    def auto_fit_columns(self, num_cols: int) -> None:
        for col in range(1, num_cols + 1):
            lengths = [len(str(value)) for (_, c), value in self.cells.items() if c == col and not is_blank(value)]
            self.column_widths[col] = max(lengths, default=0) + 2

    def row_values(self, row: int, num_cols: int) -> list[Any]:
        """Convenience accessor for a single row."""
        return self.read_rows(row, 1, num_cols)[0]


class InMemoryStore(TabularStore):
    """
    Ordered collection of InMemorySheet objects.

    Example:
        >>> store = InMemoryStore()
        >>> ledger = store.add_sheet("ClientA")
        >>> ledger.write_rows(1, [["נהג", "חותמת זמן"]])
    """

    def __init__(self, timezone: str = "Asia/Jerusalem"):
        super().__init__(timezone)
        self._sheets: list[InMemorySheet] = []

    def add_sheet(self, name: str, header: Sequence[Any] | None = None, max_rows: int = DEFAULT_MAX_ROWS) -> InMemorySheet:
        if self.get_sheet(name) is not None:
            raise ValueError(f'Sheet "{name}" already exists')
        sheet = InMemorySheet(name, max_rows=max_rows)
        if header:
            sheet.write_rows(1, [list(header)])
        self._sheets.append(sheet)
        return sheet

    def sheets(self) -> list[Sheet]:
        return list(self._sheets)
