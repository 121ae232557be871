"""
Tabular store interface.

A store is a set of named sheets; a sheet is a grid addressed with
1-based rows and columns, the way spreadsheet hosts address cells.
Ingest and reporting only talk to these two interfaces.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any
from zoneinfo import ZoneInfo

from openpyxl.utils.cell import coordinate_to_tuple


def is_blank(value: Any) -> bool:
    """Empty cell: None or an empty/whitespace string."""
    return value is None or (isinstance(value, str) and value.strip() == "")


def a1_to_cell(a1: str) -> tuple[int, int]:
    """"B2" -> (row 2, column 2)."""
    return coordinate_to_tuple(a1.upper())


class Sheet(ABC):
    """
    One named grid of cells.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Sheet name as shown on its tab."""

    @abstractmethod
    def last_row(self) -> int:
        """Last row holding any non-blank cell, 0 for an empty sheet."""

    @abstractmethod
    def max_rows(self) -> int:
        """Rows allocated on the sheet, blank or not."""

    @abstractmethod
    def read_rows(self, start_row: int, num_rows: int, num_cols: int) -> list[list[Any]]:
        """
        Read a block starting at column 1.

        Blank cells come back as "".
        """

    @abstractmethod
    def write_rows(self, start_row: int, rows: Sequence[Sequence[Any]]) -> None:
        """Write rows starting at column 1 of start_row."""

    @abstractmethod
    def clear_range(self, start_row: int, num_rows: int, num_cols: int) -> None:
        """Clear cell contents and number formats."""

    @abstractmethod
    def read_cell(self, a1: str) -> Any:
        """Value of a single cell, None when blank."""

    @abstractmethod
    def write_cell(self, a1: str, value: Any) -> None:
        """Set a single cell."""

    @abstractmethod
    def set_number_format(self, start_row: int, column: int, num_rows: int, number_format: str) -> None:
        """Apply a number format to num_rows cells of one column."""

    @abstractmethod
    def style_header(self, row: int, num_cols: int) -> None:
        """Bold and center the first num_cols cells of row."""

    @abstractmethod
    def auto_fit_columns(self, num_cols: int) -> None:
        """Resize the first num_cols columns to fit their contents."""

    def append_row(self, values: Sequence[Any], min_row: int = 1) -> int:
        """
        Write values on the row after the last non-blank one.

        Args:
            values: Row cells, left to right
            min_row: Lowest row allowed (keeps data below headers)

        Returns:
            The 1-based row written
        """
        row = max(self.last_row() + 1, min_row)
        self.write_rows(row, [list(values)])
        return row

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class TabularStore(ABC):
    """
    A workbook of named sheets with a configured time zone.
    """

    def __init__(self, timezone: str = "Asia/Jerusalem"):
        self.timezone = timezone

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @abstractmethod
    def sheets(self) -> list[Sheet]:
        """All sheets in the host's own tab order."""

    def sheet_names(self) -> list[str]:
        return [sheet.name for sheet in self.sheets()]

    def get_sheet(self, name: str) -> Sheet | None:
        """Sheet with exactly this name, or None."""
        for sheet in self.sheets():
            if sheet.name == name:
                return sheet
        return None
