"""
Excel workbook store backed by openpyxl.

Each worksheet is a sheet of the store, in tab order. Changes are made
in memory and written back with save(); using the store as a context
manager saves on a clean exit only.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from delivery_ledger.observability.logger import get_logger

from .base import Sheet, TabularStore, a1_to_cell, is_blank

logger = get_logger(__name__)

HEADER_FONT = Font(bold=True)
HEADER_ALIGNMENT = Alignment(horizontal="center")
MIN_COLUMN_WIDTH = 8
MAX_COLUMN_WIDTH = 60
GENERAL_FORMAT = "General"


class WorksheetSheet(Sheet):
    """Sheet view over an openpyxl Worksheet."""

    def __init__(self, worksheet: Worksheet):
        self.worksheet = worksheet

    @property
    def name(self) -> str:
        return self.worksheet.title

    def last_row(self) -> int:
        # max_row still counts rows whose cells were cleared, so walk back
        ws = self.worksheet
        for row in range(ws.max_row, 0, -1):
            for cell in ws[row]:
                if not is_blank(cell.value):
                    return row
        return 0

    def max_rows(self) -> int:
        return self.worksheet.max_row

    def read_rows(self, start_row: int, num_rows: int, num_cols: int) -> list[list[Any]]:
        if num_rows <= 0 or num_cols <= 0:
            return []
        rows = self.worksheet.iter_rows(
            min_row=start_row,
            max_row=start_row + num_rows - 1,
            min_col=1,
            max_col=num_cols,
            values_only=True,
        )
        return [["" if value is None else value for value in row] for row in rows]

    def write_rows(self, start_row: int, rows: Sequence[Sequence[Any]]) -> None:
        for offset, values in enumerate(rows):
            for col, value in enumerate(values, start=1):
                self.worksheet.cell(row=start_row + offset, column=col, value=value)

    def clear_range(self, start_row: int, num_rows: int, num_cols: int) -> None:
        for row in range(start_row, start_row + num_rows):
            for col in range(1, num_cols + 1):
                cell = self.worksheet.cell(row=row, column=col)
                cell.value = None
                cell.number_format = GENERAL_FORMAT

    def read_cell(self, a1: str) -> Any:
        row, col = a1_to_cell(a1)
        value = self.worksheet.cell(row=row, column=col).value
        return None if is_blank(value) else value

    def write_cell(self, a1: str, value: Any) -> None:
        row, col = a1_to_cell(a1)
        self.worksheet.cell(row=row, column=col, value=value)

    def set_number_format(self, start_row: int, column: int, num_rows: int, number_format: str) -> None:
        for row in range(start_row, start_row + num_rows):
            self.worksheet.cell(row=row, column=column).number_format = number_format

    def style_header(self, row: int, num_cols: int) -> None:
        for col in range(1, num_cols + 1):
            cell = self.worksheet.cell(row=row, column=col)
            cell.font = HEADER_FONT
            cell.alignment = HEADER_ALIGNMENT

    def auto_fit_columns(self, num_cols: int) -> None:
        widths = [0] * num_cols
        for row in self.worksheet.iter_rows(min_col=1, max_col=num_cols, values_only=True):
            for idx, value in enumerate(row):
                if not is_blank(value):
                    widths[idx] = max(widths[idx], len(str(value)))

        for idx, width in enumerate(widths, start=1):
            col_letter = get_column_letter(idx)
            self.worksheet.column_dimensions[col_letter].width = min(max(width + 2, MIN_COLUMN_WIDTH), MAX_COLUMN_WIDTH)


class WorkbookStore(TabularStore):
    """
    Tabular store over an .xlsx file.

    Usage:
        with WorkbookStore.open("deliveries.xlsx") as store:
            handler = IngestHandler(store, config)
            ...
    """

    def __init__(self, workbook: Workbook, path: str | Path | None = None, timezone: str = "Asia/Jerusalem"):
        super().__init__(timezone)
        self.workbook = workbook
        self.path = Path(path) if path else None

    @classmethod
    def open(cls, path: str | Path, timezone: str = "Asia/Jerusalem") -> "WorkbookStore":
        """
        Load an existing workbook.

        Raises:
            FileNotFoundError: If the workbook does not exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Workbook not found: {path}")
        logger.debug(f"Loading workbook {path}")
        return cls(load_workbook(path), path=path, timezone=timezone)

    @classmethod
    def new(cls, path: str | Path | None = None, timezone: str = "Asia/Jerusalem") -> "WorkbookStore":
        """Empty workbook with no sheets."""
        workbook = Workbook()
        workbook.remove(workbook.active)
        return cls(workbook, path=path, timezone=timezone)

    def add_sheet(self, name: str, header: Sequence[Any] | None = None) -> WorksheetSheet:
        if name in self.workbook.sheetnames:
            raise ValueError(f'Sheet "{name}" already exists')
        sheet = WorksheetSheet(self.workbook.create_sheet(title=name))
        if header:
            sheet.write_rows(1, [list(header)])
        return sheet

    def sheets(self) -> list[Sheet]:
        return [WorksheetSheet(ws) for ws in self.workbook.worksheets]

    def save(self, path: str | Path | None = None) -> Path:
        target = Path(path) if path else self.path
        if target is None:
            raise ValueError("No path to save the workbook to")
        self.workbook.save(target)
        logger.debug(f"Saved workbook {target}")
        return target

    def __enter__(self) -> "WorkbookStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.save()
        return False
