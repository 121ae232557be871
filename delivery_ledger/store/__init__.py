"""
Tabular stores: the sheets that ledgers and the summary live in.
"""

from .base import Sheet, TabularStore, a1_to_cell, is_blank
from .memory_store import InMemorySheet, InMemoryStore
from .workbook_store import WorkbookStore, WorksheetSheet

__all__ = [
    "Sheet",
    "TabularStore",
    "InMemorySheet",
    "InMemoryStore",
    "WorkbookStore",
    "WorksheetSheet",
    "a1_to_cell",
    "is_blank",
]
