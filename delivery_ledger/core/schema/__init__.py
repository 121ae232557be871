"""
Column layout of client ledgers and the daily summary.
"""

from .field_schema import CLIENT_NAME_COLUMN, DEFAULT_COLUMNS, Column, FieldSchema

__all__ = ["Column", "FieldSchema", "DEFAULT_COLUMNS", "CLIENT_NAME_COLUMN"]
