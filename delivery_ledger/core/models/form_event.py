"""
FormSubmitEvent model representing the host's "response submitted" event.
"""

from typing import Any

from pydantic import BaseModel, Field


class FormSubmitEvent(BaseModel):
    """
    A response row that the forms front end just wrote.

    Attributes:
        sheet_name: Sheet the response landed on
        row: 1-based row number of the response
        values: The response cells, left to right
    """

    sheet_name: str = Field(..., min_length=1)
    row: int = Field(..., ge=1)
    values: list[Any] = Field(default_factory=list)
