"""
DeliveryRecord model representing a single ledger row.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from delivery_ledger.core.schema import FieldSchema


class DeliveryRecord(BaseModel):
    """
    One delivery as written to a client ledger.

    Records are created once per submission and never updated. Blank
    cells are represented by "".

    Attributes:
        driver_email: Submitting driver
        timestamp: Submission time, "YYYY-MM-DD HH:mm:ss" or ""
        delivery_mode: "Drive" / "Physical" as answered
        line_number: Always blank, filled in by hand later
        commitment_number: Commitment number
        identification_number: Patient ID number
        first_name: Patient first name
        last_name: Patient last name
        description: "from ... to ..." text
        delivery_date: "DD/MM/YYYY" or ""
        quantity: 1, 2 or ""
        price: Always blank
        sum: Always blank
    """

    model_config = ConfigDict(frozen=True)

    driver_email: str = ""
    timestamp: str = ""
    delivery_mode: str = ""
    line_number: str = ""
    commitment_number: str = ""
    identification_number: str = ""
    first_name: str = ""
    last_name: str = ""
    description: str = ""
    delivery_date: str = ""
    quantity: int | str = ""
    price: str = ""
    sum: str = ""

    @field_validator("quantity")
    @classmethod
    def check_quantity(cls, v):
        if v not in (1, 2, ""):
            raise ValueError(f"quantity must be 1, 2 or blank, got {v!r}")
        return v

    def to_row(self, schema: FieldSchema) -> list[Any]:
        """Client ledger row in schema column order."""
        return [getattr(self, key) for key in schema.keys]

    def summary_row(self, schema: FieldSchema, client_name: str) -> list[Any]:
        """Summary row: the client name followed by the ledger row."""
        return [client_name, *self.to_row(schema)]
