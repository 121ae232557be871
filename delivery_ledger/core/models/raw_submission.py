"""
RawSubmission model representing one form response row (ephemeral).
"""

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict

# Position of each answer on the intake sheet row
RAW_FIELD_ORDER: tuple[str, ...] = (
    "timestamp",
    "driver_email",
    "client_name",
    "delivery_mode",
    "commitment_number",
    "identification_number",
    "first_name",
    "last_name",
    "from_location",
    "to_location",
    "delivery_date",
    "quantity_token",
)


class RawSubmission(BaseModel):
    """
    A form response exactly as the intake sheet holds it.

    Values are left untyped: the timestamp and date may be datetimes or
    text, IDs may be numbers. Mapping happens in the ingest handler.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        json_schema_extra={
            "example": {
                "timestamp": "2025-06-08T10:00:00",
                "driver_email": "driver@x.com",
                "client_name": "ClientA",
                "delivery_mode": "Drive",
                "commitment_number": "C100",
                "identification_number": "ID1",
                "first_name": "Dana",
                "last_name": "Cohen",
                "from_location": "Tel Aviv",
                "to_location": "Haifa",
                "delivery_date": "2025-06-09",
                "quantity_token": "הלוך-חזור",
            }
        },
    )

    timestamp: Any = None
    driver_email: Any = None
    client_name: Any = None
    delivery_mode: Any = None
    commitment_number: Any = None
    identification_number: Any = None
    first_name: Any = None
    last_name: Any = None
    from_location: Any = None
    to_location: Any = None
    delivery_date: Any = None
    quantity_token: Any = None

    @classmethod
    def from_values(cls, values: Sequence[Any]) -> "RawSubmission":
        """
        Build from a positional response row.

        Short rows are padded with None; extra trailing cells are ignored.
        """
        padded = list(values)[: len(RAW_FIELD_ORDER)]
        padded += [None] * (len(RAW_FIELD_ORDER) - len(padded))
        return cls(**dict(zip(RAW_FIELD_ORDER, padded)))

    def to_values(self) -> list[Any]:
        return [getattr(self, name) for name in RAW_FIELD_ORDER]
