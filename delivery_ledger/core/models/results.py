"""
Outcome models returned by the ingest handler and the report generator (ephemeral).
"""

from datetime import date
from typing import List, Literal

from pydantic import BaseModel, Field, field_validator

from .delivery_record import DeliveryRecord


class IngestResult(BaseModel):
    """
    Outcome of routing one submission.

    Attributes:
        client_name: Partition the record was written to
        client_row: 1-based row written on the client ledger
        summary_row: 1-based row written on the summary sheet
        record: The written record
        warnings: Non-blocking data-quality warnings
    """

    client_name: str
    client_row: int = Field(..., ge=1)
    summary_row: int = Field(..., ge=1)
    record: DeliveryRecord
    warnings: List[str] = Field(default_factory=list)


class ReportResult(BaseModel):
    """
    Outcome of one daily report run.

    Attributes:
        status: "success", "input_error", "configuration_error" or "error"
        target_date: Calendar day the report was built for
        matched: Deliveries matching the target date
        partitions_scanned: Client sheets read successfully
        failed_partitions: Client sheets skipped because reading them failed
        message: Text shown to the user
    """

    status: Literal["success", "input_error", "configuration_error", "error"]
    target_date: date | None = None
    matched: int = Field(0, ge=0)
    partitions_scanned: List[str] = Field(default_factory=list)
    failed_partitions: List[str] = Field(default_factory=list)
    message: str = ""

    @field_validator("matched")
    @classmethod
    def check_matched_consistency(cls, v, info):
        """Only successful runs can report matches."""
        if info.data.get("status") != "success" and v > 0:
            raise ValueError("matched > 0 but status is not success")
        return v

    @property
    def ok(self) -> bool:
        return self.status == "success"
