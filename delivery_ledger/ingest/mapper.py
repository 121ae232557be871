"""
Maps a raw form response onto a DeliveryRecord.

Flow: raw answers -> text cleanup -> date reconciliation -> quantity
and description -> mandatory-field checks (warnings only).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from delivery_ledger.core.config import LedgerConfig
from delivery_ledger.core.mapping import (
    as_text,
    build_description,
    coerce_datetime,
    format_delivery_date,
    format_timestamp,
    map_quantity,
)
from delivery_ledger.core.models import DeliveryRecord, RawSubmission
from delivery_ledger.core.validators import (
    BaseValidator,
    RequiredFieldValidator,
    RouteEndpointsValidator,
    ValidationError,
)
from delivery_ledger.observability import metrics
from delivery_ledger.observability.logger import get_logger

logger = get_logger(__name__)


class MappedSubmission(BaseModel):
    """A mapped submission, still addressed by client name."""

    model_config = ConfigDict(frozen=True)

    client_name: str
    record: DeliveryRecord
    warnings: list[str] = Field(default_factory=list)


class SubmissionMapper:
    """
    Turns RawSubmission objects into DeliveryRecord objects.

    Mandatory answers (client, first name, last name, description) are
    checked, but a failed check only adds a warning.
    """

    MANDATORY_CHECKS: tuple[BaseValidator, ...] = (
        RequiredFieldValidator("client_name"),
        RequiredFieldValidator("first_name"),
        RequiredFieldValidator("last_name"),
        RouteEndpointsValidator("description"),
    )

    def __init__(self, config: LedgerConfig):
        self.config = config

    def map(self, raw: RawSubmission) -> MappedSubmission:
        tz = self.config.tz
        fields: dict[str, Any] = {
            "client_name": as_text(raw.client_name),
            "driver_email": as_text(raw.driver_email),
            "delivery_mode": as_text(raw.delivery_mode),
            "commitment_number": as_text(raw.commitment_number),
            "identification_number": as_text(raw.identification_number),
            "first_name": as_text(raw.first_name),
            "last_name": as_text(raw.last_name),
            "from_location": as_text(raw.from_location),
            "to_location": as_text(raw.to_location),
        }
        fields["description"] = build_description(
            fields["from_location"], fields["to_location"], self.config.description_template
        )

        record = DeliveryRecord(
            driver_email=fields["driver_email"],
            timestamp=format_timestamp(raw.timestamp, tz, self.config.timestamp_format),
            delivery_mode=fields["delivery_mode"],
            commitment_number=fields["commitment_number"],
            identification_number=fields["identification_number"],
            first_name=fields["first_name"],
            last_name=fields["last_name"],
            description=fields["description"],
            delivery_date=format_delivery_date(raw.delivery_date, raw.timestamp, tz, self.config.date_format),
            quantity=map_quantity(raw.quantity_token, self.config.quantity_tokens),
        )

        warnings = self._check_mandatory(fields)
        warnings.extend(self._check_parsed(raw, record))

        logger.info(
            "Processed submission",
            extra={"client_name": fields["client_name"], "record": record.model_dump()},
        )
        return MappedSubmission(client_name=fields["client_name"], record=record, warnings=warnings)

    def _check_mandatory(self, fields: dict[str, Any]) -> list[str]:
        warnings = []
        for validator in self.MANDATORY_CHECKS:
            try:
                validator.validate(fields.get(validator.field_name), fields)
            except ValidationError as e:
                warnings.append(str(e))
                metrics.record_data_quality_warning(e.field_name)

        if warnings:
            logger.warning(
                "Mandatory fields (Client, First Name, Last Name, Description) are missing/partial. "
                "Record will be added with incomplete data.",
                extra={"warnings": warnings},
            )
        return warnings

    def _check_parsed(self, raw: RawSubmission, record: DeliveryRecord) -> list[str]:
        """Answers that were present but could not be used."""
        warnings = []
        if as_text(raw.timestamp) and not record.timestamp:
            warnings.append(f'Unparseable timestamp "{as_text(raw.timestamp)}"; left blank')
            metrics.record_data_quality_warning("timestamp")
        if as_text(raw.delivery_date) and coerce_datetime(raw.delivery_date) is None:
            warnings.append(f'Unparseable delivery date "{as_text(raw.delivery_date)}"; used the timestamp day')
            metrics.record_data_quality_warning("delivery_date")
        if as_text(raw.quantity_token) and record.quantity == "":
            warnings.append(f'Unrecognized trip type "{as_text(raw.quantity_token)}"; quantity left blank')
            metrics.record_data_quality_warning("quantity")
        return warnings
