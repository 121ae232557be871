"""
Ledger configuration management.

Loads the immutable LedgerConfig from a YAML file and the environment.
The config is built once at start-up and passed to the ingest handler
and the report generator.
"""

import os
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigurationError
from .schema import FieldSchema

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "ledger.yaml"


class LedgerConfig(BaseModel):
    """
    Static configuration for both entry points.

    Attributes:
        summary_sheet_name: Sheet holding the daily summary (reserved)
        intake_sheet_name: Sheet the forms front end writes responses to (reserved)
        date_input_cell: A1 reference of the report's target date cell
        summary_header_row: 1-based row of the summary header
        summary_start_row: 1-based first data row of the summary
        client_header_rows: Header rows at the top of every client ledger
        timezone: IANA zone used to format timestamps and dates
        timestamp_format: strftime pattern for the timestamp column
        date_format: strftime pattern for the delivery date column
        timestamp_number_format: Spreadsheet number format for timestamp cells
        date_number_format: Spreadsheet number format for date cells
        quantity_tokens: Trip-type answer -> quantity
        description_template: Builds the description from origin/destination
        no_deliveries_template: Marker row written when a report finds nothing
        field_schema: Column layout
    """

    model_config = ConfigDict(frozen=True)

    summary_sheet_name: str = Field("סיכום יומי", min_length=1)
    intake_sheet_name: str = Field("הזנות", min_length=1)
    date_input_cell: str = Field("B2", pattern=r"^[A-Z]{1,3}[1-9][0-9]*$")
    summary_header_row: int = Field(5, ge=1)
    summary_start_row: int = Field(6, ge=2)
    client_header_rows: int = Field(1, ge=0)
    timezone: str = "Asia/Jerusalem"

    timestamp_format: str = "%Y-%m-%d %H:%M:%S"
    date_format: str = "%d/%m/%Y"
    timestamp_number_format: str = "yyyy-mm-dd hh:mm:ss"
    date_number_format: str = "dd/mm/yyyy"

    quantity_tokens: dict[str, int] = Field(default_factory=lambda: {"הלוך": 1, "הלוך-חזור": 2})
    description_template: str = "מ{origin} ל{destination}"
    no_deliveries_template: str = "No deliveries found for {date}."

    field_schema: FieldSchema = Field(default_factory=FieldSchema)

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone '{v}'") from e
        return v

    @model_validator(mode="after")
    def check_layout(self) -> "LedgerConfig":
        if self.summary_sheet_name == self.intake_sheet_name:
            raise ValueError("Summary and intake sheets must be different sheets")
        if self.summary_start_row <= self.summary_header_row:
            raise ValueError("summary_start_row must come after summary_header_row")
        return self

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def reserved_sheets(self) -> frozenset[str]:
        return frozenset({self.summary_sheet_name, self.intake_sheet_name})

    def is_reserved(self, sheet_name: str) -> bool:
        return sheet_name in self.reserved_sheets


class LedgerConfigLoader:
    """
    Loads LedgerConfig from a YAML configuration file.

    Expected YAML format:
    ```yaml
    ledger:
      summary_sheet_name: "סיכום יומי"
      intake_sheet_name: "הזנות"
      date_input_cell: "B2"
      timezone: "Asia/Jerusalem"
      quantity_tokens:
        "הלוך": 1
        "הלוך-חזור": 2
    ```
    Keys left out keep their defaults.
    """

    def __init__(self, config_path: str | Path):
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise ConfigurationError(f"Ledger configuration file not found: {config_path}")

    def load(self, overrides: dict[str, Any] | None = None) -> LedgerConfig:
        """
        Parse the YAML file into a LedgerConfig.

        Args:
            overrides: Values that win over the file (e.g. from the environment)

        Raises:
            ConfigurationError: If the YAML is invalid or fails validation
        """
        try:
            with open(self.config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not config or "ledger" not in config:
            raise ConfigurationError("Configuration file must contain 'ledger' section")

        section = config["ledger"] or {}
        if not isinstance(section, dict):
            raise ConfigurationError("'ledger' section must be a mapping")

        values = {**section, **(overrides or {})}
        try:
            return LedgerConfig(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid ledger configuration in {self.config_path}: {e}") from e


def env_overrides() -> dict[str, Any]:
    """Configuration values taken from LEDGER_* environment variables."""
    overrides: dict[str, Any] = {}
    timezone = os.getenv("LEDGER_TIMEZONE")
    if timezone:
        overrides["timezone"] = timezone
    return overrides


def load_config(config_path: str | Path | None = None) -> LedgerConfig:
    """
    Build the ledger configuration.

    Resolution order for the file: explicit path, LEDGER_CONFIG, the
    repository's config/ledger.yaml. Without any file the built-in
    defaults are used. Environment overrides are applied last.
    """
    path = config_path or os.getenv("LEDGER_CONFIG")
    if path:
        return LedgerConfigLoader(path).load(env_overrides())

    if DEFAULT_CONFIG_PATH.exists():
        return LedgerConfigLoader(DEFAULT_CONFIG_PATH).load(env_overrides())

    try:
        return LedgerConfig(**env_overrides())
    except ValidationError as e:
        raise ConfigurationError(f"Invalid ledger configuration: {e}") from e
