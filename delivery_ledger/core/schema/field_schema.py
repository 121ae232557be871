"""
Field schema shared by client ledgers and the daily summary.

Destinations are positional, so column order is the contract. Every
column position used anywhere in the package is looked up here by key.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Column(BaseModel):
    """A single ledger column: stable key plus the header shown on the sheet."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1)
    header: str = Field(..., min_length=1)


DEFAULT_COLUMNS: tuple[Column, ...] = (
    Column(key="driver_email", header="נהג"),
    Column(key="timestamp", header="חותמת זמן"),
    Column(key="delivery_mode", header="דרייב / פיזי"),
    Column(key="line_number", header="מספר שורה"),
    Column(key="commitment_number", header="מספר התחייבות"),
    Column(key="identification_number", header="מספר זיהוי"),
    Column(key="first_name", header="שם פרטי"),
    Column(key="last_name", header="שם משפחה"),
    Column(key="description", header="תאור הטיפול"),
    Column(key="delivery_date", header="תאריך"),
    Column(key="quantity", header="כמות"),
    Column(key="price", header="מחיר"),
    Column(key="sum", header="סכום"),
)

CLIENT_NAME_COLUMN = Column(key="client_name", header="שם לקוח")


class FieldSchema(BaseModel):
    """
    Ordered column list for client ledgers.

    The summary layout is the same list prefixed with the client name
    column.

    Attributes:
        columns: Client ledger columns in write order
        client_name_column: Column prepended on the summary sheet
        date_key: Key of the delivery date column
        timestamp_key: Key of the submission timestamp column
    """

    model_config = ConfigDict(frozen=True)

    columns: tuple[Column, ...] = DEFAULT_COLUMNS
    client_name_column: Column = CLIENT_NAME_COLUMN
    date_key: str = "delivery_date"
    timestamp_key: str = "timestamp"

    @model_validator(mode="after")
    def check_columns(self) -> "FieldSchema":
        keys = [column.key for column in self.columns]
        if len(set(keys)) != len(keys):
            raise ValueError(f"Duplicate column keys in schema: {keys}")
        for required in (self.date_key, self.timestamp_key):
            if required not in keys:
                raise ValueError(f"Schema has no '{required}' column")
        if self.client_name_column.key in keys:
            raise ValueError(f"'{self.client_name_column.key}' is reserved for the summary prefix")
        return self

    @property
    def keys(self) -> list[str]:
        return [column.key for column in self.columns]

    @property
    def headers(self) -> list[str]:
        return [column.header for column in self.columns]

    @property
    def width(self) -> int:
        return len(self.columns)

    @property
    def summary_headers(self) -> list[str]:
        return [self.client_name_column.header, *self.headers]

    @property
    def summary_width(self) -> int:
        return self.width + 1

    def index_of(self, key: str) -> int:
        """0-based position of a column on a client ledger row."""
        try:
            return self.keys.index(key)
        except ValueError:
            raise KeyError(f"Unknown column key: {key}") from None

    def summary_index_of(self, key: str) -> int:
        """0-based position of a column on a summary row."""
        if key == self.client_name_column.key:
            return 0
        return self.index_of(key) + 1

    @property
    def date_index(self) -> int:
        return self.index_of(self.date_key)

    @property
    def timestamp_index(self) -> int:
        return self.index_of(self.timestamp_key)
