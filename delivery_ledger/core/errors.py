"""
Exception hierarchy for the delivery ledger.

Configuration and input errors stop an operation before it mutates
anything; lookup errors reject a single submission.
"""


class LedgerError(Exception):
    """Base class for all ledger errors."""

    title = "Error"


class ConfigurationError(LedgerError):
    """A reserved sheet or configuration file is missing or invalid."""

    title = "Configuration Error"


class InputError(LedgerError):
    """User-entered input (such as the report date) is missing or invalid."""

    title = "Input Error"


class PartitionNotFoundError(LedgerError):
    """Raised when a submission names a client with no ledger sheet."""

    title = "Lookup Error"

    def __init__(self, client_name: str):
        self.client_name = client_name
        super().__init__(f'Client sheet "{client_name}" not found. Record not added.')
