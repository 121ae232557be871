"""
Pytest configuration and fixtures for delivery-ledger tests

This module provides shared fixtures for unit, integration, and E2E tests.
"""
import os
from datetime import datetime

import pytest

from delivery_ledger.core.config import LedgerConfig
from delivery_ledger.ingest import IngestHandler
from delivery_ledger.report import ReportGenerator
from delivery_ledger.store import InMemoryStore, WorkbookStore
from delivery_ledger.ui import Notifier


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't touch a store"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that run components against a store"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that drive the CLI against a workbook file"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 5 seconds to run"
    )


# =======================
# TEST DATA
# =======================

SCENARIO_VALUES = [
    datetime(2025, 6, 8, 10, 0, 0),
    "driver@x.com",
    "ClientA",
    "Drive",
    "C100",
    "ID1",
    "Dana",
    "Cohen",
    "Tel Aviv",
    "Haifa",
    datetime(2025, 6, 9, 0, 0, 0),
    "הלוך-חזור",
]

SCENARIO_CLIENT_ROW = [
    "driver@x.com",
    "2025-06-08 10:00:00",
    "Drive",
    "",
    "C100",
    "ID1",
    "Dana",
    "Cohen",
    "מTel Aviv לHaifa",
    "09/06/2025",
    2,
    "",
    "",
]


def ledger_row(delivery_date, first_name="Dana", timestamp="2025-06-08 10:00:00"):
    """A client ledger row with the given date cell."""
    return [
        "driver@x.com", timestamp, "Drive", "", "C100", "ID1",
        first_name, "Cohen", "מTel Aviv לHaifa", delivery_date, 1, "", "",
    ]


class RecordingNotifier(Notifier):
    """Keeps alerts in memory for assertions."""

    def __init__(self):
        self.alerts: list[tuple[str, str]] = []

    def alert(self, title: str, message: str) -> None:
        self.alerts.append((title, message))


# =======================
# CONFIGURATION FIXTURES
# =======================

@pytest.fixture(scope="session")
def config() -> LedgerConfig:
    """Default ledger configuration"""
    return LedgerConfig()


@pytest.fixture(scope="session")
def test_env_vars():
    """
    Set test environment variables

    This fixture loads config/test.env and sets environment variables
    """
    from dotenv import load_dotenv

    env_path = os.path.join(
        os.path.dirname(os.path.dirname(__file__)),
        "config",
        "test.env"
    )

    if os.path.exists(env_path):
        load_dotenv(env_path, override=True)


# =======================
# STORE FIXTURES
# =======================

@pytest.fixture
def store(config) -> InMemoryStore:
    """
    In-memory store laid out like a live workbook

    Sheets, in tab order: intake, summary, ClientA, ClientB.
    """
    store = InMemoryStore(timezone=config.timezone)
    store.add_sheet(config.intake_sheet_name, header=["חותמת זמן", "כתובת אימייל", "שם לקוח"])
    summary = store.add_sheet(config.summary_sheet_name)
    summary.write_cell("A2", "תאריך לדוח")
    summary.write_rows(config.summary_header_row, [config.field_schema.summary_headers])
    store.add_sheet("ClientA", header=config.field_schema.headers)
    store.add_sheet("ClientB", header=config.field_schema.headers)
    return store


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def handler(store, config) -> IngestHandler:
    return IngestHandler(store, config)


@pytest.fixture
def generator(store, config, notifier) -> ReportGenerator:
    return ReportGenerator(store, config, notifier=notifier)


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture
def workbook_path(tmp_path, config) -> str:
    """
    An .xlsx workbook with the same layout as the in-memory store fixture

    Returns:
        Path to the saved workbook
    """
    path = tmp_path / "deliveries.xlsx"
    store = WorkbookStore.new(path, timezone=config.timezone)
    store.add_sheet(config.intake_sheet_name, header=["חותמת זמן", "כתובת אימייל", "שם לקוח"])
    summary = store.add_sheet(config.summary_sheet_name)
    summary.write_rows(config.summary_header_row, [config.field_schema.summary_headers])
    store.add_sheet("ClientA", header=config.field_schema.headers)
    store.add_sheet("ClientB", header=config.field_schema.headers)
    store.save()
    return str(path)
