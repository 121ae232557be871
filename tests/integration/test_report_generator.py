"""
Integration tests for daily report generation.
"""

from datetime import date, datetime

import pytest

from conftest import SCENARIO_CLIENT_ROW, SCENARIO_VALUES, ledger_row
from delivery_ledger.core.models import RawSubmission
from delivery_ledger.report import ReportGenerator
from delivery_ledger.store import InMemorySheet, InMemoryStore


class UnreadableSheet(InMemorySheet):
    def read_rows(self, start_row, num_rows, num_cols):
        raise RuntimeError("protected range")


def set_target(store, config, value):
    store.get_sheet(config.summary_sheet_name).write_cell(config.date_input_cell, value)


def summary_rows(store, config, count):
    summary = store.get_sheet(config.summary_sheet_name)
    start = config.summary_start_row
    return [summary.row_values(start + i, config.field_schema.summary_width) for i in range(count)]


def blank_row(config):
    return [""] * config.field_schema.summary_width


@pytest.fixture
def filled_store(store, config):
    """ClientA and ClientB with deliveries around 09/06/2025."""
    store.get_sheet("ClientA").write_rows(2, [
        ledger_row("09/06/2025"),
        ledger_row("10/06/2025", first_name="Tomorrow"),
    ])
    store.get_sheet("ClientB").write_rows(2, [
        ledger_row(datetime(2025, 6, 9, 23, 59), first_name="Late"),
        ledger_row(datetime(2025, 6, 10, 0, 0, 1), first_name="Early"),
    ])
    set_target(store, config, date(2025, 6, 9))
    return store


@pytest.mark.integration
class TestReportGenerator:
    """Tests for ReportGenerator against an in-memory store"""

    def test_matches_by_calendar_day(self, filled_store, generator, config):
        result = generator.generate()

        assert result.ok
        assert result.matched == 2
        assert result.target_date == date(2025, 6, 9)
        assert result.partitions_scanned == ["ClientA", "ClientB"]
        assert summary_rows(filled_store, config, 3) == [
            ["ClientA", *ledger_row("09/06/2025")],
            ["ClientB", *ledger_row(datetime(2025, 6, 9, 23, 59), first_name="Late")],
            blank_row(config),
        ]

    def test_success_alert(self, filled_store, generator, notifier):
        generator.generate()
        assert notifier.alerts == [("Report Generated", "2 deliveries found for 09/06/2025.")]

    def test_header_is_rewritten_and_styled(self, filled_store, generator, config):
        summary = filled_store.get_sheet(config.summary_sheet_name)
        summary.cells.pop((config.summary_header_row, 1))
        generator.generate()

        schema = config.field_schema
        assert summary.row_values(config.summary_header_row, schema.summary_width) == schema.summary_headers
        assert summary.header_cells == {(config.summary_header_row, c) for c in range(1, schema.summary_width + 1)}

    def test_number_formats_and_widths(self, filled_store, generator, config):
        generator.generate()
        schema = config.field_schema
        summary = filled_store.get_sheet(config.summary_sheet_name)
        date_col = schema.summary_index_of(schema.date_key) + 1
        ts_col = schema.summary_index_of(schema.timestamp_key) + 1
        for row in (config.summary_start_row, config.summary_start_row + 1):
            assert summary.number_formats[(row, date_col)] == config.date_number_format
            assert summary.number_formats[(row, ts_col)] == config.timestamp_number_format
        assert set(summary.column_widths) == set(range(1, schema.summary_width + 1))

    def test_no_matches_writes_marker(self, filled_store, generator, notifier, config):
        set_target(filled_store, config, date(2025, 1, 1))
        result = generator.generate()

        assert result.ok
        assert result.matched == 0
        assert result.message == "No deliveries found for 01/01/2025."
        summary = filled_store.get_sheet(config.summary_sheet_name)
        start = config.summary_start_row
        assert summary.read_cell(f"A{start}") == "No deliveries found for 01/01/2025."
        assert summary.row_values(start, config.field_schema.summary_width)[1:] == blank_row(config)[1:]
        assert summary.row_values(start + 1, config.field_schema.summary_width) == blank_row(config)
        assert summary.row_values(config.summary_header_row, config.field_schema.summary_width) == (
            config.field_schema.summary_headers
        )
        assert notifier.alerts == [("Report Generated", "No deliveries found for 01/01/2025.")]

    def test_regeneration_is_idempotent(self, filled_store, generator, config):
        generator.generate()
        first = dict(filled_store.get_sheet(config.summary_sheet_name).cells)
        generator.generate()
        assert filled_store.get_sheet(config.summary_sheet_name).cells == first

    def test_stale_rows_are_cleared(self, filled_store, generator, config):
        summary = filled_store.get_sheet(config.summary_sheet_name)
        start = config.summary_start_row
        summary.write_rows(start, [["stale"] * 14 for _ in range(5)])
        generator.generate()
        rows = summary_rows(filled_store, config, 5)
        assert rows[2:] == [blank_row(config)] * 3

    def test_stale_number_formats_are_cleared(self, filled_store, generator, config):
        generator.generate()
        set_target(filled_store, config, date(2025, 1, 1))
        generator.generate()
        summary = filled_store.get_sheet(config.summary_sheet_name)
        assert summary.number_formats == {}

    def test_ingested_rows_are_replaced(self, store, config, handler, generator):
        handler.handle(RawSubmission.from_values(SCENARIO_VALUES))
        set_target(store, config, date(2025, 6, 9))
        generator.generate()
        assert summary_rows(store, config, 2) == [["ClientA", *SCENARIO_CLIENT_ROW], blank_row(config)]

    @pytest.mark.parametrize("target", ["09/06/2025", "2025-06-09", datetime(2025, 6, 9, 15, 30)])
    def test_target_date_forms(self, filled_store, generator, config, target):
        set_target(filled_store, config, target)
        result = generator.generate()
        assert result.target_date == date(2025, 6, 9)
        assert result.matched == 2

    def test_tab_order_decides_row_order(self, config, notifier):
        store = InMemoryStore(timezone=config.timezone)
        summary = store.add_sheet(config.summary_sheet_name)
        summary.write_cell(config.date_input_cell, date(2025, 6, 9))
        for name in ["Zeta", "Alpha"]:
            ledger = store.add_sheet(name, header=config.field_schema.headers)
            ledger.write_rows(2, [ledger_row("09/06/2025", first_name=name)])

        ReportGenerator(store, config, notifier=notifier).generate()
        assert [row[0] for row in summary_rows(store, config, 2)] == ["Zeta", "Alpha"]

    def test_reserved_sheets_are_not_scanned(self, filled_store, generator, config):
        filled_store.get_sheet(config.intake_sheet_name).write_rows(2, [ledger_row("09/06/2025")])
        result = generator.generate()
        assert config.intake_sheet_name not in result.partitions_scanned
        assert config.summary_sheet_name not in result.partitions_scanned
        assert result.matched == 2

    def test_irregular_rows_are_skipped(self, store, generator, config):
        ledger = store.get_sheet("ClientA")
        ledger.write_rows(2, [
            [""] * 13,
            ledger_row("", first_name="NoDate"),
            ledger_row("pending", first_name="Text"),
            ["driver@x.com"],
            ledger_row("09/06/2025", first_name="Kept"),
        ])
        set_target(store, config, date(2025, 6, 9))
        result = generator.generate()
        assert result.matched == 1
        assert summary_rows(store, config, 1)[0][7] == "Kept"

    def test_sheet_with_only_headers(self, store, generator, config):
        set_target(store, config, date(2025, 6, 9))
        result = generator.generate()
        assert result.ok
        assert result.partitions_scanned == ["ClientA", "ClientB"]
        assert result.matched == 0

    def test_unreadable_partition_is_isolated(self, filled_store, config, notifier):
        broken = UnreadableSheet("Broken")
        broken.write_rows(1, [config.field_schema.headers, ledger_row("09/06/2025")])
        filled_store._sheets.insert(2, broken)

        result = ReportGenerator(filled_store, config, notifier=notifier).generate()

        assert result.ok
        assert result.matched == 2
        assert result.failed_partitions == ["Broken"]
        assert "Broken" not in result.partitions_scanned
        assert result.message == "2 deliveries found for 09/06/2025. Could not read: Broken."

    @pytest.mark.parametrize("value", [None, "", "pending", 42, "12", "June"])
    def test_invalid_target_date(self, filled_store, generator, notifier, config, value):
        summary = filled_store.get_sheet(config.summary_sheet_name)
        if value is None:
            summary.cells.pop((2, 2), None)
        else:
            set_target(filled_store, config, value)
        before = dict(summary.cells)

        result = generator.generate()

        assert result.status == "input_error"
        assert summary.cells == before
        title, message = notifier.alerts[0]
        assert title == "Input Error"
        assert config.date_input_cell in message

    def test_missing_summary_sheet(self, config, notifier):
        store = InMemoryStore(timezone=config.timezone)
        ledger = store.add_sheet("ClientA", header=config.field_schema.headers)
        ledger.write_rows(2, [ledger_row("09/06/2025")])
        before = dict(ledger.cells)

        result = ReportGenerator(store, config, notifier=notifier).generate()

        assert result.status == "configuration_error"
        assert notifier.alerts[0][0] == "Configuration Error"
        assert config.summary_sheet_name in notifier.alerts[0][1]
        assert ledger.cells == before

    def test_unexpected_error_is_alerted(self, filled_store, generator, notifier, monkeypatch):
        def fail(*args, **kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr(generator, "write_summary", fail)
        result = generator.generate()

        assert result.status == "error"
        title, message = notifier.alerts[0]
        assert title == "Script Error"
        assert "disk full" in message
