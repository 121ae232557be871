"""
Integration tests for the openpyxl-backed workbook store.
"""

from datetime import date, datetime

import pytest
from openpyxl import load_workbook

from conftest import SCENARIO_CLIENT_ROW, SCENARIO_VALUES, RecordingNotifier
from delivery_ledger.core.models import RawSubmission
from delivery_ledger.ingest import IngestHandler
from delivery_ledger.report import ReportGenerator
from delivery_ledger.store import WorkbookStore


@pytest.mark.integration
class TestWorkbookStore:
    """Tests for WorkbookStore against real .xlsx files"""

    def test_open_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            WorkbookStore.open(tmp_path / "missing.xlsx")

    def test_tab_order(self, workbook_path, config):
        store = WorkbookStore.open(workbook_path)
        assert store.sheet_names() == [config.intake_sheet_name, config.summary_sheet_name, "ClientA", "ClientB"]

    def test_new_workbook_has_no_sheets(self):
        assert WorkbookStore.new().sheets() == []

    def test_duplicate_sheet(self, workbook_path):
        store = WorkbookStore.open(workbook_path)
        with pytest.raises(ValueError, match="already exists"):
            store.add_sheet("ClientA")

    def test_save_without_path(self):
        with pytest.raises(ValueError, match="No path"):
            WorkbookStore.new().save()

    def test_cells_round_trip(self, tmp_path):
        path = tmp_path / "cells.xlsx"
        store = WorkbookStore.new(path)
        sheet = store.add_sheet("ClientA", header=["a", "b", "c"])
        sheet.write_rows(2, [["x", 2, datetime(2025, 6, 9, 23, 59)]])
        sheet.write_cell("B5", "value")
        store.save()

        reopened = WorkbookStore.open(path).get_sheet("ClientA")
        assert reopened.read_rows(2, 1, 3) == [["x", 2, datetime(2025, 6, 9, 23, 59)]]
        assert reopened.read_cell("B5") == "value"
        assert reopened.read_cell("C5") is None
        assert reopened.last_row() == 5

    def test_last_row_ignores_cleared_cells(self, tmp_path):
        sheet = WorkbookStore.new(tmp_path / "x.xlsx").add_sheet("ClientA", header=["a", "b"])
        sheet.write_rows(2, [["x", "y"], ["p", "q"]])
        sheet.clear_range(2, 2, 2)
        assert sheet.last_row() == 1
        assert sheet.max_rows() == 3

    def test_clear_range_resets_number_format(self, tmp_path):
        sheet = WorkbookStore.new(tmp_path / "x.xlsx").add_sheet("Summary")
        sheet.write_rows(2, [[date(2025, 6, 9)]])
        sheet.set_number_format(2, 1, 1, "dd/mm/yyyy")
        sheet.clear_range(2, 1, 1)
        assert sheet.worksheet.cell(row=2, column=1).number_format == "General"

    def test_empty_sheet_last_row(self):
        sheet = WorkbookStore.new().add_sheet("Empty")
        assert sheet.last_row() == 0

    def test_formatting_is_persisted(self, tmp_path):
        path = tmp_path / "fmt.xlsx"
        store = WorkbookStore.new(path)
        sheet = store.add_sheet("Summary", header=["client", "a much longer header than usual"])
        sheet.write_rows(2, [["ClientA", date(2025, 6, 9)]])
        sheet.style_header(1, 2)
        sheet.set_number_format(2, 2, 1, "dd/mm/yyyy")
        sheet.auto_fit_columns(2)
        store.save()

        ws = load_workbook(path)["Summary"]
        assert ws.cell(row=1, column=1).font.bold
        assert ws.cell(row=1, column=2).alignment.horizontal == "center"
        assert ws.cell(row=2, column=2).number_format == "dd/mm/yyyy"
        assert ws.column_dimensions["A"].width == 9
        assert ws.column_dimensions["B"].width == len("a much longer header than usual") + 2

    def test_context_manager_saves_on_success(self, workbook_path):
        with WorkbookStore.open(workbook_path) as store:
            store.get_sheet("ClientA").write_cell("A2", "saved")
        assert WorkbookStore.open(workbook_path).get_sheet("ClientA").read_cell("A2") == "saved"

    def test_context_manager_discards_on_error(self, workbook_path):
        with pytest.raises(RuntimeError):
            with WorkbookStore.open(workbook_path) as store:
                store.get_sheet("ClientA").write_cell("A2", "lost")
                raise RuntimeError("abort")
        assert WorkbookStore.open(workbook_path).get_sheet("ClientA").read_cell("A2") is None


@pytest.mark.integration
class TestWorkbookFlow:
    """Ingest and reporting against a saved workbook"""

    def test_ingest_then_report(self, workbook_path, config):
        with WorkbookStore.open(workbook_path, timezone=config.timezone) as store:
            result = IngestHandler(store, config).handle(RawSubmission.from_values(SCENARIO_VALUES))
        assert (result.client_row, result.summary_row) == (2, config.summary_start_row)

        notifier = RecordingNotifier()
        with WorkbookStore.open(workbook_path, timezone=config.timezone) as store:
            assert store.get_sheet("ClientA").read_rows(2, 1, config.field_schema.width) == [SCENARIO_CLIENT_ROW]
            store.get_sheet(config.summary_sheet_name).write_cell(config.date_input_cell, date(2025, 6, 9))
        with WorkbookStore.open(workbook_path, timezone=config.timezone) as store:
            report = ReportGenerator(store, config, notifier=notifier).generate()

        assert report.ok
        assert report.matched == 1
        assert notifier.alerts == [("Report Generated", "1 deliveries found for 09/06/2025.")]

        summary = WorkbookStore.open(workbook_path).get_sheet(config.summary_sheet_name)
        width = config.field_schema.summary_width
        assert summary.read_rows(config.summary_start_row, 2, width) == [
            ["ClientA", *SCENARIO_CLIENT_ROW],
            [""] * width,
        ]
        assert summary.read_rows(config.summary_header_row, 1, width) == [config.field_schema.summary_headers]
