import os
from datetime import datetime
from pathlib import Path

import pytest

from errors import ExportError
from reports import ExportFormat, get_available_formats, get_report_module
import reports.exporter as exporter_module
from reports.exporter import ExportResult, ReportExporter, export_filename
from tools.aggregation import compute_totals

NOW = datetime(2024, 2, 1, 9, 30, 5)


class TestExportFilename:
    """Tests for export file naming."""

    def test_format(self):
        """Test the timestamped file name."""
        assert export_filename("cashbook", "csv", NOW) == "cashbook_20240201_093005.csv"

    @pytest.mark.parametrize(
        "fmt, expected",
        [
            (ExportFormat.DOCUMENT, "cashbook_report_20240201_093005.pdf"),
            (ExportFormat.SPREADSHEET, "cashbook_20240201_093005.xlsx"),
            (ExportFormat.DELIMITED, "cashbook_20240201_093005.csv"),
        ],
    )
    def test_per_format_names(self, scenario, fmt, expected):
        """Test each format uses its own prefix and extension."""
        result = ReportExporter().export(scenario, compute_totals(scenario), fmt, now=NOW)

        assert result.filename == expected
        assert result.format == fmt


class TestFormatRegistry:
    """Tests for the report format registry."""

    def test_available_formats(self):
        """Test every format is registered."""
        assert sorted(get_available_formats()) == ["csv", "pdf", "xlsx"]

    def test_lookup_by_value(self):
        """Test modules can be looked up by their format name."""
        assert get_report_module("csv").EXTENSION == "csv"

    def test_unknown_format(self):
        """Test an unknown format raises ValueError."""
        with pytest.raises(ValueError, match="Unknown report format"):
            get_report_module("docx")


class TestReportExporter:
    """Tests for ReportExporter."""

    def test_export_uses_currency_symbol(self, scenario):
        """Test the configured symbol appears on the total lines."""
        result = ReportExporter("$").export(
            scenario, compute_totals(scenario), ExportFormat.DELIMITED, now=NOW
        )

        assert b"Net Balance,,,$,800.00" in result.payload
        assert result.media_type == "text/csv"

    def test_render_failure_becomes_export_error(self, scenario, monkeypatch):
        """Test a renderer failure is reported as ExportError with the cause kept."""
        def broken_render(transactions, summary, currency_symbol):
            raise RuntimeError("disk font missing")

        monkeypatch.setattr(get_report_module("pdf"), "render", broken_render)

        with pytest.raises(ExportError, match="disk font missing") as exc_info:
            ReportExporter().export(
                scenario, compute_totals(scenario), ExportFormat.DOCUMENT, now=NOW
            )

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_save_writes_file(self, scenario, tmp_path):
        """Test save writes the payload and leaves no temporary files."""
        exporter = ReportExporter()
        result = exporter.export(
            scenario, compute_totals(scenario), ExportFormat.DELIMITED, now=NOW
        )

        target = exporter.save(result, tmp_path / "exports")

        assert target == tmp_path / "exports" / "cashbook_20240201_093005.csv"
        assert target.read_bytes() == result.payload
        assert sorted(p.name for p in target.parent.iterdir()) == [target.name]

    def test_save_does_not_overwrite(self, tmp_path):
        """Test an existing file is left untouched and the report gets a numbered name."""
        existing = tmp_path / "cashbook_20240201_093005.csv"
        existing.write_bytes(b"old")
        result = ExportResult(
            payload=b"new",
            filename=existing.name,
            media_type="text/csv",
            format=ExportFormat.DELIMITED,
        )

        target = ReportExporter().save(result, tmp_path)

        assert existing.read_bytes() == b"old"
        assert target == tmp_path / "cashbook_20240201_093005_1.csv"
        assert target.read_bytes() == b"new"

    def test_same_second_exports_get_distinct_names(self, scenario, tmp_path):
        """Test two exports with the same timestamp both land on disk."""
        exporter = ReportExporter()
        result = exporter.export(
            scenario, compute_totals(scenario), ExportFormat.DELIMITED, now=NOW
        )

        first = exporter.save(result, tmp_path)
        second = exporter.save(result, tmp_path)

        assert first != second
        assert sorted(p.name for p in tmp_path.iterdir()) == [
            "cashbook_20240201_093005.csv",
            "cashbook_20240201_093005_1.csv",
        ]

    def test_no_free_name(self, tmp_path, monkeypatch):
        """Test ExportError when every candidate name is taken."""
        monkeypatch.setattr(exporter_module, "MAX_NAME_ATTEMPTS", 2)
        (tmp_path / "cashbook_20240201_093005.csv").write_bytes(b"a")
        (tmp_path / "cashbook_20240201_093005_1.csv").write_bytes(b"b")
        result = ExportResult(
            payload=b"new",
            filename="cashbook_20240201_093005.csv",
            media_type="text/csv",
            format=ExportFormat.DELIMITED,
        )

        with pytest.raises(ExportError, match="No free file name"):
            ReportExporter().save(result, tmp_path)

        assert len(list(tmp_path.iterdir())) == 2

    def test_failed_handoff_leaves_nothing(self, tmp_path, monkeypatch):
        """Test a failed hand-off raises ExportError and cleans up the partial file."""
        def failing_link(src, dst):
            raise OSError("read-only file system")

        monkeypatch.setattr(os, "link", failing_link)
        result = ExportResult(
            payload=b"data",
            filename="cashbook_20240201_093005.csv",
            media_type="text/csv",
            format=ExportFormat.DELIMITED,
        )

        with pytest.raises(ExportError, match="read-only") as exc_info:
            ReportExporter().save(result, tmp_path)

        assert isinstance(exc_info.value.__cause__, OSError)
        assert list(Path(tmp_path).iterdir()) == []
