from enum import Enum

import reports.delimited as delimited
import reports.document as document
import reports.spreadsheet as spreadsheet


class ExportFormat(str, Enum):
    DOCUMENT = "pdf"
    SPREADSHEET = "xlsx"
    DELIMITED = "csv"


_REPORT_MODULES = {
    ExportFormat.DOCUMENT: document,
    ExportFormat.SPREADSHEET: spreadsheet,
    ExportFormat.DELIMITED: delimited,
}


def get_report_module(fmt):
    """Get a report module by format (ExportFormat or its value, e.g. "csv")."""
    try:
        return _REPORT_MODULES[ExportFormat(fmt)]
    except ValueError:
        raise ValueError(f"Unknown report format: {fmt}") from None


def get_available_formats():
    """Get list of available report format names."""
    return [fmt.value for fmt in _REPORT_MODULES]
