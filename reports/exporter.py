"""Report export: render in memory, then hand off to a file in one step."""

import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from errors import ExportError
from models.transaction import Transaction
from reports import ExportFormat, get_report_module
from tools.aggregation import Totals
from logger import get_logger

logger = get_logger()

MAX_NAME_ATTEMPTS = 100


@dataclass(frozen=True)
class ExportResult:
    """A fully rendered report, not yet written anywhere."""

    payload: bytes
    filename: str
    media_type: str
    format: ExportFormat


def export_filename(prefix: str, extension: str, now: datetime) -> str:
    """Build <prefix>_<YYYYMMDD>_<HHMMSS>.<ext>."""
    return f"{prefix}_{now:%Y%m%d_%H%M%S}.{extension}"


class ReportExporter:
    """Renders transaction reports and saves them to disk.

    Args:
        currency_symbol: Symbol used in summary lines that carry a currency marker.
    """

    def __init__(self, currency_symbol: str = "₹"):
        self.currency_symbol = currency_symbol

    def export(
        self,
        transactions: Sequence[Transaction],
        summary: Totals,
        fmt: ExportFormat,
        now: Optional[datetime] = None,
    ) -> ExportResult:
        """Render a report in memory.

        Args:
            transactions: Rows to include, in the order they should appear.
            summary: Totals shown in the report. Pass the same Totals the
                     caller displays; they are not recomputed here.
            fmt: Output format.
            now: Export time used in the filename. Defaults to datetime.now().

        Returns:
            ExportResult with the payload and a suggested filename.

        Raises:
            ExportError: If rendering fails for any reason.
        """
        fmt = ExportFormat(fmt)
        module = get_report_module(fmt)
        filename = export_filename(
            module.FILENAME_PREFIX, module.EXTENSION, now or datetime.now()
        )

        try:
            payload = module.render(transactions, summary, self.currency_symbol)
        except Exception as e:
            logger.error(f"Failed to render {fmt.value} report: {e}")
            raise ExportError(f"Could not render {fmt.value} report: {e}") from e

        logger.info(
            f"Rendered {fmt.value} report with {len(transactions)} transaction(s) "
            f"({len(payload)} bytes)"
        )
        return ExportResult(
            payload=payload,
            filename=filename,
            media_type=module.MEDIA_TYPE,
            format=fmt,
        )

    def save(self, result: ExportResult, directory: Path) -> Path:
        """Write a rendered report into a directory.

        The payload goes to a temporary file first and is hard-linked under
        the report name, so the target path only ever holds a complete report
        and an existing file is never replaced. When the name is taken, a
        counter is added before the extension (cashbook_..._1.csv, ...).

        Args:
            result: Rendered report.
            directory: Destination directory, created if missing.

        Returns:
            Path of the written report.

        Raises:
            ExportError: If the report cannot be written or no free name is left.
        """
        directory = Path(directory)
        tmp_path = None

        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=".export-", suffix=".part"
            )
            tmp_path = Path(tmp_name)
            with os.fdopen(fd, "wb") as f:
                f.write(result.payload)
            target = _link_unused_name(tmp_path, directory, result.filename)
        except OSError as e:
            logger.error(f"Failed to save report to {directory}: {e}")
            raise ExportError(
                f"Could not save report to {directory / result.filename}: {e}"
            ) from e
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)

        logger.info(f"Saved report: {target}")
        return target


def _link_unused_name(source: Path, directory: Path, filename: str) -> Path:
    """Hard-link source under filename, or the first free numbered variant."""
    stem, suffix = Path(filename).stem, Path(filename).suffix
    for attempt in range(MAX_NAME_ATTEMPTS):
        name = filename if attempt == 0 else f"{stem}_{attempt}{suffix}"
        target = directory / name
        try:
            os.link(source, target)
        except FileExistsError:
            continue
        return target
    raise ExportError(f"No free file name for {filename} in {directory}")
