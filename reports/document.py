import io
from typing import Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from models.transaction import Transaction
from reports.common import HEADERS, project_rows, summary_lines
from tools.aggregation import Totals

EXTENSION = "pdf"
FILENAME_PREFIX = "cashbook_report"
MEDIA_TYPE = "application/pdf"

TITLE = "Cash Book Report"


def _summary_block(summary: Totals, currency_symbol: str, styles) -> Table:
    """Boxed "Financial Summary" block with the three totals."""
    data = [[Paragraph("<b>Financial Summary</b>", styles["Heading3"]), ""]]
    for label, amount in summary_lines(summary):
        data.append([f"{label}:", f"{currency_symbol}{amount}"])

    block = Table(data, colWidths=[3.0 * inch, 2.0 * inch])
    block.setStyle(TableStyle([
        ("SPAN", (0, 0), (-1, 0)),
        ("BOX", (0, 0), (-1, -1), 0.75, colors.lightgrey),
        ("FONTSIZE", (0, 1), (-1, -1), 11),
        ("FONTNAME", (1, 1), (1, -1), "Helvetica-Bold"),
        ("ALIGN", (1, 1), (1, -1), "RIGHT"),
        # Net balance sits under a divider, like a ledger foot
        ("LINEABOVE", (0, -1), (-1, -1), 0.5, colors.grey),
        ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]))
    return block


# Category and Description wrap inside their columns
WRAPPED_COLUMNS = (2, 3)


def _transactions_table(transactions: Sequence[Transaction], styles) -> Table:
    """Transaction table; the header row repeats on every page."""
    cell_style = styles["BodyText"]
    data = [HEADERS]
    for row in project_rows(transactions):
        for col in WRAPPED_COLUMNS:
            row[col] = Paragraph(escape(row[col]), cell_style)
        data.append(row)

    table = Table(
        data,
        colWidths=[1.0 * inch, 0.9 * inch, 1.4 * inch, 2.6 * inch, 1.1 * inch],
        repeatRows=1,
    )
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("ALIGN", (1, 1), (1, -1), "CENTER"),
        ("ALIGN", (-1, 1), (-1, -1), "RIGHT"),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.whitesmoke]),
    ]))
    return table


def render(
    transactions: Sequence[Transaction], summary: Totals, currency_symbol: str
) -> bytes:
    """
    Render a paginated PDF report.

    Layout:
    - "Cash Book Report" title
    - Financial Summary block (income, expense, net balance)
    - "All Transactions" heading and the transaction table
    """
    styles = getSampleStyleSheet()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        title=TITLE,
        leftMargin=0.6 * inch,
        rightMargin=0.6 * inch,
        topMargin=0.6 * inch,
        bottomMargin=0.6 * inch,
    )

    story = [
        Paragraph(TITLE, styles["Title"]),
        Spacer(1, 0.2 * inch),
        _summary_block(summary, currency_symbol, styles),
        Spacer(1, 0.3 * inch),
        Paragraph("All Transactions", styles["Heading2"]),
        Spacer(1, 0.1 * inch),
        _transactions_table(transactions, styles),
    ]

    doc.build(story)
    return buffer.getvalue()
