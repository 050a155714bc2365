from __future__ import annotations

import logging
from decimal import Decimal

from fpdf import FPDF

from servicedesk.constants import format_date
from servicedesk.models.statement import InvoiceStatement

logger = logging.getLogger(__name__)

PRIMARY = (37, 99, 235)
LIGHT = (243, 244, 246)
BORDER = (229, 231, 235)
TEXT = (17, 24, 39)
MUTED = (107, 114, 128)

CYCLE_LABELS = {"monthly": "Monthly", "annual": "Annual", "none": "One-time"}


def _latin1(text: str) -> str:
    """Core PDF fonts only cover latin-1; anything else is replaced."""
    return text.encode("latin-1", "replace").decode("latin-1")


def _amount(value: Decimal, currency: str) -> str:
    return f"{currency} {value:,.2f}"


class InvoicePDF:
    def generate(self, statement: InvoiceStatement) -> bytes:
        pdf = FPDF()
        pdf.add_page()
        pdf.set_auto_page_break(auto=True, margin=20)

        page_w = pdf.w - pdf.l_margin - pdf.r_margin

        self._draw_header(pdf, page_w, statement)
        self._draw_parties(pdf, page_w, statement)
        self._draw_table(pdf, page_w, statement)
        self._draw_total(pdf, page_w, statement)

        if statement.next_renewal_date is not None:
            self._draw_next_renewal(pdf, page_w, statement)

        output = bytes(pdf.output())
        logger.debug(
            "PDF generated: invoice=%s lines=%d size=%d bytes",
            statement.invoice_number,
            len(statement.lines),
            len(output),
        )
        return output

    def _draw_header(self, pdf: FPDF, page_w: float, statement: InvoiceStatement) -> None:
        pdf.set_fill_color(*PRIMARY)
        pdf.rect(0, 0, pdf.w, 4, "F")

        pdf.set_y(16)
        pdf.set_text_color(*TEXT)
        pdf.set_font("Helvetica", "B", 22)
        pdf.cell(page_w / 2, 10, "INVOICE")
        pdf.set_font("Helvetica", "B", 12)
        pdf.cell(page_w / 2, 10, _latin1(statement.invoice_number), align="R", new_x="LMARGIN", new_y="NEXT")

        pdf.set_font("Helvetica", "", 9)
        pdf.set_text_color(*MUTED)
        pdf.cell(
            page_w,
            6,
            f"Invoice Date: {format_date(statement.issue_date)}",
            align="R",
            new_x="LMARGIN",
            new_y="NEXT",
        )
        period_end = format_date(statement.period_end) if statement.period_end else "Ongoing"
        pdf.cell(
            page_w,
            6,
            f"Service Period: {format_date(statement.period_start)} - {period_end}",
            align="R",
            new_x="LMARGIN",
            new_y="NEXT",
        )
        pdf.ln(6)

    def _draw_parties(self, pdf: FPDF, page_w: float, statement: InvoiceStatement) -> None:
        pdf.set_font("Helvetica", "B", 8)
        pdf.set_text_color(*MUTED)
        pdf.cell(page_w, 5, "BILL TO", new_x="LMARGIN", new_y="NEXT")

        pdf.set_font("Helvetica", "B", 11)
        pdf.set_text_color(*TEXT)
        pdf.cell(page_w, 6, _latin1(statement.client_name or "-"), new_x="LMARGIN", new_y="NEXT")
        if statement.email:
            pdf.set_font("Helvetica", "", 9)
            pdf.set_text_color(*MUTED)
            pdf.cell(page_w, 5, _latin1(statement.email), new_x="LMARGIN", new_y="NEXT")

        pdf.set_font("Helvetica", "", 9)
        pdf.set_text_color(*MUTED)
        cycle = CYCLE_LABELS.get(statement.cycle.value, statement.cycle.value)
        pdf.cell(page_w, 5, f"Billing cycle: {cycle}", new_x="LMARGIN", new_y="NEXT")
        pdf.ln(6)

    def _draw_table(self, pdf: FPDF, page_w: float, statement: InvoiceStatement) -> None:
        col_desc = page_w * 0.55
        col_date = page_w * 0.2
        col_amount = page_w - col_desc - col_date

        pdf.set_fill_color(*LIGHT)
        pdf.set_draw_color(*BORDER)
        pdf.set_font("Helvetica", "B", 9)
        pdf.set_text_color(*MUTED)
        pdf.cell(col_desc, 8, "  Description", fill=True)
        pdf.cell(col_date, 8, "Date", fill=True, align="C")
        pdf.cell(col_amount, 8, "Amount  ", fill=True, align="R", new_x="LMARGIN", new_y="NEXT")

        pdf.set_font("Helvetica", "", 10)
        pdf.set_text_color(*TEXT)
        for line in statement.lines:
            pdf.cell(col_desc, 8, "  " + _latin1(line.label), border="B")
            pdf.cell(col_date, 8, format_date(line.date), border="B", align="C")
            pdf.cell(
                col_amount,
                8,
                _amount(line.amount, statement.currency) + "  ",
                border="B",
                align="R",
                new_x="LMARGIN",
                new_y="NEXT",
            )

    def _draw_total(self, pdf: FPDF, page_w: float, statement: InvoiceStatement) -> None:
        pdf.ln(4)
        label_w = page_w * 0.75
        pdf.set_font("Helvetica", "", 10)
        pdf.set_text_color(*MUTED)
        pdf.cell(label_w, 7, "Subtotal", align="R")
        pdf.set_text_color(*TEXT)
        pdf.cell(
            page_w - label_w,
            7,
            _amount(statement.subtotal, statement.currency) + "  ",
            align="R",
            new_x="LMARGIN",
            new_y="NEXT",
        )

        pdf.set_font("Helvetica", "B", 12)
        pdf.set_text_color(*PRIMARY)
        pdf.cell(label_w, 9, "Total", align="R")
        pdf.cell(
            page_w - label_w,
            9,
            _amount(statement.subtotal, statement.currency) + "  ",
            align="R",
            new_x="LMARGIN",
            new_y="NEXT",
        )

    def _draw_next_renewal(self, pdf: FPDF, page_w: float, statement: InvoiceStatement) -> None:
        pdf.ln(8)
        pdf.set_fill_color(*LIGHT)
        pdf.set_font("Helvetica", "B", 10)
        pdf.set_text_color(*TEXT)
        pdf.cell(
            page_w,
            10,
            f"  Next renewal due: {format_date(statement.next_renewal_date)}",
            fill=True,
            new_x="LMARGIN",
            new_y="NEXT",
        )
