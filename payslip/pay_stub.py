from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    HRFlowable,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from .models import PayslipCalculation
from .views import money


@dataclass(frozen=True)
class StubContext:
    employee_name: str
    period: str
    calculation: PayslipCalculation


_TABLE_STYLE = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.whitesmoke),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
        ("LEFTPADDING", (0, 0), (-1, -1), 6),
        ("RIGHTPADDING", (0, 0), (-1, -1), 6),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]
)


def _table(rows: List[List[Any]]) -> Table:
    table = Table(rows, colWidths=[4.2 * inch, 2.5 * inch])
    table.setStyle(_TABLE_STYLE)
    return table


def _build_stub_story(context: StubContext) -> List[Any]:
    styles = getSampleStyleSheet()
    header_style = ParagraphStyle("stub_header", parent=styles["Heading3"], fontSize=11)
    body_style = ParagraphStyle("stub_body", parent=styles["Normal"], fontSize=9.5)
    calc = context.calculation

    story: List[Any] = [Paragraph("PAYSLIP", styles["Title"])]
    story.append(
        Paragraph(
            f"<b>Employee:</b> {context.employee_name or '—'}<br/><b>Period:</b> {context.period or '—'}",
            body_style,
        )
    )
    story.append(HRFlowable(width="100%"))
    story.append(Spacer(1, 8))

    story.append(Paragraph("Attendance", header_style))
    story.append(
        _table(
            [
                ["Item", "Value"],
                ["Total days worked", f"{calc.total_days} days"],
                ["Regular hours", f"{calc.regular_hours:g} hours"],
            ]
        )
    )
    story.append(Spacer(1, 10))

    story.append(Paragraph("Overtime Hours", header_style))
    story.append(
        _table(
            [
                ["Category", "Hours"],
                ["Saturday (x1.5)", f"{calc.overtime_hours.saturday:g}"],
                ["Sunday (x2.0)", f"{calc.overtime_hours.sunday:g}"],
                ["Public holidays (x2.0)", f"{calc.overtime_hours.public_holiday:g}"],
            ]
        )
    )
    story.append(Spacer(1, 10))

    story.append(Paragraph("Earnings", header_style))
    earnings = _table(
        [
            ["Description", "Amount"],
            ["Basic salary", money(calc.basic_salary)],
            ["Saturday overtime", money(calc.overtime_pay.saturday)],
            ["Sunday overtime", money(calc.overtime_pay.sunday)],
            ["Public holiday", money(calc.overtime_pay.public_holiday)],
            [Paragraph("<b>Total pay</b>", body_style), Paragraph(f"<b>{money(calc.total_pay)}</b>", body_style)],
        ]
    )
    earnings.setStyle(TableStyle([("LINEABOVE", (0, -1), (-1, -1), 0.75, colors.black)]))
    story.append(earnings)
    return story


def export_payslip_pdf(contexts: Iterable[StubContext], output_path: Path) -> Path:
    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=A4,
        leftMargin=0.6 * inch,
        rightMargin=0.6 * inch,
        topMargin=0.6 * inch,
        bottomMargin=0.6 * inch,
    )

    story: List[Any] = []
    for index, context in enumerate(contexts):
        if index:
            story.append(PageBreak())
        story.extend(_build_stub_story(context))
    if not story:
        raise ValueError("No payslips to export")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    doc.build(story)
    return output_path
