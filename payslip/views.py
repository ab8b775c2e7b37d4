from __future__ import annotations
from datetime import date
from typing import Iterable, Tuple

from .models import DayCategory, PayslipCalculation
from .wizard import RunTotals

CURRENCY_SYMBOL = "R"

_CATEGORY_LABELS = {
    DayCategory.REGULAR: "Weekday",
    DayCategory.SATURDAY: "Saturday",
    DayCategory.SUNDAY: "Sunday",
    DayCategory.PUBLIC_HOLIDAY: "Public holiday",
}


def money(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(value):,.2f}"


def _hours(value: float) -> str:
    return f"{value:g} hours"


def _line(label: str, value: str, width: int = 44) -> str:
    pad = max(width - len(value) - 1, len(label))
    return f"{label:<{pad}} {value}"


def format_payslip(calculation: PayslipCalculation, employee_name: str = "", period: str = "") -> str:
    rows = ["Payslip"]
    if employee_name:
        rows.append(f"Employee: {employee_name}")
    if period:
        rows.append(f"Period: {period}")
    rows += [
        "",
        "Attendance",
        _line("Total Days Worked", f"{calculation.total_days} days"),
        _line("Regular Hours", _hours(calculation.regular_hours)),
        "",
        "Overtime Hours",
        _line("Saturday (x1.5)", _hours(calculation.overtime_hours.saturday)),
        _line("Sunday (x2.0)", _hours(calculation.overtime_hours.sunday)),
        _line("Public Holidays (x2.0)", _hours(calculation.overtime_hours.public_holiday)),
        "",
        "Earnings",
        _line("Basic Salary", money(calculation.basic_salary)),
        _line("Saturday Overtime", money(calculation.overtime_pay.saturday)),
        _line("Sunday Overtime", money(calculation.overtime_pay.sunday)),
        _line("Public Holiday", money(calculation.overtime_pay.public_holiday)),
        "",
        _line("Total Pay", money(calculation.total_pay)),
    ]
    return "\n".join(rows)


def format_daily_breakdown(calculation: PayslipCalculation) -> str:
    rows = ["Date        Category        Hours  Regular  Overtime"]
    for day in sorted(calculation.days, key=lambda d: d.worked_date):
        rows.append(
            f"{day.worked_date.isoformat()}  {_CATEGORY_LABELS[day.category]:<14}  {day.total_hours:>5.2f}"
            f"  {day.regular_hours:>7.2f}  {day.overtime_hours:>8.2f}"
        )
    return "\n".join(rows)


def format_holidays(holidays: Iterable[Tuple[date, str]], title: str) -> str:
    rows = [title]
    for day, name in holidays:
        rows.append(f"{day.isoformat()}  {day.strftime('%a')}  {name}")
    return "\n".join(rows)


def format_run(totals: RunTotals) -> str:
    rows = ["Payroll run preview", "Employee                      Basic       Overtime    Total"]
    for employee_id, result in sorted(totals.payslips.items()):
        name = totals.employees[employee_id].name if employee_id in totals.employees else employee_id
        rows.append(
            f"{name:<28}  {money(result.basic_salary):>10}  {money(result.overtime_pay.total):>10}  {money(result.total_pay):>10}"
        )
    rows.append(f"Total basic: {money(totals.basic_salary)}")
    rows.append(f"Total overtime: {money(totals.overtime_pay.total)}")
    rows.append(f"Total pay: {money(totals.total_pay)}")
    for employee_id, problems in sorted(totals.rejected.items()):
        for problem in problems:
            rows.append(f"Rejected {employee_id}: {problem['field']}: {problem['message']}")
    return "\n".join(rows)
