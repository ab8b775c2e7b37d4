from __future__ import annotations
import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import List, NoReturn

from .calculator import PayrollCalculator
from .config import get_settings
from .csv_io import export_work_days, import_work_days
from .errors import PayrollValidationError, PayrollValidationErrors
from .holidays import HolidayTableRepository, PublicHolidaySet
from .logging import configure_logging, get_logger, payroll_context
from .models import Employee, WorkDay
from .pay_stub import StubContext, export_payslip_pdf
from .views import format_daily_breakdown, format_holidays, format_payslip, format_run
from .wizard import EmployeePayslipRequest, PayrollRunPreview

logger = get_logger(__name__)


def parse_date(value: str) -> date:
    return date.fromisoformat(value)


def parse_day(value: str) -> WorkDay:
    """Parse ``YYYY-MM-DD:HOURS[:holiday]`` into a work day."""

    parts = value.split(":")
    if len(parts) not in (2, 3):
        raise argparse.ArgumentTypeError(f"expected DATE:HOURS[:holiday], got {value!r}")
    try:
        worked_date = parse_date(parts[0])
        hours = float(parts[1])
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    flag = None
    if len(parts) == 3:
        if parts[2].lower() not in ("holiday", "h", "ph"):
            raise argparse.ArgumentTypeError(f"unknown day marker {parts[2]!r}")
        flag = True
    return WorkDay(date=worked_date, hours_worked=hours, is_public_holiday=flag)


def holidays_from_args(args: argparse.Namespace) -> PublicHolidaySet:
    settings = get_settings()
    repo = HolidayTableRepository(Path(args.holidays_path) if args.holidays_path else settings.holiday_tables_path)
    return repo.load(args.region or settings.holiday_region)


def load_run_requests(path: Path) -> tuple[str, List[EmployeePayslipRequest]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    requests = []
    for row in data.get("employees", []):
        employee = Employee(
            id=str(row["id"]),
            name=row.get("name", str(row["id"])),
            monthly_salary=float(row["monthlySalary"]),
            department=row.get("department", ""),
        )
        days = [
            WorkDay(
                date=parse_date(day["date"]),
                hours_worked=float(day["hoursWorked"]),
                is_public_holiday=day.get("isPublicHoliday"),
            )
            for day in row.get("workDays", [])
        ]
        requests.append(EmployeePayslipRequest(employee=employee, work_days=days))
    return data.get("period", ""), requests


def report_validation_error(exc: PayrollValidationError) -> NoReturn:
    problems = exc.errors if isinstance(exc, PayrollValidationErrors) else [exc]
    for problem in problems:
        print(f"error: {problem.field}: {problem.message}", file=sys.stderr)
    logger.info("payslip_rejected", problems=len(problems))
    sys.exit(2)


def report_input_error(message: str) -> NoReturn:
    print(f"error: {message}", file=sys.stderr)
    logger.info("input_unreadable")
    sys.exit(2)


def cmd_calculate(args: argparse.Namespace) -> None:
    days: List[WorkDay] = list(args.day or [])
    if args.csv:
        try:
            days.extend(import_work_days(Path(args.csv)))
        except (OSError, ValueError) as exc:
            report_input_error(str(exc))

    calculator = PayrollCalculator(holidays_from_args(args))
    try:
        result = calculator.calculate(days, args.salary)
    except PayrollValidationError as exc:
        report_validation_error(exc)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_payslip(result, args.employee or "", args.period or ""))
        if args.breakdown:
            print()
            print(format_daily_breakdown(result))
    if args.pdf:
        path = export_payslip_pdf([StubContext(args.employee or "", args.period or "", result)], Path(args.pdf))
        print(f"Wrote payslip to {path}", file=sys.stderr)


def cmd_holidays(args: argparse.Namespace) -> None:
    holidays = holidays_from_args(args)
    try:
        rows = holidays.holidays_for(args.year)
    except KeyError:
        print(f"error: no public holiday table for {args.year} (have {holidays.years})", file=sys.stderr)
        sys.exit(2)
    print(format_holidays(rows, f"Public holidays {holidays.region} {args.year}"))


def cmd_export_template(args: argparse.Namespace) -> None:
    path = Path(args.path)
    export_work_days(path, [])
    print(f"Wrote work-day template to {path}")


def cmd_run(args: argparse.Namespace) -> None:
    path = Path(args.path)
    try:
        period, requests = load_run_requests(path)
    except KeyError as exc:
        report_input_error(f"{path}: missing field {exc}")
    except (AttributeError, OSError, TypeError, ValueError) as exc:
        report_input_error(f"{path}: {exc}")
    preview = PayrollRunPreview(PayrollCalculator(holidays_from_args(args)))
    try:
        with payroll_context(period=period):
            totals = preview.preview(requests)
    except PayrollValidationError as exc:
        report_validation_error(exc)

    if args.json:
        payload = {
            "period": period,
            "payslips": {employee_id: result.to_dict() for employee_id, result in totals.payslips.items()},
            "rejected": totals.rejected,
            "basicSalary": totals.basic_salary,
            "overtimePay": totals.overtime_pay.to_dict(),
            "totalPay": totals.total_pay,
        }
        print(json.dumps(payload, indent=2))
    else:
        print(format_run(totals))
    if args.pdf:
        contexts = [
            StubContext(totals.employees[employee_id].name, period, result)
            for employee_id, result in sorted(totals.payslips.items())
        ]
        export_payslip_pdf(contexts, Path(args.pdf))
    if not totals.ok:
        sys.exit(2)


def add_holiday_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--region", help="Public holiday region (defaults to PAYSLIP_HOLIDAY_REGION)")
    parser.add_argument("--holidays-path", help="Directory of <region>/<year>.json holiday tables")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Payslip overtime calculator")
    sub = parser.add_subparsers(dest="command", required=True)

    calculate = sub.add_parser("calculate", help="Calculate one payslip")
    calculate.add_argument("--salary", type=float, required=True, help="Monthly base salary")
    calculate.add_argument("--day", type=parse_day, action="append", help="DATE:HOURS[:holiday], repeatable")
    calculate.add_argument("--csv", help="CSV of work days (date,hours_worked,is_public_holiday)")
    calculate.add_argument("--employee")
    calculate.add_argument("--period")
    calculate.add_argument("--json", action="store_true", help="Print the calculation as JSON")
    calculate.add_argument("--breakdown", action="store_true", help="Also print the per-day classification")
    calculate.add_argument("--pdf", help="Write the payslip to a PDF file")
    add_holiday_options(calculate)
    calculate.set_defaults(func=cmd_calculate)

    holidays = sub.add_parser("holidays", help="List public holidays for a year")
    holidays.add_argument("year", type=int)
    add_holiday_options(holidays)
    holidays.set_defaults(func=cmd_holidays)

    template = sub.add_parser("export-template", help="Write an empty work-day CSV")
    template.add_argument("path")
    template.set_defaults(func=cmd_export_template)

    run = sub.add_parser("run", help="Preview a payroll run from a JSON file")
    run.add_argument("path")
    run.add_argument("--json", action="store_true")
    run.add_argument("--pdf", help="Write one payslip page per employee")
    add_holiday_options(run)
    run.set_defaults(func=cmd_run)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    args.func(args)


if __name__ == "__main__":
    main()
