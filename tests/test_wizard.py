from datetime import date

import pytest

from payslip.calculator import PayrollCalculator
from payslip.errors import PayrollValidationError
from payslip.models import Employee, WorkDay
from payslip.views import format_run
from payslip.wizard import EmployeePayslipRequest, PayrollRunPreview


def build_preview() -> PayrollRunPreview:
    return PayrollRunPreview(PayrollCalculator())


def test_preview_aggregates_totals():
    requests = [
        EmployeePayslipRequest(
            employee=Employee(id="1", name="John Doe", monthly_salary=16800),
            work_days=[WorkDay(date(2025, 3, 3), 10), WorkDay(date(2025, 3, 2), 2)],
        ),
        EmployeePayslipRequest(
            employee=Employee(id="2", name="Jane Smith", monthly_salary=33600),
            work_days=[WorkDay(date(2025, 3, 21), 8)],
        ),
    ]

    totals = build_preview().preview(requests)

    assert totals.ok
    assert set(totals.payslips) == {"1", "2"}
    assert totals.basic_salary == 800
    assert totals.overtime_pay.saturday == 300
    assert totals.overtime_pay.sunday == 400
    assert totals.overtime_pay.public_holiday == 3200
    assert totals.total_pay == 4700


def test_invalid_employee_is_rejected_and_excluded():
    requests = [
        EmployeePayslipRequest(
            employee=Employee(id="1", name="John Doe", monthly_salary=16800),
            work_days=[WorkDay(date(2025, 3, 3), 8)],
        ),
        EmployeePayslipRequest(
            employee=Employee(id="2", name="Jane Smith", monthly_salary=-5),
            work_days=[WorkDay(date(2025, 3, 3), -1)],
        ),
    ]

    totals = build_preview().preview(requests)

    assert not totals.ok
    assert list(totals.payslips) == ["1"]
    assert [p["field"] for p in totals.rejected["2"]] == ["monthly_base_salary", "work_days[0].hours_worked"]
    assert totals.total_pay == 800

    report = format_run(totals)
    assert "John Doe" in report
    assert "Rejected 2: monthly_base_salary" in report


def test_empty_run():
    totals = build_preview().preview([])

    assert totals.payslips == {}
    assert totals.total_pay == 0


def test_duplicate_employee_id_rejects_whole_run():
    calculator = PayrollCalculator()
    calls = []
    original = calculator.calculate
    calculator.calculate = lambda *args: calls.append(args) or original(*args)
    requests = [
        EmployeePayslipRequest(
            employee=Employee(id="7", name="John Doe", monthly_salary=16800),
            work_days=[WorkDay(date(2025, 3, 3), 8)],
        ),
        EmployeePayslipRequest(
            employee=Employee(id="7", name="Jane Smith", monthly_salary=33600),
            work_days=[WorkDay(date(2025, 3, 3), 8)],
        ),
    ]

    with pytest.raises(PayrollValidationError) as excinfo:
        PayrollRunPreview(calculator).preview(requests)

    assert excinfo.value.field == "employees[1].id"
    assert "Duplicate employee id '7'" in str(excinfo.value)
    assert calls == []
