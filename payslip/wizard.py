from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .calculator import PayrollCalculator
from .errors import PayrollValidationError, PayrollValidationErrors
from .logging import get_logger, payroll_context
from .models import Employee, OvertimeBreakdown, PayslipCalculation, WorkDay

logger = get_logger(__name__)


@dataclass
class EmployeePayslipRequest:
    employee: Employee
    work_days: List[WorkDay]


@dataclass
class RunTotals:
    payslips: Dict[str, PayslipCalculation]
    rejected: Dict[str, List[dict]]
    basic_salary: float
    overtime_pay: OvertimeBreakdown
    total_pay: float
    employees: Dict[str, Employee] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.rejected


def check_unique_ids(requests: List[EmployeePayslipRequest]) -> None:
    """Reject a run where two requests share an employee id."""

    seen = set()
    for index, request in enumerate(requests):
        employee_id = request.employee.id
        if employee_id in seen:
            raise PayrollValidationError(f"Duplicate employee id {employee_id!r}", field=f"employees[{index}].id")
        seen.add(employee_id)


class PayrollRunPreview:
    """Calculates payslips for a batch of employees and sums the run.

    Employees whose input fails validation are reported in ``rejected`` and
    left out of the totals; the rest of the run is still previewed. Duplicate
    employee ids reject the whole run before anything is calculated.
    """

    def __init__(self, calculator: PayrollCalculator):
        self.calculator = calculator

    def preview(self, requests: List[EmployeePayslipRequest]) -> RunTotals:
        check_unique_ids(requests)
        payslips: Dict[str, PayslipCalculation] = {}
        rejected: Dict[str, List[dict]] = {}
        employees: Dict[str, Employee] = {}
        total_basic = 0.0
        saturday = sunday = public_holiday = 0.0

        for request in requests:
            employee = request.employee
            employees[employee.id] = employee
            try:
                with payroll_context(employee_id=employee.id):
                    result = self.calculator.calculate(request.work_days, employee.monthly_salary)
            except PayrollValidationErrors as exc:
                rejected[employee.id] = exc.as_details()
                continue
            except PayrollValidationError as exc:
                rejected[employee.id] = [exc.as_detail()]
                continue
            payslips[employee.id] = result
            total_basic += result.basic_salary
            saturday += result.overtime_pay.saturday
            sunday += result.overtime_pay.sunday
            public_holiday += result.overtime_pay.public_holiday

        if rejected:
            logger.info("payroll_run_rejections", employees=sorted(rejected))

        overtime_pay = OvertimeBreakdown(
            saturday=round(saturday, 2),
            sunday=round(sunday, 2),
            public_holiday=round(public_holiday, 2),
        )
        return RunTotals(
            payslips=payslips,
            rejected=rejected,
            basic_salary=round(total_basic, 2),
            overtime_pay=overtime_pay,
            total_pay=round(total_basic + saturday + sunday + public_holiday, 2),
            employees=employees,
        )
