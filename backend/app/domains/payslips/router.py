from datetime import date

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.core.holidays import get_holiday_set
from payslip.calculator import PayrollCalculator
from payslip.holidays import PublicHolidaySet
from payslip.logging import payroll_context
from payslip.models import Employee, OvertimeBreakdown, PayslipCalculation, WorkDay
from payslip.wizard import EmployeePayslipRequest, PayrollRunPreview

router = APIRouter(prefix="/payslips", tags=["payslips"])


class WorkDayIn(BaseModel):
    date: date
    hoursWorked: float
    isPublicHoliday: bool | None = None


class PayslipRequest(BaseModel):
    monthlyBaseSalary: float
    workDays: list[WorkDayIn] = []


class OvertimeOut(BaseModel):
    saturday: float = 0
    sunday: float = 0
    publicHoliday: float = 0


class DayOut(BaseModel):
    date: date
    category: str
    hoursWorked: float
    regularHours: float
    overtimeHours: float


class PayslipOut(BaseModel):
    regularHours: float
    overtimeHours: OvertimeOut
    totalDays: int
    basicSalary: float
    overtimePay: OvertimeOut
    totalPay: float
    hourlyRate: float
    days: list[DayOut] = []


class EmployeeRunIn(BaseModel):
    id: str
    name: str
    monthlySalary: float
    workDays: list[WorkDayIn] = []


class PayrollRunRequest(BaseModel):
    period: str = ""
    employees: list[EmployeeRunIn] = Field(default_factory=list)


class RejectionOut(BaseModel):
    field: str
    message: str


class PayrollRunOut(BaseModel):
    period: str
    payslips: dict[str, PayslipOut]
    rejected: dict[str, list[RejectionOut]]
    basicSalary: float
    overtimePay: OvertimeOut
    totalPay: float


def get_calculator(holidays: PublicHolidaySet = Depends(get_holiday_set)) -> PayrollCalculator:
    return PayrollCalculator(holidays)


def _work_days(rows: list[WorkDayIn]) -> list[WorkDay]:
    return [WorkDay(date=r.date, hours_worked=r.hoursWorked, is_public_holiday=r.isPublicHoliday) for r in rows]


def _overtime_out(breakdown: OvertimeBreakdown) -> OvertimeOut:
    return OvertimeOut(**breakdown.to_dict())


def _payslip_out(result: PayslipCalculation) -> PayslipOut:
    return PayslipOut(
        regularHours=result.regular_hours,
        overtimeHours=_overtime_out(result.overtime_hours),
        totalDays=result.total_days,
        basicSalary=result.basic_salary,
        overtimePay=_overtime_out(result.overtime_pay),
        totalPay=result.total_pay,
        hourlyRate=result.hourly_rate,
        days=[
            DayOut(
                date=d.worked_date,
                category=d.category.value,
                hoursWorked=d.total_hours,
                regularHours=d.regular_hours,
                overtimeHours=d.overtime_hours,
            )
            for d in result.days
        ],
    )


@router.post("/calculate", response_model=PayslipOut)
def calculate(payload: PayslipRequest, calculator: PayrollCalculator = Depends(get_calculator)) -> PayslipOut:
    result = calculator.calculate(_work_days(payload.workDays), payload.monthlyBaseSalary)
    return _payslip_out(result)


@router.post("/run", response_model=PayrollRunOut)
def run(payload: PayrollRunRequest, calculator: PayrollCalculator = Depends(get_calculator)) -> PayrollRunOut:
    requests = [
        EmployeePayslipRequest(
            employee=Employee(id=e.id, name=e.name, monthly_salary=e.monthlySalary),
            work_days=_work_days(e.workDays),
        )
        for e in payload.employees
    ]
    with payroll_context(period=payload.period):
        totals = PayrollRunPreview(calculator).preview(requests)
    return PayrollRunOut(
        period=payload.period,
        payslips={employee_id: _payslip_out(result) for employee_id, result in totals.payslips.items()},
        rejected={
            employee_id: [RejectionOut(**problem) for problem in problems]
            for employee_id, problems in totals.rejected.items()
        },
        basicSalary=totals.basic_salary,
        overtimePay=_overtime_out(totals.overtime_pay),
        totalPay=totals.total_pay,
    )
