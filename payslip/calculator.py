from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence

from .errors import (
    InvalidHoursError,
    InvalidSalaryError,
    PayrollValidationError,
    PayrollValidationErrors,
    UnsupportedYearError,
)
from .holidays import PublicHolidaySet, default_holidays
from .logging import get_logger
from .models import DayCategory, DayClassification, OvertimeBreakdown, PayslipCalculation, WorkDay

logger = get_logger(__name__)

HOURS_PER_DAY = 8
WORKING_DAYS_PER_MONTH = 21  # fixed assumption, not derived from the calendar
MAX_HOURS_PER_DAY = 24

SATURDAY_MULTIPLIER = 1.5
SUNDAY_MULTIPLIER = 2.0
PUBLIC_HOLIDAY_MULTIPLIER = 2.0

SATURDAY = 5
SUNDAY = 6


def hourly_rate(monthly_base_salary: float) -> float:
    return monthly_base_salary / (HOURS_PER_DAY * WORKING_DAYS_PER_MONTH)


def _needs_lookup(day: WorkDay) -> bool:
    return not day.is_public_holiday


def validate_work_days(
    work_days: Sequence[WorkDay],
    monthly_base_salary: float,
    holidays: PublicHolidaySet,
) -> List[PayrollValidationError]:
    """Collect every input problem without raising."""

    errors: List[PayrollValidationError] = []
    if monthly_base_salary is None or not (math.isfinite(monthly_base_salary) and monthly_base_salary > 0):
        errors.append(InvalidSalaryError("Monthly base salary must be a finite amount greater than zero"))

    unsupported_years = set()
    for index, day in enumerate(work_days):
        if not math.isfinite(day.hours_worked):
            errors.append(
                InvalidHoursError(
                    f"Hours worked on {day.date.isoformat()} must be a finite number",
                    field=f"work_days[{index}].hours_worked",
                )
            )
        elif day.hours_worked < 0:
            errors.append(
                InvalidHoursError(
                    f"Hours worked on {day.date.isoformat()} cannot be negative",
                    field=f"work_days[{index}].hours_worked",
                )
            )
        elif day.hours_worked > MAX_HOURS_PER_DAY:
            errors.append(
                InvalidHoursError(
                    f"Hours worked on {day.date.isoformat()} cannot exceed {MAX_HOURS_PER_DAY}",
                    field=f"work_days[{index}].hours_worked",
                )
            )
        year = day.date.year
        if _needs_lookup(day) and not holidays.supports(year) and year not in unsupported_years:
            unsupported_years.add(year)
            errors.append(UnsupportedYearError(year, field=f"work_days[{index}].date"))
    return errors


def classify_day(day: WorkDay, holidays: PublicHolidaySet) -> DayClassification:
    hours = day.hours_worked
    if day.is_public_holiday or holidays.is_public_holiday(day.date):
        return DayClassification(day.date, DayCategory.PUBLIC_HOLIDAY, hours)
    weekday = day.date.weekday()
    if weekday == SATURDAY:
        return DayClassification(day.date, DayCategory.SATURDAY, hours)
    if weekday == SUNDAY:
        return DayClassification(day.date, DayCategory.SUNDAY, hours)

    regular = min(hours, HOURS_PER_DAY)
    return DayClassification(
        day.date,
        DayCategory.REGULAR,
        hours,
        regular_hours=regular,
        overtime_hours=hours - regular,
    )


class PayrollCalculator:
    def __init__(self, holidays: Optional[PublicHolidaySet] = None):
        self.holidays = holidays if holidays is not None else default_holidays()

    def validate(self, work_days: Sequence[WorkDay], monthly_base_salary: float) -> None:
        errors = validate_work_days(work_days, monthly_base_salary, self.holidays)
        if len(errors) == 1:
            raise errors[0]
        if errors:
            raise PayrollValidationErrors(errors)

    def calculate(self, work_days: Iterable[WorkDay], monthly_base_salary: float) -> PayslipCalculation:
        days = list(work_days)
        self.validate(days, monthly_base_salary)

        rate = hourly_rate(monthly_base_salary)
        regular_hours = 0.0
        saturday_hours = 0.0
        sunday_hours = 0.0
        holiday_hours = 0.0

        classifications = []
        for day in days:
            classification = classify_day(day, self.holidays)
            classifications.append(classification)
            if classification.category is DayCategory.PUBLIC_HOLIDAY:
                holiday_hours += classification.total_hours
            elif classification.category is DayCategory.SATURDAY:
                saturday_hours += classification.total_hours
            elif classification.category is DayCategory.SUNDAY:
                sunday_hours += classification.total_hours
            else:
                regular_hours += classification.regular_hours
                # weekday overtime is billed at the Saturday rate
                saturday_hours += classification.overtime_hours

        basic_salary = round(regular_hours * rate, 2)
        overtime_pay = OvertimeBreakdown(
            saturday=round(saturday_hours * rate * SATURDAY_MULTIPLIER, 2),
            sunday=round(sunday_hours * rate * SUNDAY_MULTIPLIER, 2),
            public_holiday=round(holiday_hours * rate * PUBLIC_HOLIDAY_MULTIPLIER, 2),
        )
        total_pay = round(basic_salary + overtime_pay.total, 2)

        result = PayslipCalculation(
            regular_hours=regular_hours,
            overtime_hours=OvertimeBreakdown(
                saturday=saturday_hours,
                sunday=sunday_hours,
                public_holiday=holiday_hours,
            ),
            total_days=len(days),
            basic_salary=basic_salary,
            overtime_pay=overtime_pay,
            total_pay=total_pay,
            hourly_rate=rate,
            days=tuple(classifications),
        )
        logger.debug("payslip_calculated", total_days=result.total_days, total_pay=result.total_pay)
        return result


def calculate_payslip(
    work_days: Iterable[WorkDay],
    monthly_base_salary: float,
    holidays: Optional[PublicHolidaySet] = None,
) -> PayslipCalculation:
    return PayrollCalculator(holidays).calculate(work_days, monthly_base_salary)
