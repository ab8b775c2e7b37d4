"""Payslip overtime calculation for small-business payroll."""

from .calculator import PayrollCalculator, calculate_payslip, hourly_rate
from .errors import (
    InvalidHoursError,
    InvalidSalaryError,
    PayrollValidationError,
    PayrollValidationErrors,
    UnsupportedYearError,
)
from .holidays import HolidayTableRepository, PublicHolidaySet, default_holidays
from .models import DayCategory, DayClassification, OvertimeBreakdown, PayslipCalculation, WorkDay

__all__ = [
    "DayCategory",
    "DayClassification",
    "HolidayTableRepository",
    "InvalidHoursError",
    "InvalidSalaryError",
    "OvertimeBreakdown",
    "PayrollCalculator",
    "PayrollValidationError",
    "PayrollValidationErrors",
    "PayslipCalculation",
    "PublicHolidaySet",
    "UnsupportedYearError",
    "WorkDay",
    "calculate_payslip",
    "default_holidays",
    "hourly_rate",
]
