from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, Optional, Tuple


class DayCategory(str, Enum):
    REGULAR = "regular"
    SATURDAY = "saturday"
    SUNDAY = "sunday"
    PUBLIC_HOLIDAY = "public_holiday"


@dataclass(frozen=True)
class WorkDay:
    date: date
    hours_worked: float
    is_public_holiday: Optional[bool] = None


@dataclass(frozen=True)
class OvertimeBreakdown:
    saturday: float = 0.0
    sunday: float = 0.0
    public_holiday: float = 0.0

    @property
    def total(self) -> float:
        return self.saturday + self.sunday + self.public_holiday

    def to_dict(self) -> Dict[str, float]:
        return {"saturday": self.saturday, "sunday": self.sunday, "publicHoliday": self.public_holiday}


@dataclass(frozen=True)
class DayClassification:
    """How one logged day was bucketed.

    ``overtime_hours`` is only non-zero for weekdays longer than the regular
    allotment; that excess is billed in the Saturday bucket.
    """

    worked_date: date
    category: DayCategory
    total_hours: float
    regular_hours: float = 0.0
    overtime_hours: float = 0.0


@dataclass(frozen=True)
class PayslipCalculation:
    regular_hours: float
    overtime_hours: OvertimeBreakdown
    total_days: int
    basic_salary: float
    overtime_pay: OvertimeBreakdown
    total_pay: float
    hourly_rate: float = 0.0
    days: Tuple[DayClassification, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, object]:
        return {
            "regularHours": self.regular_hours,
            "overtimeHours": self.overtime_hours.to_dict(),
            "totalDays": self.total_days,
            "basicSalary": self.basic_salary,
            "overtimePay": self.overtime_pay.to_dict(),
            "totalPay": self.total_pay,
            "hourlyRate": self.hourly_rate,
        }


@dataclass
class Employee:
    id: str
    name: str
    monthly_salary: float
    department: str = ""
