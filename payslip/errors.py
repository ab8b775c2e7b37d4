from __future__ import annotations
from typing import Iterable, List


class PayrollValidationError(ValueError):
    """Input rejected before any pay is calculated."""

    field = "input"

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        if field is not None:
            self.field = field

    def as_detail(self) -> dict:
        return {"field": self.field, "message": self.message}


class InvalidSalaryError(PayrollValidationError):
    field = "monthly_base_salary"


class InvalidHoursError(PayrollValidationError):
    field = "hours_worked"


class UnsupportedYearError(PayrollValidationError):
    field = "date"

    def __init__(self, year: int, field: str | None = None):
        super().__init__(f"No public holiday table for {year}", field=field)
        self.year = year


class PayrollValidationErrors(PayrollValidationError):
    """Several validation problems found in one pass."""

    def __init__(self, errors: Iterable[PayrollValidationError]):
        self.errors: List[PayrollValidationError] = list(errors)
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in self.errors))

    def as_details(self) -> List[dict]:
        return [e.as_detail() for e in self.errors]
