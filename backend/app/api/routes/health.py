from typing import Any

from fastapi import APIRouter, Depends

from app.core.holidays import get_holiday_set
from payslip.holidays import PublicHolidaySet

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Liveness probe")
def healthcheck(holidays: PublicHolidaySet = Depends(get_holiday_set)) -> dict[str, Any]:
    return {"status": "ok", "holidayRegion": holidays.region, "holidayYears": holidays.years}
