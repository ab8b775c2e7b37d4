from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.core.holidays import get_holiday_set
from payslip.holidays import PublicHolidaySet

router = APIRouter(prefix="/holidays", tags=["holidays"])


class HolidayOut(BaseModel):
    date: date
    name: str


class HolidayTableOut(BaseModel):
    region: str
    year: int
    holidays: list[HolidayOut]


class HolidayYearsOut(BaseModel):
    region: str
    years: list[int]


@router.get("", response_model=HolidayYearsOut)
def list_years(holidays: PublicHolidaySet = Depends(get_holiday_set)) -> HolidayYearsOut:
    return HolidayYearsOut(region=holidays.region, years=holidays.years)


@router.get("/{year}", response_model=HolidayTableOut)
def get_year(year: int, holidays: PublicHolidaySet = Depends(get_holiday_set)) -> HolidayTableOut:
    if not holidays.supports(year):
        raise HTTPException(status_code=404, detail=f"No public holiday table for {year}")
    return HolidayTableOut(
        region=holidays.region,
        year=year,
        holidays=[HolidayOut(date=day, name=name) for day, name in holidays.holidays_for(year)],
    )
