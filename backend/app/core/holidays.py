from functools import lru_cache

from payslip.config import get_settings
from payslip.holidays import HolidayTableRepository, PublicHolidaySet


@lru_cache
def get_holiday_set() -> PublicHolidaySet:
    settings = get_settings()
    return HolidayTableRepository(settings.holiday_tables_path).load(settings.holiday_region)
