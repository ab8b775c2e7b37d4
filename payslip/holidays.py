from __future__ import annotations

import json
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

DEFAULT_TABLES_PATH = Path(__file__).resolve().parent / "data" / "holidays"
DEFAULT_REGION = "ZA"


class PublicHolidaySet:
    """Public holidays per supported year.

    A year without a table is unsupported, which is different from a year that
    simply has no holiday on a given date.
    """

    def __init__(self, region: str, tables: Mapping[int, Mapping[date, str]]):
        self.region = region
        self._tables: Dict[int, Dict[date, str]] = {year: dict(days) for year, days in tables.items()}

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[date, Union[bool, str]],
        years: Optional[Iterable[int]] = None,
        region: str = "custom",
    ) -> "PublicHolidaySet":
        tables: Dict[int, Dict[date, str]] = {year: {} for year in (years or [])}
        for day, value in mapping.items():
            tables.setdefault(day.year, {})
            if value:
                tables[day.year][day] = value if isinstance(value, str) else "Public holiday"
        return cls(region, tables)

    @property
    def years(self) -> List[int]:
        return sorted(self._tables)

    def supports(self, year: int) -> bool:
        return year in self._tables

    def is_public_holiday(self, day: date) -> bool:
        return day in self._tables.get(day.year, {})

    def name_for(self, day: date) -> Optional[str]:
        return self._tables.get(day.year, {}).get(day)

    def holidays_for(self, year: int) -> List[Tuple[date, str]]:
        if year not in self._tables:
            raise KeyError(f"No public holiday table for {year} in region {self.region}")
        return sorted(self._tables[year].items())

    def __contains__(self, day: date) -> bool:
        return self.is_public_holiday(day)


class HolidayTableRepository:
    def __init__(self, base_path: Path = DEFAULT_TABLES_PATH):
        self.base_path = Path(base_path)

    def available_regions(self) -> List[str]:
        return sorted(p.name for p in self.base_path.iterdir() if p.is_dir())

    def available_years(self, region: str) -> List[int]:
        return sorted(int(p.stem) for p in (self.base_path / region).glob("*.json") if p.stem.isdigit())

    def load_year(self, region: str, year: int) -> Dict[date, str]:
        file_path = self.base_path / region / f"{year}.json"
        if not file_path.exists():
            raise FileNotFoundError(f"Holiday table {region}/{year} not found at {file_path}")
        with file_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
        if data.get("year") != year:
            raise KeyError(f"Holiday table {file_path} declares year {data.get('year')}, expected {year}")
        return {date.fromisoformat(row["date"]): row["name"] for row in data["holidays"]}

    def load(self, region: str = DEFAULT_REGION, years: Optional[Iterable[int]] = None) -> PublicHolidaySet:
        wanted = list(years) if years is not None else self.available_years(region)
        return PublicHolidaySet(region, {year: self.load_year(region, year) for year in wanted})


@lru_cache
def default_holidays(region: str = DEFAULT_REGION) -> PublicHolidaySet:
    return HolidayTableRepository().load(region)
