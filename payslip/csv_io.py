from __future__ import annotations
import csv
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from .models import WorkDay


CSV_HEADERS = [
    "date",
    "hours_worked",
    "is_public_holiday",
]

_TRUE = {"true", "yes", "y", "1"}
_FALSE = {"false", "no", "n", "0"}


def parse_flag(value: Optional[str]) -> Optional[bool]:
    text = (value or "").strip().lower()
    if not text:
        return None
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"Unrecognised holiday flag {value!r}")


def export_work_days(path: Path, days: Iterable[WorkDay]) -> None:
    with path.open("w", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=CSV_HEADERS)
        writer.writeheader()
        for day in days:
            writer.writerow(
                {
                    "date": day.date.isoformat(),
                    "hours_worked": day.hours_worked,
                    "is_public_holiday": "" if day.is_public_holiday is None else str(day.is_public_holiday).lower(),
                }
            )


def import_work_days(path: Path) -> list[WorkDay]:
    days: list[WorkDay] = []
    with path.open(newline="") as handle:
        reader = csv.DictReader(handle)
        missing = {"date", "hours_worked"} - set(reader.fieldnames or [])
        if missing:
            raise ValueError(f"{path} is missing columns: {', '.join(sorted(missing))}")
        for line_no, row in enumerate(reader, start=2):
            try:
                days.append(
                    WorkDay(
                        date=date.fromisoformat(row["date"].strip()),
                        hours_worked=float(row["hours_worked"]),
                        is_public_holiday=parse_flag(row.get("is_public_holiday")),
                    )
                )
            except ValueError as exc:
                raise ValueError(f"{path}:{line_no}: {exc}") from exc
    return days
