from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from app.core.holidays import get_holiday_set
from app.main import app
from payslip.holidays import PublicHolidaySet


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["holidayRegion"] == "ZA"
    assert 2025 in body["holidayYears"]


def test_calculate_weekday_overtime(client):
    payload = {
        "monthlyBaseSalary": 16800,
        "workDays": [{"date": "2025-03-03", "hoursWorked": 10}],
    }

    response = client.post("/payslips/calculate", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["regularHours"] == 8
    assert body["overtimeHours"]["saturday"] == 2
    assert body["basicSalary"] == 800
    assert body["overtimePay"]["saturday"] == 300
    assert body["totalPay"] == 1100
    assert body["days"][0]["category"] == "regular"


def test_calculate_uses_holiday_table(client):
    payload = {
        "monthlyBaseSalary": 16800,
        "workDays": [{"date": "2025-12-25", "hoursWorked": 4, "isPublicHoliday": False}],
    }

    response = client.post("/payslips/calculate", json=payload)

    assert response.status_code == 200
    assert response.json()["overtimePay"]["publicHoliday"] == 800


def test_calculate_rejects_invalid_input_with_field_messages(client):
    payload = {
        "monthlyBaseSalary": 0,
        "workDays": [{"date": "2025-03-03", "hoursWorked": 30}],
    }

    response = client.post("/payslips/calculate", json=payload)

    assert response.status_code == 422
    fields = [detail["field"] for detail in response.json()["detail"]]
    assert fields == ["monthly_base_salary", "work_days[0].hours_worked"]


def test_calculate_rejects_unsupported_year(client):
    payload = {"monthlyBaseSalary": 16800, "workDays": [{"date": "2041-01-07", "hoursWorked": 8}]}

    response = client.post("/payslips/calculate", json=payload)

    assert response.status_code == 422
    assert response.json()["detail"] == [
        {"field": "work_days[0].date", "message": "No public holiday table for 2041"}
    ]


def test_calculate_with_overridden_holidays(client):
    app.dependency_overrides[get_holiday_set] = lambda: PublicHolidaySet.from_mapping(
        {date(2041, 1, 7): "Test Day"}, years=[2041]
    )
    payload = {"monthlyBaseSalary": 16800, "workDays": [{"date": "2041-01-07", "hoursWorked": 8}]}

    response = client.post("/payslips/calculate", json=payload)

    assert response.status_code == 200
    assert response.json()["overtimeHours"]["publicHoliday"] == 8


def test_run_reports_rejected_employees(client):
    payload = {
        "period": "March 2025",
        "employees": [
            {"id": "1", "name": "John Doe", "monthlySalary": 16800, "workDays": [{"date": "2025-03-01", "hoursWorked": 4}]},
            {"id": "2", "name": "Jane Smith", "monthlySalary": 52000, "workDays": [{"date": "2025-03-03", "hoursWorked": -3}]},
        ],
    }

    response = client.post("/payslips/run", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["period"] == "March 2025"
    assert list(body["payslips"]) == ["1"]
    assert body["rejected"]["2"][0]["field"] == "work_days[0].hours_worked"
    assert body["totalPay"] == 600


def test_calculate_rejects_nan_salary(client):
    body = '{"monthlyBaseSalary": NaN, "workDays": [{"date": "2025-03-03", "hoursWorked": 8}]}'

    response = client.post("/payslips/calculate", content=body, headers={"content-type": "application/json"})

    assert response.status_code == 422
    assert response.json()["detail"][0]["field"] == "monthly_base_salary"


def test_calculate_rejects_infinite_hours(client):
    body = '{"monthlyBaseSalary": 16800, "workDays": [{"date": "2025-03-03", "hoursWorked": Infinity}]}'

    response = client.post("/payslips/calculate", content=body, headers={"content-type": "application/json"})

    assert response.status_code == 422
    assert response.json()["detail"][0]["field"] == "work_days[0].hours_worked"


def test_run_rejects_duplicate_employee_ids(client):
    payload = {
        "employees": [
            {"id": "1", "name": "John Doe", "monthlySalary": 16800, "workDays": [{"date": "2025-03-03", "hoursWorked": 8}]},
            {"id": "1", "name": "Jane Smith", "monthlySalary": 33600, "workDays": [{"date": "2025-03-03", "hoursWorked": 8}]},
        ],
    }

    response = client.post("/payslips/run", json=payload)

    assert response.status_code == 422
    assert response.json()["detail"][0]["field"] == "employees[1].id"
