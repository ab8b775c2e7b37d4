import json

import pytest

from payslip import cli


def test_calculate_prints_json(capsys):
    cli.main(["calculate", "--salary", "16800", "--day", "2025-03-03:10", "--day", "2025-03-01:4", "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["regularHours"] == 8
    assert payload["overtimeHours"]["saturday"] == 6
    assert payload["totalPay"] == 1700


def test_calculate_prints_payslip_text(capsys):
    cli.main(
        [
            "calculate",
            "--salary",
            "16800",
            "--day",
            "2025-03-21:4:holiday",
            "--employee",
            "Jane Smith",
            "--period",
            "March 2025",
            "--breakdown",
        ]
    )

    out = capsys.readouterr().out
    assert "Employee: Jane Smith" in out
    assert "Period: March 2025" in out
    assert "Public Holidays (x2.0)" in out
    assert "R800.00" in out
    assert "Public holiday" in out


def test_calculate_reads_csv(capsys, tmp_path):
    path = tmp_path / "days.csv"
    path.write_text("date,hours_worked,is_public_holiday\n2025-03-02,4,\n2025-03-03,8,false\n")

    cli.main(["calculate", "--salary", "16800", "--csv", str(path), "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["totalDays"] == 2
    assert payload["overtimePay"]["sunday"] == 800
    assert payload["totalPay"] == 1600


def test_calculate_rejects_invalid_input(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["calculate", "--salary", "0", "--day", "2025-03-03:-1"])

    assert excinfo.value.code == 2
    err = capsys.readouterr().err
    assert "error: monthly_base_salary:" in err
    assert "error: work_days[0].hours_worked:" in err


def test_calculate_rejects_unsupported_year(capsys):
    with pytest.raises(SystemExit):
        cli.main(["calculate", "--salary", "16800", "--day", "2040-03-05:8"])

    assert "No public holiday table for 2040" in capsys.readouterr().err


def test_malformed_day_argument_is_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["calculate", "--salary", "16800", "--day", "2025-03-03"])

    assert excinfo.value.code == 2


def test_calculate_writes_pdf(tmp_path):
    path = tmp_path / "out" / "payslip.pdf"

    cli.main(["calculate", "--salary", "16800", "--day", "2025-03-03:8", "--pdf", str(path)])

    assert path.read_bytes().startswith(b"%PDF")


def test_holidays_lists_table(capsys):
    cli.main(["holidays", "2025"])

    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Public holidays ZA 2025"
    assert "2025-03-21  Fri  Human Rights Day" in out


def test_holidays_unknown_year_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["holidays", "1999"])

    assert excinfo.value.code == 2


def test_export_template_writes_headers(tmp_path):
    path = tmp_path / "template.csv"

    cli.main(["export-template", str(path)])

    assert path.read_text().strip() == "date,hours_worked,is_public_holiday"


def test_run_previews_employees_and_reports_rejections(capsys, tmp_path):
    path = tmp_path / "run.json"
    path.write_text(
        json.dumps(
            {
                "period": "March 2025",
                "employees": [
                    {
                        "id": "1",
                        "name": "John Doe",
                        "monthlySalary": 16800,
                        "workDays": [{"date": "2025-03-03", "hoursWorked": 8}],
                    },
                    {
                        "id": "2",
                        "name": "Jane Smith",
                        "monthlySalary": 0,
                        "workDays": [{"date": "2025-03-03", "hoursWorked": 8}],
                    },
                ],
            }
        )
    )

    with pytest.raises(SystemExit):
        cli.main(["run", str(path), "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert list(payload["payslips"]) == ["1"]
    assert payload["rejected"]["2"][0]["field"] == "monthly_base_salary"
    assert payload["totalPay"] == 800


def test_run_rejects_duplicate_employee_ids(capsys, tmp_path):
    path = tmp_path / "run.json"
    employee = {"id": "1", "name": "John Doe", "monthlySalary": 16800, "workDays": []}
    path.write_text(json.dumps({"employees": [employee, dict(employee, name="Jane Smith")]}))

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["run", str(path)])

    assert excinfo.value.code == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "error: employees[1].id: Duplicate employee id '1'" in captured.err


def test_calculate_reports_bad_csv_row(capsys, tmp_path):
    path = tmp_path / "days.csv"
    path.write_text("date,hours_worked,is_public_holiday\n2025-03-03,8,maybe\n")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["calculate", "--salary", "16800", "--csv", str(path)])

    assert excinfo.value.code == 2
    err = capsys.readouterr().err
    assert err.startswith("error: ")
    assert ":2:" in err
    assert "Traceback" not in err


@pytest.mark.parametrize(
    "content, message",
    [
        ('{"employees": [{"id": "1", "workDays": []}]}', "missing field 'monthlySalary'"),
        ("{not json", "Expecting property name"),
        ('{"employees": [{"id": "1", "monthlySalary": "lots"}]}', "could not convert string to float"),
    ],
)
def test_run_reports_malformed_file(capsys, tmp_path, content, message):
    path = tmp_path / "run.json"
    path.write_text(content)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["run", str(path)])

    assert excinfo.value.code == 2
    err = capsys.readouterr().err
    assert err.startswith(f"error: {path}: ")
    assert message in err
