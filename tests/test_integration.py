import csv
import os
import subprocess
import sys
from datetime import date
from pathlib import Path

import pytest

# Add the parent directory to the Python path so we can import the main module
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main import LEDGER_HEADERS, MONTHLY_HEADERS

BASE_ARGS = [
    "--balance", "650000",
    "--aio-rate", "8.201",
    "--traditional-rate", "6.5",
    "--monthly-payment", "4167.14",
    "--property-value", "1000000",
    "--monthly-income", "12000",
    "--monthly-expenses", "7192.14",
    "--start-date", "2025-01-01",
]


def run_script(args):
    """Helper function to run the main script with given arguments"""
    script_path = Path(__file__).parent.parent / "main.py"
    command = [sys.executable, str(script_path)] + args
    process = subprocess.run(
        command,
        capture_output=True,
        text=True
    )
    return process


def saved_path(stdout, label):
    for line in stdout.splitlines():
        if line.startswith(label):
            return line.split(":", 1)[1].strip()
    raise AssertionError(f"{label} not found in output")


def with_value(flag, value):
    args = list(BASE_ARGS)
    args[args.index(flag) + 1] = value
    return args


def test_basic_command_execution():
    """Test script execution with the reference scenario"""
    result = run_script(BASE_ARGS)

    # Check successful execution
    assert result.returncode == 0

    # Check expected output elements
    assert "Eligibility: eligible" in result.stdout
    assert "Traditional loan:" in result.stdout
    assert "All-In-One loan:" in result.stdout
    assert "Comparison:" in result.stdout
    assert "Ledger data saved to:" in result.stdout
    assert "Monthly data saved to:" in result.stdout
    assert "Note: Loan fully paid off on" in result.stdout

    # Verify no error messages
    assert not result.stderr


def test_ledger_csv_contents():
    """The saved ledger has one row per day up to and including payoff"""
    result = run_script(BASE_ARGS)
    assert result.returncode == 0

    with open(saved_path(result.stdout, "Ledger data saved to")) as f:
        rows = list(csv.reader(f))

    assert rows[0] == LEDGER_HEADERS
    first, last = rows[1], rows[-1]
    assert first[0] == "0"
    assert first[1] == "2025-01-01"
    assert first[2] == "650000.00"
    assert first[3] == "12000.00"
    assert last[-1] == "0.00"
    assert len(rows) - 1 == (date(2036, 2, 1) - date(2025, 1, 1)).days + 1
    assert last[1] == "2036-02-01"


def test_monthly_csv_contents():
    result = run_script(BASE_ARGS)
    assert result.returncode == 0

    with open(saved_path(result.stdout, "Monthly data saved to")) as f:
        rows = list(csv.reader(f))

    assert rows[0] == MONTHLY_HEADERS
    assert rows[1][0] == "1"
    assert rows[1][1] == "2025-01"
    assert len(rows) - 1 == 134
    assert rows[-1][1] == "2036-02"


def test_no_csv_flag():
    result = run_script(BASE_ARGS + ["--no-csv"])
    assert result.returncode == 0
    assert "Ledger data saved to:" not in result.stdout
    assert "Comparison:" in result.stdout


def test_verbose_output():
    result = run_script(BASE_ARGS + ["--no-csv", "-v"])
    assert result.returncode == 0
    assert "All-In-One first months:" in result.stdout
    assert "Month 1 (2025-01):" in result.stdout


def test_missing_required_arguments():
    result = run_script(["--balance", "650000"])
    assert result.returncode != 0
    assert "the following arguments are required" in result.stderr


def test_invalid_negative_arguments():
    """Test script behavior with invalid negative arguments"""
    test_cases = [
        {"flag": "--balance", "value": "-650000", "error_message": "loan balance cannot be negative"},
        {"flag": "--aio-rate", "value": "-8.201", "error_message": "aio interest rate cannot be negative"},
        {"flag": "--traditional-rate", "value": "0", "error_message": "traditional interest rate cannot be negative"},
        {"flag": "--monthly-income", "value": "-1", "error_message": "monthly income cannot be negative"},
        {"flag": "--monthly-payment", "value": "-100", "error_message": "monthly payment cannot be negative"},
    ]

    for case in test_cases:
        result = run_script(with_value(case["flag"], case["value"]))

        # Check error handling
        assert result.returncode != 0
        assert case["error_message"] in result.stderr.lower()


def test_invalid_argument_types():
    """Test script behavior with invalid argument types"""
    result = run_script(with_value("--balance", "abc"))
    assert result.returncode != 0
    assert "invalid float value: 'abc'" in result.stderr

    result = run_script(with_value("--start-date", "01/01/2025"))
    assert result.returncode != 0
    assert "invalid date value" in result.stderr

    result = run_script(BASE_ARGS + ["--deposit-frequency", "fortnightly"])
    assert result.returncode != 0
    assert "invalid choice" in result.stderr


def test_rate_above_maximum():
    result = run_script(with_value("--aio-rate", "25") + ["--no-csv"])
    assert result.returncode != 0
    assert "Interest rate must be between 0 and 20.0%" in result.stderr


def test_payment_not_covering_interest():
    result = run_script(with_value("--monthly-payment", "3000") + ["--no-csv"])
    assert result.returncode != 0
    assert "does not cover the first month's interest" in result.stderr


def test_non_viable_cash_flow():
    """Expenses above income: no payoff, a minimum cash flow hint instead"""
    args = with_value("--monthly-income", "7000") + ["--no-csv"]
    result = run_script(args)
    assert result.returncode == 0
    assert "Payoff: not within horizon" in result.stdout
    assert "Time Saved: n/a" in result.stdout
    assert "is not positive" in result.stdout
    assert "Info: A net monthly cash flow of" in result.stdout


def test_frequency_options():
    args = BASE_ARGS + ["--deposit-frequency", "biweekly", "--expense-frequency", "weekly", "--no-csv"]
    result = run_script(args)
    assert result.returncode == 0
    assert "Note: Loan fully paid off on" in result.stdout


@pytest.mark.parametrize("flags", [["--arm"], ["--homestead"], ["--additional-principal", "500"]])
def test_product_options(flags):
    result = run_script(BASE_ARGS + flags + ["--no-csv"])
    assert result.returncode == 0
    assert "Comparison:" in result.stdout
