#!/usr/bin/env python3
"""
All-In-One Loan Simulation Command Line

Copyright (c) 2024 Romain Bossut. All Rights Reserved.
This software is proprietary and confidential. Unauthorized copying, distribution,
or use of this software is strictly prohibited.
"""

import csv
import dataclasses
import logging
import os
from datetime import date, datetime
from typing import Any

from aiosim import (
    DEFAULT_CONFIG,
    CashFlowAnalysis,
    ComparisonRun,
    DepositFrequency,
    ExpenseFrequency,
    MortgageDetails,
    check_eligibility,
    run_comparison,
    summarize_by_month,
)

LEDGER_HEADERS = [
    "Day",
    "Date",
    "Starting Balance",
    "Deposits",
    "Withdrawals",
    "Additional Principal",
    "Net Cash Flow",
    "Interim Balance",
    "Annual Rate",
    "Daily Interest Rate",
    "Daily Interest Accrued",
    "Accumulated Interest",
    "Interest Posted",
    "Interest Paid",
    "Credit Limit",
    "Available Credit",
    "Ending Balance",
]

MONTHLY_HEADERS = [
    "Month",
    "Calendar Month",
    "Balance Start",
    "Balance End",
    "Deposits",
    "Withdrawals",
    "Additional Principal",
    "Interest Accrued",
    "Interest Posted",
    "Interest Paid",
    "Credit Limit",
    "Annual Rate",
]


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD date for argparse"""
    import argparse

    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date value: '{value}' (expected YYYY-MM-DD)")


def validate_args(args):
    """Validate command line arguments"""
    if args.balance <= 0:
        raise ValueError("Loan balance cannot be negative or zero")

    if args.aio_rate <= 0:
        raise ValueError("AIO interest rate cannot be negative or zero")

    if args.traditional_rate <= 0:
        raise ValueError("Traditional interest rate cannot be negative or zero")

    if args.monthly_income < 0:
        raise ValueError("Monthly income cannot be negative")

    if args.monthly_expenses < 0:
        raise ValueError("Monthly expenses cannot be negative")

    if args.monthly_payment is not None and args.monthly_payment <= 0:
        raise ValueError("Monthly payment cannot be negative or zero")

    if args.remaining_term_months <= 0:
        raise ValueError("Remaining term months cannot be negative or zero")

    if args.property_value is not None and args.property_value <= 0:
        raise ValueError("Property value cannot be negative or zero")

    if not 0 < args.ltv <= 1:
        raise ValueError("Loan to value must be a fraction between 0 and 1")

    if args.additional_principal < 0:
        raise ValueError("Additional principal cannot be negative")

    if args.horizon_days <= 0:
        raise ValueError("Horizon days cannot be negative or zero")


def parse_args(argv: list[str] | None = None) -> Any:
    """Parse command line arguments."""
    import argparse

    parser = argparse.ArgumentParser(description="All-In-One vs Traditional Mortgage Simulator")

    # Required arguments
    parser.add_argument(
        "--balance", type=float, required=True, help="Current loan balance"
    )
    parser.add_argument(
        "--aio-rate",
        type=float,
        required=True,
        help="All-In-One interest rate in percentage (e.g., 8.201 for 8.201%%)",
    )
    parser.add_argument(
        "--traditional-rate",
        type=float,
        required=True,
        help="Traditional mortgage rate in percentage (e.g., 6.5 for 6.5%%)",
    )
    parser.add_argument(
        "--monthly-income", type=float, required=True, help="Average monthly deposits"
    )
    parser.add_argument(
        "--monthly-expenses", type=float, required=True, help="Average monthly expenses"
    )

    # Optional arguments with defaults
    parser.add_argument(
        "--monthly-payment",
        type=float,
        default=None,
        help="Traditional monthly P&I payment (default: derived from the remaining term)",
    )
    parser.add_argument(
        "--remaining-term-months",
        type=int,
        default=360,
        help="Remaining traditional term in months (default: 360)",
    )
    parser.add_argument(
        "--property-value",
        type=float,
        default=None,
        help="Property value (default: balance / LTV)",
    )
    parser.add_argument(
        "--ltv",
        type=float,
        default=0.80,
        help="Maximum loan to value as a fraction (default: 0.80)",
    )
    parser.add_argument(
        "--deposit-frequency",
        choices=[f.value for f in DepositFrequency],
        default=DepositFrequency.MONTHLY.value,
        help="How often income is deposited (default: monthly)",
    )
    parser.add_argument(
        "--expense-frequency",
        choices=[f.value for f in ExpenseFrequency],
        default=ExpenseFrequency.DAILY.value,
        help="How expenses leave the account (default: daily)",
    )
    parser.add_argument(
        "--additional-principal",
        type=float,
        default=0.0,
        help="Extra principal paid on the 1st of each month (default: 0)",
    )
    parser.add_argument(
        "--start-date",
        type=parse_date,
        default=None,
        help="First simulated day as YYYY-MM-DD (default: today)",
    )

    # Product options
    parser.add_argument("--arm", action="store_true", help="Reset the AIO rate every January 1st")
    parser.add_argument(
        "--arm-index",
        type=float,
        default=5.0,
        help="ARM index in percentage (default: 5.0)",
    )
    parser.add_argument(
        "--arm-margin",
        type=float,
        default=2.5,
        help="ARM margin in percentage (default: 2.5)",
    )
    parser.add_argument(
        "--homestead", action="store_true", help="Flag the year-25 Homestead amortization switch"
    )
    parser.add_argument(
        "--horizon-days",
        type=int,
        default=DEFAULT_CONFIG.horizon_days,
        help=f"Number of days to simulate (default: {DEFAULT_CONFIG.horizon_days})",
    )

    # Output
    parser.add_argument("--no-csv", action="store_true", help="Do not write CSV files")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output including debug information."
    )

    args = parser.parse_args(argv)
    validate_args(args)
    return args


def print_debug_info(month_data: list[dict[str, Any]], months: int = 3) -> None:
    """Print the first few months of the All-In-One ledger.
    """
    print("\nAll-In-One first months:")
    for data in month_data[:months]:
        print(f"\nMonth {data['month']} ({data['label']}):")
        print(f"  Balance Start: ${data['balance_start']:,.2f}")
        print(f"  Deposits: ${data['deposits']:,.2f}")
        print(f"  Withdrawals: ${data['withdrawals']:,.2f}")
        print(f"  Interest Accrued: ${data['interest_accrued']:,.2f}")
        print(f"  Interest Posted: ${data['interest_posted']:,.2f}")
        print(f"  Interest Paid: ${data['interest_paid']:,.2f}")
        print(f"  Balance End: ${data['balance_end']:,.2f}")


def print_summary(run: ComparisonRun) -> None:
    """Print the comparison between both loans.
    """
    result = run.result
    traditional = result.traditional_loan
    aio = result.all_in_one_loan
    comparison = result.comparison

    print("\nTraditional loan:")
    print(f"  Monthly Payment: ${traditional.monthly_payment:,.2f}")
    print(f"  Total Interest: ${traditional.total_interest_paid:,.2f}")
    print(f"  Payoff: {traditional.payoff_months} months ({traditional.payoff_date.isoformat()})")

    print("\nAll-In-One loan:")
    print(f"  Net Monthly Cash Flow: ${aio.monthly_payment:,.2f}")
    print(f"  Total Interest: ${aio.total_interest_paid:,.2f}")
    if aio.payoff_months is not None:
        print(f"  Payoff: {aio.payoff_months} months ({aio.payoff_date.isoformat()})")
    else:
        print(f"  Payoff: not within horizon (balance ${run.aio.summary.final_balance:,.2f})")

    print("\nComparison:")
    print(f"  Interest Savings: ${comparison.interest_savings:,.2f}")
    if comparison.time_saved_months is not None:
        print(f"  Time Saved: {comparison.time_saved_months} months")
    else:
        print("  Time Saved: n/a")
    print(f"  Percentage Savings: {comparison.percentage_savings:.2f}%")


def write_ledger(writer, run: ComparisonRun) -> None:
    """Write the header and one row per simulated day to a csv writer"""
    writer.writerow(LEDGER_HEADERS)

    for row in run.aio.daily_results:
        writer.writerow([
            row.day_index,
            row.date.isoformat(),
            f"{row.starting_balance:.2f}",
            f"{row.deposits:.2f}",
            f"{row.withdrawals:.2f}",
            f"{row.additional_principal:.2f}",
            f"{row.net_cash_flow:.2f}",
            f"{row.interim_balance:.2f}",
            f"{row.annual_rate:.4f}",
            f"{row.daily_interest_rate:.8f}",
            f"{row.daily_interest_accrued:.4f}",
            f"{row.accumulated_interest:.4f}",
            f"{row.interest_posted:.2f}",
            f"{row.interest_paid:.2f}",
            f"{row.credit_limit:.2f}",
            f"{row.available_credit:.2f}",
            f"{row.ending_balance:.2f}",
        ])


def save_ledger_to_csv(run: ComparisonRun, filename_prefix: str = "aio_ledger") -> str:
    """Save the daily All-In-One ledger to a CSV file with one row per day.

    Returns:
    - Path to the saved file
    """
    # Create data directory if it doesn't exist
    os.makedirs("data", exist_ok=True)

    # Format current date and time
    current_time = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"data/{filename_prefix}_{current_time}.csv"

    with open(filename, 'w', newline='') as csvfile:
        write_ledger(csv.writer(csvfile), run)

    return filename


def save_monthly_summary_to_csv(
    month_data: list[dict[str, Any]], filename_prefix: str = "aio_monthly"
) -> str:
    """Save the month-by-month All-In-One rollup to a CSV file.

    Returns:
    - Path to the saved file
    """
    os.makedirs("data", exist_ok=True)

    current_time = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"data/{filename_prefix}_{current_time}.csv"

    with open(filename, 'w', newline='') as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(MONTHLY_HEADERS)

        for data in month_data:
            writer.writerow([
                data["month"],
                data["label"],
                f"{data['balance_start']:.2f}",
                f"{data['balance_end']:.2f}",
                f"{data['deposits']:.2f}",
                f"{data['withdrawals']:.2f}",
                f"{data['additional_principal']:.2f}",
                f"{data['interest_accrued']:.2f}",
                f"{data['interest_posted']:.2f}",
                f"{data['interest_paid']:.2f}",
                f"{data['credit_limit']:.2f}",
                f"{data['annual_rate']:.4f}",
            ])

    return filename


def cli(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    property_value = args.property_value
    if property_value is None:
        property_value = args.balance / args.ltv

    mortgage = MortgageDetails.build(
        current_balance=args.balance,
        interest_rate=args.traditional_rate,
        aio_interest_rate=args.aio_rate,
        monthly_payment=args.monthly_payment,
        remaining_term_months=args.remaining_term_months,
        property_value=property_value,
        loan_to_value=args.ltv,
        additional_principal=args.additional_principal,
        is_homestead_loan=args.homestead,
        is_arm=args.arm,
        arm_index=args.arm_index,
        arm_margin=args.arm_margin,
    )
    cash_flow = CashFlowAnalysis.build(
        monthly_income=args.monthly_income,
        monthly_expenses=args.monthly_expenses,
        deposit_frequency=args.deposit_frequency,
        expense_frequency=args.expense_frequency,
    )
    config = dataclasses.replace(DEFAULT_CONFIG, horizon_days=args.horizon_days)
    start_date = args.start_date or date.today()

    eligibility = check_eligibility(mortgage, cash_flow, config)
    print("\nEligibility:", "eligible" if eligibility.eligible else "not eligible")
    for reason in eligibility.reasons:
        print(f"  - {reason}")

    run = run_comparison(mortgage, cash_flow, start_date, config)
    month_data = summarize_by_month(run.aio)

    # Print debug information only if verbose
    if args.verbose:
        print_debug_info(month_data)

    if not args.no_csv:
        ledger_file = save_ledger_to_csv(run)
        print(f"Ledger data saved to: {ledger_file}")
        monthly_file = save_monthly_summary_to_csv(month_data)
        print(f"Monthly data saved to: {monthly_file}")

    print_summary(run)

    if run.result.warnings:
        print("\nNotes and warnings:")
        for warning in run.result.warnings:
            print(warning)


if __name__ == "__main__":
    cli()
