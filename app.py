import streamlit as st
import matplotlib.pyplot as plt
from datetime import date
import csv
import io

from aiosim import (
    DEFAULT_CONFIG,
    CashFlowAnalysis,
    DepositFrequency,
    ExpenseFrequency,
    MortgageDetails,
    SimulationError,
    check_eligibility,
    run_comparison,
    summarize_by_month,
)
from aiosim.credit_limit import credit_limit_curve
from main import write_ledger

def ledger_csv(run):
    buffer = io.StringIO()
    write_ledger(csv.writer(buffer), run)
    return buffer.getvalue()

def main():
    st.set_page_config(layout="wide") # Set wide mode
    st.title("All-In-One Loan Comparison")
    st.write("Compare a traditional mortgage with an All-In-One loan that nets your deposits against the balance every day.")

    # Create two columns for input parameters
    col1, col2 = st.columns(2)

    with col1:
        st.subheader("Mortgage Parameters")
        balance = st.number_input(
            "Current Balance ($)",
            min_value=1.0,
            value=650000.0,
            step=1000.0,
            format="%0.2f"
        )

        traditional_rate = st.number_input(
            "Traditional Rate (%)",
            min_value=0.01,
            max_value=20.0,
            value=6.5,
            step=0.125,
            format="%0.3f"
        )

        monthly_payment = st.number_input(
            "Traditional Monthly Payment ($)",
            min_value=1.0,
            value=4167.14,
            step=10.0,
            format="%0.2f"
        )

        aio_rate = st.number_input(
            "All-In-One Rate (%)",
            min_value=0.01,
            max_value=20.0,
            value=8.201,
            step=0.125,
            format="%0.3f"
        )

        property_value = st.number_input(
            "Property Value ($)",
            min_value=1.0,
            value=1000000.0,
            step=1000.0,
            format="%0.2f"
        )

    with col2:
        st.subheader("Cash Flow")
        monthly_income = st.number_input(
            "Monthly Deposits ($)",
            min_value=0.0,
            value=12000.0,
            step=100.0,
            format="%0.2f"
        )

        monthly_expenses = st.number_input(
            "Monthly Expenses ($)",
            min_value=0.0,
            value=7192.14,
            step=100.0,
            format="%0.2f"
        )

        deposit_frequency = st.selectbox(
            "Deposit Frequency",
            [f.value for f in DepositFrequency],
            index=[f.value for f in DepositFrequency].index("monthly")
        )

        start_date = st.date_input("Start Date", value=date(2025, 1, 1))

    # Advanced options in an expander
    with st.expander("Advanced Options"):
        ltv = st.slider("Maximum LTV", min_value=0.1, max_value=1.0, value=0.8, step=0.05)
        expense_frequency = st.selectbox("Expense Frequency", [f.value for f in ExpenseFrequency])
        additional_principal = st.number_input(
            "Additional Principal on the 1st ($)",
            min_value=0.0,
            value=0.0,
            step=100.0,
            format="%0.2f"
        )
        is_arm = st.checkbox("Adjustable rate (resets every January)", value=False)
        arm_index = st.number_input("ARM Index (%)", min_value=0.0, max_value=20.0, value=5.0, step=0.125)
        arm_margin = st.number_input("ARM Margin (%)", min_value=0.0, max_value=20.0, value=2.5, step=0.125)
        is_homestead = st.checkbox("Homestead loan", value=False)

    try:
        mortgage = MortgageDetails.build(
            current_balance=balance,
            interest_rate=traditional_rate,
            aio_interest_rate=aio_rate,
            monthly_payment=monthly_payment,
            property_value=property_value,
            loan_to_value=ltv,
            additional_principal=additional_principal,
            is_homestead_loan=is_homestead,
            is_arm=is_arm,
            arm_index=arm_index,
            arm_margin=arm_margin,
        )
        cash_flow = CashFlowAnalysis.build(
            monthly_income=monthly_income,
            monthly_expenses=monthly_expenses,
            deposit_frequency=deposit_frequency,
            expense_frequency=expense_frequency,
        )
        run = run_comparison(mortgage, cash_flow, start_date, DEFAULT_CONFIG)
    except SimulationError as e:
        st.error(str(e))
        return

    eligibility = check_eligibility(mortgage, cash_flow)
    result = run.result
    month_data = summarize_by_month(run.aio)

    # Display summary statistics
    st.subheader("Summary")
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Traditional Interest", f"${result.traditional_loan.total_interest_paid:,.2f}")
        st.metric("Traditional Payoff", f"{result.traditional_loan.payoff_months} months")
    with col2:
        st.metric("All-In-One Interest", f"${result.all_in_one_loan.total_interest_paid:,.2f}")
        if result.all_in_one_loan.payoff_months is not None:
            st.metric("All-In-One Payoff", f"{result.all_in_one_loan.payoff_months} months")
        else:
            st.metric("All-In-One Payoff", "Not within 30 years")
    with col3:
        st.metric(
            "Interest Savings",
            f"${result.comparison.interest_savings:,.2f}",
            delta=f"{result.comparison.percentage_savings:.1f}%",
        )
        if result.comparison.time_saved_months is not None:
            months = result.comparison.time_saved_months
            st.metric("Time Saved", f"{months} months (Year {months/12:.1f})")

    # Display charts
    st.subheader("Charts")

    trad_years = [data['month']/12 for data in run.traditional.month_data]
    trad_balance = [data['principal_end'] for data in run.traditional.month_data]
    aio_years = [data['month']/12 for data in month_data]
    aio_balance = [data['balance_end'] for data in month_data]
    credit = credit_limit_curve(
        mortgage.property_value, mortgage.loan_to_value, len(month_data), DEFAULT_CONFIG.credit_decline_months
    )

    fig = plt.figure(figsize=(12, 10))
    gs = fig.add_gridspec(2, 1, height_ratios=[2, 1])

    # Main balance plot
    ax1 = fig.add_subplot(gs[0])
    ax1.plot(trad_years, trad_balance, label='Traditional Balance', color='red')
    ax1.plot(aio_years, aio_balance, label='All-In-One Balance', color='green')
    ax1.plot(aio_years, credit, label='Credit Limit', color='grey', linestyle='--')
    ax1.set_ylabel('Amount')
    ax1.set_title('Loan Balance Over Time')
    ax1.grid(True, linestyle='--', alpha=0.7)
    ax1.legend()

    # Monthly interest plot
    ax2 = fig.add_subplot(gs[1], sharex=ax1)
    width = 0.08
    trad_interest = [data['interest_paid'] for data in run.traditional.month_data]
    aio_interest = [data['interest_accrued'] for data in month_data]
    ax2.bar(trad_years, trad_interest, width, label="Traditional Interest", color="red", alpha=0.6)
    ax2.bar(aio_years, aio_interest, width, label="All-In-One Interest", color="green", alpha=0.6)
    ax2.set_xlabel("Years")
    ax2.set_ylabel("Monthly Interest")
    ax2.grid(True, linestyle="--", alpha=0.7)
    ax2.legend()

    # Format axes
    def format_dollars(x, p):
        return f"${int(x):,}"

    ax1.yaxis.set_major_formatter(plt.FuncFormatter(format_dollars))
    ax2.yaxis.set_major_formatter(plt.FuncFormatter(format_dollars))
    ax1.xaxis.set_major_locator(plt.MultipleLocator(1))
    ax1.xaxis.set_major_formatter(plt.FormatStrFormatter("%d"))

    plt.tight_layout()
    st.pyplot(fig)
    plt.close()

    # Eligibility
    st.subheader("Eligibility")
    if eligibility.eligible:
        st.success("Eligible for the All-In-One loan")
    else:
        st.warning("Not eligible for the All-In-One loan")
    for reason in eligibility.reasons:
        st.write(f"- {reason}")

    st.download_button(
        label="Download Daily Ledger as CSV",
        data=ledger_csv(run),
        file_name="aio_ledger.csv",
        mime="text/csv",
    )

    # Display warnings at the bottom
    if result.warnings:
        st.markdown("---")  # Add a separator
        st.subheader("Simulation Notes and Warnings")
        for warning in result.warnings:
            if warning.startswith("Note:"):
                st.info(warning)
            elif warning.startswith("Info:"):
                st.info(warning)
            else:
                st.warning(warning)

if __name__ == "__main__":
    main()
