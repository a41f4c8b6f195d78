"""Terminal reports for loan scenarios, deposits and prepay-vs-invest decisions.

Usage:
    python -m findash.cli loan 100000 7.5 120 --prepay 10000 --prepay-month 12 --extra 200
    python -m findash.cli loan 200000 4.5 240 --prepay 20000 --prepay-month 24 --penalty 2 --csv schedule.csv
    python -m findash.cli deposit 100000 7 60 --compounding monthly --tax 30
    python -m findash.cli compare 100000 7.5 120 --prepay 10000 --prepay-month 12 --invest-rate 12
"""

import argparse
import logging
import sys
from decimal import Decimal
from pathlib import Path

from findash.config import settings
from findash.engine.amortization import yearly_summary
from findash.engine.comparison import compare_prepay_vs_invest
from findash.engine.deposit import calculate_deposit
from findash.engine.rate_math import InvalidTermError
from findash.engine.scenarios import run_scenarios
from findash.export import convert_currency, export_schedule_csv
from findash.models.comparison import ComparisonResult, InvestmentProfile
from findash.models.deposit import CompoundingFrequency, DepositInputs, DepositResult, PayoutFrequency
from findash.models.loan import ExtraPaymentTiming, LoanInputs, ScenarioSet, Strategy


# ── Helpers ──────────────────────────────────────────────────────────────────

def _money(v) -> str:
    return f"{float(v):,.2f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def _secondary(v) -> str:
    converted = convert_currency(v, settings.secondary_currency_rate)
    return f"{settings.secondary_currency_code} {_money(converted)}"


# ── Report sections ──────────────────────────────────────────────────────────

def print_scenarios(scenarios: ScenarioSet) -> None:
    _header("Repayment Scenarios")
    print(f"  {'Scenario':<12}  {'EMI':>10}  {'Months':>6}  {'Interest':>12}  {'Penalty':>9}  {'Saved':>12}")
    print(f"  {'-' * 12}  {'-' * 10}  {'-' * 6}  {'-' * 12}  {'-' * 9}  {'-' * 12}")
    for strategy in Strategy:
        s = scenarios.get(strategy)
        print(
            f"  {s.name:<12}  {_money(s.emi):>10}  {s.actual_term_months:>6}  "
            f"{_money(s.total_interest):>12}  {_money(s.total_penalty):>9}  "
            f"{_money(scenarios.savings(strategy)):>12}"
        )
        if s.negative_amortization or s.hit_safety_bound:
            print(f"  ! {s.name}: EMI does not amortize the loan")

    best = max((Strategy.PREPAYMENT, Strategy.AGGRESSIVE), key=scenarios.savings)
    print()
    print(f"  Best strategy:    {best.value} (saves {_money(scenarios.savings(best))}, "
          f"{_secondary(scenarios.savings(best))})")


def print_yearly(scenarios: ScenarioSet, strategy: Strategy) -> None:
    _header(f"Yearly Summary: {strategy.value}")
    print(f"  {'Yr':>3}  {'Principal':>12}  {'Interest':>12}  {'Payments':>12}  {'Balance':>12}")
    print(f"  {'---':>3}  {'-' * 12}  {'-' * 12}  {'-' * 12}  {'-' * 12}")
    for yr in yearly_summary(scenarios.get(strategy)):
        print(
            f"  {int(yr['year']):>3}  {_money(yr['principal']):>12}  {_money(yr['interest']):>12}  "
            f"{_money(yr['payments']):>12}  {_money(yr['ending_balance']):>12}"
        )


def print_deposit(result: DepositResult) -> None:
    _header("Fixed Deposit")
    print(f"  Principal:            {_money(result.principal)}")
    print(f"  Maturity Amount:      {_money(result.maturity_amount)}")
    print(f"  Interest Earned:      {_money(result.interest_earned)}")
    print(f"  Tax on Interest:      {_money(result.tax_on_interest)}")
    print(f"  Post-Tax Maturity:    {_money(result.post_tax_maturity)}  ({_secondary(result.post_tax_maturity)})")
    print(f"  Periodic Payouts:     {_money(result.total_payouts)}")
    print(f"  In Today's Money:     {_money(result.inflation_adjusted_maturity)}")


def print_comparison(result: ComparisonResult) -> None:
    _header(f"Prepay vs Invest ({result.strategy.value})")
    print(f"  Amount:               {_money(result.investment_amount)}")
    print(f"  Horizon:              {result.horizon_months} months")
    print(f"  Loan Interest Saved:  {_money(result.loan_interest_saved)}  (penalty {_money(result.loan_penalty)})")
    print(f"  Investment Return:    {_money(result.investment_return)}  at {result.investment_rate_percent}%")
    print(f"  Net Savings:          {_money(result.net_savings)}")
    print(f"  Recommendation:       {result.recommendation.value.upper()}")
    if result.break_even_month:
        print(f"  Break-even Month:     {result.break_even_month}")
    else:
        print("  Break-even Month:     none within the loan term")
    if result.break_even_rate_percent is not None:
        print(f"  Break-even Rate:      {result.break_even_rate_percent}%")


# ── Main ─────────────────────────────────────────────────────────────────────

def _add_loan_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("principal", type=Decimal, help="Loan principal")
    parser.add_argument("rate", type=Decimal, help="Annual interest rate in percent")
    parser.add_argument("term", type=int, help="Term in months")
    parser.add_argument("--prepay", type=Decimal, default=Decimal("0"), help="Bulk prepayment amount")
    parser.add_argument("--prepay-month", type=int, default=0, help="Month of the bulk prepayment")
    parser.add_argument(
        "--penalty",
        type=Decimal,
        default=settings.default_penalty_rate,
        help=f"Prepayment penalty in percent (default: {settings.default_penalty_rate})",
    )
    parser.add_argument("--extra", type=Decimal, default=Decimal("0"), help="Extra monthly payment")
    parser.add_argument(
        "--timing",
        choices=[t.value for t in ExtraPaymentTiming],
        default=ExtraPaymentTiming.BOTH.value,
        help="When the extra payment applies relative to the prepayment (default: both)",
    )


def _loan_from_args(args: argparse.Namespace) -> LoanInputs:
    return LoanInputs(
        principal=args.principal,
        annual_rate_percent=args.rate,
        term_months=args.term,
        prepayment_amount=args.prepay,
        prepayment_month=args.prepay_month,
        penalty_rate_percent=args.penalty,
        extra_monthly_payment=args.extra,
        extra_payment_timing=ExtraPaymentTiming(args.timing),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Loan, deposit and investment decision reports")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    loan = sub.add_parser("loan", help="Compare repayment strategies")
    _add_loan_arguments(loan)
    loan.add_argument(
        "--strategy",
        choices=[s.value for s in Strategy],
        default=Strategy.PREPAYMENT.value,
        help="Strategy for the yearly summary and CSV export (default: prepayment)",
    )
    loan.add_argument("--csv", type=Path, help="Write the strategy's monthly schedule to this file")
    loan.add_argument("--secondary", action="store_true", help="Add a secondary-currency balance column to the CSV")

    deposit = sub.add_parser("deposit", help="Fixed deposit maturity")
    deposit.add_argument("principal", type=Decimal)
    deposit.add_argument("rate", type=Decimal, help="Annual interest rate in percent")
    deposit.add_argument("term", type=int, help="Term in months")
    deposit.add_argument(
        "--compounding",
        choices=[c.value for c in CompoundingFrequency],
        default=CompoundingFrequency.QUARTERLY.value,
    )
    deposit.add_argument(
        "--payout",
        choices=[p.value for p in PayoutFrequency],
        default=PayoutFrequency.AT_MATURITY.value,
    )
    deposit.add_argument("--tax", type=Decimal, default=Decimal("0"), help="Tax on interest in percent")
    deposit.add_argument("--inflation", type=Decimal, default=Decimal("0"), help="Annual inflation in percent")

    compare = sub.add_parser("compare", help="Prepay the loan or invest the money")
    _add_loan_arguments(compare)
    compare.add_argument("--invest-rate", type=Decimal, required=True, help="Investment return in percent")
    compare.add_argument("--invest-tax", type=Decimal, default=Decimal("0"), help="Tax on investment interest in percent")
    compare.add_argument("--invest-amount", type=Decimal, help="Amount invested (default: the prepayment)")
    compare.add_argument("--linked", action="store_true", help="Invest the whole loan principal instead")
    compare.add_argument(
        "--strategy",
        choices=[Strategy.PREPAYMENT.value, Strategy.AGGRESSIVE.value],
        default=Strategy.PREPAYMENT.value,
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else settings.log_level)

    try:
        if args.command == "loan":
            scenarios = run_scenarios(_loan_from_args(args))
            strategy = Strategy(args.strategy)
            print_scenarios(scenarios)
            print_yearly(scenarios, strategy)
            if args.csv:
                if args.secondary:
                    export_schedule_csv(
                        args.csv,
                        scenarios.get(strategy).schedule,
                        settings.secondary_currency_code,
                        settings.secondary_currency_rate,
                    )
                else:
                    export_schedule_csv(args.csv, scenarios.get(strategy).schedule)
                print(f"\n  Schedule written to {args.csv}")

        elif args.command == "deposit":
            result = calculate_deposit(DepositInputs(
                principal=args.principal,
                annual_rate_percent=args.rate,
                term_months=args.term,
                compounding=CompoundingFrequency(args.compounding),
                payout=PayoutFrequency(args.payout),
                tax_rate_percent=args.tax,
                inflation_rate_percent=args.inflation,
            ))
            print_deposit(result)

        elif args.command == "compare":
            investment = InvestmentProfile(
                annual_rate_percent=args.invest_rate,
                tax_rate_percent=args.invest_tax,
                amount=args.invest_amount,
                linked_to_loan=args.linked,
            )
            result = compare_prepay_vs_invest(_loan_from_args(args), investment, Strategy(args.strategy))
            print_comparison(result)

    except InvalidTermError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
