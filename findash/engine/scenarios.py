"""The three canonical repayment strategies and their interest savings.

Pure functions. No I/O.
"""

from decimal import Decimal

from findash.engine.amortization import amortize
from findash.models.loan import (
    ExtraPaymentTiming,
    LoanInputs,
    PaymentPolicy,
    ScenarioResult,
    ScenarioSet,
    Strategy,
)


def baseline_policy(loan: LoanInputs) -> PaymentPolicy:
    """Scenario A: the contractual schedule, nothing extra."""
    return PaymentPolicy()


def prepayment_policy(loan: LoanInputs) -> PaymentPolicy:
    """Scenario B: bulk prepayment with penalty, extra payments per their timing."""
    return PaymentPolicy(
        extra_monthly_amount=loan.extra_monthly_payment,
        extra_payment_timing=loan.extra_payment_timing,
        prepayment_amount=loan.prepayment_amount,
        prepayment_month=loan.prepayment_month,
        penalty_rate_percent=loan.penalty_rate_percent,
    )


def aggressive_policy(loan: LoanInputs) -> PaymentPolicy:
    """Scenario C: extra payment every month, no bulk prepayment."""
    return PaymentPolicy(
        extra_monthly_amount=loan.extra_monthly_payment,
        extra_payment_timing=ExtraPaymentTiming.BOTH,
    )


POLICIES = {
    Strategy.BASELINE: baseline_policy,
    Strategy.PREPAYMENT: prepayment_policy,
    Strategy.AGGRESSIVE: aggressive_policy,
}


def run_scenario(loan: LoanInputs, strategy: Strategy) -> ScenarioResult:
    return amortize(
        loan.principal,
        loan.annual_rate_percent,
        loan.term_months,
        POLICIES[strategy](loan),
        name=strategy.value,
    )


def interest_saved(baseline: ScenarioResult, other: ScenarioResult) -> Decimal:
    """Interest avoided versus the baseline, net of any prepayment penalty.

    Penalty is a real cash cost, so it is subtracted.
    """
    return baseline.total_interest - other.total_interest - other.total_penalty


def run_scenarios(loan: LoanInputs) -> ScenarioSet:
    """Run baseline, prepayment and aggressive strategies for one loan."""
    baseline = run_scenario(loan, Strategy.BASELINE)
    prepayment = run_scenario(loan, Strategy.PREPAYMENT)
    aggressive = run_scenario(loan, Strategy.AGGRESSIVE)

    return ScenarioSet(
        baseline=baseline,
        prepayment=prepayment,
        aggressive=aggressive,
        prepayment_savings=interest_saved(baseline, prepayment),
        aggressive_savings=interest_saved(baseline, aggressive),
    )
