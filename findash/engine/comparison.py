"""Prepay-the-loan vs invest-the-money decision.

Pure functions. No I/O.

The loan side is the interest a strategy saves against the baseline, net of
penalty. The investment side is the after-tax interest the same money earns
over the loan's horizon at the portfolio rate.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from scipy.optimize import brentq

from findash.engine.amortization import amortize
from findash.engine.deposit import balance_at_month, tax_on_interest
from findash.engine.rate_math import HUNDRED, annuity_future_value, compound_maturity, monthly_rate
from findash.engine.scenarios import interest_saved, run_scenarios
from findash.models.comparison import (
    ComparisonResult,
    GrowthPoint,
    InvestmentProfile,
    LumpsumVsSIPResult,
    Recommendation,
)
from findash.models.deposit import DepositInputs
from findash.models.loan import LoanInputs, PaymentPolicy, ScenarioResult, ScenarioSet, Strategy

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
MONTHS_PER_YEAR = Decimal("12")

# Search range for the break-even investment rate, in percent
MAX_BREAK_EVEN_RATE = 100.0


def _cents(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def investment_amount(loan: LoanInputs, investment: InvestmentProfile) -> Decimal:
    """Linked: the whole loan principal. Otherwise the given amount, else the prepayment."""
    if investment.linked_to_loan:
        return loan.principal
    if investment.amount is not None:
        return investment.amount
    return loan.prepayment_amount


def _raw_investment_interest(
    amount: Decimal,
    annual_rate_percent: Decimal,
    investment: InvestmentProfile,
    months: int,
) -> Decimal:
    grown = compound_maturity(
        amount,
        annual_rate_percent,
        investment.compounding.periods_per_year,
        Decimal(months) / MONTHS_PER_YEAR,
    )
    interest = grown - amount
    if interest <= 0:
        return interest
    return interest * (1 - investment.tax_rate_percent / HUNDRED)


def investment_interest(amount: Decimal, investment: InvestmentProfile, months: int) -> Decimal:
    """After-tax interest from an at-maturity deposit of ``amount`` for ``months``.

    Matches ``calculate_deposit(...).after_tax_interest`` without building the breakdown.
    """
    deposit = DepositInputs(
        principal=amount,
        annual_rate_percent=investment.annual_rate_percent,
        term_months=months,
        compounding=investment.compounding,
        tax_rate_percent=investment.tax_rate_percent,
    )
    interest = balance_at_month(deposit, months) - _cents(amount)
    return interest - tax_on_interest(interest, investment.tax_rate_percent)


def prepayment_saving(
    loan: LoanInputs,
    amount: Decimal,
    month: int,
    baseline: ScenarioResult | None = None,
) -> Decimal:
    """Interest saved, net of penalty, by prepaying ``amount`` at ``month``."""
    if baseline is None:
        baseline = amortize(loan.principal, loan.annual_rate_percent, loan.term_months, name="baseline")
    prepaid = amortize(
        loan.principal,
        loan.annual_rate_percent,
        loan.term_months,
        PaymentPolicy(
            prepayment_amount=amount,
            prepayment_month=month,
            penalty_rate_percent=loan.penalty_rate_percent,
        ),
        name=f"prepay@{month}",
    )
    return interest_saved(baseline, prepaid)


def break_even_month(
    loan: LoanInputs,
    investment: InvestmentProfile,
    baseline: ScenarioResult | None = None,
) -> int:
    """First month at which investing beats prepaying the same money then.

    Investment interest grows with time while the saving from a prepayment
    shrinks the later it is made. Returns 0 when investing never catches up
    within the loan term.

    Each candidate month re-runs the amortization, so the search is
    quadratic in the term. Fine for consumer loan terms (up to 360 months).
    """
    amount = investment_amount(loan, investment)
    if amount <= 0:
        return 0
    if baseline is None:
        baseline = amortize(loan.principal, loan.annual_rate_percent, loan.term_months, name="baseline")

    for month in range(1, loan.term_months + 1):
        earned = investment_interest(amount, investment, month)
        saved = prepayment_saving(loan, amount, month, baseline)
        if earned >= saved:
            logger.debug("Break-even at month %d: earned %s >= saved %s", month, earned, saved)
            return month
    return 0


def break_even_rate(
    amount: Decimal,
    loan_interest_saved: Decimal,
    investment: InvestmentProfile,
    horizon_months: int,
) -> Decimal | None:
    """Investment rate (percent) at which investing matches the loan saving.

    Uses Brent's method. Returns None when no rate in [0%, 100%] matches.
    """
    if amount <= 0 or horizon_months <= 0:
        return None

    def gap(rate: float) -> float:
        earned = _raw_investment_interest(amount, Decimal(str(rate)), investment, horizon_months)
        return float(earned - loan_interest_saved)

    try:
        rate = brentq(gap, 0.0, MAX_BREAK_EVEN_RATE, xtol=1e-8, maxiter=1000)
    except ValueError:
        # No sign change: the loan saving is negative or out of reach
        return None
    return Decimal(str(rate)).quantize(Decimal("0.0001"), ROUND_HALF_UP)


def compare_prepay_vs_invest(
    loan: LoanInputs,
    investment: InvestmentProfile,
    strategy: Strategy = Strategy.PREPAYMENT,
    scenarios: ScenarioSet | None = None,
) -> ComparisonResult:
    """Recommend prepaying the loan or investing the money instead."""
    if scenarios is None:
        scenarios = run_scenarios(loan)

    amount = investment_amount(loan, investment)
    horizon = scenarios.baseline.actual_term_months
    if investment.term_months is not None and investment.term_months > 0:
        horizon = min(horizon, investment.term_months)

    saved = scenarios.savings(strategy)
    earned = investment_interest(amount, investment, horizon)
    recommendation = Recommendation.PREPAY if saved > earned else Recommendation.INVEST

    logger.debug(
        "Prepay vs invest (%s): saved %s, earned %s over %d months -> %s",
        strategy.value, saved, earned, horizon, recommendation.value,
    )

    return ComparisonResult(
        strategy=strategy,
        investment_amount=amount,
        investment_rate_percent=investment.annual_rate_percent,
        horizon_months=horizon,
        loan_interest_saved=saved,
        loan_penalty=scenarios.get(strategy).total_penalty,
        investment_return=earned,
        net_savings=saved - earned,
        recommendation=recommendation,
        break_even_month=break_even_month(loan, investment, scenarios.baseline),
        break_even_rate_percent=break_even_rate(amount, saved, investment, horizon),
    )


def lumpsum_vs_sip(
    lumpsum_amount: Decimal,
    lumpsum_rate_percent: Decimal,
    sip_monthly_amount: Decimal,
    sip_rate_percent: Decimal,
    months: int,
) -> LumpsumVsSIPResult:
    """Month-by-month value of a lumpsum vs a SIP, both compounding monthly.

    Break-even is the first month the SIP value reaches the lumpsum value.
    """
    lumpsum_r = monthly_rate(lumpsum_rate_percent)
    data: list[GrowthPoint] = []
    crossing = 0

    for month in range(0, max(months, 0) + 1):
        lumpsum = _cents(lumpsum_amount * (1 + lumpsum_r) ** month)
        sip = _cents(annuity_future_value(sip_monthly_amount, sip_rate_percent, month))
        data.append(GrowthPoint(month=month, lumpsum=lumpsum, sip=sip))
        if crossing == 0 and month > 0 and sip >= lumpsum:
            crossing = month

    return LumpsumVsSIPResult(
        data=data,
        break_even_month=crossing,
        final_lumpsum=data[-1].lumpsum,
        final_sip=data[-1].sip,
    )
