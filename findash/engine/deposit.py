"""Fixed-deposit maturity under a compounding or periodic-payout policy.

Pure functions: Decimal in, dataclass out. No I/O.

At maturity: interest compounds at the chosen frequency and the monthly
breakdown is the compounding curve itself, so the final month equals the
maturity amount.

Periodic payout: interest accrues on the principal only and is paid out at
each payout event, after which the balance resets to the principal. Nothing
compounds across payout boundaries.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from findash.engine.rate_math import HUNDRED, adjust_for_inflation, compound_maturity
from findash.models.deposit import DepositInputs, DepositMonth, DepositResult, PayoutFrequency

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")
MONTHS_PER_YEAR = Decimal("12")


def _cents(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def tax_on_interest(interest: Decimal, tax_rate_percent: Decimal) -> Decimal:
    if interest <= 0:
        return ZERO
    return _cents(interest * tax_rate_percent / HUNDRED)


def balance_at_month(inputs: DepositInputs, month: int) -> Decimal:
    """Compounded value after ``month`` months, rounded to cents."""
    return _cents(compound_maturity(
        inputs.principal,
        inputs.annual_rate_percent,
        inputs.compounding.periods_per_year,
        Decimal(month) / MONTHS_PER_YEAR,
    ))


def _at_maturity(inputs: DepositInputs) -> DepositResult:
    principal = _cents(inputs.principal)
    maturity = balance_at_month(inputs, inputs.term_months)
    interest = maturity - principal
    tax = tax_on_interest(interest, inputs.tax_rate_percent)
    post_tax = maturity - tax

    breakdown: list[DepositMonth] = []
    previous = principal
    for month in range(1, inputs.term_months + 1):
        balance = balance_at_month(inputs, month)
        accrued_tax = tax_on_interest(balance - principal, inputs.tax_rate_percent)
        breakdown.append(DepositMonth(
            month=month,
            balance=balance,
            interest_this_month=balance - previous,
            payout_this_month=ZERO,
            tax_this_month=tax if month == inputs.term_months else ZERO,
            net_value=balance - accrued_tax,
        ))
        previous = balance

    return DepositResult(
        principal=principal,
        maturity_amount=maturity,
        interest_earned=interest,
        tax_on_interest=tax,
        post_tax_maturity=post_tax,
        total_payouts=ZERO,
        inflation_adjusted_maturity=_inflation_adjusted(post_tax, inputs),
        monthly_breakdown=breakdown,
    )


def _periodic_payout(inputs: DepositInputs) -> DepositResult:
    principal = _cents(inputs.principal)
    period = inputs.payout.period_months
    annual_rate = inputs.annual_rate_percent / HUNDRED
    monthly_interest = _cents(principal * annual_rate / MONTHS_PER_YEAR)

    breakdown: list[DepositMonth] = []
    total_payouts = ZERO
    total_tax = ZERO
    net_paid_out = ZERO
    last_payout_month = 0

    for month in range(1, inputs.term_months + 1):
        months_accrued = month - last_payout_month
        accrued = _cents(principal * annual_rate * months_accrued / MONTHS_PER_YEAR)

        # A short final period still pays out at maturity
        if month % period == 0 or month == inputs.term_months:
            payout = accrued
            tax = tax_on_interest(payout, inputs.tax_rate_percent)
            total_payouts += payout
            total_tax += tax
            net_paid_out += payout - tax
            last_payout_month = month
            balance = principal
        else:
            payout = ZERO
            tax = ZERO
            balance = principal + accrued

        breakdown.append(DepositMonth(
            month=month,
            balance=balance,
            interest_this_month=monthly_interest,
            payout_this_month=payout,
            tax_this_month=tax,
            net_value=balance + net_paid_out,
        ))

    maturity = principal + total_payouts
    post_tax = maturity - total_tax

    return DepositResult(
        principal=principal,
        maturity_amount=maturity,
        interest_earned=total_payouts,
        tax_on_interest=total_tax,
        post_tax_maturity=post_tax,
        total_payouts=total_payouts,
        inflation_adjusted_maturity=_inflation_adjusted(post_tax, inputs),
        monthly_breakdown=breakdown,
    )


def _inflation_adjusted(amount: Decimal, inputs: DepositInputs) -> Decimal:
    years = Decimal(max(inputs.term_months, 0)) / MONTHS_PER_YEAR
    return adjust_for_inflation(amount, years, inputs.inflation_rate_percent)


def calculate_deposit(inputs: DepositInputs) -> DepositResult:
    """Maturity, tax and month-by-month breakdown for a single deposit."""
    if inputs.term_months <= 0:
        principal = _cents(inputs.principal)
        logger.debug("Deposit term %d <= 0, returning principal only", inputs.term_months)
        return DepositResult(
            principal=principal,
            maturity_amount=principal,
            interest_earned=ZERO,
            tax_on_interest=ZERO,
            post_tax_maturity=principal,
            total_payouts=ZERO,
            inflation_adjusted_maturity=principal,
        )

    if inputs.payout is PayoutFrequency.AT_MATURITY:
        result = _at_maturity(inputs)
    else:
        result = _periodic_payout(inputs)

    logger.debug(
        "Deposit %s @ %s%% for %d months (%s, %s): maturity %s",
        inputs.principal, inputs.annual_rate_percent, inputs.term_months,
        inputs.compounding.value, inputs.payout.value, result.maturity_amount,
    )
    return result
