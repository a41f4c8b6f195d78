"""Multi-instrument portfolios: lumpsum and SIP (recurring) allocations.

Pure functions: dataclasses in, dataclasses out. No I/O.

Allocations are entered either by percentage or by amount. Whichever side
the mode names is authoritative; the other side is always re-derived.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from findash.engine.deposit import calculate_deposit
from findash.engine.rate_math import HUNDRED, annuity_future_value
from findash.models.deposit import CompoundingFrequency, DepositInputs, PayoutFrequency
from findash.models.instruments import get_instrument
from findash.models.portfolio import (
    Allocation,
    AllocationInput,
    AllocationMode,
    AllocationReturn,
    PortfolioResult,
    SIPAllocationReturn,
    SIPResult,
)

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")
MONTHS_PER_YEAR = Decimal("12")


def _cents(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def _expense_ratio(alloc: AllocationInput) -> Decimal:
    """Expense ratio only applies to instruments that charge one."""
    instrument = get_instrument(alloc.instrument_id)
    if instrument is not None and not instrument.supports_expense_ratio:
        if alloc.expense_ratio_percent:
            logger.debug("Ignoring expense ratio for %s", alloc.instrument_id)
        return ZERO
    return alloc.expense_ratio_percent


def amounts_from_percentages(
    allocations: list[AllocationInput], total_amount: Decimal
) -> list[Allocation]:
    """Percentage-driven: amount = percentage of the total.

    When the percentages sum to 100 the last allocation takes the cent
    rounding residual, so the amounts add up to the total exactly.
    """
    amounts = [_cents(a.percentage / HUNDRED * total_amount) for a in allocations]
    if amounts and sum((a.percentage for a in allocations), ZERO) == HUNDRED:
        amounts[-1] = _cents(total_amount) - sum(amounts[:-1], ZERO)

    return [
        Allocation(
            instrument_id=a.instrument_id,
            annual_rate_percent=a.annual_rate_percent,
            tax_rate_percent=a.tax_rate_percent,
            expense_ratio_percent=_expense_ratio(a),
            percentage=a.percentage,
            amount=amount,
        )
        for a, amount in zip(allocations, amounts)
    ]


def percentages_from_amounts(allocations: list[AllocationInput]) -> list[Allocation]:
    """Amount-driven: percentage = share of the summed amounts."""
    total = sum((a.amount for a in allocations), ZERO)
    return [
        Allocation(
            instrument_id=a.instrument_id,
            annual_rate_percent=a.annual_rate_percent,
            tax_rate_percent=a.tax_rate_percent,
            expense_ratio_percent=_expense_ratio(a),
            percentage=_cents(a.amount / total * HUNDRED) if total > 0 else ZERO,
            amount=_cents(a.amount),
        )
        for a in allocations
    ]


def allocation_warnings(allocations: list[Allocation]) -> list[str]:
    """Non-blocking checks on percentage-driven allocations."""
    total_pct = sum((a.percentage for a in allocations), ZERO)
    if total_pct != HUNDRED:
        return [f"Allocation percentages sum to {total_pct}%, not 100%"]
    return []


def resolve_allocations(
    allocations: list[AllocationInput],
    mode: AllocationMode,
    total_amount: Decimal = ZERO,
) -> tuple[list[Allocation], Decimal, list[str]]:
    """Derive the non-driving side of every allocation.

    Returns (allocations, total_amount, warnings). In amount mode the total is
    the sum of the amounts and the given total is ignored.
    """
    if mode is AllocationMode.AMOUNT:
        resolved = percentages_from_amounts(allocations)
        return resolved, sum((a.amount for a in resolved), ZERO), []

    resolved = amounts_from_percentages(allocations, total_amount)
    warnings = allocation_warnings(resolved)
    for w in warnings:
        logger.warning(w)
    return resolved, _cents(total_amount), warnings


def weighted_rate(allocations: list[Allocation] | list[AllocationInput]) -> Decimal:
    """Percentage-weighted average annual rate, 2 decimals. 0 when nothing is allocated."""
    total_pct = sum((a.percentage for a in allocations), ZERO)
    if total_pct == 0:
        return ZERO
    weighted = sum((a.percentage * a.annual_rate_percent for a in allocations), ZERO)
    return (weighted / total_pct).quantize(TWO_PLACES, ROUND_HALF_UP)


def portfolio_risk_score(allocations: list[Allocation] | list[AllocationInput]) -> Decimal:
    """Percentage-weighted risk score (0-100). Unknown instruments are skipped."""
    weighted = ZERO
    total_pct = ZERO
    for a in allocations:
        instrument = get_instrument(a.instrument_id)
        if instrument is None:
            continue
        weighted += a.percentage * instrument.risk_score
        total_pct += a.percentage
    if total_pct == 0:
        return ZERO
    return (weighted / total_pct).quantize(TWO_PLACES, ROUND_HALF_UP)


def _allocation_return(
    alloc: Allocation,
    term_months: int,
    compounding: CompoundingFrequency,
) -> AllocationReturn:
    deposit = calculate_deposit(DepositInputs(
        principal=alloc.amount,
        annual_rate_percent=alloc.annual_rate_percent,
        term_months=term_months,
        compounding=compounding,
        payout=PayoutFrequency.AT_MATURITY,
    ))
    interest = deposit.interest_earned
    years = Decimal(max(term_months, 0)) / MONTHS_PER_YEAR
    expense_cost = _cents(alloc.amount * alloc.expense_ratio_percent / HUNDRED * years)
    after_expense = interest - expense_cost
    tax = _cents(after_expense * alloc.tax_rate_percent / HUNDRED) if after_expense > 0 else ZERO

    return AllocationReturn(
        instrument_id=alloc.instrument_id,
        amount=alloc.amount,
        maturity_amount=deposit.maturity_amount,
        interest=interest,
        expense_cost=expense_cost,
        after_expense_interest=after_expense,
        tax=tax,
        after_tax_interest=after_expense - tax,
    )


def calculate_lumpsum_portfolio(
    allocations: list[AllocationInput],
    total_amount: Decimal,
    term_months: int,
    compounding: CompoundingFrequency = CompoundingFrequency.QUARTERLY,
    mode: AllocationMode = AllocationMode.PERCENTAGE,
) -> PortfolioResult:
    """One-time investment split across instruments, each compounding at its own rate.

    Expense cost is charged on the invested amount per year and comes out of
    interest before tax.
    """
    resolved, total, warnings = resolve_allocations(allocations, mode, total_amount)
    returns = [_allocation_return(a, term_months, compounding) for a in resolved]

    total_interest = sum((r.interest for r in returns), ZERO)
    total_expense = sum((r.expense_cost for r in returns), ZERO)
    total_tax = sum((r.tax for r in returns), ZERO)
    after_tax = sum((r.after_tax_interest for r in returns), ZERO)

    return PortfolioResult(
        allocations=resolved,
        allocation_returns=returns,
        total_amount=total,
        term_months=term_months,
        weighted_rate_percent=weighted_rate(resolved),
        total_interest=total_interest,
        total_expense_cost=total_expense,
        total_tax_paid=total_tax,
        after_tax_interest=after_tax,
        net_maturity=total + after_tax,
        warnings=warnings,
    )


def calculate_sip_portfolio(
    allocations: list[AllocationInput],
    monthly_amount: Decimal,
    term_months: int,
    apply_tax: bool = True,
) -> SIPResult:
    """Fixed monthly contribution split by percentage across instruments.

    Each contribution compounds monthly from its own month to the end of the
    term (future value of an annuity) at the instrument rate less its
    expense ratio.
    """
    resolved, _, warnings = resolve_allocations(allocations, AllocationMode.PERCENTAGE, monthly_amount)
    months = max(term_months, 0)

    returns: list[SIPAllocationReturn] = []
    for a in resolved:
        effective_rate = a.annual_rate_percent - a.expense_ratio_percent
        invested = a.amount * months
        maturity = _cents(annuity_future_value(a.amount, effective_rate, months))
        gain = maturity - invested
        tax = _cents(gain * a.tax_rate_percent / HUNDRED) if apply_tax and gain > 0 else ZERO
        returns.append(SIPAllocationReturn(
            instrument_id=a.instrument_id,
            monthly_amount=a.amount,
            invested=invested,
            maturity_amount=maturity,
            gain=gain,
            tax=tax,
            post_tax_gain=gain - tax,
        ))

    total_invested = sum((r.invested for r in returns), ZERO)
    maturity = sum((r.maturity_amount for r in returns), ZERO)
    total_tax = sum((r.tax for r in returns), ZERO)

    return SIPResult(
        allocation_returns=returns,
        monthly_amount=_cents(monthly_amount),
        term_months=term_months,
        total_invested=total_invested,
        maturity_amount=maturity,
        total_gain=maturity - total_invested,
        total_tax_paid=total_tax,
        post_tax_maturity=maturity - total_tax,
        weighted_rate_percent=weighted_rate(resolved),
        warnings=warnings,
    )
