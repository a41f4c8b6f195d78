"""Month-by-month loan amortization under a payment policy.

Pure functions: Decimal in, dataclass out. No I/O.

The EMI is fixed from the original loan; prepayments and extra payments
shorten the tenure instead of lowering the installment.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from findash.config import settings
from findash.engine.rate_math import InvalidTermError, emi as compute_emi, monthly_rate
from findash.models.loan import PaymentPolicy, ScenarioResult, ScheduleEntry

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")

# Rounding residual the final contractual installment may absorb, per month of term
RESIDUAL_PER_MONTH = Decimal("0.01")

# Consecutive non-positive principal months before the schedule is flagged
NEGATIVE_AMORTIZATION_MONTHS = 2


def _cents(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def amortize(
    principal: Decimal,
    annual_rate_percent: Decimal,
    term_months: int,
    policy: PaymentPolicy | None = None,
    *,
    emi: Decimal | None = None,
    name: str = "custom",
    epsilon: Decimal | None = None,
    grace_months: int | None = None,
) -> ScenarioResult:
    """Simulate a loan to payoff.

    Args:
        principal: Amount borrowed
        annual_rate_percent: Nominal annual rate in percent
        term_months: Contractual term, used for the EMI and the safety bound
        policy: Extra monthly payments and the one-time prepayment
        emi: Installment agreed with the lender; defaults to the annuity EMI
        epsilon: Balance at or below which the loan counts as repaid
        grace_months: Months past the term after which simulation stops
    """
    if term_months <= 0:
        raise InvalidTermError(f"Term must be positive, got {term_months} months")

    policy = policy or PaymentPolicy()
    epsilon = settings.balance_epsilon if epsilon is None else epsilon
    grace_months = settings.amortization_grace_months if grace_months is None else grace_months

    base_emi = compute_emi(principal, annual_rate_percent, term_months) if emi is None else _cents(emi)
    r = monthly_rate(annual_rate_percent)
    max_residual = RESIDUAL_PER_MONTH * term_months
    safety_bound = term_months + grace_months

    schedule: list[ScheduleEntry] = []
    balance = _cents(principal)
    total_interest = ZERO
    total_principal = ZERO
    total_penalty = ZERO
    non_positive_streak = 0
    negative_amortization = False

    month = 1
    while balance > epsilon and month <= safety_bound:
        interest = _cents(balance * r)
        owed = balance + interest

        scheduled = min(base_emi, owed)
        # Final contractual installment absorbs accumulated cent rounding
        if month == term_months and owed - scheduled <= max_residual:
            scheduled = owed
        regular_principal = scheduled - interest

        bulk = ZERO
        penalty = ZERO
        if month == policy.prepayment_month and policy.prepayment_amount > 0:
            bulk = max(ZERO, min(_cents(policy.prepayment_amount), balance - regular_principal))
            penalty = _cents(bulk * policy.penalty_rate_percent / 100)

        extra = ZERO
        if policy.extra_monthly_amount > 0 and policy.extra_applies(month):
            extra = max(ZERO, min(_cents(policy.extra_monthly_amount), balance - regular_principal - bulk))

        principal_component = regular_principal + extra + bulk
        ending = max(ZERO, balance - principal_component)

        if principal_component <= 0:
            non_positive_streak += 1
            if non_positive_streak >= NEGATIVE_AMORTIZATION_MONTHS:
                negative_amortization = True
        else:
            non_positive_streak = 0

        schedule.append(ScheduleEntry(
            month=month,
            scheduled_payment=scheduled,
            extra_payment=extra,
            prepayment_amount=bulk,
            penalty_amount=penalty,
            principal_component=principal_component,
            interest_component=interest,
            ending_balance=ending,
        ))

        total_interest += interest
        total_principal += principal_component
        total_penalty += penalty
        balance = ending
        month += 1

    hit_safety_bound = balance > epsilon
    if hit_safety_bound:
        logger.warning(
            "Amortization '%s' stopped at safety bound (%d months) with balance %s",
            name, safety_bound, balance,
        )
    if negative_amortization:
        logger.warning(
            "Amortization '%s' has negative amortization: EMI %s does not cover interest",
            name, base_emi,
        )

    logger.debug(
        "Amortized '%s': %d months, interest %s, penalty %s",
        name, len(schedule), total_interest, total_penalty,
    )

    return ScenarioResult(
        name=name,
        schedule=schedule,
        emi=base_emi,
        term_months=term_months,
        total_interest=total_interest,
        total_principal=total_principal,
        total_penalty=total_penalty,
        negative_amortization=negative_amortization,
        hit_safety_bound=hit_safety_bound,
    )


def yearly_summary(result: ScenarioResult) -> list[dict[str, Decimal]]:
    """Aggregate a schedule by loan year.

    Returns list of dicts with keys: year, principal, interest, penalty, payments, ending_balance
    """
    yearly: list[dict[str, Decimal]] = []
    year_principal = ZERO
    year_interest = ZERO
    year_penalty = ZERO
    year_payments = ZERO

    for entry in result.schedule:
        year_principal += entry.principal_component
        year_interest += entry.interest_component
        year_penalty += entry.penalty_amount
        year_payments += entry.total_payment

        if entry.month % 12 == 0 or entry.month == len(result.schedule):
            yearly.append({
                "year": Decimal((entry.month - 1) // 12 + 1),
                "principal": year_principal,
                "interest": year_interest,
                "penalty": year_penalty,
                "payments": year_payments,
                "ending_balance": entry.ending_balance,
            })
            year_principal = ZERO
            year_interest = ZERO
            year_penalty = ZERO
            year_payments = ZERO

    return yearly
