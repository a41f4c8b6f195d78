"""Interest-rate primitives: EMI, compound growth, annuity value, inflation.

Pure functions: Decimal in, Decimal out. No I/O.
Rates are annual percentages (Decimal("7.5") for 7.5%).
"""

from decimal import Decimal, ROUND_HALF_UP

TWO_PLACES = Decimal("0.01")
HUNDRED = Decimal("100")
MONTHS_PER_YEAR = Decimal("12")


class InvalidTermError(ValueError):
    """Raised when a loan term is zero or negative."""


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    return annual_rate_percent / MONTHS_PER_YEAR / HUNDRED


def emi(principal: Decimal, annual_rate_percent: Decimal, term_months: int) -> Decimal:
    """Equated monthly installment, rounded to cents.

    EMI = P * r * (1+r)^n / ((1+r)^n - 1), or P / n at a zero rate.
    """
    if term_months <= 0:
        raise InvalidTermError(f"Term must be positive, got {term_months} months")
    if principal <= 0:
        return Decimal("0")

    r = monthly_rate(annual_rate_percent)
    if r == 0:
        return (principal / term_months).quantize(TWO_PLACES, ROUND_HALF_UP)

    factor = (1 + r) ** term_months
    payment = principal * r * factor / (factor - 1)
    return payment.quantize(TWO_PLACES, ROUND_HALF_UP)


def compound_maturity(
    principal: Decimal,
    annual_rate_percent: Decimal,
    periods_per_year: int,
    years: Decimal,
) -> Decimal:
    """A = P * (1 + r/n)^(n*t). Unrounded."""
    if years <= 0 or annual_rate_percent == 0:
        return principal
    r = annual_rate_percent / HUNDRED
    n = Decimal(periods_per_year)
    return principal * (1 + r / n) ** (n * years)


def annuity_future_value(
    monthly_amount: Decimal, annual_rate_percent: Decimal, months: int
) -> Decimal:
    """Future value of equal end-of-month contributions. Unrounded.

    FV = PMT * ((1+r)^n - 1) / r, or PMT * n at a zero rate.
    """
    if months <= 0:
        return Decimal("0")
    r = monthly_rate(annual_rate_percent)
    if r == 0:
        return monthly_amount * months
    return monthly_amount * (((1 + r) ** months - 1) / r)


def adjust_for_inflation(
    amount: Decimal, years: Decimal, inflation_rate_percent: Decimal
) -> Decimal:
    """Deflate a future amount to today's money."""
    if years <= 0 or inflation_rate_percent == 0:
        return amount.quantize(TWO_PLACES, ROUND_HALF_UP)
    deflator = (1 + inflation_rate_percent / HUNDRED) ** years
    return (amount / deflator).quantize(TWO_PLACES, ROUND_HALF_UP)
