from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class CompoundingFrequency(Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    HALF_YEARLY = "half-yearly"
    YEARLY = "yearly"

    @property
    def periods_per_year(self) -> int:
        return COMPOUNDING_PERIODS[self]


class PayoutFrequency(Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    AT_MATURITY = "at-maturity"

    @property
    def period_months(self) -> int | None:
        """Months between payouts; None when interest is only paid at maturity."""
        return PAYOUT_PERIOD_MONTHS.get(self)


COMPOUNDING_PERIODS: dict[CompoundingFrequency, int] = {
    CompoundingFrequency.MONTHLY: 12,
    CompoundingFrequency.QUARTERLY: 4,
    CompoundingFrequency.HALF_YEARLY: 2,
    CompoundingFrequency.YEARLY: 1,
}

PAYOUT_PERIOD_MONTHS: dict[PayoutFrequency, int] = {
    PayoutFrequency.MONTHLY: 1,
    PayoutFrequency.QUARTERLY: 3,
    PayoutFrequency.YEARLY: 12,
}


@dataclass(frozen=True)
class DepositInputs:
    principal: Decimal
    annual_rate_percent: Decimal
    term_months: int
    compounding: CompoundingFrequency = CompoundingFrequency.QUARTERLY
    payout: PayoutFrequency = PayoutFrequency.AT_MATURITY
    tax_rate_percent: Decimal = Decimal("0")  # Applied to interest only
    inflation_rate_percent: Decimal = Decimal("0")


@dataclass(frozen=True)
class DepositMonth:
    month: int
    balance: Decimal
    interest_this_month: Decimal
    payout_this_month: Decimal
    tax_this_month: Decimal
    net_value: Decimal  # What the holder has after tax if the deposit closed now


@dataclass(frozen=True)
class DepositResult:
    principal: Decimal
    maturity_amount: Decimal  # Pre-tax
    interest_earned: Decimal
    tax_on_interest: Decimal
    post_tax_maturity: Decimal
    total_payouts: Decimal  # Interest disbursed before maturity; 0 at-maturity
    inflation_adjusted_maturity: Decimal
    monthly_breakdown: list[DepositMonth] = field(default_factory=list)

    @property
    def after_tax_interest(self) -> Decimal:
        return self.interest_earned - self.tax_on_interest
