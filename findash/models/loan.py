from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class ExtraPaymentTiming(Enum):
    """When the extra monthly payment applies, relative to the prepayment month."""
    BEFORE = "before"
    AFTER = "after"
    BOTH = "both"
    NONE = "none"


class Strategy(Enum):
    BASELINE = "baseline"
    PREPAYMENT = "prepayment"
    AGGRESSIVE = "aggressive"


@dataclass(frozen=True)
class LoanInputs:
    principal: Decimal
    annual_rate_percent: Decimal  # e.g. Decimal("7.5")
    term_months: int

    # One-time bulk prepayment
    prepayment_amount: Decimal = Decimal("0")
    prepayment_month: int = 0  # 1..term_months, 0 = none
    penalty_rate_percent: Decimal = Decimal("0")  # % of the prepaid amount

    # Recurring extra payment
    extra_monthly_payment: Decimal = Decimal("0")
    extra_payment_timing: ExtraPaymentTiming = ExtraPaymentTiming.BOTH


@dataclass(frozen=True)
class PaymentPolicy:
    """Everything paid on top of the scheduled EMI."""
    extra_monthly_amount: Decimal = Decimal("0")
    extra_payment_timing: ExtraPaymentTiming = ExtraPaymentTiming.NONE
    prepayment_amount: Decimal = Decimal("0")
    prepayment_month: int = 0
    penalty_rate_percent: Decimal = Decimal("0")

    def extra_applies(self, month: int) -> bool:
        timing = self.extra_payment_timing
        if timing is ExtraPaymentTiming.BOTH:
            return True
        if timing is ExtraPaymentTiming.BEFORE:
            return month < self.prepayment_month
        if timing is ExtraPaymentTiming.AFTER:
            return month > self.prepayment_month
        return False


@dataclass(frozen=True)
class ScheduleEntry:
    month: int
    scheduled_payment: Decimal
    extra_payment: Decimal
    prepayment_amount: Decimal
    penalty_amount: Decimal
    principal_component: Decimal
    interest_component: Decimal
    ending_balance: Decimal

    @property
    def total_payment(self) -> Decimal:
        """Cash out of pocket this month, penalty included."""
        return (
            self.scheduled_payment
            + self.extra_payment
            + self.prepayment_amount
            + self.penalty_amount
        )


@dataclass(frozen=True)
class ScenarioResult:
    name: str
    schedule: list[ScheduleEntry]
    emi: Decimal
    term_months: int
    total_interest: Decimal
    total_principal: Decimal
    total_penalty: Decimal

    # Boundary conditions, reported rather than raised
    negative_amortization: bool = False
    hit_safety_bound: bool = False

    @property
    def total_payment(self) -> Decimal:
        return self.total_principal + self.total_interest + self.total_penalty

    @property
    def actual_term_months(self) -> int:
        return len(self.schedule)

    @property
    def months_saved(self) -> int:
        return self.term_months - self.actual_term_months

    @property
    def final_balance(self) -> Decimal:
        if not self.schedule:
            return Decimal("0")
        return self.schedule[-1].ending_balance


@dataclass(frozen=True)
class ScenarioSet:
    """The three canonical repayment strategies for one loan."""
    baseline: ScenarioResult
    prepayment: ScenarioResult
    aggressive: ScenarioResult
    prepayment_savings: Decimal = Decimal("0")
    aggressive_savings: Decimal = Decimal("0")

    def get(self, strategy: Strategy) -> ScenarioResult:
        return {
            Strategy.BASELINE: self.baseline,
            Strategy.PREPAYMENT: self.prepayment,
            Strategy.AGGRESSIVE: self.aggressive,
        }[strategy]

    def savings(self, strategy: Strategy) -> Decimal:
        if strategy is Strategy.PREPAYMENT:
            return self.prepayment_savings
        if strategy is Strategy.AGGRESSIVE:
            return self.aggressive_savings
        return Decimal("0")
