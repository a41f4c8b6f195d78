from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class AllocationMode(Enum):
    """Which side of an allocation the user edits; the other side is derived."""
    PERCENTAGE = "percentage"
    AMOUNT = "amount"


@dataclass(frozen=True)
class AllocationInput:
    """Raw allocation as entered. Only the field matching the mode is read."""
    instrument_id: str
    annual_rate_percent: Decimal
    tax_rate_percent: Decimal = Decimal("0")
    expense_ratio_percent: Decimal = Decimal("0")
    percentage: Decimal = Decimal("0")
    amount: Decimal = Decimal("0")


@dataclass(frozen=True)
class Allocation:
    """Resolved allocation: percentage and amount are mutually consistent."""
    instrument_id: str
    annual_rate_percent: Decimal
    tax_rate_percent: Decimal
    expense_ratio_percent: Decimal
    percentage: Decimal
    amount: Decimal


@dataclass(frozen=True)
class AllocationReturn:
    instrument_id: str
    amount: Decimal
    maturity_amount: Decimal
    interest: Decimal
    expense_cost: Decimal
    after_expense_interest: Decimal
    tax: Decimal
    after_tax_interest: Decimal


@dataclass(frozen=True)
class PortfolioResult:
    allocations: list[Allocation]
    allocation_returns: list[AllocationReturn]
    total_amount: Decimal
    term_months: int
    weighted_rate_percent: Decimal
    total_interest: Decimal
    total_expense_cost: Decimal
    total_tax_paid: Decimal
    after_tax_interest: Decimal
    net_maturity: Decimal
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SIPAllocationReturn:
    instrument_id: str
    monthly_amount: Decimal
    invested: Decimal
    maturity_amount: Decimal  # Pre-tax
    gain: Decimal  # Pre-tax
    tax: Decimal
    post_tax_gain: Decimal


@dataclass(frozen=True)
class SIPResult:
    allocation_returns: list[SIPAllocationReturn]
    monthly_amount: Decimal
    term_months: int
    total_invested: Decimal
    maturity_amount: Decimal
    total_gain: Decimal
    total_tax_paid: Decimal
    post_tax_maturity: Decimal
    weighted_rate_percent: Decimal
    warnings: list[str] = field(default_factory=list)
