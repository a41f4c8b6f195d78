from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum

from findash.models.deposit import CompoundingFrequency
from findash.models.loan import Strategy
from findash.models.portfolio import PortfolioResult


class Recommendation(Enum):
    PREPAY = "prepay"
    INVEST = "invest"


@dataclass(frozen=True)
class InvestmentProfile:
    """The alternative use of the money that would otherwise prepay the loan."""
    annual_rate_percent: Decimal
    tax_rate_percent: Decimal = Decimal("0")
    compounding: CompoundingFrequency = CompoundingFrequency.MONTHLY
    amount: Decimal | None = None  # None = use the loan's prepayment amount
    linked_to_loan: bool = False  # Invest the full loan principal instead
    term_months: int | None = None  # Caps the horizon at the loan term

    @classmethod
    def from_portfolio(
        cls,
        portfolio: PortfolioResult,
        compounding: CompoundingFrequency = CompoundingFrequency.MONTHLY,
        linked_to_loan: bool = False,
    ) -> "InvestmentProfile":
        """Invest at the portfolio's weighted rate and effective tax rate."""
        taxable = portfolio.after_tax_interest + portfolio.total_tax_paid
        if taxable > 0:
            tax_rate = (portfolio.total_tax_paid / taxable * 100).quantize(Decimal("0.01"), ROUND_HALF_UP)
        else:
            tax_rate = Decimal("0")
        return cls(
            annual_rate_percent=portfolio.weighted_rate_percent,
            tax_rate_percent=tax_rate,
            compounding=compounding,
            amount=portfolio.total_amount,
            linked_to_loan=linked_to_loan,
            term_months=portfolio.term_months,
        )


@dataclass(frozen=True)
class ComparisonResult:
    strategy: Strategy
    investment_amount: Decimal
    investment_rate_percent: Decimal
    horizon_months: int
    loan_interest_saved: Decimal  # Already net of penalty
    loan_penalty: Decimal
    investment_return: Decimal  # After-tax interest
    net_savings: Decimal
    recommendation: Recommendation
    break_even_month: int  # 0 = no crossing within the loan term
    break_even_rate_percent: Decimal | None = None


@dataclass(frozen=True)
class GrowthPoint:
    month: int
    lumpsum: Decimal
    sip: Decimal


@dataclass(frozen=True)
class LumpsumVsSIPResult:
    data: list[GrowthPoint] = field(default_factory=list)
    break_even_month: int = 0  # 0 = SIP never catches up
    final_lumpsum: Decimal = Decimal("0")
    final_sip: Decimal = Decimal("0")
