"""Pydantic schemas for API request/response models."""

from decimal import Decimal

from pydantic import BaseModel, Field

from findash.models.deposit import CompoundingFrequency, PayoutFrequency
from findash.models.loan import ExtraPaymentTiming, Strategy
from findash.models.portfolio import AllocationMode


# ---- Request schemas ----

class LoanRequest(BaseModel):
    principal: Decimal = Field(..., gt=0, description="Amount borrowed")
    annual_rate_percent: Decimal = Field(..., ge=0, description="Nominal annual rate, e.g. 7.5")
    term_months: int = Field(..., gt=0)
    prepayment_amount: Decimal = Field(Decimal("0"), ge=0)
    prepayment_month: int = Field(0, ge=0, description="Month of the bulk prepayment, 0 = none")
    penalty_rate_percent: Decimal = Field(Decimal("0"), ge=0)
    extra_monthly_payment: Decimal = Field(Decimal("0"), ge=0)
    extra_payment_timing: ExtraPaymentTiming = ExtraPaymentTiming.BOTH
    include_schedule: bool = True


class DepositRequest(BaseModel):
    principal: Decimal = Field(..., gt=0)
    annual_rate_percent: Decimal = Field(..., ge=0)
    term_months: int = Field(..., gt=0)
    compounding: CompoundingFrequency = CompoundingFrequency.QUARTERLY
    payout: PayoutFrequency = PayoutFrequency.AT_MATURITY
    tax_rate_percent: Decimal = Field(Decimal("0"), ge=0, le=100)
    inflation_rate_percent: Decimal = Field(Decimal("0"), ge=0)
    include_breakdown: bool = True


class AllocationRequest(BaseModel):
    instrument_id: str
    annual_rate_percent: Decimal = Field(..., ge=0)
    tax_rate_percent: Decimal = Field(Decimal("0"), ge=0, le=100)
    expense_ratio_percent: Decimal = Field(Decimal("0"), ge=0)
    percentage: Decimal = Field(Decimal("0"), ge=0, le=100)
    amount: Decimal = Field(Decimal("0"), ge=0)


class LumpsumPortfolioRequest(BaseModel):
    allocations: list[AllocationRequest] = Field(..., min_length=1)
    total_amount: Decimal = Field(Decimal("0"), ge=0, description="Ignored in amount mode")
    term_months: int = Field(..., gt=0)
    compounding: CompoundingFrequency = CompoundingFrequency.QUARTERLY
    mode: AllocationMode = AllocationMode.PERCENTAGE


class SIPPortfolioRequest(BaseModel):
    allocations: list[AllocationRequest] = Field(..., min_length=1)
    monthly_amount: Decimal = Field(..., gt=0)
    term_months: int = Field(..., gt=0)
    apply_tax: bool = True


class InvestmentRequest(BaseModel):
    """Either a flat rate or a lumpsum portfolio whose weighted rate is used."""
    annual_rate_percent: Decimal | None = Field(None, ge=0)
    tax_rate_percent: Decimal = Field(Decimal("0"), ge=0, le=100)
    compounding: CompoundingFrequency = CompoundingFrequency.MONTHLY
    amount: Decimal | None = Field(None, ge=0, description="Defaults to the prepayment amount")
    linked_to_loan: bool = False
    term_months: int | None = Field(None, gt=0)
    portfolio: LumpsumPortfolioRequest | None = None


class ComparisonRequest(BaseModel):
    loan: LoanRequest
    investment: InvestmentRequest
    strategy: Strategy = Strategy.PREPAYMENT


class LumpsumVsSIPRequest(BaseModel):
    lumpsum_amount: Decimal = Field(..., ge=0)
    lumpsum_rate_percent: Decimal = Field(..., ge=0)
    sip_monthly_amount: Decimal = Field(..., ge=0)
    sip_rate_percent: Decimal = Field(..., ge=0)
    term_months: int = Field(..., gt=0)


# ---- Response schemas ----

class CurrencyDisplay(BaseModel):
    code: str
    rate: Decimal


class ScheduleEntryResponse(BaseModel):
    month: int
    scheduled_payment: Decimal
    extra_payment: Decimal
    prepayment_amount: Decimal
    penalty_amount: Decimal
    total_payment: Decimal
    principal_component: Decimal
    interest_component: Decimal
    ending_balance: Decimal


class ScenarioResponse(BaseModel):
    name: str
    emi: Decimal
    total_interest: Decimal
    total_principal: Decimal
    total_penalty: Decimal
    total_payment: Decimal
    actual_term_months: int
    months_saved: int
    negative_amortization: bool = False
    hit_safety_bound: bool = False
    schedule: list[ScheduleEntryResponse] = []


class ScenarioSetResponse(BaseModel):
    baseline: ScenarioResponse
    prepayment: ScenarioResponse
    aggressive: ScenarioResponse
    prepayment_savings: Decimal
    aggressive_savings: Decimal
    secondary_currency: CurrencyDisplay


class DepositMonthResponse(BaseModel):
    month: int
    balance: Decimal
    interest_this_month: Decimal
    payout_this_month: Decimal
    tax_this_month: Decimal
    net_value: Decimal


class DepositResponse(BaseModel):
    maturity_amount: Decimal
    interest_earned: Decimal
    tax_on_interest: Decimal
    post_tax_maturity: Decimal
    total_payouts: Decimal
    inflation_adjusted_maturity: Decimal
    monthly_breakdown: list[DepositMonthResponse] = []
    secondary_currency: CurrencyDisplay


class AllocationReturnResponse(BaseModel):
    instrument_id: str
    percentage: Decimal
    amount: Decimal
    maturity_amount: Decimal
    interest: Decimal
    expense_cost: Decimal
    after_expense_interest: Decimal
    tax: Decimal
    after_tax_interest: Decimal


class PortfolioResponse(BaseModel):
    total_amount: Decimal
    weighted_rate_percent: Decimal
    risk_score: Decimal
    total_interest: Decimal
    total_expense_cost: Decimal
    total_tax_paid: Decimal
    after_tax_interest: Decimal
    net_maturity: Decimal
    allocations: list[AllocationReturnResponse]
    warnings: list[str] = []


class SIPAllocationResponse(BaseModel):
    instrument_id: str
    monthly_amount: Decimal
    invested: Decimal
    maturity_amount: Decimal
    gain: Decimal
    tax: Decimal
    post_tax_gain: Decimal


class SIPResponse(BaseModel):
    monthly_amount: Decimal
    total_invested: Decimal
    maturity_amount: Decimal
    total_gain: Decimal
    total_tax_paid: Decimal
    post_tax_maturity: Decimal
    weighted_rate_percent: Decimal
    allocations: list[SIPAllocationResponse]
    warnings: list[str] = []


class ComparisonResponse(BaseModel):
    strategy: str
    investment_amount: Decimal
    investment_rate_percent: Decimal
    horizon_months: int
    loan_interest_saved: Decimal
    loan_penalty: Decimal
    investment_return: Decimal
    net_savings: Decimal
    recommendation: str
    break_even_month: int
    break_even_rate_percent: Decimal | None = None
    warnings: list[str] = []


class GrowthPointResponse(BaseModel):
    month: int
    lumpsum: Decimal
    sip: Decimal


class LumpsumVsSIPResponse(BaseModel):
    break_even_month: int
    final_lumpsum: Decimal
    final_sip: Decimal
    data: list[GrowthPointResponse]


class InstrumentResponse(BaseModel):
    id: str
    name: str
    default_rate_percent: Decimal
    risk_level: str
    risk_score: Decimal
    return_guarantee: int
    description: str
    supports_expense_ratio: bool
    default_expense_ratio_percent: Decimal
