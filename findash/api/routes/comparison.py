"""Prepay vs invest and lumpsum vs SIP comparison routes."""

from fastapi import APIRouter, HTTPException

from findash.api.routes.loan import build_loan
from findash.api.routes.portfolio import run_lumpsum
from findash.api.schemas import (
    ComparisonRequest,
    ComparisonResponse,
    GrowthPointResponse,
    InvestmentRequest,
    LumpsumVsSIPRequest,
    LumpsumVsSIPResponse,
)
from findash.engine.comparison import compare_prepay_vs_invest, lumpsum_vs_sip
from findash.engine.rate_math import InvalidTermError
from findash.models.comparison import InvestmentProfile

router = APIRouter(prefix="/api/v1/comparison", tags=["comparison"])


def _build_investment(req: InvestmentRequest) -> tuple[InvestmentProfile, list[str]]:
    """Flat rate, or the weighted rate and effective tax of a portfolio."""
    if req.portfolio is not None:
        portfolio = run_lumpsum(req.portfolio)
        profile = InvestmentProfile.from_portfolio(
            portfolio,
            compounding=req.compounding,
            linked_to_loan=req.linked_to_loan,
        )
        return profile, portfolio.warnings

    if req.annual_rate_percent is None:
        raise HTTPException(
            status_code=422,
            detail="Investment needs either annual_rate_percent or a portfolio",
        )
    profile = InvestmentProfile(
        annual_rate_percent=req.annual_rate_percent,
        tax_rate_percent=req.tax_rate_percent,
        compounding=req.compounding,
        amount=req.amount,
        linked_to_loan=req.linked_to_loan,
        term_months=req.term_months,
    )
    return profile, []


@router.post("/prepay-vs-invest", response_model=ComparisonResponse)
def prepay_vs_invest(req: ComparisonRequest):
    """Recommend prepaying the loan or investing the money instead."""
    investment, warnings = _build_investment(req.investment)
    try:
        result = compare_prepay_vs_invest(build_loan(req.loan), investment, req.strategy)
    except InvalidTermError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return ComparisonResponse(
        strategy=result.strategy.value,
        investment_amount=result.investment_amount,
        investment_rate_percent=result.investment_rate_percent,
        horizon_months=result.horizon_months,
        loan_interest_saved=result.loan_interest_saved,
        loan_penalty=result.loan_penalty,
        investment_return=result.investment_return,
        net_savings=result.net_savings,
        recommendation=result.recommendation.value,
        break_even_month=result.break_even_month,
        break_even_rate_percent=result.break_even_rate_percent,
        warnings=warnings,
    )


@router.post("/lumpsum-vs-sip", response_model=LumpsumVsSIPResponse)
def compare_lumpsum_vs_sip(req: LumpsumVsSIPRequest):
    result = lumpsum_vs_sip(
        req.lumpsum_amount,
        req.lumpsum_rate_percent,
        req.sip_monthly_amount,
        req.sip_rate_percent,
        req.term_months,
    )
    return LumpsumVsSIPResponse(
        break_even_month=result.break_even_month,
        final_lumpsum=result.final_lumpsum,
        final_sip=result.final_sip,
        data=[GrowthPointResponse(month=p.month, lumpsum=p.lumpsum, sip=p.sip) for p in result.data],
    )
