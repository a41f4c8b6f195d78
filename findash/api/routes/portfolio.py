"""Portfolio routes: lumpsum and SIP allocations, instrument catalog."""

from fastapi import APIRouter

from findash.api.schemas import (
    AllocationRequest,
    AllocationReturnResponse,
    InstrumentResponse,
    LumpsumPortfolioRequest,
    PortfolioResponse,
    SIPAllocationResponse,
    SIPPortfolioRequest,
    SIPResponse,
)
from findash.engine.portfolio import (
    calculate_lumpsum_portfolio,
    calculate_sip_portfolio,
    portfolio_risk_score,
)
from findash.models.instruments import INVESTMENT_INSTRUMENTS
from findash.models.portfolio import AllocationInput, PortfolioResult

router = APIRouter(prefix="/api/v1", tags=["portfolio"])


def build_allocations(allocations: list[AllocationRequest]) -> list[AllocationInput]:
    return [
        AllocationInput(
            instrument_id=a.instrument_id,
            annual_rate_percent=a.annual_rate_percent,
            tax_rate_percent=a.tax_rate_percent,
            expense_ratio_percent=a.expense_ratio_percent,
            percentage=a.percentage,
            amount=a.amount,
        )
        for a in allocations
    ]


def run_lumpsum(req: LumpsumPortfolioRequest) -> PortfolioResult:
    return calculate_lumpsum_portfolio(
        build_allocations(req.allocations),
        req.total_amount,
        req.term_months,
        compounding=req.compounding,
        mode=req.mode,
    )


def _portfolio_to_response(result: PortfolioResult) -> PortfolioResponse:
    allocations = [
        AllocationReturnResponse(
            instrument_id=r.instrument_id,
            percentage=a.percentage,
            amount=r.amount,
            maturity_amount=r.maturity_amount,
            interest=r.interest,
            expense_cost=r.expense_cost,
            after_expense_interest=r.after_expense_interest,
            tax=r.tax,
            after_tax_interest=r.after_tax_interest,
        )
        for a, r in zip(result.allocations, result.allocation_returns)
    ]
    return PortfolioResponse(
        total_amount=result.total_amount,
        weighted_rate_percent=result.weighted_rate_percent,
        risk_score=portfolio_risk_score(result.allocations),
        total_interest=result.total_interest,
        total_expense_cost=result.total_expense_cost,
        total_tax_paid=result.total_tax_paid,
        after_tax_interest=result.after_tax_interest,
        net_maturity=result.net_maturity,
        allocations=allocations,
        warnings=result.warnings,
    )


@router.post("/portfolio/lumpsum", response_model=PortfolioResponse)
def lumpsum_portfolio(req: LumpsumPortfolioRequest):
    """One-time investment split across instruments."""
    return _portfolio_to_response(run_lumpsum(req))


@router.post("/portfolio/sip", response_model=SIPResponse)
def sip_portfolio(req: SIPPortfolioRequest):
    """Monthly contribution split across instruments by percentage."""
    result = calculate_sip_portfolio(
        build_allocations(req.allocations),
        req.monthly_amount,
        req.term_months,
        apply_tax=req.apply_tax,
    )
    return SIPResponse(
        monthly_amount=result.monthly_amount,
        total_invested=result.total_invested,
        maturity_amount=result.maturity_amount,
        total_gain=result.total_gain,
        total_tax_paid=result.total_tax_paid,
        post_tax_maturity=result.post_tax_maturity,
        weighted_rate_percent=result.weighted_rate_percent,
        allocations=[
            SIPAllocationResponse(
                instrument_id=r.instrument_id,
                monthly_amount=r.monthly_amount,
                invested=r.invested,
                maturity_amount=r.maturity_amount,
                gain=r.gain,
                tax=r.tax,
                post_tax_gain=r.post_tax_gain,
            )
            for r in result.allocation_returns
        ],
        warnings=result.warnings,
    )


@router.get("/instruments", response_model=list[InstrumentResponse])
def list_instruments():
    return [
        InstrumentResponse(
            id=i.id,
            name=i.name,
            default_rate_percent=i.default_rate_percent,
            risk_level=i.risk_level.value,
            risk_score=i.risk_score,
            return_guarantee=i.return_guarantee,
            description=i.description,
            supports_expense_ratio=i.supports_expense_ratio,
            default_expense_ratio_percent=i.default_expense_ratio_percent,
        )
        for i in INVESTMENT_INSTRUMENTS
    ]
