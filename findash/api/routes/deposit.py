"""Fixed deposit route."""

from fastapi import APIRouter

from findash.api.routes.loan import secondary_currency
from findash.api.schemas import DepositMonthResponse, DepositRequest, DepositResponse
from findash.engine.deposit import calculate_deposit
from findash.models.deposit import DepositInputs

router = APIRouter(prefix="/api/v1", tags=["deposit"])


@router.post("/deposit", response_model=DepositResponse)
def deposit(req: DepositRequest):
    result = calculate_deposit(DepositInputs(
        principal=req.principal,
        annual_rate_percent=req.annual_rate_percent,
        term_months=req.term_months,
        compounding=req.compounding,
        payout=req.payout,
        tax_rate_percent=req.tax_rate_percent,
        inflation_rate_percent=req.inflation_rate_percent,
    ))

    breakdown = []
    if req.include_breakdown:
        breakdown = [
            DepositMonthResponse(
                month=m.month,
                balance=m.balance,
                interest_this_month=m.interest_this_month,
                payout_this_month=m.payout_this_month,
                tax_this_month=m.tax_this_month,
                net_value=m.net_value,
            )
            for m in result.monthly_breakdown
        ]

    return DepositResponse(
        maturity_amount=result.maturity_amount,
        interest_earned=result.interest_earned,
        tax_on_interest=result.tax_on_interest,
        post_tax_maturity=result.post_tax_maturity,
        total_payouts=result.total_payouts,
        inflation_adjusted_maturity=result.inflation_adjusted_maturity,
        monthly_breakdown=breakdown,
        secondary_currency=secondary_currency(),
    )
