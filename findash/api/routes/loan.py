"""Loan scenario routes: three repayment strategies and CSV schedules."""

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response

from findash.api.schemas import (
    CurrencyDisplay,
    LoanRequest,
    ScenarioResponse,
    ScenarioSetResponse,
    ScheduleEntryResponse,
)
from findash.config import settings
from findash.engine.rate_math import InvalidTermError
from findash.engine.scenarios import run_scenario, run_scenarios
from findash.export import schedule_to_csv
from findash.models.loan import LoanInputs, ScenarioResult, Strategy

router = APIRouter(prefix="/api/v1/loan", tags=["loan"])


def build_loan(req: LoanRequest) -> LoanInputs:
    return LoanInputs(
        principal=req.principal,
        annual_rate_percent=req.annual_rate_percent,
        term_months=req.term_months,
        prepayment_amount=req.prepayment_amount,
        prepayment_month=req.prepayment_month,
        penalty_rate_percent=req.penalty_rate_percent,
        extra_monthly_payment=req.extra_monthly_payment,
        extra_payment_timing=req.extra_payment_timing,
    )


def secondary_currency() -> CurrencyDisplay:
    return CurrencyDisplay(
        code=settings.secondary_currency_code,
        rate=settings.secondary_currency_rate,
    )


def _scenario_to_response(result: ScenarioResult, include_schedule: bool) -> ScenarioResponse:
    schedule = []
    if include_schedule:
        schedule = [
            ScheduleEntryResponse(
                month=e.month,
                scheduled_payment=e.scheduled_payment,
                extra_payment=e.extra_payment,
                prepayment_amount=e.prepayment_amount,
                penalty_amount=e.penalty_amount,
                total_payment=e.total_payment,
                principal_component=e.principal_component,
                interest_component=e.interest_component,
                ending_balance=e.ending_balance,
            )
            for e in result.schedule
        ]
    return ScenarioResponse(
        name=result.name,
        emi=result.emi,
        total_interest=result.total_interest,
        total_principal=result.total_principal,
        total_penalty=result.total_penalty,
        total_payment=result.total_payment,
        actual_term_months=result.actual_term_months,
        months_saved=result.months_saved,
        negative_amortization=result.negative_amortization,
        hit_safety_bound=result.hit_safety_bound,
        schedule=schedule,
    )


@router.post("/scenarios", response_model=ScenarioSetResponse)
def loan_scenarios(req: LoanRequest):
    """Baseline, prepayment and aggressive schedules with interest saved."""
    try:
        scenarios = run_scenarios(build_loan(req))
    except InvalidTermError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return ScenarioSetResponse(
        baseline=_scenario_to_response(scenarios.baseline, req.include_schedule),
        prepayment=_scenario_to_response(scenarios.prepayment, req.include_schedule),
        aggressive=_scenario_to_response(scenarios.aggressive, req.include_schedule),
        prepayment_savings=scenarios.prepayment_savings,
        aggressive_savings=scenarios.aggressive_savings,
        secondary_currency=secondary_currency(),
    )


@router.post("/schedule.csv")
def loan_schedule_csv(
    req: LoanRequest,
    strategy: Strategy = Query(Strategy.PREPAYMENT),
    with_secondary: bool = Query(False, description="Add a secondary-currency balance column"),
):
    """One strategy's schedule as a CSV download."""
    try:
        result = run_scenario(build_loan(req), strategy)
    except InvalidTermError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if with_secondary:
        body = schedule_to_csv(
            result.schedule,
            settings.secondary_currency_code,
            settings.secondary_currency_rate,
        )
    else:
        body = schedule_to_csv(result.schedule)

    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{strategy.value}-schedule.csv"'},
    )
