"""Canonical test fixtures used across engine, API and CLI tests.

Reference loan: $200K at 4.5% for 20 years, $20K prepaid in month 24 with a 2% penalty.
Default loan: $100K at 7.5% for 10 years, $10K prepaid in month 12 with a 1% penalty,
plus $200/month extra throughout.
"""

import pytest
from decimal import Decimal

from findash.models.deposit import CompoundingFrequency, DepositInputs
from findash.models.loan import ExtraPaymentTiming, LoanInputs
from findash.models.portfolio import AllocationInput


@pytest.fixture
def reference_loan() -> LoanInputs:
    """$200K, 4.5%, 240 months, single bulk prepayment with penalty."""
    return LoanInputs(
        principal=Decimal("200000"),
        annual_rate_percent=Decimal("4.5"),
        term_months=240,
        prepayment_amount=Decimal("20000"),
        prepayment_month=24,
        penalty_rate_percent=Decimal("2"),
    )


@pytest.fixture
def default_loan() -> LoanInputs:
    """$100K, 7.5%, 120 months, bulk prepayment plus extra monthly payment."""
    return LoanInputs(
        principal=Decimal("100000"),
        annual_rate_percent=Decimal("7.5"),
        term_months=120,
        prepayment_amount=Decimal("10000"),
        prepayment_month=12,
        penalty_rate_percent=Decimal("1"),
        extra_monthly_payment=Decimal("200"),
        extra_payment_timing=ExtraPaymentTiming.BOTH,
    )


@pytest.fixture
def standard_deposit() -> DepositInputs:
    """$100K at 8% for 5 years, quarterly compounding, paid at maturity."""
    return DepositInputs(
        principal=Decimal("100000"),
        annual_rate_percent=Decimal("8"),
        term_months=60,
        compounding=CompoundingFrequency.QUARTERLY,
    )


@pytest.fixture
def balanced_allocations() -> list[AllocationInput]:
    """Half fixed deposit at 7%, half mutual funds at 12%."""
    return [
        AllocationInput(
            instrument_id="fd",
            annual_rate_percent=Decimal("7"),
            percentage=Decimal("50"),
        ),
        AllocationInput(
            instrument_id="mutual_funds",
            annual_rate_percent=Decimal("12"),
            percentage=Decimal("50"),
        ),
    ]
