from decimal import Decimal

import pytest

from findash.engine.deposit import balance_at_month, calculate_deposit, tax_on_interest
from findash.models.deposit import CompoundingFrequency, DepositInputs, PayoutFrequency


class TestAtMaturity:
    def test_yearly_compounding_one_year(self):
        result = calculate_deposit(DepositInputs(
            principal=Decimal("100000"),
            annual_rate_percent=Decimal("12"),
            term_months=12,
            compounding=CompoundingFrequency.YEARLY,
        ))
        assert result.maturity_amount == Decimal("112000.00")
        assert result.interest_earned == Decimal("12000.00")
        assert result.total_payouts == 0

    def test_quarterly_compounding_one_year(self):
        result = calculate_deposit(DepositInputs(
            principal=Decimal("100000"),
            annual_rate_percent=Decimal("8"),
            term_months=12,
        ))
        assert result.maturity_amount == Decimal("108243.22")

    def test_last_breakdown_month_equals_maturity(self, standard_deposit):
        result = calculate_deposit(standard_deposit)
        assert len(result.monthly_breakdown) == 60
        assert result.monthly_breakdown[-1].balance == result.maturity_amount

    def test_breakdown_interest_sums_to_total(self, standard_deposit):
        result = calculate_deposit(standard_deposit)
        assert sum(m.interest_this_month for m in result.monthly_breakdown) == result.interest_earned

    def test_balance_never_decreases(self, standard_deposit):
        balances = [m.balance for m in calculate_deposit(standard_deposit).monthly_breakdown]
        assert balances == sorted(balances)

    def test_tax_on_interest_only(self):
        result = calculate_deposit(DepositInputs(
            principal=Decimal("100000"),
            annual_rate_percent=Decimal("12"),
            term_months=12,
            compounding=CompoundingFrequency.YEARLY,
            tax_rate_percent=Decimal("30"),
        ))
        assert result.tax_on_interest == Decimal("3600.00")
        assert result.post_tax_maturity == Decimal("108400.00")
        assert result.after_tax_interest == Decimal("8400.00")

    def test_tax_booked_in_final_month(self):
        result = calculate_deposit(DepositInputs(
            principal=Decimal("100000"),
            annual_rate_percent=Decimal("12"),
            term_months=12,
            compounding=CompoundingFrequency.YEARLY,
            tax_rate_percent=Decimal("30"),
        ))
        taxes = [m.tax_this_month for m in result.monthly_breakdown]
        assert sum(taxes) == result.tax_on_interest
        assert taxes[-1] == Decimal("3600.00")
        assert result.monthly_breakdown[-1].net_value == result.post_tax_maturity

    def test_more_frequent_compounding_never_lower(self):
        maturities = [
            calculate_deposit(DepositInputs(
                principal=Decimal("100000"),
                annual_rate_percent=Decimal("8"),
                term_months=60,
                compounding=freq,
            )).maturity_amount
            for freq in (
                CompoundingFrequency.YEARLY,
                CompoundingFrequency.HALF_YEARLY,
                CompoundingFrequency.QUARTERLY,
                CompoundingFrequency.MONTHLY,
            )
        ]
        assert maturities == sorted(maturities)

    def test_zero_rate(self):
        result = calculate_deposit(DepositInputs(
            principal=Decimal("50000"),
            annual_rate_percent=Decimal("0"),
            term_months=24,
        ))
        assert result.maturity_amount == Decimal("50000.00")
        assert result.interest_earned == 0
        assert result.tax_on_interest == 0


class TestPeriodicPayout:
    def test_monthly_payout(self):
        result = calculate_deposit(DepositInputs(
            principal=Decimal("120000"),
            annual_rate_percent=Decimal("10"),
            term_months=12,
            payout=PayoutFrequency.MONTHLY,
        ))
        assert all(m.payout_this_month == Decimal("1000.00") for m in result.monthly_breakdown)
        assert all(m.balance == Decimal("120000.00") for m in result.monthly_breakdown)
        assert result.total_payouts == Decimal("12000.00")
        assert result.maturity_amount == Decimal("132000.00")

    def test_quarterly_payout_accrues_between_events(self):
        result = calculate_deposit(DepositInputs(
            principal=Decimal("120000"),
            annual_rate_percent=Decimal("10"),
            term_months=12,
            payout=PayoutFrequency.QUARTERLY,
        ))
        months = result.monthly_breakdown
        assert months[0].balance == Decimal("121000.00")
        assert months[1].balance == Decimal("122000.00")
        assert months[2].payout_this_month == Decimal("3000.00")
        assert months[2].balance == Decimal("120000.00")
        assert result.total_payouts == Decimal("12000.00")

    def test_stub_period_paid_at_maturity(self):
        result = calculate_deposit(DepositInputs(
            principal=Decimal("120000"),
            annual_rate_percent=Decimal("10"),
            term_months=7,
            payout=PayoutFrequency.QUARTERLY,
        ))
        payouts = [m.payout_this_month for m in result.monthly_breakdown]
        assert payouts[2] == Decimal("3000.00")
        assert payouts[5] == Decimal("3000.00")
        assert payouts[6] == Decimal("1000.00")
        assert result.total_payouts == Decimal("7000.00")

    def test_tax_per_payout(self):
        result = calculate_deposit(DepositInputs(
            principal=Decimal("120000"),
            annual_rate_percent=Decimal("10"),
            term_months=12,
            payout=PayoutFrequency.YEARLY,
            tax_rate_percent=Decimal("20"),
        ))
        assert result.monthly_breakdown[-1].tax_this_month == Decimal("2400.00")
        assert result.tax_on_interest == Decimal("2400.00")
        assert result.post_tax_maturity == Decimal("129600.00")
        assert result.monthly_breakdown[-1].net_value == result.post_tax_maturity

    def test_payout_ignores_compounding(self):
        monthly = calculate_deposit(DepositInputs(
            principal=Decimal("120000"),
            annual_rate_percent=Decimal("10"),
            term_months=12,
            compounding=CompoundingFrequency.MONTHLY,
            payout=PayoutFrequency.YEARLY,
        ))
        yearly = calculate_deposit(DepositInputs(
            principal=Decimal("120000"),
            annual_rate_percent=Decimal("10"),
            term_months=12,
            compounding=CompoundingFrequency.YEARLY,
            payout=PayoutFrequency.YEARLY,
        ))
        assert monthly.maturity_amount == yearly.maturity_amount


class TestInflationAndEdgeCases:
    def test_inflation_adjusted_maturity(self):
        result = calculate_deposit(DepositInputs(
            principal=Decimal("100000"),
            annual_rate_percent=Decimal("10"),
            term_months=12,
            compounding=CompoundingFrequency.YEARLY,
            inflation_rate_percent=Decimal("10"),
        ))
        assert result.post_tax_maturity == Decimal("110000.00")
        assert result.inflation_adjusted_maturity == Decimal("100000.00")

    @pytest.mark.parametrize("term", [0, -6])
    def test_non_positive_term_returns_principal(self, term):
        result = calculate_deposit(DepositInputs(
            principal=Decimal("100000"),
            annual_rate_percent=Decimal("8"),
            term_months=term,
        ))
        assert result.maturity_amount == Decimal("100000.00")
        assert result.monthly_breakdown == []

    def test_balance_at_month_zero_is_principal(self, standard_deposit):
        assert balance_at_month(standard_deposit, 0) == Decimal("100000.00")

    def test_no_tax_on_losses(self):
        assert tax_on_interest(Decimal("-10"), Decimal("30")) == 0
        assert tax_on_interest(Decimal("1000"), Decimal("30")) == Decimal("300.00")
