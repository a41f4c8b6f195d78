from decimal import Decimal

import pytest

from findash.engine.amortization import amortize, yearly_summary
from findash.engine.rate_math import InvalidTermError
from findash.engine.scenarios import run_scenario
from findash.models.loan import ExtraPaymentTiming, PaymentPolicy, Strategy


class TestBaselineSchedule:
    def test_runs_full_term(self):
        result = amortize(Decimal("100000"), Decimal("7.5"), 120)
        assert result.actual_term_months == 120
        assert result.months_saved == 0

    def test_first_month_interest(self):
        """$100K at 7.5%: 100000 * 0.075 / 12 = $625.00."""
        result = amortize(Decimal("100000"), Decimal("7.5"), 120)
        first = result.schedule[0]
        assert first.interest_component == Decimal("625.00")
        assert first.principal_component == result.emi - Decimal("625.00")

    def test_principal_fully_repaid(self):
        result = amortize(Decimal("200000"), Decimal("4.5"), 240)
        assert abs(result.total_principal - Decimal("200000")) <= Decimal("0.01")
        assert result.final_balance == 0

    def test_balance_decreases(self):
        result = amortize(Decimal("100000"), Decimal("7.5"), 120)
        for prev, cur in zip(result.schedule, result.schedule[1:]):
            assert cur.ending_balance < prev.ending_balance

    def test_total_payment_identity(self):
        result = amortize(Decimal("200000"), Decimal("4.5"), 240)
        assert result.total_payment == result.total_principal + result.total_interest + result.total_penalty
        assert result.total_payment == sum(e.total_payment for e in result.schedule)

    def test_zero_rate(self):
        result = amortize(Decimal("120000"), Decimal("0"), 120)
        assert result.emi == Decimal("1000.00")
        assert result.total_interest == 0
        assert result.total_principal == Decimal("120000")
        assert result.actual_term_months == 120

    def test_zero_principal(self):
        result = amortize(Decimal("0"), Decimal("7.5"), 120)
        assert result.schedule == []
        assert result.total_payment == 0

    @pytest.mark.parametrize("term", [0, -1])
    def test_non_positive_term_raises(self, term):
        with pytest.raises(InvalidTermError):
            amortize(Decimal("100000"), Decimal("7.5"), term)


class TestPrepayment:
    def test_penalty_on_prepaid_amount(self):
        policy = PaymentPolicy(
            prepayment_amount=Decimal("10000"),
            prepayment_month=12,
            penalty_rate_percent=Decimal("1"),
        )
        result = amortize(Decimal("100000"), Decimal("7.5"), 120, policy)
        entry = result.schedule[11]
        assert entry.prepayment_amount == Decimal("10000.00")
        assert entry.penalty_amount == Decimal("100.00")
        assert result.total_penalty == Decimal("100.00")

    def test_prepayment_shortens_tenure(self):
        policy = PaymentPolicy(prepayment_amount=Decimal("10000"), prepayment_month=12)
        result = amortize(Decimal("100000"), Decimal("7.5"), 120, policy)
        assert result.months_saved > 0
        assert abs(result.total_principal - Decimal("100000")) <= Decimal("0.01")

    def test_prepayment_capped_at_outstanding_balance(self):
        policy = PaymentPolicy(prepayment_amount=Decimal("50000"), prepayment_month=1)
        result = amortize(Decimal("10000"), Decimal("12"), 12, policy)
        assert result.actual_term_months == 1
        first = result.schedule[0]
        assert first.ending_balance == 0
        assert first.prepayment_amount < Decimal("10000")
        assert result.total_principal == Decimal("10000.00")

    def test_prepayment_after_payoff_is_ignored(self):
        policy = PaymentPolicy(prepayment_amount=Decimal("5000"), prepayment_month=500)
        result = amortize(Decimal("100000"), Decimal("7.5"), 120, policy)
        assert result.total_penalty == 0
        assert all(e.prepayment_amount == 0 for e in result.schedule)


class TestExtraPayments:
    def test_extra_every_month(self):
        policy = PaymentPolicy(
            extra_monthly_amount=Decimal("200"),
            extra_payment_timing=ExtraPaymentTiming.BOTH,
        )
        result = amortize(Decimal("100000"), Decimal("7.5"), 120, policy)
        assert result.schedule[0].extra_payment == Decimal("200.00")
        assert result.months_saved > 0

    def test_extra_before_prepayment_only(self):
        policy = PaymentPolicy(
            extra_monthly_amount=Decimal("200"),
            extra_payment_timing=ExtraPaymentTiming.BEFORE,
            prepayment_amount=Decimal("10000"),
            prepayment_month=12,
        )
        result = amortize(Decimal("100000"), Decimal("7.5"), 120, policy)
        assert all(e.extra_payment == Decimal("200.00") for e in result.schedule[:11])
        assert all(e.extra_payment == 0 for e in result.schedule[11:])

    def test_extra_after_prepayment_only(self):
        policy = PaymentPolicy(
            extra_monthly_amount=Decimal("200"),
            extra_payment_timing=ExtraPaymentTiming.AFTER,
            prepayment_amount=Decimal("10000"),
            prepayment_month=12,
        )
        result = amortize(Decimal("100000"), Decimal("7.5"), 120, policy)
        assert all(e.extra_payment == 0 for e in result.schedule[:12])
        assert result.schedule[12].extra_payment == Decimal("200.00")

    def test_timing_none_disables_extra(self):
        policy = PaymentPolicy(extra_monthly_amount=Decimal("200"))
        result = amortize(Decimal("100000"), Decimal("7.5"), 120, policy)
        assert result.months_saved == 0

    def test_extra_never_overpays(self):
        policy = PaymentPolicy(
            extra_monthly_amount=Decimal("5000"),
            extra_payment_timing=ExtraPaymentTiming.BOTH,
        )
        result = amortize(Decimal("20000"), Decimal("6"), 60, policy)
        assert all(e.ending_balance >= 0 for e in result.schedule)
        assert abs(result.total_principal - Decimal("20000")) <= Decimal("0.01")


class TestPaymentPolicy:
    def test_extra_applies(self):
        before = PaymentPolicy(extra_payment_timing=ExtraPaymentTiming.BEFORE, prepayment_month=6)
        after = PaymentPolicy(extra_payment_timing=ExtraPaymentTiming.AFTER, prepayment_month=6)
        assert before.extra_applies(5) and not before.extra_applies(6)
        assert after.extra_applies(7) and not after.extra_applies(6)
        assert PaymentPolicy(extra_payment_timing=ExtraPaymentTiming.BOTH).extra_applies(6)
        assert not PaymentPolicy().extra_applies(1)


class TestBoundaryConditions:
    def test_emi_below_interest_flags_negative_amortization(self):
        """Interest is $1,000/month; a $500 installment never reduces the balance."""
        result = amortize(
            Decimal("100000"), Decimal("12"), 12, emi=Decimal("500"), grace_months=6
        )
        assert result.negative_amortization
        assert result.hit_safety_bound
        assert result.actual_term_months == 18
        assert result.final_balance > Decimal("100000")

    def test_safety_bound_logs_warning(self, caplog):
        with caplog.at_level("WARNING", logger="findash.engine.amortization"):
            amortize(Decimal("100000"), Decimal("12"), 12, emi=Decimal("500"), grace_months=0)
        assert "safety bound" in caplog.text

    def test_normal_loan_not_flagged(self):
        result = amortize(Decimal("100000"), Decimal("7.5"), 120)
        assert not result.negative_amortization
        assert not result.hit_safety_bound


class TestYearlySummary:
    def test_ten_years(self):
        result = amortize(Decimal("100000"), Decimal("7.5"), 120)
        yearly = yearly_summary(result)
        assert len(yearly) == 10
        assert yearly[-1]["ending_balance"] == 0

    def test_totals_match(self):
        policy = PaymentPolicy(
            prepayment_amount=Decimal("10000"),
            prepayment_month=12,
            penalty_rate_percent=Decimal("1"),
        )
        result = amortize(Decimal("100000"), Decimal("7.5"), 120, policy)
        yearly = yearly_summary(result)
        assert sum(y["interest"] for y in yearly) == result.total_interest
        assert sum(y["principal"] for y in yearly) == result.total_principal
        assert sum(y["penalty"] for y in yearly) == Decimal("100.00")

    def test_partial_final_year(self):
        result = amortize(Decimal("18000"), Decimal("0"), 18)
        yearly = yearly_summary(result)
        assert len(yearly) == 2
        assert yearly[1]["principal"] == Decimal("6000.00")


def _assert_row_invariants(result, principal):
    start = principal.quantize(Decimal("0.01"))
    for e in result.schedule:
        assert e.principal_component + e.interest_component == (
            e.scheduled_payment + e.extra_payment + e.prepayment_amount
        )
        assert e.ending_balance == max(Decimal("0"), start - e.principal_component)
        start = e.ending_balance


class TestScheduleRowInvariants:
    @pytest.mark.parametrize("strategy", list(Strategy))
    def test_reference_loan(self, reference_loan, strategy):
        _assert_row_invariants(run_scenario(reference_loan, strategy), reference_loan.principal)

    @pytest.mark.parametrize("strategy", list(Strategy))
    def test_default_loan(self, default_loan, strategy):
        _assert_row_invariants(run_scenario(default_loan, strategy), default_loan.principal)

    def test_capped_prepayment(self):
        policy = PaymentPolicy(
            prepayment_amount=Decimal("50000"),
            prepayment_month=6,
            penalty_rate_percent=Decimal("2"),
            extra_monthly_amount=Decimal("300"),
            extra_payment_timing=ExtraPaymentTiming.BEFORE,
        )
        result = amortize(Decimal("10000"), Decimal("12"), 12, policy)
        assert result.actual_term_months == 6
        _assert_row_invariants(result, Decimal("10000"))

    def test_negative_amortization(self):
        result = amortize(Decimal("100000"), Decimal("12"), 12, emi=Decimal("500"), grace_months=120)
        assert result.hit_safety_bound
        assert result.actual_term_months == 132
        _assert_row_invariants(result, Decimal("100000"))
