import pytest
from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace

from careshift.models.shared.enums import ExpenseStatus
from careshift.services.care.payroll_calculator import (
    HourBucket,
    PayrollCalculator,
    RateDefaults,
    classify_shift_hours,
    elapsed_hours,
)

DEFAULTS = RateDefaults(regular_rate=Decimal("15.00"), overtime_multiplier=Decimal("1.5"))


def make_log(start, end, break_minutes=0):
    return SimpleNamespace(start_time=start, end_time=end, break_minutes=break_minutes)


def make_member(regular_rate="20.00", overtime_rate=None):
    return SimpleNamespace(
        regular_rate=Decimal(regular_rate) if regular_rate is not None else None,
        overtime_rate=Decimal(overtime_rate) if overtime_rate is not None else None,
    )


def expense(amount, status=ExpenseStatus.APPROVED):
    return SimpleNamespace(amount=Decimal(amount), status=status)


def assert_total_identity(result):
    expected = (
        result.regular_hours * result.regular_rate
        + result.overtime_hours * result.overtime_rate
        + result.holiday_hours * (result.holiday_rate or Decimal("0"))
        + (result.expense_total or Decimal("0"))
    )
    assert result.total_amount == expected.quantize(Decimal("0.01"))


@pytest.fixture
def calculator():
    return PayrollCalculator(DEFAULTS)


class TestHours:
    def test_break_is_deducted(self):
        hours = elapsed_hours(datetime(2026, 10, 19, 9, 0), datetime(2026, 10, 19, 17, 30), 30)
        assert hours == Decimal("8.00")

    def test_break_longer_than_shift_clamps_to_zero(self):
        hours = elapsed_hours(datetime(2026, 10, 19, 9, 0), datetime(2026, 10, 19, 10, 0), 90)
        assert hours == Decimal("0.00")

    def test_fractional_hours_round_half_up(self):
        # 7h 20m is 7.333... hours
        hours = elapsed_hours(datetime(2026, 10, 19, 9, 0), datetime(2026, 10, 19, 16, 20))
        assert hours == Decimal("7.33")

    def test_holiday_beats_weekend(self):
        result = classify_shift_hours(date(2026, 10, 17), Decimal("8"), is_holiday=True)
        assert result.bucket == HourBucket.HOLIDAY
        assert (result.regular_hours, result.overtime_hours, result.holiday_hours) == (0, 0, 8)

    def test_weekend_goes_to_overtime(self):
        assert classify_shift_hours(date(2026, 10, 18), Decimal("8"), False).bucket == HourBucket.OVERTIME

    def test_weekday_is_regular(self):
        assert classify_shift_hours(date(2026, 10, 19), Decimal("8"), False).bucket == HourBucket.REGULAR


class TestPayrollCalculator:
    """Rate selection and totals for a single work log"""

    def test_weekday_regular_pay(self, calculator):
        log = make_log(datetime(2026, 10, 19, 9, 0), datetime(2026, 10, 19, 17, 0))
        result = calculator.calculate(log, make_member())

        assert result.regular_hours == Decimal("8.00")
        assert result.overtime_hours == 0
        assert result.holiday_hours == 0
        assert result.regular_rate == Decimal("20.00")
        assert result.total_amount == Decimal("160.00")
        assert result.holiday_rate is None
        assert result.expense_total is None
        assert result.pay_period_start == log.start_time
        assert result.pay_period_end == log.end_time

    def test_saturday_is_paid_at_overtime_rate(self, calculator):
        log = make_log(datetime(2026, 10, 17, 8, 0), datetime(2026, 10, 17, 16, 0))
        result = calculator.calculate(log, make_member())

        assert result.overtime_hours == Decimal("8.00")
        assert result.regular_hours == 0
        assert result.overtime_rate == Decimal("30.00")
        assert result.total_amount == Decimal("240.00")
        assert_total_identity(result)

    def test_holiday_on_a_saturday_uses_holiday_rate(self, calculator):
        log = make_log(datetime(2026, 10, 17, 8, 0), datetime(2026, 10, 17, 16, 0))
        holiday = SimpleNamespace(pay_multiplier=Decimal("2.0"))
        result = calculator.calculate(log, make_member(), holiday=holiday)

        assert result.holiday_hours == Decimal("8.00")
        assert result.overtime_hours == 0
        assert result.regular_hours == 0
        assert result.holiday_rate == Decimal("40.00")
        assert result.total_amount == Decimal("320.00")
        assert_total_identity(result)

    def test_only_one_bucket_is_non_zero(self, calculator):
        for day in range(12, 19):
            log = make_log(datetime(2026, 10, day, 6, 0), datetime(2026, 10, day, 18, 0), 45)
            result = calculator.calculate(log, make_member())
            buckets = [result.regular_hours, result.overtime_hours, result.holiday_hours]
            assert sum(1 for hours in buckets if hours > 0) == 1
            assert_total_identity(result)

    def test_member_overtime_rate_overrides_multiplier(self, calculator):
        log = make_log(datetime(2026, 10, 18, 8, 0), datetime(2026, 10, 18, 12, 0))
        result = calculator.calculate(log, make_member("20.00", "35.00"))
        assert result.overtime_rate == Decimal("35.00")
        assert result.total_amount == Decimal("140.00")

    def test_defaults_apply_when_member_has_no_rates(self, calculator):
        log = make_log(datetime(2026, 10, 17, 8, 0), datetime(2026, 10, 17, 12, 0))
        result = calculator.calculate(log, make_member(None))
        assert result.regular_rate == Decimal("15.00")
        assert result.overtime_rate == Decimal("22.50")
        assert result.total_amount == Decimal("90.00")

    def test_injected_rate_defaults_are_honoured(self):
        calculator = PayrollCalculator(RateDefaults(regular_rate=Decimal("18"), overtime_multiplier=Decimal("2")))
        log = make_log(datetime(2026, 10, 17, 8, 0), datetime(2026, 10, 17, 12, 0))
        result = calculator.calculate(log, make_member(None))
        assert result.overtime_rate == Decimal("36.00")
        assert result.total_amount == Decimal("144.00")

    def test_only_approved_expenses_are_reimbursed(self, calculator):
        log = make_log(datetime(2026, 10, 19, 9, 0), datetime(2026, 10, 19, 17, 0))
        expenses = [
            expense("50.00"),
            expense("30.00", ExpenseStatus.PENDING),
            expense("12.00", ExpenseStatus.REJECTED),
        ]
        result = calculator.calculate(log, make_member(), expenses=expenses)

        assert result.expense_total == Decimal("50.00")
        assert result.total_amount == Decimal("210.00")
        assert_total_identity(result)

    def test_zero_expense_total_is_left_empty(self, calculator):
        log = make_log(datetime(2026, 10, 19, 9, 0), datetime(2026, 10, 19, 17, 0))
        result = calculator.calculate(log, make_member(), expenses=[expense("0.00")])
        assert result.expense_total is None
        assert result.total_amount == Decimal("160.00")
