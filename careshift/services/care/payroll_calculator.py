"""
Differential pay for a single approved work log.

A work log is paid entirely at one rate, chosen by the date it started on:
holiday first, then weekend, then a regular weekday. Hours are never split
across buckets. This is simpler than statutory overtime and must not be used
as a labour-law calculation; ``classify_shift_hours`` is the only place the
bucketing rule lives.
"""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Iterable, Optional

from careshift.core.config import settings
from careshift.models.shared.enums import ExpenseStatus

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


class HourBucket(str, Enum):
    REGULAR = "regular"
    OVERTIME = "overtime"
    HOLIDAY = "holiday"


@dataclass(frozen=True)
class RateDefaults:
    regular_rate: Decimal = Decimal("15.0")
    overtime_multiplier: Decimal = Decimal("1.5")

    @classmethod
    def from_settings(cls) -> "RateDefaults":
        return cls(
            regular_rate=to_decimal(settings.DEFAULT_REGULAR_RATE),
            overtime_multiplier=to_decimal(settings.OVERTIME_RATE_MULTIPLIER),
        )


@dataclass(frozen=True)
class HourClassification:
    bucket: HourBucket
    regular_hours: Decimal
    overtime_hours: Decimal
    holiday_hours: Decimal

    @property
    def hours(self) -> Decimal:
        return self.regular_hours + self.overtime_hours + self.holiday_hours


@dataclass(frozen=True)
class PayrollComputation:
    regular_hours: Decimal
    overtime_hours: Decimal
    holiday_hours: Decimal
    regular_rate: Decimal
    overtime_rate: Decimal
    holiday_rate: Optional[Decimal]
    expense_total: Optional[Decimal]
    total_amount: Decimal
    pay_period_start: datetime
    pay_period_end: datetime


def elapsed_hours(start: datetime, end: datetime, break_minutes: int = 0) -> Decimal:
    """Worked hours after the break, never negative, rounded to 0.01."""
    seconds = Decimal(str((end - start).total_seconds()))
    hours = seconds / Decimal(3600) - Decimal(break_minutes or 0) / Decimal(60)
    return quantize(max(hours, ZERO))


def classify_shift_hours(work_date: date, hours: Decimal, is_holiday: bool) -> HourClassification:
    """Put all hours in one bucket: holiday beats weekend beats regular."""
    if is_holiday:
        return HourClassification(HourBucket.HOLIDAY, ZERO, ZERO, hours)
    if work_date.weekday() >= 5:
        return HourClassification(HourBucket.OVERTIME, ZERO, hours, ZERO)
    return HourClassification(HourBucket.REGULAR, hours, ZERO, ZERO)


def approved_expense_total(expenses: Iterable) -> Optional[Decimal]:
    total = sum(
        (to_decimal(e.amount) for e in expenses if e.status == ExpenseStatus.APPROVED),
        ZERO,
    )
    return quantize(total) if total > 0 else None


class PayrollCalculator:
    """Turns a work log, its team member's rates and the holiday (if any) into payroll figures."""

    def __init__(self, rate_defaults: Optional[RateDefaults] = None):
        self.rate_defaults = rate_defaults or RateDefaults.from_settings()

    def regular_rate_for(self, member) -> Decimal:
        if member is not None and member.regular_rate is not None:
            return quantize(to_decimal(member.regular_rate))
        return quantize(self.rate_defaults.regular_rate)

    def overtime_rate_for(self, member) -> Decimal:
        if member is not None and member.overtime_rate is not None:
            return quantize(to_decimal(member.overtime_rate))
        return quantize(self.regular_rate_for(member) * self.rate_defaults.overtime_multiplier)

    def calculate(self, work_log, member, holiday=None, expenses: Iterable = ()) -> PayrollComputation:
        hours = elapsed_hours(work_log.start_time, work_log.end_time, work_log.break_minutes)
        work_date = work_log.start_time.date()
        classification = classify_shift_hours(work_date, hours, holiday is not None)

        regular_rate = self.regular_rate_for(member)
        overtime_rate = self.overtime_rate_for(member)
        holiday_rate = None
        if holiday is not None:
            holiday_rate = quantize(regular_rate * to_decimal(holiday.pay_multiplier))

        rate = {
            HourBucket.REGULAR: regular_rate,
            HourBucket.OVERTIME: overtime_rate,
            HourBucket.HOLIDAY: holiday_rate,
        }[classification.bucket]

        expense_total = approved_expense_total(expenses)
        total_amount = quantize(classification.hours * rate + (expense_total or ZERO))

        return PayrollComputation(
            regular_hours=classification.regular_hours,
            overtime_hours=classification.overtime_hours,
            holiday_hours=classification.holiday_hours,
            regular_rate=regular_rate,
            overtime_rate=overtime_rate,
            holiday_rate=holiday_rate,
            expense_total=expense_total,
            total_amount=total_amount,
            pay_period_start=work_log.start_time,
            pay_period_end=work_log.end_time,
        )
