"""Deposit-velocity projection for savings goals."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Iterable, List, Optional

from pydantic import ValidationError

from buni.domain.ledger import DepositLedger
from buni.errors import InvalidSavingsInput
from buni.models import DepositRecord, SavingsTimeline

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)

# projected durations beyond five years are flagged as not achievable
ACHIEVABLE_DAYS = 1825


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _require_amount(name: str, value: Any, allow_zero: bool = True) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidSavingsInput(f"{name} must be a number, got {value!r}")
    amount = float(value)
    if not math.isfinite(amount):
        raise InvalidSavingsInput(f"{name} must be finite, got {value!r}")
    if amount < 0 or (amount == 0 and not allow_zero):
        raise InvalidSavingsInput(f"{name} must be {'non-negative' if allow_zero else 'positive'}, got {value!r}")
    return amount


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def days_since(moment: datetime, now: datetime) -> int:
    """Whole days elapsed, rounded up; a same-day deposit counts as one day."""
    return max(1, math.ceil((now - _as_utc(moment)) / ONE_DAY))


def days_until(moment: datetime, now: datetime) -> int:
    """Whole days left until ``moment``, rounded up; negative once it has passed."""
    return math.ceil((_as_utc(moment) - _as_utc(now)) / ONE_DAY)


def deposits_for_goal(history: Iterable[Any], goal_id: str) -> List[DepositRecord]:
    """Keep the well-formed deposits that belong to ``goal_id``.

    History comes from application storage, so entries may be raw dicts;
    anything that doesn't validate as a deposit is dropped.
    """
    matched: List[DepositRecord] = []
    for entry in history:
        if not isinstance(entry, DepositRecord):
            try:
                entry = DepositRecord.model_validate(entry)
            except ValidationError:
                logger.debug("skipping malformed deposit entry %r", entry)
                continue
        if entry.goalId == str(goal_id):
            matched.append(entry)
    return matched


def _timeline_message(days: float) -> str:
    if days <= 30:
        return f"Almost there! {days} days to go! 🚀"
    elif days <= 90:
        return f"Great progress! {math.ceil(days / 7)} weeks remaining! 📈"
    elif days <= 365:
        return f"On track! {math.ceil(days / 30)} months to go! 🎯"
    elif days <= 1095:
        return f"Steady progress! {math.ceil(days / 365)} years to go! 💪"
    return "Consider increasing your savings rate! 📊"


def compute_timeline(
    target_amount: float,
    current_amount: float,
    deposit_history: Iterable[Any],
    goal_id: str,
    now: Optional[datetime] = None,
) -> SavingsTimeline:
    """
    Project how long it takes to cover the rest of a goal.

    Steps:
      1) remaining = target - current; nothing left means the goal is done.
      2) Average daily deposit = total deposited for the goal divided by the
         days since its earliest deposit (at least one day).
      3) days = ceil(remaining / daily average); weeks and months are both
         rounded up from days so the three units agree.

    Missing history is reported in the result (infinite days), not raised.
    """
    target = _require_amount("targetAmount", target_amount)
    current = _require_amount("currentAmount", current_amount)
    remaining = target - current

    if remaining <= 0:
        return SavingsTimeline(
            days=0,
            weeks=0,
            months=0,
            averageDailyDeposit=0.0,
            averageWeeklyDeposit=0.0,
            averageMonthlyDeposit=0.0,
            isAchievable=True,
            message="Goal already achieved! 🎉",
        )

    goal_deposits = deposits_for_goal(deposit_history, goal_id)
    if not goal_deposits:
        return SavingsTimeline(
            days=math.inf,
            weeks=math.inf,
            months=math.inf,
            averageDailyDeposit=0.0,
            averageWeeklyDeposit=0.0,
            averageMonthlyDeposit=0.0,
            isAchievable=False,
            message="No deposit history yet. Start saving to see timeline! 💰",
        )

    now = _as_utc(now or utc_now())
    ages = [days_since(deposit.date, now) for deposit in goal_deposits]

    total_deposited = sum(deposit.amount for deposit in goal_deposits)
    # the oldest deposit is the longest-running one, so its age spans the history
    total_days = max(ages)

    average_daily = total_deposited / total_days
    average_weekly = average_daily * 7
    average_monthly = average_daily * 30

    raw_days = remaining / average_daily if average_daily > 0 else math.inf
    if math.isfinite(raw_days):
        # remaining > 0 here, so an overflowing daily average still leaves a day
        days = max(1, math.ceil(raw_days))
        weeks = math.ceil(days / 7)
        months = math.ceil(days / 30)
    else:
        days = weeks = months = math.inf

    return SavingsTimeline(
        days=days,
        weeks=weeks,
        months=months,
        averageDailyDeposit=average_daily,
        averageWeeklyDeposit=average_weekly,
        averageMonthlyDeposit=average_monthly,
        isAchievable=days <= ACHIEVABLE_DAYS,
        message=_timeline_message(days),
    )


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def format_timeline(timeline: SavingsTimeline) -> str:
    """Render a timeline for display using the fields it already carries."""
    days = timeline.days
    if days == 0:
        return "Goal achieved! 🎉"
    if days == math.inf:
        return "No timeline available"

    if days <= 7:
        return _plural(int(days), "day")
    elif days <= 30:
        return _plural(int(timeline.weeks), "week")
    elif days <= 365:
        return _plural(int(timeline.months), "month")
    return _plural(math.ceil(days / 365), "year")


class SavingsProjectionEngine:
    """Savings timeline operations bound to a deposit ledger and a clock."""

    def __init__(self, ledger: DepositLedger, clock: Callable[[], datetime] = utc_now):
        self.ledger = ledger
        self.clock = clock

    def compute_timeline(
        self,
        target_amount: float,
        current_amount: float,
        deposit_history: Iterable[Any],
        goal_id: str,
    ) -> SavingsTimeline:
        return compute_timeline(
            target_amount, current_amount, deposit_history, goal_id, now=self.clock()
        )

    def timeline_for_goal(self, target_amount: float, current_amount: float, goal_id: str) -> SavingsTimeline:
        """Compute a goal's timeline from the ledger's full history."""
        return self.compute_timeline(target_amount, current_amount, self.get_deposit_history(), goal_id)

    @staticmethod
    def format_timeline(timeline: SavingsTimeline) -> str:
        return format_timeline(timeline)

    def record_deposit(self, amount: float, goal_id: str) -> DepositRecord:
        value = _require_amount("amount", amount, allow_zero=False)
        record = DepositRecord(amount=value, date=_as_utc(self.clock()), goalId=str(goal_id))
        # write failures surface as LedgerError
        self.ledger.append(record)
        logger.info("recorded deposit of %.2f for goal %s", record.amount, record.goalId)
        return record

    def get_deposit_history(self) -> List[DepositRecord]:
        return self.ledger.read_all()
