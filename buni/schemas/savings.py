"""Data contracts for the savings endpoints."""

import math
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from buni.models import Amount, DepositRecord, SavingsTimeline


class DepositRequest(BaseModel):
    """A deposit made into a goal right now."""

    amount: Amount = Field(..., gt=0, allow_inf_nan=False, description="Amount deposited.")
    goalId: Union[str, int] = Field(..., description="Goal the deposit applies to.")


class DepositResponse(BaseModel):
    deposit: DepositRecord


class DepositHistoryResponse(BaseModel):
    deposits: List[DepositRecord]


class TimelineRequest(BaseModel):
    """Goal snapshot whose timeline is projected from the stored deposits."""

    targetAmount: Amount = Field(..., ge=0, allow_inf_nan=False)
    currentAmount: Amount = Field(0.0, ge=0, allow_inf_nan=False)
    goalId: Union[str, int]


class TimelineResponse(BaseModel):
    """SavingsTimeline as JSON; ``None`` stands in for an unbounded duration."""

    days: Optional[int]
    weeks: Optional[int]
    months: Optional[int]
    averageDailyDeposit: float
    averageWeeklyDeposit: float
    averageMonthlyDeposit: float
    isAchievable: bool
    message: str
    formatted: str

    @classmethod
    def from_timeline(cls, timeline: SavingsTimeline, formatted: str) -> "TimelineResponse":
        def bounded(value: Union[int, float]) -> Optional[int]:
            return None if math.isinf(value) else int(value)

        return cls(
            days=bounded(timeline.days),
            weeks=bounded(timeline.weeks),
            months=bounded(timeline.months),
            averageDailyDeposit=timeline.averageDailyDeposit,
            averageWeeklyDeposit=timeline.averageWeeklyDeposit,
            averageMonthlyDeposit=timeline.averageMonthlyDeposit,
            isAchievable=timeline.isAchievable,
            message=timeline.message,
            formatted=formatted,
        )
