from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator


def _reject_bool(value: Any) -> Any:
    # pydantic's lax float mode would otherwise read true/false as 1.0/0.0
    if isinstance(value, bool):
        raise ValueError("amount must be a number, not a boolean")
    return value


Amount = Annotated[float, BeforeValidator(_reject_bool)]


class DepositRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    amount: Amount = Field(gt=0, allow_inf_nan=False)
    date: datetime
    goalId: str

    @field_validator("date")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # naive timestamps from storage are treated as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_validator("goalId", mode="before")
    @classmethod
    def _coerce_goal_id(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class SavingsGoalSnapshot(BaseModel):
    model_config = ConfigDict(extra="forbid")

    targetAmount: Amount = Field(ge=0, allow_inf_nan=False)
    currentAmount: Amount = Field(default=0.0, ge=0, allow_inf_nan=False)
    targetDate: Optional[datetime] = None


class SavingsTimeline(BaseModel):
    """Projected time to reach a goal at the current deposit velocity.

    days/weeks/months are whole numbers, or ``math.inf`` when the goal
    has no usable deposit history.
    """

    days: Union[int, float]
    weeks: Union[int, float]
    months: Union[int, float]
    averageDailyDeposit: float
    averageWeeklyDeposit: float
    averageMonthlyDeposit: float
    isAchievable: bool
    message: str


class GoalProgress(BaseModel):
    progressPercent: float
    remainingAmount: float
    daysRemaining: Optional[int] = None
    monthlyContribution: float = 0.0
