"""Progress toward a savings goal and the contribution needed to finish on time."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional

from buni.core.savings import days_until, utc_now
from buni.models import GoalProgress, SavingsGoalSnapshot


def calculate_goal_progress(goal: SavingsGoalSnapshot, now: Optional[datetime] = None) -> GoalProgress:
    now = now or utc_now()
    remaining = max(goal.targetAmount - goal.currentAmount, 0.0)

    if goal.targetAmount > 0:
        progress = min(goal.currentAmount * 100 / goal.targetAmount, 100.0)
    else:
        progress = 100.0

    days_remaining = days_until(goal.targetDate, now) if goal.targetDate else None

    monthly = 0.0
    if days_remaining is not None and days_remaining > 0:
        months_remaining = days_remaining / 30
        monthly = float(math.ceil(remaining / months_remaining))

    return GoalProgress(
        progressPercent=progress,
        remainingAmount=remaining,
        daysRemaining=days_remaining,
        monthlyContribution=monthly,
    )
