"""Week snapshot creation."""
from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional

from week_planner.models import Goal, TaskStatus, WeekData


def initialize_week(week_number: int, goals: Iterable[Goal], now: Optional[datetime] = None) -> WeekData:
    """Build the record for a new week from the live goals.

    Every tactic of every goal is copied into the snapshot, in goal order,
    with its status reset to PENDING. Tactics are frozen, so the copies
    cannot be changed through the goals they came from.
    """
    snapshot = tuple(
        replace(t, status=TaskStatus.PENDING)
        for g in goals
        for t in g.tactics
    )
    started = (now or datetime.now()).isoformat()
    return WeekData(
        week_number=week_number,
        start_date=started,
        tactics_snapshot=snapshot,
        execution_score=0,
        reflection="",
        is_reviewed=False,
    )
