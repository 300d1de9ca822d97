"""Week cycle transitions: lazy week creation, status toggles and weekly review."""
from dataclasses import replace
from datetime import datetime
from typing import Optional

from week_planner.exceptions import WeekAlreadyReviewedError, WeekNotFoundError
from week_planner.models import CYCLE_WEEKS, AppState, TaskStatus, WeekData
from week_planner.scoring import compute_score
from week_planner.snapshot import initialize_week


def get_week(state: AppState, week_number: int) -> Optional[WeekData]:
    for w in state.weeks:
        if w.week_number == week_number:
            return w
    return None


def get_current_week(state: AppState) -> Optional[WeekData]:
    return get_week(state, state.current_week)


def is_cycle_complete(state: AppState) -> bool:
    week = get_current_week(state)
    return state.current_week == CYCLE_WEEKS and week is not None and week.is_reviewed


def _replace_week(state: AppState, week: WeekData) -> AppState:
    weeks = tuple(week if w.week_number == week.week_number else w for w in state.weeks)
    return replace(state, weeks=weeks)


def ensure_current_week_exists(state: AppState, now: Optional[datetime] = None) -> AppState:
    """Create the record for the current week if it is missing.

    Nothing happens when there are no goals to snapshot.
    """
    if get_current_week(state) is not None or not state.goals:
        return state
    week = initialize_week(state.current_week, state.goals, now=now)
    return replace(state, weeks=state.weeks + (week,))


def toggle_tactic_status(week: WeekData, tactic_id: str) -> WeekData:
    """Flip one snapshot tactic between PENDING and COMPLETED."""
    tactics = tuple(
        replace(
            t,
            status=TaskStatus.PENDING if t.status == TaskStatus.COMPLETED else TaskStatus.COMPLETED,
        ) if t.id == tactic_id else t
        for t in week.tactics_snapshot
    )
    return replace(week, tactics_snapshot=tactics)


def toggle_current_week_tactic(state: AppState, tactic_id: str) -> AppState:
    week = get_current_week(state)
    if week is None:
        raise WeekNotFoundError(state.current_week)
    return _replace_week(state, toggle_tactic_status(week, tactic_id))


def complete_week(state: AppState, reflection: str, now: Optional[datetime] = None) -> AppState:
    """Review the current week and move on to the next one.

    The score is fixed at this point; toggling tactics afterwards does not
    change it. The next week is snapshotted from the live goals. At the
    last week of the cycle no new week is created and the current week
    stays put.
    """
    week = get_current_week(state)
    if week is None:
        raise WeekNotFoundError(state.current_week)
    if week.is_reviewed:
        raise WeekAlreadyReviewedError(week.week_number)

    reviewed = replace(
        week,
        execution_score=compute_score(week.tactics_snapshot),
        reflection=reflection,
        is_reviewed=True,
    )
    new_state = _replace_week(state, reviewed)

    if state.current_week < CYCLE_WEEKS:
        next_number = state.current_week + 1
        next_week = initialize_week(next_number, state.goals, now=now)
        weeks = tuple(w for w in new_state.weeks if w.week_number != next_number) + (next_week,)
        new_state = replace(new_state, weeks=weeks, current_week=next_number)
    return new_state
