"""Dashboard statistics over the whole cycle."""
from week_planner.cycle import get_current_week, is_cycle_complete
from week_planner.models import CYCLE_WEEKS, AppState, TaskStatus


def get_weekly_scores(state: AppState) -> list[dict]:
    """One entry per cycle week; weeks without a record score 0."""
    scores = {w.week_number: w.execution_score for w in state.weeks}
    return [
        {"week": n, "label": f"W{n}", "score": scores.get(n, 0)}
        for n in range(1, CYCLE_WEEKS + 1)
    ]


def get_average_score(state: AppState) -> int:
    if not state.weeks:
        return 0
    # Half-up, matching the weekly score rounding.
    return int(sum(w.execution_score for w in state.weeks) / len(state.weeks) + 0.5)


def get_pending_count(state: AppState) -> int:
    week = get_current_week(state)
    if week is None:
        return 0
    return sum(1 for t in week.tactics_snapshot if t.status == TaskStatus.PENDING)


def get_cycle_stats(state: AppState) -> dict:
    return {
        "current_week": state.current_week,
        "goals": len(state.goals),
        "tactics": sum(len(g.tactics) for g in state.goals),
        "weeks_reviewed": sum(1 for w in state.weeks if w.is_reviewed),
        "average_score": get_average_score(state),
        "pending_this_week": get_pending_count(state),
        "cycle_complete": is_cycle_complete(state),
    }
