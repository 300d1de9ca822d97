# tests/test_dashboard.py
from dataclasses import replace

from week_planner.cycle import complete_week, ensure_current_week_exists, toggle_current_week_tactic
from week_planner.dashboard import (
    get_average_score, get_cycle_stats, get_pending_count, get_weekly_scores,
)
from week_planner.models import AppState, WeekData


def test_weekly_scores_padded_to_twelve():
    scores = get_weekly_scores(AppState())
    assert len(scores) == 12
    assert scores[0] == {"week": 1, "label": "W1", "score": 0}
    assert scores[-1]["label"] == "W12"


def test_weekly_scores_use_recorded_weeks():
    weeks = (
        WeekData(week_number=1, start_date="", execution_score=80, is_reviewed=True),
        WeekData(week_number=2, start_date="", execution_score=40, is_reviewed=True),
    )
    scores = get_weekly_scores(AppState(weeks=weeks))
    assert [s["score"] for s in scores[:3]] == [80, 40, 0]


def test_average_score_zero_with_no_weeks():
    assert get_average_score(AppState()) == 0


def test_average_score_rounds_half_up():
    weeks = (
        WeekData(week_number=1, start_date="", execution_score=50),
        WeekData(week_number=2, start_date="", execution_score=51),
    )
    assert get_average_score(AppState(weeks=weeks)) == 51


def test_pending_count(state):
    state = toggle_current_week_tactic(ensure_current_week_exists(state), "t1")
    assert get_pending_count(state) == 2


def test_pending_count_without_week():
    assert get_pending_count(AppState()) == 0


def test_get_cycle_stats(state):
    state = ensure_current_week_exists(state)
    state = toggle_current_week_tactic(state, "t1")
    state = complete_week(state, "")
    stats = get_cycle_stats(state)
    assert stats["current_week"] == 2
    assert stats["goals"] == 2
    assert stats["tactics"] == 3
    assert stats["weeks_reviewed"] == 1
    assert stats["average_score"] == 17  # (33 + 0) / 2
    assert stats["pending_this_week"] == 3
    assert stats["cycle_complete"] is False


def test_get_cycle_stats_complete(state):
    state = ensure_current_week_exists(replace(state, current_week=12))
    state = complete_week(state, "")
    assert get_cycle_stats(state)["cycle_complete"] is True
