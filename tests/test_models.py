"""Tests for data model classes."""
import dataclasses

import pytest

from week_planner.models import AppState, Goal, Tactic, TaskStatus, WeekData


def test_tactic_defaults():
    t = Tactic(id="t1", title="Write outline", linked_goal_id="g1")
    assert t.duration_minutes == 60
    assert t.status == TaskStatus.PENDING
    assert t.description is None


def test_goal_defaults():
    g = Goal(id="g1")
    assert g.title == ""
    assert g.description == ""
    assert g.tactics == ()
    assert g.progress == 0


def test_week_data_defaults():
    w = WeekData(week_number=1, start_date="2026-01-05T00:00:00")
    assert w.tactics_snapshot == ()
    assert w.execution_score == 0
    assert w.reflection == ""
    assert w.is_reviewed is False


def test_app_state_defaults():
    s = AppState()
    assert s.vision == ""
    assert s.current_week == 1
    assert s.weeks == ()
    assert s.is_calendar_connected is False
    assert s.connected_email is None
    assert s.start_date


def test_entities_are_frozen():
    t = Tactic(id="t1", title="x", linked_goal_id="g1")
    with pytest.raises(dataclasses.FrozenInstanceError):
        t.status = TaskStatus.COMPLETED


def test_tactic_to_dict_uses_storage_keys():
    t = Tactic(id="t1", title="Call", linked_goal_id="g1", duration_minutes=30, status=TaskStatus.COMPLETED)
    assert t.to_dict() == {
        "id": "t1",
        "title": "Call",
        "durationMinutes": 30,
        "status": "COMPLETED",
        "linkedGoalId": "g1",
    }


def test_week_to_dict_keys():
    w = WeekData(week_number=3, start_date="2026-01-19T00:00:00", execution_score=50, is_reviewed=True)
    data = w.to_dict()
    assert data["weekNumber"] == 3
    assert data["tacticsSnapshot"] == []
    assert data["executionScore"] == 50
    assert data["isReviewed"] is True


def test_state_from_dict_full():
    data = {
        "vision": "Run my own studio",
        "goals": [{
            "id": "g1", "title": "Launch site", "description": "", "progress": 0,
            "tactics": [{"id": "t1", "title": "Draft copy", "durationMinutes": 90,
                         "status": "PENDING", "linkedGoalId": "g1"}],
        }],
        "currentWeek": 2,
        "weeks": [{"weekNumber": 1, "startDate": "2026-01-05T00:00:00", "tacticsSnapshot": [],
                   "executionScore": 80, "reflection": "ok", "isReviewed": True}],
        "isCalendarConnected": True,
        "connectedEmail": "me@example.com",
        "startDate": "2026-01-05T00:00:00",
        "googleClientId": "cid",
    }
    s = AppState.from_dict(data)
    assert s.vision == "Run my own studio"
    assert s.goals[0].tactics[0].duration_minutes == 90
    assert s.current_week == 2
    assert s.weeks[0].execution_score == 80
    assert s.connected_email == "me@example.com"
    assert s.google_client_id == "cid"
    assert s.google_api_key is None
    assert s.to_dict()["goals"] == data["goals"]


def test_state_from_dict_tolerates_missing_keys():
    s = AppState.from_dict({})
    assert s.goals == ()
    assert s.current_week == 1


def test_state_from_dict_clamps_current_week():
    s = AppState.from_dict({"currentWeek": 13})
    assert s.current_week == 12


@pytest.mark.parametrize("stored", [0, -3])
def test_state_from_dict_clamps_current_week_from_below(stored):
    assert AppState.from_dict({"currentWeek": stored}).current_week == 1


@pytest.mark.parametrize("data", [None, [], "state", 7])
def test_state_from_dict_rejects_non_object(data):
    with pytest.raises(TypeError):
        AppState.from_dict(data)
