import pytest

from week_planner.controller import PlannerController
from week_planner.cycle import complete_week, ensure_current_week_exists
from week_planner.db import init_db
from week_planner.exceptions import WeekNotFoundError
from week_planner.mutations import add_goal, add_tactic, update_goal
from week_planner.storage import load_state


def test_controller_starts_from_stored_state(tmp_db, state):
    init_db(tmp_db)
    PlannerController(tmp_db, state).apply(add_goal, title="Third")
    ctl = PlannerController(tmp_db)
    assert [g.title for g in ctl.state.goals][-1] == "Third"


def test_apply_persists_mutation(tmp_db):
    init_db(tmp_db)
    ctl = PlannerController(tmp_db)
    result = ctl.apply(add_goal, title="Write book")
    assert result.found
    goal_id = result.item_id
    ctl.apply(add_tactic, goal_id, title="Outline", duration_minutes=45)
    stored = load_state(tmp_db)
    assert stored.goals[0].title == "Write book"
    assert stored.goals[0].tactics[0].duration_minutes == 45


def test_apply_plain_transition(tmp_db, state):
    init_db(tmp_db)
    ctl = PlannerController(tmp_db, state)
    new_state = ctl.apply(ensure_current_week_exists)
    assert ctl.state is new_state
    assert len(load_state(tmp_db).weeks) == 1


def test_apply_not_found_keeps_state(tmp_db, state):
    init_db(tmp_db)
    ctl = PlannerController(tmp_db, state)
    result = ctl.apply(update_goal, "missing", title="x")
    assert result.found is False
    assert ctl.state is state
    assert load_state(tmp_db).goals == ()


def test_apply_error_keeps_state(tmp_db, state):
    init_db(tmp_db)
    ctl = PlannerController(tmp_db, state)
    with pytest.raises(WeekNotFoundError):
        ctl.apply(complete_week, "reflection")
    assert ctl.state is state
