import pytest

from week_planner.models import AppState, Goal, Tactic


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_planner.db")
    return db_path


def make_goal(goal_id: str, *tactic_ids: str, title: str = "") -> Goal:
    tactics = tuple(
        Tactic(id=tid, title=f"Tactic {tid}", linked_goal_id=goal_id) for tid in tactic_ids
    )
    return Goal(id=goal_id, title=title or f"Goal {goal_id}", tactics=tactics)


@pytest.fixture
def goals():
    return (make_goal("g1", "t1", "t2"), make_goal("g2", "t3"))


@pytest.fixture
def state(goals):
    return AppState(goals=goals, start_date="2026-01-05T00:00:00")
