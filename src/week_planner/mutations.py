"""Goal and tactic edits, plus the small state updates made from settings screens.

Edits addressed by id return a ``MutationResult``. When the id is unknown the
original state comes back with ``found=False`` so callers holding a stale id
can decide whether to report it.
"""
from dataclasses import dataclass, replace
from typing import Iterable, Optional

from week_planner.models import DEFAULT_TACTIC_MINUTES, AppState, Goal, Tactic, TaskStatus
from week_planner.storage import generate_id


@dataclass(frozen=True)
class MutationResult:
    state: AppState
    found: bool = True
    item_id: Optional[str] = None


def _not_found(state: AppState) -> MutationResult:
    return MutationResult(state=state, found=False)


def _find_goal(state: AppState, goal_id: str) -> Optional[Goal]:
    return next((g for g in state.goals if g.id == goal_id), None)


def _with_goal(state: AppState, goal: Goal) -> AppState:
    return replace(state, goals=tuple(goal if g.id == goal.id else g for g in state.goals))


def add_goal(state: AppState, title: str = "", description: str = "") -> MutationResult:
    goal = Goal(id=generate_id(), title=title, description=description, tactics=(), progress=0)
    return MutationResult(state=replace(state, goals=state.goals + (goal,)), item_id=goal.id)


def update_goal(state: AppState, goal_id: str, **fields) -> MutationResult:
    goal = _find_goal(state, goal_id)
    if goal is None:
        return _not_found(state)
    return MutationResult(state=_with_goal(state, replace(goal, **fields)), item_id=goal_id)


def delete_goal(state: AppState, goal_id: str) -> MutationResult:
    if _find_goal(state, goal_id) is None:
        return _not_found(state)
    goals = tuple(g for g in state.goals if g.id != goal_id)
    return MutationResult(state=replace(state, goals=goals), item_id=goal_id)


def add_tactic(
    state: AppState,
    goal_id: str,
    title: str = "",
    duration_minutes: int = DEFAULT_TACTIC_MINUTES,
) -> MutationResult:
    goal = _find_goal(state, goal_id)
    if goal is None:
        return _not_found(state)
    tactic = Tactic(
        id=generate_id(),
        title=title,
        linked_goal_id=goal_id,
        duration_minutes=duration_minutes,
        status=TaskStatus.PENDING,
    )
    goal = replace(goal, tactics=goal.tactics + (tactic,))
    return MutationResult(state=_with_goal(state, goal), item_id=tactic.id)


def update_tactic(state: AppState, goal_id: str, tactic_id: str, **fields) -> MutationResult:
    goal = _find_goal(state, goal_id)
    if goal is None or not any(t.id == tactic_id for t in goal.tactics):
        return _not_found(state)
    tactics = tuple(replace(t, **fields) if t.id == tactic_id else t for t in goal.tactics)
    return MutationResult(state=_with_goal(state, replace(goal, tactics=tactics)), item_id=tactic_id)


def delete_tactic(state: AppState, goal_id: str, tactic_id: str) -> MutationResult:
    goal = _find_goal(state, goal_id)
    if goal is None or not any(t.id == tactic_id for t in goal.tactics):
        return _not_found(state)
    tactics = tuple(t for t in goal.tactics if t.id != tactic_id)
    return MutationResult(state=_with_goal(state, replace(goal, tactics=tactics)), item_id=tactic_id)


def add_suggested_goals(state: AppState, proposals: Iterable) -> MutationResult:
    """Append one goal per assistant proposal (anything with title/description)."""
    new_goals = tuple(
        Goal(id=generate_id(), title=p.title, description=p.description)
        for p in proposals
    )
    return MutationResult(state=replace(state, goals=state.goals + new_goals))


def add_suggested_tactics(state: AppState, goal_id: str, proposals: Iterable) -> MutationResult:
    goal = _find_goal(state, goal_id)
    if goal is None:
        return _not_found(state)
    new_tactics = tuple(
        Tactic(
            id=generate_id(),
            title=p.title,
            linked_goal_id=goal_id,
            duration_minutes=p.duration_minutes,
        )
        for p in proposals
    )
    goal = replace(goal, tactics=goal.tactics + new_tactics)
    return MutationResult(state=_with_goal(state, goal), item_id=goal_id)


def set_vision(state: AppState, vision: str) -> MutationResult:
    return MutationResult(state=replace(state, vision=vision))


def connect_calendar(state: AppState, email: str) -> MutationResult:
    return MutationResult(state=replace(state, is_calendar_connected=True, connected_email=email))


def disconnect_calendar(state: AppState) -> MutationResult:
    return MutationResult(state=replace(state, is_calendar_connected=False, connected_email=None))


def set_calendar_credentials(state: AppState, client_id: str, api_key: str) -> MutationResult:
    # New keys require a fresh sign-in.
    return MutationResult(state=replace(
        state,
        google_client_id=client_id.strip(),
        google_api_key=api_key.strip(),
        is_calendar_connected=False,
        connected_email=None,
    ))
