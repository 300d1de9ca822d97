"""The application's single state container."""
import logging

from week_planner.mutations import MutationResult
from week_planner.models import AppState
from week_planner.storage import load_state, save_state

logger = logging.getLogger(__name__)


class PlannerController:
    """Holds the current state and persists every transition applied to it.

    Transitions are plain functions taking the state as first argument and
    returning either a new ``AppState`` or a ``MutationResult``.
    """

    def __init__(self, db_path: str, state: AppState | None = None):
        self.db_path = db_path
        self.state = state if state is not None else load_state(db_path)

    def apply(self, transition, *args, **kwargs):
        result = transition(self.state, *args, **kwargs)
        if isinstance(result, MutationResult):
            if not result.found:
                logger.info("%s: target not found, state unchanged", transition.__name__)
                return result
            new_state = result.state
        else:
            new_state = result
        if new_state is not self.state:
            self.state = new_state
            save_state(self.db_path, new_state)
        return result
