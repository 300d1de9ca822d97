"""Weekly execution scoring."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Sequence

from week_planner.models import Tactic, TaskStatus

TARGET_SCORE = 85


def count_completed(tactics: Iterable[Tactic]) -> int:
    return sum(1 for t in tactics if t.status == TaskStatus.COMPLETED)


def compute_score(tactics_snapshot: Sequence[Tactic]) -> int:
    """Percentage of snapshot tactics marked completed, rounded half-up.

    Returns 0 for an empty snapshot.
    """
    total = len(tactics_snapshot)
    if total == 0:
        return 0
    completed = count_completed(tactics_snapshot)
    pct = Decimal(completed * 100) / Decimal(total)
    return int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def score_label(score: float) -> str:
    if score >= TARGET_SCORE:
        return "ON TRACK"
    return "BELOW TARGET"


def score_color(score: float) -> str:
    if score >= TARGET_SCORE:
        return "green"
    elif score >= 65:
        return "yellow"
    elif score >= 50:
        return "dark_orange"
    return "red"
