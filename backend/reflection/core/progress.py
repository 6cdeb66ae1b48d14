"""Weekly completion and year-overview rules.

Work on anything shaped like a goal (``id``, ``order``) or a check-in
(``goal_id``, ``week_number``, ``year``, ``reflection``, ``progress_rating``),
so ORM rows, API schemas and local-storage records all fit.
"""
import math
from typing import Iterable, Optional, Sequence

from reflection.core.constants import RATING_WEIGHT, REFLECTION_WEIGHT
from reflection.core.week_utils import month_spans, weeks_in_year


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a UI would: .5 always goes up (round() would go to even)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def index_by_goal_week(check_ins: Iterable, year: int) -> dict:
    """Map (goal_id, week_number) -> check-in for the given year."""
    return {
        (c.goal_id, c.week_number): c
        for c in check_ins
        if c.year == year
    }


def goal_week_completion(check_in) -> int:
    """0..100 for one goal in one week: rating 20, reflection 80."""
    if check_in is None:
        return 0
    score = 0
    if check_in.progress_rating is not None:
        score += RATING_WEIGHT
    if (check_in.reflection or "").strip():
        score += REFLECTION_WEIGHT
    return score


def week_completion_percent(goals: Sequence, check_ins: Iterable, week_number: int, year: int) -> int:
    """Mean per-goal completion over all goals, as a whole percent."""
    if not goals:
        return 0
    by_key = index_by_goal_week(check_ins, year)
    total = sum(goal_week_completion(by_key.get((g.id, week_number))) for g in goals)
    return int(round_half_up(total / len(goals)))


def pending_first(goals: Sequence, check_ins: Iterable, week_number: int, year: int) -> list:
    """Goals with no check-in this week first, then the completed ones.

    Each group keeps display order.
    """
    by_key = index_by_goal_week(check_ins, year)
    ordered = sorted(goals, key=lambda g: g.order)
    pending = [g for g in ordered if (g.id, week_number) not in by_key]
    done = [g for g in ordered if (g.id, week_number) in by_key]
    return pending + done


def average_rating(goal_id: str, check_ins: Iterable, year: int) -> Optional[float]:
    """Mean of the goal's ratings for the year to one decimal, None if unrated."""
    ratings = [
        c.progress_rating
        for c in check_ins
        if c.goal_id == goal_id and c.year == year and c.progress_rating is not None
    ]
    if not ratings:
        return None
    return round_half_up(sum(ratings) / len(ratings), 1)


def year_overview(goals: Sequence, check_ins: Sequence, year: int) -> dict:
    total_weeks = weeks_in_year(year)
    by_key = index_by_goal_week(check_ins, year)
    rows = []
    for goal in sorted((g for g in goals if g.year == year), key=lambda g: g.order):
        cells = []
        for week in range(1, total_weeks + 1):
            ci = by_key.get((goal.id, week))
            cells.append(
                {
                    "week_number": week,
                    "checked_in": ci is not None,
                    "has_reflection": bool(ci is not None and (ci.reflection or "").strip()),
                    "progress_rating": ci.progress_rating if ci is not None else None,
                }
            )
        rows.append(
            {
                "goal": goal,
                "average_rating": average_rating(goal.id, check_ins, year),
                "weeks": cells,
            }
        )
    return {
        "year": year,
        "weeks_in_year": total_weeks,
        "month_spans": month_spans(year, total_weeks),
        "goals": rows,
    }
