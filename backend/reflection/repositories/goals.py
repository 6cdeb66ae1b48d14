import logging
from typing import Optional

from sqlalchemy import func

from reflection.core.constants import DEFAULT_IN_QUERY_BATCH_SIZE, MAX_YEAR, MIN_YEAR
from reflection.core.errors import NotFoundError, ValidationError
from reflection.db import Store
from reflection.models.check_in import CheckIn
from reflection.models.goal import Goal
from reflection.repositories.batching import fetch_in_batches

logger = logging.getLogger(__name__)


def validate_year(year: int) -> None:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}")


def _clean_title(title: Optional[str]) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationError("Goal title must not be empty")
    return cleaned


class GoalRepository:
    """Goals scoped by owning user and year.

    No ownership checks happen here; callers decide who may touch a goal.
    """

    def __init__(self, store: Store, batch_size: int = DEFAULT_IN_QUERY_BATCH_SIZE):
        self.store = store
        self.batch_size = batch_size

    def add_goal(self, owner_id: str, title: str, year: int, description: str = "") -> Goal:
        """Create a goal at the end of the owner's list for `year`.

        Order is one past the current highest order in that scope (never
        below 1), so the first goal of a year gets order 1.
        """
        clean = _clean_title(title)
        validate_year(year)
        with self.store.session() as db:
            max_order = (
                db.query(func.max(Goal.order))
                .filter(Goal.user_id == owner_id)
                .filter(Goal.year == year)
                .scalar()
            )
            goal = Goal(
                user_id=owner_id,
                title=clean,
                description=description or "",
                year=year,
                order=max(max_order or 0, 0) + 1,
            )
            db.add(goal)
        logger.info("Added goal %s for user %s (year %s)", goal.id, owner_id, year)
        return goal

    def get_goal(self, goal_id: str) -> Goal:
        with self.store.session() as db:
            goal = db.get(Goal, goal_id)
            if goal is None:
                raise NotFoundError("Goal not found")
            return goal

    def update_goal(self, goal_id: str, title: Optional[str] = None, description: Optional[str] = None) -> Goal:
        """Partial update; fields left as None are untouched."""
        with self.store.session() as db:
            goal = db.get(Goal, goal_id)
            if goal is None:
                raise NotFoundError("Goal not found")
            if title is not None:
                goal.title = _clean_title(title)
            if description is not None:
                goal.description = description
        return goal

    def delete_goal(self, goal_id: str) -> int:
        """Delete the goal and all of its check-ins in one transaction.

        Returns how many check-ins went with it.
        """
        with self.store.session() as db:
            goal = db.get(Goal, goal_id)
            if goal is None:
                raise NotFoundError("Goal not found")
            removed = (
                db.query(CheckIn)
                .filter(CheckIn.goal_id == goal_id)
                .delete(synchronize_session=False)
            )
            db.delete(goal)
        logger.info("Deleted goal %s and %d check-ins", goal_id, removed)
        return removed

    def get_goals_for_year(self, owner_id: str, year: int) -> list[Goal]:
        with self.store.session() as db:
            return (
                db.query(Goal)
                .filter(Goal.user_id == owner_id)
                .filter(Goal.year == year)
                .order_by(Goal.order.asc(), Goal.created_at.asc())
                .all()
            )

    def get_goal_ids_for_user(self, owner_id: str) -> list[str]:
        """Ids of every goal the user owns, across all years."""
        with self.store.session() as db:
            rows = db.query(Goal.id).filter(Goal.user_id == owner_id).all()
        return [r[0] for r in rows]

    def get_goals_by_ids(self, goal_ids: list[str]) -> list[Goal]:
        with self.store.session() as db:
            return fetch_in_batches(db, Goal, Goal.id, goal_ids, self.batch_size)

    def reorder_goals(self, ordered_ids: list[str]) -> list[Goal]:
        """Set each goal's order to its 0-based position in `ordered_ids`.

        The list must name every goal of exactly one (owner, year) scope,
        once each. Anything else is rejected before a single order changes.
        """
        if not ordered_ids:
            return []
        if len(set(ordered_ids)) != len(ordered_ids):
            raise ValidationError("Reorder list contains duplicate goal ids")

        with self.store.session() as db:
            goals = fetch_in_batches(db, Goal, Goal.id, ordered_ids, self.batch_size)
            by_id = {g.id: g for g in goals}
            missing = [gid for gid in ordered_ids if gid not in by_id]
            if missing:
                raise ValidationError(f"Unknown goal ids in reorder list: {', '.join(missing)}")

            scopes = {(g.user_id, g.year) for g in goals}
            if len(scopes) != 1:
                raise ValidationError("Reorder list mixes goals from different owners or years")
            owner_id, year = scopes.pop()

            scope_ids = {
                r[0]
                for r in db.query(Goal.id)
                .filter(Goal.user_id == owner_id)
                .filter(Goal.year == year)
                .all()
            }
            if scope_ids != set(ordered_ids):
                raise ValidationError(
                    f"Reorder list must contain all {len(scope_ids)} goals for {year}, got {len(ordered_ids)}"
                )

            for index, gid in enumerate(ordered_ids):
                by_id[gid].order = index

        logger.info("Reordered %d goals for user %s (year %s)", len(ordered_ids), owner_id, year)
        return [by_id[gid] for gid in ordered_ids]
