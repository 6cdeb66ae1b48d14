import logging
from typing import Optional

from reflection.core.constants import DEFAULT_IN_QUERY_BATCH_SIZE, VALID_RATINGS
from reflection.core.errors import ValidationError
from reflection.core.week_utils import weeks_in_year
from reflection.db import Store
from reflection.models._ids import utcnow
from reflection.models.check_in import CheckIn
from reflection.repositories.batching import fetch_in_batches
from reflection.repositories.goals import GoalRepository, validate_year

logger = logging.getLogger(__name__)


def validate_week(week_number: int, year: int) -> None:
    validate_year(year)
    total = weeks_in_year(year)
    if not 1 <= week_number <= total:
        raise ValidationError(f"Week must be between 1 and {total} for {year}")


def validate_rating(progress_rating: Optional[int]) -> None:
    if progress_rating is not None and progress_rating not in VALID_RATINGS:
        raise ValidationError("Progress rating must be 1-5 or empty")


class CheckInRepository:
    """Weekly check-ins, at most one per (goal, week, year)."""

    def __init__(self, store: Store, goals: GoalRepository, batch_size: int = DEFAULT_IN_QUERY_BATCH_SIZE):
        self.store = store
        self.goals = goals
        self.batch_size = batch_size

    @staticmethod
    def _key_query(db, goal_id: str, week_number: int, year: int):
        return (
            db.query(CheckIn)
            .filter(CheckIn.goal_id == goal_id)
            .filter(CheckIn.week_number == week_number)
            .filter(CheckIn.year == year)
        )

    def save_or_update_check_in(
        self,
        goal_id: str,
        week_number: int,
        year: int,
        reflection: str = "",
        progress_rating: Optional[int] = None,
    ) -> CheckIn:
        """Upsert by key: an existing record keeps its id, its fields are overwritten."""
        validate_week(week_number, year)
        validate_rating(progress_rating)

        with self.store.session() as db:
            row = self._key_query(db, goal_id, week_number, year).first()
            if not row:
                row = CheckIn(goal_id=goal_id, week_number=week_number, year=year)
                db.add(row)
            row.reflection = reflection or ""
            row.progress_rating = progress_rating
            row.created_at = utcnow()
        logger.info("Saved check-in for goal %s week %s/%s", goal_id, week_number, year)
        return row

    def get_check_in(self, goal_id: str, week_number: int, year: int) -> Optional[CheckIn]:
        with self.store.session() as db:
            return self._key_query(db, goal_id, week_number, year).first()

    def delete_check_in(self, goal_id: str, week_number: int, year: int) -> bool:
        """Clear the week's check-in. Returns False when there was nothing to delete."""
        with self.store.session() as db:
            removed = self._key_query(db, goal_id, week_number, year).delete(synchronize_session=False)
        if removed:
            logger.info("Cleared check-in for goal %s week %s/%s", goal_id, week_number, year)
        return bool(removed)

    def get_check_ins_for_week(self, owner_id: str, week_number: int, year: int) -> list[CheckIn]:
        goal_ids = [g.id for g in self.goals.get_goals_for_year(owner_id, year)]
        if not goal_ids:
            return []
        with self.store.session() as db:
            return fetch_in_batches(
                db,
                CheckIn,
                CheckIn.goal_id,
                goal_ids,
                self.batch_size,
                CheckIn.week_number == week_number,
                CheckIn.year == year,
            )

    def get_all_check_ins_for_user(self, owner_id: str) -> list[CheckIn]:
        goal_ids = self.goals.get_goal_ids_for_user(owner_id)
        if not goal_ids:
            return []
        with self.store.session() as db:
            return fetch_in_batches(db, CheckIn, CheckIn.goal_id, goal_ids, self.batch_size)

    def get_check_ins_for_goal(self, goal_id: str) -> list[CheckIn]:
        with self.store.session() as db:
            return (
                db.query(CheckIn)
                .filter(CheckIn.goal_id == goal_id)
                .order_by(CheckIn.year.asc(), CheckIn.week_number.asc())
                .all()
            )
