"""Local-only storage: the whole dataset in one JSON blob.

Single user, no sharing. The file is named after the storage key and holds
``{"goals": [...], "checkIns": [...], "currentYear": 2025}`` with camelCase
field names. Every operation loads the blob, changes it and writes it back.
"""
import logging
import os
import uuid
from datetime import date, datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from reflection.core.constants import LOCAL_STORAGE_KEY, MAX_YEAR, MIN_YEAR
from reflection.core.errors import NotFoundError, ValidationError
from reflection.repositories.check_ins import validate_rating, validate_week
from reflection.repositories.goals import validate_year

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LocalGoal(_Record):
    id: str
    title: str
    description: str = ""
    created_at: str
    year: int
    order: int


class LocalCheckIn(_Record):
    id: str
    goal_id: str
    week_number: int
    year: int
    reflection: str = ""
    progress_rating: Optional[int] = None
    created_at: str


class LocalWeek(_Record):
    """One week of the local dataset, goals still missing a check-in first."""

    year: int
    week_number: int
    completion_percent: int
    goals: list[LocalGoal]
    check_ins: list[LocalCheckIn]


class CurrentYear(_Record):
    current_year: int = Field(ge=MIN_YEAR, le=MAX_YEAR)


class LocalData(_Record):
    goals: list[LocalGoal] = Field(default_factory=list)
    check_ins: list[LocalCheckIn] = Field(default_factory=list)
    current_year: int = Field(default_factory=lambda: date.today().year)

    @model_validator(mode="before")
    @classmethod
    def _assign_missing_order(cls, data):
        if isinstance(data, dict):
            # A null section falls back to its default instead of failing the whole blob
            data = {k: v for k, v in data.items() if v is not None}
        # Older blobs have no order field: position in the list becomes the order
        if isinstance(data, dict) and isinstance(data.get("goals"), list):
            goals = []
            for index, g in enumerate(data["goals"]):
                if isinstance(g, dict) and g.get("order") is None:
                    g = {**g, "order": index}
                goals.append(g)
            data = {**data, "goals": goals}
        return data


class LocalStorage:
    def __init__(self, directory: str):
        self.path = os.path.join(directory, f"{LOCAL_STORAGE_KEY}.json")

    def load_data(self) -> LocalData:
        """Read the blob. Missing or unreadable data yields an empty dataset."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            return LocalData()
        except OSError:
            logger.warning("Could not read %s, starting empty", self.path, exc_info=True)
            return LocalData()
        try:
            return LocalData.model_validate_json(raw)
        except ValueError:
            logger.warning("Corrupt local data in %s, starting empty", self.path)
            return LocalData()

    def save_data(self, data: LocalData) -> None:
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(data.model_dump_json(by_alias=True))

    # ----- goals -----

    def add_goal(self, title: str, year: int, description: str = "") -> LocalGoal:
        clean = (title or "").strip()
        if not clean:
            raise ValidationError("Goal title must not be empty")
        validate_year(year)
        data = self.load_data()
        max_order = max((g.order for g in data.goals if g.year == year), default=0)
        goal = LocalGoal(
            id=uuid.uuid4().hex,
            title=clean,
            description=description or "",
            created_at=_now_iso(),
            year=year,
            order=max(max_order, 0) + 1,
        )
        data.goals.append(goal)
        self.save_data(data)
        return goal

    def update_goal(self, goal_id: str, title: Optional[str] = None, description: Optional[str] = None) -> LocalGoal:
        data = self.load_data()
        goal = next((g for g in data.goals if g.id == goal_id), None)
        if goal is None:
            raise NotFoundError("Goal not found")
        if title is not None:
            clean = title.strip()
            if not clean:
                raise ValidationError("Goal title must not be empty")
            goal.title = clean
        if description is not None:
            goal.description = description
        self.save_data(data)
        return goal

    def delete_goal(self, goal_id: str) -> None:
        """Drop the goal and its check-ins in one write."""
        data = self.load_data()
        data.goals = [g for g in data.goals if g.id != goal_id]
        data.check_ins = [c for c in data.check_ins if c.goal_id != goal_id]
        self.save_data(data)

    def get_goals_for_year(self, year: int) -> list[LocalGoal]:
        return sorted((g for g in self.load_data().goals if g.year == year), key=lambda g: g.order)

    def reorder_goals(self, ordered_ids: list[str]) -> list[LocalGoal]:
        if not ordered_ids:
            return []
        if len(set(ordered_ids)) != len(ordered_ids):
            raise ValidationError("Reorder list contains duplicate goal ids")
        data = self.load_data()
        by_id = {g.id: g for g in data.goals}
        missing = [gid for gid in ordered_ids if gid not in by_id]
        if missing:
            raise ValidationError(f"Unknown goal ids in reorder list: {', '.join(missing)}")
        years = {by_id[gid].year for gid in ordered_ids}
        if len(years) != 1:
            raise ValidationError("Reorder list mixes goals from different years")
        year = years.pop()
        scope_ids = {g.id for g in data.goals if g.year == year}
        if scope_ids != set(ordered_ids):
            raise ValidationError(f"Reorder list must contain all {len(scope_ids)} goals for {year}")
        for index, gid in enumerate(ordered_ids):
            by_id[gid].order = index
        self.save_data(data)
        return [by_id[gid] for gid in ordered_ids]

    # ----- check-ins -----

    @staticmethod
    def _find(data: LocalData, goal_id: str, week_number: int, year: int) -> Optional[LocalCheckIn]:
        return next(
            (
                c for c in data.check_ins
                if c.goal_id == goal_id and c.week_number == week_number and c.year == year
            ),
            None,
        )

    def save_or_update_check_in(
        self,
        goal_id: str,
        week_number: int,
        year: int,
        reflection: str = "",
        progress_rating: Optional[int] = None,
    ) -> LocalCheckIn:
        validate_week(week_number, year)
        validate_rating(progress_rating)
        data = self.load_data()
        existing = self._find(data, goal_id, week_number, year)
        if existing is not None:
            existing.reflection = reflection or ""
            existing.progress_rating = progress_rating
            existing.created_at = _now_iso()
            self.save_data(data)
            return existing
        check_in = LocalCheckIn(
            id=uuid.uuid4().hex,
            goal_id=goal_id,
            week_number=week_number,
            year=year,
            reflection=reflection or "",
            progress_rating=progress_rating,
            created_at=_now_iso(),
        )
        data.check_ins.append(check_in)
        self.save_data(data)
        return check_in

    def get_check_in(self, goal_id: str, week_number: int, year: int) -> Optional[LocalCheckIn]:
        return self._find(self.load_data(), goal_id, week_number, year)

    def delete_check_in(self, goal_id: str, week_number: int, year: int) -> None:
        data = self.load_data()
        data.check_ins = [
            c for c in data.check_ins
            if not (c.goal_id == goal_id and c.week_number == week_number and c.year == year)
        ]
        self.save_data(data)

    def get_check_ins_for_week(self, week_number: int, year: int) -> list[LocalCheckIn]:
        return [c for c in self.load_data().check_ins if c.week_number == week_number and c.year == year]

    # ----- settings -----

    def get_current_year(self) -> int:
        return self.load_data().current_year

    def set_current_year(self, year: int) -> None:
        validate_year(year)
        data = self.load_data()
        data.current_year = year
        self.save_data(data)
