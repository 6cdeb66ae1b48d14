"""Single-user routes over the local JSON blob.

Mounted under /local only when the app runs in local mode. There is no
caller identity and no sharing: whoever can reach the app owns the data.
"""
from fastapi import APIRouter, Depends, Path, Query

from reflection.api.deps import get_local_storage
from reflection.core.constants import MAX_YEAR, MIN_YEAR
from reflection.core.errors import NotFoundError
from reflection.core.progress import pending_first, week_completion_percent
from reflection.local_storage import CurrentYear, LocalCheckIn, LocalGoal, LocalStorage, LocalWeek
from reflection.repositories.check_ins import validate_week
from reflection.schemas.check_in import CheckInUpsert
from reflection.schemas.goal import GoalCreate, GoalReorder, GoalUpdate


router = APIRouter(prefix="/local", tags=["local"])


@router.get("/goals", response_model=list[LocalGoal])
def list_goals(
    year: int = Query(..., ge=MIN_YEAR, le=MAX_YEAR),
    storage: LocalStorage = Depends(get_local_storage),
):
    return storage.get_goals_for_year(year)


@router.post("/goals", response_model=LocalGoal)
def create_goal(payload: GoalCreate, storage: LocalStorage = Depends(get_local_storage)):
    return storage.add_goal(payload.title, payload.year, payload.description)


@router.put("/goals/order", response_model=list[LocalGoal])
def reorder_goals(payload: GoalReorder, storage: LocalStorage = Depends(get_local_storage)):
    return storage.reorder_goals(payload.goal_ids)


@router.patch("/goals/{goal_id}", response_model=LocalGoal)
def update_goal(goal_id: str, payload: GoalUpdate, storage: LocalStorage = Depends(get_local_storage)):
    update_data = payload.model_dump(exclude_unset=True)
    return storage.update_goal(
        goal_id,
        title=update_data.get("title"),
        description=update_data.get("description"),
    )


@router.delete("/goals/{goal_id}")
def delete_goal(goal_id: str, storage: LocalStorage = Depends(get_local_storage)):
    storage.delete_goal(goal_id)
    return {"ok": True}


@router.get("/check-ins/week", response_model=LocalWeek)
def get_week(
    year: int = Query(..., ge=MIN_YEAR, le=MAX_YEAR),
    week: int = Query(..., ge=1),
    storage: LocalStorage = Depends(get_local_storage),
):
    validate_week(week, year)
    goals = storage.get_goals_for_year(year)
    check_ins = storage.get_check_ins_for_week(week, year)
    return LocalWeek(
        year=year,
        week_number=week,
        completion_percent=week_completion_percent(goals, check_ins, week, year),
        goals=pending_first(goals, check_ins, week, year),
        check_ins=check_ins,
    )


@router.get("/check-ins/{goal_id}/{year}/{week}", response_model=LocalCheckIn)
def get_check_in(
    goal_id: str,
    year: int = Path(..., ge=MIN_YEAR, le=MAX_YEAR),
    week: int = Path(..., ge=1),
    storage: LocalStorage = Depends(get_local_storage),
):
    row = storage.get_check_in(goal_id, week, year)
    if row is None:
        raise NotFoundError("Check-in not found")
    return row


@router.put("/check-ins/{goal_id}/{year}/{week}", response_model=LocalCheckIn)
def upsert_check_in(
    goal_id: str,
    payload: CheckInUpsert,
    year: int = Path(..., ge=MIN_YEAR, le=MAX_YEAR),
    week: int = Path(..., ge=1),
    storage: LocalStorage = Depends(get_local_storage),
):
    if not any(g.id == goal_id for g in storage.load_data().goals):
        raise NotFoundError("Goal not found")
    return storage.save_or_update_check_in(goal_id, week, year, payload.reflection, payload.progress_rating)


@router.delete("/check-ins/{goal_id}/{year}/{week}")
def clear_check_in(
    goal_id: str,
    year: int = Path(..., ge=MIN_YEAR, le=MAX_YEAR),
    week: int = Path(..., ge=1),
    storage: LocalStorage = Depends(get_local_storage),
):
    storage.delete_check_in(goal_id, week, year)
    return {"ok": True}


@router.get("/current-year", response_model=CurrentYear)
def get_current_year(storage: LocalStorage = Depends(get_local_storage)):
    return CurrentYear(current_year=storage.get_current_year())


@router.put("/current-year", response_model=CurrentYear)
def set_current_year(payload: CurrentYear, storage: LocalStorage = Depends(get_local_storage)):
    storage.set_current_year(payload.current_year)
    return payload
