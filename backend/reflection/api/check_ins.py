from fastapi import APIRouter, Depends, Path, Query

from reflection.api.deps import Repositories, get_current_user_id, get_repos, owned_goal
from reflection.core.constants import MAX_YEAR, MIN_YEAR, RATING_LABELS, REFLECTION_PROMPT
from reflection.core.errors import NotFoundError
from reflection.core.progress import pending_first, week_completion_percent
from reflection.core.week_utils import format_week_range, weeks_in_year
from reflection.repositories.check_ins import validate_week
from reflection.schemas.check_in import CheckInRead, CheckInUpsert, WeekCheckIns


router = APIRouter(prefix="/check-ins", tags=["check-ins"])


@router.get("/", response_model=list[CheckInRead])
def list_all_check_ins(
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repos),
):
    """Every check-in across all of the caller's goals (feeds the year view)."""
    return repos.check_ins.get_all_check_ins_for_user(user_id)


@router.get("/week", response_model=WeekCheckIns)
def get_week(
    year: int = Query(..., ge=MIN_YEAR, le=MAX_YEAR),
    week: int = Query(..., ge=1),
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repos),
):
    validate_week(week, year)
    goals = repos.goals.get_goals_for_year(user_id, year)
    check_ins = repos.check_ins.get_check_ins_for_week(user_id, week, year)
    return WeekCheckIns.model_validate(
        {
            "year": year,
            "week_number": week,
            "weeks_in_year": weeks_in_year(year),
            "week_range": format_week_range(week, year),
            "completion_percent": week_completion_percent(goals, check_ins, week, year),
            "reflection_prompt": REFLECTION_PROMPT,
            "rating_labels": RATING_LABELS,
            "goals": pending_first(goals, check_ins, week, year),
            "check_ins": check_ins,
        },
        from_attributes=True,
    )


@router.get("/{goal_id}/{year}/{week}", response_model=CheckInRead)
def get_check_in(
    goal_id: str,
    year: int = Path(..., ge=MIN_YEAR, le=MAX_YEAR),
    week: int = Path(..., ge=1),
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repos),
):
    owned_goal(goal_id, user_id, repos)
    row = repos.check_ins.get_check_in(goal_id, week, year)
    if not row:
        raise NotFoundError("Check-in not found")
    return row


@router.put("/{goal_id}/{year}/{week}", response_model=CheckInRead)
def upsert_check_in(
    goal_id: str,
    payload: CheckInUpsert,
    year: int = Path(..., ge=MIN_YEAR, le=MAX_YEAR),
    week: int = Path(..., ge=1),
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repos),
):
    owned_goal(goal_id, user_id, repos)
    return repos.check_ins.save_or_update_check_in(
        goal_id, week, year, payload.reflection, payload.progress_rating
    )


@router.delete("/{goal_id}/{year}/{week}")
def clear_check_in(
    goal_id: str,
    year: int = Path(..., ge=MIN_YEAR, le=MAX_YEAR),
    week: int = Path(..., ge=1),
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repos),
):
    owned_goal(goal_id, user_id, repos)
    removed = repos.check_ins.delete_check_in(goal_id, week, year)
    return {"ok": True, "deleted": removed}
