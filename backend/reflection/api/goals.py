from fastapi import APIRouter, Depends, Query

from reflection.api.deps import Repositories, get_current_user_id, get_repos, owned_goal
from reflection.core.constants import MAX_YEAR, MIN_YEAR
from reflection.core.errors import ValidationError
from reflection.schemas.goal import GoalCreate, GoalRead, GoalReorder, GoalUpdate


router = APIRouter(prefix="/goals", tags=["goals"])


@router.post("/", response_model=GoalRead)
def create_goal(
    payload: GoalCreate,
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repos),
):
    return repos.goals.add_goal(
        user_id, title=payload.title, year=payload.year, description=payload.description
    )


@router.get("/", response_model=list[GoalRead])
def list_goals(
    year: int = Query(..., ge=MIN_YEAR, le=MAX_YEAR),
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repos),
):
    return repos.goals.get_goals_for_year(user_id, year)


@router.put("/order", response_model=list[GoalRead])
def reorder_goals(
    payload: GoalReorder,
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repos),
):
    """Body lists every goal id of one year in the new order."""
    if not payload.goal_ids:
        return []
    # Ownership first; the repository checks the list covers the whole year
    goals = repos.goals.get_goals_by_ids(payload.goal_ids)
    if len(goals) != len(set(payload.goal_ids)) or any(g.user_id != user_id for g in goals):
        raise ValidationError("Reorder list contains goals you do not own")
    return repos.goals.reorder_goals(payload.goal_ids)


@router.patch("/{goal_id}", response_model=GoalRead)
def update_goal(
    goal_id: str,
    payload: GoalUpdate,
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repos),
):
    owned_goal(goal_id, user_id, repos)
    update_data = payload.model_dump(exclude_unset=True)
    return repos.goals.update_goal(
        goal_id,
        title=update_data.get("title"),
        description=update_data.get("description"),
    )


@router.delete("/{goal_id}")
def delete_goal(
    goal_id: str,
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repos),
):
    owned_goal(goal_id, user_id, repos)
    removed = repos.goals.delete_goal(goal_id)
    return {"ok": True, "deleted_check_ins": removed}
