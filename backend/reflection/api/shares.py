from fastapi import APIRouter, Depends

from reflection.api.deps import Repositories, get_current_user_id, get_repos, owned_goal
from reflection.core.errors import NotFoundError
from reflection.schemas.check_in import CheckInRead
from reflection.schemas.share import SharedGoalRead, ShareCreate, ShareRead, ShareResult


router = APIRouter(prefix="/shares", tags=["shares"])


@router.post("/", response_model=ShareResult)
def share_goal(
    payload: ShareCreate,
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repos),
):
    """Failures come back as ShareResult(success=False), not as HTTP errors."""
    try:
        goal = owned_goal(payload.goal_id, user_id, repos)
    except NotFoundError as e:
        return ShareResult(success=False, error=e.message, error_code=e.code)
    profile = repos.profiles.get_user_profile(user_id)
    owner_name = (profile.display_name or profile.email) if profile else "Unknown"
    return repos.sharing.share_goal(
        user_id, owner_name, payload.recipient_email, goal.id, goal.title
    )


@router.delete("/{share_id}")
def unshare_goal(
    share_id: str,
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repos),
):
    share = repos.sharing.get_share(share_id)
    if share.owner_id != user_id:
        raise NotFoundError("Share not found")
    repos.sharing.unshare_goal(share_id)
    return {"ok": True}


@router.get("/goal/{goal_id}", response_model=list[ShareRead])
def list_shares_for_goal(
    goal_id: str,
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repos),
):
    owned_goal(goal_id, user_id, repos)
    return repos.sharing.get_shares_for_goal(goal_id)


@router.get("/received", response_model=list[SharedGoalRead])
def list_shared_with_me(
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repos),
):
    return repos.sharing.get_shared_goals(user_id)


@router.get("/received/{goal_id}/check-ins", response_model=list[CheckInRead])
def shared_goal_check_ins(
    goal_id: str,
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repos),
):
    if not repos.sharing.can_view_goal(user_id, goal_id):
        raise NotFoundError("Goal not shared with you")
    return repos.sharing.get_check_ins_for_shared_goal(goal_id)
