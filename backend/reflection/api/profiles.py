from fastapi import APIRouter, Depends, Query

from reflection.api.deps import Repositories, get_repos
from reflection.core.errors import NotFoundError
from reflection.schemas.profile import UserProfileCreate, UserProfileRead


router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.post("/", response_model=UserProfileRead)
def create_profile(payload: UserProfileCreate, repos: Repositories = Depends(get_repos)):
    """Called once after signup so the user can be found by email."""
    return repos.profiles.create_user_profile(payload.uid, payload.email, payload.display_name)


@router.get("/lookup", response_model=UserProfileRead)
def lookup_profile(email: str = Query(...), repos: Repositories = Depends(get_repos)):
    profile = repos.profiles.find_user_by_email(email)
    if not profile:
        raise NotFoundError("No user found with that email address")
    return profile
