from dataclasses import dataclass

from fastapi import Header, HTTPException, Request

from reflection.core.config import Settings
from reflection.core.errors import NotFoundError
from reflection.db import Store
from reflection.local_storage import LocalStorage
from reflection.models.goal import Goal
from reflection.repositories.check_ins import CheckInRepository
from reflection.repositories.goals import GoalRepository
from reflection.repositories.profiles import UserProfileRepository
from reflection.repositories.sharing import SharingRepository


@dataclass
class Repositories:
    goals: GoalRepository
    check_ins: CheckInRepository
    sharing: SharingRepository
    profiles: UserProfileRepository


def build_repositories(store: Store, settings: Settings) -> Repositories:
    batch = settings.in_query_batch_size
    goals = GoalRepository(store, batch_size=batch)
    check_ins = CheckInRepository(store, goals, batch_size=batch)
    profiles = UserProfileRepository(store)
    sharing = SharingRepository(store, profiles, check_ins, batch_size=batch)
    return Repositories(goals=goals, check_ins=check_ins, sharing=sharing, profiles=profiles)


def get_repos(request: Request) -> Repositories:
    return request.app.state.repos


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_local_storage(request: Request) -> LocalStorage:
    return request.app.state.local_storage


def get_current_user_id(x_user_id: str = Header(...)) -> str:
    # Set by the identity gateway in front of the app
    uid = x_user_id.strip()
    if not uid:
        raise HTTPException(status_code=401, detail="Not signed in")
    return uid


def owned_goal(goal_id: str, user_id: str, repos: Repositories) -> Goal:
    """The goal, if the caller owns it. Someone else's goal looks missing."""
    goal = repos.goals.get_goal(goal_id)
    if goal.user_id != user_id:
        raise NotFoundError("Goal not found")
    return goal
