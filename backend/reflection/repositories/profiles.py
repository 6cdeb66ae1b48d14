import logging
from typing import Optional

from reflection.core.errors import ConflictError, ValidationError
from reflection.db import Store
from reflection.models.user_profile import UserProfile

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


class UserProfileRepository:
    """Profiles exist only so a goal can be shared by email."""

    def __init__(self, store: Store):
        self.store = store

    def create_user_profile(self, uid: str, email: str, display_name: str = "") -> UserProfile:
        clean = normalize_email(email)
        if not uid or not clean:
            raise ValidationError("uid and email are required")
        with self.store.session() as db:
            if db.get(UserProfile, uid) is not None:
                raise ConflictError("Profile already exists for this user")
            if db.query(UserProfile).filter(UserProfile.email == clean).first():
                raise ConflictError("Email is already registered")
            profile = UserProfile(uid=uid, email=clean, display_name=display_name or "")
            db.add(profile)
        logger.info("Created profile for user %s", uid)
        return profile

    def find_user_by_email(self, email: str) -> Optional[UserProfile]:
        clean = normalize_email(email)
        if not clean:
            return None
        with self.store.session() as db:
            return db.query(UserProfile).filter(UserProfile.email == clean).first()

    def get_user_profile(self, uid: str) -> Optional[UserProfile]:
        with self.store.session() as db:
            return db.get(UserProfile, uid)
