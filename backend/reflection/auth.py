"""Identity provider boundary.

Accounts live with an external identity provider; this module only defines
what the app needs from one, a small in-process provider for local mode and
tests, and the signup flow that also creates the user's profile.
"""
import hashlib
import hmac
import logging
import os
import uuid
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from reflection.core.errors import ConflictError, NotFoundError, ValidationError
from reflection.repositories.profiles import UserProfileRepository, normalize_email

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 200_000
MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class AuthUser:
    uid: str
    email: str
    display_name: str = ""


Listener = Callable[[Optional[AuthUser]], None]


class IdentityProvider(Protocol):
    def create_user(self, email: str, password: str, display_name: str) -> AuthUser: ...

    def sign_in(self, email: str, password: str) -> AuthUser: ...

    def sign_out(self) -> None: ...

    @property
    def current_user(self) -> Optional[AuthUser]: ...

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Register for sign-in/out changes; returns the unsubscribe callable."""
        ...


def _hash_password(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)


class LocalIdentityProvider:
    """Email + password accounts kept in memory. One signed-in user at a time."""

    def __init__(self):
        self._accounts: dict[str, tuple[AuthUser, bytes, bytes]] = {}
        self._current: Optional[AuthUser] = None
        self._listeners: list[Listener] = []

    @property
    def current_user(self) -> Optional[AuthUser]:
        return self._current

    def _set_current(self, user: Optional[AuthUser]) -> None:
        self._current = user
        for listener in list(self._listeners):
            listener(user)

    def create_user(self, email: str, password: str, display_name: str = "") -> AuthUser:
        key = normalize_email(email)
        if not key:
            raise ValidationError("Email is required")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if key in self._accounts:
            raise ConflictError("An account with this email already exists")
        salt = os.urandom(16)
        user = AuthUser(uid=uuid.uuid4().hex, email=key, display_name=display_name or "")
        self._accounts[key] = (user, salt, _hash_password(password, salt))
        # Creating an account signs it in
        self._set_current(user)
        return user

    def sign_in(self, email: str, password: str) -> AuthUser:
        entry = self._accounts.get(normalize_email(email))
        if entry is None:
            raise NotFoundError("Invalid email or password")
        user, salt, digest = entry
        if not hmac.compare_digest(digest, _hash_password(password or "", salt)):
            raise NotFoundError("Invalid email or password")
        self._set_current(user)
        return user

    def sign_out(self) -> None:
        self._set_current(None)

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove


class AuthStateSubscription:
    """Observer of sign-in state with an explicit start/stop lifecycle.

    `on_change` gets the current user as soon as the subscription starts and
    again after every change until `stop()`.
    """

    def __init__(self, provider: IdentityProvider, on_change: Listener):
        self.provider = provider
        self.on_change = on_change
        self._unsubscribe: Optional[Callable[[], None]] = None
        self.loading = True

    @property
    def active(self) -> bool:
        return self._unsubscribe is not None

    def _deliver(self, user: Optional[AuthUser]) -> None:
        self.loading = False
        self.on_change(user)

    def start(self) -> None:
        if self.active:
            return
        self._unsubscribe = self.provider.add_listener(self._deliver)
        self._deliver(self.provider.current_user)

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *exc):
        self.stop()


class AuthService:
    def __init__(self, provider: IdentityProvider, profiles: UserProfileRepository):
        self.provider = provider
        self.profiles = profiles

    def signup(self, email: str, password: str, display_name: str) -> AuthUser:
        user = self.provider.create_user(email, password, display_name)
        # Profile makes the new user findable by email for sharing
        self.profiles.create_user_profile(user.uid, user.email, display_name)
        logger.info("Signed up user %s", user.uid)
        return user

    def login(self, email: str, password: str) -> AuthUser:
        return self.provider.sign_in(email, password)

    def logout(self) -> None:
        self.provider.sign_out()
