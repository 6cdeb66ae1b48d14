import logging

from sqlalchemy.exc import IntegrityError

from reflection.core.constants import DEFAULT_IN_QUERY_BATCH_SIZE
from reflection.core.errors import ConflictError, NotFoundError, ReflectionError, ValidationError
from reflection.db import Store
from reflection.models.goal import Goal
from reflection.models.share import Share
from reflection.repositories.batching import fetch_in_batches
from reflection.repositories.check_ins import CheckInRepository
from reflection.repositories.profiles import UserProfileRepository, normalize_email
from reflection.schemas.goal import GoalRead
from reflection.schemas.share import SharedGoalRead, ShareRead, ShareResult

logger = logging.getLogger(__name__)

# Names the unique (owner, recipient, goal) constraint in a database error,
# either by constraint name or by the column list SQLite reports
DUPLICATE_SHARE_MARKERS = (
    "uq_shares_owner_recipient_goal",
    "shares.owner_id, shares.shared_with_id, shares.goal_id",
)


def is_duplicate_share(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return any(marker in message for marker in DUPLICATE_SHARE_MARKERS)


class SharingRepository:
    """Read-only grants from a goal's owner to another user.

    `share_goal` reports failures in its ShareResult; the other operations raise.
    """

    def __init__(
        self,
        store: Store,
        profiles: UserProfileRepository,
        check_ins: CheckInRepository,
        batch_size: int = DEFAULT_IN_QUERY_BATCH_SIZE,
    ):
        self.store = store
        self.profiles = profiles
        self.check_ins = check_ins
        self.batch_size = batch_size

    def share_goal(
        self,
        owner_id: str,
        owner_name: str,
        recipient_email: str,
        goal_id: str,
        goal_title: str,
    ) -> ShareResult:
        try:
            share = self._create_share(owner_id, owner_name, recipient_email, goal_id, goal_title)
        except ReflectionError as e:
            logger.warning("Share of goal %s by %s failed: %s", goal_id, owner_id, e.message)
            return ShareResult(success=False, error=e.message, error_code=e.code)
        return ShareResult(success=True, share=ShareRead.model_validate(share))

    def _create_share(self, owner_id, owner_name, recipient_email, goal_id, goal_title) -> Share:
        email = normalize_email(recipient_email)
        if not email:
            raise ValidationError("Recipient email is required")

        recipient = self.profiles.find_user_by_email(email)
        if recipient is None:
            raise NotFoundError("No user found with that email address")
        if recipient.uid == owner_id:
            raise ValidationError("You cannot share a goal with yourself")
        owner_name = (owner_name or "").strip()
        goal_title = (goal_title or "").strip()
        if not owner_name:
            raise ValidationError("Owner name is required")
        if not goal_title:
            raise ValidationError("Goal title is required")

        with self.store.session() as db:
            existing = (
                db.query(Share)
                .filter(Share.owner_id == owner_id)
                .filter(Share.shared_with_id == recipient.uid)
                .filter(Share.goal_id == goal_id)
                .first()
            )
            if existing:
                raise ConflictError("Goal is already shared with this user")
            share = Share(
                owner_id=owner_id,
                owner_name=owner_name,
                shared_with_id=recipient.uid,
                shared_with_email=recipient.email,
                goal_id=goal_id,
                goal_title=goal_title,
            )
            db.add(share)
            try:
                db.flush()
            except IntegrityError as e:
                if not is_duplicate_share(e):
                    raise
                # Lost a race with an identical share
                raise ConflictError("Goal is already shared with this user") from e
        logger.info("Shared goal %s from %s with %s", goal_id, owner_id, recipient.uid)
        return share

    def unshare_goal(self, share_id: str) -> None:
        with self.store.session() as db:
            db.query(Share).filter(Share.id == share_id).delete(synchronize_session=False)
        logger.info("Removed share %s", share_id)

    def get_share(self, share_id: str) -> Share:
        with self.store.session() as db:
            share = db.get(Share, share_id)
            if share is None:
                raise NotFoundError("Share not found")
            return share

    def get_shares_for_goal(self, goal_id: str) -> list[Share]:
        with self.store.session() as db:
            return (
                db.query(Share)
                .filter(Share.goal_id == goal_id)
                .order_by(Share.created_at.asc())
                .all()
            )

    def get_shared_goals(self, recipient_id: str) -> list[SharedGoalRead]:
        """Goals shared with `recipient_id`, each with its owner name and share id.

        Goals come from the live goal records; a share whose goal no longer
        exists is skipped.
        """
        with self.store.session() as db:
            shares = (
                db.query(Share)
                .filter(Share.shared_with_id == recipient_id)
                .order_by(Share.created_at.asc())
                .all()
            )
            if not shares:
                return []
            goals = fetch_in_batches(db, Goal, Goal.id, [s.goal_id for s in shares], self.batch_size)

        by_id = {g.id: g for g in goals}
        results: list[SharedGoalRead] = []
        for share in shares:
            goal = by_id.get(share.goal_id)
            if goal is None:
                logger.debug("Share %s points at missing goal %s", share.id, share.goal_id)
                continue
            results.append(
                SharedGoalRead(
                    **GoalRead.model_validate(goal).model_dump(),
                    owner_name=share.owner_name,
                    share_id=share.id,
                )
            )
        return results

    def get_check_ins_for_shared_goal(self, goal_id: str) -> list:
        return self.check_ins.get_check_ins_for_goal(goal_id)

    def can_view_goal(self, recipient_id: str, goal_id: str) -> bool:
        with self.store.session() as db:
            return (
                db.query(Share.id)
                .filter(Share.shared_with_id == recipient_id)
                .filter(Share.goal_id == goal_id)
                .first()
                is not None
            )
