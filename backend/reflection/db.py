import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from reflection.core.errors import TransportError

logger = logging.getLogger(__name__)

# SQLAlchemy Base class for models to inherit
Base = declarative_base()


def make_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        # One shared connection, otherwise every session sees an empty database
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(
        database_url,
        pool_pre_ping=True,   # helps avoid stale connections
    )


class Store:
    """Client for the document store: one table per logical collection.

    Built once by whoever starts the process and handed to every repository.
    """

    def __init__(self, database_url: str | None = None, engine: Engine | None = None):
        if engine is None:
            if database_url is None:
                raise ValueError("Store needs a database_url or an engine")
            engine = make_engine(database_url)
        self.engine = engine
        # Factory that creates DB sessions
        self._session_factory = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
        )

    def create_all(self) -> None:
        # Imports register every table on Base.metadata
        from reflection.models.goal import Goal  # noqa: F401
        from reflection.models.check_in import CheckIn  # noqa: F401
        from reflection.models.share import Share  # noqa: F401
        from reflection.models.user_profile import UserProfile  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Unit of work: commit on success, roll back on any error.

        Everything written inside one block lands atomically. Store failures
        come out as TransportError.
        """
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Store operation failed", exc_info=True)
            raise TransportError("Store operation failed") from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
