"""Paging for "value in set" lookups.

Document stores cap how many values one membership predicate may carry, so
every multi-id lookup splits its id list into fixed-size batches and
concatenates the results.
"""
from typing import Iterable, Iterator, Sequence, TypeVar

from sqlalchemy.orm import Session

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    if size < 1:
        raise ValueError("batch size must be >= 1")
    for i in range(0, len(items), size):
        yield list(items[i:i + size])


def unique(ids: Iterable[str]) -> list[str]:
    # dict keeps first-seen order
    return list(dict.fromkeys(ids))


def fetch_in_batches(db: Session, model, column, ids: Iterable[str], batch_size: int, *criteria) -> list:
    """Rows of `model` whose `column` is in `ids`, queried `batch_size` ids at a time.

    Extra SQLAlchemy criteria are applied to every batch.
    """
    rows = []
    for batch in chunked(unique(ids), batch_size):
        rows.extend(db.query(model).filter(column.in_(batch), *criteria).all())
    return rows
