# liftlog/repositories/base.py
from __future__ import annotations
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generic, Iterator, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from liftlog.errors import StoreFailure, Unauthorized

log = logging.getLogger(__name__)

T = TypeVar("T")  # SQLAlchemy model type

@dataclass(slots=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    limit: int
    offset: int

def require_owner(user_id: str | None) -> str:
    """Fail closed when the identity provider gave us nobody."""
    if not user_id:
        raise Unauthorized()
    return user_id

class BaseRepository(Generic[T]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style.

    The session is owned by the caller (one per request); repositories never
    create their own.
    """
    model: type[T]

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def atomic(self, what: str) -> Iterator[Session]:
        """All-or-nothing unit of work.

        Commits on clean exit. Any exception rolls everything back; store
        errors are logged in full and re-raised as ``StoreFailure``.
        """
        try:
            yield self.db
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            log.exception("%s failed", what)
            raise StoreFailure() from e
        except BaseException:
            self.db.rollback()
            raise

    @contextmanager
    def reading(self, what: str) -> Iterator[Session]:
        """Read-side counterpart of ``atomic``: store errors become ``StoreFailure``."""
        try:
            yield self.db
        except SQLAlchemyError as e:
            self.db.rollback()
            log.exception("%s failed", what)
            raise StoreFailure() from e

    def page(self, stmt, *, limit: int = 50, offset: int = 0) -> Page[T]:
        # One query for items and one for count
        with self.reading(f"list {self.model.__tablename__}"):
            items = self.db.execute(stmt.limit(limit).offset(offset)).scalars().all()
            total = self.db.execute(select(func.count()).select_from(self.model)).scalar_one()
        return Page(items=list(items), total=total, limit=limit, offset=offset)
