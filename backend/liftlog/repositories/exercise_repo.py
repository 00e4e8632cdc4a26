from __future__ import annotations
import logging
from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError

from liftlog.models import Exercise
from liftlog.repositories.base import BaseRepository, Page

log = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

class ExerciseRepository(BaseRepository[Exercise]):
    model = Exercise

    # READS
    def get_by_name(self, name: str) -> Exercise | None:
        stmt = select(Exercise).where(Exercise.name == name)
        return self.db.execute(stmt).scalar_one_or_none()

    def list(self, *, limit: int = 50, offset: int = 0) -> Page[Exercise]:
        stmt = select(Exercise).order_by(Exercise.name.asc())
        return self.page(stmt, limit=limit, offset=offset)

    # WRITES
    def get_or_create(self, name: str) -> Exercise:
        """Catalog lookup-or-create by exact name, safe against concurrent callers.

        Runs inside the caller's transaction and does not commit. The unique
        constraint on ``exercises.name`` decides the winner; the loser's insert
        is a no-op and both re-select the same row.
        """
        insert = _UPSERT_INSERTS.get(self.db.get_bind().dialect.name)
        if insert is not None:
            stmt = insert(Exercise).values(name=name).on_conflict_do_nothing(index_elements=["name"])
            self.db.execute(stmt)
        else:
            try:
                with self.db.begin_nested():
                    self.db.add(Exercise(name=name))
            except IntegrityError:
                log.debug("exercise %r created concurrently", name)
        return self.get_by_name(name)
