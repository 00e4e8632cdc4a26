# liftlog/repositories/workout_repo.py
from __future__ import annotations
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import joinedload, selectinload

from liftlog.errors import NotFound
from liftlog.models import Workout, WorkoutExercise, WorkoutSet
from liftlog.repositories.base import BaseRepository, require_owner
from liftlog.repositories.exercise_repo import ExerciseRepository

log = logging.getLogger(__name__)

@dataclass(frozen=True, slots=True)
class SetSpec:
    weight: Decimal | None = None
    reps: int | None = None

@dataclass(frozen=True, slots=True)
class ExerciseSpec:
    name: str
    sets: Sequence[SetSpec] = field(default_factory=tuple)

# Whole tree in three round trips: workouts, their exercises (+ catalog row), their sets
_AGGREGATE = (
    selectinload(Workout.workout_exercises).options(
        joinedload(WorkoutExercise.exercise),
        selectinload(WorkoutExercise.sets),
    ),
)

class WorkoutRepository(BaseRepository[Workout]):
    model = Workout

    def __init__(self, db):
        super().__init__(db)
        self.exercises = ExerciseRepository(db)

    # READS
    def list_for_user_in_window(
        self, user_id: str | None, window_start: datetime, window_end: datetime
    ) -> list[Workout]:
        """Workouts with ``window_start <= started_at < window_end``, newest first."""
        owner = require_owner(user_id)
        stmt = (
            select(Workout)
            .where(
                Workout.user_id == owner,
                Workout.started_at >= window_start,
                Workout.started_at < window_end,
            )
            .options(*_AGGREGATE)
            .order_by(Workout.started_at.desc())
        )
        with self.reading("list workouts"):
            return list(self.db.execute(stmt).scalars().all())

    def get_for_user(self, workout_id: uuid.UUID, user_id: str | None) -> Optional[Workout]:
        # Owner is part of the lookup, so someone else's workout is just "not there"
        owner = require_owner(user_id)
        stmt = (
            select(Workout)
            .where(Workout.id == workout_id, Workout.user_id == owner)
            .options(*_AGGREGATE)
        )
        with self.reading("get workout"):
            return self.db.execute(stmt).scalar_one_or_none()

    # WRITES
    def create_aggregate(
        self,
        user_id: str | None,
        *,
        name: str,
        started_at: datetime,
        exercises: Sequence[ExerciseSpec],
        completed_at: datetime | None = None,
    ) -> Workout:
        owner = require_owner(user_id)
        with self.atomic("create workout"):
            workout = Workout(user_id=owner, name=name, started_at=started_at, completed_at=completed_at)
            self.db.add(workout)
            self._compose(workout, exercises)
            self.db.flush()
            workout_id = workout.id
        log.info("created workout %s with %d exercises", workout_id, len(exercises))
        return self.get_for_user(workout_id, owner)

    def update_aggregate(
        self,
        workout_id: uuid.UUID,
        user_id: str | None,
        *,
        name: str,
        started_at: datetime,
        completed_at: datetime | None,
        exercises: Sequence[ExerciseSpec],
    ) -> Workout:
        owner = require_owner(user_id)
        with self.atomic("update workout"):
            # Row lock serializes concurrent edits of the same workout
            stmt = (
                select(Workout)
                .where(Workout.id == workout_id, Workout.user_id == owner)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            workout = self.db.execute(stmt).scalar_one_or_none()
            if workout is None:
                raise NotFound()

            workout.name = name
            workout.started_at = started_at
            workout.completed_at = completed_at

            # Old children must be gone before the new (workout_id, order) rows land
            workout.workout_exercises.clear()
            self.db.flush()
            self._compose(workout, exercises)
            self.db.flush()
        log.info("replaced workout %s with %d exercises", workout_id, len(exercises))
        return self.get_for_user(workout_id, owner)

    def _compose(self, workout: Workout, exercises: Sequence[ExerciseSpec]) -> None:
        for position, spec in enumerate(exercises):
            catalog = self.exercises.get_or_create(spec.name)
            link = WorkoutExercise(exercise=catalog, order=position)
            link.sets = [
                WorkoutSet(set_number=number, weight=s.weight, reps=s.reps)
                for number, s in enumerate(spec.sets, start=1)
            ]
            workout.workout_exercises.append(link)
