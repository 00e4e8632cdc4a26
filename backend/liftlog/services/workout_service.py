"""Day-scoped workout queries and the aggregate <-> edit document mapping.

``to_edit_document`` and ``from_edit_document`` are pure: they never touch the
session, so they can be exercised without a database.
"""
from __future__ import annotations
import uuid
from datetime import date

from sqlalchemy.orm import Session

from liftlog.dates import compute_day_window, to_wall_clock
from liftlog.errors import NotFound, ValidationFailed
from liftlog.models import Workout
from liftlog.repositories.workout_repo import ExerciseSpec, SetSpec, WorkoutRepository
from liftlog.schemas.workout import (
    ExerciseDocument,
    SetDocument,
    WorkoutDocument,
    WorkoutDraft,
)


def to_edit_document(workout: Workout) -> WorkoutDocument:
    # Position in the lists carries order/set_number from here on
    return WorkoutDocument(
        id=workout.id,
        name=workout.name,
        started_at=workout.started_at,
        completed_at=workout.completed_at,
        exercises=[
            ExerciseDocument(
                name=link.exercise.name,
                sets=[SetDocument(weight=s.weight, reps=s.reps) for s in link.sets],
            )
            for link in workout.workout_exercises
        ],
    )


def from_edit_document(document: WorkoutDraft) -> list[ExerciseSpec]:
    """Validate an edit document and flatten it into repository input.

    Raises ``ValidationFailed`` for the first offending field.
    """
    if not document.name.strip():
        raise ValidationFailed("name", "Workout name is required")
    if document.completed_at is not None and to_wall_clock(document.completed_at) < to_wall_clock(document.started_at):
        raise ValidationFailed("completed_at", "Completion time cannot be before the start time")
    if not document.exercises:
        raise ValidationFailed("exercises", "At least one exercise is required")

    specs = []
    for i, exercise in enumerate(document.exercises):
        where = f"exercises[{i}]"
        if not exercise.name.strip():
            raise ValidationFailed(f"{where}.name", "Exercise name is required")
        if not exercise.sets:
            raise ValidationFailed(f"{where}.sets", "At least one set is required")
        for j, s in enumerate(exercise.sets):
            if s.weight is not None and s.weight <= 0:
                raise ValidationFailed(f"{where}.sets[{j}].weight", "Weight must be positive")
            if s.reps is not None and s.reps <= 0:
                raise ValidationFailed(f"{where}.sets[{j}].reps", "Reps must be a positive whole number")
        specs.append(
            ExerciseSpec(
                name=exercise.name,
                sets=tuple(SetSpec(weight=s.weight, reps=s.reps) for s in exercise.sets),
            )
        )
    return specs


class WorkoutService:
    def __init__(self, db: Session):
        self.repo = WorkoutRepository(db)

    def workouts_for_day(self, user_id: str | None, day: date) -> list[Workout]:
        window = compute_day_window(day)
        return self.repo.list_for_user_in_window(user_id, window.start, window.end)

    def get_workout(self, user_id: str | None, workout_id: uuid.UUID) -> Workout:
        workout = self.repo.get_for_user(workout_id, user_id)
        if workout is None:
            raise NotFound()
        return workout

    def get_edit_document(self, user_id: str | None, workout_id: uuid.UUID) -> WorkoutDocument:
        return to_edit_document(self.get_workout(user_id, workout_id))

    def create_workout(self, user_id: str | None, draft: WorkoutDraft) -> WorkoutDocument:
        specs = from_edit_document(draft)
        workout = self.repo.create_aggregate(
            user_id,
            name=draft.name,
            started_at=to_wall_clock(draft.started_at),
            completed_at=_wall_clock_or_none(draft),
            exercises=specs,
        )
        return to_edit_document(workout)

    def update_workout(self, user_id: str | None, workout_id: uuid.UUID, draft: WorkoutDraft) -> WorkoutDocument:
        specs = from_edit_document(draft)
        workout = self.repo.update_aggregate(
            workout_id,
            user_id,
            name=draft.name,
            started_at=to_wall_clock(draft.started_at),
            completed_at=_wall_clock_or_none(draft),
            exercises=specs,
        )
        return to_edit_document(workout)


def _wall_clock_or_none(draft: WorkoutDraft):
    return to_wall_clock(draft.completed_at) if draft.completed_at is not None else None
