import uuid
from typing import Annotated
from datetime import date, datetime
from decimal import Decimal
from pydantic import BaseModel, Field

WorkoutName = Annotated[str, Field(max_length=100)]
ExerciseName = Annotated[str, Field(max_length=120)]
# Stored as NUMERIC(10, 2)
Weight = Annotated[Decimal, Field(max_digits=10, decimal_places=2)]

# --- edit document: what forms send and receive ---

class SetDocument(BaseModel):
    weight: Weight | None = None
    reps: int | None = None

class ExerciseDocument(BaseModel):
    name: ExerciseName
    sets: list[SetDocument] = []

class WorkoutDraft(BaseModel):
    """Create/update payload. Structural rules are checked by the service."""
    name: WorkoutName
    started_at: datetime
    completed_at: datetime | None = None
    exercises: list[ExerciseDocument] = []

class WorkoutDocument(WorkoutDraft):
    id: uuid.UUID

# --- full aggregate, as stored ---

class SetRead(BaseModel):
    id: uuid.UUID
    set_number: int
    weight: Decimal | None = None
    reps: int | None = None

    model_config = {"from_attributes": True}

class ExerciseRead(BaseModel):
    id: uuid.UUID
    name: str

    model_config = {"from_attributes": True}

class WorkoutExerciseRead(BaseModel):
    id: uuid.UUID
    order: int
    exercise: ExerciseRead
    sets: list[SetRead]

    model_config = {"from_attributes": True}

class WorkoutRead(BaseModel):
    id: uuid.UUID
    name: str
    started_at: datetime
    completed_at: datetime | None = None
    in_progress: bool
    created_at: datetime
    updated_at: datetime
    workout_exercises: list[WorkoutExerciseRead]

    model_config = {"from_attributes": True}

class DayWorkoutsRead(BaseModel):
    day: date
    label: str
    workouts: list[WorkoutRead]
