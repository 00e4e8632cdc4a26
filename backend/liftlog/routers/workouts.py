import uuid
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.dates import format_display_date, parse_calendar_date, today
from liftlog.deps.auth import get_current_user_id
from liftlog.schemas.workout import DayWorkoutsRead, WorkoutDocument, WorkoutDraft, WorkoutRead
from liftlog.services.workout_service import WorkoutService

router = APIRouter(prefix="/workouts", tags=["workouts"])

@router.get("", response_model=DayWorkoutsRead)
def list_workouts_for_day(
    date_param: str | None = Query(None, alias="date", description="YYYY-MM-DD, defaults to today"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    day = parse_calendar_date(date_param) if date_param else today()
    workouts = WorkoutService(db).workouts_for_day(user_id, day)
    return DayWorkoutsRead(
        day=day,
        label=format_display_date(day),
        workouts=[WorkoutRead.model_validate(w) for w in workouts],
    )

@router.post("", response_model=WorkoutDocument, status_code=status.HTTP_201_CREATED)
def create_workout(
    payload: WorkoutDraft,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return WorkoutService(db).create_workout(user_id, payload)

@router.get("/{workout_id}", response_model=WorkoutRead)
def get_workout(
    workout_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return WorkoutService(db).get_workout(user_id, workout_id)

@router.get("/{workout_id}/document", response_model=WorkoutDocument)
def get_workout_document(
    workout_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return WorkoutService(db).get_edit_document(user_id, workout_id)

@router.put("/{workout_id}", response_model=WorkoutDocument)
def update_workout(
    workout_id: uuid.UUID,
    payload: WorkoutDraft,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return WorkoutService(db).update_workout(user_id, workout_id, payload)
