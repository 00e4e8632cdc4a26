from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.auth import get_current_user_id
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.schemas.exercise import CatalogExerciseRead, CatalogPage

router = APIRouter(prefix="/exercises", tags=["exercises"])

# Catalog is shared by all users, but still only for signed-in callers
@router.get("", response_model=CatalogPage, dependencies=[Depends(get_current_user_id)])
def list_exercises(
    db: Session = Depends(get_db),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    page = ExerciseRepository(db).list(limit=limit, offset=offset)
    return CatalogPage(
        items=[CatalogExerciseRead.model_validate(e) for e in page.items],
        total=page.total,
        limit=page.limit,
        offset=page.offset,
    )
