import uuid
from datetime import datetime
from pydantic import BaseModel

class CatalogExerciseRead(BaseModel):
    id: uuid.UUID
    name: str
    created_at: datetime

    model_config = {"from_attributes": True}

class CatalogPage(BaseModel):
    items: list[CatalogExerciseRead]
    total: int
    limit: int
    offset: int
