import uuid
from pydantic import BaseModel, ConfigDict, Field

class BoardCreateIn(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    position: int = 0

class BoardUpdateIn(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    position: int | None = None

class BoardOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    project_id: uuid.UUID
    name: str
    description: str | None
    position: int
