import uuid
from pydantic import BaseModel, ConfigDict, Field

from taskboard.models.project import DEFAULT_PROJECT_COLOR

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"

class ProjectCreateIn(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    color: str = Field(default=DEFAULT_PROJECT_COLOR, pattern=HEX_COLOR)

class ProjectUpdateIn(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    color: str | None = Field(default=None, pattern=HEX_COLOR)

class ProjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    owner_id: uuid.UUID
    name: str
    description: str | None
    color: str
