import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from taskboard.models.enums import TaskPriority, TaskStatus

class TaskCreateIn(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    description: str | None = None
    status: TaskStatus = TaskStatus.todo
    priority: TaskPriority = TaskPriority.medium
    assignee_id: uuid.UUID | None = None
    due_date: datetime | None = None
    position: int = 0
    progress: int = Field(default=0, ge=0, le=100)

class TaskUpdateIn(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=300)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    assignee_id: uuid.UUID | None = None
    due_date: datetime | None = None
    position: int | None = None
    progress: int | None = Field(default=None, ge=0, le=100)

class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    board_id: uuid.UUID
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    created_by_id: uuid.UUID
    assignee_id: uuid.UUID | None
    due_date: datetime | None
    position: int
    progress: int
