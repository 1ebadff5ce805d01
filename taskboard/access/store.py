import uuid
from collections.abc import Callable, Sequence
from typing import Protocol, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.models.board import Board
from taskboard.models.member import ProjectMember
from taskboard.models.project import Project
from taskboard.models.task import Task

T = TypeVar("T")

class StoreError(Exception):
    """Infrastructure failure while reading from a resource store."""

class ResourceStore(Protocol):
    def get_project(self, project_id: uuid.UUID) -> Project | None: ...

    def get_board(self, board_id: uuid.UUID) -> Board | None: ...

    def get_task(self, task_id: uuid.UUID) -> Task | None: ...

    def get_project_members(self, project_id: uuid.UUID) -> Sequence[ProjectMember]: ...

class SqlResourceStore:
    """ResourceStore backed by a request-scoped SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def _read(self, what: str, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except SQLAlchemyError as e:
            raise StoreError(f"{what} lookup failed") from e

    def get_project(self, project_id: uuid.UUID) -> Project | None:
        return self._read("project", lambda: self.db.get(Project, project_id))

    def get_board(self, board_id: uuid.UUID) -> Board | None:
        return self._read("board", lambda: self.db.get(Board, board_id))

    def get_task(self, task_id: uuid.UUID) -> Task | None:
        return self._read("task", lambda: self.db.get(Task, task_id))

    def get_project_members(self, project_id: uuid.UUID) -> Sequence[ProjectMember]:
        q = select(ProjectMember).where(ProjectMember.project_id == project_id)
        return self._read("membership", lambda: self.db.scalars(q).all())
