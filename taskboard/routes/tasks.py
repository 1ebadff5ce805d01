import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from taskboard.access.decisions import Decision
from taskboard.access.deps import require_board, require_task
from taskboard.auth.deps import get_current_user
from taskboard.db import get_db
from taskboard.models.task import Task
from taskboard.models.user import User
from taskboard.schemas.tasks import TaskCreateIn, TaskOut, TaskUpdateIn

router = APIRouter(tags=["tasks"])

# columns that may be cleared with an explicit null
NULLABLE_FIELDS = {"description", "assignee_id", "due_date"}

def _check_assignee(db: Session, assignee_id: uuid.UUID | None) -> None:
    if assignee_id is not None and db.get(User, assignee_id) is None:
        raise HTTPException(status_code=400, detail="unknown assignee")

@router.get("/boards/{board_id}/tasks", response_model=list[TaskOut])
def list_tasks(
    decision: Decision = Depends(require_board("boards:read")),
    db: Session = Depends(get_db),
) -> list[TaskOut]:
    q = (
        select(Task)
        .where(Task.board_id == decision.board.id)
        .order_by(Task.position, Task.created_at)
    )
    return [TaskOut.model_validate(t) for t in db.scalars(q).all()]

@router.post("/boards/{board_id}/tasks", response_model=TaskOut, status_code=201)
def create_task(
    payload: TaskCreateIn,
    decision: Decision = Depends(require_board("tasks:create")),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> TaskOut:
    _check_assignee(db, payload.assignee_id)

    t = Task(board_id=decision.board.id, created_by_id=user.id, **payload.model_dump())
    db.add(t)
    db.commit()
    db.refresh(t)
    return TaskOut.model_validate(t)

@router.get("/tasks/{task_id}", response_model=TaskOut)
def get_task(decision: Decision = Depends(require_task("tasks:read"))) -> TaskOut:
    return TaskOut.model_validate(decision.task)

@router.patch("/tasks/{task_id}", response_model=TaskOut)
def update_task(
    payload: TaskUpdateIn,
    decision: Decision = Depends(require_task("tasks:update")),
    db: Session = Depends(get_db),
) -> TaskOut:
    t = decision.task
    changes = payload.model_dump(exclude_unset=True)
    if "assignee_id" in changes:
        _check_assignee(db, changes["assignee_id"])

    for field, value in changes.items():
        if value is None and field not in NULLABLE_FIELDS:
            continue
        setattr(t, field, value)

    db.add(t)
    db.commit()
    db.refresh(t)
    return TaskOut.model_validate(t)

@router.delete("/tasks/{task_id}")
def delete_task(
    decision: Decision = Depends(require_task("tasks:delete")),
    db: Session = Depends(get_db),
) -> dict:
    db.delete(decision.task)
    db.commit()
    return {"deleted": True}
