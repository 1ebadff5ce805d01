from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from taskboard.access.decisions import Decision
from taskboard.access.deps import require_task
from taskboard.auth.deps import get_current_user
from taskboard.db import get_db
from taskboard.models.comment import TaskComment
from taskboard.models.user import User
from taskboard.schemas.comments import CommentCreateIn, CommentOut

router = APIRouter(prefix="/tasks/{task_id}/comments", tags=["comments"])

@router.get("", response_model=list[CommentOut])
def list_comments(
    decision: Decision = Depends(require_task("comments:read")),
    db: Session = Depends(get_db),
) -> list[CommentOut]:
    q = (
        select(TaskComment)
        .where(TaskComment.task_id == decision.task.id)
        .order_by(TaskComment.created_at.desc())
    )
    return [CommentOut.model_validate(c) for c in db.scalars(q).all()]

@router.post("", response_model=CommentOut, status_code=201)
def create_comment(
    payload: CommentCreateIn,
    decision: Decision = Depends(require_task("comments:create")),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CommentOut:
    c = TaskComment(task_id=decision.task.id, user_id=user.id, content=payload.content)
    db.add(c)
    db.commit()
    db.refresh(c)
    return CommentOut.model_validate(c)
