import uuid

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import select
from sqlalchemy.orm import Session

from taskboard.access.decisions import Decision
from taskboard.access.deps import require_project
from taskboard.db import get_db
from taskboard.models.member import ProjectMember
from taskboard.models.user import User
from taskboard.schemas.members import MemberAddIn, MemberOut

router = APIRouter(prefix="/projects/{project_id}/members", tags=["members"])

@router.get("", response_model=list[MemberOut])
def list_members(
    decision: Decision = Depends(require_project("members:read")),
    db: Session = Depends(get_db),
) -> list[MemberOut]:
    q = (
        select(ProjectMember)
        .where(ProjectMember.project_id == decision.project.id)
        .order_by(ProjectMember.joined_at)
    )
    return [MemberOut.model_validate(m) for m in db.scalars(q).all()]

@router.post("", response_model=MemberOut, status_code=201)
def add_member(
    payload: MemberAddIn,
    response: Response,
    decision: Decision = Depends(require_project("members:add")),
    db: Session = Depends(get_db),
) -> MemberOut:
    project_id = decision.project.id

    if db.get(User, payload.user_id) is None:
        raise HTTPException(status_code=404, detail="user not found")

    # one membership per user per project; re-adding is a no-op
    existing = db.scalar(
        select(ProjectMember).where(
            ProjectMember.project_id == project_id,
            ProjectMember.user_id == payload.user_id,
        )
    )
    if existing is not None:
        response.status_code = 200
        return MemberOut.model_validate(existing)

    m = ProjectMember(project_id=project_id, user_id=payload.user_id, role=payload.role)
    db.add(m)
    db.commit()
    db.refresh(m)
    return MemberOut.model_validate(m)

@router.delete("/{user_id}")
def remove_member(
    user_id: uuid.UUID,
    decision: Decision = Depends(require_project("members:remove")),
    db: Session = Depends(get_db),
) -> dict:
    m = db.scalar(
        select(ProjectMember).where(
            ProjectMember.project_id == decision.project.id,
            ProjectMember.user_id == user_id,
        )
    )
    if m is None:
        raise HTTPException(status_code=404, detail="member not found")
    db.delete(m)
    db.commit()
    return {"deleted": True}
