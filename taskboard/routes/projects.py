from fastapi import APIRouter, Depends
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from taskboard.access.decisions import Decision
from taskboard.access.deps import require_project, require_project_create
from taskboard.access.identity import Identity
from taskboard.auth.deps import get_current_user
from taskboard.db import get_db
from taskboard.models.enums import GlobalRole
from taskboard.models.member import ProjectMember
from taskboard.models.project import Project
from taskboard.models.user import User
from taskboard.schemas.projects import ProjectCreateIn, ProjectOut, ProjectUpdateIn

router = APIRouter(prefix="/projects", tags=["projects"])

@router.get("", response_model=list[ProjectOut])
def list_projects(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[ProjectOut]:
    q = select(Project).order_by(Project.created_at.desc())
    if user.role != GlobalRole.admin:
        joined = select(ProjectMember.project_id).where(ProjectMember.user_id == user.id)
        q = q.where(or_(Project.owner_id == user.id, Project.id.in_(joined)))

    rows = db.scalars(q).all()
    return [ProjectOut.model_validate(r) for r in rows]

@router.post("", response_model=ProjectOut, status_code=201)
def create_project(
    payload: ProjectCreateIn,
    identity: Identity = Depends(require_project_create()),
    db: Session = Depends(get_db),
) -> ProjectOut:
    p = Project(
        owner_id=identity.user_id,
        name=payload.name,
        description=payload.description,
        color=payload.color,
    )
    db.add(p)
    db.commit()
    db.refresh(p)
    return ProjectOut.model_validate(p)

@router.get("/{project_id}", response_model=ProjectOut)
def get_project(decision: Decision = Depends(require_project("projects:read"))) -> ProjectOut:
    return ProjectOut.model_validate(decision.project)

@router.patch("/{project_id}", response_model=ProjectOut)
def update_project(
    payload: ProjectUpdateIn,
    decision: Decision = Depends(require_project("projects:update")),
    db: Session = Depends(get_db),
) -> ProjectOut:
    p = decision.project
    if payload.name is not None:
        p.name = payload.name
    if payload.color is not None:
        p.color = payload.color
    # allow clearing the description by sending null
    if "description" in payload.model_fields_set:
        p.description = payload.description

    db.add(p)
    db.commit()
    db.refresh(p)
    return ProjectOut.model_validate(p)

@router.delete("/{project_id}")
def delete_project(
    decision: Decision = Depends(require_project("projects:delete")),
    db: Session = Depends(get_db),
) -> dict:
    # boards, tasks, comments and memberships cascade
    db.delete(decision.project)
    db.commit()
    return {"deleted": True}
