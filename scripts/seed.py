import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from taskboard.auth.bootstrap import ensure_bootstrap_admin
from taskboard.auth.passwords import hash_password
from taskboard.db import SessionLocal
from taskboard.models.board import Board
from taskboard.models.enums import GlobalRole, MemberRole
from taskboard.models.member import ProjectMember
from taskboard.models.project import Project
from taskboard.models.task import Task
from taskboard.models.user import User

SEED_PASSWORD = "seed-password-123"

@dataclass
class SeedResult:
    admin_email: str
    owner_email: str
    manager_email: str
    member_email: str
    project_id: uuid.UUID
    board_id: uuid.UUID
    task_id: uuid.UUID

def get_or_create_user(db: Session, email: str, name: str, role: GlobalRole = GlobalRole.user) -> User:
    email = email.lower().strip()
    u = db.scalar(select(User).where(User.email == email))
    if u is None:
        u = User(email=email, name=name, password_hash=hash_password(SEED_PASSWORD), role=role)
        db.add(u)
        db.flush()
    return u

def get_or_create_membership(db: Session, project_id: uuid.UUID, user_id: uuid.UUID, role: MemberRole) -> ProjectMember:
    m = db.scalar(
        select(ProjectMember).where(
            ProjectMember.project_id == project_id,
            ProjectMember.user_id == user_id,
        )
    )
    if m is None:
        m = ProjectMember(project_id=project_id, user_id=user_id, role=role)
        db.add(m)
        db.flush()
    elif m.role != role:
        m.role = role
        db.flush()
    return m

def get_or_create_project(db: Session, owner_id: uuid.UUID, name: str) -> Project:
    p = db.scalar(select(Project).where(Project.owner_id == owner_id, Project.name == name))
    if p is None:
        p = Project(owner_id=owner_id, name=name)
        db.add(p)
        db.flush()
    return p

def get_or_create_board(db: Session, project_id: uuid.UUID, name: str, position: int) -> Board:
    b = db.scalar(select(Board).where(Board.project_id == project_id, Board.name == name))
    if b is None:
        b = Board(project_id=project_id, name=name, position=position)
        db.add(b)
        db.flush()
    return b

def get_or_create_task(
    db: Session,
    board_id: uuid.UUID,
    title: str,
    created_by_id: uuid.UUID,
    assignee_id: uuid.UUID | None,
) -> Task:
    t = db.scalar(select(Task).where(Task.board_id == board_id, Task.title == title))
    if t is None:
        t = Task(board_id=board_id, title=title, created_by_id=created_by_id, assignee_id=assignee_id)
        db.add(t)
        db.flush()
    elif t.assignee_id != assignee_id:
        # keep it stable if you re-run seed
        t.assignee_id = assignee_id
        db.flush()
    return t

def seed() -> SeedResult:
    db = SessionLocal()
    try:
        admin = ensure_bootstrap_admin(db)
        owner = get_or_create_user(db, "owner@example.com", "owner")
        manager = get_or_create_user(db, "manager@example.com", "manager", GlobalRole.manager)
        member = get_or_create_user(db, "member@example.com", "member")

        project = get_or_create_project(db, owner.id, "seeded project")
        get_or_create_membership(db, project.id, manager.id, MemberRole.manager)
        get_or_create_membership(db, project.id, member.id, MemberRole.member)

        board = get_or_create_board(db, project.id, "backlog", 0)
        task = get_or_create_task(db, board.id, "seeded task", created_by_id=owner.id, assignee_id=member.id)

        db.commit()

        return SeedResult(
            admin_email=admin.email,
            owner_email=owner.email,
            manager_email=manager.email,
            member_email=member.email,
            project_id=project.id,
            board_id=board.id,
            task_id=task.id,
        )
    finally:
        db.close()

if __name__ == "__main__":
    r = seed()
    print("seed complete")
    print(f"project_id={r.project_id}")
    print(f"board_id={r.board_id}")
    print(f"task_id={r.task_id}")
    print(f"users (password {SEED_PASSWORD!r}, admin uses the bootstrap password):")
    print(f"  admin:   {r.admin_email}")
    print(f"  owner:   {r.owner_email}")
    print(f"  manager: {r.manager_email}")
    print(f"  member:  {r.member_email}")
