from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from taskboard.access.decisions import Decision
from taskboard.access.deps import require_board, require_project
from taskboard.db import get_db
from taskboard.models.board import Board
from taskboard.schemas.boards import BoardCreateIn, BoardOut, BoardUpdateIn

router = APIRouter(tags=["boards"])

@router.get("/projects/{project_id}/boards", response_model=list[BoardOut])
def list_boards(
    decision: Decision = Depends(require_project("projects:read")),
    db: Session = Depends(get_db),
) -> list[BoardOut]:
    q = (
        select(Board)
        .where(Board.project_id == decision.project.id)
        .order_by(Board.position, Board.created_at)
    )
    return [BoardOut.model_validate(b) for b in db.scalars(q).all()]

@router.post("/projects/{project_id}/boards", response_model=BoardOut, status_code=201)
def create_board(
    payload: BoardCreateIn,
    decision: Decision = Depends(require_project("boards:create")),
    db: Session = Depends(get_db),
) -> BoardOut:
    b = Board(
        project_id=decision.project.id,
        name=payload.name,
        description=payload.description,
        position=payload.position,
    )
    db.add(b)
    db.commit()
    db.refresh(b)
    return BoardOut.model_validate(b)

@router.get("/boards/{board_id}", response_model=BoardOut)
def get_board(decision: Decision = Depends(require_board("boards:read"))) -> BoardOut:
    return BoardOut.model_validate(decision.board)

@router.patch("/boards/{board_id}", response_model=BoardOut)
def update_board(
    payload: BoardUpdateIn,
    decision: Decision = Depends(require_board("boards:update")),
    db: Session = Depends(get_db),
) -> BoardOut:
    b = decision.board
    if payload.name is not None:
        b.name = payload.name
    if payload.position is not None:
        b.position = payload.position
    if "description" in payload.model_fields_set:
        b.description = payload.description

    db.add(b)
    db.commit()
    db.refresh(b)
    return BoardOut.model_validate(b)

@router.delete("/boards/{board_id}")
def delete_board(
    decision: Decision = Depends(require_board("boards:delete")),
    db: Session = Depends(get_db),
) -> dict:
    db.delete(decision.board)
    db.commit()
    return {"deleted": True}
