import uuid

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from taskboard.access.decisions import Decision, ResourceKind
from taskboard.access.errors import AccessError
from taskboard.access.evaluator import AccessEvaluator
from taskboard.access.identity import Identity
from taskboard.access.perms import rule_for
from taskboard.access.store import ResourceStore, SqlResourceStore
from taskboard.auth.deps import get_optional_identity
from taskboard.db import get_db

def get_store(db: Session = Depends(get_db)) -> ResourceStore:
    return SqlResourceStore(db)

def get_evaluator(store: ResourceStore = Depends(get_store)) -> AccessEvaluator:
    return AccessEvaluator(store)

def enforce(decision: Decision) -> Decision:
    try:
        return decision.raise_for_outcome()
    except AccessError as e:
        headers = {"WWW-Authenticate": "Bearer"} if e.status_code == 401 else None
        raise HTTPException(status_code=e.status_code, detail=e.detail, headers=headers) from e

def require_project_create():
    def _checker(
        identity: Identity | None = Depends(get_optional_identity),
        evaluator: AccessEvaluator = Depends(get_evaluator),
    ) -> Identity:
        enforce(evaluator.check_project_create(identity))
        return identity

    return _checker

def require_project(action: str):
    rule_for(action, ResourceKind.project)

    def _checker(
        project_id: uuid.UUID,
        identity: Identity | None = Depends(get_optional_identity),
        evaluator: AccessEvaluator = Depends(get_evaluator),
    ) -> Decision:
        return enforce(evaluator.check_project(identity, project_id, action))

    return _checker

def require_board(action: str):
    rule_for(action, ResourceKind.board)

    def _checker(
        board_id: uuid.UUID,
        identity: Identity | None = Depends(get_optional_identity),
        evaluator: AccessEvaluator = Depends(get_evaluator),
    ) -> Decision:
        return enforce(evaluator.check_board(identity, board_id, action))

    return _checker

def require_task(action: str):
    rule_for(action, ResourceKind.task)

    def _checker(
        task_id: uuid.UUID,
        identity: Identity | None = Depends(get_optional_identity),
        evaluator: AccessEvaluator = Depends(get_evaluator),
    ) -> Decision:
        return enforce(evaluator.check_task(identity, task_id, action))

    return _checker
