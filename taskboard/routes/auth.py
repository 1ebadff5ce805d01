from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from taskboard.auth.deps import get_current_user
from taskboard.auth.passwords import hash_password, verify_password
from taskboard.auth.tokens import issue_access_token
from taskboard.config import settings
from taskboard.db import get_db
from taskboard.models.enums import GlobalRole
from taskboard.models.user import User
from taskboard.ratelimit import rate_limit
from taskboard.schemas.auth import AccessTokenOut, LoginIn, RegisterIn, UserOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=AccessTokenOut, status_code=201)
def register(
    payload: RegisterIn,
    db: Session = Depends(get_db),
    _: None = Depends(
        rate_limit("auth:register", limit_per_window=settings.rate_limit_auth_register_per_min)
    ),
) -> AccessTokenOut:
    email = payload.email.lower().strip()

    if db.scalar(select(User).where(User.email == email)) is not None:
        raise HTTPException(status_code=409, detail="email already registered")

    # self-registration never grants an elevated role
    user = User(
        email=email,
        name=payload.name.strip(),
        password_hash=hash_password(payload.password),
        role=GlobalRole.user,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("registered user %s", user.id)

    return AccessTokenOut(access_token=issue_access_token(user.id, user.role.value))

@router.post("/login", response_model=AccessTokenOut)
def login(
    payload: LoginIn,
    db: Session = Depends(get_db),
    _: None = Depends(
        rate_limit("auth:login", limit_per_window=settings.rate_limit_auth_login_per_min)
    ),
) -> AccessTokenOut:
    email = payload.email.lower().strip()

    user = db.scalar(select(User).where(User.email == email))
    if user is None or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="invalid credentials")

    return AccessTokenOut(access_token=issue_access_token(user.id, user.role.value))

@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)) -> UserOut:
    return UserOut(id=user.id, email=user.email, name=user.name, role=user.role)
