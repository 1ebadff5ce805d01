import uuid

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from taskboard.access.identity import Identity
from taskboard.auth.tokens import decode_access_token
from taskboard.db import get_db
from taskboard.models.user import User

bearer = HTTPBearer(auto_error=False)

_CHALLENGE = {"WWW-Authenticate": "Bearer"}

def get_optional_user(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> User | None:
    # no credentials is not an error here; access checks report it
    if creds is None:
        return None
    if creds.scheme.lower() != "bearer":
        raise HTTPException(status_code=401, detail="missing bearer token", headers=_CHALLENGE)

    try:
        payload = decode_access_token(creds.credentials)
        user_id = uuid.UUID(payload["sub"])
    except (jwt.PyJWTError, KeyError, ValueError):
        raise HTTPException(status_code=401, detail="invalid token", headers=_CHALLENGE)

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="user not found", headers=_CHALLENGE)

    return user

def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(status_code=401, detail="authentication required", headers=_CHALLENGE)
    return user

def get_optional_identity(user: User | None = Depends(get_optional_user)) -> Identity | None:
    return Identity.from_user(user) if user is not None else None
