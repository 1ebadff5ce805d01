import uuid
from datetime import datetime, timedelta, timezone

import jwt

from taskboard.config import settings

def now_utc() -> datetime:
    return datetime.now(timezone.utc)

def issue_access_token(user_id: str | uuid.UUID, role: str) -> str:
    iat = now_utc()
    exp = iat + timedelta(minutes=settings.jwt_expires_minutes)
    payload = {
        "sub": str(user_id),
        # informational; the role is re-read from the db on every request
        "role": role,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": int(iat.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm="HS256")

def decode_access_token(token: str) -> dict:
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=["HS256"],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
    )
