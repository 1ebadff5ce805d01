import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from taskboard.auth.passwords import hash_password
from taskboard.config import settings
from taskboard.models.enums import GlobalRole
from taskboard.models.user import User

logger = logging.getLogger(__name__)

def ensure_bootstrap_admin(
    db: Session,
    email: str | None = None,
    password: str | None = None,
    name: str | None = None,
) -> User:
    """Create the well-known admin account if it does not exist yet.

    Idempotent. An existing row with the bootstrap email is returned as-is;
    its role is never changed here.
    """
    email = (email or settings.bootstrap_admin_email).lower().strip()

    user = db.scalar(select(User).where(User.email == email))
    if user is not None:
        if user.role != GlobalRole.admin:
            logger.warning("bootstrap account %s exists with role %s, not promoting", email, user.role.value)
        return user

    user = User(
        email=email,
        name=name or settings.bootstrap_admin_name,
        password_hash=hash_password(password or settings.bootstrap_admin_password),
        role=GlobalRole.admin,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("created bootstrap admin %s", email)
    return user
