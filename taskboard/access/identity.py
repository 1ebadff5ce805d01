import uuid
from dataclasses import dataclass

from taskboard.models.enums import GlobalRole

@dataclass(frozen=True)
class Identity:
    """The authenticated caller as seen by the access evaluator."""

    user_id: uuid.UUID
    role: GlobalRole

    @classmethod
    def from_user(cls, user) -> "Identity":
        return cls(user_id=user.id, role=GlobalRole(user.role))

    @property
    def is_admin(self) -> bool:
        return self.role is GlobalRole.admin
