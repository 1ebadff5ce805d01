import uuid
from pydantic import BaseModel, ConfigDict

from taskboard.models.enums import MemberRole

class MemberAddIn(BaseModel):
    user_id: uuid.UUID
    role: MemberRole = MemberRole.member

class MemberOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    project_id: uuid.UUID
    user_id: uuid.UUID
    role: MemberRole
