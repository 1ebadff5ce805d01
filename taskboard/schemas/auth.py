import uuid

from pydantic import BaseModel, EmailStr, Field

from taskboard.models.enums import GlobalRole

class RegisterIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    name: str = Field(min_length=1, max_length=200)

class LoginIn(BaseModel):
    email: EmailStr
    password: str

class AccessTokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"

class UserOut(BaseModel):
    id: uuid.UUID
    email: str
    name: str
    role: GlobalRole
