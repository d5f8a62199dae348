import uuid

from pydantic import BaseModel, EmailStr

from app.models.enums import Role

class LoginIn(BaseModel):
    email: EmailStr
    password: str

class LoginUserOut(BaseModel):
    id: uuid.UUID
    email: str
    role: Role
    org_id: uuid.UUID | None

class AccessTokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: LoginUserOut
