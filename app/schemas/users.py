import uuid

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.auth.passwords import MAX_PASSWORD_BYTES, password_too_long
from app.models.enums import Role

class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    name: str
    role: Role
    org_id: uuid.UUID | None

class UserCreateIn(BaseModel):
    email: EmailStr
    name: str = Field(min_length=1, max_length=200)
    role: Role = Role.viewer

class UserCreatedOut(BaseModel):
    user: UserOut
    # shown once; only the hash is stored
    password: str

class ProfileUpdateIn(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)

class ChangePasswordIn(BaseModel):
    current_password: str
    new_password: str = Field(min_length=8, max_length=MAX_PASSWORD_BYTES)

    @field_validator("new_password")
    @classmethod
    def _fits_bcrypt(cls, v: str) -> str:
        # multi-byte characters can pass max_length and still overflow
        if password_too_long(v):
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v

class ChangePasswordOut(BaseModel):
    success: bool = True

class SeedOrgOut(BaseModel):
    id: uuid.UUID
    name: str

class SeedOut(BaseModel):
    owner: UserOut
    org: SeedOrgOut
