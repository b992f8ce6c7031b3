# /gradeledger/models/user_model.py

from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator


class UserCreate(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Invalid email format")
        return v


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    is_active: bool = True


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class SessionContext(BaseModel):
    """
    The signed-in identity. It is passed explicitly to every service call that
    reads or writes owner-scoped data.
    """
    model_config = ConfigDict(frozen=True)

    owner_id: str
    email: Optional[str] = None
    access_token: Optional[str] = None
