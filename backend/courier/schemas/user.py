"""User Schemas — registration and login payloads.

Invariants:
    - username: 1-255 chars, stripped, non-empty
    - password: 1-1024 chars, never echoed back
"""

from pydantic import BaseModel, Field, field_validator


class UserCredentials(BaseModel):
    """Body of POST /users and POST /login."""
    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=1024)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username cannot be empty or whitespace")
        return v


class UserCreatedResponse(BaseModel):
    id: int
    username: str


class LoginResponse(BaseModel):
    """id is the Session row id; the token itself is bound to the identity id."""
    id: int
    token: str
