"""
Authentication Schemas

Request/response models for authentication endpoints.
"""
from pydantic import BaseModel, Field

from notesapp.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Login request body. Emails are unique system-wide, so no tenant hint."""
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "admin@acme.test",
                "password": "password"
            }
        }
    }


class LoginResponse(BaseModel):
    """Bearer token plus a summary of who it belongs to."""
    token: str
    token_type: str = "bearer"
    user: UserResponse


class CurrentUserResponse(BaseModel):
    user: UserResponse
