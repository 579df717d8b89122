"""
Note Schemas

Request/response models for note operations.

Note bodies have no tenant field. Any tenant_id sent by a client is
ignored; the tenant always comes from the authenticated principal.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class NoteWrite(BaseModel):
    """Body for creating or replacing a note. Both fields are required."""
    model_config = {"str_strip_whitespace": True}

    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)


class NoteResponse(BaseModel):
    id: str
    title: str
    content: str
    tenant_id: str
    author_id: Optional[str]
    author_email: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    message: str
