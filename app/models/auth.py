"""Pydantic models for authentication."""
from pydantic import BaseModel
from typing import Optional


class UserResponse(BaseModel):
    """User response model."""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[str] = None
