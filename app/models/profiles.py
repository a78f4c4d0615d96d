"""Pydantic models for user profiles."""

from typing import List, Optional
from pydantic import BaseModel, Field

from app.models.recommendation import Suggestion, TravelStyle


class ProfileUpdateRequest(BaseModel):
    """Profile edit payload (upserted)."""

    full_name: str = Field(..., min_length=1)
    favorite_style: Optional[TravelStyle] = None
    avatar_url: Optional[str] = None


class ProfileResponse(BaseModel):
    id: str
    full_name: str
    favorite_style: Optional[TravelStyle] = None
    avatar_url: Optional[str] = None
    email: Optional[str] = None
    updated_at: Optional[str] = None


class ProfileSuggestionsResponse(BaseModel):
    style: Optional[TravelStyle] = None
    suggestions: List[Suggestion] = Field(default_factory=list)
