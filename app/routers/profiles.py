"""Profiles router - read and upsert the current user's profile."""

import logging
from datetime import datetime
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.db_models import Profile
from app.dependencies import get_current_user
from app.models.profiles import (
    ProfileResponse,
    ProfileSuggestionsResponse,
    ProfileUpdateRequest,
)
from app.models.recommendation import Suggestion, TravelStyle
from app.routers.recommendations import error_response
from app.services.recommendation_service import (
    RecommendationService,
    get_recommendation_service,
)

router = APIRouter(prefix="/profiles", tags=["profiles"])
logger = logging.getLogger(__name__)

DEFAULT_NAME = "Traveler"


def display_name(current_user: dict) -> str:
    """Name from the token, else the capitalized email local part."""
    if current_user.get("name"):
        return current_user["name"]
    email = current_user.get("email")
    if email:
        local = email.split("@")[0]
        if local:
            return local[:1].upper() + local[1:]
    return DEFAULT_NAME


def read_suggestions(result: Any) -> List[Suggestion]:
    """Suggestions from a provider reply; a missing list is empty and malformed items are skipped."""
    raw = result.get("suggestions") if isinstance(result, dict) else None
    if not isinstance(raw, list):
        return []

    suggestions = []
    for item in raw:
        try:
            suggestions.append(Suggestion.model_validate(item))
        except ValidationError:
            logger.warning(f"Skipping malformed suggestion: {item!r}")
    return suggestions


async def _load_profile(db: AsyncSession, user_id: str) -> Optional[Profile]:
    result = await db.execute(select(Profile).where(Profile.id == user_id))
    return result.scalar_one_or_none()


def _to_response(profile: Optional[Profile], current_user: dict) -> ProfileResponse:
    if profile is None:
        return ProfileResponse(
            id=current_user["id"],
            full_name=display_name(current_user),
            email=current_user.get("email"),
        )
    return ProfileResponse(
        id=profile.id,
        full_name=profile.full_name or display_name(current_user),
        favorite_style=profile.favorite_style,
        avatar_url=profile.avatar_url,
        email=current_user.get("email"),
        updated_at=profile.updated_at.isoformat() if profile.updated_at else None,
    )


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Stored profile, or defaults derived from the token."""
    profile = await _load_profile(db, current_user["id"])
    return _to_response(profile, current_user)


@router.put("/me", response_model=ProfileResponse)
async def upsert_my_profile(
    payload: ProfileUpdateRequest,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create or replace the current user's profile."""
    profile = await _load_profile(db, current_user["id"])
    if profile is None:
        profile = Profile(id=current_user["id"])
        db.add(profile)

    profile.full_name = payload.full_name
    profile.favorite_style = payload.favorite_style.value if payload.favorite_style else None
    profile.avatar_url = payload.avatar_url
    profile.updated_at = datetime.utcnow()

    try:
        await db.commit()
        await db.refresh(profile)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error(f"Failed to save profile for user {current_user['id']}: {exc}")
        raise HTTPException(status_code=500, detail="Failed to save your profile. Please try again.")

    return _to_response(profile, current_user)


@router.get("/me/suggestions", response_model=ProfileSuggestionsResponse)
async def get_my_suggestions(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    service: RecommendationService = Depends(get_recommendation_service),
):
    """Destination suggestions for the user's favorite travel style."""
    profile = await _load_profile(db, current_user["id"])
    if profile is None or not profile.favorite_style:
        return ProfileSuggestionsResponse()

    style = TravelStyle(profile.favorite_style)
    try:
        result = await service.suggest(style)
    except Exception as exc:
        logger.error(f"Error loading AI suggestions for user {current_user['id']}: {exc}")
        return error_response(exc)

    return ProfileSuggestionsResponse(style=style, suggestions=read_suggestions(result))
