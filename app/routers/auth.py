"""Authentication routes.

Sign-up, login and logout are handled by the managed auth service on the
frontend. The backend only validates its access tokens.
"""
from fastapi import APIRouter, Depends
from app.models.auth import UserResponse
from app.dependencies import get_current_user

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: dict = Depends(get_current_user)):
    """
    Get current authenticated user information from the access token.

    Args:
        current_user: Current authenticated user (from the token)

    Returns:
        UserResponse with user data from the token
    """
    metadata = current_user.get("user_metadata") or {}
    return UserResponse(
        id=current_user["id"],
        email=current_user.get("email"),
        name=current_user.get("name"),
        avatar_url=metadata.get("avatar_url"),
        created_at=None,  # Not part of the access token claims
    )
