"""Dependencies for FastAPI routes."""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config import settings
from typing import Optional
import jwt
import logging

logger = logging.getLogger(__name__)

# HTTP Bearer token security
security = HTTPBearer()


def verify_access_token(token: str) -> dict:
    """
    Validate an access token issued by the auth service and return user info.

    Args:
        token: HS256 JWT signed with the project's JWT secret

    Returns:
        dict with user information (id, email, etc.)

    Raises:
        HTTPException: If token is invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
        )
    except jwt.ExpiredSignatureError:
        logger.warning("Token has expired")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid token: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid authentication credentials: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has no subject",
            headers={"WWW-Authenticate": "Bearer"},
        )

    metadata = payload.get("user_metadata") or {}
    return {
        "id": user_id,
        "email": payload.get("email"),
        "name": metadata.get("full_name") or metadata.get("name"),
        "user_metadata": metadata,
    }


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> dict:
    """
    Verify JWT token and return current user.
    """
    return verify_access_token(credentials.credentials)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(
        HTTPBearer(auto_error=False)
    )
) -> Optional[dict]:
    """
    Get current user if token is provided, otherwise return None.

    Args:
        credentials: Optional HTTP Bearer token credentials

    Returns:
        User data dictionary or None
    """
    if credentials is None:
        return None

    try:
        return verify_access_token(credentials.credentials)
    except HTTPException:
        return None
