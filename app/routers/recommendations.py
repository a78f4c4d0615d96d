"""AI travel recommendation endpoint."""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.dependencies import get_optional_user
from app.models.recommendation import (
    ErrorEnvelope,
    RecommendationRequest,
    RecommendationResponse,
    SuggestionResponse,
)
from app.services.recommendation_service import (
    RecommendationService,
    get_recommendation_service,
)

router = APIRouter(prefix="/recommendations", tags=["recommendations"])
logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Something went wrong while processing the request"


def error_response(exc: Exception) -> JSONResponse:
    """Error envelope shown by the UI, always marked as retryable."""
    envelope = ErrorEnvelope(error=str(exc) or DEFAULT_ERROR_MESSAGE, retry=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=envelope.model_dump(),
    )


@router.post(
    "",
    responses={
        200: {"model": Union[RecommendationResponse, SuggestionResponse]},
        500: {"model": ErrorEnvelope},
    },
)
async def create_recommendation(
    payload: RecommendationRequest,
    current_user: Optional[dict] = Depends(get_optional_user),
    service: RecommendationService = Depends(get_recommendation_service),
):
    """
    Get an itinerary and cost estimate, or destination suggestions.

    The provider's JSON is returned unmodified. Any failure becomes
    `{"error": ..., "retry": true}` with status 500.
    """
    user_id = current_user["id"] if current_user else "anonymous"
    try:
        result = await service.recommend(payload)
    except Exception as exc:
        logger.error(f"Error in ai-travel-recommendation (user={user_id}): {exc}")
        return error_response(exc)

    return JSONResponse(content=result)
