"""
AI travel recommendation service.
Builds the prompt pair for a request and forwards it to the completion provider.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from app.models.recommendation import (
    CostBreakdown,
    RecommendationRequest,
    RequestType,
    TravelStyle,
)
from app.services.completion_client import ChatCompletionClient
from app.services.prompts import (
    RECOMMENDATION_SYSTEM_PROMPT,
    RECOMMENDATION_USER_PROMPT,
    SUGGESTION_SYSTEM_PROMPT,
    SUGGESTION_USER_PROMPT,
)

logger = logging.getLogger(__name__)


def build_prompts(request: RecommendationRequest) -> Tuple[str, str]:
    """Return the (system, user) prompt pair for a request."""
    style = request.style.value
    if request.type == RequestType.SUGGESTION:
        return SUGGESTION_SYSTEM_PROMPT, SUGGESTION_USER_PROMPT.format(style=style)

    return RECOMMENDATION_SYSTEM_PROMPT, RECOMMENDATION_USER_PROMPT.format(
        destination=request.destination,
        duration=request.duration,
        people=request.people,
        style=style,
    )


def extract_cost_breakdown(recommendation: Optional[Dict[str, Any]]) -> Optional[CostBreakdown]:
    """
    Pull the cost breakdown out of a stored recommendation.

    Returns None when there is no recommendation or it carries no usable breakdown.
    """
    if not recommendation:
        return None
    raw = recommendation.get("costBreakdown") or recommendation.get("cost_breakdown")
    if not isinstance(raw, dict):
        return None
    try:
        return CostBreakdown.model_validate(raw)
    except ValueError:
        logger.warning("Ignoring malformed cost breakdown in recommendation")
        return None


class RecommendationService:
    """Stateless; every call is an independent request to the provider."""

    def __init__(self, client: Optional[ChatCompletionClient] = None):
        self.client = client or ChatCompletionClient()

    async def recommend(self, request: RecommendationRequest) -> Any:
        system_prompt, user_prompt = build_prompts(request)
        logger.info(
            f"Requesting {request.type.value} for destination={request.destination}, "
            f"style={request.style.value}"
        )
        return await self.client.complete_json(system_prompt, user_prompt)

    async def suggest(self, style: TravelStyle) -> Any:
        return await self.recommend(
            RecommendationRequest(style=style, type=RequestType.SUGGESTION)
        )


def get_recommendation_service() -> RecommendationService:
    """FastAPI dependency; reads the current settings on each request."""
    return RecommendationService()
