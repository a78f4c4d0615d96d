"""Pydantic models for AI travel recommendations."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TravelStyle(str, Enum):
    """Travel styles offered in the plan form."""

    BUDGET = "budget"
    STANDARD = "standard"
    PREMIUM = "premium"


class RequestType(str, Enum):
    RECOMMENDATION = "recommendation"
    SUGGESTION = "suggestion"


class RecommendationRequest(BaseModel):
    """Payload accepted by the recommendation endpoint."""

    destination: Optional[str] = Field(None, min_length=1, description="Trip destination")
    duration: Optional[int] = Field(None, gt=0, description="Trip length in days")
    people: Optional[int] = Field(None, gt=0, description="Number of travellers")
    style: TravelStyle
    type: RequestType = RequestType.RECOMMENDATION

    @model_validator(mode="after")
    def require_trip_details(self):
        if self.type == RequestType.RECOMMENDATION:
            missing = [
                name
                for name in ("destination", "duration", "people")
                if getattr(self, name) is None
            ]
            if missing:
                raise ValueError(
                    f"Missing trip details for a recommendation: {', '.join(missing)}"
                )
        return self


class CostBreakdown(BaseModel):
    """Four-category cost decomposition plus total (Rupiah)."""

    transportation: float = 0
    accommodation: float = 0
    food: float = 0
    activities: float = 0
    total: float = 0


class Activity(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    time: Optional[str] = None
    location: Optional[str] = None
    activity: str
    estimated_cost: float = Field(0, alias="estimatedCost")


class ItineraryDay(BaseModel):
    day: int
    activities: List[Activity] = Field(default_factory=list)


class Alternative(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    destination: str
    estimated_cost: float = Field(0, alias="estimatedCost")
    reason: Optional[str] = None


class RecommendationResponse(BaseModel):
    """Itinerary, cost breakdown, tips and alternatives for one trip."""

    model_config = ConfigDict(populate_by_name=True)

    itinerary: List[ItineraryDay] = Field(default_factory=list)
    cost_breakdown: Optional[CostBreakdown] = Field(None, alias="costBreakdown")
    tips: List[str] = Field(default_factory=list)
    alternatives: List[Alternative] = Field(default_factory=list)


class Suggestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    destination: str
    estimated_cost: float = Field(0, alias="estimatedCost")
    duration: Optional[int] = None
    reason: Optional[str] = None
    highlights: List[str] = Field(default_factory=list)


class SuggestionResponse(BaseModel):
    suggestions: List[Suggestion] = Field(default_factory=list)


class ErrorEnvelope(BaseModel):
    """Body returned when a recommendation cannot be produced."""

    error: str
    retry: bool = True
