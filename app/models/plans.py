"""Pydantic models for saved travel plans."""

from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field

from app.models.recommendation import CostBreakdown, TravelStyle


class PlanBase(BaseModel):
    """Common fields for plans."""

    destination: str = Field(..., min_length=1, description="Trip destination")
    duration: int = Field(..., gt=0, description="Trip length in days")
    people_count: int = Field(..., gt=0, description="Number of travellers")
    travel_style: TravelStyle = Field(..., description="budget, standard or premium")


class PlanCreateRequest(PlanBase):
    """Plan creation payload."""

    ai_recommendation: Optional[Dict[str, Any]] = Field(
        None, description="Recommendation returned by the AI endpoint, if any"
    )


class PlanResponse(PlanBase):
    """Plan response returned to clients."""

    id: str
    user_id: str
    ai_recommendation: Optional[Dict[str, Any]] = None
    total_cost: float = 0
    cost_breakdown: Optional[CostBreakdown] = None
    created_at: Optional[str] = None


class ChartSlice(BaseModel):
    """One category of the cost pie/bar charts."""

    name: str
    label: str
    value: float
    value_in_million: float
    percent: int
    formatted: str


class CostChartResponse(BaseModel):
    plan_id: str
    destination: str
    has_estimate: bool
    total: float = 0
    formatted_total: Optional[str] = None
    slices: List[ChartSlice] = Field(default_factory=list)


class ComparisonRow(BaseModel):
    plan_id: str
    label: str
    destination: str
    duration: int
    people_count: int
    travel_style: TravelStyle
    cost_breakdown: Optional[CostBreakdown] = None
    total_cost: float
    formatted_total: str


class PlanComparisonResponse(BaseModel):
    rows: List[ComparisonRow]
    cheapest_id: str
    most_expensive_id: str
    difference: float
    formatted_difference: str
