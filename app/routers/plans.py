"""Plans router - create, list, compare and delete saved travel plans."""

import logging
from typing import List, Optional
from uuid import uuid4
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.db_models import TravelPlan
from app.dependencies import get_current_user
from app.models.plans import (
    CostChartResponse,
    PlanComparisonResponse,
    PlanCreateRequest,
    PlanResponse,
)
from app.models.recommendation import CostBreakdown
from app.services.recommendation_service import extract_cost_breakdown
from app.utils import build_chart_slices, build_comparison, format_rupiah

router = APIRouter(prefix="/plans", tags=["plans"])
logger = logging.getLogger(__name__)


def _to_response(plan: TravelPlan) -> PlanResponse:
    return PlanResponse(
        id=plan.id,
        user_id=plan.user_id,
        destination=plan.destination,
        duration=plan.duration,
        people_count=plan.people_count,
        travel_style=plan.travel_style,
        ai_recommendation=plan.ai_recommendation,
        total_cost=plan.total_cost or 0,
        cost_breakdown=plan.cost_breakdown,
        created_at=plan.created_at.isoformat() if plan.created_at else None,
    )


async def _get_owned_plan(db: AsyncSession, plan_id: str, user_id: str) -> TravelPlan:
    result = await db.execute(
        select(TravelPlan).where(
            TravelPlan.id == plan_id,
            TravelPlan.user_id == user_id,
        )
    )
    plan = result.scalar_one_or_none()
    if not plan:
        raise HTTPException(status_code=404, detail="Plan not found")
    return plan


@router.get("", response_model=List[PlanResponse])
async def list_plans(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List all plans for the current user, newest first."""
    result = await db.execute(
        select(TravelPlan)
        .where(TravelPlan.user_id == current_user["id"])
        .order_by(TravelPlan.created_at.desc())
    )
    return [_to_response(plan) for plan in result.scalars().all()]


@router.post("", response_model=PlanResponse, status_code=status.HTTP_201_CREATED)
async def create_plan(
    payload: PlanCreateRequest,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Save a plan.

    Total cost and breakdown come from the attached AI recommendation; a plan
    saved without one gets a zero total and no breakdown.
    """
    breakdown = extract_cost_breakdown(payload.ai_recommendation)

    plan = TravelPlan(
        id=str(uuid4()),
        user_id=current_user["id"],
        destination=payload.destination,
        duration=payload.duration,
        people_count=payload.people_count,
        travel_style=payload.travel_style.value,
        ai_recommendation=payload.ai_recommendation,
        total_cost=breakdown.total if breakdown else 0,
        cost_breakdown=breakdown.model_dump() if breakdown else None,
        created_at=datetime.utcnow(),
    )

    try:
        db.add(plan)
        await db.commit()
        await db.refresh(plan)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error(f"Failed to save plan for user {current_user['id']}: {exc}")
        raise HTTPException(status_code=500, detail="Failed to save the plan. Please try again.")

    logger.info(f"Plan {plan.id} saved for user {current_user['id']}")
    return _to_response(plan)


@router.delete("")
async def delete_all_plans(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete every plan owned by the current user."""
    try:
        result = await db.execute(
            delete(TravelPlan).where(TravelPlan.user_id == current_user["id"])
        )
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error(f"Failed to clear plans for user {current_user['id']}: {exc}")
        raise HTTPException(status_code=500, detail="Failed to delete your plans. Please try again.")

    return {"message": "All plans deleted successfully", "deleted": result.rowcount or 0}


@router.get("/compare", response_model=PlanComparisonResponse)
async def compare_plans(
    ids: Optional[List[str]] = Query(None, description="Plans to compare; all plans when omitted"),
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Compare the total cost of two or more of the user's plans."""
    query = select(TravelPlan).where(TravelPlan.user_id == current_user["id"])
    if ids:
        query = query.where(TravelPlan.id.in_(ids))
    result = await db.execute(query.order_by(TravelPlan.created_at.desc()))
    plans = list(result.scalars().all())

    if ids:
        by_id = {plan.id: plan for plan in plans}
        missing = [plan_id for plan_id in ids if plan_id not in by_id]
        if missing:
            raise HTTPException(status_code=404, detail="Plan not found")
        # Keep the order the client asked for, without duplicates
        plans = [by_id[plan_id] for plan_id in dict.fromkeys(ids)]

    try:
        return build_comparison(plans)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("/{plan_id}", response_model=PlanResponse)
async def get_plan(
    plan_id: str,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get a specific plan."""
    plan = await _get_owned_plan(db, plan_id, current_user["id"])
    return _to_response(plan)


@router.get("/{plan_id}/cost-chart", response_model=CostChartResponse)
async def get_cost_chart(
    plan_id: str,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Chart data for the plan's cost breakdown."""
    plan = await _get_owned_plan(db, plan_id, current_user["id"])

    if not plan.cost_breakdown:
        return CostChartResponse(plan_id=plan.id, destination=plan.destination, has_estimate=False)

    breakdown = CostBreakdown.model_validate(plan.cost_breakdown)
    return CostChartResponse(
        plan_id=plan.id,
        destination=plan.destination,
        has_estimate=True,
        total=breakdown.total,
        formatted_total=format_rupiah(breakdown.total),
        slices=build_chart_slices(breakdown),
    )


@router.delete("/{plan_id}")
async def delete_plan(
    plan_id: str,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a plan."""
    plan = await _get_owned_plan(db, plan_id, current_user["id"])

    try:
        await db.delete(plan)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error(f"Failed to delete plan {plan_id}: {exc}")
        raise HTTPException(status_code=500, detail="Failed to delete the plan. Please try again.")

    return {"message": "Plan deleted successfully"}
