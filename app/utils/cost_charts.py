"""
Chart and comparison data for saved plans.
The frontend renders these slices and rows directly in its pie, bar and table views.
"""

from typing import Any, Dict, List, Optional, Sequence

from app.models.recommendation import CostBreakdown
from app.utils.currency import format_rupiah

# Category key -> label, in display order
CATEGORY_LABELS = {
    "transportation": "Transportation",
    "accommodation": "Accommodation",
    "food": "Food",
    "activities": "Activities",
}


def build_chart_slices(breakdown: Optional[CostBreakdown]) -> List[Dict[str, Any]]:
    """
    Turn a cost breakdown into chart slices.

    Categories with a zero (or negative) value are left out. Percentages are
    relative to the breakdown's own total, falling back to the sum of the
    categories when the total is missing.
    """
    if breakdown is None:
        return []

    values = {key: getattr(breakdown, key) or 0 for key in CATEGORY_LABELS}
    total = breakdown.total or sum(v for v in values.values() if v > 0)

    slices = []
    for key, label in CATEGORY_LABELS.items():
        value = values[key]
        if value <= 0:
            continue
        slices.append({
            "name": key,
            "label": label,
            "value": value,
            "value_in_million": value / 1_000_000,
            "percent": round(value / total * 100) if total else 0,
            "formatted": format_rupiah(value),
        })
    return slices


def build_comparison(plans: Sequence[Any]) -> Dict[str, Any]:
    """
    Build comparison rows for two or more plans.

    Args:
        plans: Plan records (anything with the TravelPlan attributes), in the
            order they should be listed

    Raises:
        ValueError: fewer than two plans were given
    """
    if len(plans) < 2:
        raise ValueError("At least two plans are needed for a comparison")

    rows = []
    for index, plan in enumerate(plans, start=1):
        total = plan.total_cost or 0
        rows.append({
            "plan_id": plan.id,
            "label": f"Plan {index}",
            "destination": plan.destination,
            "duration": plan.duration,
            "people_count": plan.people_count,
            "travel_style": plan.travel_style,
            "cost_breakdown": plan.cost_breakdown,
            "total_cost": total,
            "formatted_total": format_rupiah(total),
        })

    cheapest = min(rows, key=lambda row: row["total_cost"])
    most_expensive = max(rows, key=lambda row: row["total_cost"])
    difference = most_expensive["total_cost"] - cheapest["total_cost"]

    return {
        "rows": rows,
        "cheapest_id": cheapest["plan_id"],
        "most_expensive_id": most_expensive["plan_id"],
        "difference": difference,
        "formatted_difference": format_rupiah(difference),
    }
