"""Utility functions for the backend."""

from app.utils.cost_charts import build_chart_slices, build_comparison
from app.utils.currency import format_rupiah

__all__ = ["build_chart_slices", "build_comparison", "format_rupiah"]
