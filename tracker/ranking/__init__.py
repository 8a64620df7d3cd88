# tracker/ranking/__init__.py
"""
Ranking - thresholds, monthly rankings and dashboard aggregates.
"""

from tracker.ranking.thresholds import (
    THRESHOLDS,
    Thresholds,
    get_thresholds,
    medium_threshold,
    threshold_label,
)
from tracker.ranking.engine import (
    MonthlyRanking,
    monthly_rankings,
    top_performers,
    under_performers,
)
from tracker.ranking.dashboard import (
    DashboardSummary,
    SpecialSections,
    dashboard_summary,
    special_sections,
    latest_month,
)

__all__ = [
    "THRESHOLDS",
    "Thresholds",
    "get_thresholds",
    "medium_threshold",
    "threshold_label",
    "MonthlyRanking",
    "monthly_rankings",
    "top_performers",
    "under_performers",
    "DashboardSummary",
    "SpecialSections",
    "dashboard_summary",
    "special_sections",
    "latest_month",
]
