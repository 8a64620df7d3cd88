# tracker/ranking/thresholds.py
"""
Productive-hours thresholds by contractor type.

This is the single source for the cut points used by rankings, the
dashboard and exports. "medium" is the pass/fail line for under-performers.
"""

from dataclasses import dataclass
from typing import Dict

from tracker.storage.base import FULL_TIME, PART_TIME


@dataclass(frozen=True)
class Thresholds:
    low: float
    medium: float
    high: float


THRESHOLDS: Dict[str, Thresholds] = {
    FULL_TIME: Thresholds(low=0, medium=100, high=173.3),
    PART_TIME: Thresholds(low=0, medium=50, high=86.7),
}

# Contractor type is free text; anything unrecognized is treated as full time
DEFAULT_CONTRACTOR_TYPE = FULL_TIME


def resolve_contractor_type(contractor_type: str) -> str:
    return contractor_type if contractor_type in THRESHOLDS else DEFAULT_CONTRACTOR_TYPE


def get_thresholds(contractor_type: str) -> Thresholds:
    """Look up the threshold row for a contractor type."""
    return THRESHOLDS[resolve_contractor_type(contractor_type)]


def medium_threshold(contractor_type: str) -> float:
    return get_thresholds(contractor_type).medium


def threshold_label(contractor_type: str) -> str:
    """Human-readable rule used in exports, e.g. "Full Time < 100h"."""
    resolved = resolve_contractor_type(contractor_type)
    return f"{resolved} < {THRESHOLDS[resolved].medium:g}h"
