# tracker/seed.py
"""
Initial data for an empty store - a small demo roster and one month of hours.
"""

import logging
from typing import Any, Dict, List

from tracker.storage.base import FULL_TIME, PART_TIME, ProductivityStorage

logger = logging.getLogger(__name__)

SEED_MONTH = "Aug-25"

SEED_CONTRACTORS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Avery Quinn", "work_email": "avery.quinn@example.com",
     "work_location": "Philippines", "position": "Systems Manager", "start_date": "10/21/2024"},
    {"id": 2, "name": "Jordan Ellis", "work_email": "jordan.ellis@example.com",
     "work_location": "Pakistan", "position": "Producer", "start_date": "5/12/2025"},
    {"id": 3, "name": "Riley Park", "work_email": "riley.park@example.com",
     "work_location": "India", "position": "Producer", "start_date": "6/2/2025"},
    {"id": 4, "name": "Casey Morgan", "work_email": "casey.morgan@example.com",
     "work_location": "Philippines", "position": "Video Editor", "start_date": "6/9/2025",
     "birthday": "10/16/1990"},
    {"id": 5, "name": "Taylor Reed", "work_email": "taylor.reed@example.com",
     "work_location": "Sri Lanka", "position": "Video Editor", "start_date": "5/5/2025"},
    {"id": 6, "name": "Morgan Blake", "work_email": "morgan.blake@example.com",
     "work_location": "Philippines", "position": "Client Success Manager",
     "start_date": "8/25/2025", "contractor_type": PART_TIME},
    {"id": 7, "name": "Sam Carter", "work_email": "sam.carter@example.com",
     "work_location": "Egypt", "position": "LinkedIn Optimization",
     "start_date": "7/21/2025", "contractor_type": PART_TIME},
    {"id": 8, "name": "Drew Hayes", "work_email": "drew.hayes@example.com",
     "work_location": "United States", "position": "Operations Lead", "start_date": ""},
]

SEED_PRODUCTIVITY: List[Dict[str, Any]] = [
    {"contractor_id": 1, "month": SEED_MONTH, "productive_hours": 114.65, "total_hours": 120.17, "productivity": 95.20},
    {"contractor_id": 2, "month": SEED_MONTH, "productive_hours": 82.85, "total_hours": 85.00, "productivity": 97.47},
    {"contractor_id": 3, "month": SEED_MONTH, "productive_hours": 199.33, "total_hours": 204.00, "productivity": 97.76},
    {"contractor_id": 4, "month": SEED_MONTH, "productive_hours": 173.72, "total_hours": 180.00, "productivity": 96.51},
    {"contractor_id": 5, "month": SEED_MONTH, "productive_hours": 224.37, "total_hours": 262.00, "productivity": 85.65},
    {"contractor_id": 6, "month": SEED_MONTH, "productive_hours": 35.43, "total_hours": 40.00, "productivity": 88.58},
    {"contractor_id": 7, "month": SEED_MONTH, "productive_hours": 0.00, "total_hours": 0.00, "productivity": 0.00},
    {"contractor_id": 8, "month": SEED_MONTH, "productive_hours": 171.93, "total_hours": 178.00, "productivity": 96.59},
]


def seed_storage(storage: ProductivityStorage) -> bool:
    """
    Load the demo data when the store has no contractors yet.

    Returns:
        True when data was seeded, False when the store was already populated
    """
    existing = storage.get_all_contractors()
    if existing:
        logger.info(f"Storage already seeded with {len(existing)} contractors")
        return False

    logger.info("Seeding storage with initial data...")
    contractors = storage.upsert_contractors(
        dict(row, contractor_type=row.get("contractor_type", FULL_TIME)) for row in SEED_CONTRACTORS
    )
    records = storage.upsert_productivity_records(SEED_PRODUCTIVITY)
    logger.info(f"Seeded {len(contractors)} contractors and {len(records)} productivity records")
    return True
