# parking_app/services/occupancy_service.py
"""
Occupancy helpers shared by the lot repository, the ranking pipeline and
the enforcement sweep: plate normalization, available spots, congestion tier.
"""

import re

from parking_app.config import settings

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def normalize_plate(plate_number: str) -> str:
    """'abc-123 ' → 'ABC123'"""
    return _NON_ALNUM.sub("", plate_number or "").upper()


def available_spots(capacity: int, scan_count: int) -> int:
    """Free spots, clamped to [0, capacity]."""
    capacity = max(0, capacity or 0)
    return min(capacity, max(capacity - (scan_count or 0), 0))


def congestion_tier(scanned_count: int, capacity: int,
                    medium: float = None, high: float = None) -> str:
    """Low < medium threshold ≤ Medium < high threshold ≤ High."""
    medium = settings.CONGESTION_MEDIUM_THRESHOLD if medium is None else medium
    high = settings.CONGESTION_HIGH_THRESHOLD if high is None else high

    if not capacity or capacity <= 0:
        # An empty lot with no spots reads Low; any car in it reads High.
        return "High" if scanned_count > 0 else "Low"

    ratio = scanned_count / capacity
    if ratio >= high:
        return "High"
    if ratio >= medium:
        return "Medium"
    return "Low"
