# parking_app/services/ranking_service.py
"""
Lot ranking: filter by permit class → add distance to a target building → sort.

Sort modes:
  distance  nearest first
  spots     most available spots first
  hybrid    0.3 × distance score + 0.7 × spots score, best first

Both scores are normalized over the current candidate set (LotRange).
A lot with more than 50 free spots gets a flat spots score of 0.7 so that
very large lots don't crowd out everything else. When every candidate shares
the same value for a dimension, that dimension scores 1.0 for all of them.
"""

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Tuple

from parking_app.services.occupancy_service import available_spots
from parking_app.utils.geo import haversine_miles
from parking_app.utils.logger import get_logger

logger = get_logger(__name__)

SORT_MODES = ("hybrid", "distance", "spots")
PERMIT_CLASSES = ("resident", "facstaff", "visitor", "commuter")

DISTANCE_WEIGHT = 0.3
SPOTS_WEIGHT = 0.7
SPOTS_SATURATION = 50
SATURATED_SPOTS_SCORE = 0.7
NEUTRAL_SCORE = 1.0


@dataclass
class RankedLot:
    lot_id: str
    title: str
    capacity: int
    scan_count: int
    available: int
    location: str
    distance: float
    allows: dict = field(default_factory=dict)
    score: Optional[float] = None


@dataclass
class LotRange:
    min_distance: float
    max_distance: float
    min_spots: int
    max_spots: int


def parse_location(location) -> Optional[Tuple[float, float]]:
    """'41.74,-74.08' → (41.74, -74.08). None if malformed or non-finite."""
    if not isinstance(location, str):
        return None
    parts = location.split(",")
    if len(parts) != 2:
        return None
    try:
        lat, lon = float(parts[0]), float(parts[1])
    except ValueError:
        return None
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return None
    return lat, lon


def allows_permit(lot: Mapping, permit: str) -> bool:
    allows = lot.get("allows") or {}
    return isinstance(allows, Mapping) and allows.get(permit) is True


def _counts(lot: Mapping) -> Tuple[int, int, int]:
    """(capacity, scanCount, available) as ints; available clamped to [0, capacity]."""
    capacity = int(lot.get("capacity") or 0)
    scan_count = int(lot.get("scanCount") or 0)
    available = lot.get("available")
    if available is None:
        return capacity, scan_count, available_spots(capacity, scan_count)
    return capacity, scan_count, min(max(int(available), 0), max(capacity, 0))


def with_distances(lots: Iterable[Mapping], target: Tuple[float, float]) -> List[RankedLot]:
    """Attach distance (miles) to target. Lots with a bad location or bad counts are dropped."""
    result = []
    for lot in lots:
        coords = parse_location(lot.get("location"))
        if coords is None:
            logger.warning(f"[RANK] Skipping lot {lot.get('lotID')}: bad location {lot.get('location')!r}")
            continue
        try:
            capacity, scan_count, available = _counts(lot)
        except (TypeError, ValueError) as e:
            logger.warning(f"[RANK] Skipping lot {lot.get('lotID')}: bad counts ({e})")
            continue
        result.append(RankedLot(
            lot_id=lot.get("lotID"),
            title=lot.get("title", ""),
            capacity=capacity,
            scan_count=scan_count,
            available=available,
            location=lot["location"],
            distance=haversine_miles(target[0], target[1], coords[0], coords[1]),
            allows=dict(lot.get("allows") or {}),
        ))
    return result


def calc_ranges(lots: List[RankedLot]) -> Optional[LotRange]:
    if not lots:
        return None
    distances = [lot.distance for lot in lots]
    spots = [lot.available for lot in lots]
    return LotRange(min(distances), max(distances), min(spots), max(spots))


def _normalize(value: float, low: float, high: float) -> float:
    if high == low:
        return NEUTRAL_SCORE
    return (value - low) / (high - low)


def score_lot(lot: RankedLot, lot_range: LotRange) -> float:
    # Closer is better: farthest → 0, nearest → 1.
    if lot_range.max_distance == lot_range.min_distance:
        distance_score = NEUTRAL_SCORE
    else:
        distance_score = ((lot_range.max_distance - lot.distance)
                          / (lot_range.max_distance - lot_range.min_distance))
    if lot.available > SPOTS_SATURATION:
        spots_score = SATURATED_SPOTS_SCORE
    else:
        spots_score = _normalize(lot.available, lot_range.min_spots, lot_range.max_spots)
    return distance_score * DISTANCE_WEIGHT + spots_score * SPOTS_WEIGHT


def rank_lots(lots: Iterable[Mapping], permit: str, target: Tuple[float, float],
              sort_mode: str = "hybrid") -> List[RankedLot]:
    """Run the full filter → distance → sort pipeline over raw lot documents."""
    if sort_mode not in SORT_MODES:
        raise ValueError(f"Unknown sort mode: {sort_mode}")

    candidates = with_distances(
        (lot for lot in lots if isinstance(lot, Mapping) and allows_permit(lot, permit)), target
    )

    if sort_mode == "distance":
        return sorted(candidates, key=lambda lot: lot.distance)
    if sort_mode == "spots":
        return sorted(candidates, key=lambda lot: lot.available, reverse=True)

    lot_range = calc_ranges(candidates)
    for lot in candidates:
        lot.score = score_lot(lot, lot_range)
    return sorted(candidates, key=lambda lot: lot.score, reverse=True)
