# parking_app/services/lot_service.py
"""
Lot repository: queries and scan mutations over the lots/scans tables.

Lots leave this module as plain dicts shaped like the wire format
({lotID, title, capacity, allows, location, scanCount, available, scans?})
so the ranking pipeline and the enforcement sweep never touch ORM objects.

Scan-in is delete-then-insert inside one commit, so a plate has at most one
active scan per lot and a repeated entry resets its timestamp.
"""

import random
import string
from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from parking_app.models.lot import Lot
from parking_app.models.scan import Scan
from parking_app.services.occupancy_service import (
    available_spots,
    congestion_tier,
    normalize_plate,
)
from parking_app.utils.logger import get_logger

logger = get_logger(__name__)

SYNTHETIC_MIN_SCANS = 10
SYNTHETIC_MAX_SCANS = 20      # exclusive
REMOVE_BATCH_SIZE = 20
SYNTHETIC_PLATE_LENGTH = 7


def _scan_doc(scan: Scan) -> dict:
    return {"plateNumber": scan.plate_number, "timestamp": scan.timestamp}


def lot_document(lot: Lot, scan_count: Optional[int] = None, include_scans: bool = False) -> dict:
    if scan_count is None:
        scan_count = len(lot.scans)
    doc = {
        "lotID": lot.lot_id,
        "title": lot.title,
        "capacity": lot.capacity,
        "allows": dict(lot.allows or {}),
        "location": lot.location,
        "scanCount": scan_count,
        "available": available_spots(lot.capacity, scan_count),
    }
    if include_scans:
        doc["scans"] = [_scan_doc(s) for s in lot.scans]
    return doc


def _scan_counts(db: Session):
    return (
        db.query(Scan.lot_id.label("lot_id"), func.count(Scan.id).label("scan_count"))
        .group_by(Scan.lot_id)
        .subquery()
    )


def _lots_with_counts(db: Session):
    counts = _scan_counts(db)
    return (
        db.query(Lot, func.coalesce(counts.c.scan_count, 0))
        .outerjoin(counts, counts.c.lot_id == Lot.lot_id)
        .order_by(Lot.id)
        .all()
    )


def list_lots(db: Session, include_scans: bool = False) -> list[dict]:
    """Every lot with its scanCount (and optionally its active scans)."""
    return [lot_document(lot, int(count), include_scans) for lot, count in _lots_with_counts(db)]


def list_lot_occupancy(db: Session) -> list[dict]:
    """Every lot with scannedCount and a Low/Medium/High congestion tier."""
    result = []
    for lot, count in _lots_with_counts(db):
        count = int(count)
        result.append({
            "id": lot.id,
            "title": lot.title,
            "lotID": lot.lot_id,
            "allows": dict(lot.allows or {}),
            "capacity": lot.capacity,
            "scannedCount": count,
            "congestion": congestion_tier(count, lot.capacity),
        })
    return result


def get_lot(db: Session, lot_id: str) -> Optional[Lot]:
    return db.query(Lot).filter(Lot.lot_id == lot_id).first()


def create_lot(db: Session, lot_id: str, title: str, capacity: int,
               location: str, allows: dict) -> Lot:
    lot = Lot(lot_id=lot_id, title=title, capacity=capacity,
              location=location, allows=dict(allows or {}))
    db.add(lot)
    db.commit()
    logger.info(f"[LOTS] Created lot {lot_id} ({title}, capacity={capacity})")
    return lot


def scan_in(db: Session, plate_number: str, lot_id: str,
            now: Optional[datetime] = None) -> Optional[dict]:
    """
    Record an entry scan. Any existing scan for the plate in this lot is
    removed first. Returns the updated lot document, or None if the lot
    does not exist.
    """
    plate = normalize_plate(plate_number)
    lot = get_lot(db, lot_id)
    if lot is None:
        logger.warning(f"[SCAN] Entry for unknown lot {lot_id} (plate {plate}) — ignored")
        return None

    db.query(Scan).filter(Scan.lot_id == lot_id, Scan.plate_number == plate).delete()
    db.add(Scan(lot_id=lot_id, plate_number=plate, timestamp=now or datetime.utcnow()))
    db.commit()

    logger.info(f"[SCAN] IN  plate={plate} lot={lot_id}")
    return lot_document(lot, include_scans=True)


def scan_out(db: Session, plate_number: str, lot_id: str) -> Optional[dict]:
    """
    Remove the plate's active scan. A plate that is not present is a no-op.
    Returns the updated lot document, or None if the lot does not exist.
    """
    plate = normalize_plate(plate_number)
    lot = get_lot(db, lot_id)
    if lot is None:
        logger.warning(f"[SCAN] Exit for unknown lot {lot_id} (plate {plate}) — ignored")
        return None

    removed = db.query(Scan).filter(Scan.lot_id == lot_id, Scan.plate_number == plate).delete()
    db.commit()

    if removed:
        logger.info(f"[SCAN] OUT plate={plate} lot={lot_id}")
    else:
        logger.info(f"[SCAN] OUT plate={plate} lot={lot_id} — not present, nothing removed")
    return lot_document(lot, include_scans=True)


def _random_plate(rng) -> str:
    return "".join(rng.choice(string.ascii_uppercase + string.digits)
                   for _ in range(SYNTHETIC_PLATE_LENGTH))


def add_random_scans(db: Session, lot_id: str, rng=random) -> Optional[int]:
    """Load simulation: insert N synthetic scans, N uniform in [10, 20). Returns N."""
    lot = get_lot(db, lot_id)
    if lot is None:
        return None

    taken = {s.plate_number for s in lot.scans}
    n = rng.randrange(SYNTHETIC_MIN_SCANS, SYNTHETIC_MAX_SCANS)
    now = datetime.utcnow()
    for _ in range(n):
        plate = _random_plate(rng)
        while plate in taken:
            plate = _random_plate(rng)
        taken.add(plate)
        db.add(Scan(lot_id=lot_id, plate_number=plate, timestamp=now))
    db.commit()

    logger.info(f"[TESTING] Added {n} synthetic scans to {lot_id}")
    return n


def remove_front_scans(db: Session, lot_id: str, limit: int = REMOVE_BATCH_SIZE) -> Optional[int]:
    """Load simulation: drop up to `limit` of the oldest scans. Returns how many went."""
    lot = get_lot(db, lot_id)
    if lot is None:
        return None

    ids = [
        row[0] for row in
        db.query(Scan.id).filter(Scan.lot_id == lot_id).order_by(Scan.id).limit(limit).all()
    ]
    if ids:
        db.query(Scan).filter(Scan.id.in_(ids)).delete(synchronize_session=False)
    db.commit()

    logger.info(f"[TESTING] Removed {len(ids)} scans from {lot_id}")
    return len(ids)


def scan_count(db: Session, lot_id: str) -> int:
    return db.query(func.count(Scan.id)).filter(Scan.lot_id == lot_id).scalar() or 0
