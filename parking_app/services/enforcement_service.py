# parking_app/services/enforcement_service.py
"""
Unauthorized-vehicle sweep.

Every active scan whose plate is not registered and which has been parked
longer than the threshold (15 min by default) produces an alert
{plateNumber, lotID, minutesParked}. Alerts are computed, never stored.

Scan timestamps come either as datetimes or as strings. Strings are ISO-8601
or the legacy "Tue Nov 11 2025 14:05:09 EST" form. The legacy form only
understands LEGACY_TZ_TOKEN, swapped for the fixed LEGACY_TZ_OFFSET before
parsing; other zone names (or DST variants) are not understood and the scan
is skipped.
"""

import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Mapping, Optional

from sqlalchemy.orm import Session

from parking_app.config import settings
from parking_app.services.lot_service import list_lots
from parking_app.services.occupancy_service import normalize_plate
from parking_app.services.vehicle_service import registered_plates
from parking_app.utils.logger import get_logger

logger = get_logger(__name__)

_LEGACY_FORMATS = ("%a %b %d %Y %H:%M:%S %z", "%a %b %d %Y %H:%M:%S GMT%z")
_TRAILING_ZONE_NAME = re.compile(r"\s*\([^)]*\)\s*$")


@dataclass
class EnforcementAlert:
    plate_number: str
    lot_id: str
    minutes_parked: int


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_legacy_timestamp(value: str, tz_token: str = None, tz_offset: str = None) -> Optional[datetime]:
    tz_token = tz_token or settings.LEGACY_TZ_TOKEN
    tz_offset = tz_offset or settings.LEGACY_TZ_OFFSET

    text = value.strip()
    # "... GMT-0500 (EST)" → "... GMT-0500"
    text = _TRAILING_ZONE_NAME.sub("", text)
    text = re.sub(rf"\b{re.escape(tz_token)}\b", tz_offset, text)

    for fmt in _LEGACY_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def parse_scan_timestamp(value, tz_token: str = None, tz_offset: str = None) -> Optional[datetime]:
    """Timezone-aware UTC datetime, or None when the value can't be read."""
    if isinstance(value, datetime):
        return _as_utc(value)
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        return _as_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))
    except ValueError:
        pass

    parsed = parse_legacy_timestamp(value, tz_token, tz_offset)
    return _as_utc(parsed) if parsed else None


def find_unauthorized_vehicles(
    lots: Iterable[Mapping],
    registered: Iterable[str],
    now: datetime,
    threshold_minutes: int = None,
    tz_token: str = None,
    tz_offset: str = None,
) -> List[EnforcementAlert]:
    """Pure sweep over lot documents carrying a `scans` list."""
    if threshold_minutes is None:
        threshold_minutes = settings.UNAUTHORIZED_THRESHOLD_MINUTES
    now = _as_utc(now)
    known = {normalize_plate(p) for p in registered if p}
    alerts = []

    for lot in lots:
        if not isinstance(lot, Mapping):
            continue
        lot_id = lot.get("lotID")
        for scan in lot.get("scans") or []:
            if not isinstance(scan, Mapping):
                continue
            plate = normalize_plate(scan.get("plateNumber") or "")
            if not plate:
                continue
            entered = parse_scan_timestamp(scan.get("timestamp"), tz_token, tz_offset)
            if entered is None:
                logger.debug(f"[ENFORCEMENT] Unreadable timestamp for {plate} in {lot_id} — skipped")
                continue
            if plate in known:
                continue

            minutes = (now - entered).total_seconds() / 60
            if minutes > threshold_minutes:
                alerts.append(EnforcementAlert(plate, lot_id, math.floor(minutes)))

    return alerts


def run_enforcement_sweep(db: Session, now: Optional[datetime] = None) -> List[EnforcementAlert]:
    """Load every lot's scans and the registered plates, then sweep."""
    now = now or datetime.now(timezone.utc)
    alerts = find_unauthorized_vehicles(list_lots(db, include_scans=True), registered_plates(db), now)
    for alert in alerts:
        logger.warning(
            f"[ENFORCEMENT] Unregistered plate {alert.plate_number} in {alert.lot_id} "
            f"for {alert.minutes_parked} min"
        )
    logger.info(f"[ENFORCEMENT] Sweep complete — {len(alerts)} alert(s)")
    return alerts
