# parking_app/routers/testing.py
"""Load simulation helpers — manual testing only. Disabled with ENABLE_TESTING_ENDPOINTS=false."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from parking_app.config import settings
from parking_app.database import get_db
from parking_app.schemas.scan import LotIDRequest
from parking_app.services import lot_service

router = APIRouter()


def _require_enabled():
    if not settings.ENABLE_TESTING_ENDPOINTS:
        raise HTTPException(status_code=404, detail="Not found")


@router.post("/testing/add", dependencies=[Depends(_require_enabled)],
             summary="Add 10–19 synthetic scans to a lot")
def add_cars(body: LotIDRequest, db: Session = Depends(get_db)):
    added = lot_service.add_random_scans(db, body.lot_id)
    if added is None:
        raise HTTPException(status_code=404, detail=f"Lot '{body.lot_id}' not found")
    return {"lotID": body.lot_id, "added": added, "scanCount": lot_service.scan_count(db, body.lot_id)}


@router.post("/testing/remove", dependencies=[Depends(_require_enabled)],
             summary="Remove up to 20 of the oldest scans from a lot")
def remove_cars(body: LotIDRequest, db: Session = Depends(get_db)):
    removed = lot_service.remove_front_scans(db, body.lot_id)
    if removed is None:
        raise HTTPException(status_code=404, detail=f"Lot '{body.lot_id}' not found")
    return {"lotID": body.lot_id, "removed": removed, "scanCount": lot_service.scan_count(db, body.lot_id)}
