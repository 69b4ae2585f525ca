# parking_app/routers/scans.py
"""Entry/exit scans from the gate scanner."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from parking_app.database import get_db
from parking_app.schemas.scan import ScanRequest, ScanResult
from parking_app.services import lot_service
from parking_app.services.occupancy_service import normalize_plate
from parking_app.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/scan", response_model=ScanResult, summary="Record an entry or exit scan")
def post_scan(body: ScanRequest, db: Session = Depends(get_db)):
    """
    entry → any previous scan of the plate in this lot is replaced (fresh timestamp).
    exit  → the plate's scan is removed; a plate that isn't there is a no-op.
    """
    try:
        if body.scan_type == "entry":
            lot = lot_service.scan_in(db, body.plate_number, body.lot_id)
        else:
            lot = lot_service.scan_out(db, body.plate_number, body.lot_id)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Scan {body.scan_type} failed for lot {body.lot_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to record scan")

    if lot is None:
        raise HTTPException(status_code=404, detail=f"Lot '{body.lot_id}' not found")
    return {
        "status": "ok",
        "lotID": body.lot_id,
        "plateNumber": normalize_plate(body.plate_number),
        "scanType": body.scan_type,
    }
