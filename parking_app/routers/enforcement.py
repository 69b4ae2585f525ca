# parking_app/routers/enforcement.py
"""Unregistered vehicles parked past the threshold."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from parking_app.database import get_db
from parking_app.schemas.enforcement import EnforcementAlertOut
from parking_app.services.enforcement_service import run_enforcement_sweep
from parking_app.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get("/enforcement/alerts", response_model=list[EnforcementAlertOut],
            summary="Unregistered plates parked longer than the threshold")
def get_enforcement_alerts(db: Session = Depends(get_db)):
    """Recomputed on every call; nothing is stored."""
    try:
        return run_enforcement_sweep(db)
    except SQLAlchemyError as e:
        logger.error(f"Enforcement sweep failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch alerts")
