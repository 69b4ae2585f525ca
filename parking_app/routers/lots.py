# parking_app/routers/lots.py
"""Lots — raw list with scan counts, congestion tiers, ranking, lot admin."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from parking_app.config import settings
from parking_app.database import get_db
from parking_app.schemas.lot import (
    LotCreate, LotOccupancyOut, LotOut, PermitClass, RankedLotOut, SortMode,
)
from parking_app.services import lot_service
from parking_app.services.ranking_service import rank_lots
from parking_app.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get("/lots", response_model=list[LotOut], response_model_exclude_unset=True,
            summary="All lots with scanCount")
def get_lots(include_scans: bool = False, db: Session = Depends(get_db)):
    """Lot documents plus the number of active scans (and the scans themselves if asked)."""
    try:
        return lot_service.list_lots(db, include_scans=include_scans)
    except SQLAlchemyError as e:
        logger.error(f"Failed to fetch lots: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch lots")


@router.get("/lots/ranked", response_model=list[RankedLotOut], summary="Lots ranked for a permit + building")
def get_ranked_lots(
    permit: PermitClass = "commuter",
    building: str = Query(default=None),
    sort: SortMode = "hybrid",
    db: Session = Depends(get_db),
):
    """Filter by permit class, add distance to the building, then sort (hybrid | distance | spots)."""
    building = building or settings.DEFAULT_BUILDING
    target = settings.BUILDINGS.get(building)
    if target is None:
        raise HTTPException(status_code=400, detail=f"Unknown building '{building}'")
    try:
        lots = lot_service.list_lots(db)
    except SQLAlchemyError as e:
        logger.error(f"Failed to fetch lots for ranking: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch lots")
    return rank_lots(lots, permit, target, sort)


@router.get("/lots/{lot_id}", response_model=LotOut, summary="One lot with its active scans")
def get_lot(lot_id: str, db: Session = Depends(get_db)):
    lot = lot_service.get_lot(db, lot_id)
    if not lot:
        raise HTTPException(status_code=404, detail=f"Lot '{lot_id}' not found")
    return lot_service.lot_document(lot, include_scans=True)


@router.post("/lots", status_code=201, summary="Create a lot")
def create_lot(body: LotCreate, db: Session = Depends(get_db)):
    if lot_service.get_lot(db, body.lot_id):
        raise HTTPException(status_code=400, detail=f"Lot {body.lot_id} already exists")
    lot_service.create_lot(db, body.lot_id, body.title, body.capacity, body.location, body.allows)
    return {"status": "created", "lotID": body.lot_id}


@router.get("/congestion", response_model=list[LotOccupancyOut], summary="Scanned count + congestion tier per lot")
def get_congestion(db: Session = Depends(get_db)):
    try:
        return lot_service.list_lot_occupancy(db)
    except SQLAlchemyError as e:
        logger.error(f"Failed to fetch occupancy: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch occupancy")


# Mounted without the /api prefix: GET /lots/occupancy
occupancy_router = APIRouter()
occupancy_router.add_api_route(
    "/lots/occupancy", get_congestion, methods=["GET"],
    response_model=list[LotOccupancyOut], summary="Alias of /api/congestion",
)
