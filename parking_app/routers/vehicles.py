# parking_app/routers/vehicles.py
"""Registered vehicles — the plate set the enforcement sweep checks against."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from parking_app.database import get_db
from parking_app.models.vehicle import Vehicle
from parking_app.schemas.vehicle import VehicleCreate, VehicleOut
from parking_app.services.occupancy_service import normalize_plate
from parking_app.services.vehicle_service import lookup_vehicle_by_plate
from datetime import datetime

router = APIRouter()


@router.get("/vehicles", response_model=list[VehicleOut], summary="List registered vehicles")
def list_vehicles(permit_type: str = None, db: Session = Depends(get_db)):
    q = db.query(Vehicle)
    if permit_type:
        q = q.filter(Vehicle.permit_type == permit_type)
    return q.order_by(Vehicle.plate_number).all()


@router.post("/vehicles", status_code=201, summary="Register a vehicle")
def register_vehicle(body: VehicleCreate, db: Session = Depends(get_db)):
    plate = normalize_plate(body.plate_number)
    if not plate:
        raise HTTPException(status_code=422, detail="plate_number must contain letters or digits")
    if lookup_vehicle_by_plate(db, plate):
        raise HTTPException(status_code=400, detail=f"Plate {plate} already registered")
    db.add(Vehicle(
        plate_number=plate,
        owner_name=body.owner_name,
        permit_type=body.permit_type,
        notes=body.notes,
        registered_at=datetime.utcnow(),
    ))
    db.commit()
    return {"status": "registered", "plate": plate}


@router.delete("/vehicles/{plate}", summary="Remove a vehicle")
def remove_vehicle(plate: str, db: Session = Depends(get_db)):
    vehicle = lookup_vehicle_by_plate(db, plate)
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    db.delete(vehicle)
    db.commit()
    return {"status": "removed", "plate": vehicle.plate_number}


@router.get("/vehicles/lookup/{plate}", summary="Look up a plate number")
def lookup_vehicle(plate: str, db: Session = Depends(get_db)):
    vehicle = lookup_vehicle_by_plate(db, plate)
    if not vehicle:
        return {"plate": normalize_plate(plate), "status": "unknown", "registered": False}
    return {"plate": vehicle.plate_number, "status": "known", "registered": True,
            "owner": vehicle.owner_name, "permit_type": vehicle.permit_type}
