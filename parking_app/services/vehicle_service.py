# parking_app/services/vehicle_service.py
"""
Registered-vehicle lookups.
Used by the enforcement sweep and the vehicles router.
"""

from sqlalchemy.orm import Session
from parking_app.models.vehicle import Vehicle
from parking_app.services.occupancy_service import normalize_plate


def lookup_vehicle_by_plate(db: Session, plate_number: str):
    """Find a registered vehicle by plate number. Returns None if not found."""
    return db.query(Vehicle).filter(Vehicle.plate_number == normalize_plate(plate_number)).first()


def registered_plates(db: Session) -> set[str]:
    return {row[0] for row in db.query(Vehicle.plate_number).all()}
