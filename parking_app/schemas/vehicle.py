# parking_app/schemas/vehicle.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class VehicleCreate(BaseModel):
    plate_number: str
    owner_name: Optional[str] = None
    permit_type: Optional[str] = None    # resident | facstaff | visitor | commuter
    notes: Optional[str] = None


class VehicleOut(BaseModel):
    id: int
    plate_number: str
    owner_name: Optional[str]
    permit_type: Optional[str]
    registered_at: Optional[datetime]
    notes: Optional[str]

    class Config:
        from_attributes = True
