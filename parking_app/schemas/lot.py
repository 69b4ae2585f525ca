# parking_app/schemas/lot.py
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Dict, List, Literal, Optional

PermitClass = Literal["resident", "facstaff", "visitor", "commuter"]
SortMode = Literal["hybrid", "distance", "spots"]
Congestion = Literal["Low", "Medium", "High"]


class ScanOut(BaseModel):
    plate_number: str = Field(alias="plateNumber")
    timestamp: datetime

    class Config:
        populate_by_name = True
        from_attributes = True


class LotCreate(BaseModel):
    lot_id: str = Field(alias="lotID", min_length=1)
    title: str
    capacity: int = Field(ge=0)
    location: str
    allows: Dict[PermitClass, bool] = Field(default_factory=dict)

    class Config:
        populate_by_name = True

    @field_validator("location")
    @classmethod
    def location_is_lat_long(cls, v: str) -> str:
        parts = v.split(",")
        if len(parts) != 2:
            raise ValueError("location must be 'lat,long'")
        try:
            [float(p) for p in parts]
        except ValueError:
            raise ValueError("location must be 'lat,long'")
        return v


class LotOut(BaseModel):
    lot_id: str = Field(alias="lotID")
    title: str
    capacity: int
    allows: Dict[str, bool] = Field(default_factory=dict)
    location: Optional[str] = None
    scan_count: int = Field(alias="scanCount")
    available: int
    scans: Optional[List[ScanOut]] = None

    class Config:
        populate_by_name = True


class LotOccupancyOut(BaseModel):
    id: int
    title: str
    lot_id: str = Field(alias="lotID")
    allows: Dict[str, bool] = Field(default_factory=dict)
    capacity: int
    scanned_count: int = Field(alias="scannedCount")
    congestion: Congestion

    class Config:
        populate_by_name = True


class RankedLotOut(BaseModel):
    lot_id: str = Field(alias="lotID")
    title: str
    capacity: int
    scan_count: int = Field(alias="scanCount")
    available: int
    location: str
    distance: float                 # miles
    score: Optional[float] = None   # hybrid mode only

    class Config:
        populate_by_name = True
        from_attributes = True
