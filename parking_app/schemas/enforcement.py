# parking_app/schemas/enforcement.py
from pydantic import BaseModel, Field


class EnforcementAlertOut(BaseModel):
    plate_number: str = Field(alias="plateNumber")
    lot_id: str = Field(alias="lotID")
    minutes_parked: int = Field(alias="minutesParked")

    class Config:
        populate_by_name = True
        from_attributes = True
