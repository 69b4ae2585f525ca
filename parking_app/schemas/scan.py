# parking_app/schemas/scan.py
import re

from pydantic import BaseModel, Field, field_validator
from typing import Literal


class ScanRequest(BaseModel):
    plate_number: str = Field(alias="plateNumber")
    lot_id: str = Field(alias="lotID", min_length=1)
    scan_type: Literal["entry", "exit"] = Field(alias="scanType")

    class Config:
        populate_by_name = True

    @field_validator("plate_number")
    @classmethod
    def plate_has_alphanumerics(cls, v: str) -> str:
        if not re.search(r"[A-Za-z0-9]", v):
            raise ValueError("plateNumber must contain at least one letter or digit")
        return v


class ScanResult(BaseModel):
    status: str
    lot_id: str = Field(alias="lotID")
    plate_number: str = Field(alias="plateNumber")
    scan_type: str = Field(alias="scanType")

    class Config:
        populate_by_name = True


class LotIDRequest(BaseModel):
    lot_id: str = Field(alias="lotID", min_length=1)

    class Config:
        populate_by_name = True
