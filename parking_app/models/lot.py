# parking_app/models/lot.py
"""
Parking lots table.
One row per lot: capacity, "lat,long" location string, and the permit
classes it serves. Active scans live in the scans table.
"""

from sqlalchemy import Column, Integer, String, JSON
from sqlalchemy.orm import relationship
from parking_app.database import Base


class Lot(Base):
    __tablename__ = "lots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    lot_id = Column(String(50), unique=True, nullable=False, index=True)
    title = Column(String(200), nullable=False)
    capacity = Column(Integer, default=0, nullable=False)
    location = Column(String(100))               # "lat,long"
    allows = Column(JSON, default=dict)          # {"commuter": true, "visitor": false, ...}

    scans = relationship(
        "Scan",
        back_populates="lot",
        order_by="Scan.id",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Lot {self.lot_id} capacity={self.capacity}>"
