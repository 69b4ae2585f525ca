# parking_app/models/scan.py
"""
Active scans table.
A row exists while a plate is parked in a lot. Entry inserts, exit deletes.
At most one row per (lot, plate); insertion order is the lot's scan order.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from parking_app.database import Base


class Scan(Base):
    __tablename__ = "scans"
    __table_args__ = (UniqueConstraint("lot_id", "plate_number", name="uq_scan_lot_plate"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    lot_id = Column(String(50), ForeignKey("lots.lot_id", ondelete="CASCADE"), nullable=False, index=True)
    plate_number = Column(String(50), nullable=False, index=True)
    timestamp = Column(DateTime, nullable=False)     # UTC, naive

    lot = relationship("Lot", back_populates="scans")

    def __repr__(self):
        return f"<Scan {self.plate_number} lot={self.lot_id} at={self.timestamp}>"
