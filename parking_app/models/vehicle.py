# parking_app/models/vehicle.py
"""
Registered vehicles table.
Plates of authorized permit holders. Read by the enforcement sweep as a
lookup set; managed through the vehicles router.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text
from parking_app.database import Base


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    plate_number = Column(String(50), unique=True, nullable=False, index=True)
    owner_name = Column(String(200))
    permit_type = Column(String(50))      # resident | facstaff | visitor | commuter
    registered_at = Column(DateTime)
    notes = Column(Text)

    def __repr__(self):
        return f"<Vehicle {self.plate_number} permit={self.permit_type}>"
