# app/models/vehicle_inspection.py
"""Technical inspections (visites techniques). end_date drives the missing-inspection alert."""

from sqlalchemy import Column, String, Integer, Float, Date, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from app.database import Base, EntityMixin


class VehicleInspection(EntityMixin, Base):
    __tablename__ = "vehicle_inspections"

    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), index=True)   # NULL after vehicle delete
    inspection_date = Column(Date, nullable=False)
    inspector_name = Column(String(200), nullable=False)
    results = Column(Text, nullable=False)
    next_inspection_date = Column(Date)
    center = Column(String(200))
    control_id = Column(String(100))
    authorization_number = Column(String(100))
    duration = Column(Integer)
    end_date = Column(Date)
    price = Column(Float, default=0)
    center_contact = Column(String(200))
    observation = Column(Text)
    documents = Column(JSON, default=list, nullable=False)

    vehicle = relationship("Vehicle")

    def __repr__(self):
        return f"<VehicleInspection vehicle={self.vehicle_id} date={self.inspection_date} end={self.end_date}>"
