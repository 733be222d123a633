# app/models/intervention.py
"""Maintenance interventions. next_mileage suppresses maintenance alerts."""

from sqlalchemy import Column, String, Integer, Float, Date, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from app.database import Base, EntityMixin


class Intervention(EntityMixin, Base):
    __tablename__ = "interventions"

    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), index=True)   # NULL after vehicle delete
    description = Column(Text, nullable=False)
    date = Column(Date, nullable=False)
    cost = Column(Float, nullable=False)
    status = Column(String(20), default="Pending", nullable=False)
    type = Column(String(100), nullable=False)
    observation = Column(Text)
    current_mileage = Column(Integer)
    next_mileage = Column(Integer)
    documents = Column(JSON, default=list, nullable=False)

    vehicle = relationship("Vehicle")

    def __repr__(self):
        return f"<Intervention {self.type} vehicle={self.vehicle_id} cost={self.cost}>"
