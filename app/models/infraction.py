# app/models/infraction.py
"""Traffic infractions. infraction_number is INF-XXXXX."""

from sqlalchemy import Column, String, Float, Date, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from app.database import Base, EntityMixin


class Infraction(EntityMixin, Base):
    __tablename__ = "infractions"

    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), index=True)   # NULL after vehicle delete
    customer_id = Column(String(36), ForeignKey("customers.id"), nullable=False, index=True)
    infraction_number = Column(String(20), nullable=False, index=True)
    infraction_date = Column(Date, nullable=False)
    time_infraction = Column(String(10))
    location = Column(String(255), nullable=False)
    date = Column(Date)
    permis = Column(String(50))
    cin = Column(String(50))
    passeport = Column(String(50))
    type = Column(String(20), default="particular")   # professional | particular
    societe = Column(String(255))
    telephone = Column(String(30))
    telephone2 = Column(String(30))
    description = Column(Text)
    amount = Column(Float, default=0)
    status = Column(String(20), default="Pending", nullable=False)   # Pending | Paid | Disputed
    documents = Column(JSON, default=list, nullable=False)

    vehicle = relationship("Vehicle")
    customer = relationship("Customer")

    def __repr__(self):
        return f"<Infraction {self.infraction_number} vehicle={self.vehicle_id} status={self.status}>"
