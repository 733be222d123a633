# app/models/reservation.py
"""Reservations. reservation_number is RES-XXXX; status is normalized on input."""

from sqlalchemy import Column, String, Integer, Float, Date, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base, EntityMixin


class Reservation(EntityMixin, Base):
    __tablename__ = "reservations"

    customer_id = Column(String(36), ForeignKey("customers.id"), nullable=False, index=True)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False, index=True)
    reservation_number = Column(String(20), unique=True, nullable=False, index=True)
    reservation_date = Column(Date, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    duration = Column(Integer, default=0)
    status = Column(String(20), default="en_cours", nullable=False)   # en_cours | validee | annulee | fin_de_periode
    total_amount = Column(Float, default=0)
    advance = Column(Float, default=0)
    notes = Column(Text)

    customer = relationship("Customer")
    vehicle = relationship("Vehicle")

    def __repr__(self):
        return f"<Reservation {self.reservation_number} status={self.status}>"
