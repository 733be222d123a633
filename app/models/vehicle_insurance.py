# app/models/vehicle_insurance.py
"""Insurance policies. end_date drives the missing-insurance alert."""

from sqlalchemy import Column, String, Integer, Float, Date, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from app.database import Base, EntityMixin


class VehicleInsurance(EntityMixin, Base):
    __tablename__ = "vehicle_insurances"

    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), index=True)   # NULL after vehicle delete
    customer_id = Column(String(36), ForeignKey("customers.id"))
    company = Column(String(200), nullable=False)
    policy_number = Column(String(100), unique=True, nullable=False)
    operation_date = Column(Date, nullable=False)
    start_date = Column(Date, nullable=False)
    duration = Column(Integer, nullable=False)
    end_date = Column(Date, nullable=False)
    price = Column(Float, nullable=False)
    contact_info = Column(String(255))
    observation = Column(Text)
    attachments = Column(JSON, default=list, nullable=False)

    vehicle = relationship("Vehicle")
    customer = relationship("Customer")

    def __repr__(self):
        return f"<VehicleInsurance {self.policy_number} company={self.company} end={self.end_date}>"
