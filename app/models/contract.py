# app/models/contract.py
"""
Rental contracts. contract_number is Noc-XXXXX (services/numbering.py).
second_driver is NULL when every one of its fields is blank.
"""

from sqlalchemy import Column, String, Integer, Float, Date, ForeignKey, JSON
from sqlalchemy.orm import relationship
from app.database import Base, EntityMixin


class Contract(EntityMixin, Base):
    __tablename__ = "contracts"

    client_id = Column(String(36), ForeignKey("customers.id"), nullable=False, index=True)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False, index=True)
    contract_number = Column(String(20), unique=True, nullable=False, index=True)
    contract_date = Column(Date, nullable=False)
    departure_date = Column(Date, nullable=False)
    departure_time = Column(String(10))
    return_date = Column(Date, nullable=False)
    return_time = Column(String(10))
    contract_location = Column(String(255))
    duration = Column(Integer, default=0)
    pickup_location = Column(String(255))
    return_location = Column(String(255))
    matricule = Column(String(50), nullable=False)
    price_per_day = Column(Float, default=0)
    starting_km = Column(Integer, default=0)
    discount = Column(Float, default=0)
    fuel_level = Column(String(10), default="plein")
    total = Column(Float, default=0)
    guarantee = Column(Float, default=0)
    payment_type = Column(String(20), default="espece")      # espece | cheque | carte_bancaire | virement
    advance = Column(Float, default=0)
    remaining = Column(Float, default=0)
    status = Column(String(20), default="en_cours", nullable=False)   # en_cours | retournee
    second_driver = Column(JSON)
    equipment = Column(JSON)
    extension = Column(JSON)
    pieces_jointes = Column(JSON, default=list, nullable=False)

    client = relationship("Customer")
    vehicle = relationship("Vehicle")

    def __repr__(self):
        return f"<Contract {self.contract_number} client={self.client_id} vehicle={self.vehicle_id}>"
