# app/models/vehicle.py
"""
Fleet vehicles.
Deleting a vehicle detaches (vehicle_id = NULL) its inspections, insurances,
infractions and interventions; see services/vehicle_service.py.
"""

from sqlalchemy import Column, String, Integer, Float, Date, Text, JSON
from app.database import Base, EntityMixin


class Vehicle(EntityMixin, Base):
    __tablename__ = "vehicles"

    chassis_number = Column(String(100), unique=True, nullable=False)
    license_plate = Column(String(50), unique=True, nullable=False, index=True)
    image_url = Column(String(500), default="")
    temporary_plate = Column(String(50), default="")
    brand = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    circulation_date = Column(Date)
    fuel_type = Column(String(20), default="essence", nullable=False)   # diesel | essence | electrique | hybride
    fuel_level = Column(String(10), default="plein", nullable=False)    # reserve | 1/4 | 1/2 | 3/4 | plein
    mileage = Column(Integer, default=0, nullable=False)
    color = Column(String(50))
    color_code = Column(String(20))
    rental_price = Column(Float, default=0, nullable=False)
    nombre_de_places = Column(Integer, default=5)
    nombre_de_vitesses = Column(Integer, default=5)
    transmission = Column(String(20), default="Manuelle")               # Manuelle | Automatique
    observation = Column(Text)
    equipment = Column(JSON)
    documents = Column(JSON, default=list, nullable=False)
    autorisation_date = Column(Date)
    autorisation_validity = Column(Date)
    carte_grise_date = Column(Date)
    carte_grise_validity = Column(Date)
    statut = Column(String(20), default="En parc", nullable=False)      # En parc | En circulation

    def __repr__(self):
        return f"<Vehicle {self.license_plate} {self.brand} {self.model} statut={self.statut}>"
