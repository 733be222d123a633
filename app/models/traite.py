# app/models/traite.py
"""Vehicle financing installments (traites)."""

from sqlalchemy import Column, String, Integer, Float, Date, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from app.database import Base, EntityMixin


class Traite(EntityMixin, Base):
    __tablename__ = "traites"

    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False, index=True)
    mois = Column(Integer, nullable=False)
    annee = Column(Integer, nullable=False)
    montant = Column(Float, nullable=False)
    date_paiement = Column(Date)
    reference = Column(String(100))
    notes = Column(Text)
    documents = Column(JSON, default=list, nullable=False)

    vehicle = relationship("Vehicle")

    def __repr__(self):
        return f"<Traite {self.mois}/{self.annee} vehicle={self.vehicle_id} montant={self.montant}>"
