# app/models/accident.py
"""
Accidents declared against a contract. Contract number, client, vehicle and
dates are copied from the contract at creation time.
"""

from sqlalchemy import Column, String, Float, Date, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from app.database import Base, EntityMixin


class Accident(EntityMixin, Base):
    __tablename__ = "accidents"

    contract_id = Column(String(36), ForeignKey("contracts.id"), nullable=False, index=True)
    numero_contrat = Column(String(20), nullable=False)
    date_sortie = Column(Date)
    client_id = Column(String(36), ForeignKey("customers.id"), nullable=False)
    client_nom = Column(String(255), nullable=False)
    date_retour = Column(Date)
    matricule = Column(String(50), nullable=False)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False)
    date_accident = Column(Date, nullable=False)
    heure_accident = Column(String(10))
    lieu_accident = Column(String(255))
    description = Column(Text)
    etat = Column(String(20), default="expertise", nullable=False)   # expertise | en_cours | repare
    date_entree_garage = Column(Date)
    date_reparation = Column(Date)
    montant_reparation = Column(Float, default=0)
    frais_client = Column(Float, default=0)
    indemnite_assurance = Column(Float, default=0)
    avance = Column(Float, default=0)
    documents = Column(JSON, default=list, nullable=False)

    contract = relationship("Contract")
    client = relationship("Customer")
    vehicle = relationship("Vehicle")

    def __repr__(self):
        return f"<Accident contrat={self.numero_contrat} etat={self.etat}>"
