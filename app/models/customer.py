# app/models/customer.py
"""
Customers (clients) of the agency.
Identity document numbers are unique when present; documents is an
ordered JSON list of {name, type, size, url} records.
"""

from sqlalchemy import Column, String, Integer, Boolean, Date, Text, JSON
from app.database import Base, EntityMixin


class Customer(EntityMixin, Base):
    __tablename__ = "customers"

    civilite = Column(String(20))
    nationalite = Column(String(100))
    type = Column(String(20), default="Particulier", nullable=False)   # Particulier | Professionel
    liste_noire = Column(Boolean, default=False, nullable=False)
    nom_fr = Column(String(100), nullable=False)
    nom_ar = Column(String(100))
    prenom_fr = Column(String(100), nullable=False)
    prenom_ar = Column(String(100))
    date_naissance = Column(Date)
    age = Column(String(10))
    lieu_naissance = Column(String(100))
    ice = Column(String(50))

    cin = Column(String(50), unique=True)
    cin_delivre_le = Column(Date)
    cin_delivre_a = Column(String(100))
    cin_validite = Column(Date)
    numero_permis = Column(String(50), unique=True)
    permis_delivre_le = Column(Date)
    permis_delivre_a = Column(String(100))
    permis_validite = Column(Date)
    numero_passeport = Column(String(50), unique=True)
    passport_delivre_le = Column(Date)
    passport_delivre_a = Column(String(100))
    passport_validite = Column(Date)

    email = Column(String(200), unique=True)
    adresse_fr = Column(String(255))
    ville = Column(String(100))
    adresse_ar = Column(String(255))
    code_postal = Column(String(20))
    telephone = Column(String(30))
    telephone2 = Column(String(30))
    fix = Column(String(30))
    fax = Column(String(30))
    remarque = Column(Text)
    documents = Column(JSON, default=list, nullable=False)
    total_rentals = Column(Integer, default=0, nullable=False)
    status = Column(String(20), default="Actif", nullable=False)        # Actif | Inactif

    @property
    def full_name(self) -> str:
        return f"{self.nom_fr} {self.prenom_fr}"

    def __repr__(self):
        return f"<Customer {self.nom_fr} {self.prenom_fr} cin={self.cin}>"
