# app/models/facture.py
"""Invoices. invoice_number is INV-<epoch ms>, not sequential."""

from sqlalchemy import Column, String, Float, Date, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base, EntityMixin


class Facture(EntityMixin, Base):
    __tablename__ = "factures"

    invoice_number = Column(String(30), unique=True, nullable=False, index=True)
    invoice_date = Column(Date, nullable=False)
    due_date = Column(Date)
    client_id = Column(String(36), ForeignKey("customers.id"), nullable=False, index=True)
    contract_id = Column(String(36), ForeignKey("contracts.id"))
    location = Column(String(255))
    type = Column(String(20), default="Particulier")      # Professionel | Particulier
    montant_ht = Column(Float, default=0)
    tva_amount = Column(Float, default=0)
    tva_percentage = Column(Float, default=20)
    total_ttc = Column(Float, default=0)
    payment_type = Column(String(20), default="espèce")
    amount_paid = Column(Float, default=0)
    status = Column(String(20), default="Pending", nullable=False)   # Pending | Paid | Cancelled

    client = relationship("Customer")
    contract = relationship("Contract")

    def __repr__(self):
        return f"<Facture {self.invoice_number} ttc={self.total_ttc} status={self.status}>"
