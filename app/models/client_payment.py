# app/models/client_payment.py
"""
Client payments (règlements). payment_number is REG-<year>-XXX.
payment_for selects which of contract_id / facture_id / accident_id applies.
"""

from sqlalchemy import Column, String, Float, Date, ForeignKey, JSON
from sqlalchemy.orm import relationship
from app.database import Base, EntityMixin


class ClientPayment(EntityMixin, Base):
    __tablename__ = "client_payments"

    payment_number = Column(String(20), nullable=False, index=True)
    payment_date = Column(Date, nullable=False)
    payment_for = Column(String(20), nullable=False)   # contract | facture | accident
    client_id = Column(String(36), ForeignKey("customers.id"), nullable=False, index=True)
    contract_id = Column(String(36), ForeignKey("contracts.id"))
    facture_id = Column(String(36), ForeignKey("factures.id"))
    accident_id = Column(String(36), ForeignKey("accidents.id"))
    reference_number = Column(String(100))
    remaining_amount = Column(Float, default=0)
    payment_type = Column(String(20), default="espèce")   # espèce | chèque | carte bancaire | virement
    amount_paid = Column(Float, default=0)
    documents = Column(JSON, default=list, nullable=False)

    client = relationship("Customer")
    contract = relationship("Contract")
    facture = relationship("Facture")
    accident = relationship("Accident")

    @property
    def target_id(self):
        """Id of the contract, facture or accident this payment settles."""
        return {
            "contract": self.contract_id,
            "facture": self.facture_id,
            "accident": self.accident_id,
        }.get(self.payment_for)

    def __repr__(self):
        return f"<ClientPayment {self.payment_number} for={self.payment_for} paid={self.amount_paid}>"
