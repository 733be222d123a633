# app/models/charge.py
"""Fleet expenses (charges)."""

from sqlalchemy import Column, String, Float, Date, Text, JSON
from app.database import Base, EntityMixin


class Charge(EntityMixin, Base):
    __tablename__ = "charges"

    name = Column(String(255), nullable=False)
    amount = Column(Float, nullable=False)
    description = Column(Text)
    date = Column(Date)
    attachments = Column(JSON, default=list, nullable=False)

    # Front-office field names
    @property
    def motif(self):
        return self.name

    @property
    def montant(self):
        return self.amount

    @property
    def observation(self):
        return self.description

    def __repr__(self):
        return f"<Charge {self.name} amount={self.amount}>"
