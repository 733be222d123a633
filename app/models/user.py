# app/models/user.py
"""Back-office users. Passwords are stored hashed (services/auth_service.py)."""

from sqlalchemy import Column, String
from app.database import Base, EntityMixin


class User(EntityMixin, Base):
    __tablename__ = "users"

    username = Column(String(100), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(50), default="user", nullable=False)

    def __repr__(self):
        return f"<User {self.username} role={self.role}>"
