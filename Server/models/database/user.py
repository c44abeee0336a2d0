"""
Folio Server - User Database Model

Reader and administrator accounts.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from models.database.base import Base


class User(Base):
    """
    Users table - credentials, contact email and UI locale
    """
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, unique=True, nullable=False)
    email = Column(String, nullable=True)
    password_hash = Column(String, nullable=False)
    # Locale used when translating server messages for this user
    locale = Column(String, nullable=False, default="en")
    role_id = Column(Integer, ForeignKey("roles.role_id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    last_login = Column(DateTime, nullable=True)
    is_active = Column(Boolean, default=True)

    role = relationship("Role", back_populates="users")
    ratings = relationship("AppUserRating", back_populates="user", cascade="all, delete-orphan")

    @property
    def permission_names(self) -> list:
        """Permission names granted through the user's role (empty without a role)"""
        if not self.role:
            return []
        return self.role.permission_names
