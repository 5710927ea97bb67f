from enum import Enum
from sqlalchemy import Column, Integer, String, DateTime, Boolean
from sqlalchemy.orm import relationship

from sehaty.db.base import Base
from sehaty.utils.timezone import utcnow


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"
    PHARMACY_OWNER = "pharmacy_owner"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    role = Column(String, nullable=False, default=UserRole.USER.value)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    reminders = relationship("Reminder", back_populates="user")
    prescriptions = relationship("Prescription", back_populates="patient")
    pharmacies = relationship("Pharmacy", back_populates="owner")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def can_manage_catalog(self) -> bool:
        return self.role in (UserRole.ADMIN.value, UserRole.PHARMACY_OWNER.value)
