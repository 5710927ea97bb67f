from enum import Enum
from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship

from sehaty.db.base import Base
from sehaty.utils.timezone import utcnow


class PrescriptionStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Prescription(Base):
    __tablename__ = "prescriptions"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    title = Column(String, nullable=True)
    prescription_text = Column(Text, nullable=True)
    doctor_name = Column(String, nullable=True)
    doctor_specialty = Column(String, nullable=True)
    valid_until = Column(DateTime, nullable=True)

    ocr_text = Column(Text, nullable=False, default="")
    image_url = Column(String, nullable=True)
    image_public_id = Column(String, nullable=True)

    # [{"medicine_id": 1, "dosage": {...}, "notes": "..."}]
    medicines = Column(JSON, nullable=False, default=list)

    status = Column(String, nullable=False, default=PrescriptionStatus.PENDING.value)
    rejection_reason = Column(Text, nullable=True)

    is_deleted = Column(Boolean, nullable=False, default=False)
    deleted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    patient = relationship("User", back_populates="prescriptions")
    reminders = relationship("Reminder", back_populates="prescription")

    __table_args__ = (
        Index("idx_prescriptions_patient_created", "patient_id", "created_at"),
    )
