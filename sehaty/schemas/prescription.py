from typing import Any, Dict, Optional, List, Union
from datetime import datetime
from pydantic import BaseModel

from sehaty.models.prescription import PrescriptionStatus
from sehaty.reminders.schemas import ReminderRead


class PrescriptionMedicine(BaseModel):
    """One prescribed medicine; entries with a medicine_id get a reminder"""
    medicine_id: Optional[int] = None
    name: Optional[str] = None
    dosage: Optional[Union[Dict[str, Any], str]] = None
    notes: Optional[str] = None

    @property
    def frequency(self) -> str:
        if isinstance(self.dosage, dict) and self.dosage.get("frequency"):
            return str(self.dosage["frequency"])
        return "once"


class Prescription(BaseModel):
    id: int
    patient_id: int
    title: Optional[str] = None
    prescription_text: Optional[str] = None
    doctor_name: Optional[str] = None
    doctor_specialty: Optional[str] = None
    valid_until: Optional[datetime] = None
    ocr_text: str = ""
    image_url: Optional[str] = None
    medicines: List[PrescriptionMedicine] = []
    status: str
    rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PrescriptionUploadResponse(BaseModel):
    message: str
    prescription: Prescription


class PrescriptionListResponse(BaseModel):
    prescriptions: List[Prescription]
    current_page: int
    total_pages: int
    total_prescriptions: int


class PrescriptionDetail(BaseModel):
    prescription: Prescription
    reminders: List[ReminderRead]


class PrescriptionStatusUpdate(BaseModel):
    status: PrescriptionStatus
    rejection_reason: Optional[str] = None
