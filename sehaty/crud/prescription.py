from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import desc, func

from sehaty.models.prescription import Prescription, PrescriptionStatus
from sehaty.reminders.repository import (
    set_prescription_reminders_status,
    soft_delete_prescription_reminders,
)
from sehaty.reminders.models import ReminderStatus
from sehaty.utils.timezone import utcnow


class CRUDPrescription:
    def create_for_patient(
        self,
        db: Session,
        *,
        patient_id: int,
        medicines: List[Dict[str, Any]],
        ocr_text: str,
        image_url: str,
        image_public_id: str,
        title: Optional[str] = None,
        prescription_text: Optional[str] = None,
        doctor_name: Optional[str] = None,
        doctor_specialty: Optional[str] = None,
        valid_until: Optional[datetime] = None,
    ) -> Prescription:
        db_obj = Prescription(
            patient_id=patient_id,
            medicines=medicines,
            ocr_text=ocr_text,
            image_url=image_url,
            image_public_id=image_public_id,
            title=title,
            prescription_text=prescription_text,
            doctor_name=doctor_name,
            doctor_specialty=doctor_specialty,
            valid_until=valid_until,
            status=PrescriptionStatus.PENDING.value,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_active(self, db: Session, id: int) -> Optional[Prescription]:
        return (
            db.query(Prescription)
            .filter(Prescription.id == id, Prescription.is_deleted == False)  # noqa: E712
            .first()
        )

    def get_patient_prescriptions(
        self,
        db: Session,
        *,
        patient_id: int,
        status: Optional[str] = None,
        skip: int = 0,
        limit: int = 10
    ) -> Tuple[List[Prescription], int]:
        query = db.query(Prescription).filter(
            Prescription.patient_id == patient_id,
            Prescription.is_deleted == False,  # noqa: E712
        )
        if status:
            query = query.filter(Prescription.status == status)
        total = query.with_entities(func.count(Prescription.id)).scalar() or 0
        items = (
            query.order_by(desc(Prescription.created_at), desc(Prescription.id))
            .offset(skip)
            .limit(limit)
            .all()
        )
        return items, total

    def update_status(
        self,
        db: Session,
        *,
        db_obj: Prescription,
        status: PrescriptionStatus,
        rejection_reason: Optional[str] = None
    ) -> Prescription:
        """Approval re-activates linked reminders, rejection marks them missed"""
        db_obj.status = status.value
        if status == PrescriptionStatus.REJECTED:
            db_obj.rejection_reason = rejection_reason
        db.add(db_obj)

        if status == PrescriptionStatus.APPROVED:
            set_prescription_reminders_status(db, db_obj.id, ReminderStatus.ACTIVE.value)
        elif status == PrescriptionStatus.REJECTED:
            set_prescription_reminders_status(db, db_obj.id, ReminderStatus.MISSED.value)

        db.commit()
        db.refresh(db_obj)
        return db_obj

    def soft_delete(self, db: Session, *, db_obj: Prescription) -> Prescription:
        """Soft delete the prescription and every reminder created from it"""
        db_obj.is_deleted = True
        db_obj.deleted_at = utcnow()
        db.add(db_obj)
        soft_delete_prescription_reminders(db, db_obj.id)
        db.commit()
        db.refresh(db_obj)
        return db_obj


prescription = CRUDPrescription()
