import json
import logging
import math
from datetime import datetime
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Response, UploadFile, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from sehaty import crud, models, schemas
from sehaty.api import deps
from sehaty.models.prescription import PrescriptionStatus
from sehaty.reminders.repository import list_prescription_reminders
from sehaty.reminders.schemas import ReminderRead
from sehaty.reminders.service import ReminderService
from sehaty.services.file_storage import remove_stored_file, store_prescription_image
from sehaty.services.ocr import get_prescription_ocr
from sehaty.utils.timezone import to_utc_naive

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_medicines(raw: Optional[str]) -> List[schemas.PrescriptionMedicine]:
    if not raw:
        return []
    try:
        items = json.loads(raw)
        if not isinstance(items, list):
            raise ValueError("medicines must be a list")
        return [schemas.PrescriptionMedicine.model_validate(item) for item in items]
    except (ValueError, ValidationError):
        raise HTTPException(status_code=400, detail="Invalid medicines format")


def _get_owned_prescription(db: Session, prescription_id: int, user: models.User) -> models.Prescription:
    prescription = crud.prescription.get_active(db, id=prescription_id)
    if not prescription:
        raise HTTPException(status_code=404, detail="Prescription not found")
    if prescription.patient_id != user.id and not user.is_admin:
        raise HTTPException(status_code=403, detail="Not authorized to access this prescription")
    return prescription


@router.post("", response_model=schemas.PrescriptionUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_prescription(
    title: Optional[str] = Form(None),
    prescription_text: Optional[str] = Form(None),
    medicines: Optional[str] = Form(None),
    doctor_name: Optional[str] = Form(None),
    doctor_specialty: Optional[str] = Form(None),
    valid_until: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    """
    Upload a prescription image. Text is extracted when OCR is configured, and
    every prescribed catalog medicine gets a daily reminder until valid_until.
    """
    if image is None or not image.filename:
        raise HTTPException(status_code=400, detail="No image file provided")

    prescribed = _parse_medicines(medicines)

    valid_until_dt = None
    if valid_until:
        try:
            valid_until_dt = to_utc_naive(datetime.fromisoformat(valid_until))
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid valid_until: {valid_until}")

    content = await image.read()
    stored = None
    prescription = None
    try:
        stored = store_prescription_image(content, image.filename, current_user.id)
        ocr_text = get_prescription_ocr().extract_text(content)

        prescription = crud.prescription.create_for_patient(
            db,
            patient_id=current_user.id,
            medicines=[item.model_dump() for item in prescribed],
            ocr_text=ocr_text,
            image_url=stored["stored_url"],
            image_public_id=stored["public_id"],
            title=title,
            prescription_text=prescription_text,
            doctor_name=doctor_name,
            doctor_specialty=doctor_specialty,
            valid_until=valid_until_dt,
        )
        reminders = ReminderService(db).create_for_prescription(current_user, prescription, prescribed)
        logger.info(
            f"Prescription {prescription.id} uploaded by user {current_user.id} "
            f"with {len(reminders)} reminders"
        )
        return schemas.PrescriptionUploadResponse(
            message="Prescription uploaded successfully",
            prescription=prescription,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error uploading prescription for user {current_user.id}: {e}")
        db.rollback()
        if prescription is not None:
            crud.prescription.soft_delete(db, db_obj=prescription)
        if stored is not None:
            remove_stored_file(stored["stored_url"])
        raise HTTPException(status_code=500, detail=f"Failed to upload prescription: {str(e)}")


@router.get("", response_model=schemas.PrescriptionListResponse)
def read_prescriptions(
    db: Session = Depends(deps.get_db),
    status_filter: Optional[PrescriptionStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    try:
        prescriptions, total = crud.prescription.get_patient_prescriptions(
            db,
            patient_id=current_user.id,
            status=status_filter.value if status_filter else None,
            skip=(page - 1) * limit,
            limit=limit,
        )
        return schemas.PrescriptionListResponse(
            prescriptions=prescriptions,
            current_page=page,
            total_pages=math.ceil(total / limit),
            total_prescriptions=total,
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch prescriptions: {str(e)}")


@router.get("/{prescription_id}", response_model=schemas.PrescriptionDetail)
def read_prescription(
    prescription_id: int,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    prescription = _get_owned_prescription(db, prescription_id, current_user)
    reminders = list_prescription_reminders(db, prescription.id)
    return schemas.PrescriptionDetail(
        prescription=prescription,
        reminders=[ReminderRead.model_validate(r) for r in reminders],
    )


@router.patch("/{prescription_id}/status", response_model=schemas.Prescription)
def update_prescription_status(
    prescription_id: int,
    status_in: schemas.PrescriptionStatusUpdate,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_catalog_manager),
) -> Any:
    """
    Approve or reject a prescription; its reminders follow the decision.
    """
    prescription = crud.prescription.get_active(db, id=prescription_id)
    if not prescription:
        raise HTTPException(status_code=404, detail="Prescription not found")
    try:
        prescription = crud.prescription.update_status(
            db,
            db_obj=prescription,
            status=status_in.status,
            rejection_reason=status_in.rejection_reason,
        )
        logger.info(f"Prescription {prescription.id} marked {prescription.status} by user {current_user.id}")
        return prescription
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update prescription status: {str(e)}")


@router.delete("/{prescription_id}", status_code=status.HTTP_204_NO_CONTENT, response_model=None)
def delete_prescription(
    prescription_id: int,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    prescription = _get_owned_prescription(db, prescription_id, current_user)
    crud.prescription.soft_delete(db, db_obj=prescription)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
