from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from sehaty import crud, models, schemas
from sehaty.api import deps

router = APIRouter()


def _get_managed_pharmacy(db: Session, pharmacy_id: int, user: models.User) -> models.Pharmacy:
    pharmacy = crud.pharmacy.get(db, id=pharmacy_id)
    if not pharmacy:
        raise HTTPException(status_code=404, detail="Pharmacy not found")
    if not user.is_admin and pharmacy.owner_id != user.id:
        raise HTTPException(status_code=403, detail="Not authorized to manage this pharmacy")
    return pharmacy


@router.get("", response_model=List[schemas.Pharmacy])
def read_pharmacies(
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100,
) -> Any:
    return crud.pharmacy.get_multi(db, skip=skip, limit=limit)


@router.post("", response_model=schemas.Pharmacy, status_code=status.HTTP_201_CREATED)
def create_pharmacy(
    *,
    db: Session = Depends(deps.get_db),
    pharmacy_in: schemas.PharmacyCreate,
    current_user: models.User = Depends(deps.get_current_catalog_manager),
) -> Any:
    return crud.pharmacy.create_with_owner(db, obj_in=pharmacy_in, owner_id=current_user.id)


@router.get("/{pharmacy_id}/medicines", response_model=List[schemas.PharmacyMedicine])
def read_pharmacy_medicines(
    pharmacy_id: int,
    db: Session = Depends(deps.get_db),
) -> Any:
    if not crud.pharmacy.get(db, id=pharmacy_id):
        raise HTTPException(status_code=404, detail="Pharmacy not found")
    return crud.pharmacy_medicine.get_for_pharmacy(db, pharmacy_id=pharmacy_id)


@router.post("/{pharmacy_id}/medicines", response_model=schemas.PharmacyMedicine)
def upsert_pharmacy_medicine(
    pharmacy_id: int,
    listing_in: schemas.PharmacyMedicineUpsert,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_catalog_manager),
) -> Any:
    """
    Create or update the price and stock of a medicine at a pharmacy.
    """
    pharmacy = _get_managed_pharmacy(db, pharmacy_id, current_user)
    if not crud.medicine.get_active(db, id=listing_in.medicine_id):
        raise HTTPException(status_code=404, detail="Medicine not found")
    return crud.pharmacy_medicine.upsert(db, pharmacy_id=pharmacy.id, obj_in=listing_in)
