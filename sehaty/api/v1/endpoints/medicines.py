import logging
import math
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from sehaty import crud, models, schemas
from sehaty.api import deps
from sehaty.services.alternatives import MedicineAlternativeResolver

logger = logging.getLogger(__name__)

router = APIRouter()


def _total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def _get_medicine_or_404(db: Session, medicine_id: int) -> models.Medicine:
    medicine = crud.medicine.get_active(db, id=medicine_id)
    if not medicine:
        raise HTTPException(status_code=404, detail="Medicine not found")
    return medicine


@router.get("", response_model=schemas.MedicineListResponse)
def read_medicines(
    db: Session = Depends(deps.get_db),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    category: Optional[int] = None,
    search: Optional[str] = None,
    prescription_required: Optional[bool] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    pharmacy_id: Optional[int] = None,
) -> Any:
    """
    Medicines currently listed by pharmacies, one entry per listing with its
    live price and stock.
    """
    try:
        listings = crud.medicine.get_available_listings(db, pharmacy_id=pharmacy_id)
        needle = search.lower() if search else None

        matched = []
        for listing in listings:
            medicine = listing.medicine
            if category and medicine.category_id != category:
                continue
            if needle and needle not in (medicine.name or "").lower() and needle not in (medicine.description or "").lower():
                continue
            if prescription_required is not None and medicine.prescription_required != prescription_required:
                continue
            if min_price is not None and listing.price < min_price:
                continue
            if max_price is not None and listing.price > max_price:
                continue
            matched.append(listing)

        start = (page - 1) * limit
        page_items = matched[start:start + limit]
        return schemas.MedicineListResponse(
            medicines=[schemas.MedicineWithPharmacy.from_listing(listing.medicine, listing) for listing in page_items],
            current_page=page,
            total_pages=_total_pages(len(matched), limit),
            total_medicines=len(matched),
        )
    except Exception as e:
        logger.error(f"Error fetching medicines: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch medicines: {str(e)}")


@router.get("/search", response_model=schemas.MedicineSearchResponse)
def search_medicines(
    db: Session = Depends(deps.get_db),
    query: Optional[str] = None,
    category: Optional[int] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> Any:
    try:
        medicines, total = crud.medicine.search(
            db, query=query, category_id=category, skip=(page - 1) * limit, limit=limit
        )
        # Price bounds apply to the fetched page; the total comes from the query count
        if min_price is not None:
            medicines = [m for m in medicines if (m.price or 0) >= min_price]
        if max_price is not None:
            medicines = [m for m in medicines if (m.price or 0) <= max_price]
        return schemas.MedicineSearchResponse(
            medicines=medicines,
            current_page=page,
            total_pages=_total_pages(total, limit),
            total_medicines=total,
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to search medicines: {str(e)}")


@router.post("", response_model=schemas.Medicine, status_code=status.HTTP_201_CREATED)
def create_medicine(
    *,
    db: Session = Depends(deps.get_db),
    medicine_in: schemas.MedicineCreate,
    current_user: models.User = Depends(deps.get_current_catalog_manager),
) -> Any:
    """
    Create new medicine.
    """
    try:
        medicine = crud.medicine.create_with_alternatives(db, obj_in=medicine_in)
        logger.info(f"Medicine {medicine.id} created by user {current_user.id}")
        return medicine
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create medicine: {str(e)}")


@router.get("/{medicine_id}", response_model=schemas.MedicineDetail)
def read_medicine(
    medicine_id: int,
    db: Session = Depends(deps.get_db),
) -> Any:
    medicine = _get_medicine_or_404(db, medicine_id)
    reviews = crud.review.get_for_medicine(db, medicine_id=medicine.id)
    return schemas.MedicineDetail(medicine=medicine, reviews=reviews)


@router.put("/{medicine_id}", response_model=schemas.Medicine)
def update_medicine(
    medicine_id: int,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_catalog_manager),
) -> Any:
    """
    Update a medicine. Only the catalog fields in ALLOWED_MEDICINE_UPDATES can change.
    """
    invalid = sorted(set(payload) - schemas.ALLOWED_MEDICINE_UPDATES)
    if invalid:
        raise HTTPException(status_code=400, detail=f"Invalid updates: {', '.join(invalid)}")
    try:
        medicine_in = schemas.MedicineUpdate.model_validate(payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid updates: {e.errors()[0].get('msg')}")

    medicine = _get_medicine_or_404(db, medicine_id)
    try:
        return crud.medicine.update_medicine(db, db_obj=medicine, obj_in=medicine_in)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update medicine: {str(e)}")


@router.delete("/{medicine_id}", status_code=status.HTTP_204_NO_CONTENT, response_model=None)
def delete_medicine(
    medicine_id: int,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_catalog_manager),
) -> Any:
    medicine = _get_medicine_or_404(db, medicine_id)
    crud.medicine.soft_delete(db, db_obj=medicine)
    logger.info(f"Medicine {medicine_id} deleted by user {current_user.id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{medicine_id}/reviews", response_model=schemas.Review, status_code=status.HTTP_201_CREATED)
def add_review(
    medicine_id: int,
    review_in: schemas.ReviewCreate,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    medicine = _get_medicine_or_404(db, medicine_id)
    try:
        review = crud.review.create_for_medicine(
            db, obj_in=review_in, user_id=current_user.id, medicine_id=medicine.id
        )
        crud.medicine.refresh_rating(db, medicine=medicine)
        return review
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to add review: {str(e)}")


@router.get("/{medicine_id}/alternatives", response_model=schemas.AlternativesResponse)
def read_alternatives(
    medicine_id: int,
    db: Session = Depends(deps.get_db),
) -> Any:
    """
    In-stock substitutes for a medicine: curated alternatives first, otherwise
    medicines with the same active ingredient.
    """
    medicine = _get_medicine_or_404(db, medicine_id)
    try:
        alternatives, source = MedicineAlternativeResolver(db).resolve(medicine)
        return schemas.AlternativesResponse(alternatives=alternatives, source=source)
    except Exception as e:
        logger.error(f"Error resolving alternatives for medicine {medicine_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch alternatives: {str(e)}")
