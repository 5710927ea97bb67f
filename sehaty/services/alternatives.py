"""
Substitute lookup for a medicine: the curated list first, then medicines
sharing the same active ingredient.
"""
import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from sehaty import crud
from sehaty.models.medicine import Medicine
from sehaty.schemas.medicine import MedicineWithPharmacy

logger = logging.getLogger(__name__)

SOURCE_PREDEFINED = "predefined"
SOURCE_ACTIVE_INGREDIENT = "activeIngredient"
SOURCE_NONE = "none"


class MedicineAlternativeResolver:
    def __init__(self, db: Session):
        self.db = db

    def resolve(self, medicine: Medicine) -> Tuple[List[MedicineWithPharmacy], str]:
        """
        Returns (alternatives, source). Only medicines with an in-stock pharmacy
        listing are kept; when the curated list leaves nothing, the active
        ingredient match is tried.
        """
        curated = crud.medicine.get_curated_alternatives(self.db, medicine=medicine)
        if curated:
            results = self._with_stock(curated)
            if results:
                return results, SOURCE_PREDEFINED
            logger.info(f"No curated alternative of medicine {medicine.id} is in stock, trying active ingredient")

        same_ingredient = crud.medicine.get_by_active_ingredient(self.db, medicine=medicine)
        results = self._with_stock(same_ingredient)
        if results:
            return results, SOURCE_ACTIVE_INGREDIENT
        return [], SOURCE_NONE

    def _with_stock(self, candidates: List[Medicine]) -> List[MedicineWithPharmacy]:
        results: List[MedicineWithPharmacy] = []
        for candidate in candidates:
            listing = crud.pharmacy_medicine.get_in_stock_listing(self.db, medicine_id=candidate.id)
            if listing is None:
                continue
            results.append(MedicineWithPharmacy.from_listing(candidate, listing))
        return results
