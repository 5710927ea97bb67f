from typing import List, Optional, Sequence, Tuple
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import delete, insert, or_, func, desc

from sehaty.crud.base import CRUDBase
from sehaty.models.medicine import Medicine, Category, ActiveIngredient, medicine_alternatives
from sehaty.models.pharmacy import PharmacyMedicine
from sehaty.models.review import Review
from sehaty.schemas.medicine import (
    MedicineCreate, MedicineUpdate, CategoryCreate, ActiveIngredientCreate,
)
from sehaty.utils.timezone import utcnow


class CRUDMedicine(CRUDBase[Medicine, MedicineCreate, MedicineUpdate]):
    """CRUD operations for catalog medicines"""

    def get_active(self, db: Session, id: int) -> Optional[Medicine]:
        """Medicine by id, None when missing or soft-deleted"""
        return (
            db.query(self.model)
            .options(joinedload(Medicine.category), joinedload(Medicine.active_ingredient))
            .filter(self.model.id == id, self.model.is_deleted == False)  # noqa: E712
            .first()
        )

    def create_with_alternatives(self, db: Session, *, obj_in: MedicineCreate) -> Medicine:
        obj_in_data = obj_in.model_dump(exclude={"alternatives"})
        db_obj = self.model(**obj_in_data)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        if obj_in.alternatives:
            self.set_alternatives(db, medicine=db_obj, alternative_ids=obj_in.alternatives)
        return db_obj

    def set_alternatives(self, db: Session, *, medicine: Medicine, alternative_ids: Sequence[int]) -> Medicine:
        """Replace the curated list, keeping the given order and dropping self-references/duplicates"""
        ordered: List[int] = []
        for alt_id in alternative_ids:
            if alt_id != medicine.id and alt_id not in ordered:
                ordered.append(alt_id)

        db.execute(delete(medicine_alternatives).where(medicine_alternatives.c.medicine_id == medicine.id))
        if ordered:
            db.execute(
                insert(medicine_alternatives),
                [
                    {"medicine_id": medicine.id, "alternative_id": alt_id, "position": position}
                    for position, alt_id in enumerate(ordered)
                ],
            )
        db.commit()
        db.expire(medicine, ["alternatives"])
        return medicine

    def update_medicine(self, db: Session, *, db_obj: Medicine, obj_in: MedicineUpdate) -> Medicine:
        update_data = obj_in.model_dump(exclude_unset=True)
        alternatives = update_data.pop("alternatives", None)
        db_obj = self.update(db, db_obj=db_obj, obj_in=update_data)
        if alternatives is not None:
            self.set_alternatives(db, medicine=db_obj, alternative_ids=alternatives)
        return db_obj

    def soft_delete(self, db: Session, *, db_obj: Medicine) -> Medicine:
        db_obj.is_deleted = True
        db_obj.deleted_at = utcnow()
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_available_listings(self, db: Session, *, pharmacy_id: Optional[int] = None) -> List[PharmacyMedicine]:
        """Pharmacy listings that are available, joined to non-deleted medicines"""
        query = (
            db.query(PharmacyMedicine)
            .join(PharmacyMedicine.medicine)
            .options(joinedload(PharmacyMedicine.medicine), joinedload(PharmacyMedicine.pharmacy))
            .filter(
                PharmacyMedicine.is_available == True,  # noqa: E712
                PharmacyMedicine.is_deleted == False,  # noqa: E712
                Medicine.is_deleted == False,  # noqa: E712
            )
        )
        if pharmacy_id:
            query = query.filter(PharmacyMedicine.pharmacy_id == pharmacy_id)
        return query.order_by(PharmacyMedicine.id.asc()).all()

    def search(
        self,
        db: Session,
        *,
        query: Optional[str] = None,
        category_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 10
    ) -> Tuple[List[Medicine], int]:
        """Search medicine records by name/description; returns (page, total)"""
        q = db.query(self.model).filter(self.model.is_deleted == False)  # noqa: E712
        if query:
            pattern = f"%{query}%"
            q = q.filter(or_(self.model.name.ilike(pattern), self.model.description.ilike(pattern)))
        if category_id:
            q = q.filter(self.model.category_id == category_id)

        total = q.with_entities(func.count(self.model.id)).scalar() or 0
        items = (
            q.order_by(desc(self.model.created_at), desc(self.model.id))
            .offset(skip)
            .limit(limit)
            .all()
        )
        return items, total

    def get_curated_alternatives(self, db: Session, *, medicine: Medicine) -> List[Medicine]:
        return [alt for alt in medicine.alternatives if not alt.is_deleted]

    def get_by_active_ingredient(self, db: Session, *, medicine: Medicine) -> List[Medicine]:
        """Other available medicines sharing the same active ingredient"""
        if medicine.active_ingredient_id is None:
            return []
        return (
            db.query(self.model)
            .filter(
                self.model.id != medicine.id,
                self.model.active_ingredient_id == medicine.active_ingredient_id,
                self.model.is_deleted == False,  # noqa: E712
                self.model.is_available == True,  # noqa: E712
            )
            .order_by(self.model.id.asc())
            .all()
        )

    def refresh_rating(self, db: Session, *, medicine: Medicine) -> Medicine:
        """Recompute rating/total_reviews from the medicine's non-deleted reviews"""
        count, average = (
            db.query(func.count(Review.id), func.avg(Review.rating))
            .filter(
                Review.target_type == "medicine",
                Review.target_id == medicine.id,
                Review.is_deleted == False,  # noqa: E712
            )
            .one()
        )
        medicine.total_reviews = int(count or 0)
        medicine.rating = float(average or 0.0)
        db.add(medicine)
        db.commit()
        db.refresh(medicine)
        return medicine


class CRUDCategory(CRUDBase[Category, CategoryCreate, CategoryCreate]):
    pass


class CRUDActiveIngredient(CRUDBase[ActiveIngredient, ActiveIngredientCreate, ActiveIngredientCreate]):
    def get_by_name(self, db: Session, *, name: str) -> Optional[ActiveIngredient]:
        return db.query(self.model).filter(func.lower(self.model.name) == name.lower()).first()


medicine = CRUDMedicine(Medicine)
category = CRUDCategory(Category)
active_ingredient = CRUDActiveIngredient(ActiveIngredient)
