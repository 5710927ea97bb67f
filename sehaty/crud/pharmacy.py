from typing import List, Optional
from sqlalchemy.orm import Session, joinedload

from sehaty.crud.base import CRUDBase
from sehaty.models.pharmacy import Pharmacy, PharmacyMedicine
from sehaty.schemas.pharmacy import PharmacyCreate, PharmacyMedicineUpsert


class CRUDPharmacy(CRUDBase[Pharmacy, PharmacyCreate, PharmacyCreate]):
    def create_with_owner(self, db: Session, *, obj_in: PharmacyCreate, owner_id: int) -> Pharmacy:
        obj_in_data = obj_in.model_dump()
        obj_in_data["owner_id"] = owner_id
        db_obj = self.model(**obj_in_data)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


class CRUDPharmacyMedicine(CRUDBase[PharmacyMedicine, PharmacyMedicineUpsert, PharmacyMedicineUpsert]):
    def get_listing(self, db: Session, *, pharmacy_id: int, medicine_id: int) -> Optional[PharmacyMedicine]:
        return (
            db.query(self.model)
            .filter(self.model.pharmacy_id == pharmacy_id, self.model.medicine_id == medicine_id)
            .first()
        )

    def upsert(self, db: Session, *, pharmacy_id: int, obj_in: PharmacyMedicineUpsert) -> PharmacyMedicine:
        existing = self.get_listing(db, pharmacy_id=pharmacy_id, medicine_id=obj_in.medicine_id)
        if existing:
            existing.is_deleted = False
            return self.update(db, db_obj=existing, obj_in=obj_in)
        db_obj = self.model(pharmacy_id=pharmacy_id, **obj_in.model_dump())
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_for_pharmacy(self, db: Session, *, pharmacy_id: int) -> List[PharmacyMedicine]:
        return (
            db.query(self.model)
            .filter(self.model.pharmacy_id == pharmacy_id, self.model.is_deleted == False)  # noqa: E712
            .order_by(self.model.id.asc())
            .all()
        )

    def get_in_stock_listing(self, db: Session, *, medicine_id: int) -> Optional[PharmacyMedicine]:
        """First available, non-deleted listing with stock left for a medicine"""
        return (
            db.query(self.model)
            .options(joinedload(PharmacyMedicine.pharmacy))
            .filter(
                self.model.medicine_id == medicine_id,
                self.model.is_available == True,  # noqa: E712
                self.model.is_deleted == False,  # noqa: E712
                self.model.stock > 0,
            )
            .order_by(self.model.id.asc())
            .first()
        )


pharmacy = CRUDPharmacy(Pharmacy)
pharmacy_medicine = CRUDPharmacyMedicine(PharmacyMedicine)
