from typing import List
from sqlalchemy.orm import Session

from sehaty.crud.base import CRUDBase
from sehaty.models.review import Review
from sehaty.schemas.review import ReviewCreate


class CRUDReview(CRUDBase[Review, ReviewCreate, ReviewCreate]):
    def create_for_medicine(
        self, db: Session, *, obj_in: ReviewCreate, user_id: int, medicine_id: int
    ) -> Review:
        db_obj = Review(
            user_id=user_id,
            target_type="medicine",
            target_id=medicine_id,
            **obj_in.model_dump(),
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_for_medicine(self, db: Session, *, medicine_id: int) -> List[Review]:
        return (
            db.query(self.model)
            .filter(
                self.model.target_type == "medicine",
                self.model.target_id == medicine_id,
                self.model.is_deleted == False,  # noqa: E712
            )
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .all()
        )


review = CRUDReview(Review)
