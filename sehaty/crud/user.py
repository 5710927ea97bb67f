from typing import Optional
from sqlalchemy.orm import Session
from sehaty.models.user import User, UserRole


class CRUDUser:
    def create(
        self, db: Session, *, email: str, full_name: Optional[str] = None, role: UserRole = UserRole.USER
    ) -> User:
        db_obj = User(email=email, full_name=full_name, role=role.value)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get(self, db: Session, id: int) -> Optional[User]:
        return db.query(User).filter(User.id == id).first()

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()


user = CRUDUser()
