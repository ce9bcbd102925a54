"""Lookups for users acting on payments."""

from typing import Optional

from sqlalchemy.orm import Session

from backend.app.models.user import User


class CRUDUser:
    def find_active_by_id(self, db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id, User.is_active.is_(True)).first()


user_crud = CRUDUser()
