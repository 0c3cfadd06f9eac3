from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import Optional

from taskapi.models.user import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_username_or_email(self, username_or_email: str) -> Optional[User]:
        # correspondance exacte (sensible à la casse) sur l'un ou l'autre
        return self.db.query(User).filter(
            or_(User.username == username_or_email, User.email == username_or_email)
        ).first()

    def username_exists(self, username: str) -> bool:
        return self.db.query(User.id).filter(User.username == username).first() is not None

    def email_exists(self, email: str) -> bool:
        return self.db.query(User.id).filter(User.email == email).first() is not None

    def add(self, user: User) -> User:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user
