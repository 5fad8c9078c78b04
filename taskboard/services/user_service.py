"""
user_service.py — Registration and credential checks.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.auth import hash_password, verify_password
from taskboard.errors import InternalError, Unauthorized, ValidationError
from taskboard.models.user import User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    @staticmethod
    def get_by_email(db: Session, email: str) -> User | None:
        return db.query(User).filter(User.email == normalize_email(email)).first()

    @staticmethod
    def register(db: Session, username: str, email: str, password: str) -> User:
        if UserService.get_by_email(db, email) is not None:
            raise ValidationError("User already exists")
        user = User(
            username=username.strip(),
            email=normalize_email(email),
            hashed_password=hash_password(password),
        )
        try:
            db.add(user)
            db.commit()
            db.refresh(user)
        except IntegrityError:
            # Lost a race against a concurrent registration of the same email.
            db.rollback()
            raise ValidationError("User already exists")
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to register user")
            raise InternalError()
        logger.info("Registered user %s", user.id)
        return user

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> User:
        """Return the user for valid credentials; unknown email and bad password look the same."""
        user = UserService.get_by_email(db, email)
        if user is None or not verify_password(password, user.hashed_password):
            logger.warning("Failed login attempt for %s", normalize_email(email))
            raise Unauthorized("Invalid credentials")
        return user
