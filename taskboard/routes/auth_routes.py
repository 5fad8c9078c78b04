"""
Auth routes — email/password registration and login issuing bearer tokens.
"""
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from taskboard.auth import create_token
from taskboard.database import get_db
from taskboard.services.user_service import UserService

router = APIRouter(prefix="/api/auth", tags=["Auth"])


# ── Pydantic schemas ──────────────────────────────────────────────
class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=6)

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("username must not be blank")
        return v.strip()

    @field_validator("email")
    @classmethod
    def email_shape(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str


# ── Routes ────────────────────────────────────────────────────────
@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account. The email is the login identity and must be unique."""
    UserService.register(db, body.username, body.email, body.password)
    return {"message": "User registered"}


@router.post("/login")
def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate with email + password and hand back a bearer token."""
    user = UserService.authenticate(db, body.email, body.password)
    token = create_token({"user_id": user.id, "username": user.username})
    return {"token": token}
