# backend/routes/auth.py
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from schemas import user as schemas
from utils.errors import AuthError, ConflictError, NotFoundError
from utils.hashing import dummy_verify, get_password_hash, verify_password
from utils.tokenJWT import get_current_user, issue_token_for

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _load_user(db: Session, claims: schemas.TokenData) -> User:
    user = db.query(User).filter(User.id == claims.user_id).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


# Register a new user
@router.post("/register", response_model=schemas.AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: schemas.UserCreate, db: Session = Depends(get_db)):
    email = _normalize_email(payload.email)

    existing = db.query(User.id).filter(func.lower(User.email) == email).first()
    if existing:
        logger.info("Registration rejected, email already registered: %s", email)
        raise ConflictError("User already exists with this email")

    new_user = User(
        email=email,
        password_hash=get_password_hash(payload.password),
        first_name=payload.first_name.strip(),
        last_name=payload.last_name.strip(),
        phone=payload.phone,
        role=payload.role.value,
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise ConflictError("User already exists with this email")
    db.refresh(new_user)

    logger.info("User registered: %s (%s)", new_user.email, new_user.role)
    return {
        "message": "User registered successfully",
        "token": issue_token_for(new_user),
        "user": new_user,
    }


# Authenticate user and issue JWT token
@router.post("/login", response_model=schemas.AuthResponse)
def login(payload: schemas.UserLogin, db: Session = Depends(get_db)):
    email = _normalize_email(payload.email)
    user = db.query(User).filter(func.lower(User.email) == email).first()

    # Same message and comparable timing whether the email or the password is wrong
    if user is None:
        dummy_verify()
        logger.warning("Failed login for %s", email)
        raise AuthError(INVALID_CREDENTIALS)
    if not verify_password(payload.password, user.password_hash):
        logger.warning("Failed login for %s", email)
        raise AuthError(INVALID_CREDENTIALS)

    logger.info("User logged in: %s", user.email)
    return {
        "message": "Login successful",
        "token": issue_token_for(user),
        "user": user,
    }


# Retrieve current authenticated user details
@router.get("/profile", response_model=schemas.ProfileResponse)
def read_profile(
    current_user: schemas.TokenData = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {"user": _load_user(db, current_user)}


# Update names and phone; email and role are fixed here
@router.put("/profile", response_model=schemas.ProfileResponse)
def update_profile(
    payload: schemas.ProfileUpdate,
    current_user: schemas.TokenData = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = _load_user(db, current_user)

    changes = payload.model_dump(exclude_unset=True)
    if changes.get("first_name") is not None:
        user.first_name = changes["first_name"].strip()
    if changes.get("last_name") is not None:
        user.last_name = changes["last_name"].strip()
    if "phone" in changes:
        user.phone = changes["phone"]
    user.updated_at = func.now()

    db.commit()
    db.refresh(user)

    logger.info("Profile updated for user %s", user.id)
    return {"message": "Profile updated successfully", "user": user}
