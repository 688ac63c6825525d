# backend/utils/hashing.py
from passlib.context import CryptContext

from config import settings

# Salted bcrypt; passlib compares digests in constant time
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify() -> None:
    """Spend the same time as a real check when the account does not exist."""
    pwd_context.dummy_verify()
