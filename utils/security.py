# webunit/utils/security.py
import secrets
import logging

from passlib.context import CryptContext

logger = logging.getLogger(f"webunit.{__name__}")

# Password Hashing
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifies a plain password against a hashed password."""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Hashes a plain password."""
    return pwd_context.hash(password)

def generate_session_secret(length: int = 32) -> str:
    """Generates a random key for signing session cookies."""
    return secrets.token_urlsafe(length)
