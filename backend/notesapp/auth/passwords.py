"""Password hashing and password-policy checks.

Hashing uses passlib's CryptContext with pbkdf2_sha256. Policy checks return
one message per failed rule so registration can report all of them at once.
"""

import logging
from typing import List

from passlib.context import CryptContext

from notesapp.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(plain: str) -> str:
    """Hash a plaintext password and return the encoded hash string."""
    if plain is None:
        raise ValueError("Password must not be None")
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the password matches the stored hash."""
    if plain is None or hashed is None:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        # Malformed or unknown hash format in the store
        logger.warning("Stored password hash could not be parsed")
        return False


def dummy_verify() -> None:
    """Spend the same work as a real verify when the account does not exist."""
    pwd_context.dummy_verify()


def validate_password(password: str) -> List[str]:
    """Check a candidate password against the configured policy."""
    errors: List[str] = []
    password = password or ""

    if len(password) < settings.password_required_length:
        errors.append(
            f"Passwords must be at least {settings.password_required_length} characters."
        )
    if settings.password_require_non_alphanumeric and all(c.isalnum() for c in password):
        errors.append("Passwords must have at least one non alphanumeric character.")
    if settings.password_require_digit and not any(c.isdigit() for c in password):
        errors.append("Passwords must have at least one digit ('0'-'9').")
    if settings.password_require_lowercase and not any(c.islower() for c in password):
        errors.append("Passwords must have at least one lowercase ('a'-'z').")
    if settings.password_require_uppercase and not any(c.isupper() for c in password):
        errors.append("Passwords must have at least one uppercase ('A'-'Z').")

    return errors
