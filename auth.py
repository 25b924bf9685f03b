from typing import Optional

from passlib.context import CryptContext

from config import PASSWORD_SCHEMES

# pbkdf2_sha256 ships with passlib itself, so no external bcrypt backend
# is needed on any platform.
pwd_context = CryptContext(
    schemes=PASSWORD_SCHEMES,
    deprecated="auto",
)


def hash_password(password: str) -> str:
    """
    Hash a plain-text password using PBKDF2-SHA256.
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed: Optional[str]) -> bool:
    """
    Verify a candidate password against a stored hash.

    With no stored hash (unknown user) a dummy verification still runs so
    both outcomes take about the same time. Returns False instead of
    raising when the stored value is not a recognised hash.
    """
    if hashed is None:
        pwd_context.dummy_verify()
        return False
    try:
        return pwd_context.verify(plain_password, hashed)
    except ValueError:
        return False
