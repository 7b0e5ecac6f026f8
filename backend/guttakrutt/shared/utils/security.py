"""
Security Utilities

Password hashing for admin accounts.

Password Hashing:
=================
Uses bcrypt through passlib with automatic salt generation. Hashes are
stored verbatim in admin_users.password on both dialects.

Usage:
======
    from guttakrutt.shared.utils.security import SecurityUtils

    hashed = SecurityUtils.hash_password("hunter22")
    SecurityUtils.verify_password("hunter22", hashed)  # True
    SecurityUtils.needs_rehash(hashed)                 # False
"""

from passlib.context import CryptContext
from passlib.exc import UnknownHashError


# Hashes below the minimum cost are upgraded on the next successful login
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__min_rounds=12,
)


class SecurityUtils:
    """Password hashing helpers shared by the admin repository and the API."""

    @staticmethod
    def hash_password(password: str) -> str:
        """
        Hash password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Bcrypt hash string (includes salt)
        """
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """
        Verify password against a stored hash.

        A stored value passlib does not recognise (a legacy or corrupted
        hash) never matches.

        Args:
            plain_password: Plain text password to verify
            hashed_password: Stored hash to verify against

        Returns:
            True if password matches, False otherwise
        """
        if not hashed_password:
            return False
        try:
            return pwd_context.verify(plain_password, hashed_password)
        except (UnknownHashError, ValueError):
            return False

    @staticmethod
    def needs_rehash(hashed_password: str) -> bool:
        """True when a stored hash is below the current bcrypt cost."""
        try:
            return pwd_context.needs_update(hashed_password)
        except (UnknownHashError, ValueError):
            return True
