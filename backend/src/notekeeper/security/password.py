"""Password hashing utilities."""

from functools import lru_cache

from passlib.context import CryptContext

from ..config import get_settings


@lru_cache(maxsize=None)
def _context_for(rounds: int) -> CryptContext:
    # bcrypt_sha256 pre-hashes with SHA-256 so passwords past bcrypt's
    # 72-byte limit are not silently truncated
    return CryptContext(
        schemes=["bcrypt_sha256"],
        deprecated="auto",
        bcrypt_sha256__rounds=rounds,
        # hashes made with a lower work factor report needs_update
        bcrypt_sha256__min_rounds=rounds,
    )


def get_pwd_context() -> CryptContext:
    """Password context configured with the current work factor."""
    return _context_for(get_settings().bcrypt_rounds)


def hash_password(password: str) -> str:
    """Hash a password. Salt and cost are embedded in the result."""
    return get_pwd_context().hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash in constant time."""
    return get_pwd_context().verify(plain_password, hashed_password)


def dummy_verify() -> None:
    """Spend one verify's worth of time; used when there is no hash to check."""
    get_pwd_context().dummy_verify()


def needs_update(hashed_password: str) -> bool:
    """Check if password hash was made with outdated parameters."""
    return get_pwd_context().needs_update(hashed_password)
