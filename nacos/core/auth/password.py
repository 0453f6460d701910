"""Password hashing helpers."""

from nacos.extensions import bcrypt

# Checked when the account does not exist so both failure paths cost one bcrypt round.
_DUMMY_HASH = "$2b$12$C6UzMDM.H6dfI/f/IKcEeO5Rr0hVPiZrVsHGDMT6FKhmYlRO5xDaW"


def hash_password(plain_password: str) -> str:
    """Hash a plaintext password using bcrypt."""
    return bcrypt.generate_password_hash(plain_password).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Validate a plaintext password against a stored hash."""
    if not hashed_password or not plain_password:
        return False
    try:
        return bcrypt.check_password_hash(hashed_password, plain_password)
    except ValueError:
        # Malformed or non-bcrypt hash in the store
        return False


def burn_password_check(plain_password: str) -> None:
    verify_password(plain_password or "x", _DUMMY_HASH)
