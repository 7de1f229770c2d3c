"""Password hashing."""

from passlib.context import CryptContext

# bcrypt_sha256 pre-hashes, so passwords past bcrypt's 72-byte limit still count.
# Plain bcrypt stays verifiable for hashes created elsewhere.
pwd_context = CryptContext(schemes=["bcrypt_sha256", "bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored hash."""
    try:
        return pwd_context.verify(plain_password, password_hash)
    except ValueError:
        # Malformed or unknown hash format
        return False
