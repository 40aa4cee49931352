from passlib.context import CryptContext
from core.exceptions import PasswordMismatchError, MalformedHashError

PASSWORD_COST = 10

bcrypt_context = CryptContext(schemes=['bcrypt'], deprecated='auto', bcrypt__rounds=PASSWORD_COST)


def get_password_hash(password: str) -> str:
    # Bcrypt has a 72-byte limit, truncate if necessary
    return bcrypt_context.hash(password[:72])


def check_password_hash(plain_password: str, hashed_password: str):
    """
    Verify a plaintext password against a stored bcrypt hash.

    Raises:
        MalformedHashError: the stored value is not a bcrypt hash
        PasswordMismatchError: the password does not match
    """
    try:
        matched = bcrypt_context.verify(plain_password[:72], hashed_password)
    except (ValueError, TypeError) as exc:
        raise MalformedHashError("Stored password hash is malformed") from exc

    if not matched:
        raise PasswordMismatchError()

