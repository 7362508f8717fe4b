"""Password digests and bearer tokens."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from nacl import pwhash
from nacl.exceptions import CryptPrefixError, InvalidkeyError

from squadboard.core.errors import NotAuthenticatedError
from squadboard.core.settings import settings


def hash_password(password: str) -> str:
    """Return a salted Argon2id digest of `password` in modular crypt format."""
    digest: bytes = pwhash.argon2id.str(
        password.encode("utf-8"),
        opslimit=settings.password_hash_opslimit,
        memlimit=settings.password_hash_memlimit,
    )
    return digest.decode("ascii")


def verify_password(password: str, digest: str) -> bool:
    """Return True if `password` matches the stored digest."""
    try:
        return pwhash.verify(digest.encode("ascii"), password.encode("utf-8"))
    except (InvalidkeyError, CryptPrefixError):
        return False


def create_access_token(handle: str) -> str:
    """Create a JWT access token whose subject is the account handle."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode: dict[str, object] = {"sub": handle, "exp": expire}
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> str:
    """Return the handle carried by a valid access token.

    Raises:
        NotAuthenticatedError: If the token is malformed, expired or has no subject.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise NotAuthenticatedError("Could not validate credentials") from err

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise NotAuthenticatedError("Could not validate credentials")
    return subject
