"""Password hashing, token issuance and the bearer token dependency."""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError as PydanticValidationError

from app import messages
from app.config import get_settings
from app.exceptions import AccessDeniedError, AuthError
from app.models.user import TokenClaims, UserCredential

logger = logging.getLogger(__name__)

# bcrypt only uses the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72

bearer_scheme = HTTPBearer(
    description="Token returned by POST /login",
    auto_error=False,
)


def _password_bytes(plain: str) -> bytes:
    return plain.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain: str) -> str:
    """Return a salted bcrypt hash of plain using the configured work factor.

    Passwords longer than 72 bytes are truncated to 72 bytes.
    """
    settings = get_settings()
    salt = bcrypt.gensalt(rounds=settings.auth.bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(plain), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if plain matches hashed (constant-time compare)."""
    try:
        return bcrypt.checkpw(_password_bytes(plain), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.warning("Stored password hash is malformed")
        return False


def create_access_token(
    credential: UserCredential, expires_delta: timedelta | None = None
) -> str:
    """Create a signed token carrying the user's identity claims.

    Args:
        credential: Account to issue the token for.
        expires_delta: Custom lifetime; defaults to the configured expiry.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    delta = expires_delta or timedelta(minutes=settings.auth.expiry_minutes)
    payload = {
        "email": credential.email,
        "name": credential.name,
        "isAdmin": credential.is_admin,
        "exp": datetime.now(timezone.utc) + delta,
    }
    return jwt.encode(payload, settings.auth.secret, algorithm=settings.auth.algorithm)


def decode_access_token(token: str) -> TokenClaims:
    """Verify signature and expiry of token and return its claims.

    Raises:
        AuthError: If the token is malformed, tampered with or expired.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.auth.secret,
            algorithms=[settings.auth.algorithm],
            options={"require": ["exp", "email"]},
        )
        return TokenClaims.model_validate(payload)
    except jwt.ExpiredSignatureError as exc:
        logger.info("Rejected expired token")
        raise AuthError(messages.UNAUTHORIZED) from exc
    except (jwt.InvalidTokenError, PydanticValidationError) as exc:
        logger.info("Rejected invalid token: %s", exc)
        raise AuthError(messages.UNAUTHORIZED) from exc


async def verify_token(
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
) -> TokenClaims:
    """Resolve the caller's identity from the Authorization header.

    Raises:
        AccessDeniedError: If no bearer token was sent.
        AuthError: If the token does not verify.
    """
    if credentials is None or not credentials.credentials:
        raise AccessDeniedError(messages.NO_TOKEN)

    return decode_access_token(credentials.credentials)
