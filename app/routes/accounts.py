"""Account endpoints: registration, login, request counts and profile deletion."""

import logging

from fastapi import APIRouter, Depends, status

from app import messages
from app.config import get_settings
from app.dependencies import login_body, registration_body, update_request_count_body
from app.exceptions import AuthError, ConflictError, UpstreamError
from app.models.user import TokenClaims, UserCredential
from app.security import (
    create_access_token,
    hash_password,
    verify_password,
    verify_token,
)
from app.services.counters import UserRequestStore, get_user_request_store
from app.services.credentials import CredentialStore, get_credential_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["accounts"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    payload: dict = Depends(registration_body),
    credentials: CredentialStore = Depends(get_credential_store),
) -> dict:
    """Create a non-admin account.

    The existence check and the write are separate store calls, so two
    concurrent registrations for one email may both pass the check.

    Raises:
        ConflictError: If the email is already registered.
        UpstreamError: If the store call fails.
    """
    email = payload["email"]

    try:
        existing = credentials.get(email)
    except Exception as e:
        logger.error(
            "Failed to look up %s during registration: %s", email, e, exc_info=True
        )
        raise UpstreamError(messages.REGISTER_ERROR) from e

    if existing is not None:
        logger.info("Registration rejected, email already exists: %s", email)
        raise ConflictError(messages.EMAIL_EXISTS)

    try:
        credential = UserCredential(
            email=email,
            name=payload["name"],
            password=hash_password(payload["password"]),
            is_admin=False,
        )
        credentials.put(credential)
    except Exception as e:
        logger.error("Failed to store credential for %s: %s", email, e, exc_info=True)
        raise UpstreamError(messages.REGISTER_ERROR) from e

    logger.info("Registered user %s", email)
    return {"message": messages.USER_REGISTERED}


@router.post("/login")
def login(
    payload: dict = Depends(login_body),
    credentials: CredentialStore = Depends(get_credential_store),
    user_requests: UserRequestStore = Depends(get_user_request_store),
) -> dict:
    """Exchange email and password for a one-hour bearer token.

    Unknown email and wrong password produce the same error.

    Raises:
        AuthError: If the credentials do not match an account.
        UpstreamError: If a store call fails.
    """
    email = payload["email"]

    try:
        credential = credentials.get(email)
    except Exception as e:
        logger.error("Failed to look up %s during login: %s", email, e, exc_info=True)
        raise UpstreamError(messages.LOGIN_ERROR) from e

    password_ok = credential is not None and verify_password(
        payload["password"], credential.password
    )
    if not password_ok:
        logger.info("Failed login attempt for %s", email)
        raise AuthError(messages.INVALID_CREDENTIALS)

    token = create_access_token(credential)

    try:
        user_requests.increment(credential.email, credential.name)
    except Exception as e:
        logger.error("Failed to count login for %s: %s", email, e, exc_info=True)
        raise UpstreamError(messages.LOGIN_ERROR) from e

    logger.info("User %s logged in", email)
    return {"token": token, "isAdmin": credential.is_admin}


@router.get("/requestCount")
def get_request_count(
    claims: TokenClaims = Depends(verify_token),
    user_requests: UserRequestStore = Depends(get_user_request_store),
) -> dict:
    """Return the caller's request count, with a warning past the free limit."""
    settings = get_settings()

    try:
        counter = user_requests.get(claims.email)
    except Exception as e:
        logger.error(
            "Failed to read request count for %s: %s", claims.email, e, exc_info=True
        )
        raise UpstreamError(messages.REQUEST_COUNT_ERROR) from e

    request_count = counter.request_count if counter else 0
    response: dict = {"requestCount": request_count}

    limit = settings.app.free_request_limit
    if request_count >= limit:
        response["warning"] = messages.FREE_LIMIT_EXCEEDED.format(limit=limit)

    return response


@router.put("/updateRequestCount")
def update_request_count(
    _: TokenClaims = Depends(verify_token),
    payload: dict = Depends(update_request_count_body),
    user_requests: UserRequestStore = Depends(get_user_request_store),
) -> dict:
    """Overwrite the request count of the user named in the body.

    Any authenticated caller may set any user's count; there is no admin check.
    """
    email = payload["email"]
    request_count = int(payload["requestCount"])

    try:
        user_requests.set_absolute(email, request_count)
    except Exception as e:
        logger.error(
            "Failed to update request count for %s: %s", email, e, exc_info=True
        )
        raise UpstreamError(messages.UPDATE_REQUEST_COUNT_ERROR) from e

    return {"message": messages.REQUEST_COUNT_UPDATED}


@router.delete("/deleteProfile")
def delete_profile(
    claims: TokenClaims = Depends(verify_token),
    credentials: CredentialStore = Depends(get_credential_store),
    user_requests: UserRequestStore = Depends(get_user_request_store),
) -> dict:
    """Delete the caller's request counter, then their credential.

    If either delete fails the credential is still in place, so the caller
    can log in and retry.
    """
    try:
        user_requests.delete(claims.email)
        credentials.delete(claims.email)
    except Exception as e:
        logger.error("Failed to delete profile %s: %s", claims.email, e, exc_info=True)
        raise UpstreamError(messages.DELETE_PROFILE_ERROR) from e

    logger.info("Deleted profile %s", claims.email)
    return {"message": messages.PROFILE_DELETED}
