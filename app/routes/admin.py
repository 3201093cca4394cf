"""Admin-only statistics endpoints."""

import logging

from fastapi import APIRouter, Depends

from app import messages
from app.exceptions import AccessDeniedError, UpstreamError
from app.models.user import TokenClaims
from app.security import verify_token
from app.services.counters import (
    EndpointStatStore,
    UserRequestStore,
    get_endpoint_stat_store,
    get_user_request_store,
)
from app.services.credentials import CredentialStore, get_credential_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin"])


@router.get("/userRequests")
def list_user_requests(
    claims: TokenClaims = Depends(verify_token),
    credentials: CredentialStore = Depends(get_credential_store),
    user_requests: UserRequestStore = Depends(get_user_request_store),
) -> list[dict]:
    """List every user's request counter.

    The admin flag is read from the stored credential rather than the token,
    so revoking admin takes effect before the token expires.

    Raises:
        AccessDeniedError: If the caller is not an admin.
        UpstreamError: If a store call fails.
    """
    try:
        caller = credentials.get(claims.email)
    except Exception as e:
        logger.error("Admin check failed for %s: %s", claims.email, e, exc_info=True)
        raise UpstreamError(messages.USER_REQUESTS_ERROR) from e

    if caller is None or not caller.is_admin:
        logger.warning("Non-admin %s requested user request data", claims.email)
        raise AccessDeniedError(messages.ACCESS_DENIED)

    try:
        counters = user_requests.scan_all()
    except Exception as e:
        logger.error("Failed to scan user requests: %s", e, exc_info=True)
        raise UpstreamError(messages.USER_REQUESTS_ERROR) from e

    return [counter.model_dump(by_alias=True, mode="json") for counter in counters]


@router.get("/apiStats")
def list_api_stats(
    claims: TokenClaims = Depends(verify_token),
    endpoint_stats: EndpointStatStore = Depends(get_endpoint_stat_store),
) -> list[dict]:
    """List request counts for every endpoint and method.

    Raises:
        AccessDeniedError: If the token does not carry the admin flag.
        UpstreamError: If the store call fails.
    """
    if not claims.is_admin:
        logger.warning("Non-admin %s requested API stats", claims.email)
        raise AccessDeniedError(messages.ACCESS_DENIED)

    try:
        stats = endpoint_stats.scan_all()
    except Exception as e:
        logger.error("Failed to scan endpoint stats: %s", e, exc_info=True)
        raise UpstreamError(messages.API_STATS_ERROR) from e

    return [stat.model_dump(by_alias=True, mode="json") for stat in stats]
