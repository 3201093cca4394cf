"""Counted proxy endpoints for the advice and translation services."""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from app import messages
from app.dependencies import advice_body, translation_body
from app.exceptions import UpstreamError
from app.models.user import TokenClaims
from app.security import verify_token
from app.services import inference_client
from app.services.counters import UserRequestStore, get_user_request_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["inference"])


@router.post("/getAdvice")
def get_advice(
    claims: TokenClaims = Depends(verify_token),
    payload: dict = Depends(advice_body),
    user_requests: UserRequestStore = Depends(get_user_request_store),
) -> Any:
    """Count the request and return the advice service's response verbatim.

    The counter is incremented before the outbound call, so a failed call
    still counts.
    """
    try:
        user_requests.increment(claims.email, payload["name"])
        return inference_client.get_advice(
            payload["age"], payload["name"], payload["behavior"]
        )
    except Exception as e:
        logger.error("Error getting advice for %s: %s", claims.email, e, exc_info=True)
        raise UpstreamError(messages.ADVICE_ERROR) from e


@router.post("/translate")
def translate(
    claims: TokenClaims = Depends(verify_token),
    payload: dict = Depends(translation_body),
    user_requests: UserRequestStore = Depends(get_user_request_store),
) -> Any:
    """Count the request and return the translation service's response verbatim."""
    try:
        user_requests.increment(claims.email, claims.name)
        return inference_client.translate(payload["text"], payload["language"])
    except Exception as e:
        logger.error("Error translating for %s: %s", claims.email, e, exc_info=True)
        raise UpstreamError(messages.TRANSLATE_ERROR) from e
