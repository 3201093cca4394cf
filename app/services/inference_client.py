"""Client for the external advice and translation services.

Requests are forwarded as JSON and the services' JSON responses are
returned unchanged.
"""

import logging
from typing import Any

import requests

from app.config import get_settings

logger = logging.getLogger(__name__)


class InferenceServiceError(Exception):
    """Exception raised when an inference service call fails."""


def _post_json(url: str, payload: dict) -> Any:
    """POST payload to url and return the decoded JSON response.

    Raises:
        InferenceServiceError: If the request fails, returns an error status
            or the body is not JSON.
    """
    settings = get_settings()

    try:
        response = requests.post(
            url, json=payload, timeout=settings.services.timeout_seconds
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error("Request to %s failed: %s", url, e)
        raise InferenceServiceError(f"Request to {url} failed: {e}") from e

    try:
        return response.json()
    except ValueError as e:
        logger.error("Response from %s is not JSON: %s", url, e)
        raise InferenceServiceError(f"Invalid JSON response from {url}") from e


def get_advice(age: Any, name: str, behavior: str) -> Any:
    """Request advice for a person from the advice service.

    Args:
        age: Age as supplied by the client.
        name: Person's name.
        behavior: Free-text description of the behaviour to advise on.

    Returns:
        The advice service's JSON response.

    Raises:
        InferenceServiceError: If the service call fails.
    """
    settings = get_settings()
    logger.debug("Requesting advice for %s", name)
    return _post_json(
        settings.services.advice_url,
        {"age": age, "name": name, "behavior": behavior},
    )


def translate(text: str, language: str) -> Any:
    """Translate text into language using the translation service.

    Returns:
        The translation service's JSON response.

    Raises:
        InferenceServiceError: If the service call fails.
    """
    settings = get_settings()
    logger.debug("Requesting translation to %s (%d chars)", language, len(text))
    return _post_json(
        settings.services.translate_url,
        {"text": text, "language": language},
    )
