"""Request body dependencies that run payload validators before a handler."""

import json
import logging
from collections.abc import Callable

from fastapi import Request

from app import validators
from app.exceptions import ValidationError
from app.validators import ValidationResult

logger = logging.getLogger(__name__)


async def json_body(request: Request) -> dict:
    """Decode the request body as a JSON object.

    A missing or non-object body is treated as an empty object so that the
    validators report the first missing field.
    """
    raw = await request.body()
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.debug("Ignoring undecodable body for %s", request.url.path)
        return {}
    return body if isinstance(body, dict) else {}


def validated_body(validator: Callable[[dict], ValidationResult]):
    """Build a dependency returning the JSON body once validator accepts it.

    Raises:
        ValidationError: With the validator's message when it rejects the body.
    """

    async def dependency(request: Request) -> dict:
        body = await json_body(request)
        ok, message = validator(body)
        if not ok:
            raise ValidationError(message)
        return body

    dependency.__name__ = f"{validator.__name__}_body"
    return dependency


registration_body = validated_body(validators.validate_registration)
login_body = validated_body(validators.validate_login)
advice_body = validated_body(validators.validate_advice)
translation_body = validated_body(validators.validate_translation)
update_request_count_body = validated_body(validators.validate_update_request_count)
